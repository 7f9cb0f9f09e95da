"""Split a `go test` argument list into package specifiers and flags."""

from typing import List, Sequence, Tuple

# go test / go build flags that take a separate value argument.
VALUE_FLAGS = frozenset({
    # test flags
    "bench", "benchtime", "blockprofile", "blockprofilerate", "count",
    "covermode", "coverpkg", "coverprofile", "cpu", "cpuprofile", "exec",
    "fuzz", "fuzzminimizetime", "fuzztime", "list", "memprofile",
    "memprofilerate", "mutexprofile", "mutexprofilefraction", "o",
    "outputdir", "parallel", "run", "shuffle", "skip", "timeout", "trace",
    "vet",
    # build flags
    "C", "asmflags", "buildmode", "compiler", "gccgoflags", "gcflags",
    "installsuffix", "ldflags", "mod", "modfile", "overlay", "p", "pgo",
    "pkgdir", "tags", "toolexec",
})


def _flag_name(arg: str) -> str:
    name = arg.lstrip("-").split("=", 1)[0]
    # go test accepts every test flag as -test.<name> too
    return name[len("test."):] if name.startswith("test.") else name


def split(args: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Return ``(packages, flags)``.

    Flags keep their relative order. ``-args`` and everything after it, and
    everything after a bare ``--``, are flags.
    """
    packages: List[str] = []
    flags: List[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            flags.extend(args[i + 1:])
            break
        if not arg.startswith("-") or arg == "-":
            packages.append(arg)
            i += 1
            continue
        name = _flag_name(arg)
        if name == "args":
            flags.extend(args[i:])
            break
        flags.append(arg)
        if name in VALUE_FLAGS and "=" not in arg and i + 1 < len(args):
            flags.append(args[i + 1])
            i += 1
        i += 1
    return packages, flags
