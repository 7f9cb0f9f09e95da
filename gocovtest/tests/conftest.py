from pathlib import Path
from typing import List, Optional

import pytest

from gocovtest.src import paths
from gocovtest.src.constants import CONFIG_ENV_VAR

SAMPLE_PROFILE = (
    "mode: set\n"
    "example.com/a/foo.go:3.14,5.2 2 1\n"
    "example.com/a/foo.go:7.20,9.2 1 0\n"
)


class FakeInvoker:
    """ProcessInvoker returning canned results instead of running `go`."""

    def __init__(
        self,
        list_output: str = "",
        list_returncode: int = 0,
        test_returncode: int = 0,
        profile_text: Optional[str] = SAMPLE_PROFILE,
        test_output: str = "ok  \texample.com/a\t0.01s\tcoverage: 66.7% of statements\n",
    ):
        self.list_output = list_output
        self.list_returncode = list_returncode
        self.test_returncode = test_returncode
        self.profile_text = profile_text
        self.test_output = test_output
        self.calls: List[dict] = []
        self.on_test = None

    def run(self, command, args, stdin=None, stdout=None, stderr=None):
        args = list(args)
        self.calls.append({"command": command, "args": args, "stdin": stdin, "stdout": stdout, "stderr": stderr})
        if args[0] == "list":
            if stdout is not None:
                stdout.write(self.list_output)
            return self.list_returncode

        if args[0] == "test":
            if self.on_test is not None:
                self.on_test(args)
            if stdout is not None:
                stdout.write(self.test_output)
            cover_file = Path(args[args.index("-coverprofile") + 1])
            if self.profile_text is not None:
                cover_file.write_text(self.profile_text)
            return self.test_returncode

        raise AssertionError(f"unexpected go subcommand: {args}")

    def call(self, subcommand: str) -> dict:
        return next(c for c in self.calls if c["args"][0] == subcommand)


class RecordingDiagnostics:
    def __init__(self):
        self.warnings: List[str] = []
        self.errors: List[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def diagnostics():
    return RecordingDiagnostics()


@pytest.fixture
def go_tree(tmp_path):
    """Two Go packages: `a` has an untested file, `b` is fully tested."""
    pkg_a = tmp_path / "a"
    pkg_b = tmp_path / "b"
    pkg_a.mkdir()
    pkg_b.mkdir()
    (pkg_a / "foo.go").write_text("package a\n\nfunc Foo() int { return 1 }\n")
    (pkg_a / "bar.go").write_text("package a\n\nfunc Bar() int { return 2 }\n")
    (pkg_a / "bar_test.go").write_text("package a\n\nimport \"testing\"\n\nfunc TestBar(t *testing.T) {}\n")
    (pkg_b / "baz.go").write_text("package b\n")
    (pkg_b / "baz_test.go").write_text("package b\n")
    return tmp_path


@pytest.fixture
def go_list_output(go_tree):
    return (
        f"{go_tree / 'a'} a [bar.go foo.go]\n"
        f"{go_tree / 'b'} b [baz.go]\n"
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep a developer's gocovtest.yml or GOCOVTEST_CONFIG out of tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    paths.reset_paths_cache()
    yield
    paths.reset_paths_cache()


@pytest.fixture
def invoker(go_list_output):
    """FakeInvoker listing the `go_tree` packages; tweak attributes per test."""
    return FakeInvoker(list_output=go_list_output)
