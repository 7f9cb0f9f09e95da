import pytest

from gocovtest.src.testflag import split

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "args, packages, flags",
    [
        ([], [], []),
        (["./..."], ["./..."], []),
        (["-v", "./a", "./b"], ["./a", "./b"], ["-v"]),
        (["-run", "TestFoo", "./a"], ["./a"], ["-run", "TestFoo"]),
        (["-run=TestFoo", "./a"], ["./a"], ["-run=TestFoo"]),
        (["--timeout", "5m", "./a"], ["./a"], ["--timeout", "5m"]),
        (["./a", "-count", "1", "-race"], ["./a"], ["-count", "1", "-race"]),
        (["-tags", "integration", "example.com/x"], ["example.com/x"], ["-tags", "integration"]),
    ],
)
def test_split(args, packages, flags):
    assert split(args) == (packages, flags)


def test_args_flag_consumes_rest():
    packages, flags = split(["./a", "-args", "-custom", "value", "./not-a-package"])
    assert packages == ["./a"]
    assert flags == ["-args", "-custom", "value", "./not-a-package"]


def test_double_dash_consumes_rest():
    packages, flags = split(["./a", "--", "-v", "./b"])
    assert packages == ["./a"]
    assert flags == ["-v", "./b"]


def test_value_flag_at_end():
    assert split(["./a", "-run"]) == (["./a"], ["-run"])


@pytest.mark.parametrize(
    "args, packages, flags",
    [
        (["-test.run", "TestX", "./a"], ["./a"], ["-test.run", "TestX"]),
        (["-test.timeout=30s", "./a"], ["./a"], ["-test.timeout=30s"]),
        (["-test.v", "./a"], ["./a"], ["-test.v"]),
        (["--test.count", "2", "./a"], ["./a"], ["--test.count", "2"]),
    ],
)
def test_split_test_prefixed_flags(args, packages, flags):
    assert split(args) == (packages, flags)
