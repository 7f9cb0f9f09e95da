"""gocovtest - run `go test` with complete coverage instrumentation."""

__version__ = "0.1.0"
