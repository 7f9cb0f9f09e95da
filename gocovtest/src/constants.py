"""Shared constants for gocovtest."""

# Toolchain defaults
DEFAULT_GO_BINARY = "go"
LIST_FORMAT = "{{.Dir}} {{.Name}} {{.GoFiles}}"

# Placeholder test files
SOURCE_SUFFIX = ".go"
DEFAULT_TEST_SUFFIX = "_test.go"

# Coverage workspace
DEFAULT_COVER_FILENAME = "cover.cov"
DEFAULT_TEMP_PREFIX = "gocov"

# Config
CONFIG_FILENAME = "gocovtest.yml"
CONFIG_ENV_VAR = "GOCOVTEST_CONFIG"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
