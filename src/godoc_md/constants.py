"""Centralized defaults for source links, printing and config discovery."""

# Github style line anchors. Bitbucket Enterprise uses "#%d".
DEFAULT_HASH_FORMAT = "#L%d"

DEFAULT_TAB_WIDTH = 4

# Package sources are mounted under this prefix in declaration positions.
SOURCE_MOUNT_PREFIX = "/target"

# Used when no platform rule recognizes the import path (standard library).
FALLBACK_SOURCE_URL = "https://golang.org/src/{path}"

# Umbrella namespaces whose sources live elsewhere, rewritten before matching.
NAMESPACE_ALIASES: tuple[tuple[str, str], ...] = (
    ("golang.org/x", "github.com/golang"),
)

CONFIG_FILE_NAME = ".godoc2md.toml"

GO_SOURCE_SUFFIX = ".go"
GO_TEST_SUFFIX = "_test.go"

EXAMPLE_PREFIX = "Example"


def is_go_source(file_name: str) -> bool:
    """True for non-test Go source files."""
    return file_name.endswith(GO_SOURCE_SUFFIX) and not file_name.endswith(GO_TEST_SUFFIX)


def is_go_test(file_name: str) -> bool:
    return file_name.endswith(GO_TEST_SUFFIX)
