"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    RESOLVER_ERROR = 2
    DECODE_ERROR = 3


class OutputFormats(Enum):
    """Output formats supported by the exporter.

    Args:
        Enum (string): Output formats supported by the exporter.
    """

    JSON = "json"
    CSV = "csv"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    GO_MOD_FILE = "go.mod"
    GO_TOOL = "go"
    GO_LIST_ARGS = ["list", "-m", "-json", "all"]
    TEMP_DIR_PREFIX = "gomodrules-temp-gomod"
    INCOMPATIBLE_SUFFIX = "+incompatible"
    SUPPORTED_FORMATS = [
        OutputFormats.JSON.value,
        OutputFormats.CSV.value,
    ]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Environment
    ENV_GOROOT = "GOROOT"
    ENV_LOG_LEVEL = "GOMODRULES_LOG_LEVEL"
