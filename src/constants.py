"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEFAULT_LOG_LEVEL = "WARNING"
    ENV_LOG_LEVEL = "DISTTAGS_LOG_LEVEL"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # Config file layout: a "tags" section holding these keys
    CONFIG_SECTION_TAGS = "tags"
    CONFIG_KEY_FILTER = "filter"
    CONFIG_KEY_KEEP_SYNTHETIC = "keep_synthetic"
    CONFIG_EXTENSIONS_YAML = (".yml", ".yaml")

    VERSION_LIST_COMMENT = "#"
