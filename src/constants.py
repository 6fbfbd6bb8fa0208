"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FAILURE = 1


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG = "latestpin"
    VERSION = "0.1.0"
    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    REGISTRY_URL_JSR = "https://jsr.io/"
    JSR_META_FILE = "meta.json"
    SCOPE_MARKER = "@"
    PATH_SEPARATOR = "/"
    TAG_SEPARATOR = ":"
    VERSION_SEPARATOR = "@"
    STDIN_TOKEN = "-"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    DEFAULT_LOG_LEVEL = "WARNING"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HEADERS_JSON = {"Accept": "application/json"}
    STRICT_PREFIX = False  # Reject specifiers without npm:/jsr: when True

    # Environment overrides
    ENV_CONFIG = "LATESTPIN_CONFIG"
    ENV_LOG_LEVEL = "LATESTPIN_LOG_LEVEL"
    ENV_NPM_REGISTRY = "LATESTPIN_NPM_REGISTRY"
    ENV_JSR_REGISTRY = "LATESTPIN_JSR_REGISTRY"
    ENV_TIMEOUT = "LATESTPIN_TIMEOUT"
    ENV_STRICT = "LATESTPIN_STRICT"
