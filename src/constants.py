"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    CONFIG_ERROR = 4
    RESOLUTION_ERROR = 5


class Actions(Enum):
    """Sub-commands supported by the CLI.

    Args:
        Enum (string): Sub-command names.
    """

    PUBLISH = "publish"
    RESOLVE = "resolve"
    COORDINATES = "coordinates"
    VERSIONS = "versions"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_GROUP_ID = "org.tinker.app"
    DEFAULT_CACHE_DIR = "build/tinker-cache"
    PACKAGE_EXTENSION = "apk"
    TEXT_EXTENSION = "txt"
    MAPPING_CLASSIFIER = "mapping"
    SYMBOL_CLASSIFIER = "r"
    POM_PACKAGING = "apk"

    # Build output layout conventions
    SYMBOL_FILE_TEMPLATE = "build/intermediates/runtime_symbol_list/{variant}/R.txt"
    RESGUARD_DIR_PREFIX = "AndResGuard_"
    RESGUARD_APK_SUFFIX = "_aligned_unsigned.apk"

    # Resolution channel names
    PACKAGE_CHANNEL_TEMPLATE = "tinkerResolve{variant}ApkClasspath"
    RESOURCE_CHANNEL_TEMPLATE = "tinkerResolve{variant}Classpath"

    METADATA_FILE = "maven-metadata.xml"
    CHECKSUM_ALGORITHMS = ("sha1", "md5")

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "TINKERPUB_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    USER_AGENT = "tinker-publish/0.1"
