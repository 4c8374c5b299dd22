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
    CONFIG_ERROR = 3
    UNSATISFIABLE = 4
    EXECUTION_ERROR = 5
    INTEGRITY_ERROR = 6
    PATCH_ERROR = 7
    RESTORE_ERROR = 8


class Ecosystems(Enum):
    """Package ecosystems that have an update strategy.

    Args:
        Enum (string): Ecosystem identifiers as used by the API.
    """

    RUBYGEM = "Rubygem"
    NPM = "Npm"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_DEPENDENCY_FILES = (
        r"(Gemfile|Gemfile\.lock|.*\.gemspec|package\.json|npm-shrinkwrap\.json"
        r"|setup\.py|requirements\.txt|requires\.txt|composer\.json|composer\.lock"
        r"|bower\.json|yarn\.lock)$"
    )
    SUPPORTED_ECOSYSTEMS = [
        Ecosystems.RUBYGEM.value,
        Ecosystems.NPM.value,
    ]
    GEMFILE_LOCK_FILE = "Gemfile.lock"
    PACKAGE_LOCK_FILE = "package-lock.json"
    CONFIG_FILE = ".lockstep.yml"

    BUNDLE_UPDATE_CMD = "bundle update"
    NPM_UPDATE_CMD = "npm update"
    PATCH_CMD = "patch --forward --reject-file=-"

    API_URL = "https://api.gemnasium.com/v1"
    API_USER = "x"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    ENV_LOG_LEVEL = "LOCKSTEP_LOG_LEVEL"
    ENV_API_URL = "LOCKSTEP_API_URL"
    ENV_API_TOKEN = "LOCKSTEP_API_TOKEN"
    ENV_PROJECT_SLUG = "LOCKSTEP_PROJECT_SLUG"
    ENV_BUNDLE_UPDATE_CMD = "LOCKSTEP_BUNDLE_UPDATE_CMD"
    ENV_NPM_UPDATE_CMD = "LOCKSTEP_NPM_UPDATE_CMD"
    ENV_IGNORED_PATHS = "LOCKSTEP_IGNORED_PATHS"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
