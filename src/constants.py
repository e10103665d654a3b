"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    USER_ERROR = 1
    CONNECTION_ERROR = 2
    SPAWN_ERROR = 4
    TIMEOUT = 5


class PackageManagers(Enum):
    """Package managers the install step can delegate to.

    Args:
        Enum (string): Package managers supported by the program.
    """

    NPM = "npm"
    YARN = "yarn"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    REGISTRY_TOKEN: Optional[str] = None
    DEFAULT_TAG = "latest"
    YARN_LOCK_FILE = "yarn.lock"
    WINDOWS_EXECUTABLE_SUFFIX = ".cmd"
    SUPPORTED_MANAGERS = [
        PackageManagers.NPM.value,
        PackageManagers.YARN.value,
    ]
    PACKAGE_MANAGER: Optional[str] = None  # None -> detect from the project
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for registry requests
    INSTALL_TIMEOUT: Optional[float] = None  # None -> wait for the installer
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    RECENT_VERSIONS_HINT = 5

    ENV_CONFIG = "PEERDEPS_CONFIG"
    ENV_REGISTRY = "PEERDEPS_REGISTRY"
    ENV_TOKEN = "NPM_TOKEN"
    ENV_LOG_LEVEL = "PEERDEPS_LOG_LEVEL"


def _default_config_paths():
    paths = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        paths.append(env_path)
    paths.append(os.path.join(os.getcwd(), ".peerdeps.yml"))
    paths.append(os.path.join(os.path.expanduser("~"), ".config", "install-peerdeps", "config.yml"))
    return paths


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first YAML config found.

    An explicit ``path`` is the only candidate when given. Unreadable or
    malformed files are logged and treated as empty.
    """
    candidates = [path] if path else _default_config_paths()
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to load config %s: %s", candidate, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level must be a mapping", candidate)
            return {}
        logger.debug("Loaded config from %s", candidate)
        return data
    if path:
        logger.warning("Config file not found: %s", path)
    return {}


def _number(section: str, key: str, value: Any, cast):
    """Convert a config value, returning None (keep the default) if it is unusable."""
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s.%s in config: %r", section, key, value)
        return None


def apply_config(cfg: Dict[str, Any]) -> None:
    """Copy recognised config keys onto Constants, then apply env overrides."""
    registry = cfg.get("registry") or {}
    http = cfg.get("http") or {}
    install = cfg.get("install") or {}

    if isinstance(registry, dict):
        if registry.get("url"):
            Constants.REGISTRY_URL_NPM = str(registry["url"])
        if registry.get("token"):
            Constants.REGISTRY_TOKEN = str(registry["token"])
    if isinstance(http, dict):
        if http.get("timeout") is not None:
            timeout = _number("http", "timeout", http["timeout"], float)
            if timeout is not None:
                Constants.REQUEST_TIMEOUT = timeout
        if http.get("retries") is not None:
            retries = _number("http", "retries", http["retries"], int)
            if retries is not None:
                Constants.HTTP_RETRY_MAX = max(1, retries)
    if isinstance(install, dict):
        if install.get("timeout") is not None:
            timeout = _number("install", "timeout", install["timeout"], float)
            if timeout is not None and timeout > 0:
                Constants.INSTALL_TIMEOUT = timeout
        manager = install.get("package_manager")
        if manager:
            if str(manager).lower() in Constants.SUPPORTED_MANAGERS:
                Constants.PACKAGE_MANAGER = str(manager).lower()
            else:
                logger.warning("Ignoring unsupported package_manager in config: %s", manager)

    # Environment wins over the file
    env_registry = os.environ.get(Constants.ENV_REGISTRY)
    if env_registry:
        Constants.REGISTRY_URL_NPM = env_registry
    env_token = os.environ.get(Constants.ENV_TOKEN)
    if env_token and env_token.strip():
        Constants.REGISTRY_TOKEN = env_token.strip()
