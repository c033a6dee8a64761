import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from appdirs import AppDirs

log = logging.getLogger(__name__)

# Define app-specific details
APP_NAME = "hnradar"
APP_AUTHOR = "hnradar"
_dirs = AppDirs(APP_NAME, APP_AUTHOR)

PAGE_SIZE = 20

DEFAULT_SETTINGS = {
    "api": {
        "base_url": "https://hacker-news.firebaseio.com/v0",
        "timeout": 10,
        "concurrency": 10,
    },
    "view": {
        "page_size": PAGE_SIZE,
        "comment_rows": 3,
    },
    "log_level": "WARNING",
}


def get_config_path() -> Path:
    return Path(_dirs.user_config_dir) / "user_config.yml"


def get_log_path() -> Path:
    return Path(_dirs.user_log_dir) / "hnradar.log"


class Settings:
    """
    Read-only view over the merged settings tree.
    """

    def __init__(self, data: Optional[dict] = None):
        self._settings = data if data is not None else copy.deepcopy(DEFAULT_SETTINGS)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Retrieves a setting value using a dot-separated key.

        Args:
            key: The dot-separated key (e.g., 'api.base_url').
            default: The value to return if the key is not found.

        Returns:
            The setting value or the default.
        """
        current_level = self._settings
        for part in key.split("."):
            if isinstance(current_level, dict) and part in current_level:
                current_level = current_level[part]
            else:
                return default
        return current_level

    @property
    def page_size(self) -> int:
        return int(self.get("view.page_size", PAGE_SIZE))


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Loads settings, layering the user's YAML file over the defaults.

    An explicitly given path must exist. The default path in the user's
    config directory is optional, and a broken file there is ignored.
    """
    data = copy.deepcopy(DEFAULT_SETTINGS)

    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
        if user_config:
            _merge(data, user_config)
        return Settings(data)

    path = get_config_path()
    if not path.is_file():
        return Settings(data)

    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
        if isinstance(user_config, dict):
            _merge(data, user_config)
    except (OSError, yaml.YAMLError) as e:
        log.error(f"Failed to read user config at {path}: {e}")

    return Settings(data)


def setup_logging(settings: Settings, debug: bool = False, log_path: Optional[Path] = None):
    """
    Sends log records to a file; the terminal belongs to the TUI.
    """
    path = log_path or get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug else getattr(
        logging, str(settings.get("log_level", "WARNING")).upper(), logging.WARNING
    )
    logging.basicConfig(
        filename=str(path),
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    log.debug(f"Logging to {path} at level {logging.getLevelName(level)}")
