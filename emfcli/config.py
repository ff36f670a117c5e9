"""Project configuration stored in a ``config.yaml`` file."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from emfcli.app import DOWNLOAD_DIRECTORY_PATH

CONFIG_NAME = "config"
_EXTENSIONS = ("yaml", "yml")
_MAX_ATTEMPTS = 3

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Raised when the configuration cannot be read or written."""


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key).lower(): _lower_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_lower_keys(item) for item in value]
    return value


class Config:
    """Key/value configuration with dotted, case-insensitive keys."""

    def __init__(self) -> None:
        self.path: Optional[Path] = None
        self._data: Dict[str, Any] = {}

    def load(self, conf_dir_path: PathLike) -> Path:
        """Reset and read the configuration file found in ``conf_dir_path``."""
        self.path = None
        self._data = {}

        directory = Path(conf_dir_path)
        candidates = (directory / f"{CONFIG_NAME}.{ext}" for ext in _EXTENSIONS)
        found = next((path for path in candidates if path.is_file()), None)
        if found is None:
            raise ConfigError(
                f'Config File "{CONFIG_NAME}" Not Found in "{directory.resolve()}"'
            )

        try:
            content = yaml.safe_load(found.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"error reading config file : {exc}") from exc

        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise ConfigError("error reading config file : top level is not a mapping")

        self._data = _lower_keys(content)
        self.path = found
        return found

    def get(self, key: str, default: Any = None) -> Any:
        """Value stored under the dotted ``key``, or ``default``."""
        node: Any = self._data
        for part in key.lower().split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_string_list(self, key: str) -> List[str]:
        """Value under ``key`` as a list of strings."""
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return [str(value)]

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under the dotted ``key``, creating parents."""
        *parents, last = key.lower().split(".")
        node = self._data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[last] = value

    def write(self) -> None:
        """Write the configuration back to the file it came from."""
        if self.path is None:
            raise ConfigError("error writing config file : no configuration file in use")
        try:
            self.path.write_text(
                yaml.safe_dump(self._data, sort_keys=False), encoding="utf-8"
            )
        except OSError as exc:
            raise ConfigError(f"error writing config file : {exc}") from exc


def load_with_retries(
    config: Config,
    conf_dir_path: PathLike,
    ask_path: Callable[[], PathLike],
) -> Path:
    """Load the configuration, asking for another directory after each failure.

    Gives up after three attempts and raises ConfigError.
    """
    error: Optional[ConfigError] = None
    for _ in range(_MAX_ATTEMPTS):
        try:
            return config.load(conf_dir_path)
        except ConfigError as exc:
            error = exc
            conf_dir_path = ask_path()
    raise ConfigError(
        f"error loading config file after {_MAX_ATTEMPTS} attempts: {error}"
    )


def _delete_directory_if_empty(path: Path) -> None:
    if path.is_dir() and not path.is_symlink() and not any(path.iterdir()):
        path.rmdir()


def remove_item_physically(item_path: PathLike) -> None:
    """Delete ``item_path`` and then every directory left empty on the way to it."""
    path = Path(item_path)
    if not path.exists() and not path.is_symlink():
        return

    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()

    parts = path.parts[:-1]
    for end in range(len(parts), 0, -1):
        _delete_directory_if_empty(Path(*parts[:end]))


def remove_all_models(config: Config) -> str:
    """Remove every configured model from disk and from the configuration.

    Returns an informational message, empty when models were removed.
    """
    models = config.get("models") or []
    if not models:
        return "There is no models to be removed."

    for item in models:
        name = item.get("name", "") if isinstance(item, dict) else str(item)
        if not name:
            continue
        try:
            remove_item_physically(Path(DOWNLOAD_DIRECTORY_PATH) / name)
        except OSError:
            continue

    config.set("models", [])
    config.write()
    return ""