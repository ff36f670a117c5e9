"""Remove build output and, optionally, every downloaded model."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Callable

from emfcli.config import Config, ConfigError, remove_all_models

CLEAN_DIR_NAME = "dist"

_CONFIRM_ALL = (
    "Are you sure you want to delete all downloaded models "
    "and clean the build files of this project?"
)


def _ask_confirmation(message: str) -> bool:
    return input(f"{message} [y/N] ").strip().lower() in ("y", "yes")


def run_clean(
    config: Config,
    delete_all: bool = False,
    authorize_all: bool = False,
    confirm: Callable[[str], bool] = _ask_confirmation,
) -> bool:
    """Clean the project of a loaded configuration.

    Returns False when the user declines or the build files cannot be removed.
    """
    if delete_all:
        if not authorize_all and not confirm(_CONFIRM_ALL):
            return False

        print("Cleaning all models...")
        try:
            info = remove_all_models(config)
        except (ConfigError, OSError) as exc:
            print(f"Error cleaning all models: {exc}", file=sys.stderr)
        else:
            if info:
                print(info)

    clean_dir = Path(CLEAN_DIR_NAME)
    if not clean_dir.exists():
        print("Operation succeeded.")
        return True

    print("Cleaning project files...")
    try:
        shutil.rmtree(clean_dir)
    except OSError as exc:
        print(f"Error cleaning project files: {exc}", file=sys.stderr)
        return False
    print("Project files cleaned.")
    return True