"""Application identity and build information."""

from __future__ import annotations

from dataclasses import dataclass

NAME = "emf-cli"
DOWNLOAD_DIRECTORY_PATH = "./models/"


@dataclass
class BuildInfo:
    """Version and build date of the running client."""

    version: str = ""
    build_date: str = ""


BUILD = BuildInfo()


def init(version: str, build_date: str) -> BuildInfo:
    """Record the client's version and build date and return them."""
    BUILD.version = version
    BUILD.build_date = build_date
    return BUILD


def version_line() -> str:
    """The line printed by the ``version`` command."""
    return f"Client version: {BUILD.version} ({BUILD.build_date})"