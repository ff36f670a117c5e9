"""Package the project into an executable with pyinstaller or nuitka."""

from __future__ import annotations

import os
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Protocol, Sequence, Union

from emfcli.config import Config, load_with_retries

LIBRARIES = ("pyinstaller", "nuitka")
VENV_DIR = ".venv"
MODELS_DIR = "models"

PathLike = Union[str, Path]


class BuildError(Exception):
    """Raised when the project cannot be built."""


class _Venv(Protocol):
    def find_venv_executable(self, venv_path: PathLike, name: str) -> str: ...

    def execute_pip(self, pip_path: PathLike, args: Sequence[str]) -> None: ...


class VirtualEnv:
    """Locates and runs tools inside a project's virtual environment."""

    def find_venv_executable(self, venv_path: PathLike, name: str) -> str:
        """Path of the executable ``name`` inside the environment at ``venv_path``."""
        base = Path(venv_path)
        if os.name == "nt":
            candidates = (base / "Scripts" / f"{name}.exe", base / "Scripts" / name)
        else:
            candidates = (base / "bin" / name,)
        for candidate in candidates:
            if candidate.is_file():
                return str(candidate)
        raise BuildError(f"{name} executable not found in {base}")

    def execute_pip(self, pip_path: PathLike, args: Sequence[str]) -> None:
        """Run pip with ``args``; raise BuildError if it fails."""
        try:
            result = subprocess.run(
                [str(pip_path), *args], capture_output=True, text=True
            )
        except OSError as exc:
            raise BuildError(str(exc)) from exc
        if result.returncode != 0:
            message = result.stderr.strip()
            raise BuildError(message or f"pip exited with status {result.returncode}")


def _ask_config_path() -> str:
    return input("Enter the configuration file path: ")


@dataclass
class BuildController:
    """Builds the project into ``destination_dir`` with the selected library."""

    destination_dir: str = "dist"
    custom_name: str = ""
    one_file: bool = False
    models_symlink: bool = False
    library: str = "pyinstaller"
    config: Config = field(default_factory=Config)
    venv: _Venv = field(default_factory=VirtualEnv)
    ask_path: Callable[[], PathLike] = _ask_config_path
    echo: Callable[[str], None] = print

    def run(self) -> None:
        """Load the configuration, install the build tool and build the project."""
        load_with_retries(self.config, ".", self.ask_path)

        if self.library not in LIBRARIES:
            raise BuildError("invalid library selected")

        destination = Path(self.destination_dir)
        if not destination.exists():
            self.echo(f"Creating dist folder {self.destination_dir}")
            try:
                destination.mkdir()
            except OSError as exc:
                raise BuildError(f"error creating dist folder: {exc}") from exc

        python_path = self.install_dependencies(self.library)

        if self.library == "pyinstaller":
            try:
                library_path = self.venv.find_venv_executable(VENV_DIR, "pyinstaller")
            except (BuildError, OSError) as exc:
                raise BuildError(f"error finding pyinstaller executable: {exc}") from exc
        else:
            library_path = python_path

        self.build(library_path)

        if not self.models_symlink:
            return
        try:
            self.create_models_symbolic_link()
        except BuildError as exc:
            raise BuildError(f"error creating symbolic link: {exc}") from exc

    def create_build_args(self) -> List[str]:
        """Command-line arguments for the selected build library, without duplicates."""
        name = self.custom_name or str(self.config.get("name", "") or "")
        args: List[str] = []

        if self.library == "pyinstaller":
            if self.one_file:
                args.append("-F")
            args.append(f"--name={name}")
            args.append(f"--distpath={self.destination_dir}")
            args.extend(self.config.get_string_list("build.pyinstaller.args"))
        elif self.library == "nuitka":
            args.append("-m nuitka")
            if self.one_file:
                args.append("--onefile")
            args.append(f"--python-flag=-o {name}")
            args.append(f"--output-dir={self.destination_dir}")
            args.extend(self.config.get_string_list("build.nuitka.args"))

        args.append("main.py")
        return list(dict.fromkeys(args))

    def install_dependencies(self, library: str) -> str:
        """Install ``library`` into the virtual environment; return its python path."""
        try:
            python_path = self.venv.find_venv_executable(VENV_DIR, "python")
        except (BuildError, OSError) as exc:
            raise BuildError(f"error finding python executable: {exc}") from exc

        try:
            pip_path = self.venv.find_venv_executable(VENV_DIR, "pip")
        except (BuildError, OSError) as exc:
            raise BuildError(f"error finding pip executable: {exc}") from exc

        try:
            self.venv.execute_pip(pip_path, ["install", library])
        except (BuildError, OSError) as exc:
            raise BuildError(f"error installing {library}: {exc}") from exc

        return python_path

    def build(self, library_path: PathLike) -> bool:
        """Run the build tool; return whether it finished successfully.

        A failing or interrupted build is reported but does not raise.
        """
        args = self.create_build_args()
        self.echo(f"Building project using {self.library}...")
        self.echo(f"Using the following arguments: {args}")
        self.echo(f"The project will be built to {self.destination_dir}")
        self.echo("Building project...")

        start = time.monotonic()
        try:
            result = subprocess.run(
                [str(library_path), *args],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
            )
        except KeyboardInterrupt:
            self.echo(f"Build cancelled manually after {time.monotonic() - start:.2f}s")
            return False
        except OSError as exc:
            self.echo(f"Build command could not be started: {exc}")
            return False

        elapsed = time.monotonic() - start
        if result.returncode != 0:
            details = result.stderr.strip()
            self.echo(
                f"Build failed with status {result.returncode} after {elapsed:.2f}s"
                + (f": {details}" if details else "")
            )
            return False

        self.echo(f"Project built successfully in {elapsed:.2f}s")
        return True

    def create_models_symbolic_link(self) -> None:
        """Link ``<destination_dir>/models`` to the project's models folder."""
        models_path = Path(MODELS_DIR)
        destination = Path(self.destination_dir)
        link_path = destination / MODELS_DIR

        self.echo(f"Creating symbolic link from {models_path} to {link_path}")

        if not models_path.exists():
            raise BuildError("models folder does not exist")
        if not destination.exists():
            raise BuildError("dist folder does not exist")

        try:
            os.symlink(MODELS_DIR, link_path, target_is_directory=True)
        except OSError as exc:
            raise BuildError(f"error creating symbolic link: {exc}") from exc

        self.echo("Symbolic link created successfully")