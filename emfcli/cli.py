"""Command-line entry point of the emf-cli tool."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from emfcli import app
from emfcli.build import LIBRARIES, BuildController, BuildError
from emfcli.clean import run_clean
from emfcli.config import Config, ConfigError, load_with_retries


def _ask_config_path() -> str:
    return input("Enter the configuration file path: ")


def _ask_confirmation(message: str) -> bool:
    return input(f"{message} [y/N] ").strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    """Parser for the root command and its subcommands."""
    parser = argparse.ArgumentParser(
        prog=app.NAME,
        description=f"{app.NAME} is a command line tool to manage a EMF project easily.",
    )
    parser.add_argument("--config-path", default=".", help="config file path")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("version", help=f"Get the version of {app.NAME}")

    build = commands.add_parser(
        "build",
        help="Build the project",
        description=(
            "Build the project using the selected library (pyinstaller or nuitka). "
            "Note: if you want to use nuitka, you need to have a working C compiler."
        ),
    )
    build.add_argument(
        "-o", "--out-dir", default="dist",
        help="destination directory where the project will be built",
    )
    build.add_argument("-n", "--name", default="", help="custom name for the executable")
    build.add_argument(
        "-l", "--library", default="pyinstaller",
        help=f"library to use for building the project ({' or '.join(LIBRARIES)})",
    )
    build.add_argument("-f", "--one-file", action="store_true", help="build the project in one file")
    build.add_argument(
        "-s", "--models-symlink", action="store_true",
        help="symlink the models directory to the build directory",
    )

    clean = commands.add_parser("clean", help="Clean project files (e.g. models, build)")
    clean.add_argument("-a", "--all", action="store_true", dest="delete_all", help="clean all project")
    clean.add_argument("-y", "--yes", action="store_true", help="bypass delete all confirmation")

    return parser


def _run_build(args: argparse.Namespace) -> int:
    controller = BuildController(
        destination_dir=args.out_dir,
        custom_name=args.name,
        one_file=args.one_file,
        models_symlink=args.models_symlink,
        library=args.library,
        ask_path=_ask_config_path,
    )
    try:
        controller.run()
    except (BuildError, ConfigError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def _run_clean(args: argparse.Namespace) -> int:
    config = Config()
    try:
        load_with_retries(config, args.config_path, _ask_config_path)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0 if run_clean(config, args.delete_all, args.yes, _ask_confirmation) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "version":
        print(app.version_line())
        return 0
    if args.command == "build":
        return _run_build(args)
    if args.command == "clean":
        return _run_clean(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())