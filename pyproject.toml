[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emfcli"
version = "1.0.0"
description = "Command line tool for EMF projects: builds, cleaning, YAML configuration and Python code generation"
requires-python = ">=3.10"
keywords = ["code generation", "python", "cli", "pyinstaller", "nuitka", "yaml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
emf-cli = "emfcli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["emfcli"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
