import os
import sys
from pathlib import Path

import pytest

from emfcli.build import BuildController, BuildError, VirtualEnv
from emfcli.config import Config, ConfigError


class FakeVenv:
    def __init__(self, find_error=None, pip_error=None, path="does-not-exist"):
        self.find_error = find_error
        self.pip_error = pip_error
        self.path = path
        self.calls = {"find_venv_executable": 0, "execute_pip": 0}
        self.pip_args = []

    def find_venv_executable(self, venv_path, name):
        self.calls["find_venv_executable"] += 1
        if self.find_error is not None:
            raise self.find_error
        return self.path

    def execute_pip(self, pip_path, args):
        self.calls["execute_pip"] += 1
        self.pip_args.append(list(args))
        if self.pip_error is not None:
            raise self.pip_error


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("name: project\n", encoding="utf-8")
    (tmp_path / "models").mkdir()
    return tmp_path


def _controller(**kwargs):
    kwargs.setdefault("echo", lambda message: None)
    return BuildController(**kwargs)


def _script(path: Path, status: int) -> Path:
    path.write_text(f"#!/bin/sh\nexit {status}\n", encoding="utf-8")
    path.chmod(0o755)
    return path


def test_build_successful(tmp_path):
    messages = []
    bc = _controller(
        custom_name="custom",
        library="pyinstaller",
        destination_dir="dist",
        echo=messages.append,
    )
    assert bc.build(_script(tmp_path / "tool", 0)) is True
    assert any("Project built successfully" in m for m in messages)


def test_build_failure_is_reported_not_raised(tmp_path):
    messages = []
    bc = _controller(custom_name="custom", destination_dir="dist", echo=messages.append)
    assert bc.build(str(tmp_path / "missing-tool")) is False
    assert not any("built successfully" in m for m in messages)


def test_build_non_zero_exit(tmp_path):
    bc = _controller(custom_name="custom")
    assert bc.build(_script(tmp_path / "tool", 3)) is False


def test_run_without_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    bc = _controller(
        library="invalid",
        venv=FakeVenv(),
        ask_path=lambda: str(tmp_path / "nowhere"),
    )
    with pytest.raises(ConfigError):
        bc.run()


def test_run_with_errors(project):
    bc = _controller(
        custom_name="custom",
        library="invalid",
        destination_dir="dist",
        one_file=True,
        venv=FakeVenv(),
    )
    with pytest.raises(BuildError) as excinfo:
        bc.run()
    assert str(excinfo.value) == "invalid library selected"

    bc.library = "pyinstaller"
    bc.venv = FakeVenv(find_error=BuildError("mock error"))
    with pytest.raises(BuildError) as excinfo:
        bc.run()
    assert str(excinfo.value) == "error finding python executable: mock error"


def test_run_creates_dist_and_symlink(project):
    venv = FakeVenv()
    bc = _controller(
        custom_name="custom",
        library="pyinstaller",
        destination_dir="dist",
        one_file=True,
        venv=venv,
    )
    bc.run()
    assert (project / "dist").is_dir()
    assert venv.pip_args == [["install", "pyinstaller"]]

    bc.models_symlink = True
    bc.run()
    assert os.path.islink(project / "dist" / "models")


def test_create_models_symbolic_link(project):
    (project / "dist").mkdir()
    messages = []
    bc = _controller(destination_dir="dist", echo=messages.append)
    result = bc.create_models_symbolic_link()
    assert result is None
    assert os.path.islink(Path("dist") / "models")
    assert any("Symbolic link created successfully" in m for m in messages)


def test_create_models_symbolic_link_without_models(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "dist").mkdir()
    with pytest.raises(BuildError, match="models folder does not exist"):
        _controller(destination_dir="dist").create_models_symbolic_link()


def test_create_models_symbolic_link_without_dist(project):
    with pytest.raises(BuildError, match="dist folder does not exist"):
        _controller(destination_dir="dist").create_models_symbolic_link()


def test_install_dependencies():
    venv = FakeVenv(path="venv-python")
    bc = _controller(venv=venv)
    assert bc.install_dependencies("pyinstaller") == "venv-python"
    assert venv.calls["find_venv_executable"] == 2
    assert venv.calls["execute_pip"] == 1


def test_install_dependencies_errors():
    venv = FakeVenv(find_error=BuildError("mock error"))
    bc = _controller(venv=venv)
    with pytest.raises(BuildError) as excinfo:
        bc.install_dependencies("pyinstaller")
    assert str(excinfo.value) == "error finding python executable: mock error"
    assert venv.calls == {"find_venv_executable": 1, "execute_pip": 0}

    venv = FakeVenv(pip_error=BuildError("mock error"))
    bc.venv = venv
    with pytest.raises(BuildError) as excinfo:
        bc.install_dependencies("pyinstaller")
    assert str(excinfo.value) == "error installing pyinstaller: mock error"
    assert venv.calls == {"find_venv_executable": 2, "execute_pip": 1}


def test_create_build_args_with_empty_custom_name():
    config = Config()
    config.set("name", "testName")
    bc = _controller(custom_name="", library="pyinstaller", destination_dir="dist", config=config)
    assert bc.create_build_args() == ["--name=testName", "--distpath=dist", "main.py"]


def test_create_build_args_pyinstaller_one_file():
    bc = _controller(custom_name="custom", library="pyinstaller", destination_dir="dist", one_file=True)
    assert bc.create_build_args() == ["-F", "--name=custom", "--distpath=dist", "main.py"]


def test_create_build_args_nuitka_one_file():
    bc = _controller(custom_name="custom", library="nuitka", destination_dir="dist", one_file=True)
    assert bc.create_build_args() == [
        "-m nuitka",
        "--onefile",
        "--python-flag=-o custom",
        "--output-dir=dist",
        "main.py",
    ]


def test_create_build_args_extra_args_deduplicated():
    config = Config()
    config.set("build.pyinstaller.args", ["--clean", "--clean", "main.py"])
    bc = _controller(custom_name="custom", config=config)
    assert bc.create_build_args() == [
        "--name=custom",
        "--distpath=dist",
        "--clean",
        "main.py",
    ]


def test_find_venv_executable(tmp_path):
    venv = tmp_path / ".venv"
    (venv / "bin").mkdir(parents=True)
    (venv / "Scripts").mkdir()
    (venv / "bin" / "python").write_text("", encoding="utf-8")
    (venv / "Scripts" / "python.exe").write_text("", encoding="utf-8")
    found = Path(VirtualEnv().find_venv_executable(venv, "python"))
    assert found.is_file()
    assert found.parent.parent == venv


def test_find_venv_executable_missing(tmp_path):
    with pytest.raises(BuildError, match="pip executable not found"):
        VirtualEnv().find_venv_executable(tmp_path, "pip")


def test_execute_pip_failure():
    with pytest.raises(BuildError, match="boom"):
        VirtualEnv().execute_pip(
            sys.executable, ["-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )


def test_execute_pip_missing_executable(tmp_path):
    with pytest.raises(BuildError):
        VirtualEnv().execute_pip(tmp_path / "missing-pip", ["install", "x"])