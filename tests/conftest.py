import subprocess

import pytest

from pdfbook.config import ENV_FLAGS, ENV_VARS


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty project directory as cwd, with no config env vars leaking in."""
    for var in list(ENV_VARS) + list(ENV_FLAGS):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write(project):
    def _write(name, text):
        path = project / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class FakeRunner:
    """Stands in for subprocess.run; records every command."""

    def __init__(self, returncode=0, stderr=""):
        self.returncode = returncode
        self.stderr = stderr
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, self.returncode, "", self.stderr)


@pytest.fixture
def tools(monkeypatch):
    """Pretend pandoc and xelatex are installed."""
    monkeypatch.setattr(
        "pdfbook.builders.base.shutil.which", lambda name: f"/usr/bin/{name}"
    )
    runner = FakeRunner()
    monkeypatch.setattr("pdfbook.builders.base.subprocess.run", runner)
    return runner
