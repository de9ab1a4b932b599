# reltool Test Fixtures
# Pytest fixtures for reltool tests

import shutil
import subprocess
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml

from reltool.config import ReleaseConfig

GITCONFIG = """[user]
\tname = Release Bot
\temail = release-bot@example.com
[init]
\tdefaultBranch = master
[commit]
\tgpgsign = false
[tag]
\tgpgsign = false
[advice]
\tdetachedHead = false
"""

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    """Build a fake subprocess result."""
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory with an isolated git configuration."""
    home = temp_dir / "home"
    home.mkdir()
    (home / ".gitconfig").write_text(GITCONFIG, encoding="utf-8")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(temp_dir))
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    monkeypatch.delenv("RELTOOL_CONFIG", raising=False)
    return home


@pytest.fixture
def workdir(temp_dir: Path, temp_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an empty working directory outside any repository and enter it."""
    path = temp_dir / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def sh() -> Callable[..., str]:
    """Run a shell command in the current directory and return its stdout."""

    def _run(command: str, cwd: Path | None = None) -> str:
        result = subprocess.run(command, shell=True, cwd=cwd, check=True, capture_output=True, text=True)
        return result.stdout.strip()

    return _run


@pytest.fixture
def sample_config() -> dict:
    """Create sample configuration dict."""
    return {
        "name": "release-it",
        "version": "1.1.0",
        "options": {"verbose": False, "dry_run": False},
        "scripts": {"changelog": 'git log --pretty=format:"* %s (%h)" [REV_RANGE]'},
        "git": {
            "tag_name": "v${version}",
            "tag_annotation": "Release v${version}",
            "commit_message": "Release ${version}",
            "push_repo": "origin",
        },
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / ".reltool.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


@pytest.fixture
def release_config() -> ReleaseConfig:
    """Default configuration with a project name."""
    return ReleaseConfig(name="release-it")


@pytest.fixture
def verbose_config() -> ReleaseConfig:
    """Configuration with verbose command echo enabled."""
    return ReleaseConfig(name="release-it", options={"verbose": True})
