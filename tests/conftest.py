"""
Shared fixtures for repo-man tests.

Git-backed tests are skipped when no ``git`` executable is on PATH.
"""

import logging
import os
import shutil
import subprocess
from datetime import datetime, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

from repoman.core.tree import Commit, FileTree

_git_available = shutil.which("git") is not None


def pytest_collection_modifyitems(config, items):
    """Skip tests marked ``git`` when git is not installed."""
    if _git_available:
        return
    skip_git = pytest.mark.skip(reason="git executable not available")
    for item in items:
        if "git" in item.keywords:
            item.add_marker(skip_git)


# =============================================================================
# TREE FIXTURES
# =============================================================================

def make_commit(author: str = "alice", sha: str = "0" * 40, message: str = "change") -> Commit:
    """Build a commit with a fixed timestamp."""
    return Commit(
        sha=sha,
        author=author,
        timestamp=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        message=message,
    )


def build_tree(*entries) -> FileTree:
    """Build a FileTree from ``(path, size)`` or ``(path, size, commits)`` tuples."""
    tree = FileTree()
    for entry in entries:
        tree.add_file(*entry)
    return tree


@pytest.fixture
def two_folders_tree():
    """Two folders with two differently sized files each."""
    return build_tree(
        ("src/Program.cs", 100),
        ("src/Bootstrapper.cs", 300),
        ("docs/About.md", 200),
        ("docs/GettingStarted.md", 400),
    )


@pytest.fixture
def capture_info(caplog):
    """caplog at INFO for every repoman logger."""
    caplog.set_level(logging.INFO, logger="repoman")
    return caplog


# =============================================================================
# GIT FIXTURES
# =============================================================================

def _git(repo: Path, *args: str) -> str:
    env = {
        **os.environ,
        "GIT_CONFIG_GLOBAL": os.devnull,
        "GIT_CONFIG_SYSTEM": os.devnull,
    }
    proc = subprocess.run(
        ["git", *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
        env=env,
    )
    return proc.stdout


def commit_files(repo: Path, files: dict, author: str = "Alice", message: str = "update") -> None:
    """Write ``{relative_path: content}`` and commit them as ``author``."""
    for rel, content in files.items():
        target = repo / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        _git(repo, "add", rel)
    _git(
        repo,
        "-c", f"user.name={author}",
        "-c", f"user.email={author.lower()}@example.com",
        "commit", "-q", "-m", message,
    )


@pytest.fixture
def git_repo(tmp_path):
    """A small repository with a top-level file and two nested folders.

    History:
        Alice adds README.md, src/app.py, src/lib/util.py
        Bob   edits src/app.py
    """
    repo = tmp_path / "sample"
    repo.mkdir()
    _git(repo, "init", "-q")
    commit_files(repo, {
        "README.md": "# sample\n",
        "src/app.py": "print('hi')\n",
        "src/lib/util.py": "def util():\n    return 1\n",
    }, author="Alice", message="initial")
    commit_files(repo, {"src/app.py": "print('hello world')\n"}, author="Bob", message="greet")
    return repo


@pytest.fixture
def make_tree():
    """Factory fixture wrapping :func:`build_tree`."""
    return build_tree


@pytest.fixture
def commit_factory():
    """Factory fixture wrapping :func:`make_commit`."""
    return make_commit


# =============================================================================
# CLI FIXTURES
# =============================================================================

@pytest.fixture
def runner():
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def cli_config(tmp_path, monkeypatch):
    """An empty config file passed to every invocation, logging setup patched out.

    Returns the config path; invoke as ``cli --config <path> ...``.
    """
    for name in list(os.environ):
        if name.startswith("REPOMAN_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr("repoman.__main__.setup_logging", lambda **kwargs: None)
    path = tmp_path / "repoman.yaml"
    path.write_text("")
    return path
