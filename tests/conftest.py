"""Shared pytest fixtures for Loki tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from click.testing import CliRunner
from loki.core.config import Config
from loki.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path, monkeypatch):
    """Keep tests away from the user's ~/.lokiconfig."""
    path = tmp_path / 'lokiconfig'
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', path)
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def write_file(temp_dir):
    """Return a helper writing text files inside the working tree."""
    def _write(name, content):
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def repo_with_commits(repo, write_file):
    """
    Repository with two commits.
    
    The first commit stores README as "hello", the second as "hello world".
    Digests are available as repo.first_commit and repo.second_commit.
    """
    write_file('README', 'hello')
    repo.add('README')
    first = repo.commit('first')
    
    write_file('README', 'hello world')
    repo.add('README')
    second = repo.commit('second')
    
    repo.first_commit = first
    repo.second_commit = second
    return repo


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()
