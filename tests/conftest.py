"""Fixtures shared by every test module."""

import pytest
from git import Repo


@pytest.fixture(autouse=True)
def git_identity(monkeypatch):
    """Give git commit-tree an author on machines without a global identity."""
    for role in ("AUTHOR", "COMMITTER"):
        monkeypatch.setenv(f"GIT_{role}_NAME", "Test User")
        monkeypatch.setenv(f"GIT_{role}_EMAIL", "test@example.com")


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository with one commit on its default branch."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    (repo_path / "README.md").write_text("# Test")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    return repo_path
