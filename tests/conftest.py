"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable, Iterable

import pytest
from git import Actor, Repo

from tests.helpers import RecordingListener

AUTHOR = Actor("Test User", "test@example.com")


def init_repo(path: Path) -> Repo:
    """Initialize a repository on ``main`` with one commit."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", AUTHOR.name).release()
    repo.config_writer().set_value("user", "email", AUTHOR.email).release()
    # Name the unborn branch so the result does not depend on init.defaultBranch
    repo.git.symbolic_ref("HEAD", "refs/heads/main")

    readme = path / "README.md"
    readme.write_text("# Test Repository")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit", author=AUTHOR, committer=AUTHOR)
    return repo


def create_branch(repo: Repo, name: str, content: str) -> None:
    """Create a branch off main with one commit of its own, then return to main."""
    repo.heads.main.checkout()
    branch = repo.create_head(name)
    branch.checkout()

    file_name = f"{name.replace('/', '_')}.txt"
    (Path(repo.working_tree_dir) / file_name).write_text(content)
    repo.index.add([file_name])
    repo.index.commit(f"Add {name}", author=AUTHOR, committer=AUTHOR)
    repo.heads.main.checkout()


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Build a repository with the given extra branches; main stays checked out."""

    def _make(branches: Iterable[str] = (), name: str = "repo") -> Path:
        path = tmp_path / name
        repo = init_repo(path)
        for branch in branches:
            create_branch(repo, branch, f"{branch} content")
        return path

    return _make


@pytest.fixture
def test_repo(make_repo: Callable[..., Path]) -> Path:
    """Repository whose branches git lists as dev, main, temp; main is checked out."""
    return make_repo(["dev", "temp"])


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
