"""Git process invocation and branch list parsing."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from git import Git
from git.exc import GitCommandNotFound

from branchwipe.log import get_logger

logger = get_logger(__name__)

LIST_BRANCHES = ("branch", "--format=%(refname:short)")


def delete_branch_command(name: str) -> tuple[str, ...]:
    """Build the command that force-deletes a local branch."""
    return ("branch", "-D", name)


class GitError(Exception):
    """Git operation error."""


class ProcessLaunchError(GitError):
    """The git executable could not be started."""


class RefreshError(GitError):
    """Listing branches failed."""


class DeleteError(GitError):
    """Git refused to delete a branch."""

    def __init__(self, branch: str, stderr: str) -> None:
        """Initialize error.

        Args:
            branch: Name of the branch that could not be deleted
            stderr: Diagnostic text git printed while refusing
        """
        reason = stderr.strip() or "no reason given"
        super().__init__(f"Failed to delete branch {branch!r}: {reason}")
        self.branch = branch
        self.stderr = stderr


@dataclass(frozen=True)
class ProcessResult:
    """Captured output of a finished git process."""

    stdout: bytes
    stderr: str
    status: int

    @property
    def succeeded(self) -> bool:
        return self.status == 0


def run_git(working_dir: Path, command: Sequence[str]) -> ProcessResult:
    """Run git synchronously inside ``working_dir``.

    The exit status is reported, not interpreted.

    Args:
        working_dir: Repository the command operates on
        command: Arguments passed to the git executable

    Raises:
        ProcessLaunchError: If git could not be started
    """
    if not command:
        raise ValueError("command must not be empty")

    path = Path(working_dir)
    # Git.execute silently falls back to the process cwd for a directory it cannot enter
    if not path.is_dir():
        raise ProcessLaunchError(f"Working directory does not exist: {path}")
    if not os.access(path, os.X_OK):
        raise ProcessLaunchError(f"Permission denied for working directory: {path}")

    argv = [Git.GIT_PYTHON_GIT_EXECUTABLE or "git", *command]
    logger.debug("Running %s in %s", " ".join(argv), path)
    try:
        status, stdout, stderr = Git(path).execute(
            argv,
            with_extended_output=True,
            with_exceptions=False,
            stdout_as_string=False,
            strip_newline_in_stdout=False,
        )
    except GitCommandNotFound as err:
        raise ProcessLaunchError(f"Failed to start git: {err}") from err
    except OSError as err:
        raise ProcessLaunchError(f"Failed to start git in {path}: {err}") from err

    logger.debug("git exited with status %s", status)
    if stderr:
        logger.debug("git stderr: %s", stderr)
    return ProcessResult(stdout=stdout, stderr=stderr, status=status)


def parse_branches(stdout: bytes) -> list[str]:
    """Turn list command output into branch names, in output order."""
    text = stdout.decode("utf-8", errors="replace")
    return [line.strip() for line in text.splitlines() if line.strip()]
