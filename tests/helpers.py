"""Test doubles for the process invoker and store listeners."""

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence

from branchwipe.git import LIST_BRANCHES, ProcessResult


class FakeGit:
    """Stand-in process invoker that keeps branches in a list.

    Lists them in the stored order and refuses to delete protected ones.
    """

    def __init__(self, branches: Sequence[str], protected: Iterable[str] = ()) -> None:
        self.branches = list(branches)
        self.protected = set(protected)
        self.calls: list[tuple[str, ...]] = []
        self.list_output: Optional[bytes] = None

    def __call__(self, path: Path, command: Sequence[str]) -> ProcessResult:
        command = tuple(command)
        self.calls.append(command)
        if command == LIST_BRANCHES:
            stdout = self.list_output
            if stdout is None:
                stdout = "".join(f"{name}\n" for name in self.branches).encode()
            return ProcessResult(stdout=stdout, stderr="", status=0)

        if command[:2] == ("branch", "-D"):
            name = command[2]
            if name in self.protected:
                return ProcessResult(b"", f"error: Cannot delete branch '{name}' checked out at '{path}'\n", 1)
            if name not in self.branches:
                return ProcessResult(b"", f"error: branch '{name}' not found.\n", 1)
            self.branches.remove(name)
            return ProcessResult(f"Deleted branch {name} (was 0000000).\n".encode(), "", 0)

        return ProcessResult(b"", f"git: '{command[0]}' is not a git command.\n", 1)


class RecordingListener:
    """Collects store notifications in the order they arrive."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_collection_replaced(self, entries) -> None:
        self.events.append(("replaced", [entry.name for entry in entries]))

    def on_entry_removed(self, position, entry) -> None:
        self.events.append(("removed", position, entry.name))


def deny_entering(monkeypatch, locked: Path) -> None:
    """Make os.access report that ``locked`` cannot be entered, even when running as root."""
    real_access = os.access

    def access(path, mode, *args, **kwargs):
        if Path(path) == locked and mode & os.X_OK:
            return False
        return real_access(path, mode, *args, **kwargs)

    monkeypatch.setattr(os, "access", access)
