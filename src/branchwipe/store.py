"""In-memory branch list kept in step with the repository."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Protocol, Sequence

from branchwipe.git import (
    LIST_BRANCHES,
    DeleteError,
    ProcessLaunchError,
    ProcessResult,
    RefreshError,
    delete_branch_command,
    parse_branches,
    run_git,
)
from branchwipe.log import get_logger

logger = get_logger(__name__)

Runner = Callable[[Path, Sequence[str]], ProcessResult]


@dataclass(frozen=True)
class BranchEntry:
    """A listed local branch."""

    name: str


class BranchStoreListener(Protocol):
    """Receives change notifications from a BranchStore."""

    def on_collection_replaced(self, entries: tuple[BranchEntry, ...]) -> None:
        """Called after a successful refresh with the new entries."""

    def on_entry_removed(self, position: int, entry: BranchEntry) -> None:
        """Called after the entry at ``position`` was deleted."""


class BranchStore:
    """Owner of the ordered branch list of one repository.

    The list only changes through ``refresh`` and ``delete_at``, and only after
    git has reported success. A failed operation leaves it untouched.
    Not thread-safe: every call blocks on one git process.
    """

    def __init__(self, path: Path, runner: Runner = run_git) -> None:
        """Initialize store.

        Args:
            path: Working directory of the repository, fixed for the store's lifetime
            runner: Process invoker used to run git
        """
        self._path = Path(path).absolute()
        self._runner = runner
        self._entries: list[BranchEntry] = []
        self._populated = False
        self._listeners: list[BranchStoreListener] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def entries(self) -> tuple[BranchEntry, ...]:
        return tuple(self._entries)

    @property
    def is_populated(self) -> bool:
        """Whether a refresh has succeeded yet."""
        return self._populated

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, position: int) -> BranchEntry:
        return self._entries[position]

    def __iter__(self) -> Iterator[BranchEntry]:
        return iter(self.entries)

    def add_listener(self, listener: BranchStoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: BranchStoreListener) -> None:
        self._listeners.remove(listener)

    def refresh(self) -> tuple[BranchEntry, ...]:
        """Reload the branch list from the repository.

        Returns:
            The new entries, in the order git listed them

        Raises:
            RefreshError: If git could not be started or failed; the current list is kept
        """
        try:
            result = self._runner(self._path, LIST_BRANCHES)
        except ProcessLaunchError as err:
            raise RefreshError(f"Failed to list branches: {err}") from err

        if not result.succeeded:
            reason = result.stderr.strip() or f"git exited with status {result.status}"
            raise RefreshError(f"Failed to list branches in {self._path}: {reason}")

        self._entries = [BranchEntry(name) for name in parse_branches(result.stdout)]
        self._populated = True
        logger.info("Loaded %d branch(es) from %s", len(self._entries), self._path)

        entries = self.entries
        for listener in list(self._listeners):
            listener.on_collection_replaced(entries)
        return entries

    def delete_at(self, position: int) -> BranchEntry:
        """Delete the branch at ``position`` from the repository, then from the list.

        The branch name is looked up when the call is made, so a position chosen
        before a refresh acts on whatever is listed there now. There is no
        confirmation step.

        Returns:
            The removed entry

        Raises:
            IndexError: If ``position`` is not a position in the current list
            DeleteError: If git refused the delete; the entry stays listed
            ProcessLaunchError: If git could not be started
        """
        if not 0 <= position < len(self._entries):
            raise IndexError(f"No branch at position {position} (have {len(self._entries)})")

        entry = self._entries[position]
        result = self._runner(self._path, delete_branch_command(entry.name))
        if not result.succeeded:
            logger.warning("git refused to delete %s: %s", entry.name, result.stderr.strip())
            raise DeleteError(entry.name, result.stderr)

        del self._entries[position]
        logger.info("Deleted branch %s", entry.name)

        for listener in list(self._listeners):
            listener.on_entry_removed(position, entry)
        return entry

    def delete_branch(self, name: str) -> BranchEntry:
        """Delete a listed branch by name.

        Raises:
            KeyError: If no listed branch has that name
        """
        for position, entry in enumerate(self._entries):
            if entry.name == name:
                return self.delete_at(position)
        raise KeyError(name)
