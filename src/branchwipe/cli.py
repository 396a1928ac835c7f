"""Command line interface for branchwipe."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from branchwipe import __version__
from branchwipe.git import DeleteError, GitError, ProcessLaunchError
from branchwipe.log import setup_logging
from branchwipe.store import BranchEntry, BranchStore

app = typer.Typer(help="View and wipe local git branches")
console = Console()

PathOption = Annotated[
    Path,
    typer.Option(help="Path to git repository", envvar="BRANCHWIPE_PATH"),
]


def version_callback(value: bool) -> None:
    if value:
        print(f"branchwipe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="BRANCHWIPE_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """View and wipe local git branches."""
    try:
        setup_logging(log_level)
    except ValueError as err:
        print(f"[red]Error:[/red] {err}")
        raise typer.Exit(code=1) from err


def load_store(path: Path) -> BranchStore:
    """Create a store for ``path`` and load its branches."""
    store = BranchStore(path)
    try:
        store.refresh()
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err
    return store


def create_branch_table(entries: tuple[BranchEntry, ...], title: str = "Local Branches") -> Table:
    """Create a table listing entries with their positions."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold",
        title_style="bold blue",
        show_edge=True,
    )
    table.add_column("#", style="magenta", justify="right", no_wrap=True)
    table.add_column("Branch", style="cyan", no_wrap=True)
    for position, entry in enumerate(entries):
        table.add_row(str(position), escape(entry.name))
    return table


class BranchListView:
    """Renders a store's branches whenever the store reports a change."""

    def __init__(self, store: BranchStore, output: Console) -> None:
        self.store = store
        self.output = output

    def render(self, entries: tuple[BranchEntry, ...]) -> None:
        if not entries:
            self.output.print(
                Panel("[yellow]No local branches[/yellow]", style="yellow", padding=(0, 2), expand=False)
            )
            return
        self.output.print(create_branch_table(entries))

    def on_collection_replaced(self, entries: tuple[BranchEntry, ...]) -> None:
        self.render(entries)

    def on_entry_removed(self, position: int, entry: BranchEntry) -> None:
        self.output.print(f"[green]Deleted[/green] [cyan]{escape(entry.name)}[/cyan] 🧹")
        self.render(self.store.entries)


@app.command("list")
def list_command(path: PathOption = Path(".")) -> None:
    """List local branches in the order git reports them."""
    store = load_store(path)
    BranchListView(store, console).render(store.entries)


@app.command()
def delete(
    position: Annotated[int, typer.Argument(help="Position of the branch, as shown by `list`")],
    path: PathOption = Path("."),
) -> None:
    """Delete the branch at POSITION."""
    store = load_store(path)
    store.add_listener(BranchListView(store, console))
    try:
        store.delete_at(position)
    except IndexError as err:
        print(f"[red]Error:[/red] {err}")
        raise typer.Exit(code=1) from err
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


@app.command()
def wipe(path: PathOption = Path(".")) -> None:
    """Interactively delete branches. Deletion happens immediately, without confirmation."""
    store = BranchStore(path)
    store.add_listener(BranchListView(store, console))
    try:
        store.refresh()
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    while True:
        try:
            choice = input("Branch # to delete, [r]efresh or [q]uit: ").strip().lower()
        except EOFError:
            break

        if choice in ("q", "quit"):
            break
        if not choice:
            continue
        if choice in ("r", "refresh"):
            try:
                store.refresh()
            except GitError as err:
                print(f"[red]Error:[/red] {escape(str(err))}")
            continue

        try:
            position = int(choice)
        except ValueError:
            print(f"[yellow]Not a position:[/yellow] {escape(choice)}")
            continue

        try:
            store.delete_at(position)
        except IndexError as err:
            print(f"[yellow]{err}[/yellow]")
        except DeleteError as err:
            print(f"[red]Error:[/red] {escape(str(err))}")
        except ProcessLaunchError as err:
            print(f"[red]Error:[/red] {escape(str(err))}")
            raise typer.Exit(code=1) from err


if __name__ == "__main__":
    app()
