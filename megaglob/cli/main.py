"""megaglob CLI - find nodes in a MEGA public folder or a JSON snapshot."""
import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="megaglob",
    help="Locate files and folders by path or glob",
    add_completion=False
)
console = Console()

LINK_OPTION = typer.Option(None, "--link", "-l", help="MEGA public folder link")
SNAPSHOT_OPTION = typer.Option(None, "--snapshot", "-s", help="JSON file with node records")
EXTENDED_OPTION = typer.Option(False, "--extended", "-x", help="Enable ? [] {a,b} glob syntax")


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def load_finder(
    link: Optional[str],
    snapshot: Optional[Path],
    extended: bool = False,
    parent_strategy: str = "first"
):
    """Build a NodeFinder from a public link or a snapshot file."""
    from megaglob import NodeFinder, FinderConfig, MemoryStorage, load_public_folder

    config = FinderConfig(extended_glob=extended, parent_strategy=parent_strategy)

    if snapshot is not None:
        try:
            records = json.loads(snapshot.read_text(encoding="utf-8"))
            storage = MemoryStorage.from_flat(records)
        except (OSError, ValueError, KeyError, TypeError) as e:
            console.print(f"[red]Cannot load snapshot {snapshot}: {e}[/red]")
            raise typer.Exit(1)
    elif link:
        try:
            storage = run_async(load_public_folder(link))
        except Exception as e:
            console.print(f"[red]Cannot load folder link: {e}[/red]")
            raise typer.Exit(1)
    else:
        console.print("[red]Provide --link or --snapshot[/red]")
        raise typer.Exit(1)

    return NodeFinder(storage, config)


def print_nodes(finder, nodes: List) -> None:
    """Print nodes as a table with their reconstructed paths."""
    if not nodes:
        console.print("[yellow]No matches[/yellow]")
        return

    table = Table()
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Path")
    table.add_column("Handle", style="dim")

    for node in nodes:
        type_str = "D" if node.is_folder else "F"
        table.add_row(type_str, node.name, finder.full_path(node), node.handle)

    console.print(table)


@app.command()
def files(
    pattern: str = typer.Argument(..., help="Glob path, e.g. /docs/*.pdf"),
    link: Optional[str] = LINK_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
    extended: bool = EXTENDED_OPTION,
):
    """Search files matching a glob path."""
    finder = load_finder(link, snapshot, extended)
    print_nodes(finder, finder.search_files(pattern))


@app.command()
def folders(
    pattern: str = typer.Argument(..., help="Glob path, e.g. /photos/*/raw"),
    link: Optional[str] = LINK_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
    extended: bool = EXTENDED_OPTION,
):
    """Search folders matching a glob path."""
    finder = load_finder(link, snapshot, extended)
    print_nodes(finder, finder.search_folders(pattern))


@app.command("resolve-files")
def resolve_files(
    path: str = typer.Argument(..., help="Exact file path"),
    link: Optional[str] = LINK_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
):
    """List every file at an exact path."""
    finder = load_finder(link, snapshot)
    print_nodes(finder, finder.resolve_files(path))


@app.command("resolve-folder")
def resolve_folder(
    path: str = typer.Argument(..., help="Exact folder path"),
    link: Optional[str] = LINK_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
):
    """Show the folder at an exact path."""
    finder = load_finder(link, snapshot)
    folder = finder.resolve_folder(path)

    if folder is None:
        console.print(f"[red]Folder not found: {path}[/red]")
        raise typer.Exit(1)

    print_nodes(finder, [folder])


@app.command()
def path(
    handle: str = typer.Argument(..., help="Node handle"),
    link: Optional[str] = LINK_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
    all_parents: bool = typer.Option(False, "--all", "-a", help="Show every path of multi-parent nodes"),
):
    """Show the path of a node."""
    from megaglob import NodeNotFoundError

    finder = load_finder(link, snapshot, parent_strategy="all" if all_parents else "first")

    try:
        node = finder.storage.get(handle)
    except NodeNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if node == finder.storage.root_folder():
        console.print("/")
        return

    for segments in finder.paths_to(node):
        console.print(finder.format_path(segments + [node.name]))


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
