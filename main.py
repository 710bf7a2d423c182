"""
Main entry point for VCF Manager.

Interactive CLI for loading a VCF file, cleaning up duplicates and exporting
the result.

File: main.py
Author: VCF Manager maintainers
Created: 2026-09-14
Last Modified: 2026-10-19
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from vcf_manager.cli import RichMergePresenter, contacts_table
from vcf_manager.config import AppConfig, load_config
from vcf_manager.contacts import ContactCollection
from vcf_manager.dedupe import AutoMergeStatus, MergeEngine, MergeSession
from vcf_manager.models import LATEST_VERSION
from vcf_manager.vcard import export_contacts, has_legacy_version_contacts, read_vcf_file

console = Console()
log = logging.getLogger(__name__)

# Menu definitions
STEPS = {
    "1": {
        "name": "Load VCF file",
        "description": "Import contacts, replacing the current list",
    },
    "2": {
        "name": "List contacts",
        "description": "Show, filter and sort the current list",
    },
    "3": {
        "name": "Merge by name",
        "description": "Find contacts with the same name and merge them",
    },
    "4": {
        "name": "Merge by phone",
        "description": "Find contacts sharing a phone number and merge them",
    },
    "5": {
        "name": "Select contacts",
        "description": "Pick contacts by number for merging or deleting",
    },
    "6": {
        "name": "Merge / edit selection",
        "description": "Merge the selected contacts (first picked is master)",
    },
    "7": {
        "name": "Delete selection",
        "description": "Remove the selected contacts",
    },
    "8": {
        "name": "Export",
        "description": "Write the list to a timestamped .vcf file",
    },
    "9": {
        "name": "Clear",
        "description": "Remove every contact",
    },
}


def setup_logging(config: AppConfig) -> None:
    """Log to a dated file in config.log_dir and to the console."""
    config.log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.FileHandler(config.log_dir / f'vcf_manager_{datetime.now().strftime("%Y%m%d")}.log'),
            RichHandler(console=console, show_path=False, level=logging.WARNING),
        ],
    )


def show_menu(collection: ContactCollection):
    """Display the main menu."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]VCF Manager[/] - {len(collection)} contacts, "
            f"{len(collection.selected)} selected",
            border_style="cyan",
        )
    )
    console.print()

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Step", style="cyan", width=4)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")

    for key, step in STEPS.items():
        table.add_row(key, step["name"], step["description"])

    console.print(table)
    console.print()
    console.print("[dim]Commands:[/]")
    console.print("  [cyan]1-9[/]  Run a step")
    console.print("  [cyan]q[/]    Quit")
    console.print()


def _parse_numbers(raw: str, count: int) -> list:
    """'1, 3 4' -> [0, 2, 3]; anything outside 1..count is skipped."""
    indexes = []
    for token in raw.replace(",", " ").split():
        if token.isdigit() and 1 <= int(token) <= count:
            indexes.append(int(token) - 1)
        else:
            console.print(f"[yellow]Ignoring '{escape(token)}'[/]")
    return indexes


def _load(collection: ContactCollection, config: AppConfig, path: Path):
    """Load a VCF file into the collection."""
    try:
        contacts = read_vcf_file(path, config)
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        return

    collection.load(contacts)

    console.print(f"[green]Loaded {len(contacts):,} contacts from {escape(path.name)}[/]")
    if has_legacy_version_contacts(contacts):
        console.print("[dim]Some contacts use an older vCard version.[/]")


def _run_load(collection: ContactCollection, config: AppConfig):
    path = Prompt.ask("Path to .vcf file")
    _load(collection, config, Path(path).expanduser())


def _run_list(collection: ContactCollection, config: AppConfig):
    """List contacts, optionally filtered by name or phone."""
    if len(collection) == 0:
        console.print(f"[dim]{config.messages.empty_list}[/]")
        return

    query = Prompt.ask("Filter (name or phone, empty for all)", default="")
    sort_alpha = Confirm.ask("Sort alphabetically?", default=False)

    contacts = collection.filtered(query, sort_alpha=sort_alpha)
    if not contacts:
        console.print(f"[dim]{config.messages.no_data}[/]")
        return

    console.print(contacts_table(contacts, config, collection.selected))
    console.print(f"[dim]{config.messages.sort_alpha if sort_alpha else config.messages.sort_creation}[/]")


async def _run_auto_merge(session: MergeSession, config: AppConfig, mode: str):
    """Find duplicates and merge them one group at a time."""
    result = await session.auto_merge(mode)
    messages = config.messages

    if result.status is AutoMergeStatus.EMPTY:
        console.print(f"[yellow]{messages.empty_agenda}[/]")
    elif result.status is AutoMergeStatus.NO_DUPLICATES:
        console.print(f"[green]{messages.no_duplicates}[/]")
    elif result.status is AutoMergeStatus.DECLINED:
        console.print("[dim]Skipped.[/]")
    elif result.status is AutoMergeStatus.CANCELLED:
        console.print(f"[yellow]{messages.auto_merge_cancelled}[/] ({result.merged} of {result.groups_found} groups merged)")
    else:
        console.print(f"[green]{messages.auto_merge_complete}[/] ({result.merged} groups merged)")


def _run_select(collection: ContactCollection, config: AppConfig):
    """Toggle selection of contacts by their list number."""
    contacts = collection.contacts
    if not contacts:
        console.print(f"[dim]{config.messages.empty_list}[/]")
        return

    console.print(contacts_table(contacts, config, collection.selected))
    raw = Prompt.ask("Numbers to toggle ('all', 'none' or e.g. '1 4 7')", default="")
    if raw.strip().lower() == "all":
        collection.select_all()
    elif raw.strip().lower() == "none":
        collection.deselect_all()
    else:
        for index in _parse_numbers(raw, len(contacts)):
            collection.toggle_select(contacts[index].id)

    console.print(f"[dim]{len(collection.selected)} selected[/]")


async def _run_merge_selected(session: MergeSession, collection: ContactCollection):
    if not collection.selected:
        console.print("[yellow]Nothing selected.[/]")
        return

    merged = await session.merge_selected()
    if merged is None:
        console.print("[dim]Cancelled.[/]")
    else:
        console.print(f"[green]Saved '{escape(merged.full_name)}'[/]")


def _run_delete(collection: ContactCollection, config: AppConfig):
    count = len(collection.selected)
    if count == 0:
        console.print("[yellow]Nothing selected.[/]")
        return
    if Confirm.ask(config.messages.confirm_delete(count), default=False):
        removed = collection.delete_selected()
        console.print(f"[green]Deleted {removed} contacts[/]")


def _run_export(collection: ContactCollection, config: AppConfig):
    """Export to a .vcf file, offering an upgrade when legacy contacts exist."""
    contacts = collection.contacts
    if not contacts:
        console.print(f"[yellow]{config.messages.empty_list}[/]")
        return

    version = config.default_version
    if has_legacy_version_contacts(contacts):
        console.print(config.messages.version_upgrade)
        version = Prompt.ask("Version", choices=[LATEST_VERSION, "3.0"], default=LATEST_VERSION)

    directory = Path(Prompt.ask("Output directory", default="."))
    path = export_contacts(contacts, directory.expanduser(), config, version)
    if path is not None:
        console.print(f"[green]Exported {len(contacts):,} contacts to {escape(str(path))}[/]")


def _run_clear(collection: ContactCollection, config: AppConfig):
    if Confirm.ask(config.messages.confirm_clear, default=False):
        collection.clear()
        console.print("[dim]Cleared.[/]")


async def run_step(step: str, collection: ContactCollection, session: MergeSession, config: AppConfig):
    """Run a single menu step."""
    console.rule(f"[bold]{STEPS[step]['name']}")

    if step == "1":
        _run_load(collection, config)
    elif step == "2":
        _run_list(collection, config)
    elif step == "3":
        await _run_auto_merge(session, config, "name")
    elif step == "4":
        await _run_auto_merge(session, config, "phone")
    elif step == "5":
        _run_select(collection, config)
    elif step == "6":
        await _run_merge_selected(session, collection)
    elif step == "7":
        _run_delete(collection, config)
    elif step == "8":
        _run_export(collection, config)
    elif step == "9":
        _run_clear(collection, config)


async def main():
    """Main entry point with interactive menu."""
    config = load_config()
    setup_logging(config)

    collection = ContactCollection()
    collection.on_change(lambda c: log.debug(f"Collection changed: {len(c)} contacts"))

    engine = MergeEngine(collection, config.default_country_code)
    presenter = RichMergePresenter(collection, engine, config, console)
    session = MergeSession(collection, presenter, config, engine=engine)

    # Optional file to load on start
    if len(sys.argv) > 1:
        _load(collection, config, Path(sys.argv[1]).expanduser())

    while True:
        show_menu(collection)

        choice = Prompt.ask(
            "Select step",
            choices=list(STEPS.keys()) + ["q"],
            default="q",
        )

        if choice == "q":
            console.print("[dim]Goodbye![/]")
            break

        await run_step(choice, collection, session, config)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
