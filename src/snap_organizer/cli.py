"""Command line interface for snap organizer."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.organizer import PlacementPlanner, ProjectOrganizer
from .core.rule_schema import find_config_warnings, validate_config_file
from .core.stats import collect_project_stats
from .exceptions import SnapOrganizerError
from .infrastructure.repositories import InMemoryItemRepository
from .models.config import OrganizerConfig, create_default_config, default_config, load_config
from .models.defaults import DEFAULT_LABEL_COLORS
from .models.result import PlacementPlan

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load(config: Optional[Path]) -> OrganizerConfig:
    return load_config(config) if config else default_config()


def _load_project(project: Path) -> InMemoryItemRepository:
    try:
        return InMemoryItemRepository.load(project)
    except (json.JSONDecodeError, KeyError, ValueError) as e:
        raise SnapOrganizerError(f"Invalid project file {project}: {e}")


def _plan_table(plan: PlacementPlan) -> Table:
    table = Table(title="Placement Plan")
    table.add_column("Item", style="cyan")
    table.add_column("Destination")
    table.add_column("Reason", style="magenta")
    table.add_column("Label", justify="right")

    for placement in plan.placements:
        destination = escape(placement.path_string) if placement.path_string else "[dim]skipped[/dim]"
        label = ""
        if placement.label_color is not None:
            swatch = DEFAULT_LABEL_COLORS.get(placement.label_color, "white")
            label = f"[{swatch}]■[/] {placement.label_color}"
        table.add_row(escape(placement.item_name), destination, placement.reason.value, label)
    return table


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def cli(verbose: bool):
    """Organize project items into numbered folders using configurable rules."""
    _setup_logging(verbose)


@cli.command()
@click.argument('project', type=click.Path(exists=True, path_type=Path))
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    help='Configuration file path'
)
def plan(project: Path, config: Optional[Path]):
    """Show where every item in PROJECT would be placed."""

    try:
        cfg = _load(config)
        repository = _load_project(project)
        placement_plan = ProjectOrganizer(repository, cfg).preview()

        console.print(_plan_table(placement_plan))
        console.print(
            f"\n[green]{len(placement_plan.resolved)} items placed[/green], "
            f"[yellow]{placement_plan.skipped_count} skipped[/yellow]"
        )

    except SnapOrganizerError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.argument('project', type=click.Path(exists=True, path_type=Path))
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    help='Configuration file path'
)
@click.option(
    '--output', '-o',
    type=click.Path(path_type=Path),
    help='Write the organized project to this file'
)
@click.option(
    '--item', 'item_ids',
    multiple=True,
    help='Only organize the item with this id (repeatable)'
)
def organize(project: Path, config: Optional[Path], output: Optional[Path], item_ids: Tuple[str, ...]):
    """Organize the items of PROJECT into the configured folder tree."""

    try:
        cfg = _load(config)
        repository = _load_project(project)
        organizer = ProjectOrganizer(repository, cfg)
        result = organizer.organize(item_ids=list(item_ids) or None)

        if not result.success:
            console.print(f"\n[red]Organize failed: {result.error}[/red]")
            sys.exit(1)

        results_table = Table(title="Results")
        results_table.add_column("Folder", style="cyan")
        results_table.add_column("Moved", justify="right")
        for moved in result.moved_items:
            results_table.add_row(escape(moved.folder_name), str(moved.count))
        console.print(results_table)

        console.print(f"\n[green]Moved {result.moved_count} items[/green]")
        if result.skipped_count:
            console.print(f"[yellow]Skipped {result.skipped_count} items[/yellow]")
        if result.deleted_folders:
            console.print(f"Removed {result.deleted_folders} empty folders")

        if output:
            repository.save(output)
            console.print(f"Organized project written to {output}")

    except SnapOrganizerError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.argument('config', type=click.Path(exists=True, path_type=Path))
def validate(config: Path):
    """Validate an organizer configuration file."""

    errors = validate_config_file(config)
    if errors:
        console.print(f"\n[red]Configuration {config} is invalid:[/red]")
        for error in errors:
            console.print(f"  • {escape(error)}")
        sys.exit(1)

    try:
        cfg = load_config(config)
    except SnapOrganizerError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)

    warnings = find_config_warnings(cfg)
    for warning in warnings:
        console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")

    planner = PlacementPlanner(cfg)
    folders_table = Table(title="Folders")
    folders_table.add_column("Folder", style="cyan")
    folders_table.add_column("Categories")
    for folder in cfg.folders:
        categories = ", ".join(c.type.value for c in folder.categories if c.enabled)
        folders_table.add_row(escape(planner.display_names[folder.id]), categories)
    console.print(folders_table)

    console.print(f"\n[green]✓ Configuration is valid[/green] ({len(warnings)} warnings)")


@cli.command()
@click.option(
    '--output', '-o',
    type=click.Path(path_type=Path),
    default='snap-organizer.json',
    help='Where to write the configuration'
)
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init(output: Path, force: bool):
    """Write the default configuration."""

    if output.exists() and not force:
        console.print(f"[red]{output} already exists, use --force to overwrite[/red]")
        sys.exit(1)

    create_default_config(output)
    console.print(f"[green]Default configuration written to {output}[/green]")


@cli.command()
@click.argument('project', type=click.Path(exists=True, path_type=Path))
def stats(project: Path):
    """Show item statistics for PROJECT."""

    try:
        repository = _load_project(project)
        project_stats = collect_project_stats(repository.list_all_items())
    except SnapOrganizerError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(1)

    table = Table(title="Project Statistics")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Total items", str(project_stats.total_items))
    table.add_row("Compositions", str(project_stats.comps))
    table.add_row("Footage", str(project_stats.footage))
    table.add_row("Images", str(project_stats.images))
    table.add_row("Audio", str(project_stats.audio))
    table.add_row("Sequences", str(project_stats.sequences))
    table.add_row("Solids", str(project_stats.solids))
    table.add_row("Folders", str(project_stats.folders))
    table.add_row("Missing", str(project_stats.missing))
    console.print(table)

    if project_stats.by_extension:
        ext_table = Table(title="By Extension")
        ext_table.add_column("Extension", style="cyan")
        ext_table.add_column("Count", justify="right")
        for ext, count in sorted(project_stats.by_extension.items()):
            ext_table.add_row(ext, str(count))
        console.print(ext_table)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
