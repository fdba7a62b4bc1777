"""CLI entry point for Commit Fables."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import EngineConfig, load_config
from .errors import CommitFablesError
from .narrative.story import Story, assemble_story
from .output.report import export_json, export_markdown, write_export
from .settings import StoryLength, StorySettings, StoryStyle, StoryTone
from .stats import RepositoryMetadata

console = Console()


def configure_logging(verbose: bool) -> None:
    """Send loguru output to stderr; DEBUG with --verbose, WARNING otherwise."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def load_input(path: Path) -> tuple[list[Any], dict[str, Any] | None]:
    """Read raw commit records and optional repository metadata from JSON.

    Accepts either a bare array of records or an object with a
    ``commits`` array and an optional ``repository`` object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        return data, None
    if isinstance(data, dict) and isinstance(data.get("commits"), list):
        repository = data.get("repository")
        return data["commits"], repository if isinstance(repository, dict) else None

    raise click.BadParameter(
        "expected a JSON array of commits or an object with a 'commits' array",
        param_hint="INPUT",
    )


def print_story(story: Story) -> None:
    """Print a story and its stats to the console."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]{story.title}[/bold cyan]\n[dim]{story.description}[/dim]",
            border_style="cyan",
        )
    )
    console.print()

    for block in story.content:
        console.print(block, highlight=False)
        console.print()

    # Stats table
    table = Table(title="Stats", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    stats = story.stats
    table.add_row("Commits", f"{stats.total_commits:,}")
    table.add_row("Patterns", f"{len(story.patterns):,}")
    table.add_row("Achievements", f"{len(story.achievements):,}")
    table.add_row("Lines", f"+{stats.total_additions:,} / -{stats.total_deletions:,}")
    table.add_row("Active days", f"{stats.active_days}")
    table.add_row("Longest streak", f"{stats.longest_streak_days} days")
    for language in stats.top_languages:
        table.add_row(language.name, f"{language.percentage:.1f}%")

    console.print(table)
    console.print(
        f"Persona: [bold green]{story.persona.emoji} {story.persona.display_name}[/bold green] "
        f"({story.persona.confidence * 100:.0f}% confidence)"
    )

    if story.diagnostics:
        console.print(f"[yellow]Skipped {len(story.diagnostics)} malformed records[/yellow]")
    console.print()


@click.group()
def main():
    """Commit Fables: your commit history, told as a story."""
    pass


@main.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--style",
    "-s",
    type=click.Choice([s.value for s in StoryStyle]),
    default=StoryStyle.NARRATIVE.value,
    help="Narrative style",
)
@click.option(
    "--tone",
    type=click.Choice([t.value for t in StoryTone]),
    default=StoryTone.PROFESSIONAL.value,
    help="Tone of the sign-off",
)
@click.option(
    "--length",
    type=click.Choice([n.value for n in StoryLength]),
    default=StoryLength.STANDARD.value,
    help="How much detail each block carries",
)
@click.option("--no-time-context", is_flag=True, help="Leave out time-of-day remarks")
@click.option("--no-language-context", is_flag=True, help="Leave out language remarks")
@click.option("--no-line-changes", is_flag=True, help="Leave out line counts")
@click.option("--repo-name", help="Repository name used in the title")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Engine config JSON")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write an export file")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "markdown"]),
    default="json",
    help="Export format for --output",
)
@click.option("--verbose", "-v", is_flag=True, help="Show verbose output")
def generate(
    input_path: Path,
    style: str,
    tone: str,
    length: str,
    no_time_context: bool,
    no_language_context: bool,
    no_line_changes: bool,
    repo_name: str | None,
    config_path: Path | None,
    output: Path | None,
    fmt: str,
    verbose: bool,
):
    """Generate a story from a JSON file of commits."""
    configure_logging(verbose)

    try:
        records, repository = load_input(input_path)
        config = load_config(config_path) if config_path else EngineConfig()

        if repo_name:
            repository = {**(repository or {}), "name": repo_name}

        settings = StorySettings(
            style=StoryStyle(style),
            include_time_context=not no_time_context,
            include_language_context=not no_language_context,
            include_line_changes=not no_line_changes,
            tone=StoryTone(tone),
            length=StoryLength(length),
        )
        story = assemble_story(
            records,
            settings,
            RepositoryMetadata.from_dict(repository) if repository else None,
            config=config,
        )
    except json.JSONDecodeError as e:
        console.print(f"[red]Input is not valid JSON: {e}[/red]")
        sys.exit(1)
    except CommitFablesError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    print_story(story)

    if output:
        path = write_export(story, output, fmt)
        console.print(f"[dim]Story saved to: {path}[/dim]")


@main.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Engine config JSON")
@click.option("--verbose", "-v", is_flag=True, help="Show verbose output")
def persona(input_path: Path, config_path: Path | None, verbose: bool):
    """Show the persona and patterns detected in a JSON file of commits."""
    configure_logging(verbose)

    try:
        records, _ = load_input(input_path)
        config = load_config(config_path) if config_path else EngineConfig()
        story = assemble_story(records, StorySettings(style=StoryStyle.TECHNICAL), config=config)
    except json.JSONDecodeError as e:
        console.print(f"[red]Input is not valid JSON: {e}[/red]")
        sys.exit(1)
    except CommitFablesError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    p = story.persona
    console.print(
        f"\n[bold]{p.emoji} {p.display_name}[/bold] "
        f"({p.confidence * 100:.0f}% confidence)"
    )
    if p.traits:
        console.print(f"  Traits: {', '.join(t.value for t in p.traits)}")
    console.print()

    table = Table(title="Patterns", show_header=True, header_style="bold magenta")
    table.add_column("Pattern", style="cyan")
    table.add_column("Type")
    table.add_column("Commits", justify="right")
    table.add_column("Significance", justify="right")
    table.add_column("Summary")

    achieved = {a.source_pattern_id for a in story.achievements}
    for pattern in story.patterns:
        marker = " 🏆" if pattern.id in achieved else ""
        table.add_row(
            f"{pattern.id}{marker}",
            pattern.type.value,
            f"{pattern.size}",
            f"{pattern.significance:.2f}",
            pattern.description,
        )

    console.print(table)


@main.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--style", "-s", type=click.Choice([s.value for s in StoryStyle]), default=StoryStyle.NARRATIVE.value)
@click.option("--format", "fmt", type=click.Choice(["json", "markdown"]), default="markdown")
def export(input_path: Path, style: str, fmt: str):
    """Print a story export to stdout."""
    configure_logging(False)

    try:
        records, repository = load_input(input_path)
        story = assemble_story(records, {"style": style}, repository)
    except json.JSONDecodeError as e:
        console.print(f"[red]Input is not valid JSON: {e}[/red]")
        sys.exit(1)
    except CommitFablesError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if fmt == "markdown":
        click.echo(export_markdown(story))
    else:
        click.echo(json.dumps(export_json(story), indent=2))


if __name__ == "__main__":
    main()
