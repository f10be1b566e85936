"""Command line interface for poking at the recognition engine."""

import json
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from inkline.config import load_engine_config
from inkline.domain.types import CommandCategory, TriggerType
from inkline.engine import InklineEngine
from inkline.logger import get_logger, setup_logger

load_dotenv()

console = Console()

cli = typer.Typer(
    name="inkline",
    help="Command and pattern recognition for free-form node editors",
    epilog="""
    Examples:
    $ inkline extract "Ship release @friday #high [launch] +alice"
    $ inkline complete "Call Bob @tod"
    $ inkline switch "Buy milk $task"
    """,
    add_completion=False,
)


@cli.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    config: Optional[str] = typer.Option(None, "--config", help="JSON file with engine settings"),
):
    """Configure logging and build the engine shared by every subcommand."""
    if debug:
        setup_logger(log_level="DEBUG")
    logger = get_logger("main")
    engine_config = load_engine_config(config)
    logger.debug(f"CLI using config {engine_config.model_dump()}")
    ctx.obj = InklineEngine(config=engine_config)


def _engine(ctx: typer.Context) -> InklineEngine:
    return ctx.obj


@cli.command()
def extract(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text containing embedded patterns"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Extract @date, #priority, [tag], +assignee and color: markers."""
    result = _engine(ctx).extract(text)
    if as_json:
        payload = {
            "clean_text": result.clean_text,
            "patterns": [
                {
                    "type": p.type.value,
                    "raw_value": p.raw_value,
                    "display_value": p.display_value,
                    "start": p.start_offset,
                    "end": p.end_offset,
                }
                for p in result.patterns
            ],
            "metadata": result.metadata,
        }
        console.print_json(json.dumps(payload, ensure_ascii=False))
        return

    table = Table(title="Embedded patterns")
    table.add_column("Type", style="cyan")
    table.add_column("Raw")
    table.add_column("Display", style="green")
    table.add_column("Span", justify="right")
    for p in result.patterns:
        table.add_row(p.type.value, escape(p.raw), escape(p.display_value), f"{p.start_offset}-{p.end_offset}")
    console.print(table)
    console.print(f"[bold]Clean text:[/bold] {escape(repr(result.clean_text))}")


@cli.command()
def trigger(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Editor text"),
    cursor: Optional[int] = typer.Option(None, "--cursor", help="Cursor offset"),
):
    """Show which $type or /command trigger governs the text."""
    result = _engine(ctx).detect_trigger(text, cursor)
    if not result.has_trigger:
        console.print("[yellow]No trigger found[/yellow]")
        raise typer.Exit(code=1)
    console.print(
        f"[bold]{escape(result.full_trigger)}[/bold] ({result.trigger_type.value}) at offset {result.trigger_start_offset}"
    )
    for command in result.matches:
        console.print(f"  {command.trigger:<14} {escape(command.label)}")


@cli.command()
def complete(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Editor text"),
    cursor: Optional[int] = typer.Option(None, "--cursor", help="Cursor offset, defaults to the end"),
):
    """List completions for the pattern or command being typed."""
    position = len(text) if cursor is None else cursor
    result = _engine(ctx).suggest(text, position)
    if result is None:
        console.print("[yellow]No completions[/yellow]")
        raise typer.Exit(code=1)

    kind = result.pattern_type.value if result.pattern_type else "command"
    table = Table(title=escape(f"{kind} completions for {result.query!r} [{result.start}, {result.end})"))
    table.add_column("Label", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Category")
    table.add_column("Description")
    for item in result.items:
        table.add_row(escape(item.label), escape(item.value), item.category, escape(item.description))
    console.print(table)


@cli.command()
def switch(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Editor text containing a $type trigger"),
    cursor: Optional[int] = typer.Option(None, "--cursor", help="Cursor offset"),
):
    """Apply a $type node switch and print the cleaned text."""
    result = _engine(ctx).process_switch(text, cursor)
    if not result.success:
        console.print(f"[red]{escape(result.message or '')}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[bold]Node type:[/bold] {result.node_type}")
    console.print(f"[bold]Text:[/bold] {escape(repr(result.replacement_text))} (cursor {result.cursor_position})")


@cli.command()
def commands(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Search text"),
    category: Optional[CommandCategory] = typer.Option(None, "--category", help="Filter by category"),
    trigger_type: Optional[TriggerType] = typer.Option(None, "--trigger-type", help="Filter by trigger type"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum results"),
):
    """Search the registered commands."""
    found = _engine(ctx).registry.search(query=query, category=category, trigger_type=trigger_type, limit=limit)
    table = Table(title=f"{len(found)} command(s)")
    table.add_column("Trigger", style="cyan")
    table.add_column("Label")
    table.add_column("Category")
    table.add_column("Priority", justify="right")
    table.add_column("Description")
    for command in found:
        table.add_row(command.trigger, escape(command.label), command.category.value, str(command.priority), escape(command.description))
    console.print(table)


if __name__ == "__main__":
    cli()
