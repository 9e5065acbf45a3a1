"""
CLI Entry Point for Shadow Nexus.

Provides commands for:
- Looking up, searching and comparing officers from the terminal
- Running the Discord bot and registering its slash commands
- Serving the officer data over MCP
"""

import asyncio
import json
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import ConfigError, Settings
from .formatting import (
    EmbedPayload,
    build_comparison_embed,
    build_officer_embed,
    build_search_embed,
    no_search_results_message,
    not_found_message,
    partial_failure_message,
)
from .models import PartialFailure
from .retrieval import RetrievalService
from .search import SEARCH_DISPLAY_LIMIT

# Setup rich console; logging goes to stderr so stdout stays clean for --json and MCP
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="shadow-nexus",
    help="Star Trek Fleet Command officer intelligence",
    add_completion=False,
)


def log_handler() -> RichHandler:
    return RichHandler(console=err_console, rich_tracebacks=True)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[log_handler()],
    )


@app.callback()
def cli() -> None:
    """Load .env and configure logging before any command runs."""
    load_dotenv()
    setup_logging(Settings.from_env().log_level)


def create_retrieval(settings: Settings | None = None) -> RetrievalService:
    """Create and initialize the retrieval service."""
    settings = settings or Settings.from_env()
    retrieval = RetrievalService(data_path=settings.data_path)
    with console.status("Loading officer data..."):
        retrieval.initialize()
    if retrieval.load_diagnostic:
        console.print(f"[yellow]Warning: {escape(retrieval.load_diagnostic)}[/]")
    return retrieval


def render_embed(payload: EmbedPayload) -> None:
    """Print an embed payload as a rich panel. Officer text is escaped, never read as markup."""
    body = []
    if payload.description:
        body.append(escape(payload.description))

    inline = [f for f in payload.fields if f.inline]
    for field in payload.fields:
        if not field.inline:
            body.append(f"[bold]{escape(field.name)}[/]\n{escape(field.value)}")

    console.print(Panel("\n\n".join(body) or "", title=f"[bold]{escape(payload.title)}[/]"))

    if inline:
        table = Table(show_header=True)
        for field in inline:
            table.add_column(escape(field.name), style="cyan")
        table.add_row(*(escape(field.value.replace("**", "")) for field in inline))
        console.print(table)

    if payload.thumbnail_url:
        console.print(f"[dim]Portrait: {escape(payload.thumbnail_url)}[/]")
    if payload.footer:
        console.print(f"[dim]{escape(payload.footer)}[/]")


# =============================================================================
# COMMANDS
# =============================================================================


@app.command()
def info(
    name: str = typer.Argument(..., help="Officer name or fragment"),
    output_json: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """Get detailed info about an officer."""
    settings = Settings.from_env()
    retrieval = create_retrieval(settings)

    officer = retrieval.resolve(name)
    if officer is None:
        console.print(f"[yellow]{escape(not_found_message(name))}[/]")
        raise typer.Exit(1)

    if output_json:
        typer.echo(json.dumps(officer.model_dump(mode="json"), indent=2))
        return

    render_embed(build_officer_embed(officer, settings.portrait_base_url))


@app.command()
def search(
    query: str = typer.Argument(..., help="Search term"),
    limit: int = typer.Option(SEARCH_DISPLAY_LIMIT, "--limit", "-n", help="Max results shown"),
    output_json: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """Search officers by name, trait, rarity, or ability."""
    retrieval = create_retrieval()
    result = retrieval.search_page(query, limit=limit)

    if output_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    if result.total == 0:
        console.print(f"[yellow]{escape(no_search_results_message(query))}[/]")
        return

    render_embed(build_search_embed(result))


@app.command()
def compare(
    first: str = typer.Argument(..., help="First officer"),
    second: str = typer.Argument(..., help="Second officer"),
    output_json: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """Compare two officers side-by-side."""
    retrieval = create_retrieval()
    outcome = retrieval.resolve_pair(first, second)

    if isinstance(outcome, PartialFailure):
        console.print(f"[yellow]{escape(partial_failure_message(outcome))}[/]")
        raise typer.Exit(1)

    if output_json:
        typer.echo(json.dumps(outcome.model_dump(mode="json"), indent=2))
        return

    render_embed(build_comparison_embed(outcome))


@app.command()
def list_officers():
    """List all loaded officers."""
    retrieval = create_retrieval()
    officers = retrieval.index.all()

    if not officers:
        console.print("[yellow]No officers loaded.[/]")
        return

    table = Table(title=f"Officers ({len(officers)})")
    table.add_column("Name", style="green")
    table.add_column("Rarity", style="cyan")
    table.add_column("Group")
    for officer in officers:
        table.add_row(
            escape(officer.name),
            escape(officer.rarity or "Unknown"),
            escape(officer.group or "Unknown"),
        )
    console.print(table)


@app.command()
def stats():
    """Show snapshot statistics."""
    settings = Settings.from_env()
    retrieval = create_retrieval(settings)

    table = Table(title="Officer Snapshot")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Data path", escape(str(settings.data_path)))
    for key, value in retrieval.stats().items():
        table.add_row(key.title(), escape(str(value)))
    console.print(table)


@app.command()
def bot():
    """Run the Discord bot."""
    from .bot import run_bot

    settings = Settings.from_env()
    retrieval = create_retrieval(settings)
    try:
        run_bot(retrieval, settings)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)


@app.command("sync-commands")
def sync_commands():
    """Register the /officer slash commands with Discord."""
    from .bot import sync_commands as register

    settings = Settings.from_env()
    retrieval = create_retrieval(settings)
    try:
        count = asyncio.run(register(retrieval, settings))
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)

    scope = f"guild {settings.discord_guild_id}" if settings.discord_guild_id else "global"
    console.print(f"[green]Registered {count} application commands ({scope}).[/]")


@app.command("mcp-serve")
def mcp_serve():
    """
    Start the MCP server for Cursor/Claude integration.

    Configure Cursor by adding to ~/.cursor/mcp.json:

    {
      "mcpServers": {
        "shadow-nexus": {
          "command": "shadow-nexus",
          "args": ["mcp-serve"]
        }
      }
    }
    """
    from .mcp_server import run_mcp_server
    run_mcp_server()


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
