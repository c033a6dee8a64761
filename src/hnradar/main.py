import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from .config import Settings, load_config, setup_logging
from .source import FetchFailed, HackerNewsSource
from .tui.reflow import reflow, strip_html

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", help="Path to a YAML config file."),
    debug: bool = typer.Option(False, "--debug", help="Write debug messages to the log file."),
):
    """
    hnradar - Hacker News in the terminal.
    Run without commands to start the interactive TUI.
    """
    try:
        settings = load_config(config)
    except FileNotFoundError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(code=1)

    setup_logging(settings, debug=debug)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        from .tui.app import AppState

        AppState(settings).run()


@app.command()
def top(
    ctx: typer.Context,
    page: int = typer.Option(0, "--page", "-p", min=0, help="Page of top stories, starting at 0."),
):
    """Prints one page of top stories."""
    settings: Settings = ctx.obj
    source = HackerNewsSource(settings)

    try:
        story_page = asyncio.run(source.fetch_story_page(page))
    except FetchFailed as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"[bold]Hacker News[/bold] page {story_page.page_index}")
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Comments", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)

    first = story_page.page_index * settings.page_size
    for i, story in enumerate(story_page.stories, first + 1):
        table.add_row(
            str(i),
            strip_html(story.title),
            str(story.score),
            str(len(story.kids)),
            str(story.id) if story.id else "-",
        )
    console.print(table)


@app.command()
def comments(ctx: typer.Context, story_id: int = typer.Argument(..., help="ID of the story.")):
    """Prints the top-level comments of a story."""
    settings: Settings = ctx.obj
    source = HackerNewsSource(settings)

    async def load():
        story = await source.fetch_story(story_id)
        return story, await source.fetch_comments(story)

    try:
        story, thread = asyncio.run(load())
    except FetchFailed as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    console.print(Text(strip_html(story.title), style="bold"))
    if not thread:
        console.print("[dim]No comments.[/dim]")
        return

    width = console.size.width
    for comment in thread:
        console.print(Rule(comment.by or "?", align="left", style="dim"))
        for line in reflow(comment.text, width):
            console.print(line, markup=False, highlight=False)
