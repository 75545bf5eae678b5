"""Rich rendering of responses for the CLI."""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cc_history.models import (
    ContextResponse,
    ErrorResponse,
    GetResponse,
    ProjectsResponse,
    SessionsResponse,
    TooLargeResponse,
)

console = Console()
err_console = Console(stderr=True)


def print_json(response: Any) -> None:
    """Print any response as JSON."""
    console.print_json(data=response.to_dict())


def print_error(error: ErrorResponse, json_output: bool = False) -> None:
    if json_output:
        err_console.print_json(data=error.to_dict())
        return

    err_console.print(f"[red]Error ({error.error}): {error.message}[/red]")
    if error.available:
        err_console.print("[yellow]Available projects:[/yellow]")
        for project in error.available:
            err_console.print(f"  [cyan]{project['id']}[/cyan]")


def display_context(response: ContextResponse) -> None:
    for message in response.messages:
        style = "bold cyan" if message.is_anchor else "cyan"
        title = Text(message.ref, style=style)
        title.append(f" | {message.type}", style="green")
        if message.is_anchor:
            title.append(" | anchor", style="bold yellow")
        console.print(Panel(Text(message.content), title=title, title_align="left"))

    if response.truncated:
        console.print("[dim]Context cut short by --max-total[/dim]")


def display_message(response: GetResponse | TooLargeResponse) -> None:
    if isinstance(response, TooLargeResponse):
        console.print(f"[yellow]Content too large ({response.size} chars)[/yellow]")
        console.print(response.suggestion)
        return

    title = Text(response.ref, style="bold cyan")
    title.append(f" | {response.type}", style="green")
    title.append(f" | {response.content_size} chars", style="dim")
    if response.image_count:
        title.append(f" | {response.image_count} images", style="dim")
    console.print(Panel(Text(response.content), title=title, title_align="left"))


def display_projects(response: ProjectsResponse) -> None:
    if not response.projects:
        console.print("[yellow]No projects found.[/yellow]")
        return

    for project in response.projects:
        console.print(
            f"[cyan]{project.id}[/cyan] ({project.session_count} sessions)"
            f" [dim]{project.last_activity}[/dim]"
        )


def display_sessions(response: SessionsResponse) -> None:
    if not response.sessions:
        console.print(f"[yellow]No sessions in {response.project}.[/yellow]")
        return

    table = Table(title=response.project)
    table.add_column("Ref prefix", style="cyan")
    table.add_column("Session")
    table.add_column("Lines", justify="right")
    table.add_column("Start", style="dim")
    table.add_column("End", style="dim")
    for session in response.sessions:
        table.add_row(
            session.ref_prefix,
            session.id,
            str(session.line_count),
            session.start_time,
            session.end_time,
        )
    console.print(table)
