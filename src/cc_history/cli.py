"""CLI for cc-history."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from cc_history import __version__
from cc_history.config import (
    DEFAULT_MAX_CONTENT,
    DEFAULT_MAX_TOTAL,
    DEFAULT_TYPES,
    Config,
    current_project_id,
)
from cc_history.models import ErrorResponse

app = typer.Typer(
    name="cc-history",
    help="Search and navigate Claude Code conversation history without an index.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"cc-history {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def split_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def finish(response, json_output: bool, render) -> None:
    """Print a response, or its error and exit 1."""
    from cc_history.display import print_error, print_json

    if isinstance(response, ErrorResponse):
        print_error(response, json_output)
        raise typer.Exit(1)
    if json_output:
        print_json(response)
    else:
        render(response)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Enable debug logging")] = False,
) -> None:
    """Search Claude Code conversation history."""
    setup_logging(verbose)


@app.command()
def search(
    pattern: Annotated[
        str, typer.Argument(help="Search pattern: 'a b' AND, 'a|b' OR, '!a' NOT (empty for all)")
    ] = "",
    project: Annotated[
        list[str] | None, typer.Option("--project", "-p", help="Project ID (can repeat)")
    ] = None,
    all_projects: Annotated[bool, typer.Option("--all", "-a", help="Search all projects")] = False,
    session: Annotated[
        list[str] | None,
        typer.Option("--session", help="Session ID or 8-char prefix (can repeat)"),
    ] = None,
    since: Annotated[
        str | None,
        typer.Option("--since", "-s", help="Start time (today, week, month, 7d, 2024-01-01)"),
    ] = None,
    until: Annotated[str | None, typer.Option("--until", "-u", help="End time")] = None,
    types: Annotated[
        str, typer.Option("--types", "-t", help="Message types (comma separated)")
    ] = ",".join(DEFAULT_TYPES),
    lines: Annotated[
        str | None, typer.Option("--lines", "-l", help="Line ranges, e.g. 1-100,200-,!150-160")
    ] = None,
    regex: Annotated[bool, typer.Option("--regex", "-r", help="Treat pattern as a regex")] = False,
    case_sensitive: Annotated[
        bool, typer.Option("--case-sensitive", "-c", help="Case sensitive matching")
    ] = False,
    offset: Annotated[int, typer.Option("--offset", help="Skip first N results", min=0)] = 0,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Max results", min=0)
    ] = None,
    max_content: Annotated[
        int, typer.Option("--max-content", help="Max chars per result", min=0)
    ] = DEFAULT_MAX_CONTENT,
    max_total: Annotated[
        int, typer.Option("--max-total", help="Max total chars", min=0)
    ] = DEFAULT_MAX_TOTAL,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Search messages across sessions."""
    from cc_history.searcher import format_human_output
    from cc_history.searcher import search as run_search

    config = Config.from_env()
    current = current_project_id(config)
    # Without a project to default to, search everything
    if not project and not all_projects and current is None:
        all_projects = True

    response = run_search(
        config,
        pattern=pattern,
        projects=project,
        all_projects=all_projects,
        current_project=current,
        sessions=session,
        since=since,
        until=until,
        types=split_csv(types),
        lines=lines,
        use_regex=regex,
        case_sensitive=case_sensitive,
        offset=offset,
        limit=limit,
        max_content=max_content,
        max_total=max_total,
    )
    finish(response, json_output, lambda r: format_human_output(r, pattern, regex, case_sensitive))


@app.command()
def get(
    ref: Annotated[str, typer.Argument(help="Message ref (session_prefix:line)")],
    char_range: Annotated[
        str | None, typer.Option("--range", help="Character range to read, e.g. 0-100000")
    ] = None,
    project: Annotated[str | None, typer.Option("--project", "-p", help="Project ID")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the full content of one message."""
    from cc_history.display import display_message
    from cc_history.getter import get_message, parse_char_range

    config = Config.from_env()
    response = get_message(
        config,
        ref,
        char_range=parse_char_range(char_range),
        project=project,
        current_project=current_project_id(config),
    )
    finish(response, json_output, display_message)


@app.command()
def context(
    ref: Annotated[str, typer.Argument(help="Anchor ref (session_prefix:line)")],
    before: Annotated[
        int | None, typer.Option("--before", "-B", help="Messages before the anchor", min=0)
    ] = None,
    after: Annotated[
        int | None, typer.Option("--after", "-A", help="Messages after the anchor", min=0)
    ] = None,
    until_type: Annotated[
        str | None, typer.Option("--until-type", help="Expand until this message type")
    ] = None,
    direction: Annotated[
        str, typer.Option("--direction", "-d", help="Direction for --until-type (forward/backward)")
    ] = "forward",
    types: Annotated[
        str | None, typer.Option("--types", "-t", help="Only these message types (comma separated)")
    ] = None,
    project: Annotated[str | None, typer.Option("--project", "-p", help="Project ID")] = None,
    max_content: Annotated[
        int, typer.Option("--max-content", help="Max chars per message", min=0)
    ] = DEFAULT_MAX_CONTENT,
    max_total: Annotated[
        int, typer.Option("--max-total", help="Max total chars", min=0)
    ] = DEFAULT_MAX_TOTAL,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the messages around a ref."""
    from cc_history.context import get_context
    from cc_history.display import display_context

    config = Config.from_env()
    response = get_context(
        config,
        ref,
        before=before,
        after=after,
        until_type=until_type,
        direction=direction,
        types=split_csv(types),
        project=project,
        current_project=current_project_id(config),
        max_content=max_content,
        max_total=max_total,
    )
    finish(response, json_output, display_context)


@app.command()
def projects(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List all projects with conversation history."""
    from cc_history.display import display_projects
    from cc_history.listing import list_projects

    finish(list_projects(Config.from_env()), json_output, display_projects)


@app.command()
def sessions(
    project: Annotated[
        str | None, typer.Option("--project", "-p", help="Project ID (default: current)")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List sessions in a project."""
    from cc_history.display import display_sessions
    from cc_history.listing import list_sessions

    config = Config.from_env()
    response = list_sessions(config, project=project, current_project=current_project_id(config))
    finish(response, json_output, display_sessions)


if __name__ == "__main__":
    app()
