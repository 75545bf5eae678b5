"""Search across session transcripts: scan, aggregate and display."""

import re
import time

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cc_history.aggregator import aggregate
from cc_history.config import DEFAULT_MAX_CONTENT, DEFAULT_MAX_TOTAL, DEFAULT_TYPES, Config
from cc_history.discovery import collect_search_files, resolve_search_scope
from cc_history.errors import HistoryError
from cc_history.models import ErrorResponse, SearchResponse
from cc_history.query import compile_query, parse_search_pattern
from cc_history.ranges import parse_ranges
from cc_history.scanner import ScanQuery, scan_files
from cc_history.timerange import parse_bound

console = Console()


def search(
    config: Config,
    pattern: str = "",
    projects: list[str] | None = None,
    all_projects: bool = False,
    current_project: str | None = None,
    sessions: list[str] | None = None,
    since: str | None = None,
    until: str | None = None,
    types: list[str] | None = None,
    lines: str | None = None,
    use_regex: bool = False,
    case_sensitive: bool = False,
    offset: int = 0,
    limit: int | None = None,
    max_content: int = DEFAULT_MAX_CONTENT,
    max_total: int = DEFAULT_MAX_TOTAL,
) -> SearchResponse | ErrorResponse:
    """Search messages in every transcript in scope.

    Results are sorted oldest first and paginated with offset/limit.
    """
    start_time = time.time()

    try:
        query = ScanQuery(
            matcher=compile_query(pattern, use_regex, case_sensitive),
            types=frozenset(types or DEFAULT_TYPES),
            ranges=tuple(parse_ranges(lines)),
            since=parse_bound(since),
            until=parse_bound(until),
        )
        project_dirs = resolve_search_scope(config, projects, all_projects, current_project)
    except HistoryError as e:
        return e.to_response()

    files = collect_search_files(project_dirs, sessions)
    scans = scan_files(files, query, config.max_workers)

    response = aggregate(scans, offset, limit, max_content, max_total)
    response.stats.time_ms = int((time.time() - start_time) * 1000)
    return response


def highlight_matches(
    text: str, pattern: str, use_regex: bool = False, case_sensitive: bool = False
) -> Text:
    """Highlight matched terms in text."""
    rich_text = Text(text)
    if not pattern:
        return rich_text

    flags = 0 if case_sensitive else re.IGNORECASE
    if use_regex:
        rich_text.highlight_regex(re.compile(pattern, flags), style="bold yellow")
        return rich_text

    parsed = parse_search_pattern(pattern, case_sensitive)
    terms = parsed.must_have + [t for group in parsed.any_of for t in group]
    for term in terms:
        rich_text.highlight_regex(re.compile(re.escape(term), flags), style="bold yellow")
    return rich_text


def format_human_output(
    response: SearchResponse, pattern: str, use_regex: bool = False, case_sensitive: bool = False
) -> None:
    """Format results for human-readable output."""
    if not response.results:
        console.print("[yellow]No results found. Try a different query.[/yellow]")
        return

    for result in response.results:
        header = Text()
        header.append(result.ref, style="bold cyan")
        header.append(f" | {result.type}", style="green")
        header.append(f" | {result.project}", style="dim")
        header.append(f" | {result.timestamp}", style="dim")

        text = highlight_matches(result.content, pattern, use_regex, case_sensitive)
        if result.truncated:
            text.append(f"\n[truncated - {result.content_size} chars total]", style="dim")

        panel = Panel(
            text,
            title=header,
            subtitle=f"→ cc-history context {result.ref}",
            subtitle_align="left",
        )
        console.print(panel)

    stats = response.stats
    console.print("─" * 50)
    console.print(
        f"Showing {stats.returned_count} of {stats.total_matches} matches "
        f"({stats.files_scanned} files, {stats.lines_scanned} lines) in {stats.time_ms}ms"
    )
    if response.has_more:
        console.print(f"[dim]More results: --offset {response.next_offset}[/dim]")
