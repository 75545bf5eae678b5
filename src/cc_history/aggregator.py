"""Merging per-file scans into one paginated, size-bounded page of results."""

from cc_history.config import DEFAULT_MAX_CONTENT, DEFAULT_MAX_TOTAL
from cc_history.content import truncate_content
from cc_history.models import SearchResponse, SearchResult, SearchStats
from cc_history.scanner import FileScan


def aggregate(
    scans: list[FileScan],
    offset: int = 0,
    limit: int | None = None,
    max_content: int = DEFAULT_MAX_CONTENT,
    max_total: int = DEFAULT_MAX_TOTAL,
) -> SearchResponse:
    """Combine file scans, sort by time, paginate and apply character budgets.

    Each result is truncated to `max_content` characters. Results stop as soon
    as the next one would push the running total past `max_total`, but the
    first result on a page is always returned.
    """
    lines_scanned = sum(scan.lines_scanned for scan in scans)
    all_results = [result for scan in scans for result in scan.results]
    total_matches = len(all_results)

    # ISO-8601 strings sort chronologically as plain text
    all_results.sort(key=lambda r: r.timestamp)

    page = all_results[offset:]
    if limit is not None:
        page = page[:limit]

    results: list[SearchResult] = []
    total_chars = 0
    budget_limited = False
    for result in page:
        content, truncated = truncate_content(result.content, max_content)
        if results and total_chars + len(content) > max_total:
            budget_limited = True
            break

        result.content = content
        result.truncated = result.truncated or truncated
        total_chars += len(content)
        results.append(result)

    returned_count = len(results)
    remaining = max(total_matches - offset, 0)

    return SearchResponse(
        stats=SearchStats(
            files_scanned=len(scans),
            lines_scanned=lines_scanned,
            total_matches=total_matches,
            returned_count=returned_count,
        ),
        results=results,
        has_more=returned_count < remaining,
        next_offset=offset + returned_count,
        budget_limited=budget_limited,
    )
