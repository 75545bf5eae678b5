"""Per-file transcript scanning, fanned out across a thread pool."""

import json
import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from cc_history.config import DEFAULT_TYPES, default_max_workers
from cc_history.content import extract_images, render_content
from cc_history.discovery import ref_prefix
from cc_history.models import MessageRecord, Range, SearchResult, SessionFile
from cc_history.query import Matcher, match_all
from cc_history.ranges import line_in_ranges
from cc_history.timerange import time_in_range

log = logging.getLogger(__name__)


def iter_lines(path: Path) -> Iterator[tuple[int, bytes]]:
    """Yield (1-based line number, raw line). Raises OSError if unreadable."""
    # Binary mode splits on \n only, so line numbers match the file
    with open(path, "rb") as f:
        yield from enumerate(f, 1)


def decode_line(raw: bytes) -> MessageRecord | None:
    """Decode one JSONL line; None for blank, partial or non-message lines."""
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return MessageRecord.from_dict(data)


@dataclass(frozen=True)
class ScanQuery:
    """Read-only parameters shared by every file scan of one search."""

    matcher: Matcher = match_all
    types: frozenset[str] = frozenset(DEFAULT_TYPES)
    ranges: tuple[Range, ...] = ()
    since: datetime | None = None
    until: datetime | None = None


@dataclass
class FileScan:
    """Output of scanning one file."""

    lines_scanned: int = 0
    results: list[SearchResult] = field(default_factory=list)


def scan_file(session_file: SessionFile, query: ScanQuery) -> FileScan:
    """Scan one transcript for matching messages.

    Content is returned untruncated; budgets are applied during aggregation.
    An unreadable file contributes nothing.
    """
    scan = FileScan()
    prefix = ref_prefix(session_file.session_id)
    ranges = list(query.ranges)

    try:
        for line_num, raw in iter_lines(session_file.path):
            scan.lines_scanned += 1

            if not line_in_ranges(line_num, ranges):
                continue

            record = decode_line(raw)
            if record is None:
                log.debug("Skipping undecodable line %s:%d", session_file.path, line_num)
                continue

            if record.type not in query.types:
                continue

            if not time_in_range(record.timestamp, query.since, query.until):
                continue

            content = render_content(record)
            if not query.matcher(content):
                continue

            scan.results.append(
                SearchResult(
                    ref=f"{prefix}:{line_num}",
                    session=session_file.session_id,
                    line=line_num,
                    uuid=record.uuid,
                    type=record.type,
                    timestamp=record.timestamp,
                    content=content,
                    content_size=len(content),
                    project=session_file.project_id,
                    images=extract_images(record),
                )
            )
    except OSError as e:
        log.warning("Could not read %s: %s", session_file.path, e)
        return FileScan()

    return scan


def scan_files(
    files: list[SessionFile], query: ScanQuery, max_workers: int | None = None
) -> list[FileScan]:
    """Scan every file concurrently and return the scans in file order."""
    if not files:
        return []

    workers = min(max_workers or default_max_workers(), len(files))
    log.debug("Scanning %d files with %d workers", len(files), workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda f: scan_file(f, query), files))
