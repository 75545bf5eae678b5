"""Context windows: the messages surrounding an anchor ref."""

import logging
from dataclasses import dataclass
from pathlib import Path

from cc_history.config import DEFAULT_MAX_CONTENT, DEFAULT_MAX_TOTAL, Config
from cc_history.content import render_content, truncate_content
from cc_history.discovery import ref_prefix
from cc_history.errors import (
    HistoryError,
    HistoryIOError,
    InvalidArgumentError,
    RefNotFoundError,
)
from cc_history.models import ContextMessage, ContextResponse, ErrorResponse, MessageRecord
from cc_history.refs import find_session, parse_ref
from cc_history.scanner import decode_line, iter_lines

log = logging.getLogger(__name__)

DIRECTIONS = ("forward", "backward")


@dataclass
class SessionEntry:
    line: int
    record: MessageRecord
    content: str


def load_session(path: Path) -> list[SessionEntry]:
    """Decode a whole session in line order, skipping undecodable lines."""
    entries: list[SessionEntry] = []
    try:
        for line_num, raw in iter_lines(path):
            record = decode_line(raw)
            if record is None:
                continue
            entries.append(SessionEntry(line=line_num, record=record, content=render_content(record)))
    except OSError as e:
        raise HistoryIOError(f"Cannot read {path}: {e}") from e
    return entries


def matches_types(msg_type: str, types: list[str] | None) -> bool:
    """An empty or missing allow-list accepts every type."""
    return not types or msg_type in types


def boundary_window(
    entries: list[SessionEntry], anchor: int, until_type: str, direction: str
) -> tuple[int, int]:
    """Window from the anchor up to the nearest message of `until_type`.

    Returns inclusive (start, end) indexes. If no such message exists the
    window is just the anchor.
    """
    if direction == "backward":
        for i in range(anchor - 1, -1, -1):
            if entries[i].record.type == until_type:
                return i, anchor
        return anchor, anchor

    for i in range(anchor + 1, len(entries)):
        if entries[i].record.type == until_type:
            return anchor, i
    return anchor, anchor


def counted_window(
    entries: list[SessionEntry],
    anchor: int,
    before: int,
    after: int,
    types: list[str] | None,
) -> tuple[int, int]:
    """Window covering `before`/`after` messages of the allowed types.

    Messages of other types are skipped over without counting. Returns
    inclusive (start, end) indexes.
    """
    start = anchor
    count = 0
    if before > 0:
        for i in range(anchor - 1, -1, -1):
            if matches_types(entries[i].record.type, types):
                count += 1
                start = i
                if count >= before:
                    break

    end = anchor
    count = 0
    if after > 0:
        for i in range(anchor + 1, len(entries)):
            if matches_types(entries[i].record.type, types):
                count += 1
                end = i
                if count >= after:
                    break

    return start, end


def build_window(
    entries: list[SessionEntry],
    anchor: int,
    start: int,
    end: int,
    prefix: str,
    types: list[str] | None,
    max_content: int,
    max_total: int,
) -> tuple[list[ContextMessage], bool]:
    """Emit the window's messages; returns (messages, stopped_by_budget).

    The anchor is always included even if its type is filtered out.
    """
    messages: list[ContextMessage] = []
    total_chars = 0
    for i in range(start, end + 1):
        entry = entries[i]
        is_anchor = i == anchor
        if not is_anchor and not matches_types(entry.record.type, types):
            continue

        content, _ = truncate_content(entry.content, max_content)
        if total_chars + len(content) > max_total:
            return messages, True
        total_chars += len(content)

        messages.append(
            ContextMessage(
                ref=f"{prefix}:{entry.line}",
                type=entry.record.type,
                content=content,
                is_anchor=is_anchor,
            )
        )
    return messages, False


def get_context(
    config: Config,
    ref: str,
    before: int | None = None,
    after: int | None = None,
    until_type: str | None = None,
    direction: str = "forward",
    types: list[str] | None = None,
    project: str | None = None,
    current_project: str | None = None,
    max_content: int = DEFAULT_MAX_CONTENT,
    max_total: int = DEFAULT_MAX_TOTAL,
) -> ContextResponse | ErrorResponse:
    """Messages around `ref`, by count or up to a boundary message type."""
    try:
        if direction not in DIRECTIONS:
            raise InvalidArgumentError(f"Invalid direction: {direction!r}, expected forward or backward")

        parsed = parse_ref(ref)
        session_file = find_session(config, parsed.prefix, project, current_project)
        entries = load_session(session_file.path)

        anchor = next((i for i, e in enumerate(entries) if e.line == parsed.line), None)
        if anchor is None:
            raise RefNotFoundError(f"Ref not found: {ref}")

        if until_type:
            start, end = boundary_window(entries, anchor, until_type, direction)
        else:
            start, end = counted_window(entries, anchor, before or 0, after or 0, types)
        log.debug("Context window for %s: lines %d-%d", ref, entries[start].line, entries[end].line)

        messages, truncated = build_window(
            entries,
            anchor,
            start,
            end,
            ref_prefix(session_file.session_id),
            types,
            max_content,
            max_total,
        )
    except HistoryError as e:
        return e.to_response()

    return ContextResponse(anchor_ref=ref, messages=messages, truncated=truncated)
