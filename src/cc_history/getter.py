"""Full content retrieval for a single ref."""

from pathlib import Path

from cc_history.config import MAX_DIRECT_SIZE, Config
from cc_history.content import extract_images, render_content
from cc_history.errors import HistoryError, HistoryIOError, ParseError, RefNotFoundError
from cc_history.models import ErrorResponse, GetResponse, TooLargeResponse
from cc_history.refs import find_session, parse_ref
from cc_history.scanner import decode_line, iter_lines


def parse_char_range(text: str | None) -> tuple[int, int] | None:
    """Parse `start-end` for chunked reads; None if absent or malformed."""
    if not text:
        return None
    parts = text.split("-")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        return None
    return int(parts[0]), int(parts[1])


def read_line(path: Path, line: int) -> bytes | None:
    """Raw text of one 1-based line, or None if the file is shorter."""
    try:
        for line_num, raw in iter_lines(path):
            if line_num == line:
                return raw
    except OSError as e:
        raise HistoryIOError(f"Cannot read {path}: {e}") from e
    return None


def get_message(
    config: Config,
    ref: str,
    char_range: tuple[int, int] | None = None,
    project: str | None = None,
    current_project: str | None = None,
    max_direct_size: int = MAX_DIRECT_SIZE,
) -> GetResponse | TooLargeResponse | ErrorResponse:
    """Return the full rendered content of the message at `ref`.

    With `char_range` only the characters in [start, end) are returned.
    Content above `max_direct_size` without a range is refused with a hint.
    """
    try:
        parsed = parse_ref(ref)
        session_file = find_session(config, parsed.prefix, project, current_project)

        raw = read_line(session_file.path, parsed.line)
        if raw is None:
            raise RefNotFoundError(f"Ref not found: {ref}")

        record = decode_line(raw)
        if record is None:
            raise ParseError(f"Line {parsed.line} of {session_file.path} is not a valid message")
    except HistoryError as e:
        return e.to_response()

    content = render_content(record)
    content_size = len(content)
    image_count = len(extract_images(record))

    if char_range is not None:
        end = min(char_range[1], content_size)
        start = min(char_range[0], end)
        return GetResponse(
            ref=ref,
            type=record.type,
            content=content[start:end],
            content_size=content_size,
            image_count=image_count,
        )

    if content_size > max_direct_size:
        return TooLargeResponse(
            ref=ref,
            size=content_size,
            suggestion=f"Use --range 0-{max_direct_size} to read the content in chunks",
        )

    return GetResponse(
        ref=ref,
        type=record.type,
        content=content,
        content_size=content_size,
        image_count=image_count,
    )
