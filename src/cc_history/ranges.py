"""Line-range expressions: `1-100,200-300,!150-160`."""

import logging

from cc_history.models import Range

log = logging.getLogger(__name__)


def _parse_bound(text: str) -> int | None:
    """Unsigned decimal bound; signs, spaces and underscores are rejected."""
    if not (text.isascii() and text.isdigit()):
        log.debug("Ignoring unparsable range bound %r", text)
        return None
    return int(text)


def parse_ranges(expression: str | None) -> list[Range]:
    """Parse a comma-separated range expression.

    Items are `N`, `N-M`, `N-` or `-M`, optionally prefixed with `!` to exclude.
    Unparsable numbers are dropped rather than failing the whole expression.
    """
    if not expression:
        return []

    ranges: list[Range] = []
    for part in expression.split(","):
        part = part.strip()
        if not part:
            continue

        exclude = part.startswith("!")
        if exclude:
            part = part[1:]

        if "-" in part:
            start, _, end = part.partition("-")
            ranges.append(
                Range(
                    start=_parse_bound(start) if start else None,
                    end=_parse_bound(end) if end else None,
                    exclude=exclude,
                )
            )
        else:
            n = _parse_bound(part)
            if n is not None:
                ranges.append(Range(start=n, end=n, exclude=exclude))

    return ranges


def line_in_ranges(line: int, ranges: list[Range]) -> bool:
    """Check a 1-based line number against parsed ranges.

    Exclusions always win. With no inclusion ranges every other line is accepted.
    """
    if not ranges:
        return True

    if any(r.contains(line) for r in ranges if r.exclude):
        return False

    include = [r for r in ranges if not r.exclude]
    if not include:
        return True
    return any(r.contains(line) for r in include)
