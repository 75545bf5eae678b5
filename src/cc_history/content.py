"""Rendering message bodies into searchable display text."""

from cc_history.models import (
    Absent,
    Blocks,
    ImageBlock,
    ImageInfo,
    MessageRecord,
    PlainText,
    TextBlock,
)


def image_placeholder(index: int, block: ImageBlock) -> str:
    """Placeholder shown in place of an image payload."""
    size_mb = len(block.data) / 1024 / 1024
    return f"[IMAGE:{index} size={size_mb:.1f}MB]"


def render_content(record: MessageRecord) -> str:
    """Render a record's body as plain text.

    Text blocks are kept as-is, images become placeholders naming their block
    position and payload size, and other blocks are dropped.
    """
    body = record.body
    if isinstance(body, PlainText):
        return body.text
    if isinstance(body, Absent):
        return ""

    pieces: list[str] = []
    for index, block in enumerate(body.blocks):
        if isinstance(block, ImageBlock):
            pieces.append(image_placeholder(index, block))
        elif isinstance(block, TextBlock):
            pieces.append(block.text)
    return "\n".join(pieces)


def extract_images(record: MessageRecord) -> list[ImageInfo]:
    """Position and encoded size of every image block."""
    if not isinstance(record.body, Blocks):
        return []
    return [
        ImageInfo(index=index, size=len(block.data))
        for index, block in enumerate(record.body.blocks)
        if isinstance(block, ImageBlock)
    ]


def truncate_content(content: str, max_chars: int) -> tuple[str, bool]:
    """Cut content to at most `max_chars` characters.

    Returns the (possibly shortened) content and whether it was shortened.
    """
    if len(content) <= max_chars:
        return content, False
    return content[:max_chars], True
