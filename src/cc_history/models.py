"""Data models for cc-history."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class TextBlock:
    """A text content block."""

    text: str


@dataclass
class ImageBlock:
    """An image content block with its base64 payload."""

    data: str
    media_type: str = "image/png"


@dataclass
class OtherBlock:
    """Any other block (tool_use, tool_result without text, thinking...)."""

    kind: str | None = None


Block = TextBlock | ImageBlock | OtherBlock


@dataclass
class PlainText:
    text: str


@dataclass
class Blocks:
    blocks: list[Block] = field(default_factory=list)


@dataclass
class Absent:
    pass


Body = PlainText | Blocks | Absent


def parse_block(raw: Any) -> Block:
    """Classify a single content block."""
    if not isinstance(raw, dict):
        return OtherBlock()

    kind = raw.get("type")
    source = raw.get("source")
    if kind == "image" and isinstance(source, dict):
        data = source.get("data")
        media_type = source.get("media_type")
        return ImageBlock(
            data=data if isinstance(data, str) else "",
            media_type=media_type if isinstance(media_type, str) else "image/png",
        )

    text = raw.get("text")
    if isinstance(text, str):
        return TextBlock(text=text)

    return OtherBlock(kind=kind if isinstance(kind, str) else None)


def parse_body(message: Any) -> Body:
    """Turn the raw `message` field into a tagged body."""
    if not isinstance(message, dict):
        return Absent()

    content = message.get("content")
    if isinstance(content, str):
        return PlainText(text=content)
    if isinstance(content, list):
        return Blocks(blocks=[parse_block(item) for item in content])
    return Absent()


@dataclass
class MessageRecord:
    """One decoded transcript line."""

    uuid: str
    type: str
    timestamp: str
    parent_uuid: str | None = None
    session_id: str | None = None
    body: Body = field(default_factory=Absent)

    @classmethod
    def from_dict(cls, raw: Any) -> "MessageRecord | None":
        """Build a record from a decoded JSON line, or None if it isn't one."""
        if not isinstance(raw, dict):
            return None

        uuid = raw.get("uuid")
        msg_type = raw.get("type")
        timestamp = raw.get("timestamp")
        if not (isinstance(uuid, str) and isinstance(msg_type, str) and isinstance(timestamp, str)):
            return None

        parent_uuid = raw.get("parentUuid")
        session_id = raw.get("sessionId")
        return cls(
            uuid=uuid,
            type=msg_type,
            timestamp=timestamp,
            parent_uuid=parent_uuid if isinstance(parent_uuid, str) else None,
            session_id=session_id if isinstance(session_id, str) else None,
            body=parse_body(raw.get("message")),
        )


@dataclass(frozen=True)
class Ref:
    """Address of one message: session prefix + 1-based line number."""

    prefix: str
    line: int

    def __str__(self) -> str:
        return f"{self.prefix}:{self.line}"


@dataclass(frozen=True)
class Range:
    """A line interval; either bound may be open."""

    start: int | None = None
    end: int | None = None
    exclude: bool = False

    def contains(self, n: int) -> bool:
        """Pure interval check, ignoring `exclude`."""
        if self.start is not None and n < self.start:
            return False
        if self.end is not None and n > self.end:
            return False
        return True


@dataclass(frozen=True)
class SessionFile:
    """A transcript file discovered on disk."""

    project_id: str
    session_id: str
    path: Path


def _drop_empty(data: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if not (k in keys and v in (None, []))}


@dataclass
class ImageInfo:
    index: int
    size: int


@dataclass
class SearchResult:
    """A single matching message."""

    ref: str
    session: str
    line: int
    uuid: str
    type: str
    timestamp: str
    content: str
    content_size: int
    project: str
    truncated: bool = False
    images: list[ImageInfo] = field(default_factory=list)

    @property
    def image_count(self) -> int:
        return len(self.images)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["image_count"] = self.image_count
        return _drop_empty(data, ("images",))


@dataclass
class SearchStats:
    files_scanned: int
    lines_scanned: int
    total_matches: int
    returned_count: int
    time_ms: int = 0


@dataclass
class SearchResponse:
    stats: SearchStats
    results: list[SearchResult]
    has_more: bool
    next_offset: int
    budget_limited: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "stats": asdict(self.stats),
            "results": [r.to_dict() for r in self.results],
            "has_more": self.has_more,
            "next_offset": self.next_offset,
        }
        if self.budget_limited:
            data["budget_limited"] = True
        return data


@dataclass
class ContextMessage:
    ref: str
    type: str
    content: str
    is_anchor: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = {"ref": self.ref, "type": self.type, "content": self.content}
        if self.is_anchor:
            data["is_anchor"] = True
        return data


@dataclass
class ContextResponse:
    anchor_ref: str
    messages: list[ContextMessage]
    truncated: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "anchor_ref": self.anchor_ref,
            "messages": [m.to_dict() for m in self.messages],
        }
        if self.truncated:
            data["truncated"] = True
        return data


@dataclass
class GetResponse:
    ref: str
    type: str
    content: str
    content_size: int
    image_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TooLargeResponse:
    ref: str
    size: int
    suggestion: str
    error: str = "content_too_large"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ProjectInfo:
    id: str
    path: str
    session_count: int
    last_activity: str


@dataclass
class ProjectsResponse:
    projects: list[ProjectInfo]

    def to_dict(self) -> dict[str, Any]:
        return {"projects": [asdict(p) for p in self.projects]}


@dataclass
class SessionInfo:
    id: str
    ref_prefix: str
    line_count: int
    start_time: str
    end_time: str
    size_bytes: int


@dataclass
class SessionsResponse:
    project: str
    sessions: list[SessionInfo]

    def to_dict(self) -> dict[str, Any]:
        return {"project": self.project, "sessions": [asdict(s) for s in self.sessions]}


@dataclass
class ErrorResponse:
    """Structured failure returned by every public operation."""

    error: str
    message: str
    available: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_empty(asdict(self), ("available",))
