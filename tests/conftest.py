"""Pytest fixtures for cc-history tests."""

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from cc_history.config import Config

APP_PROJECT = "-home-user-app"
OTHER_PROJECT = "-home-user-other"
SESSION_A = "abcd1234-1111-2222-3333-444455556666"
SESSION_B = "ef567890-1111-2222-3333-444455556666"
SESSION_C = "11112222-1111-2222-3333-444455556666"
SUBAGENT_ID = "agent-7f3e9a21"

IMAGE_DATA = "A" * 419431  # renders as 0.4MB


def make_record(msg_type, content, timestamp, uuid, session_id=SESSION_A):
    """Build a transcript record the way Claude Code writes it."""
    return {
        "type": msg_type,
        "uuid": uuid,
        "parentUuid": None,
        "sessionId": session_id,
        "timestamp": timestamp,
        "message": {"role": msg_type, "content": content},
    }


def write_jsonl(path: Path, lines: list) -> Path:
    """Write records (dicts) or raw strings, one per line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write((line if isinstance(line, str) else json.dumps(line)) + "\n")
    return path


def set_mtime(path: Path, when: datetime) -> None:
    ts = when.timestamp()
    os.utime(path, (ts, ts))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def projects_dir(temp_dir):
    """A projects tree with two projects, three sessions and one sub-agent."""
    root = temp_dir / "projects"
    app = root / APP_PROJECT
    other = root / OTHER_PROJECT

    session_a = write_jsonl(
        app / f"{SESSION_A}.jsonl",
        [
            make_record("user", "fatal error occurred in the build", "2024-01-15T10:00:00Z", "a-1"),
            make_record(
                "assistant",
                [{"type": "text", "text": "Check the error: timeout in CI config"}],
                "2024-01-15T10:00:05Z",
                "a-2",
            ),
            {"type": "file-history-snapshot", "uuid": "a-3", "timestamp": "2024-01-15T10:00:06Z"},
            make_record("user", "Can you show me the logs?", "2024-01-15T10:01:00Z", "a-4"),
            make_record(
                "assistant",
                [
                    {"type": "text", "text": "Here are the logs"},
                    {
                        "type": "image",
                        "source": {"type": "base64", "media_type": "image/png", "data": IMAGE_DATA},
                    },
                    {"type": "tool_use", "name": "Bash", "input": {"command": "ls"}},
                ],
                "2024-01-15T10:01:10Z",
                "a-5",
            ),
            '{"type": "assistant", "uuid": "a-6", "timest',
            make_record("summary", "Debugging build failure", "not-a-time", "a-7"),
            make_record("assistant", "Plain answer about deployment", "2024-01-15T10:02:00Z", "a-8"),
        ],
    )
    session_b = write_jsonl(
        app / f"{SESSION_B}.jsonl",
        [
            make_record("user", "deploy the service", "2024-01-16T09:00:00Z", "b-1", SESSION_B),
            make_record("assistant", "Deployment succeeded", "2024-01-16T09:00:30Z", "b-2", SESSION_B),
        ],
    )
    write_jsonl(
        app / SESSION_A / "subagents" / f"{SUBAGENT_ID}.jsonl",
        [make_record("assistant", "subagent found the error", "2024-01-15T10:00:30Z", "s-1")],
    )
    session_c = write_jsonl(
        other / f"{SESSION_C}.jsonl",
        [
            make_record(
                "user", "unrelated question about error handling", "2024-01-10T08:00:00Z", "c-1", SESSION_C
            ),
        ],
    )

    set_mtime(session_a, datetime(2024, 2, 1, tzinfo=timezone.utc))
    set_mtime(session_b, datetime(2024, 1, 20, tzinfo=timezone.utc))
    set_mtime(session_c, datetime(2024, 1, 1, tzinfo=timezone.utc))
    return root


@pytest.fixture
def config(projects_dir):
    """Config pointing at the sample projects tree."""
    return Config(projects_dir=projects_dir, max_workers=2)
