"""Discovery of project directories and session transcripts on disk.

Layout: ~/.claude/projects/-Users-name-Code-project/<session-uuid>.jsonl
Sub-agent transcripts live under <project>/<session>/subagents/agent-*.jsonl.
"""

import logging
from pathlib import Path
from typing import Any

from cc_history.config import REF_PREFIX_LEN, SUBAGENT_PREFIX, Config
from cc_history.errors import HistoryIOError, NoCurrentProjectError, ProjectNotFoundError
from cc_history.models import SessionFile

log = logging.getLogger(__name__)


def ref_prefix(session_id: str) -> str:
    """The short session prefix used in refs (first 8 characters).

    Sub-agent IDs drop their `agent-` prefix first so each transcript gets
    a distinct ref: agent-7f3e9a21 -> 7f3e9a21.
    """
    if session_id.startswith(SUBAGENT_PREFIX):
        session_id = session_id[len(SUBAGENT_PREFIX):]
    return session_id[:REF_PREFIX_LEN]


def decode_project_path(project_id: str) -> str:
    """Decode a project directory name back to an approximate path.

    -Users-name-Code-project -> /Users/name/Code/project
    """
    return project_id.replace("-", "/")


def session_id_from_filename(filename: str) -> str | None:
    """Session ID for a top-level transcript file; None for non-sessions."""
    if not filename.endswith(".jsonl"):
        return None
    name = filename[: -len(".jsonl")]
    # Sub-agent transcripts are discovered separately
    if name.startswith(SUBAGENT_PREFIX):
        return None
    return name


def list_project_dirs(config: Config) -> list[tuple[str, Path]]:
    """All project directories as (project_id, path), sorted by ID."""
    try:
        entries = sorted(config.projects_dir.iterdir())
    except OSError as e:
        raise HistoryIOError(f"Cannot read projects directory {config.projects_dir}: {e}") from e
    return [(entry.name, entry) for entry in entries if entry.is_dir()]


def available_projects(config: Config) -> list[dict[str, Any]]:
    """Project summaries attached to scope errors."""
    try:
        dirs = list_project_dirs(config)
    except HistoryIOError:
        return []
    return [{"id": project_id, "path": decode_project_path(project_id)} for project_id, _ in dirs]


def project_dir_or_error(config: Config, project_id: str) -> Path:
    """Directory of an explicitly requested project."""
    path = config.project_dir(project_id)
    if not path.is_dir():
        raise ProjectNotFoundError(
            f"Project not found: {project_id}", available=available_projects(config)
        )
    return path


def resolve_search_scope(
    config: Config,
    projects: list[str] | None = None,
    all_projects: bool = False,
    current_project: str | None = None,
) -> list[tuple[str, Path]]:
    """Decide which project directories a search covers.

    Precedence: explicit projects, then all projects, then the caller's current project.
    """
    if projects:
        return [(project_id, project_dir_or_error(config, project_id)) for project_id in projects]

    if all_projects:
        return list_project_dirs(config)

    if current_project:
        return [(current_project, config.project_dir(current_project))]

    raise NoCurrentProjectError(
        "Cannot determine the current project; pass a project ID",
        available=available_projects(config),
    )


def list_session_files(
    project_id: str, project_dir: Path, sessions: list[str] | None = None
) -> list[SessionFile]:
    """Top-level session transcripts in a project directory.

    `sessions` optionally restricts the result to full session IDs or ref prefixes.
    A missing directory yields no files.
    """
    try:
        entries = sorted(project_dir.iterdir())
    except OSError:
        log.debug("Project directory not readable: %s", project_dir)
        return []

    files: list[SessionFile] = []
    for entry in entries:
        session_id = session_id_from_filename(entry.name)
        if session_id is None or not entry.is_file():
            continue
        if sessions and not any(s in (session_id, ref_prefix(session_id)) for s in sessions):
            continue
        files.append(SessionFile(project_id=project_id, session_id=session_id, path=entry))
    return files


def list_subagent_files(
    project_id: str, project_dir: Path, sessions: list[str] | None = None
) -> list[SessionFile]:
    """Sub-agent transcripts under <project>/<session>/subagents/.

    With `sessions`, only transcripts of the matching parent sessions are kept.
    """
    files: list[SessionFile] = []
    for path in sorted(project_dir.glob(f"*/subagents/{SUBAGENT_PREFIX}*.jsonl")):
        if not path.is_file():
            continue
        parent_session = path.parent.parent.name
        if sessions and not any(s in (parent_session, ref_prefix(parent_session)) for s in sessions):
            continue
        files.append(SessionFile(project_id=project_id, session_id=path.stem, path=path))
    return files


def collect_search_files(
    project_dirs: list[tuple[str, Path]], sessions: list[str] | None = None
) -> list[SessionFile]:
    """Every transcript a search should scan, including sub-agent transcripts."""
    files: list[SessionFile] = []
    for project_id, project_dir in project_dirs:
        files.extend(list_session_files(project_id, project_dir, sessions))
        files.extend(list_subagent_files(project_id, project_dir, sessions))
    return files
