"""Project and session listings."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from cc_history.config import Config
from cc_history.discovery import (
    decode_project_path,
    list_project_dirs,
    list_session_files,
    project_dir_or_error,
    ref_prefix,
)
from cc_history.errors import HistoryError, NoCurrentProjectError
from cc_history.models import (
    ErrorResponse,
    ProjectInfo,
    ProjectsResponse,
    SessionInfo,
    SessionsResponse,
)
from cc_history.scanner import decode_line, iter_lines

log = logging.getLogger(__name__)


def format_mtime(mtime: float) -> str:
    return datetime.fromtimestamp(int(mtime), tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def list_projects(config: Config) -> ProjectsResponse | ErrorResponse:
    """All projects with session counts, most recently active first."""
    try:
        project_dirs = list_project_dirs(config)
    except HistoryError as e:
        return e.to_response()

    projects: list[ProjectInfo] = []
    for project_id, project_dir in project_dirs:
        sessions = list_session_files(project_id, project_dir)
        mtimes = []
        for session_file in sessions:
            try:
                mtimes.append(session_file.path.stat().st_mtime)
            except OSError:
                continue

        projects.append(
            ProjectInfo(
                id=project_id,
                path=decode_project_path(project_id),
                session_count=len(sessions),
                last_activity=format_mtime(max(mtimes)) if mtimes else "",
            )
        )

    projects.sort(key=lambda p: p.last_activity, reverse=True)
    return ProjectsResponse(projects=projects)


def session_stats(path: Path) -> tuple[int, str, str]:
    """Line count plus first and last message timestamps of a session."""
    line_count = 0
    start_time = ""
    end_time = ""
    try:
        for _, raw in iter_lines(path):
            line_count += 1
            record = decode_line(raw)
            if record is None:
                continue
            if not start_time:
                start_time = record.timestamp
            end_time = record.timestamp
    except OSError as e:
        log.warning("Could not read %s: %s", path, e)
        return 0, "", ""
    return line_count, start_time, end_time


def list_sessions(
    config: Config, project: str | None = None, current_project: str | None = None
) -> SessionsResponse | ErrorResponse:
    """Sessions of one project, most recent first."""
    try:
        project_id = project or current_project
        if not project_id:
            raise NoCurrentProjectError("Cannot determine the current project; pass a project ID")
        project_dir = project_dir_or_error(config, project_id)
    except HistoryError as e:
        return e.to_response()

    sessions: list[SessionInfo] = []
    for session_file in list_session_files(project_id, project_dir):
        try:
            size_bytes = session_file.path.stat().st_size
        except OSError:
            size_bytes = 0
        line_count, start_time, end_time = session_stats(session_file.path)
        sessions.append(
            SessionInfo(
                id=session_file.session_id,
                ref_prefix=ref_prefix(session_file.session_id),
                line_count=line_count,
                start_time=start_time,
                end_time=end_time,
                size_bytes=size_bytes,
            )
        )

    sessions.sort(key=lambda s: s.end_time, reverse=True)
    return SessionsResponse(project=project_id, sessions=sessions)
