"""Ref parsing and session lookup.

A ref addresses one message as `<session-prefix>:<line>`, e.g. `c86bc677:1234`,
where the prefix is the first 8 characters of the session ID and the line is
1-based.
"""

import logging

from cc_history.config import Config
from cc_history.discovery import (
    list_project_dirs,
    list_session_files,
    list_subagent_files,
    project_dir_or_error,
    ref_prefix,
)
from cc_history.errors import HistoryIOError, InvalidRefError, SessionNotFoundError
from cc_history.models import Ref, SessionFile

log = logging.getLogger(__name__)


def parse_ref(text: str) -> Ref:
    """Parse `prefix:line`. Raises InvalidRefError on malformed input."""
    parts = text.split(":")
    if len(parts) != 2:
        raise InvalidRefError(f"Invalid ref: {text!r}, expected <session-prefix>:<line>")

    prefix, line = parts
    if not (line.isascii() and line.isdigit()) or int(line) < 1:
        raise InvalidRefError(f"Invalid ref: {text!r}, line must be a positive integer")

    return Ref(prefix=prefix, line=int(line))


def find_session(
    config: Config,
    prefix: str,
    project: str | None = None,
    current_project: str | None = None,
) -> SessionFile:
    """Locate the session whose ref prefix matches.

    Searches an explicit project, else the caller's current project, else
    every project. The first match wins, and sub-agent transcripts are only
    considered when no top-level session matches.
    """
    if project:
        project_dirs = [(project, project_dir_or_error(config, project))]
    elif current_project:
        project_dirs = [(current_project, config.project_dir(current_project))]
    else:
        try:
            project_dirs = list_project_dirs(config)
        except HistoryIOError as e:
            log.debug("No projects to search: %s", e)
            project_dirs = []

    for list_files in (list_session_files, list_subagent_files):
        for project_id, project_dir in project_dirs:
            for session_file in list_files(project_id, project_dir):
                if ref_prefix(session_file.session_id) == prefix:
                    log.debug("Resolved %s to %s", prefix, session_file.path)
                    return session_file

    raise SessionNotFoundError(f"Session not found: {prefix}")
