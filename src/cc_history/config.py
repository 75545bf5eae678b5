"""Configuration for cc-history."""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Claude Code sessions location
CLAUDE_DIR = Path.home() / ".claude"
PROJECTS_DIR = CLAUDE_DIR / "projects"

# Environment overrides
PROJECTS_DIR_ENV = "CC_HISTORY_PROJECTS_DIR"
MAX_WORKERS_ENV = "CC_HISTORY_MAX_WORKERS"

DEFAULT_TYPES = ("user", "assistant", "summary")
DEFAULT_MAX_CONTENT = 4000  # chars per result
DEFAULT_MAX_TOTAL = 40000  # chars per response
MAX_DIRECT_SIZE = 100_000  # larger `get` payloads need --range

REF_PREFIX_LEN = 8
SUBAGENT_PREFIX = "agent-"


def default_max_workers() -> int:
    """Worker pool size for file scans (same default as ThreadPoolExecutor)."""
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass
class Config:
    """Runtime configuration shared by all operations."""

    projects_dir: Path = PROJECTS_DIR
    max_workers: int = field(default_factory=default_max_workers)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from the environment, falling back to defaults."""
        projects_dir = os.environ.get(PROJECTS_DIR_ENV)
        max_workers = os.environ.get(MAX_WORKERS_ENV)

        config = cls()
        if projects_dir:
            config.projects_dir = Path(projects_dir).expanduser()
        if max_workers and max_workers.isdigit() and int(max_workers) > 0:
            config.max_workers = int(max_workers)
        return config

    def project_dir(self, project_id: str) -> Path:
        return self.projects_dir / project_id


def project_id_from_path(path: str | Path) -> str | None:
    """Convert a working directory into a project ID.

    Claude Code replaces both `/` and `_` with `-` and keeps a leading `-`:
    /home/me/dev_app -> -home-me-dev-app
    """
    text = str(path).rstrip("/")
    if not text:
        return None
    project_id = text.replace("/", "-").replace("_", "-")
    if not project_id.startswith("-"):
        project_id = f"-{project_id}"
    return project_id


def current_project_id(config: Config, cwd: str | Path | None = None) -> str | None:
    """Infer the current project from a working directory, if it has history."""
    if cwd is None:
        cwd = Path.cwd()
    project_id = project_id_from_path(cwd)
    if project_id is None or not config.project_dir(project_id).is_dir():
        return None
    return project_id
