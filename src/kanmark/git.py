"""Git helpers and repository-level configuration for kanmark."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

from kanmark.constants import BRANCH_NAME

KANMARK_DEFAULTS = {
    "branch": BRANCH_NAME,
    "embed-ids": True,
    "default-board": "1",
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce_value(git_key: str, raw: str):
    """Type-coerce kanmark section values using defaults."""
    default = KANMARK_DEFAULTS.get(git_key)
    if default is None:
        return raw
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        return int(raw)
    return raw


def default_config() -> dict[str, Any]:
    """The kanmark defaults, python-style keys."""
    return {_python_key(k): v for k, v in KANMARK_DEFAULTS.items()}


def read_config(repo_path: str | Path) -> dict[str, Any]:
    """Read the [kanmark] git config section, with defaults filled in.

    Keys are returned python-style (underscores).
    """
    reader = _get_repo(repo_path).config_reader()
    config = default_config()
    if reader.has_section("kanmark"):
        for git_k, raw in reader.items("kanmark"):
            config[_python_key(git_k)] = _coerce_value(git_k, raw)
    return config


def write_config_key(repo_path: str | Path, key: str, value) -> None:
    """Write one key to the [kanmark] section. key is python-style (underscores)."""
    git_k = _git_key(key)
    writer = _get_repo(repo_path).config_writer("repository")
    if isinstance(value, bool):
        writer.set_value("kanmark", git_k, str(value).lower())
    else:
        writer.set_value("kanmark", git_k, str(value))
    writer.release()


def _get_repo(repo_path: str | Path) -> Repo:
    return Repo(repo_path)


def is_git_repo(path: str | Path) -> bool:
    """Check if path is inside a git repository."""
    try:
        Repo(path)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def init_repo(path: str | Path) -> Repo:
    """Initialize a new git repository at path."""
    return Repo.init(path)


def has_branch(repo_path: str | Path, branch: str = BRANCH_NAME) -> bool:
    """Check if a branch exists in the repository."""
    return branch in [h.name for h in _get_repo(repo_path).heads]
