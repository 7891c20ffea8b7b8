"""Settings kept in the repository's git config under [kanbandoc]."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

SECTION = "kanbandoc"

DEFAULTS = {
    "branch": "kanbandoc",
    "display-ids": "sequential",
    "color-attempts": 20,
    "default-template": "Standard 3 columns",
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce(git_key: str, raw: str):
    """Type-coerce a value using the type of its default."""
    default = DEFAULTS.get(git_key)
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            return default
    return raw


def read_config(repo_path: str | Path) -> dict[str, Any]:
    """Read the [kanbandoc] section merged over DEFAULTS.

    Keys come back underscored: ``display-ids`` is ``display_ids``.
    """
    reader = Repo(repo_path).config_reader()
    settings = {_python_key(k): v for k, v in DEFAULTS.items()}
    if reader.has_section(SECTION):
        for git_k, raw in reader.items(SECTION):
            settings[_python_key(git_k)] = _coerce(git_k, raw)
    return settings


def write_config_key(repo_path: str | Path, key: str, value) -> None:
    """Write one [kanbandoc] key. key is python-style (underscores)."""
    writer = Repo(repo_path).config_writer("repository")
    try:
        if isinstance(value, bool):
            writer.set_value(SECTION, _git_key(key), str(value).lower())
        else:
            writer.set_value(SECTION, _git_key(key), str(value))
    finally:
        writer.release()


def is_git_repo(path: str | Path) -> bool:
    """Check if path is a git repository."""
    try:
        Repo(path)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def init_repo(path: str | Path) -> Repo:
    """Initialize a new git repository at path."""
    return Repo.init(path)
