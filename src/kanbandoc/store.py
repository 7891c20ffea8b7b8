"""Keep boards on a git branch without touching the working tree.

Each board is one ``<board_id>.json`` blob at the root of the branch,
holding ``{"name": ..., "data": <board>}``. Saving rewrites that blob
and commits; the last write wins.
"""

import json
import logging
import re
import subprocess
from pathlib import Path

from git import GitError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.objects import Blob

from kanbandoc.config import DEFAULTS
from kanbandoc.errors import NotFoundError, StorageError
from kanbandoc.model.document import BoardDocument
from kanbandoc.model.loader import board_from_dict
from kanbandoc.model.writer import board_to_dict

logger = logging.getLogger(__name__)

BRANCH_NAME = DEFAULTS["branch"]

_BOARD_ID_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")


def _check_board_id(board_id: str) -> None:
    if not _BOARD_ID_RE.match(board_id):
        raise ValueError(f"Invalid board id '{board_id}'")


def _filename(board_id: str) -> str:
    return f"{board_id}.json"


# --- Git plumbing ---


def _git(repo_path: Path, args: list[str], input: str | None = None) -> str:
    """Run a git command and return stdout, raising StorageError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=repo_path,
            input=input.encode("utf-8") if input is not None else None,
            capture_output=True,
            check=True,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        stderr = getattr(e, "stderr", b"") or b""
        raise StorageError(f"git {args[0]} failed: {stderr.decode('utf-8', 'replace').strip() or e}") from e
    return result.stdout.decode("utf-8").strip()


def _branch_tip(repo_path: Path, branch: str) -> str | None:
    """Get the current commit hash of a branch, or None if it doesn't exist."""
    result = subprocess.run(
        ["git", "rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"],
        cwd=repo_path,
        capture_output=True,
    )
    if result.returncode != 0:
        return None
    return result.stdout.decode("utf-8").strip()


def _open_repo(repo_path: Path) -> Repo:
    try:
        return Repo(repo_path)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise StorageError(f"Not a git repository: {repo_path}") from e


def _tip_entries(repo: Repo, tip: str | None) -> dict[str, tuple[str, str, str]]:
    """Root tree entries of tip as {name: (mode, type, sha)}."""
    if tip is None:
        return {}
    tree = repo.commit(tip).tree
    return {item.name: (f"{item.mode:06o}", item.type, item.hexsha) for item in tree}


def _read_payload(repo_path: Path, board_id: str, branch: str) -> dict:
    repo = _open_repo(repo_path)
    tip = _branch_tip(repo_path, branch)
    if tip is None:
        raise NotFoundError(f"Branch '{branch}' not found in repository")
    try:
        item = repo.commit(tip).tree[_filename(board_id)]
    except KeyError:
        raise NotFoundError(f"Board '{board_id}' not found")
    if not isinstance(item, Blob):
        raise StorageError(f"Board '{board_id}' is not a file")
    try:
        payload = json.loads(item.data_stream.read().decode("utf-8"))
    except ValueError as e:
        raise StorageError(f"Board '{board_id}' is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise StorageError(f"Board '{board_id}' is not a JSON object")
    return payload


def _commit_entries(
    repo_path: Path,
    tip: str | None,
    entries: dict[str, tuple[str, str, str]],
    message: str,
    branch: str,
) -> str:
    """Write entries as the branch's new root tree. Returns the tip commit."""
    lines = [f"{mode} {typ} {sha}\t{name}" for name, (mode, typ, sha) in sorted(entries.items())]
    tree = _git(repo_path, ["mktree"], input="\n".join(lines) + "\n" if lines else "")

    if tip is not None and _git(repo_path, ["rev-parse", f"{tip}^{{tree}}"]) == tree:
        return tip

    parent_args = ["-p", tip] if tip else []
    commit = _git(repo_path, ["commit-tree", tree, *parent_args, "-m", message])
    _git(repo_path, ["update-ref", f"refs/heads/{branch}", commit])
    return commit


# --- Public API ---


def save_board(
    repo_path: str | Path,
    board_id: str,
    name: str,
    doc: BoardDocument,
    message: str | None = None,
    branch: str = BRANCH_NAME,
) -> str:
    """Save a board to the branch and return the commit hash.

    No commit is made when the board is unchanged.
    """
    _check_board_id(board_id)
    repo_path = Path(repo_path)
    repo = _open_repo(repo_path)
    try:
        tip = _branch_tip(repo_path, branch)
        entries = _tip_entries(repo, tip)
        payload = json.dumps({"name": name, "data": board_to_dict(doc)}, indent=2) + "\n"
        blob = _git(repo_path, ["hash-object", "-w", "--stdin"], input=payload)
        entries[_filename(board_id)] = ("100644", "blob", blob)
        commit = _commit_entries(repo_path, tip, entries, message or f"Update board {name}", branch)
    except GitError as e:
        raise StorageError(str(e)) from e
    if commit != tip:
        logger.info("saved board %s at %s", board_id, commit[:7])
    return commit


def load_board(repo_path: str | Path, board_id: str, branch: str = BRANCH_NAME) -> tuple[str, BoardDocument]:
    """Load (name, document) for a board."""
    _check_board_id(board_id)
    payload = _read_payload(Path(repo_path), board_id, branch)
    return str(payload.get("name") or board_id), board_from_dict(payload.get("data") or {})


def list_boards(repo_path: str | Path, branch: str = BRANCH_NAME) -> list[tuple[str, str]]:
    """(board_id, name) for every board on the branch, sorted by id."""
    repo_path = Path(repo_path)
    repo = _open_repo(repo_path)
    tip = _branch_tip(repo_path, branch)
    if tip is None:
        return []
    boards = []
    for name in sorted(_tip_entries(repo, tip)):
        if not name.endswith(".json"):
            continue
        board_id = name[: -len(".json")]
        payload = _read_payload(repo_path, board_id, branch)
        boards.append((board_id, str(payload.get("name") or board_id)))
    return boards


def delete_board(repo_path: str | Path, board_id: str, branch: str = BRANCH_NAME) -> str:
    """Remove a board from the branch and return the new commit hash."""
    _check_board_id(board_id)
    repo_path = Path(repo_path)
    repo = _open_repo(repo_path)
    tip = _branch_tip(repo_path, branch)
    entries = _tip_entries(repo, tip)
    if _filename(board_id) not in entries:
        raise NotFoundError(f"Board '{board_id}' not found")
    del entries[_filename(board_id)]
    commit = _commit_entries(repo_path, tip, entries, f"Delete board {board_id}", branch)
    logger.info("deleted board %s at %s", board_id, commit[:7])
    return commit


def has_board(repo_path: str | Path, board_id: str, branch: str = BRANCH_NAME) -> bool:
    repo_path = Path(repo_path)
    repo = _open_repo(repo_path)
    tip = _branch_tip(repo_path, branch)
    if tip is None:
        return False
    return _filename(board_id) in _tip_entries(repo, tip)
