"""Save kanmark boards to git without touching the working tree."""

import copy
import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from kanmark.constants import BOARDS_DIR, BRANCH_NAME
from kanmark.identity import KINDS
from kanmark.ids import is_temporary, max_id, next_id
from kanmark.model.board import IdMapping, remap_ids
from kanmark.model.invariants import check_board
from kanmark.model.loader import board_filename
from kanmark.models import Board, Card, Column, Group
from kanmark.writer import serialize_board

logger = logging.getLogger(__name__)


# --- Helpers for converting the Board back to plain data ---


def _ordered(items):
    return sorted(items, key=lambda item: item.position)


def _cards_to_dicts(cards: list[Card]) -> list[dict]:
    return [
        {
            "id": card.id,
            "text": card.text,
            "completed": card.completed,
            "subtasks": [{"id": s.id, "text": s.text, "completed": s.completed} for s in _ordered(card.subtasks)],
        }
        for card in _ordered(cards)
    ]


def _group_to_dict(group: Group) -> dict:
    return {"id": group.id, "title": group.title, "cards": _cards_to_dicts(group.cards)}


def _column_to_dict(col: Column) -> dict:
    return {
        "id": col.id,
        "title": col.title,
        "level": col.level,
        "cards": _cards_to_dicts(col.cards),
        "groups": [_group_to_dict(g) for g in _ordered(col.groups)],
    }


def board_to_dict(board: Board) -> dict[str, Any]:
    """Convert a Board to plain dicts and lists, ordered by position."""
    data: dict[str, Any] = {"title": board.title}
    if board.key is not None:
        data["key"] = board.key
    data["meta"] = dict(board.meta)
    data["sequences"] = dict(board.sequences)
    data["columns"] = [_column_to_dict(c) for c in _ordered(board.columns)]
    return data


# --- Git plumbing ---


def _git(repo_path: Path, args: list[str]) -> str:
    """Run a git command and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8").strip()


def _hash_object(repo_path: Path, content: str) -> str:
    """Write content to git object store and return the blob hash."""
    result = subprocess.run(
        ["git", "hash-object", "-w", "--stdin"],
        cwd=repo_path,
        input=content.encode("utf-8"),
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8").strip()


def _mktree(repo_path: Path, entries: list[tuple[str, str, str, str]]) -> str:
    """Create a tree object from entries and return its hash.

    Each entry is (mode, type, sha, name).
    """
    lines = [f"{mode} {typ} {sha}\t{name}" for mode, typ, sha, name in entries]
    content = "\n".join(lines) + "\n" if lines else ""

    result = subprocess.run(
        ["git", "mktree"],
        cwd=repo_path,
        input=content.encode("utf-8"),
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8").strip()


def _ls_tree(repo_path: Path, treeish: str) -> list[tuple[str, str, str, str]]:
    """List a tree as (mode, type, sha, name) entries."""
    output = _git(repo_path, ["ls-tree", treeish])
    entries = []
    for line in output.splitlines():
        info, name = line.split("\t", 1)
        mode, typ, sha = info.split()
        entries.append((mode, typ, sha, name))
    return entries


def _get_branch_tip(repo_path: Path, branch: str) -> str | None:
    """Get the current commit hash of a branch, or None if it doesn't exist."""
    result = subprocess.run(
        ["git", "rev-parse", "--verify", f"refs/heads/{branch}"],
        cwd=repo_path,
        capture_output=True,
    )
    if result.returncode != 0:
        return None
    return result.stdout.decode("utf-8").strip()


def _split_root(repo_path: Path, tip: str | None) -> tuple[list, list]:
    """Return (other root entries, boards/ entries) of the tip's tree."""
    if tip is None:
        return [], []
    root = _ls_tree(repo_path, tip)
    others = [e for e in root if e[3] != BOARDS_DIR]
    boards = next((e for e in root if e[3] == BOARDS_DIR and e[1] == "tree"), None)
    return others, _ls_tree(repo_path, boards[2]) if boards else []


def _commit_root(
    repo_path: Path,
    branch: str,
    tip: str | None,
    others: list,
    board_entries: list,
    message: str,
) -> str:
    """Write the root tree and commit it on branch. Returns the commit hash.

    Skips the commit and returns tip if nothing changed.
    """
    root_entries = list(others)
    if board_entries:
        boards_tree = _mktree(repo_path, sorted(board_entries, key=lambda e: e[3]))
        root_entries.append(("040000", "tree", boards_tree, BOARDS_DIR))
    tree = _mktree(repo_path, root_entries)

    if tip is not None and _git(repo_path, ["rev-parse", f"{tip}^{{tree}}"]) == tree:
        return tip

    parent_args = ["-p", tip] if tip else []
    new_commit = _git(repo_path, ["commit-tree", tree, *parent_args, "-m", message])
    _git(repo_path, ["update-ref", f"refs/heads/{branch}", new_commit])
    return new_commit


# --- Identity assignment ---


@dataclass
class StorageKeys:
    """What a save assigned: board key, commit and per-kind id remapping."""

    board: str
    commit: str
    ids: IdMapping = field(default_factory=dict)


def assign_storage_keys(board: Board) -> tuple[IdMapping, dict[str, int]]:
    """Plan numeric keys for every temporary id on the board.

    Returns (mapping, sequences). Keys continue from the board's stored
    sequences, or past the highest persisted id if that is larger, so a
    key is never handed out twice.
    """
    mapping: IdMapping = {}
    sequences = dict(board.sequences)
    for kind, ids in board.ids_by_kind().items():
        highest = max_id(ids)
        seq = max(sequences.get(kind, 1), int(next_id(highest)))
        renames = {}
        for id_ in ids:
            if is_temporary(id_):
                renames[id_] = str(seq)
                seq += 1
        mapping[kind] = renames
        sequences[kind] = seq
    return mapping, sequences


# --- Public API ---


def save_board(board: Board, message: str = "Update board", branch: str = BRANCH_NAME) -> StorageKeys:
    """Save a board to git, assigning storage keys to temporary ids.

    The remapped board is written first; the caller's board is only
    updated (ids, container refs, key, commit, raw text) once the commit
    exists, all in one step.
    """
    check_board(board)
    repo_path = Path(board.repo_path)

    tip = _get_branch_tip(repo_path, branch)
    others, board_entries = _split_root(repo_path, tip)

    key = board.key
    if key is None:
        existing = [e[3][: -len(".yaml")] for e in board_entries if e[3].endswith(".yaml")]
        key = next_id(max_id(existing))

    mapping, sequences = assign_storage_keys(board)
    persisted = copy.deepcopy(board)
    remap_ids(persisted, mapping)
    persisted.key = key
    persisted.sequences = sequences

    text = serialize_board(persisted)
    data = yaml.safe_dump(board_to_dict(persisted), sort_keys=False, allow_unicode=True)

    names = {board_filename(key, "yaml"), board_filename(key, "md")}
    board_entries = [e for e in board_entries if e[3] not in names]
    board_entries.append(("100644", "blob", _hash_object(repo_path, data), board_filename(key, "yaml")))
    board_entries.append(("100644", "blob", _hash_object(repo_path, text), board_filename(key, "md")))

    new_commit = _commit_root(repo_path, branch, tip, others, board_entries, message)

    remap_ids(board, mapping)
    board.key = key
    board.sequences = sequences
    board.commit = new_commit
    board.raw = text

    assigned = sum(len(renames) for renames in mapping.values())
    logger.info("saved board %s at %s (%d new keys)", key, new_commit[:7], assigned)
    return StorageKeys(board=key, commit=new_commit, ids=mapping)


def delete_board(repo_path: str, key: str, message: str | None = None, branch: str = BRANCH_NAME) -> str:
    """Remove a board from the branch. Returns the new commit hash."""
    path = Path(repo_path)
    tip = _get_branch_tip(path, branch)
    others, board_entries = _split_root(path, tip)

    names = {board_filename(key, "yaml"), board_filename(key, "md")}
    if not any(e[3] in names for e in board_entries):
        raise ValueError(f"Board '{key}' not found")
    board_entries = [e for e in board_entries if e[3] not in names]

    return _commit_root(path, branch, tip, others, board_entries, message or f"Delete board {key}")
