"""Load kanmark boards from git."""

from functools import cmp_to_key
from typing import Any

import yaml
from git import Repo
from git.objects import Blob, Tree

from kanmark.constants import BOARDS_DIR, BRANCH_NAME, KEY_WIDTH
from kanmark.ids import compare_ids, is_persisted, normalize_id, pad_id
from kanmark.model.invariants import check_board
from kanmark.models import Board, Card, Column, Group, InvariantError, Subtask


def _tree_get(tree: Tree, name: str) -> Blob | Tree | None:
    """Get an item from a tree by name, returning None if not found."""
    try:
        return tree[name]
    except KeyError:
        return None


def _read_blob(blob: Blob) -> str:
    return blob.data_stream.read().decode("utf-8")


def board_filename(key: str, ext: str) -> str:
    """File name for a board key: "7", "yaml" -> "007.yaml"."""
    return f"{pad_id(normalize_id(key), KEY_WIDTH)}.{ext}"


# --- Hydration from plain dicts ---


def _id(data: dict, kind: str) -> str:
    raw = data.get("id")
    if raw is None:
        raise InvariantError(f"{kind} without id")
    return str(raw)


def _subtask_from_dict(data: dict, position: int) -> Subtask:
    return Subtask(
        id=_id(data, "subtask"),
        text=str(data.get("text", "")),
        completed=bool(data.get("completed", False)),
        position=position,
    )


def _cards_from_dicts(items: list[dict], container: Column | Group) -> list[Card]:
    cards = []
    for i, data in enumerate(items or []):
        cards.append(
            Card(
                id=_id(data, "card"),
                text=str(data.get("text", "")),
                parent=container.ref,
                completed=bool(data.get("completed", False)),
                position=i,
                subtasks=[_subtask_from_dict(s, j) for j, s in enumerate(data.get("subtasks") or [])],
            )
        )
    return cards


def board_from_dict(data: dict[str, Any]) -> Board:
    """Rebuild a Board from its plain-dict form.

    List order is the only ordering signal, positions are reassigned
    from it. Raises InvariantError if the result is not a valid board.
    """
    board = Board(
        title=str(data.get("title") or ""),
        meta=dict(data.get("meta") or {}),
        sequences={k: int(v) for k, v in (data.get("sequences") or {}).items()},
    )
    for i, col_data in enumerate(data.get("columns") or []):
        col = Column(
            id=_id(col_data, "column"),
            title=str(col_data.get("title", "")),
            position=i,
            level=int(col_data.get("level", 1)),
        )
        col.cards = _cards_from_dicts(col_data.get("cards"), col)
        for j, group_data in enumerate(col_data.get("groups") or []):
            group = Group(id=_id(group_data, "group"), title=str(group_data.get("title", "")), position=j)
            group.cards = _cards_from_dicts(group_data.get("cards"), group)
            col.groups.append(group)
        board.columns.append(col)
    check_board(board)
    return board


# --- Git ---


def _boards_tree(repo: Repo, branch: str) -> tuple[str, Tree | None]:
    try:
        commit = repo.commit(branch)
    except Exception:
        raise ValueError(f"Branch '{branch}' not found in repository")
    boards = _tree_get(commit.tree, BOARDS_DIR)
    return commit.hexsha, boards if isinstance(boards, Tree) else None


def load_board(repo_path: str, key: str, branch: str = BRANCH_NAME) -> Board:
    """Load one board from a git branch."""
    repo = Repo(repo_path)
    commit, boards = _boards_tree(repo, branch)

    blob = _tree_get(boards, board_filename(key, "yaml")) if boards is not None else None
    if blob is None:
        raise ValueError(f"Board '{key}' not found")

    board = board_from_dict(yaml.safe_load(_read_blob(blob)) or {})
    board.key = normalize_id(key)
    board.repo_path = str(repo_path)
    board.commit = commit

    text_blob = _tree_get(boards, board_filename(key, "md"))
    if text_blob is not None:
        board.raw = _read_blob(text_blob)
    return board


def list_boards(repo_path: str, branch: str = BRANCH_NAME) -> list[tuple[str, str]]:
    """List (key, title) for every board on the branch, ordered by key."""
    repo = Repo(repo_path)
    _, boards = _boards_tree(repo, branch)
    if boards is None:
        return []

    entries = []
    for item in boards:
        if not isinstance(item, Blob) or not item.name.endswith(".yaml"):
            continue
        stem = item.name[: -len(".yaml")]
        if not is_persisted(stem):
            continue
        data = yaml.safe_load(_read_blob(item)) or {}
        entries.append((normalize_id(stem), str(data.get("title") or "")))

    entries.sort(key=cmp_to_key(lambda a, b: compare_ids(a[0], b[0])))
    return entries
