"""Shared helpers for CLI command handlers."""

import json
import subprocess
import sys
from pathlib import Path
from typing import Any

from kanmark.git import default_config, is_git_repo, read_config
from kanmark.ids import is_persisted, normalize_id
from kanmark.model.loader import load_board
from kanmark.model.writer import StorageKeys, save_board
from kanmark.models import Board, Card, Column, Group, Subtask


def config(repo: str) -> dict[str, Any]:
    """Repository config, or the defaults outside a git repository."""
    if is_git_repo(repo):
        return read_config(repo)
    return default_config()


def board_key(args) -> str:
    key = getattr(args, "board", None) or config(args.repo)["default_board"]
    return normalize_id(str(key))


def load_board_or_die(args) -> Board:
    """Load the selected board. Exit 1 with message if not found."""
    repo_path = Path(args.repo).resolve()
    try:
        return load_board(str(repo_path), board_key(args), branch=config(args.repo)["branch"])
    except Exception as e:
        error(str(e), args.json)


def read_text(path: str, json_mode: bool) -> str:
    """Read a UTF-8 file. Exit 1 with message if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        error(f"{path}: {e.strerror}", json_mode)


def git_failure(e: subprocess.CalledProcessError) -> str:
    """The message git printed, or a description of the failed command."""
    if e.stderr:
        return e.stderr.decode("utf-8", "replace").strip()
    return str(e)


def save(board: Board, message: str, args) -> StorageKeys:
    """Save board and return the assigned storage keys. Exit 1 on failure."""
    try:
        return save_board(board, message=message, branch=config(args.repo)["branch"])
    except subprocess.CalledProcessError as e:
        error(git_failure(e), args.json)
    except ValueError as e:
        error(str(e), args.json)


def entity_id(raw: str) -> str:
    """Accept padded keys on the command line: "007" -> "7"."""
    return normalize_id(raw) if is_persisted(raw) else raw


def find_column(board: Board, col_id: str, json_mode: bool) -> Column:
    """Lookup column by ID. Exit 1 listing available columns if not found."""
    col = board.find_column(entity_id(col_id))
    if col is not None:
        return col
    available = [f"  {c.id}  {c.title}" for c in board.columns]
    msg = f"Column '{col_id}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_group(board: Board, group_id: str, json_mode: bool) -> Group:
    """Lookup group by ID. Exit 1 if not found."""
    _, group = board.find_group(entity_id(group_id))
    if group is not None:
        return group
    error(f"Group '{group_id}' not found.", json_mode)


def find_card(board: Board, card_id: str, json_mode: bool) -> Card:
    """Lookup card by ID. Exit 1 if not found."""
    _, card = board.find_card(entity_id(card_id))
    if card is not None:
        return card
    error(f"Card '{card_id}' not found.", json_mode)


def find_subtask(board: Board, subtask_id: str, json_mode: bool) -> Subtask:
    """Lookup subtask by ID. Exit 1 if not found."""
    _, sub = board.find_subtask(entity_id(subtask_id))
    if sub is not None:
        return sub
    error(f"Subtask '{subtask_id}' not found.", json_mode)


def position_arg(args) -> int | None:
    """Convert a 1-indexed --position to a 0-indexed position."""
    position = getattr(args, "position", None)
    return position - 1 if position is not None else None


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def count_cards(column: Column) -> int:
    return len(column.cards) + sum(len(g.cards) for g in column.groups)


def build_column_summaries(board: Board) -> list[dict]:
    """Build column summary dicts from board."""
    return [
        {
            "id": col.id,
            "title": col.title,
            "groups": [{"id": g.id, "title": g.title, "cards": len(g.cards)} for g in col.groups],
            "cards": count_cards(col),
        }
        for col in board.columns
    ]


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    cards = "card" if c["cards"] == 1 else "cards"
    return f"{indent}{c['id']}  {c['title']:<16} {c['cards']} {cards}"


def checkbox(completed: bool) -> str:
    return "[x]" if completed else "[ ]"
