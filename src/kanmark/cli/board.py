"""Handlers for 'kanmark board' commands."""

import subprocess
import sys
from pathlib import Path

from git import InvalidGitRepositoryError, NoSuchPathError

from kanmark.cli._common import (
    build_column_summaries,
    config,
    error,
    format_column_line,
    git_failure,
    load_board_or_die,
    output_json,
    output_result,
    read_text,
    save,
)
from kanmark.git import is_git_repo
from kanmark.model.board import reparse_board
from kanmark.model.loader import list_boards
from kanmark.model.writer import board_to_dict, delete_board
from kanmark.parser import parse_board
from kanmark.writer import serialize_board


def board_list(args) -> int:
    """List all boards on the branch."""
    repo_path = str(Path(args.repo).resolve())
    try:
        boards = list_boards(repo_path, branch=config(args.repo)["branch"])
    except (InvalidGitRepositoryError, NoSuchPathError):
        error(f"{repo_path} is not a git repository", args.json)
    except ValueError as e:
        error(str(e), args.json)

    if args.json:
        output_json([{"key": key, "title": title} for key, title in boards])
    else:
        for key, title in boards:
            print(f"{key}  {title}")

    return 0


def board_summary(args) -> int:
    """Show board summary: title, columns, groups, card counts."""
    board = load_board_or_die(args)
    columns = build_column_summaries(board)

    if args.json:
        output_json({"key": board.key, "title": board.title, "columns": columns})
    else:
        print(board.title or f"board {board.key}")
        for c in columns:
            print(format_column_line(c, indent="  "))
            for g in c["groups"]:
                print(f"      {g['id']}  {g['title']}")

    return 0


def board_get(args) -> int:
    """Dump board markdown."""
    board = load_board_or_die(args)
    embed_ids = config(args.repo)["embed_ids"] and not args.no_ids
    markdown = serialize_board(board, embed_ids=embed_ids)

    if args.json:
        data = board_to_dict(board)
        data["markdown"] = markdown
        output_json(data)
    else:
        sys.stdout.write(markdown)

    return 0


def board_set(args) -> int:
    """Replace board structure from markdown on stdin."""
    board = load_board_or_die(args)

    reparse_board(board, sys.stdin.read())
    keys = save(board, f"Update board {board.key}", args)

    output_result(
        {"key": keys.board, "commit": keys.commit, "ids": keys.ids},
        f"Updated board {keys.board} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def board_new(args) -> int:
    """Create a new board, optionally from a markdown file."""
    if not is_git_repo(args.repo):
        error(f"{Path(args.repo).resolve()} is not a git repository", args.json)

    text = ""
    if args.source:
        text = read_text(args.source, args.json)

    board = parse_board(text, title=args.title)
    board.repo_path = str(Path(args.repo).resolve())
    keys = save(board, f"Add board: {board.title}", args)

    output_result(
        {"key": keys.board, "title": board.title, "commit": keys.commit},
        f"Created board {keys.board} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def board_delete(args) -> int:
    """Delete a board."""
    board = load_board_or_die(args)
    try:
        commit = delete_board(board.repo_path, board.key, branch=config(args.repo)["branch"])
    except subprocess.CalledProcessError as e:
        error(git_failure(e), args.json)
    except ValueError as e:
        error(str(e), args.json)

    output_result(
        {"key": board.key, "commit": commit},
        f"Deleted board {board.key} ({commit[:7]})",
        args.json,
    )

    return 0
