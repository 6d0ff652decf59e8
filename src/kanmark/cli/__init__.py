"""CLI argument parser and dispatch for kanmark."""

import argparse

from kanmark.cli.board import board_delete, board_get, board_list, board_new, board_set, board_summary
from kanmark.cli.card import (
    card_add,
    card_delete,
    card_done,
    card_edit,
    card_list,
    card_move,
    card_undo,
    subtask_add,
    subtask_delete,
    subtask_done,
    subtask_undo,
)
from kanmark.cli.column import (
    column_add,
    column_delete,
    column_list,
    column_move,
    column_rename,
    group_add,
    group_delete,
    group_move,
    group_rename,
)
from kanmark.cli.fmt import fmt, parse_file
from kanmark.cli.init import init_board


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=".", help="Path to git repository (default: .)")
    common.add_argument("--board", help="Board key (default: kanmark.default-board, 1)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    parser = argparse.ArgumentParser(
        prog="kanmark",
        description="Markdown task boards stored in git",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Initialize a kanmark board", parents=[common])
    init_p.add_argument("--title", default="kanmark", help="Board title")
    init_p.set_defaults(func=init_board)

    # --- fmt / parse ---
    fmt_p = nouns.add_parser("fmt", help="Normalise board markdown files", parents=[common])
    fmt_p.add_argument("files", nargs="+", help="Markdown files")
    fmt_p.add_argument("--check", action="store_true", help="Only report files that would change")
    fmt_p.add_argument("--no-ids", action="store_true", help="Drop identity tokens")
    fmt_p.set_defaults(func=fmt)

    parse_p = nouns.add_parser("parse", help="Print a markdown file as board JSON", parents=[common])
    parse_p.add_argument("file", help="Markdown file")
    parse_p.set_defaults(func=parse_file)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards", parents=[common])
    board_list_p.set_defaults(func=board_list)

    board_show_p = board_verbs.add_parser("show", help="Show board summary", parents=[common])
    board_show_p.set_defaults(func=board_summary)

    board_get_p = board_verbs.add_parser("get", help="Dump board markdown", parents=[common])
    board_get_p.add_argument("--no-ids", action="store_true", help="Leave out identity tokens")
    board_get_p.set_defaults(func=board_get)

    board_set_p = board_verbs.add_parser("set", help="Replace board from markdown on stdin", parents=[common])
    board_set_p.set_defaults(func=board_set)

    board_new_p = board_verbs.add_parser("new", help="Create a board", parents=[common])
    board_new_p.add_argument("title", help="Board title")
    board_new_p.add_argument("--from", dest="source", help="Markdown file to start from")
    board_new_p.set_defaults(func=board_new)

    board_delete_p = board_verbs.add_parser("delete", help="Delete a board", parents=[common])
    board_delete_p.set_defaults(func=board_delete)

    # board with no verb = summary
    board_p.set_defaults(func=board_summary)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common])
    col_add_p.add_argument("title", help="Column title")
    col_add_p.add_argument("--position", type=int, help="Position (1-indexed, default: last)")
    col_add_p.set_defaults(func=column_add)

    col_rename_p = col_verbs.add_parser("rename", help="Rename a column", parents=[common])
    col_rename_p.add_argument("id", help="Column ID")
    col_rename_p.add_argument("new_title", help="New column title")
    col_rename_p.set_defaults(func=column_rename)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("id", help="Column ID")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column", parents=[common])
    col_delete_p.add_argument("id", help="Column ID")
    col_delete_p.set_defaults(func=column_delete)

    # column with no verb = list
    col_p.set_defaults(func=column_list)

    # --- group ---
    group_p = nouns.add_parser("group", help="Group operations", parents=[common])
    group_verbs = group_p.add_subparsers(dest="verb")

    group_add_p = group_verbs.add_parser("add", help="Create a group", parents=[common])
    group_add_p.add_argument("title", help="Group title")
    group_add_p.add_argument("--column", dest="column", required=True, help="Column ID")
    group_add_p.add_argument("--position", type=int, help="Position in column (1-indexed)")
    group_add_p.set_defaults(func=group_add)

    group_rename_p = group_verbs.add_parser("rename", help="Rename a group", parents=[common])
    group_rename_p.add_argument("id", help="Group ID")
    group_rename_p.add_argument("new_title", help="New group title")
    group_rename_p.set_defaults(func=group_rename)

    group_move_p = group_verbs.add_parser("move", help="Move a group", parents=[common])
    group_move_p.add_argument("id", help="Group ID")
    group_move_p.add_argument("--column", dest="column", help="Target column ID (default: same column)")
    group_move_p.add_argument("--position", type=int, help="Position in column (1-indexed)")
    group_move_p.set_defaults(func=group_move)

    group_delete_p = group_verbs.add_parser("delete", help="Delete a group", parents=[common])
    group_delete_p.add_argument("id", help="Group ID")
    group_delete_p.set_defaults(func=group_delete)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_list_p = card_verbs.add_parser("list", help="List cards", parents=[common])
    card_list_p.add_argument("--column", dest="column", help="Filter by column ID")
    card_list_p.set_defaults(func=card_list)

    card_add_p = card_verbs.add_parser("add", help="Create a card", parents=[common])
    card_add_p.add_argument("text", help="Card text")
    card_add_p.add_argument("--column", dest="column", help="Target column ID")
    card_add_p.add_argument("--group", dest="group", help="Target group ID")
    card_add_p.add_argument("--done", action="store_true", help="Create as completed")
    card_add_p.add_argument("--position", type=int, help="Position (1-indexed)")
    card_add_p.set_defaults(func=card_add)

    card_move_p = card_verbs.add_parser("move", help="Move a card", parents=[common])
    card_move_p.add_argument("id", help="Card ID")
    card_move_p.add_argument("--column", dest="column", help="Target column ID")
    card_move_p.add_argument("--group", dest="group", help="Target group ID")
    card_move_p.add_argument("--position", type=int, help="Position (1-indexed)")
    card_move_p.set_defaults(func=card_move)

    card_done_p = card_verbs.add_parser("done", help="Mark a card completed", parents=[common])
    card_done_p.add_argument("id", help="Card ID")
    card_done_p.set_defaults(func=card_done)

    card_undo_p = card_verbs.add_parser("undo", help="Mark a card not completed", parents=[common])
    card_undo_p.add_argument("id", help="Card ID")
    card_undo_p.set_defaults(func=card_undo)

    card_edit_p = card_verbs.add_parser("edit", help="Replace card text", parents=[common])
    card_edit_p.add_argument("id", help="Card ID")
    card_edit_p.add_argument("text", help="New text")
    card_edit_p.set_defaults(func=card_edit)

    card_delete_p = card_verbs.add_parser("delete", help="Delete a card", parents=[common])
    card_delete_p.add_argument("id", help="Card ID")
    card_delete_p.set_defaults(func=card_delete)

    # card with no verb = list
    card_p.set_defaults(func=card_list, column=None)

    # --- subtask ---
    sub_p = nouns.add_parser("subtask", help="Subtask operations", parents=[common])
    sub_verbs = sub_p.add_subparsers(dest="verb")

    sub_add_p = sub_verbs.add_parser("add", help="Create a subtask", parents=[common])
    sub_add_p.add_argument("card", help="Card ID")
    sub_add_p.add_argument("text", help="Subtask text")
    sub_add_p.add_argument("--done", action="store_true", help="Create as completed")
    sub_add_p.add_argument("--position", type=int, help="Position (1-indexed)")
    sub_add_p.set_defaults(func=subtask_add)

    sub_done_p = sub_verbs.add_parser("done", help="Mark a subtask completed", parents=[common])
    sub_done_p.add_argument("id", help="Subtask ID")
    sub_done_p.set_defaults(func=subtask_done)

    sub_undo_p = sub_verbs.add_parser("undo", help="Mark a subtask not completed", parents=[common])
    sub_undo_p.add_argument("id", help="Subtask ID")
    sub_undo_p.set_defaults(func=subtask_undo)

    sub_delete_p = sub_verbs.add_parser("delete", help="Delete a subtask", parents=[common])
    sub_delete_p.add_argument("id", help="Subtask ID")
    sub_delete_p.set_defaults(func=subtask_delete)

    return parser
