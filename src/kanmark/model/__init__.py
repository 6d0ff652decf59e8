"""Board mutations and git persistence."""

from kanmark.model.board import remap_ids, reparse_board
from kanmark.model.card import (
    create_card,
    create_subtask,
    delete_card,
    delete_subtask,
    find_card_container,
    move_card,
    move_subtask,
    set_card_completed,
    set_card_text,
    set_subtask_completed,
    set_subtask_text,
    toggle_card,
    toggle_subtask,
)
from kanmark.model.column import create_column, delete_column, move_column, rename_column
from kanmark.model.group import create_group, delete_group, move_group, rename_group
from kanmark.model.invariants import check_board
from kanmark.model.loader import board_from_dict, list_boards, load_board
from kanmark.model.writer import StorageKeys, board_to_dict, delete_board, save_board

__all__ = [
    "StorageKeys",
    "board_from_dict",
    "board_to_dict",
    "check_board",
    "create_card",
    "create_column",
    "create_group",
    "create_subtask",
    "delete_board",
    "delete_card",
    "delete_column",
    "delete_group",
    "delete_subtask",
    "find_card_container",
    "list_boards",
    "load_board",
    "move_card",
    "move_column",
    "move_group",
    "move_subtask",
    "remap_ids",
    "rename_column",
    "rename_group",
    "reparse_board",
    "save_board",
    "set_card_completed",
    "set_card_text",
    "set_subtask_completed",
    "set_subtask_text",
    "toggle_card",
    "toggle_subtask",
]
