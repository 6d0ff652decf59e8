"""Tests for column and group mutation operations."""

import pytest

from kanmark.ids import is_temporary
from kanmark.model.column import create_column, delete_column, move_column, rename_column
from kanmark.model.group import create_group, delete_group, find_group_column, move_group, rename_group
from kanmark.model.invariants import check_board
from kanmark.models import GroupRef


def _titles(items):
    return [i.title for i in items]


def _positions(items):
    return [i.position for i in items]


# --- Columns ---


def test_create_column_appends(board):
    col = create_column(board, "Review")
    assert _titles(board.columns) == ["Todo", "Done", "Review"]
    assert col.position == 2
    assert col.level == 1
    assert is_temporary(col.id)
    check_board(board)


def test_create_column_at_position(board):
    create_column(board, "First", position=0)
    assert _titles(board.columns) == ["First", "Todo", "Done"]
    assert _positions(board.columns) == [0, 1, 2]


def test_rename_column(board):
    rename_column(board, board.columns[1], "Finished\n")
    assert board.columns[1].title == "Finished"


def test_move_column(board):
    move_column(board, board.columns[1], 0)
    assert _titles(board.columns) == ["Done", "Todo"]
    assert _positions(board.columns) == [0, 1]


def test_move_column_clamps(board):
    move_column(board, board.columns[0], 10)
    assert _titles(board.columns) == ["Done", "Todo"]


def test_delete_column(board):
    delete_column(board, board.columns[0])
    assert _titles(board.columns) == ["Done"]
    assert board.columns[0].position == 0
    assert board.find_card("1") == (None, None)
    assert board.find_group("1") == (None, None)


# --- Groups ---


def test_create_group(board):
    todo = board.columns[0]
    group = create_group(board, todo, "Soon", position=0)
    assert _titles(todo.groups) == ["Soon", "Later"]
    assert _positions(todo.groups) == [0, 1]
    assert group.cards == []
    assert is_temporary(group.id)


def test_find_group_column(board):
    group = board.columns[0].groups[0]
    assert find_group_column(board, group) is board.columns[0]


def test_rename_group(board):
    group = board.columns[0].groups[0]
    rename_group(board, group, "Someday")
    assert group.title == "Someday"


def test_move_group_to_other_column(board):
    group = board.columns[0].groups[0]
    move_group(board, group, board.columns[1])
    assert board.columns[0].groups == []
    assert board.columns[1].groups == [group]
    assert group.cards[0].parent == GroupRef("1")
    check_board(board)


def test_move_group_within_column(board):
    todo = board.columns[0]
    second = create_group(board, todo, "Soon")
    move_group(board, second, todo, position=0)
    assert _titles(todo.groups) == ["Soon", "Later"]
    assert _positions(todo.groups) == [0, 1]


def test_move_group_not_on_board(board):
    group = board.columns[0].groups[0]
    delete_group(board, group)
    with pytest.raises(ValueError):
        move_group(board, group, board.columns[1])


def test_delete_group(board):
    group = board.columns[0].groups[0]
    delete_group(board, group)
    assert board.columns[0].groups == []
    assert board.find_card("3") == (None, None)
    assert [c.text for c in board.columns[0].cards] == ["first", "second"]


def test_delete_group_not_on_board(board):
    group = board.columns[0].groups[0]
    delete_group(board, group)
    with pytest.raises(ValueError, match="not on the board"):
        delete_group(board, group)
