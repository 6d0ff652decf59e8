"""Column mutation operations for kanmark boards."""

from kanmark.identity import IdentityAssigner
from kanmark.model.invariants import insert_at, renumber
from kanmark.models import Board, Column
from kanmark.parser import single_line


def create_column(board: Board, title: str, position: int | None = None) -> Column:
    """Create a new column and add it to the board.

    Returns the created Column.
    """
    col = Column(id=IdentityAssigner.for_board(board).mint("column"), title=single_line(title))
    insert_at(board.columns, col, position)
    return col


def rename_column(board: Board, column: Column, new_title: str) -> None:
    column.title = single_line(new_title)


def move_column(board: Board, column: Column, new_index: int) -> None:
    """Move column to new_index, renumbering every column."""
    all_cols = [col for col in board.columns if col is not column]
    insert_at(all_cols, column, new_index)
    board.columns = all_cols


def delete_column(board: Board, column: Column) -> None:
    """Remove a column with its groups, cards and subtasks."""
    board.columns = [col for col in board.columns if col is not column]
    renumber(board.columns)
