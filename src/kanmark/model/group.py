"""Group mutation operations for kanmark boards."""

from kanmark.identity import IdentityAssigner
from kanmark.model.invariants import insert_at, renumber
from kanmark.models import Board, Column, Group
from kanmark.parser import single_line


def create_group(board: Board, column: Column, title: str, position: int | None = None) -> Group:
    """Create a new group inside column. Returns the created Group."""
    group = Group(id=IdentityAssigner.for_board(board).mint("group"), title=single_line(title))
    insert_at(column.groups, group, position)
    return group


def find_group_column(board: Board, group: Group) -> Column | None:
    """Find the column owning a group."""
    for col in board.columns:
        if any(g is group for g in col.groups):
            return col
    return None


def rename_group(board: Board, group: Group, new_title: str) -> None:
    group.title = single_line(new_title)


def move_group(board: Board, group: Group, target_column: Column, position: int | None = None) -> None:
    """Move group to target_column at position.

    Cards keep pointing at the group, so nothing below it changes.
    """
    source_column = find_group_column(board, group)
    if source_column is None:
        raise ValueError(f"Group '{group.id}' is not on the board")

    if source_column is not target_column:
        source_column.groups = [g for g in source_column.groups if g is not group]
        renumber(source_column.groups)
        insert_at(target_column.groups, group, position)
        return

    groups = [g for g in source_column.groups if g is not group]
    insert_at(groups, group, position)
    source_column.groups = groups


def delete_group(board: Board, group: Group) -> None:
    """Remove a group with its cards and subtasks."""
    col = find_group_column(board, group)
    if col is None:
        raise ValueError(f"Group '{group.id}' is not on the board")
    col.groups = [g for g in col.groups if g is not group]
    renumber(col.groups)
