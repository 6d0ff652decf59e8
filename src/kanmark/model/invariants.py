"""Ordering helpers and structural checks for boards."""

from kanmark.identity import IdentityAssigner
from kanmark.ids import is_valid_id
from kanmark.models import Board, InvariantError


def renumber(items: list) -> None:
    """Set each item's position to its list index."""
    for i, item in enumerate(items):
        item.position = i


def insert_at(items: list, item, position: int | None) -> None:
    """Insert item at position (clamped, None appends), then renumber."""
    insert_pos = min(position, len(items)) if position is not None else len(items)
    items.insert(max(insert_pos, 0), item)
    renumber(items)


def _check_positions(items: list, where: str) -> None:
    positions = sorted(item.position for item in items)
    if positions != list(range(len(items))):
        raise InvariantError(f"positions in {where} are not dense: {positions}")


def check_board(board: Board) -> None:
    """Raise InvariantError if the board breaks any structural invariant."""
    _check_positions(board.columns, "board")

    # Raises IdentityCollision on duplicates within a kind
    IdentityAssigner.for_board(board)
    for kind, ids in board.ids_by_kind().items():
        for id_ in ids:
            if not is_valid_id(id_):
                raise InvariantError(f"malformed {kind} id {id_!r}")

    for col in board.columns:
        if col.level < 1:
            raise InvariantError(f"column {col.id} has heading level {col.level}")
        _check_positions(col.groups, f"column {col.id}")
        for container in (col, *col.groups):
            _check_positions(container.cards, f"container {container.id}")
            for card in container.cards:
                if card.parent != container.ref:
                    raise InvariantError(f"card {card.id} is owned by {container.ref} but points at {card.parent}")
                _check_positions(card.subtasks, f"card {card.id}")
