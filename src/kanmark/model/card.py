"""Card and subtask mutation operations for kanmark boards."""

from kanmark.identity import IdentityAssigner
from kanmark.model.invariants import insert_at, renumber
from kanmark.models import Board, Card, Container, Parent, Subtask
from kanmark.parser import single_line


def _container(board: Board, parent: Parent) -> Container:
    container = board.container(parent)
    if container is None:
        raise ValueError(f"Container {parent} not found")
    return container


def _card(board: Board, card_id: str) -> tuple[Container, Card]:
    container, card = board.find_card(card_id)
    if card is None:
        raise ValueError(f"Card '{card_id}' not found")
    return container, card


def _subtask(board: Board, subtask_id: str) -> tuple[Card, Subtask]:
    card, sub = board.find_subtask(subtask_id)
    if sub is None:
        raise ValueError(f"Subtask '{subtask_id}' not found")
    return card, sub


def create_card(
    board: Board,
    parent: Parent,
    text: str,
    completed: bool = False,
    position: int | None = None,
) -> Card:
    """Create a new card in the column or group that parent points at.

    Returns the created Card.
    """
    container = _container(board, parent)
    card = Card(
        id=IdentityAssigner.for_board(board).mint("card"),
        text=single_line(text),
        parent=container.ref,
        completed=completed,
    )
    insert_at(container.cards, card, position)
    return card


def find_card_container(board: Board, card_id: str) -> Container | None:
    """Find the column or group containing a card."""
    return board.find_card(card_id)[0]


def move_card(board: Board, card_id: str, target: Parent, position: int | None = None) -> None:
    """Move a card to the target container at position.

    Handles same-container reorder with a single list rebuild; a move to
    another column or group re-points the card's parent.
    """
    source, card = _card(board, card_id)
    target_container = _container(board, target)

    if source is target_container:
        cards = [c for c in source.cards if c is not card]
        insert_at(cards, card, position)
        source.cards = cards
        return

    source.cards = [c for c in source.cards if c is not card]
    renumber(source.cards)
    card.parent = target_container.ref
    insert_at(target_container.cards, card, position)


def set_card_text(board: Board, card_id: str, text: str) -> None:
    _card(board, card_id)[1].text = single_line(text)


def set_card_completed(board: Board, card_id: str, completed: bool) -> None:
    _card(board, card_id)[1].completed = completed


def toggle_card(board: Board, card_id: str) -> bool:
    """Flip a card's completion. Returns the new state."""
    card = _card(board, card_id)[1]
    card.completed = not card.completed
    return card.completed


def delete_card(board: Board, card_id: str) -> None:
    """Remove a card and its subtasks."""
    container, card = _card(board, card_id)
    container.cards = [c for c in container.cards if c is not card]
    renumber(container.cards)


# --- Subtasks ---


def create_subtask(
    board: Board,
    card_id: str,
    text: str,
    completed: bool = False,
    position: int | None = None,
) -> Subtask:
    """Create a subtask under a card. Returns the created Subtask."""
    card = _card(board, card_id)[1]
    sub = Subtask(
        id=IdentityAssigner.for_board(board).mint("subtask"),
        text=single_line(text),
        completed=completed,
    )
    insert_at(card.subtasks, sub, position)
    return sub


def move_subtask(
    board: Board,
    subtask_id: str,
    position: int | None = None,
    card_id: str | None = None,
) -> None:
    """Reorder a subtask, optionally moving it under another card."""
    source, sub = _subtask(board, subtask_id)
    target = _card(board, card_id)[1] if card_id is not None else source

    if source is target:
        subtasks = [s for s in source.subtasks if s is not sub]
        insert_at(subtasks, sub, position)
        source.subtasks = subtasks
        return

    source.subtasks = [s for s in source.subtasks if s is not sub]
    renumber(source.subtasks)
    insert_at(target.subtasks, sub, position)


def set_subtask_text(board: Board, subtask_id: str, text: str) -> None:
    _subtask(board, subtask_id)[1].text = single_line(text)


def toggle_subtask(board: Board, subtask_id: str) -> bool:
    """Flip a subtask's completion. Returns the new state."""
    sub = _subtask(board, subtask_id)[1]
    sub.completed = not sub.completed
    return sub.completed


def set_subtask_completed(board: Board, subtask_id: str, completed: bool) -> None:
    _subtask(board, subtask_id)[1].completed = completed


def delete_subtask(board: Board, subtask_id: str) -> None:
    card, sub = _subtask(board, subtask_id)
    card.subtasks = [s for s in card.subtasks if s is not sub]
    renumber(card.subtasks)
