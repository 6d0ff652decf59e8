"""Data models for kanmark boards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


class InvariantError(ValueError):
    """A board breaks one of its structural invariants."""


class IdentityCollision(InvariantError):
    """Two entities of the same kind were given the same identifier."""


@dataclass(frozen=True)
class ColumnRef:
    """Card container reference: directly inside a column."""

    id: str


@dataclass(frozen=True)
class GroupRef:
    """Card container reference: inside a group."""

    id: str


Parent = ColumnRef | GroupRef


@dataclass
class Subtask:
    """A checkbox item nested one level under a card."""

    id: str
    text: str
    completed: bool = False
    position: int = 0


@dataclass
class Card:
    """A checkbox task inside a column or a group."""

    id: str
    text: str
    parent: Parent
    completed: bool = False
    position: int = 0
    subtasks: list[Subtask] = field(default_factory=list)


@dataclass
class Group:
    """A depth-2 section inside a column."""

    id: str
    title: str
    position: int = 0
    cards: list[Card] = field(default_factory=list)

    @property
    def ref(self) -> GroupRef:
        return GroupRef(self.id)


@dataclass
class Column:
    """A depth-1 section of the board."""

    id: str
    title: str
    position: int = 0
    level: int = 1
    groups: list[Group] = field(default_factory=list)
    cards: list[Card] = field(default_factory=list)

    @property
    def ref(self) -> ColumnRef:
        return ColumnRef(self.id)


Container = Column | Group


@dataclass
class Board:
    """The full board state."""

    title: str = ""
    columns: list[Column] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    raw: str | None = None
    repo_path: str = ""
    key: str | None = None
    commit: str | None = None
    sequences: dict[str, int] = field(default_factory=dict)

    def find_column(self, column_id: str) -> Column | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def find_group(self, group_id: str) -> tuple[Column, Group] | tuple[None, None]:
        for col in self.columns:
            for group in col.groups:
                if group.id == group_id:
                    return col, group
        return None, None

    def container(self, parent: Parent) -> Container | None:
        """Resolve a container reference, or None if it dangles."""
        if isinstance(parent, ColumnRef):
            return self.find_column(parent.id)
        return self.find_group(parent.id)[1]

    def iter_containers(self) -> Iterator[Container]:
        """Yield every card container in board order."""
        for col in self.columns:
            yield col
            yield from col.groups

    def iter_cards(self) -> Iterator[Card]:
        """Yield every card in board (serialization) order."""
        for container in self.iter_containers():
            yield from container.cards

    def find_card(self, card_id: str) -> tuple[Container, Card] | tuple[None, None]:
        for container in self.iter_containers():
            for card in container.cards:
                if card.id == card_id:
                    return container, card
        return None, None

    def find_subtask(self, subtask_id: str) -> tuple[Card, Subtask] | tuple[None, None]:
        for card in self.iter_cards():
            for sub in card.subtasks:
                if sub.id == subtask_id:
                    return card, sub
        return None, None

    def ids_by_kind(self) -> dict[str, list[str]]:
        """Every entity id on the board, per kind, in board order."""
        ids: dict[str, list[str]] = {"column": [], "group": [], "card": [], "subtask": []}
        for col in self.columns:
            ids["column"].append(col.id)
            ids["group"].extend(group.id for group in col.groups)
        for card in self.iter_cards():
            ids["card"].append(card.id)
            ids["subtask"].extend(sub.id for sub in card.subtasks)
        return ids
