"""Shared test helpers for model tests."""

import pytest
from git import Repo

from kanmark.models import Board, Card, Column, ColumnRef, Group, GroupRef, Subtask


def _make_card(id_, text, parent, completed=False, position=0, subtasks=None):
    """Helper to build a card, numbering its subtasks."""
    card = Card(id=id_, text=text, parent=parent, completed=completed, position=position)
    for i, (sub_id, sub_text) in enumerate(subtasks or []):
        card.subtasks.append(Subtask(id=sub_id, text=sub_text, position=i))
    return card


def _make_board(repo_path=""):
    """Helper to build a small persisted board.

    Column 1 "Todo" holds cards 1 and 2 plus group 1 "Later" with card 3.
    Column 2 "Done" holds card 4. Card 1 has subtasks 1 and 2.
    """
    todo = Column(id="1", title="Todo", position=0)
    todo.cards = [
        _make_card("1", "first", ColumnRef("1"), position=0, subtasks=[("1", "step a"), ("2", "step b")]),
        _make_card("2", "second", ColumnRef("1"), position=1),
    ]
    later = Group(id="1", title="Later", position=0)
    later.cards = [_make_card("3", "third", GroupRef("1"))]
    todo.groups = [later]

    done = Column(id="2", title="Done", position=1)
    done.cards = [_make_card("4", "fourth", ColumnRef("2"), completed=True)]

    return Board(title="Test", columns=[todo, done], repo_path=str(repo_path))


@pytest.fixture
def board():
    return _make_board()


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo."""
    repo = Repo.init(tmp_path)
    (tmp_path / ".gitkeep").write_text("")
    repo.index.add([".gitkeep"])
    repo.index.commit("Initial commit")
    return tmp_path
