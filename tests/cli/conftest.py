"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest
from git import Repo

from kanmark.model.writer import save_board
from kanmark.parser import parse_board

BOARD_TEXT = """\
# Backlog

- [ ] First card
  - [ ] Step one
- [ ] Second card

## Later

- [ ] Grouped card

# Doing

# Done

- [x] Finished card
"""


def make_args(repo, **kwargs):
    """Namespace with the options every command shares."""
    defaults = {"repo": str(repo), "json": False, "board": None, "verbose": False}
    defaults.update(kwargs)
    return Namespace(**defaults)


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo."""
    repo = Repo.init(tmp_path)
    (tmp_path / ".gitkeep").write_text("")
    repo.index.add([".gitkeep"])
    repo.index.commit("Initial commit")
    return tmp_path


@pytest.fixture
def initialized_repo(empty_repo):
    """Create a repo with board 1 (3 columns, 1 group, 4 cards, 1 subtask).

    Columns: 1 Backlog, 2 Doing, 3 Done. Group 1 Later sits in Backlog.
    Cards: 1 First card, 2 Second card, 3 Grouped card, 4 Finished card.
    Subtask 1 Step one hangs off card 1.
    """
    board = parse_board(BOARD_TEXT, title="Test Board")
    board.repo_path = str(empty_repo)
    save_board(board, message="Initialize test board")
    return empty_repo
