"""Tests for loading boards from plain data and from git."""

import pytest
import yaml
from git import Repo

from kanmark.model.loader import board_filename, board_from_dict, list_boards, load_board
from kanmark.model.writer import board_to_dict, save_board
from kanmark.models import ColumnRef, GroupRef, InvariantError

from .conftest import _make_board


def test_board_filename():
    assert board_filename("1", "yaml") == "001.yaml"
    assert board_filename("007", "md") == "007.md"
    assert board_filename("1234", "md") == "1234.md"


# --- Plain data ---


def test_board_from_dict_roundtrip(board):
    again = board_from_dict(board_to_dict(board))
    assert board_to_dict(again) == board_to_dict(board)


def test_board_from_dict_positions_from_order():
    data = {
        "title": "T",
        "columns": [
            {"id": "2", "title": "B", "cards": [{"id": "5", "text": "x"}, {"id": "3", "text": "y"}]},
            {"id": "1", "title": "A", "groups": [{"id": "1", "title": "G", "cards": [{"id": "4", "text": "z"}]}]},
        ],
    }
    board = board_from_dict(data)
    assert [(c.title, c.position) for c in board.columns] == [("B", 0), ("A", 1)]
    assert [(c.text, c.position) for c in board.columns[0].cards] == [("x", 0), ("y", 1)]
    assert board.columns[0].cards[0].parent == ColumnRef("2")
    assert board.columns[1].groups[0].cards[0].parent == GroupRef("1")


def test_board_from_dict_defaults():
    board = board_from_dict({})
    assert board.title == ""
    assert board.columns == []
    assert board.meta == {}
    assert board.sequences == {}


def test_board_from_dict_numeric_ids_become_strings():
    board = board_from_dict({"columns": [{"id": 1, "title": "A", "cards": [{"id": 2, "text": "x"}]}]})
    assert board.columns[0].id == "1"
    assert board.columns[0].cards[0].id == "2"


def test_board_from_dict_missing_id():
    with pytest.raises(InvariantError):
        board_from_dict({"columns": [{"title": "A"}]})


def test_board_from_dict_duplicate_ids():
    data = {"columns": [{"id": "1", "title": "A", "cards": [{"id": "1", "text": "x"}, {"id": "1", "text": "y"}]}]}
    with pytest.raises(InvariantError):
        board_from_dict(data)


# --- Git ---


def test_load_board_missing_branch(empty_repo):
    with pytest.raises(ValueError, match="Branch"):
        load_board(str(empty_repo), "1")


def test_load_board_missing_key(empty_repo):
    save_board(_make_board(empty_repo))
    with pytest.raises(ValueError, match="not found"):
        load_board(str(empty_repo), "2")


def test_load_saved_board(empty_repo):
    keys = save_board(_make_board(empty_repo))
    board = load_board(str(empty_repo), keys.board)

    assert board.key == "1"
    assert board.title == "Test"
    assert board.commit == keys.commit
    assert board.repo_path == str(empty_repo)
    assert [c.title for c in board.columns] == ["Todo", "Done"]
    assert board.raw.startswith("# Todo\n")


def test_load_board_padded_key(empty_repo):
    save_board(_make_board(empty_repo))
    assert load_board(str(empty_repo), "001").key == "1"


def test_load_board_reads_branch_only(empty_repo):
    """Working tree and HEAD are left alone."""
    repo = Repo(empty_repo)
    head = repo.head.commit.hexsha
    save_board(_make_board(empty_repo))

    assert repo.head.commit.hexsha == head
    assert not (empty_repo / "boards").exists()
    assert "kanmark" in [h.name for h in repo.heads]


def test_list_boards(empty_repo):
    first = _make_board(empty_repo)
    save_board(first)
    second = _make_board(empty_repo)
    second.title = "Other"
    save_board(second)

    assert list_boards(str(empty_repo)) == [("1", "Test"), ("2", "Other")]


def test_list_boards_order_is_numeric(empty_repo):
    for i in range(11):
        board = _make_board(empty_repo)
        board.title = f"b{i + 1}"
        save_board(board)

    keys = [key for key, _ in list_boards(str(empty_repo))]
    assert keys == [str(i) for i in range(1, 12)]


def test_stored_yaml_is_readable(empty_repo):
    save_board(_make_board(empty_repo))
    repo = Repo(empty_repo)
    blob = repo.commit("kanmark").tree["boards"]["001.yaml"]
    data = yaml.safe_load(blob.data_stream.read())
    assert data["title"] == "Test"
    assert data["columns"][0]["cards"][0]["text"] == "first"
