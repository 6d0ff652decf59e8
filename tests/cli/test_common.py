"""Tests for shared CLI helpers."""

import subprocess

import pytest

from kanmark.cli._common import entity_id, read_text, save
from kanmark.parser import parse_board

from .conftest import make_args


def _board(repo):
    board = parse_board("# A\n\n- [ ] one\n", title="T")
    board.repo_path = str(repo)
    return board


def test_entity_id():
    assert entity_id("007") == "7"
    assert entity_id("7") == "7"
    assert entity_id("t0123456789ab") == "t0123456789ab"


def test_read_text(tmp_path):
    path = tmp_path / "a.md"
    path.write_text("# A\n")
    assert read_text(str(path), False) == "# A\n"


def test_read_text_missing(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        read_text(str(tmp_path / "gone.md"), False)
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_save(empty_repo):
    keys = save(_board(empty_repo), "Add board", make_args(empty_repo))
    assert keys.board == "1"


def test_save_invalid_board(empty_repo, capsys):
    board = _board(empty_repo)
    board.columns[0].cards[0].position = 4
    with pytest.raises(SystemExit) as exc:
        save(board, "Add board", make_args(empty_repo))
    assert exc.value.code == 1
    assert "not dense" in capsys.readouterr().err


def test_save_git_failure(empty_repo, capsys, monkeypatch):
    def fail(*args, **kwargs):
        raise subprocess.CalledProcessError(128, ["git", "hash-object"], stderr=b"fatal: not a git repository\n")

    monkeypatch.setattr("kanmark.cli._common.save_board", fail)
    with pytest.raises(SystemExit) as exc:
        save(_board(empty_repo), "Add board", make_args(empty_repo, json=True))
    assert exc.value.code == 1
    assert capsys.readouterr().err.strip() == '{"error": "fatal: not a git repository"}'
