"""Tests for 'kanmark fmt' and 'kanmark parse'."""

import json

import pytest

from kanmark.cli.fmt import fmt, parse_file

from .conftest import BOARD_TEXT, make_args

MESSY = "Notes up top.\n# Backlog\n* [ ] First card\n    * [ ] Step one\n* [ ] Second card\n"


def test_fmt_rewrites_file(tmp_path, capsys):
    path = tmp_path / "board.md"
    path.write_text(MESSY)

    assert fmt(make_args(tmp_path, files=[str(path)], check=False, no_ids=True)) == 0
    assert path.read_text() == "# Backlog\n\n- [ ] First card\n  - [ ] Step one\n- [ ] Second card\n"
    assert "reformatted" in capsys.readouterr().out


def test_fmt_embeds_ids(tmp_path):
    path = tmp_path / "board.md"
    path.write_text("# A\n- [ ] one\n")

    fmt(make_args(tmp_path, files=[str(path)], check=False, no_ids=False))
    first = path.read_text()
    assert first.startswith("# A\n\n- [ ] {t")

    fmt(make_args(tmp_path, files=[str(path)], check=False, no_ids=False))
    assert path.read_text() == first


def test_fmt_check(tmp_path, capsys):
    messy = tmp_path / "messy.md"
    messy.write_text(MESSY)
    clean = tmp_path / "clean.md"
    clean.write_text(BOARD_TEXT)

    args = make_args(tmp_path, files=[str(messy), str(clean)], check=True, no_ids=True)
    assert fmt(args) == 1
    assert messy.read_text() == MESSY

    err = capsys.readouterr().err
    assert "would reformat" in err
    assert "messy.md" in err
    assert "clean.md" not in err


def test_fmt_check_clean(tmp_path):
    clean = tmp_path / "clean.md"
    clean.write_text(BOARD_TEXT)
    assert fmt(make_args(tmp_path, files=[str(clean)], check=True, no_ids=True)) == 0


def test_fmt_json(tmp_path, capsys):
    path = tmp_path / "board.md"
    path.write_text(MESSY)
    assert fmt(make_args(tmp_path, json=True, files=[str(path)], check=True, no_ids=True)) == 1
    assert json.loads(capsys.readouterr().out) == {"changed": [str(path)], "check": True}


def test_fmt_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        fmt(make_args(tmp_path, files=[str(tmp_path / "nope.md")], check=False, no_ids=False))
    assert "nope.md" in capsys.readouterr().err


def test_parse_file(tmp_path, capsys):
    path = tmp_path / "plan.md"
    path.write_text(BOARD_TEXT)
    assert parse_file(make_args(tmp_path, file=str(path))) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["title"] == "plan"
    assert [c["title"] for c in data["columns"]] == ["Backlog", "Doing", "Done"]
    assert data["columns"][0]["groups"][0]["cards"][0]["text"] == "Grouped card"
    assert data["columns"][0]["cards"][0]["subtasks"][0]["text"] == "Step one"
