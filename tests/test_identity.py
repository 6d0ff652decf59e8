"""Tests for identity tokens and the identity assigner."""

import itertools

import pytest

from kanmark.identity import IdentityAssigner, format_token, split_token
from kanmark.models import IdentityCollision
from kanmark.parser import parse_board


def _counter_mint():
    counter = itertools.count(1)
    return lambda: f"t{next(counter):012x}"


def test_split_token_persisted():
    assert split_token("{12} Write docs") == ("12", "Write docs")


def test_split_token_normalizes_zeros():
    assert split_token("{007} x") == ("7", "x")


def test_split_token_temporary():
    assert split_token("{t0123456789ab} x") == ("t0123456789ab", "x")


def test_split_token_alone():
    assert split_token("{5}") == ("5", "")


def test_split_token_absent():
    assert split_token("Write docs") == (None, "Write docs")


def test_split_token_malformed_left_in_text():
    assert split_token("{not an id} x") == (None, "{not an id} x")
    assert split_token("{abc} x") == (None, "{abc} x")
    assert split_token("{12}x") == (None, "{12}x")


def test_format_token():
    assert format_token("12") == "{12}"


def test_claim_reuses_token():
    ids = IdentityAssigner()
    assert ids.claim("card", "{3} hello") == ("3", "hello")


def test_claim_mints_without_token():
    ids = IdentityAssigner(_counter_mint())
    assert ids.claim("card", "hello") == ("t000000000001", "hello")


def test_claim_duplicate_token_mints():
    """A copy-pasted token keeps its first owner; the copy gets a new id."""
    ids = IdentityAssigner(_counter_mint())
    assert ids.claim("card", "{3} a") == ("3", "a")
    assert ids.claim("card", "{3} b") == ("t000000000001", "b")


def test_kinds_are_separate():
    ids = IdentityAssigner()
    ids.claim("card", "{3} a")
    assert ids.claim("subtask", "{3} b") == ("3", "b")


def test_mint_collision_is_fatal():
    ids = IdentityAssigner(lambda: "t000000000001")
    ids.mint("card")
    with pytest.raises(IdentityCollision):
        ids.mint("card")


def test_reserve_duplicate_raises():
    ids = IdentityAssigner()
    ids.reserve("column", "1")
    with pytest.raises(IdentityCollision):
        ids.reserve("column", "1")


def test_for_board_seeds_existing_ids():
    board = parse_board("# A\n- [ ] {1} one\n  - [ ] {2} sub\n")
    ids = IdentityAssigner.for_board(board)
    assert "1" in ids.issued("card")
    assert "2" in ids.issued("subtask")
    assert board.columns[0].id in ids.issued("column")
    with pytest.raises(IdentityCollision):
        ids.reserve("card", "1")


def test_parse_collision_propagates():
    """A broken id source aborts the parse instead of returning a bad board."""
    ids = IdentityAssigner(lambda: "t000000000001")
    with pytest.raises(IdentityCollision):
        parse_board("# A\n- [ ] one\n- [ ] two\n", assigner=ids)
