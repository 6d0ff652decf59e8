"""Stable identities for board entities across reparses.

Cards and subtasks carry their identifier inside the task line as a
brace-wrapped token right after the checkbox: ``- [ ] {12} Write docs``.
Parsing reuses a well-formed token and mints a temporary id otherwise.
Columns and groups have no textual token; they get a fresh id on every
parse.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable

from kanmark.ids import is_persisted, is_valid_id, normalize_id, temp_id
from kanmark.models import IdentityCollision

if TYPE_CHECKING:
    from kanmark.models import Board

logger = logging.getLogger(__name__)

KINDS = ("column", "group", "card", "subtask")

# "{12} rest" or "{t0123456789ab} rest"; the token must be followed by
# whitespace or the end of the text.
_TOKEN_RE = re.compile(r"^\{([^{}\s]+)\}(?:\s+|$)")


def split_token(text: str) -> tuple[str | None, str]:
    """Split a leading identity token off task text.

    Returns (id, rest). If there is no well-formed token, returns
    (None, text) with the text untouched.
    """
    match = _TOKEN_RE.match(text)
    if not match or not is_valid_id(match.group(1)):
        return None, text
    token = match.group(1)
    if is_persisted(token):
        token = normalize_id(token)
    return token, text[match.end() :]


def format_token(id_: str) -> str:
    """Render an identifier as its textual token."""
    return f"{{{id_}}}"


class IdentityAssigner:
    """Hands out identifiers, unique per entity kind.

    One assigner covers one parse pass, or one board when used for
    mutations. Every id it issues or reserves is remembered so the same
    id can never be handed out twice.
    """

    def __init__(self, mint: Callable[[], str] = temp_id) -> None:
        self._mint = mint
        self._issued: dict[str, set[str]] = {kind: set() for kind in KINDS}

    @classmethod
    def for_board(cls, board: Board, mint: Callable[[], str] = temp_id) -> IdentityAssigner:
        """Build an assigner seeded with every id already on the board."""
        assigner = cls(mint)
        for kind, ids in board.ids_by_kind().items():
            for id_ in ids:
                assigner.reserve(kind, id_)
        return assigner

    def issued(self, kind: str) -> frozenset[str]:
        return frozenset(self._issued[kind])

    def reserve(self, kind: str, id_: str) -> None:
        """Record an existing id. Raises IdentityCollision on a repeat."""
        if id_ in self._issued[kind]:
            raise IdentityCollision(f"duplicate {kind} id {id_!r}")
        self._issued[kind].add(id_)

    def mint(self, kind: str) -> str:
        """Mint a new temporary id for kind."""
        id_ = self._mint()
        self.reserve(kind, id_)
        return id_

    def claim(self, kind: str, text: str) -> tuple[str, str]:
        """Pick the id for a task line and strip its token.

        Reuses the embedded token when it is well-formed and not already
        taken in this pass; otherwise mints. Returns (id, text_without_token).
        """
        token, rest = split_token(text)
        if token is None:
            return self.mint(kind), text
        if token in self._issued[kind]:
            logger.warning("duplicate %s token {%s}, minting a new id", kind, token)
            return self.mint(kind), rest
        self.reserve(kind, token)
        return token, rest
