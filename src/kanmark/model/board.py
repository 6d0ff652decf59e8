"""Whole-board operations: identifier remapping and reparse from text."""

import logging

from kanmark.models import Board, IdentityCollision
from kanmark.parser import parse_board

logger = logging.getLogger(__name__)

IdMapping = dict[str, dict[str, str]]


def remap_ids(board: Board, mapping: IdMapping) -> None:
    """Replace ids per kind ({kind: {old: new}}) and fix container refs.

    The resulting ids are checked before anything is touched, so the
    board is either fully remapped or left as it was.
    """
    for kind, ids in board.ids_by_kind().items():
        renames = mapping.get(kind, {})
        result = [renames.get(id_, id_) for id_ in ids]
        if len(set(result)) != len(result):
            raise IdentityCollision(f"remapping {kind} ids would create duplicates")

    columns = mapping.get("column", {})
    groups = mapping.get("group", {})
    cards = mapping.get("card", {})
    subtasks = mapping.get("subtask", {})

    for col in board.columns:
        col.id = columns.get(col.id, col.id)
        for group in col.groups:
            group.id = groups.get(group.id, group.id)
        for container in (col, *col.groups):
            for card in container.cards:
                card.id = cards.get(card.id, card.id)
                card.parent = container.ref
                for sub in card.subtasks:
                    sub.id = subtasks.get(sub.id, sub.id)


def _match_sections(old: Board, new: Board) -> IdMapping:
    """Carry column and group ids over by title, first match wins.

    Headings carry no identity token, so a column keeps its id only while
    its title is unchanged.
    """
    mapping: IdMapping = {"column": {}, "group": {}}
    unused = list(old.columns)
    for col in new.columns:
        match = next((c for c in unused if c.title == col.title), None)
        if match is None:
            continue
        unused.remove(match)
        mapping["column"][col.id] = match.id
        unused_groups = list(match.groups)
        for group in col.groups:
            group_match = next((g for g in unused_groups if g.title == group.title), None)
            if group_match is not None:
                unused_groups.remove(group_match)
                mapping["group"][group.id] = group_match.id
    return mapping


def reparse_board(board: Board, text: str) -> Board:
    """Rebuild the board's structure from edited text.

    The new tree is built aside and swapped in with one assignment, so
    readers never see a half-rebuilt board. Storage key, commit, title
    and sequences are kept; cards and subtasks keep ids via their tokens.
    """
    fresh = parse_board(text, title=board.title)
    remap_ids(fresh, _match_sections(board, fresh))
    logger.debug("reparsed board %s: %d columns", board.key, len(fresh.columns))
    board.columns = fresh.columns
    board.meta = fresh.meta
    board.raw = fresh.raw
    return board
