"""Parse markdown task boards into the Board model.

Only two levels of structure are modelled. A ``#`` heading opens a column,
a ``##`` heading inside a column opens a group, and checkbox list items
become cards (one nested level becomes subtasks). Everything else is
dropped without complaint.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from functools import reduce

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from kanmark.identity import IdentityAssigner
from kanmark.models import Board, Card, Column, Group, Subtask

logger = logging.getLogger(__name__)

_LIST_TYPES = ("bullet_list", "ordered_list")

# "[ ] text" or "[x] text"; lowercase x only.
_CHECKBOX_RE = re.compile(r"^\[( |x)\](?:\s+|$)")


def _extract_front_matter(text: str) -> tuple[str, dict]:
    """Extract YAML front-matter from text. Returns (remaining_text, meta)."""
    if not text.startswith("---"):
        return text, {}

    # Find the closing ---
    match = re.match(r"^---\n(.*?)\n---\n?", text, re.DOTALL)
    if not match:
        return text, {}

    yaml_content = match.group(1)
    remaining = text[match.end() :]

    try:
        meta = yaml.safe_load(yaml_content) or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}

    return remaining, meta


def tokenize(text: str) -> list[SyntaxTreeNode]:
    """Tokenize markdown into its top-level block nodes."""
    md = MarkdownIt("commonmark")
    return SyntaxTreeNode(md.parse(text)).children


def flatten_text(node: SyntaxTreeNode) -> str:
    """Concatenate the text of every inline descendant, dropping markup."""
    if node.type in ("text", "code_inline"):
        return node.content
    if node.type in ("softbreak", "hardbreak"):
        return " "
    return "".join(flatten_text(child) for child in node.children)


def _heading_depth(node: SyntaxTreeNode) -> int:
    return int(node.tag[1:])


def single_line(text: str) -> str:
    """Fold line breaks into single spaces and trim."""
    return " ".join(line.strip() for line in text.splitlines()).strip()


def _task_line(item: SyntaxTreeNode) -> tuple[bool, str] | None:
    """Read a list item as (completed, text), or None if it is not a task.

    The text is the item's first paragraph source, verbatim, with line
    breaks folded into spaces and the checkbox marker removed.
    """
    if not item.children or item.children[0].type != "paragraph":
        return None
    paragraph = item.children[0]
    if not paragraph.children:
        return None
    source = single_line(paragraph.children[0].content)
    match = _CHECKBOX_RE.match(source)
    if not match:
        return None
    return match.group(1) == "x", source[match.end() :].strip()


def _sublists(item: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    return [child for child in item.children if child.type in _LIST_TYPES]


@dataclass(frozen=True)
class Scan:
    """Accumulator threaded through the reduction.

    board is built up in place; column and group are the currently open
    sections, if any.
    """

    board: Board
    column: Column | None = None
    group: Group | None = None


def _on_heading(scan: Scan, node: SyntaxTreeNode, ids: IdentityAssigner) -> Scan:
    depth = _heading_depth(node)
    title = flatten_text(node).strip()

    if depth == 1:
        column = Column(
            id=ids.mint("column"),
            title=title,
            position=len(scan.board.columns),
            level=depth,
        )
        scan.board.columns.append(column)
        return replace(scan, column=column, group=None)

    if depth == 2:
        if scan.column is None:
            logger.debug("ignoring group %r outside any column", title)
            return scan
        group = Group(id=ids.mint("group"), title=title, position=len(scan.column.groups))
        scan.column.groups.append(group)
        return replace(scan, group=group)

    logger.debug("ignoring h%d %r", depth, title)
    return scan


def _subtasks(card: Card, item: SyntaxTreeNode, ids: IdentityAssigner) -> None:
    for sublist in _sublists(item):
        for subitem in sublist.children:
            task = _task_line(subitem)
            if task is None:
                logger.debug("ignoring non-task subitem")
                continue
            completed, text = task
            sub_id, text = ids.claim("subtask", text)
            card.subtasks.append(
                Subtask(
                    id=sub_id,
                    text=text.strip(),
                    completed=completed,
                    position=len(card.subtasks),
                )
            )


def _on_list(scan: Scan, node: SyntaxTreeNode, ids: IdentityAssigner) -> Scan:
    if scan.column is None:
        logger.debug("ignoring list outside any column")
        return scan

    container = scan.group if scan.group is not None else scan.column
    for item in node.children:
        task = _task_line(item)
        if task is None:
            logger.debug("ignoring non-task list item")
            continue
        completed, text = task
        card_id, text = ids.claim("card", text)
        card = Card(
            id=card_id,
            text=text.strip(),
            parent=container.ref,
            completed=completed,
            position=len(container.cards),
        )
        _subtasks(card, item, ids)
        container.cards.append(card)
    return scan


def step(scan: Scan, node: SyntaxTreeNode, ids: IdentityAssigner) -> Scan:
    """Fold one top-level block node into the scan."""
    if node.type == "heading":
        return _on_heading(scan, node, ids)
    if node.type in _LIST_TYPES:
        return _on_list(scan, node, ids)
    logger.debug("ignoring %s block", node.type)
    return scan


def reduce_nodes(
    nodes: list[SyntaxTreeNode],
    title: str = "",
    meta: dict | None = None,
    assigner: IdentityAssigner | None = None,
) -> Board:
    """Reduce top-level block nodes into a Board in a single pass."""
    ids = assigner or IdentityAssigner()
    start = Scan(board=Board(title=title, meta=dict(meta or {})))
    return reduce(lambda scan, node: step(scan, node, ids), nodes, start).board


def parse_board(text: str, title: str = "", assigner: IdentityAssigner | None = None) -> Board:
    """Parse a markdown document into a Board.

    Never raises for malformed markup. The only failure is an
    IdentityCollision from the assigner, which means ids were minted twice.
    """
    body, meta = _extract_front_matter(text)
    if not title:
        title = str(meta.get("title") or "")
    board = reduce_nodes(tokenize(body), title=title, meta=meta, assigner=assigner)
    board.raw = text
    return board
