"""Render a Board back to markdown.

The output parses back to the same board: columns become ``#`` headings,
groups ``##`` headings, cards and subtasks checkbox list items.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import yaml

from kanmark.identity import format_token
from kanmark.models import Board, Card, Column, Group, Subtask

INDENT = "  "

# Characters that open inline markup or close an ATX heading. Titles are
# plain text, so these are escaped on output.
_HEADING_SPECIALS = re.compile(r"([\\`*_\[\]<>&#])")


@dataclass
class Heading:
    depth: int
    title: str


@dataclass
class TaskItem:
    completed: bool
    text: str
    token: str | None = None
    children: list["TaskItem"] = field(default_factory=list)


@dataclass
class TaskList:
    items: list[TaskItem] = field(default_factory=list)


Block = Heading | TaskList


def _ordered(items):
    return sorted(items, key=lambda item: item.position)


def _task_item(task: Card | Subtask, embed_ids: bool) -> TaskItem:
    return TaskItem(
        completed=task.completed,
        text=task.text,
        token=format_token(task.id) if embed_ids else None,
    )


def _card_list(cards: list[Card], embed_ids: bool) -> TaskList:
    items = []
    for card in _ordered(cards):
        item = _task_item(card, embed_ids)
        item.children = [_task_item(sub, embed_ids) for sub in _ordered(card.subtasks)]
        items.append(item)
    return TaskList(items)


def _container_blocks(container: Column | Group, embed_ids: bool) -> list[Block]:
    if not container.cards:
        return []
    return [_card_list(container.cards, embed_ids)]


def board_blocks(board: Board, embed_ids: bool = True) -> list[Block]:
    """Build the generic block sequence for a board."""
    blocks: list[Block] = []
    for col in _ordered(board.columns):
        blocks.append(Heading(1, col.title))
        blocks.extend(_container_blocks(col, embed_ids))
        for group in _ordered(col.groups):
            blocks.append(Heading(2, group.title))
            blocks.extend(_container_blocks(group, embed_ids))
    return blocks


def _render_item(item: TaskItem, depth: int) -> list[str]:
    marker = "[x]" if item.completed else "[ ]"
    parts = [marker]
    if item.token:
        parts.append(item.token)
    if item.text:
        parts.append(item.text)
    lines = [f"{INDENT * depth}- {' '.join(parts)}"]
    for child in item.children:
        lines.extend(_render_item(child, depth + 1))
    return lines


def escape_title(title: str) -> str:
    """Backslash-escape characters a heading would otherwise interpret."""
    return _HEADING_SPECIALS.sub(r"\\\1", title)


def render_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f"{'#' * block.depth} {escape_title(block.title)}".rstrip()
    lines: list[str] = []
    for item in block.items:
        lines.extend(_render_item(item, 0))
    return "\n".join(lines)


def render_blocks(blocks: list[Block], meta: dict | None = None) -> str:
    """Render blocks to text, separated by blank lines.

    Meta becomes YAML front-matter if non-empty.
    """
    parts: list[str] = []

    if meta:
        parts.append("---")
        parts.append(yaml.dump(meta, default_flow_style=False, sort_keys=False).rstrip())
        parts.append("---")
        parts.append("")

    for block in blocks:
        parts.append(render_block(block))
        parts.append("")

    if not parts:
        return ""
    return "\n".join(parts).rstrip() + "\n"


def serialize_board(board: Board, embed_ids: bool = True) -> str:
    """Serialize a board to markdown.

    With embed_ids, every card and subtask carries its identity token so a
    reparse keeps its id. Without, the output is a clean export and a
    reparse mints new ids.
    """
    return render_blocks(board_blocks(board, embed_ids), board.meta)
