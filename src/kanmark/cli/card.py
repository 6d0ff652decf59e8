"""Handlers for 'kanmark card' and 'kanmark subtask' commands."""

from kanmark.cli._common import (
    checkbox,
    entity_id,
    error,
    find_card,
    find_column,
    find_group,
    find_subtask,
    load_board_or_die,
    output_json,
    output_result,
    position_arg,
    save,
)
from kanmark.model.card import (
    create_card,
    create_subtask,
    delete_card,
    delete_subtask,
    find_card_container,
    move_card,
    set_card_completed,
    set_card_text,
    set_subtask_completed,
)
from kanmark.models import Board


def _target(board: Board, args):
    """Resolve --group/--column into a container, defaulting to the first column."""
    if getattr(args, "group", None):
        return find_group(board, args.group, args.json)
    if getattr(args, "column", None):
        return find_column(board, args.column, args.json)
    if not board.columns:
        error("Board has no columns.", args.json)
    return board.columns[0]


def _card_dict(card) -> dict:
    return {
        "id": card.id,
        "text": card.text,
        "completed": card.completed,
        "subtasks": [{"id": s.id, "text": s.text, "completed": s.completed} for s in card.subtasks],
    }


def card_list(args) -> int:
    """List cards grouped by column and group."""
    board = load_board_or_die(args)

    column_id = entity_id(args.column) if args.column else None
    sections = []
    for col in board.columns:
        if column_id and col.id != column_id:
            continue
        sections.append((col, None, col.cards))
        for group in col.groups:
            sections.append((col, group, group.cards))

    if args.json:
        items = []
        for col, group, cards in sections:
            for card in cards:
                data = _card_dict(card)
                data["column"] = {"id": col.id, "title": col.title}
                if group is not None:
                    data["group"] = {"id": group.id, "title": group.title}
                items.append(data)
        output_json(items)
    else:
        for col, group, cards in sections:
            if group is None:
                print(f"{col.id}  {col.title}")
            else:
                print(f"  {group.id}  {group.title}")
            indent = "  " if group is None else "    "
            for card in cards:
                print(f"{indent}{card.id}  {checkbox(card.completed)} {card.text}")
                for sub in card.subtasks:
                    print(f"{indent}  {sub.id}  {checkbox(sub.completed)} {sub.text}")

    return 0


def card_add(args) -> int:
    """Create a new card."""
    board = load_board_or_die(args)
    container = _target(board, args)
    card = create_card(board, container.ref, args.text, completed=args.done, position=position_arg(args))
    keys = save(board, f"Add card: {card.text}", args)

    output_result(
        {"id": card.id, "text": card.text, "container": container.id, "commit": keys.commit},
        f"Created card {card.id} in {container.title} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def card_move(args) -> int:
    """Move a card to another column or group, or reorder it."""
    board = load_board_or_die(args)
    card = find_card(board, args.id, args.json)
    if args.group or args.column:
        target = _target(board, args)
    else:
        target = find_card_container(board, card.id)

    move_card(board, card.id, target.ref, position=position_arg(args))
    keys = save(board, f"Move card {card.id} to {target.title}", args)

    output_result(
        {"id": card.id, "container": target.id, "commit": keys.commit},
        f"Moved card {card.id} to {target.title} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def _set_done(args, completed: bool) -> int:
    board = load_board_or_die(args)
    card = find_card(board, args.id, args.json)
    set_card_completed(board, card.id, completed)
    verb = "Complete" if completed else "Reopen"
    keys = save(board, f"{verb} card {card.id}", args)

    output_result(
        {"id": card.id, "completed": completed, "commit": keys.commit},
        f"{checkbox(completed)} {card.text} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def card_done(args) -> int:
    """Mark a card as completed."""
    return _set_done(args, True)


def card_undo(args) -> int:
    """Mark a card as not completed."""
    return _set_done(args, False)


def card_edit(args) -> int:
    """Replace a card's text."""
    board = load_board_or_die(args)
    card = find_card(board, args.id, args.json)
    set_card_text(board, card.id, args.text)
    keys = save(board, f"Edit card {card.id}", args)

    output_result(
        {"id": card.id, "text": card.text, "commit": keys.commit},
        f"Updated card {card.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def card_delete(args) -> int:
    """Delete a card and its subtasks."""
    board = load_board_or_die(args)
    card = find_card(board, args.id, args.json)
    delete_card(board, card.id)
    keys = save(board, f"Delete card {card.id}", args)

    output_result(
        {"id": card.id, "commit": keys.commit},
        f"Deleted card {card.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0


# --- Subtasks ---


def subtask_add(args) -> int:
    """Create a subtask under a card."""
    board = load_board_or_die(args)
    card = find_card(board, args.card, args.json)
    sub = create_subtask(board, card.id, args.text, completed=args.done, position=position_arg(args))
    keys = save(board, f"Add subtask to card {card.id}: {sub.text}", args)

    output_result(
        {"id": sub.id, "card": card.id, "text": sub.text, "commit": keys.commit},
        f"Created subtask {sub.id} under card {card.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def _set_subtask_done(args, completed: bool) -> int:
    board = load_board_or_die(args)
    sub = find_subtask(board, args.id, args.json)
    set_subtask_completed(board, sub.id, completed)
    verb = "Complete" if completed else "Reopen"
    keys = save(board, f"{verb} subtask {sub.id}", args)

    output_result(
        {"id": sub.id, "completed": completed, "commit": keys.commit},
        f"{checkbox(completed)} {sub.text} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def subtask_done(args) -> int:
    """Mark a subtask as completed."""
    return _set_subtask_done(args, True)


def subtask_undo(args) -> int:
    """Mark a subtask as not completed."""
    return _set_subtask_done(args, False)


def subtask_delete(args) -> int:
    """Delete a subtask."""
    board = load_board_or_die(args)
    sub = find_subtask(board, args.id, args.json)
    delete_subtask(board, sub.id)
    keys = save(board, f"Delete subtask {sub.id}", args)

    output_result(
        {"id": sub.id, "commit": keys.commit},
        f"Deleted subtask {sub.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0
