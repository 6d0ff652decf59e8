"""Handlers for 'kanmark column' and 'kanmark group' commands."""

from kanmark.cli._common import (
    build_column_summaries,
    find_column,
    find_group,
    format_column_line,
    load_board_or_die,
    output_json,
    output_result,
    position_arg,
    save,
)
from kanmark.model.column import create_column, delete_column, move_column, rename_column
from kanmark.model.group import create_group, delete_group, find_group_column, move_group, rename_group


def column_list(args) -> int:
    """List all columns."""
    board = load_board_or_die(args)
    items = build_column_summaries(board)

    if args.json:
        output_json(items)
    else:
        for c in items:
            print(format_column_line(c))

    return 0


def column_add(args) -> int:
    """Create a new column."""
    board = load_board_or_die(args)
    col = create_column(board, args.title, position=position_arg(args))
    keys = save(board, f"Add column: {args.title}", args)

    output_result(
        {"id": col.id, "title": col.title, "commit": keys.commit},
        f"Created column {col.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def column_rename(args) -> int:
    """Rename a column."""
    board = load_board_or_die(args)
    col = find_column(board, args.id, args.json)
    old_title = col.title
    rename_column(board, col, args.new_title)
    keys = save(board, f"Rename column: {old_title} -> {col.title}", args)

    output_result(
        {"id": col.id, "title": col.title, "commit": keys.commit},
        f"Renamed column {col.id} to {col.title} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def column_move(args) -> int:
    """Move a column to a new position."""
    board = load_board_or_die(args)
    col = find_column(board, args.id, args.json)
    move_column(board, col, position_arg(args))
    keys = save(board, f"Move column {col.title}", args)

    output_result(
        {"id": col.id, "position": col.position + 1, "commit": keys.commit},
        f"Moved column {col.id} to position {col.position + 1} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def column_delete(args) -> int:
    """Delete a column with everything in it."""
    board = load_board_or_die(args)
    col = find_column(board, args.id, args.json)
    delete_column(board, col)
    keys = save(board, f"Delete column {col.title}", args)

    output_result(
        {"id": col.id, "commit": keys.commit},
        f"Deleted column {col.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0


# --- Groups ---


def group_add(args) -> int:
    """Create a new group inside a column."""
    board = load_board_or_die(args)
    col = find_column(board, args.column, args.json)
    group = create_group(board, col, args.title, position=position_arg(args))
    keys = save(board, f"Add group: {args.title}", args)

    output_result(
        {"id": group.id, "title": group.title, "column": col.id, "commit": keys.commit},
        f"Created group {group.id} in {col.title} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def group_rename(args) -> int:
    """Rename a group."""
    board = load_board_or_die(args)
    group = find_group(board, args.id, args.json)
    rename_group(board, group, args.new_title)
    keys = save(board, f"Rename group {group.id}", args)

    output_result(
        {"id": group.id, "title": group.title, "commit": keys.commit},
        f"Renamed group {group.id} to {group.title} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def group_move(args) -> int:
    """Move a group within its column or to another column."""
    board = load_board_or_die(args)
    group = find_group(board, args.id, args.json)
    if args.column:
        target = find_column(board, args.column, args.json)
    else:
        target = find_group_column(board, group)
    move_group(board, group, target, position=position_arg(args))
    keys = save(board, f"Move group {group.title} to {target.title}", args)

    output_result(
        {"id": group.id, "column": target.id, "commit": keys.commit},
        f"Moved group {group.id} to {target.title} ({keys.commit[:7]})",
        args.json,
    )

    return 0


def group_delete(args) -> int:
    """Delete a group with its cards."""
    board = load_board_or_die(args)
    group = find_group(board, args.id, args.json)
    delete_group(board, group)
    keys = save(board, f"Delete group {group.title}", args)

    output_result(
        {"id": group.id, "commit": keys.commit},
        f"Deleted group {group.id} ({keys.commit[:7]})",
        args.json,
    )

    return 0
