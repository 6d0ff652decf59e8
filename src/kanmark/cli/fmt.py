"""Handlers for 'kanmark fmt' and 'kanmark parse', which work on plain files."""

import sys
from pathlib import Path

from kanmark.cli._common import output_json, read_text
from kanmark.model.writer import board_to_dict
from kanmark.parser import parse_board
from kanmark.writer import serialize_board


def fmt(args) -> int:
    """Normalise board markdown files in place.

    With --check nothing is written; exits 1 if any file would change.
    """
    changed = []
    for path in args.files:
        text = read_text(path, args.json)
        board = parse_board(text, title=Path(path).stem)
        formatted = serialize_board(board, embed_ids=not args.no_ids)
        if formatted == text:
            continue
        changed.append(path)
        if not args.check:
            Path(path).write_text(formatted, encoding="utf-8")

    if args.json:
        output_json({"changed": changed, "check": args.check})
    else:
        verb = "would reformat" if args.check else "reformatted"
        for path in changed:
            print(f"{verb} {path}", file=sys.stderr if args.check else sys.stdout)

    return 1 if args.check and changed else 0


def parse_file(args) -> int:
    """Print the board parsed from a markdown file as JSON."""
    text = read_text(args.file, True)
    board = parse_board(text, title=Path(args.file).stem)
    output_json(board_to_dict(board))
    return 0
