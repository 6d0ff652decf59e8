"""Handler for 'kanmark init'."""

from pathlib import Path

from kanmark.cli._common import config, output_json, save
from kanmark.git import has_branch, init_repo, is_git_repo
from kanmark.model.loader import list_boards
from kanmark.parser import parse_board

DEFAULT_TEMPLATE = """\
# TODO

- [ ] Task 1
- [ ] Task 2

## Task Group A

- [ ] Task A.1
- [ ] Task A.2

# In Progress

- [ ] Task 3
  - [ ] Task 3.1

# Done

- [x] Task 4
"""


def init_board(args) -> int:
    """Initialize a kanmark board in the repository."""
    repo_path = Path(args.repo).resolve()

    if not is_git_repo(repo_path):
        init_repo(repo_path)

    branch = config(str(repo_path))["branch"]
    if has_branch(repo_path, branch) and list_boards(str(repo_path), branch):
        boards = [{"key": key, "title": title} for key, title in list_boards(str(repo_path), branch)]
        if args.json:
            output_json({"repo_path": str(repo_path), "boards": boards, "created": False})
        else:
            print(f"Board already initialized at {repo_path}")
        return 0

    board = parse_board(DEFAULT_TEMPLATE, title=args.title)
    board.repo_path = str(repo_path)
    keys = save(board, "Initialize kanmark board", args)

    columns = [c.title for c in board.columns]
    if args.json:
        output_json({"repo_path": str(repo_path), "board": keys.board, "columns": columns, "created": True})
    else:
        print(f"Initialized kanmark board {keys.board} at {repo_path}")
        print(f"Columns: {', '.join(columns)}")

    return 0
