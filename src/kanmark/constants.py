"""Shared constants for kanmark."""

BRANCH_NAME = "kanmark"
BOARDS_DIR = "boards"
KEY_WIDTH = 3
