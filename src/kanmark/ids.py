"""Identifier comparison and generation.

Two kinds of identifier live on a board. Persisted ids are decimal
storage keys handed out by the store ("1", "42"). Temporary ids are
minted client-side before the first save: "t" followed by 12 hex digits.
"""

import re
import secrets

TEMP_PREFIX = "t"
TEMP_HEX_DIGITS = 12

_PERSISTED_RE = re.compile(r"^\d+$")
_TEMP_RE = re.compile(rf"^{TEMP_PREFIX}[0-9a-f]{{{TEMP_HEX_DIGITS}}}$")


def normalize_id(s: str) -> str:
    """Strip leading zeros from an ID, preserving at least one digit.

    "001" → "1", "0" → "0", "010" → "10"
    """
    stripped = s.lstrip("0")
    return stripped or "0"


def pad_id(s: str, width: int) -> str:
    """Zero-pad an ID to the given width.

    "1" with width=3 → "001", "10" with width=3 → "010"
    """
    return s.zfill(width)


def compare_ids(left: str, right: str) -> int:
    """Compare two IDs, padding with leading zeros.

    Returns -1 if left < right, 0 if equal, 1 if left > right.
    """
    max_len = max(len(left), len(right))
    left_padded = left.zfill(max_len)
    right_padded = right.zfill(max_len)

    if left_padded < right_padded:
        return -1
    if left_padded > right_padded:
        return 1
    return 0


def max_id(ids: list[str]) -> str | None:
    """Find the highest persisted ID from a list, or None if there is none.

    Temporary ids are skipped.
    """
    persisted = [id_ for id_ in ids if is_persisted(id_)]
    if not persisted:
        return None

    highest = persisted[0]
    for id_ in persisted[1:]:
        if compare_ids(id_, highest) > 0:
            highest = id_
    return highest


def next_id(current_max: str | None) -> str:
    """Generate the next storage key after current_max.

    - If None, returns "1"
    - Otherwise returns str(int + 1), so "9" → "10", "007" → "8"
    """
    if current_max is None:
        return "1"
    return str(int(current_max) + 1)


def temp_id() -> str:
    """Mint a temporary identifier from 48 random bits."""
    return TEMP_PREFIX + secrets.token_hex(TEMP_HEX_DIGITS // 2)


def is_temporary(id_: str) -> bool:
    """True for client-minted ids that the store has not replaced yet."""
    return bool(_TEMP_RE.match(id_))


def is_persisted(id_: str) -> bool:
    """True for storage-assigned numeric keys."""
    return bool(_PERSISTED_RE.match(id_))


def is_valid_id(id_: str) -> bool:
    """True for any well-formed identifier, persisted or temporary."""
    return is_persisted(id_) or is_temporary(id_)
