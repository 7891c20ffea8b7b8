"""Task and column identifiers.

Real ids are uuid4 strings. Display ids are short numeric labels meant
for humans; they are not guaranteed unique.
"""

import random
import uuid
from typing import Iterable

SEQUENTIAL = "sequential"
RANDOM = "random"


def compare_ids(left: str, right: str) -> int:
    """Compare two display IDs, padding with leading zeros.

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
    """Find the highest ID from a list, or None if empty."""
    if not ids:
        return None

    highest = ids[0]
    for id_ in ids[1:]:
        if compare_ids(id_, highest) > 0:
            highest = id_
    return highest


def next_id(current_max: str | None) -> str:
    """Generate the next ID after current_max.

    - If None, returns "1"
    - If numeric (e.g., "9"), returns str(int + 1) (e.g., "10")
    - If non-numeric (e.g., "fish"), returns "1" + "0" * len (e.g., "10000")
    """
    if current_max is None:
        return "1"

    try:
        return str(int(current_max) + 1)
    except ValueError:
        return "1" + "0" * len(current_max)


class IdGenerator:
    """Hands out uuids for tasks and columns and short display ids.

    ``mode`` is "sequential" (one past the highest existing display id)
    or "random" (a three digit number, collisions allowed).
    """

    def __init__(self, mode: str = SEQUENTIAL, rng: random.Random | None = None) -> None:
        if mode not in (SEQUENTIAL, RANDOM):
            raise ValueError(f"Unknown display id mode '{mode}'")
        self.mode = mode
        self.rng = rng or random.Random()

    def new_id(self) -> str:
        return str(uuid.uuid4())

    def display_id(self, existing: Iterable[str] = ()) -> str:
        if self.mode == RANDOM:
            return str(self.rng.randint(100, 999))
        return next_id(max_id([d for d in existing if d]))
