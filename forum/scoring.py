"""
Scoring - time-decayed aggregate score of an entry

An entry's score combines its own points, a decayed share of the points
of everything below it, and its age. Absent slots (None) score zero.
"""
import math
from datetime import datetime
from typing import Optional

from .config import DECAY, EPS, GRAVITY, AGE_OFFSET_HOURS, age_hours, truncate
from .tree import EntryTree


def points(tree: EntryTree, slot: Optional[int]) -> int:
    """Upvotes minus downvotes of a slot, 0 when absent."""
    if slot is None:
        return 0
    return tree.entry(slot).points


def recursive_points(tree: EntryTree, slot: Optional[int]) -> float:
    """
    Sum the points at and below a position in the tree.

    Follows both the child link and the sibling link, so this totals the
    rest of the chain from `slot` along with every subtree hanging off it.
    Each hop in either direction multiplies by DECAY:

        rp(n) = points(n) + DECAY * (rp(n.child) + rp(n.sibling))
    """
    if slot is None:
        return 0.0

    # Post-order with an explicit stack; chains can be longer than the recursion limit
    values = {}
    stack = [(slot, False)]
    while stack:
        current, expanded = stack.pop()
        child, sibling = tree.child(current), tree.sibling(current)
        if expanded:
            values[current] = float(points(tree, current)) + DECAY * (
                values.pop(child, 0.0) + values.pop(sibling, 0.0)
            )
            continue

        stack.append((current, True))
        if sibling is not None:
            stack.append((sibling, False))
        if child is not None:
            stack.append((child, False))

    return values[slot]


def score(tree: EntryTree, slot: Optional[int], now: Optional[datetime] = None) -> float:
    """
    Score that determines sort order among siblings.

    Only the child axis is decayed here; the entry's own siblings do not
    contribute to its score.

    Args:
        tree: Tree holding the entry
        slot: Slot of the entry (None scores 0)
        now: Reference time for the age (defaults to current UTC time)

    Returns:
        Score truncated to SCORE_DIGITS decimal digits
    """
    if slot is None:
        return 0

    child_points = 0.0
    child = tree.child(slot)
    if child is not None:
        child_points = DECAY * recursive_points(tree, child)

    entry = tree.entry(slot)
    raw = (float(entry.points) + child_points + EPS) / math.pow(
        age_hours(entry.created, now) + AGE_OFFSET_HOURS, GRAVITY
    )
    return truncate(raw)
