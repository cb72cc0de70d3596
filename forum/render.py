"""
Rendering of arranged threads into plain nested dicts.
"""
from datetime import datetime
from typing import Optional

from .config import utcnow
from .scoring import score
from .tree import EntryTree


def thread_to_dict(tree: EntryTree, slot: Optional[int] = None, now: Optional[datetime] = None) -> dict:
    """
    Render a slot and its replies as nested dicts in display order.

    Args:
        tree: Arranged tree
        slot: Slot to start from (defaults to the root)
        now: Reference time for scores (defaults to current UTC time)

    Returns:
        Dict of the entry with a "children" list of replies
    """
    if slot is None:
        slot = tree.root
    if slot is None:
        return {}

    now = now or utcnow()

    def node(current: int) -> dict:
        data = tree.entry(current).to_dict()
        data["score"] = score(tree, current, now)
        data["child_count"] = tree.child_count(current)
        data["children"] = []
        return data

    top = node(slot)
    stack = [(child, top) for child in reversed(list(tree.children(slot)))]
    while stack:
        current, parent_data = stack.pop()
        data = node(current)
        parent_data["children"].append(data)
        stack.extend((child, data) for child in reversed(list(tree.children(current))))

    return top
