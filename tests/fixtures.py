"""
Shared builders for forum tests.
"""
from datetime import datetime, timedelta, timezone
from typing import List

from forum import Entry, EntryTree


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_entry(entry_id: int, title: str = "", upvotes: int = 0, downvotes: int = 0, hours_ago: float = 0) -> Entry:
    return Entry(
        id=entry_id,
        title=title or f"Entry {entry_id}",
        body=f"Body of {entry_id}",
        created=NOW - timedelta(hours=hours_ago),
        upvotes=upvotes,
        downvotes=downvotes,
    )


def make_unsorted_tree() -> EntryTree:
    """
    Root with four replies added in the order A, B, C, F.
    C already holds two replies of its own, D and E.
    """
    tree = EntryTree()
    root = tree.add(make_entry(1, "Root"))
    tree.root = root

    tree.add_child(root, tree.add(make_entry(2, "A", upvotes=0)))
    tree.add_child(root, tree.add(make_entry(3, "B", upvotes=1)))

    c = tree.add(make_entry(4, "C", upvotes=2))
    tree.add_child(c, tree.add(make_entry(5, "D", upvotes=9)))
    tree.add_child(c, tree.add(make_entry(6, "E", upvotes=10)))
    tree.add_child(root, c)

    tree.add_child(root, tree.add(make_entry(7, "F", upvotes=3)))
    return tree


def titles(tree: EntryTree) -> List[str]:
    """Titles in display (pre-order, child-then-sibling) order."""
    return [tree.entry(slot).title for slot in tree.walk()]


def assert_links_consistent(tree: EntryTree) -> None:
    """Every parent link points at the slot whose child or sibling link reaches it."""
    assert tree.parent(tree.root) is None
    seen = set()
    for slot in tree.walk():
        assert slot not in seen
        seen.add(slot)
        parent = tree.parent(slot)
        if parent is not None:
            assert parent in seen
            assert tree.child(parent) == slot or tree.sibling(parent) == slot
    assert len(seen) == len(tree)
