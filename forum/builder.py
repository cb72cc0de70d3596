"""
Builder - materialize a thread from a flat ancestry relation

Takes a table of entries and the (ancestor, descendant[, depth]) rows of a
closure table and links them into an EntryTree. The result is structurally
complete but only approximately ordered; run arrange() on it afterwards.
"""
from typing import Iterable, Mapping, NamedTuple, Optional, Sequence

from loguru import logger

from .models import Entry
from .tree import EntryTree, TreeError


class MalformedRelationError(ValueError):
    """Raised when the relation rows cannot form a single tree over the entries."""
    pass


class Relation(NamedTuple):
    """One row of the closure relation."""
    ancestor: int
    descendant: int
    depth: Optional[int] = None


def build_tree(
    entries: Mapping[int, Entry],
    relations: Iterable[Sequence[int]],
    root_id: int,
) -> EntryTree:
    """
    Link entries into a tree rooted at `root_id`.

    Rows where ancestor equals descendant are skipped. Rows that carry a
    depth greater than 1 are implied by the direct rows and skipped too;
    rows without a depth are read as direct parent links.

    Args:
        entries: Mapping of entry id to Entry
        relations: (ancestor, descendant) or (ancestor, descendant, depth) rows
        root_id: Id of the entry to root the tree at

    Returns:
        EntryTree whose root is the requested entry

    Raises:
        MalformedRelationError: if a row references an unknown entry, an
            entry is attached twice or under its own descendant, or an
            entry is left unattached
    """
    if root_id not in entries:
        raise MalformedRelationError(f"Root entry {root_id} is not in the entry table")

    tree = EntryTree()
    for entry in entries.values():
        tree.add(entry)
    tree.root = tree.slot(root_id)

    linked = 0
    for row in relations:
        relation = Relation(*row)
        if relation.ancestor == relation.descendant:
            continue
        if relation.depth is not None and relation.depth > 1:
            continue

        if relation.ancestor not in entries:
            raise MalformedRelationError(
                f"Ancestor {relation.ancestor} of entry {relation.descendant} is not in the entry table"
            )
        if relation.descendant not in entries:
            raise MalformedRelationError(
                f"Descendant {relation.descendant} of entry {relation.ancestor} is not in the entry table"
            )

        try:
            tree.add_child(tree.slot(relation.ancestor), tree.slot(relation.descendant))
        except TreeError as e:
            raise MalformedRelationError(str(e)) from e
        linked += 1

    reached = {tree.entry(slot).id for slot in tree.walk()}
    if len(reached) != len(entries):
        orphans = sorted(entry_id for entry_id in entries if entry_id not in reached)
        raise MalformedRelationError(f"Entries not attached to root {root_id}: {orphans}")

    logger.debug(f"Built tree for root {root_id}: {len(entries)} entries, {linked} links")
    return tree
