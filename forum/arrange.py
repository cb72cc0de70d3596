"""
Arrange - authoritative ordering of a thread

Sorts every sibling chain by score, highest first. Deeper chains are sorted
before the chains above them, because a chain's order feeds the decayed
points its parent receives.
"""
from datetime import datetime
from typing import Dict, Optional

from loguru import logger

from .config import utcnow
from .scoring import score
from .tree import EntryTree


def arrange(tree: EntryTree, now: Optional[datetime] = None) -> Optional[int]:
    """
    Order every sibling chain of a tree by descending score.

    Each chain is sorted once, starting from its head. All scores are
    computed against the same reference time.

    Args:
        tree: Tree to arrange in place
        now: Reference time for ages (defaults to current UTC time)

    Returns:
        Root slot of the arranged tree
    """
    if tree.root is None:
        return None

    now = now or utcnow()

    # Reversed pre-order puts every chain after the chains below it
    heads = [slot for slot in tree.walk() if tree.is_chain_head(slot)]
    sorted_chains = 0
    for head in reversed(heads):
        if tree.sibling(head) is None:
            continue

        owner = tree.parent(head)
        scores = _chain_scores(tree, head, now)
        tree._relink_chain(owner, merge_sort(tree, head, scores))
        sorted_chains += 1

    logger.debug(f"Arranged {len(tree)} entries, sorted {sorted_chains} sibling chains")
    return tree.root


def _chain_scores(tree: EntryTree, head: int, now: datetime) -> Dict[int, float]:
    scores = {}
    current = head
    while current is not None:
        scores[current] = score(tree, current, now)
        current = tree.sibling(current)
    return scores


def merge_sort(tree: EntryTree, head: Optional[int], scores: Dict[int, float]) -> Optional[int]:
    """
    Merge sort a sibling chain by following and rewriting its sibling links.

    Parent links are left for the caller to rebuild.

    Returns:
        New head of the chain
    """
    if head is None or tree.sibling(head) is None:
        # Not even a list, or a list of exactly one
        return head

    middle = get_middle(tree, head)
    second_half = tree.sibling(middle)
    tree._set_sibling(middle, None)

    return merge(
        tree,
        merge_sort(tree, head, scores),
        merge_sort(tree, second_half, scores),
        scores,
    )


def get_middle(tree: EntryTree, head: Optional[int]) -> Optional[int]:
    """Find the middle of a chain with slow/fast pointers."""
    if head is None:
        return head

    slow = fast = head
    while tree.sibling(fast) is not None and tree.sibling(tree.sibling(fast)) is not None:
        slow, fast = tree.sibling(slow), tree.sibling(tree.sibling(fast))

    return slow


def merge(tree: EntryTree, a: Optional[int], b: Optional[int], scores: Dict[int, float]) -> Optional[int]:
    """
    Merge two sorted chains, highest score first.

    On equal scores the head of the second chain is taken first.
    """
    head = tail = None

    while a is not None and b is not None:
        if scores[b] < scores[a]:
            current, a = a, tree.sibling(a)
        else:
            current, b = b, tree.sibling(b)

        if tail is None:
            head = current
        else:
            tree._set_sibling(tail, current)
        tail = current

    rest = b if a is None else a
    if tail is None:
        return rest

    tree._set_sibling(tail, rest)
    return head
