"""
EntryTree - arena-backed discussion tree

Entries are stored in an arena and addressed by stable integer slots.
The n-ary thread is encoded left-child/right-sibling: every slot has a
first-child link and a next-sibling link, plus a parent link pointing at
the slot whose child or sibling link reaches it.

Only insertion (add_child/add_sibling) mutates links from the outside.
"""
from typing import Dict, Iterator, List, Optional

from .models import Entry


class TreeError(ValueError):
    """Raised when a tree operation would break the tree structure."""
    pass


class EntryTree:
    """
    Arena of entries linked as a left-child/right-sibling tree.

    Usage:
        tree = EntryTree()
        root = tree.add(Entry(id=1, title="Forum"))
        tree.root = root
        tree.add_child(root, tree.add(Entry(id=2, body="Hello")))
    """

    def __init__(self):
        self.entries: List[Entry] = []
        self.root: Optional[int] = None
        self._parent: List[Optional[int]] = []
        self._child: List[Optional[int]] = []
        self._sibling: List[Optional[int]] = []
        self._child_count: List[Optional[int]] = []
        self._slots: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, entry_id: int) -> bool:
        return entry_id in self._slots

    # ============================================
    # ARENA
    # ============================================

    def add(self, entry: Entry) -> int:
        """
        Register an unlinked entry in the arena.

        Args:
            entry: Entry to store

        Returns:
            Slot of the stored entry
        """
        if entry.id in self._slots:
            raise TreeError(f"Entry {entry.id} is already in the tree")

        slot = len(self.entries)
        self.entries.append(entry)
        self._parent.append(None)
        self._child.append(None)
        self._sibling.append(None)
        self._child_count.append(None)
        self._slots[entry.id] = slot
        return slot

    def slot(self, entry_id: int) -> int:
        """Get the slot of an entry by its id."""
        try:
            return self._slots[entry_id]
        except KeyError:
            raise TreeError(f"Entry {entry_id} is not in the tree") from None

    def entry(self, slot: int) -> Entry:
        return self.entries[slot]

    # ============================================
    # LINKS
    # ============================================

    def parent(self, slot: Optional[int]) -> Optional[int]:
        return None if slot is None else self._parent[slot]

    def child(self, slot: Optional[int]) -> Optional[int]:
        return None if slot is None else self._child[slot]

    def sibling(self, slot: Optional[int]) -> Optional[int]:
        return None if slot is None else self._sibling[slot]

    def is_chain_head(self, slot: int) -> bool:
        """
        Check whether a slot starts a sibling chain.

        A chain head is the root of the tree or the first child of its
        parent. Every other slot is reached through a sibling link.
        """
        parent = self._parent[slot]
        return parent is None or self._child[parent] == slot

    def thread_parent(self, slot: int) -> Optional[int]:
        """Get the entry this slot replies to (its n-ary parent)."""
        while not self.is_chain_head(slot):
            slot = self._parent[slot]
        return self._parent[slot]

    def children(self, slot: int) -> Iterator[int]:
        """Iterate over the replies of a slot in chain order."""
        current = self._child[slot]
        while current is not None:
            yield current
            current = self._sibling[current]

    def walk(self, slot: Optional[int] = None) -> Iterator[int]:
        """
        Pre-order walk of a slot and all of its descendants.

        Children are visited before siblings, so the output is the
        display order of the thread. Without a slot the whole tree is
        walked, including any entries chained beside the root.
        """
        stack = []
        if slot is None:
            slot = self.root
            if slot is None:
                return
            if self._sibling[slot] is not None:
                stack.append(self._sibling[slot])

        yield slot
        if self._child[slot] is not None:
            stack.append(self._child[slot])
        while stack:
            current = stack.pop()
            yield current
            if self._sibling[current] is not None:
                stack.append(self._sibling[current])
            if self._child[current] is not None:
                stack.append(self._child[current])

    def child_count(self, slot: int) -> int:
        """
        Count all descendants of a slot.

        Memoized per slot. Insertion clears the memo of every slot above
        the inserted entry.
        """
        cached = self._child_count[slot]
        if cached is None:
            cached = sum(1 for _ in self.walk(slot)) - 1
            self._child_count[slot] = cached
        return cached

    # ============================================
    # INSERTION
    # ============================================

    def add_child(self, parent: int, new: int) -> None:
        """
        Attach an unlinked entry (and its own replies) under a parent.

        If the parent's child slot is free the entry takes it, otherwise
        it is placed among the parent's existing replies.
        """
        if self._parent[new] is not None or new == self.root:
            raise TreeError(f"Entry {self.entries[new].id} is already linked")

        # Walking up from the parent must not reach the new entry
        current = parent
        while current is not None:
            if current == new:
                raise TreeError(
                    f"Entry {self.entries[new].id} cannot be attached under its own descendant "
                    f"{self.entries[parent].id}"
                )
            current = self._parent[current]

        if self._child[parent] is None:
            # Slot is available, directly add the child
            self._child[parent] = new
            self._parent[new] = parent
            self._invalidate_counts(parent)
        else:
            self.add_sibling(self._child[parent], new)

    def add_sibling(self, existing: int, new: Optional[int]) -> None:
        """
        Insert an entry immediately above an existing one in its chain.

        Placement does not compare scores, since descendants may still be
        missing while a tree is being built. Any siblings the new entry
        already had are put back above it, one at a time.
        """
        if new is not None and (new == existing or new == self.root or self._parent[new] is not None):
            raise TreeError(f"Entry {self.entries[new].id} is already linked")

        # Walking up from the existing entry must not reach the new one
        current = self._parent[existing]
        while current is not None:
            if current == new:
                raise TreeError(
                    f"Entry {self.entries[new].id} cannot be placed beside its own descendant "
                    f"{self.entries[existing].id}"
                )
            current = self._parent[current]

        while new is not None:
            saved_sibling = self._sibling[new]
            parent = self._parent[existing]

            if parent is None:
                # Existing entry heads the top chain; the new entry takes its place
                if self.root == existing:
                    self.root = new
            elif self._child[parent] == existing:
                self._child[parent] = new
            else:
                self._sibling[parent] = new

            self._parent[new] = parent
            self._sibling[new] = existing
            self._parent[existing] = new
            self._invalidate_counts(new)

            existing, new = new, saved_sibling

    def _invalidate_counts(self, slot: Optional[int]) -> None:
        while slot is not None:
            self._child_count[slot] = None
            slot = self._parent[slot]

    # ============================================
    # RELINKING (used by arrange)
    # ============================================

    def _set_sibling(self, slot: int, sibling: Optional[int]) -> None:
        self._sibling[slot] = sibling

    def _relink_chain(self, owner: Optional[int], head: int) -> None:
        """
        Hang a re-ordered chain back under its owner.

        Sibling links must already describe the new order; parent links
        are rebuilt from them.
        """
        if owner is None:
            self.root = head
        else:
            self._child[owner] = head
        self._parent[head] = owner

        current = head
        while self._sibling[current] is not None:
            self._parent[self._sibling[current]] = current
            current = self._sibling[current]
