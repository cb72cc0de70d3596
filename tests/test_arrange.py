"""
Arrange Tests
=============

The authoritative ordering pass: scenario order, per-chain ordering,
idempotence, tie-breaks and link consistency.
"""
import random

from forum import EntryTree, arrange, score
from forum.arrange import get_middle, merge_sort
from tests.fixtures import NOW, make_entry, make_unsorted_tree, titles, assert_links_consistent


def random_tree(seed: int, size: int = 200) -> EntryTree:
    rng = random.Random(seed)
    tree = EntryTree()
    tree.root = tree.add(make_entry(0))
    attached = [tree.root]
    for entry_id in range(1, size):
        slot = tree.add(make_entry(
            entry_id,
            upvotes=rng.randint(0, 50),
            downvotes=rng.randint(0, 10),
            hours_ago=rng.uniform(0, 96),
        ))
        tree.add_child(rng.choice(attached), slot)
        attached.append(slot)
    return tree


def chain_order(tree: EntryTree):
    return [tree.entry(slot).id for slot in tree.walk()]


class TestArrange:

    def test_scenario_order(self):
        tree = make_unsorted_tree()
        arrange(tree, NOW)
        assert titles(tree) == ["Root", "C", "E", "D", "F", "B", "A"]
        assert_links_consistent(tree)

    def test_every_chain_descends_by_score(self):
        tree = random_tree(seed=11)
        arrange(tree, NOW)

        for slot in tree.walk():
            sibling = tree.sibling(slot)
            if sibling is not None:
                assert score(tree, slot, NOW) >= score(tree, sibling, NOW)
        assert_links_consistent(tree)

    def test_arrange_is_idempotent(self):
        tree = random_tree(seed=3)
        arrange(tree, NOW)
        first = chain_order(tree)

        arrange(tree, NOW)
        assert chain_order(tree) == first

    def test_arrange_keeps_every_entry(self):
        tree = random_tree(seed=5, size=500)
        arrange(tree, NOW)
        walked = list(tree.walk())
        assert len(walked) == len(set(walked)) == 500

    def test_equal_scores_keep_insertion_order(self):
        tree = EntryTree()
        root = tree.root = tree.add(make_entry(0))
        for entry_id in (1, 2, 3):
            tree.add_child(root, tree.add(make_entry(entry_id, upvotes=1)))
        assert [tree.entry(s).id for s in tree.children(root)] == [3, 2, 1]

        arrange(tree, NOW)

        assert [tree.entry(s).id for s in tree.children(root)] == [1, 2, 3]

    def test_long_chain(self):
        tree = EntryTree()
        root = tree.root = tree.add(make_entry(0))
        for entry_id in range(1, 3001):
            tree.add_child(root, tree.add(make_entry(entry_id, upvotes=entry_id % 97)))

        arrange(tree, NOW)

        votes = [tree.entry(s).upvotes for s in tree.children(root)]
        assert votes == sorted(votes, reverse=True)
        assert_links_consistent(tree)

    def test_child_count_after_arrange(self):
        tree = make_unsorted_tree()
        arrange(tree, NOW)
        assert tree.child_count(tree.root) == 6

    def test_empty_tree(self):
        assert arrange(EntryTree(), NOW) is None

    def test_entries_beside_root_are_arranged(self):
        tree = make_unsorted_tree()
        old_root = tree.root
        tree.add_sibling(old_root, tree.add(make_entry(8, "New")))

        root = arrange(tree, NOW)

        # Old root outscores the bare entry through its replies
        assert root == old_root
        assert titles(tree) == ["Root", "C", "E", "D", "F", "B", "A", "New"]
        assert_links_consistent(tree)


class TestMergeSort:

    def make_chain(self, upvotes):
        tree = EntryTree()
        root = tree.root = tree.add(make_entry(0))
        for entry_id, votes in enumerate(upvotes, start=1):
            tree.add_child(root, tree.add(make_entry(entry_id, upvotes=votes)))
        return tree, root

    def test_get_middle(self):
        tree, root = self.make_chain([1, 2, 3, 4])
        chain = list(tree.children(root))
        assert get_middle(tree, chain[0]) == chain[1]

        tree, root = self.make_chain([1, 2, 3, 4, 5])
        chain = list(tree.children(root))
        assert get_middle(tree, chain[0]) == chain[2]

    def test_ties_take_second_half_first(self):
        tree, root = self.make_chain([1, 1])
        first, second = tree.children(root)
        scores = {first: 1.0, second: 1.0}

        head = merge_sort(tree, first, scores)

        assert head == second
        assert tree.sibling(second) == first
        assert tree.sibling(first) is None
