"""
Forum Module - ranked discussion trees

Builds a thread from a flat closure relation and orders every level of it
by a time-decayed score that folds in the votes of each entry's replies.

Components:
- Entry, Vote: Data classes for entries and votes
- EntryTree: Arena-backed left-child/right-sibling tree with insertion
- build_tree: Materialize a tree from (ancestor, descendant) rows
- arrange: Authoritative score ordering of every sibling chain
- points, recursive_points, score: Scoring functions
"""

from .models import Entry, Vote
from .config import (
    DECAY,
    EPS,
    GRAVITY,
    AGE_OFFSET_HOURS,
    SCORE_DIGITS,
    truncate,
    age_hours,
)
from .tree import EntryTree, TreeError
from .scoring import points, recursive_points, score
from .arrange import arrange
from .builder import build_tree, Relation, MalformedRelationError
from .render import thread_to_dict


__all__ = [
    # Models
    "Entry",
    "Vote",
    # Tree
    "EntryTree",
    "TreeError",
    # Scoring
    "points",
    "recursive_points",
    "score",
    # Building and ordering
    "build_tree",
    "arrange",
    "Relation",
    "MalformedRelationError",
    # Rendering
    "thread_to_dict",
    # Config
    "DECAY",
    "EPS",
    "GRAVITY",
    "AGE_OFFSET_HOURS",
    "SCORE_DIGITS",
    "truncate",
    "age_hours",
]
