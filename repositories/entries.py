"""
Entry Repository

Handles storing entries with their ancestry, and fetching entries and
whole threads. Threads come back as arranged forum.EntryTree objects.
"""
from datetime import datetime
from typing import Optional, List, Dict, Tuple

from loguru import logger
from sqlalchemy import select, insert, func, cast, literal, Integer
from sqlalchemy.orm import aliased

from config import settings
from database.models import Account, EntryRecord, EntryClosure, VoteRecord
from forum import Entry, EntryTree, Vote, build_tree, arrange
from .base import BaseRepository


class EntryValidationError(ValueError):
    """Raised when a submitted entry is not acceptable."""
    pass


class EntryNotFoundError(LookupError):
    """Raised when a referenced entry does not exist."""
    pass


class ThreadTooLargeError(ValueError):
    """Raised when a thread has more entries than one fetch may build."""
    pass


class EntryRepository(BaseRepository[EntryRecord]):
    """Repository for entry operations."""

    model = EntryRecord

    def __init__(self, session, max_thread_entries: Optional[int] = None):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
            max_thread_entries: Largest thread a fetch may build
                               (defaults to settings.MAX_THREAD_ENTRIES)
        """
        super().__init__(session)
        self.max_thread_entries = max_thread_entries or settings.MAX_THREAD_ENTRIES

    # ============================================
    # WRITE OPERATIONS
    # ============================================

    async def persist(
        self,
        author_id: Optional[int],
        title: Optional[str] = None,
        body: Optional[str] = None,
        url: Optional[str] = None,
        parent_id: Optional[int] = None,
        forum: bool = False
    ) -> int:
        """
        Store an entry and build its ancestry from its parent.

        Args:
            author_id: Account that wrote the entry
            title: Optional title
            body: Text content (exclusive with url)
            url: Link target (exclusive with body)
            parent_id: Entry this one replies to, None for a top-level entry
            forum: Create a pure container with neither body nor url

        Returns:
            Id of the new entry
        """
        title = (title or "").strip() or None
        body = (body or "").strip() or None
        url = (url or "").strip() or None

        if body and url:
            raise EntryValidationError("An entry cannot have both a body and a url.")
        if forum and (body or url):
            raise EntryValidationError("A forum cannot have a body or a url.")
        if not forum and not (body or url):
            raise EntryValidationError("The body must not be empty or consist solely of whitespace.")

        if parent_id is not None and not await self.exists(parent_id):
            raise EntryNotFoundError(f"Parent entry {parent_id} does not exist")

        record = await self.add(EntryRecord(
            title=title,
            body=body,
            url=url,
            author_id=author_id,
            created_at=self.now(),
        ))

        # The entry is its own ancestor at depth 0
        self.session.add(EntryClosure(ancestor=record.id, descendant=record.id, depth=0))

        if parent_id is not None:
            # Every ancestor of the parent is an ancestor of the new entry, one level further away
            ancestors = select(
                EntryClosure.ancestor,
                literal(record.id, Integer),
                EntryClosure.depth + 1,
            ).where(EntryClosure.descendant == parent_id)
            await self.session.execute(
                insert(EntryClosure.__table__).from_select(["ancestor", "descendant", "depth"], ancestors)
            )

        await self.session.flush()
        logger.info(f"Created entry {record.id} under parent {parent_id}")
        return record.id

    # ============================================
    # ENTRY QUERIES
    # ============================================

    async def one_entry(self, entry_id: int, user_id: Optional[int] = None) -> Entry:
        """
        Get one entry with its vote totals and author handle.

        Raises:
            EntryNotFoundError: if the entry does not exist
        """
        stmt = self._entry_select(user_id).where(EntryRecord.id == entry_id)
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            raise EntryNotFoundError(f"Entry {entry_id} does not exist")
        return self._to_entry(row)

    async def descendant_entries(
        self,
        root_id: int,
        user_id: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> EntryTree:
        """Get an arranged thread of an entry and all of its descendants."""
        return await self._get_thread(root_id, user_id, max_depth=None, now=now)

    async def depth_one_descendant_entries(
        self,
        root_id: int,
        user_id: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> EntryTree:
        """Get an arranged thread of an entry and its immediate replies."""
        return await self._get_thread(root_id, user_id, max_depth=1, now=now)

    async def _get_thread(
        self,
        root_id: int,
        user_id: Optional[int],
        max_depth: Optional[int],
        now: Optional[datetime]
    ) -> EntryTree:
        """
        Fetch the entries and direct links below a root, then build and
        arrange the tree.
        """
        subtree = select(EntryClosure.descendant).where(EntryClosure.ancestor == root_id)
        if max_depth is not None:
            subtree = subtree.where(EntryClosure.depth <= max_depth)

        # Entry table
        stmt = (
            self._entry_select(user_id)
            .where(EntryRecord.id.in_(subtree))
            .limit(self.max_thread_entries + 1)
        )
        result = await self.session.execute(stmt)
        rows = result.all()

        if not rows:
            raise EntryNotFoundError(f"Entry {root_id} does not exist")
        if len(rows) > self.max_thread_entries:
            raise ThreadTooLargeError(
                f"Thread {root_id} has more than {self.max_thread_entries} entries"
            )

        entries: Dict[int, Entry] = {}
        for row in rows:
            entry = self._to_entry(row)
            entries[entry.id] = entry

        # Direct parent links inside the subtree
        stmt = (
            select(EntryClosure.ancestor, EntryClosure.descendant, EntryClosure.depth)
            .where(
                EntryClosure.depth == 1,
                EntryClosure.ancestor.in_(subtree),
                EntryClosure.descendant.in_(subtree),
            )
        )
        result = await self.session.execute(stmt)
        relations: List[Tuple[int, int, int]] = [tuple(row) for row in result.all()]

        logger.debug(f"Fetched thread {root_id}: {len(entries)} entries, {len(relations)} links")

        tree = build_tree(entries, relations, root_id)
        arrange(tree, now)
        return tree

    # ============================================
    # HELPERS
    # ============================================

    @staticmethod
    def _entry_select(user_id: Optional[int]):
        """Select entries with author handle, summed votes and the viewer's own vote."""
        vote_totals = (
            select(
                VoteRecord.entry_id.label("entry_id"),
                func.sum(cast(VoteRecord.upvote, Integer)).label("upvotes"),
                func.sum(cast(VoteRecord.downvote, Integer)).label("downvotes"),
            )
            .group_by(VoteRecord.entry_id)
            .subquery()
        )
        user_vote = aliased(VoteRecord)

        return (
            select(
                EntryRecord,
                Account.handle,
                func.coalesce(vote_totals.c.upvotes, 0),
                func.coalesce(vote_totals.c.downvotes, 0),
                user_vote,
            )
            .outerjoin(Account, Account.id == EntryRecord.author_id)
            .outerjoin(vote_totals, vote_totals.c.entry_id == EntryRecord.id)
            .outerjoin(
                user_vote,
                (user_vote.entry_id == EntryRecord.id) & (user_vote.user_id == user_id),
            )
        )

    @staticmethod
    def _to_entry(row) -> Entry:
        record, handle, upvotes, downvotes, vote = row
        return Entry(
            id=record.id,
            title=record.title,
            body=record.body,
            url=record.url,
            author_id=record.author_id,
            created=record.created_at,
            upvotes=int(upvotes),
            downvotes=int(downvotes),
            author_handle=handle,
            user_vote=Vote(
                entry_id=vote.entry_id,
                user_id=vote.user_id,
                upvote=vote.upvote,
                downvote=vote.downvote,
                created=vote.created_at,
            ) if vote is not None else None,
        )
