"""
Repository Tests
================

Entries, closure rows and votes against an in-memory SQLite database.
"""
from datetime import timedelta

import pytest
from sqlalchemy import select

from database.models import EntryClosure
from forum import arrange
from repositories import (
    AccountRepository,
    AccountValidationError,
    EntryRepository,
    EntryValidationError,
    EntryNotFoundError,
    ThreadTooLargeError,
    VoteRepository,
    VoteValidationError,
)
from repositories.base import BaseRepository


async def make_accounts(session, count):
    repo = AccountRepository(session)
    return [await repo.create(f"user{i}") for i in range(count)]


async def upvote(session, entry_id, users, count):
    votes = VoteRepository(session)
    for account in users[:count]:
        await votes.upsert(entry_id, account.id, upvote=True, downvote=False)


class TestAccountRepository:

    @pytest.mark.asyncio
    async def test_create_and_find(self, session):
        repo = AccountRepository(session)
        account = await repo.create("  alice ")

        assert account.handle == "alice"
        assert (await repo.get_by_handle("alice")).id == account.id

    @pytest.mark.asyncio
    async def test_duplicate_handle(self, session):
        repo = AccountRepository(session)
        await repo.create("alice")
        with pytest.raises(AccountValidationError):
            await repo.create("alice")

    @pytest.mark.asyncio
    async def test_empty_handle(self, session):
        with pytest.raises(AccountValidationError):
            await AccountRepository(session).create("   ")


class TestEntryPersistence:

    @pytest.mark.asyncio
    async def test_closure_rows(self, session):
        (author,) = await make_accounts(session, 1)
        repo = EntryRepository(session)

        forum_id = await repo.persist(author.id, title="General", forum=True)
        post_id = await repo.persist(author.id, title="Post", body="Hello", parent_id=forum_id)
        comment_id = await repo.persist(author.id, body="Reply", parent_id=post_id)

        result = await session.execute(
            select(EntryClosure.ancestor, EntryClosure.depth)
            .where(EntryClosure.descendant == comment_id)
            .order_by(EntryClosure.depth)
        )
        assert result.all() == [(comment_id, 0), (post_id, 1), (forum_id, 2)]

    @pytest.mark.asyncio
    async def test_trims_and_validates(self, session):
        repo = EntryRepository(session)

        entry_id = await repo.persist(None, title="  Title  ", body="  text  ")
        entry = await repo.one_entry(entry_id)
        assert entry.title == "Title"
        assert entry.body == "text"

        with pytest.raises(EntryValidationError):
            await repo.persist(None, body="   ")
        with pytest.raises(EntryValidationError):
            await repo.persist(None, body="text", url="https://example.com")
        with pytest.raises(EntryValidationError):
            await repo.persist(None, body="text", forum=True)

    @pytest.mark.asyncio
    async def test_unknown_parent(self, session):
        with pytest.raises(EntryNotFoundError):
            await EntryRepository(session).persist(None, body="text", parent_id=999)

    @pytest.mark.asyncio
    async def test_one_entry_with_votes(self, session):
        users = await make_accounts(session, 3)
        repo = EntryRepository(session)
        entry_id = await repo.persist(users[0].id, url="https://example.com")

        await upvote(session, entry_id, users, 2)
        await VoteRepository(session).upsert(entry_id, users[2].id, upvote=False, downvote=True)

        entry = await repo.one_entry(entry_id, user_id=users[2].id)
        assert (entry.upvotes, entry.downvotes, entry.points) == (2, 1, 1)
        assert entry.author_handle == "user0"
        assert entry.is_link
        assert entry.user_vote.value == -1

    @pytest.mark.asyncio
    async def test_one_entry_missing(self, session):
        with pytest.raises(EntryNotFoundError):
            await EntryRepository(session).one_entry(999)


class TestThreads:

    async def build_scenario(self, session):
        """Root with replies A(0) B(1) C(2){D(9) E(10)} F(3), created in that order."""
        users = await make_accounts(session, 10)
        repo = EntryRepository(session)
        ids = {}
        ids["Root"] = await repo.persist(users[0].id, title="Root", forum=True)
        for title, parent, votes in [
            ("A", "Root", 0), ("B", "Root", 1), ("C", "Root", 2),
            ("D", "C", 9), ("E", "C", 10), ("F", "Root", 3),
        ]:
            ids[title] = await repo.persist(users[0].id, title=title, body=title, parent_id=ids[parent])
            await upvote(session, ids[title], users, votes)
        return ids

    @pytest.mark.asyncio
    async def test_descendant_entries(self, session):
        ids = await self.build_scenario(session)
        now = BaseRepository.now() + timedelta(seconds=1)

        tree = await EntryRepository(session).descendant_entries(ids["Root"], now=now)

        assert [tree.entry(slot).title for slot in tree.walk()] == ["Root", "C", "E", "D", "F", "B", "A"]
        assert tree.child_count(tree.root) == 6

    @pytest.mark.asyncio
    async def test_subthread(self, session):
        ids = await self.build_scenario(session)

        tree = await EntryRepository(session).descendant_entries(ids["C"])

        assert [tree.entry(slot).title for slot in tree.walk()] == ["C", "E", "D"]

    @pytest.mark.asyncio
    async def test_depth_one(self, session):
        ids = await self.build_scenario(session)

        tree = await EntryRepository(session).depth_one_descendant_entries(ids["Root"])

        assert [tree.entry(slot).title for slot in tree.walk()] == ["Root", "F", "C", "B", "A"]

    @pytest.mark.asyncio
    async def test_thread_includes_viewer_votes(self, session):
        ids = await self.build_scenario(session)
        voter = (await AccountRepository(session).get_by_handle("user0")).id

        tree = await EntryRepository(session).descendant_entries(ids["Root"], user_id=voter)
        by_title = {tree.entry(slot).title: tree.entry(slot) for slot in tree.walk()}

        assert by_title["E"].user_vote.upvote
        assert by_title["A"].user_vote is None

    @pytest.mark.asyncio
    async def test_missing_thread(self, session):
        with pytest.raises(EntryNotFoundError):
            await EntryRepository(session).descendant_entries(999)

    @pytest.mark.asyncio
    async def test_thread_size_limit(self, session):
        ids = await self.build_scenario(session)
        with pytest.raises(ThreadTooLargeError):
            await EntryRepository(session, max_thread_entries=3).descendant_entries(ids["Root"])

    @pytest.mark.asyncio
    async def test_fetched_thread_is_already_arranged(self, session):
        ids = await self.build_scenario(session)
        tree = await EntryRepository(session).descendant_entries(ids["Root"])
        before = [tree.entry(slot).id for slot in tree.walk()]

        arrange(tree)

        assert [tree.entry(slot).id for slot in tree.walk()] == before


class TestVoteRepository:

    @pytest.mark.asyncio
    async def test_upsert_replaces_vote(self, session):
        (user,) = await make_accounts(session, 1)
        entry_id = await EntryRepository(session).persist(user.id, body="text")
        votes = VoteRepository(session)

        await votes.upsert(entry_id, user.id, upvote=True, downvote=False)
        await votes.upsert(entry_id, user.id, upvote=False, downvote=True)

        vote = await votes.find(entry_id, user.id)
        assert (vote.upvote, vote.downvote) == (False, True)
        assert await votes.count() == 1

    @pytest.mark.asyncio
    async def test_find_missing(self, session):
        assert await VoteRepository(session).find(1, 1) is None

    @pytest.mark.asyncio
    async def test_both_directions_rejected(self, session):
        with pytest.raises(VoteValidationError):
            await VoteRepository(session).upsert(1, 1, upvote=True, downvote=True)

    @pytest.mark.asyncio
    async def test_vote_on_missing_entry(self, session):
        with pytest.raises(EntryNotFoundError):
            await VoteRepository(session).upsert(999, 1, upvote=True, downvote=False)
