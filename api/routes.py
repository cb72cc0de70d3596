"""
API Routes - All endpoint definitions for Forum Ranking

Endpoints organized by:
- Health Check
- Accounts
- Entries (single entries, threads, creation)
- Votes
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_session_dependency
from forum import MalformedRelationError, thread_to_dict
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
from utils import logger

router = APIRouter()


# ============================================================
# Request Models
# ============================================================
class AccountCreate(BaseModel):
    handle: str


class EntryCreate(BaseModel):
    author_id: Optional[int] = None
    title: Optional[str] = None
    body: Optional[str] = None
    url: Optional[str] = None
    parent_id: Optional[int] = None
    forum: bool = False


class VoteCreate(BaseModel):
    user_id: int
    upvote: bool = False
    downvote: bool = False


# ============================================================
# Health Check
# ============================================================
@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ============================================================
# Accounts
# ============================================================
@router.post("/accounts", status_code=201)
async def create_account(payload: AccountCreate, session: AsyncSession = Depends(get_session_dependency)):
    """Create an account."""
    try:
        account = await AccountRepository(session).create(payload.handle)
    except AccountValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await session.commit()
    return account.to_dict()


# ============================================================
# Entries
# ============================================================
@router.post("/entries", status_code=201)
async def create_entry(payload: EntryCreate, session: AsyncSession = Depends(get_session_dependency)):
    """Create a forum, post or comment, optionally as a reply to another entry."""
    repo = EntryRepository(session)
    try:
        entry_id = await repo.persist(
            author_id=payload.author_id,
            title=payload.title,
            body=payload.body,
            url=payload.url,
            parent_id=payload.parent_id,
            forum=payload.forum,
        )
    except EntryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return {"id": entry_id}


@router.get("/entries/{entry_id}")
async def get_entry(
    entry_id: int,
    user_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session_dependency)
):
    """Get a single entry with its vote totals."""
    try:
        entry = await EntryRepository(session).one_entry(entry_id, user_id)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry.to_dict()


@router.get("/entries/{entry_id}/thread")
async def get_thread(
    entry_id: int,
    depth: str = Query(default="all", pattern="^(all|one)$", description="'all' descendants or only direct replies"),
    user_id: Optional[int] = Query(default=None, description="Viewer, to include their own votes"),
    session: AsyncSession = Depends(get_session_dependency)
):
    """
    Get an entry and its replies, ordered by score at every level.
    """
    repo = EntryRepository(session)
    now = datetime.now(timezone.utc)
    try:
        if depth == "one":
            tree = await repo.depth_one_descendant_entries(entry_id, user_id, now=now)
        else:
            tree = await repo.descendant_entries(entry_id, user_id, now=now)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    except ThreadTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except MalformedRelationError as e:
        logger.error(f"Stored ancestry of entry {entry_id} is inconsistent: {e}")
        raise HTTPException(status_code=500, detail="Thread could not be built")
    
    return {
        "total": len(tree),
        "thread": thread_to_dict(tree, now=now),
    }


# ============================================================
# Votes
# ============================================================
@router.post("/entries/{entry_id}/votes")
async def cast_vote(
    entry_id: int,
    payload: VoteCreate,
    session: AsyncSession = Depends(get_session_dependency)
):
    """Store (or replace) a user's vote on an entry."""
    try:
        vote = await VoteRepository(session).upsert(
            entry_id, payload.user_id, payload.upvote, payload.downvote
        )
    except VoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    await session.commit()
    return vote.to_dict()
