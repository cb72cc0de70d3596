"""Initial schema - accounts, entries, closure table, votes

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000

Based on the SQLAlchemy models defined in database/models/.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ==================================================
    # ACCOUNTS
    # ==================================================
    
    op.create_table(
        'account',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('handle', sa.String(100), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    
    # ==================================================
    # ENTRIES
    # ==================================================
    
    op.create_table(
        'entry',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.Text, nullable=True),
        sa.Column('body', sa.Text, nullable=True),
        sa.Column('url', sa.Text, nullable=True),
        sa.Column('author_id', sa.Integer, sa.ForeignKey('account.id'), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    
    op.create_table(
        'entry_closures',
        sa.Column('ancestor', sa.Integer, sa.ForeignKey('entry.id'), primary_key=True),
        sa.Column('descendant', sa.Integer, sa.ForeignKey('entry.id'), primary_key=True),
        sa.Column('depth', sa.Integer, nullable=False),
    )
    op.create_index('idx_entry_closures_descendant', 'entry_closures', ['descendant'])
    op.create_index('idx_entry_closures_ancestor_depth', 'entry_closures', ['ancestor', 'depth'])
    
    # ==================================================
    # VOTES
    # ==================================================
    
    op.create_table(
        'vote',
        sa.Column('user_id', sa.Integer, sa.ForeignKey('account.id'), primary_key=True),
        sa.Column('entry_id', sa.Integer, sa.ForeignKey('entry.id'), primary_key=True),
        sa.Column('upvote', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('downvote', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_vote_entry', 'vote', ['entry_id'])


def downgrade() -> None:
    op.drop_index('idx_vote_entry', 'vote')
    op.drop_table('vote')
    op.drop_index('idx_entry_closures_ancestor_depth', 'entry_closures')
    op.drop_index('idx_entry_closures_descendant', 'entry_closures')
    op.drop_table('entry_closures')
    op.drop_table('entry')
    op.drop_table('account')
