"""Create Influmatch tables

This migration adds:
1. users table
2. listings table
3. proposals table (one proposal per influencer per listing)
4. deliverables table
5. messages table

Revision ID: create_influmatch_tables_001
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = 'create_influmatch_tables_001'
down_revision = None
branch_labels = None
depends_on = None


user_type = sa.Enum('brand', 'influencer', name='usertype')
listing_status = sa.Enum('active', 'closed', 'completed', name='listingstatus')
proposal_status = sa.Enum('under_review', 'accepted', 'rejected', 'withdrawn', name='proposalstatus')
deliverable_type = sa.Enum('image', 'video', 'post', 'story', 'reel', 'other', name='deliverabletype')
deliverable_status = sa.Enum(
    'pending', 'submitted', 'under_review', 'approved', 'rejected', 'revision_requested',
    name='deliverablestatus'
)


def upgrade():
    # 1. Users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('user_type', user_type, nullable=False),
        sa.Column('bio', sa.Text(), server_default=''),
        sa.Column('website', sa.String(500), server_default=''),
        sa.Column('social_media', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_user_type', 'users', ['user_type'])

    # 2. Listings
    op.create_table(
        'listings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('brand_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('budget', sa.Integer(), nullable=False),
        sa.Column('deadline', sa.DateTime(), nullable=False),
        sa.Column('campaign_deadline', sa.DateTime()),
        sa.Column('requirements', sa.Text(), server_default=''),
        sa.Column('deliverables', sa.Text(), server_default=''),
        sa.Column('status', listing_status, nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_listings_brand_id', 'listings', ['brand_id'])
    op.create_index('ix_listings_category', 'listings', ['category'])
    op.create_index('ix_listings_created_at', 'listings', ['created_at'])

    # 3. Proposals
    op.create_table(
        'proposals',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('listing_id', sa.Integer(), sa.ForeignKey('listings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('influencer_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('proposed_budget', sa.Integer(), nullable=False),
        sa.Column('timeline', sa.String(200), nullable=False),
        sa.Column('status', proposal_status, nullable=False, server_default='under_review'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('listing_id', 'influencer_id', name='uq_proposals_listing_influencer'),
    )
    op.create_index('ix_proposals_listing_id', 'proposals', ['listing_id'])
    op.create_index('ix_proposals_influencer_id', 'proposals', ['influencer_id'])

    # 4. Deliverables
    op.create_table(
        'deliverables',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('proposal_id', sa.Integer(), sa.ForeignKey('proposals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), server_default=''),
        sa.Column('type', deliverable_type, nullable=False),
        sa.Column('due_date', sa.DateTime()),
        sa.Column('status', deliverable_status, nullable=False, server_default='pending'),
        sa.Column('file_url', sa.String(500)),
        sa.Column('submission_notes', sa.Text()),
        sa.Column('submitted_at', sa.DateTime()),
        sa.Column('review_notes', sa.Text()),
        sa.Column('reviewed_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_deliverables_proposal_id', 'deliverables', ['proposal_id'])

    # 5. Messages
    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('conversation_id', sa.String(64), nullable=False),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('recipient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('idx_messages_conversation_created', 'messages', ['conversation_id', 'created_at'])


def downgrade():
    op.drop_table('messages')
    op.drop_table('deliverables')
    op.drop_table('proposals')
    op.drop_table('listings')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (deliverable_status, deliverable_type, proposal_status, listing_status, user_type):
        enum_type.drop(bind, checkfirst=True)
