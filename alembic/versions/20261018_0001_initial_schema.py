"""Initial schema - admin core

Revision ID: 0001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(50), unique=True, nullable=False, index=True),
        sa.Column('email', sa.String(255), unique=True, nullable=True),
        sa.Column('phone', sa.String(20), unique=True, nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False, default='user'),
        sa.Column('status', sa.Integer(), nullable=False, default=1),
        sa.Column('gender', sa.String(10), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # Community
    op.create_table(
        'posts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('tag', sa.Text(), nullable=True),
        sa.Column('image_urls', sa.JSON(), nullable=True),
        sa.Column('likes_count', sa.Integer(), nullable=False, default=0),
        sa.Column('comments_count', sa.Integer(), nullable=False, default=0),
        *_timestamps(),
    )
    op.create_table(
        'post_likes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('post_id', sa.Uuid(), sa.ForeignKey('posts.id'), nullable=False, index=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        *_timestamps(),
        sa.UniqueConstraint('post_id', 'user_id', name='uq_post_likes_post_user'),
    )
    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('post_id', sa.Uuid(), sa.ForeignKey('posts.id'), nullable=False, index=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('likes_count', sa.Integer(), nullable=False, default=0),
        *_timestamps(),
    )
    op.create_table(
        'comment_likes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('comment_id', sa.Uuid(), sa.ForeignKey('comments.id'), nullable=False, index=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        *_timestamps(),
    )
    op.create_table(
        'post_collections',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('post_id', sa.Uuid(), sa.ForeignKey('posts.id'), nullable=False, index=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        *_timestamps(),
    )

    # Practice rooms
    op.create_table(
        'practice_rooms',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('theme', sa.String(200), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('max_members', sa.Integer(), nullable=False, default=10),
        sa.Column('current_members', sa.Integer(), nullable=False, default=1),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
    )
    op.create_table(
        'practice_room_members',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('room_id', sa.Uuid(), sa.ForeignKey('practice_rooms.id'), nullable=False, index=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        *_timestamps(),
    )

    # Training
    op.create_table(
        'training_records',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('type', sa.String(50), nullable=False, index=True),
        sa.Column('duration', sa.Integer(), nullable=False, default=0),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'tongue_twisters',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('tips', sa.Text(), nullable=True),
        sa.Column('level', sa.String(20), nullable=False, default='beginner'),
        sa.Column('category', sa.String(50), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False, default=0),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
    )

    # Operation log (append-only)
    op.create_table(
        'operation_logs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), nullable=True, index=True),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('user_role', sa.String(50), nullable=False),
        sa.Column('action', sa.String(100), nullable=False, index=True),
        sa.Column('resource', sa.String(100), nullable=False),
        sa.Column('resource_id', sa.Text(), nullable=False),
        sa.Column('details', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.Column('request_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, index=True),
    )
    op.create_index('ix_operation_logs_resource_time', 'operation_logs', ['resource', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_operation_logs_resource_time', table_name='operation_logs')
    op.drop_table('operation_logs')
    op.drop_table('tongue_twisters')
    op.drop_table('training_records')
    op.drop_table('practice_room_members')
    op.drop_table('practice_rooms')
    op.drop_table('post_collections')
    op.drop_table('comment_likes')
    op.drop_table('comments')
    op.drop_table('post_likes')
    op.drop_table('posts')
    op.drop_table('users')
