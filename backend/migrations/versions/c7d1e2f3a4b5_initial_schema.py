"""initial schema

Revision ID: c7d1e2f3a4b5
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the three tables of the chat/requests API:
- users: credentials and the permanent per-user token
- messages: append-only shared chat log
- requests: support tickets with priority and status
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c7d1e2f3a4b5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # ============================================================================
    # users: username -> password hash -> token
    # ============================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_token', 'users', ['token'], unique=True)

    # ============================================================================
    # messages: append-only, never updated or deleted
    # ============================================================================
    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_token', sa.String(length=64), nullable=False),
        sa.Column('author_username', sa.String(length=64), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['owner_token'], ['users.token'], ),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_messages_owner_token', 'messages', ['owner_token'])
    op.create_index('ix_messages_created_at_id', 'messages', ['created_at', 'id'])

    # ============================================================================
    # requests: support tickets
    # ============================================================================
    op.create_table(
        'requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_token', sa.String(length=64), nullable=False),
        sa.Column('author_username', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(length=32), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='new'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['owner_token'], ['users.token'], ),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_requests_owner_token', 'requests', ['owner_token'])
    op.create_index('ix_requests_status', 'requests', ['status'])
    op.create_index('ix_requests_created_at_id', 'requests', ['created_at', 'id'])


def downgrade():
    op.drop_index('ix_requests_created_at_id', table_name='requests')
    op.drop_index('ix_requests_status', table_name='requests')
    op.drop_index('ix_requests_owner_token', table_name='requests')
    op.drop_table('requests')

    op.drop_index('ix_messages_created_at_id', table_name='messages')
    op.drop_index('ix_messages_owner_token', table_name='messages')
    op.drop_table('messages')

    op.drop_index('ix_users_token', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
