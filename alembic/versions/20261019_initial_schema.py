"""initial momentum schema

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.String(25), primary_key=True, index=True)


def _user_fk():
    return sa.Column('user_id', sa.String(25), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)


def _workspace_fk():
    return sa.Column('workspace_id', sa.String(25), sa.ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=True, index=True)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('avatar_url', sa.String(1024), nullable=True),
        sa.Column('provider', sa.String(20), nullable=False),
        sa.Column('provider_id', sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'refresh_tokens',
        _id(),
        _user_fk(),
        sa.Column('token', sa.Text(), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'subscriptions',
        _id(),
        _user_fk(),
        sa.Column('stripe_subscription_id', sa.String(255), nullable=True, unique=True),
        sa.Column('stripe_customer_id', sa.String(255), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('plan', sa.String(255), nullable=False),
        sa.Column('current_period_start', sa.DateTime(), nullable=True),
        sa.Column('current_period_end', sa.DateTime(), nullable=True),
        sa.Column('cancel_at_period_end', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_subscription_user_status', 'subscriptions', ['user_id', 'status'])

    op.create_table(
        'workspaces',
        _id(),
        _user_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_workspace_user_default', 'workspaces', ['user_id', 'is_default'])

    op.create_table(
        'tasks',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('priority', sa.String(10), nullable=False, server_default='medium'),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('parent_task_id', sa.String(25), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=True, index=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_task_user_position', 'tasks', ['user_id', 'position'])

    op.create_table(
        'habits',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(20), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'habit_entries',
        _id(),
        sa.Column('habit_id', sa.String(25), sa.ForeignKey('habits.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('habit_id', 'date', name='uq_habit_entry_day'),
    )

    op.create_table(
        'metrics',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('metric_type', sa.String(100), nullable=False),
        sa.Column('value', sa.Numeric(10, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'pomodoro_sessions',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('task_id', sa.String(25), sa.ForeignKey('tasks.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'countdown_timers',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('target_date', sa.DateTime(), nullable=False),
        sa.Column('notify_before', sa.Integer(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'integrations',
        _id(),
        _user_fk(),
        sa.Column('service', sa.String(50), nullable=False),
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'service', name='uq_integration_user_service'),
    )

    op.create_table(
        'ai_conversations',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('messages', sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'file_uploads',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_path', sa.String(1024), nullable=False),
        sa.Column('file_type', sa.String(50), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sa.String(100), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'tab_stashes',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('tabs', sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'sync_data',
        _id(),
        _user_fk(),
        _workspace_fk(),
        sa.Column('data_type', sa.String(100), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'data_type', 'workspace_id', name='uq_sync_user_type_workspace'),
    )

    op.create_table(
        'webhook_events',
        _id(),
        sa.Column('provider', sa.String(40), nullable=False),
        sa.Column('external_event_id', sa.String(255), nullable=True, index=True),
        sa.Column('event_type', sa.String(80), nullable=True),
        sa.Column('livemode', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payload', sa.JSON(), nullable=True),
        sa.Column('received_at', sa.DateTime(), nullable=False),
        sa.Column('processed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('processed_at', sa.DateTime(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
    )
    op.create_index('ix_webhook_provider_time', 'webhook_events', ['provider', 'received_at'])
    op.create_index('ix_webhook_processed_time', 'webhook_events', ['processed', 'received_at'])


def downgrade() -> None:
    op.drop_index('ix_webhook_processed_time', table_name='webhook_events')
    op.drop_index('ix_webhook_provider_time', table_name='webhook_events')
    op.drop_table('webhook_events')
    op.drop_table('sync_data')
    op.drop_table('tab_stashes')
    op.drop_table('file_uploads')
    op.drop_table('ai_conversations')
    op.drop_table('integrations')
    op.drop_table('countdown_timers')
    op.drop_table('pomodoro_sessions')
    op.drop_table('metrics')
    op.drop_table('habit_entries')
    op.drop_table('habits')
    op.drop_index('ix_task_user_position', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('ix_workspace_user_default', table_name='workspaces')
    op.drop_table('workspaces')
    op.drop_index('ix_subscription_user_status', table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
