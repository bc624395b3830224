"""Create users, detections and chat_messages tables

Revision ID: 001
Revises:
Create Date: 2025-01-23 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, detections and chat_messages tables"""

    # 1. Users with running detection statistics
    op.create_table('users',
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('total_detections', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('successful_detections', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sum_confidence', sa.Float(), nullable=False, server_default='0'),
        sa.Column('last_detection_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('preferences', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('user_id', name='pk_users'),
        sa.CheckConstraint('total_detections >= 0', name='ck_users_total_detections_non_negative'),
        sa.CheckConstraint('successful_detections >= 0', name='ck_users_successful_detections_non_negative'),
        sa.CheckConstraint('successful_detections <= total_detections', name='ck_users_successful_within_total'),
        sa.CheckConstraint('sum_confidence >= 0', name='ck_users_sum_confidence_non_negative'),
    )
    op.create_index('ix_users_last_detection_at', 'users', ['last_detection_at'])

    # 2. Detection events
    op.create_table('detections',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('plant_name', sa.String(255), nullable=False),
        sa.Column('disease_name', sa.String(255), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('symptoms', sa.JSON(), nullable=False),
        sa.Column('diagnosis', sa.JSON(), nullable=False),
        sa.Column('treatment', sa.JSON(), nullable=False),
        sa.Column('prevention', sa.JSON(), nullable=False),
        sa.Column('disease_info_source', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint('id', name='pk_detections'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.user_id'],
            name='fk_detections_user_id_users', ondelete='CASCADE',
        ),
        sa.CheckConstraint('confidence >= 0 AND confidence <= 1', name='ck_detections_confidence_range'),
    )
    op.create_index('ix_detections_plant_name', 'detections', ['plant_name'])
    op.create_index('ix_detections_disease_name', 'detections', ['disease_name'])
    op.create_index('ix_detections_user_created', 'detections', ['user_id', 'created_at', 'id'])

    # 3. Assistant chat exchanges
    op.create_table('chat_messages',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('user_message', sa.Text(), nullable=False),
        sa.Column('ai_response', sa.Text(), nullable=False),
        sa.Column('context', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_chat_messages'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.user_id'],
            name='fk_chat_messages_user_id_users', ondelete='CASCADE',
        ),
    )
    op.create_index('ix_chat_messages_user_created', 'chat_messages', ['user_id', 'created_at'])


def downgrade() -> None:
    """Drop all tables"""
    op.drop_index('ix_chat_messages_user_created', table_name='chat_messages')
    op.drop_table('chat_messages')

    op.drop_index('ix_detections_user_created', table_name='detections')
    op.drop_index('ix_detections_disease_name', table_name='detections')
    op.drop_index('ix_detections_plant_name', table_name='detections')
    op.drop_table('detections')

    op.drop_index('ix_users_last_detection_at', table_name='users')
    op.drop_table('users')
