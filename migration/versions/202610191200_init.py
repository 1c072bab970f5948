"""init

Revision ID: 3c1f0a7d9e21
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d9e21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('registered_at',
                  sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'),
                  nullable=False),
        sa.Column('updated_at',
                  sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'),
                  nullable=False),
        sa.Column('best_wpm', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('average_wpm', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('average_accuracy', sa.Float(), server_default=sa.text('0'), nullable=False),
        sa.Column('games_played', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('games_won', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'rooms',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('code', sa.String(length=10), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Text(), nullable=False),
        sa.Column('max_players', sa.Integer(), nullable=False),
        sa.Column('current_players', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('status', sa.Text(), server_default='waiting', nullable=False),
        sa.Column('text_content', sa.Text(), nullable=False),
        sa.Column('difficulty', sa.Text(), server_default='medium', nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('created_at',
                  sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'),
                  nullable=False),
        sa.Column('updated_at',
                  sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'),
                  nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('current_players <= max_players',
                           name='ck_rooms_capacity'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )
    op.create_table(
        'participants',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('room_id', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('current_wpm', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('current_accuracy', sa.Float(), server_default=sa.text('0'), nullable=False),
        sa.Column('progress', sa.Float(), server_default=sa.text('0'), nullable=False),
        sa.Column('characters_typed', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('errors', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('finished', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('final_wpm', sa.Integer(), nullable=True),
        sa.Column('final_accuracy', sa.Float(), nullable=True),
        sa.Column('placement', sa.Integer(), nullable=True),
        sa.Column('joined_at',
                  sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'),
                  nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'user_id'),
    )
    op.create_table(
        'game_results',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('room_id', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('wpm', sa.Integer(), nullable=False),
        sa.Column('accuracy', sa.Float(), nullable=False),
        sa.Column('placement', sa.Integer(), nullable=False),
        sa.Column('characters_typed', sa.Integer(), nullable=False),
        sa.Column('errors', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('created_at',
                  sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'),
                  nullable=False),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_participants_room_id', 'participants', ['room_id'])
    op.create_index('ix_game_results_user_id_created_at', 'game_results',
                    ['user_id', 'created_at'])
    op.create_index('ix_users_best_wpm', 'users', ['best_wpm'])


def downgrade() -> None:
    op.drop_index('ix_users_best_wpm', table_name='users')
    op.drop_index('ix_game_results_user_id_created_at', table_name='game_results')
    op.drop_index('ix_participants_room_id', table_name='participants')
    op.drop_table('game_results')
    op.drop_table('participants')
    op.drop_table('rooms')
    op.drop_table('users')
