"""Initial migration - create all base tables

Revision ID: 0_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── Create enums ──────────────────────────────────────────────────
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE difficulty_enum AS ENUM ('Easy', 'Medium', 'Hard');
        EXCEPTION WHEN duplicate_object THEN null;
        END $$;
    """)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE question_type_enum AS ENUM ('mcq', 'msq', 'nat');
        EXCEPTION WHEN duplicate_object THEN null;
        END $$;
    """)

    # ── users table ───────────────────────────────────────────────────
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('profile_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('user_type', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_user_email'),
        sa.UniqueConstraint('profile_name', name='uq_user_profile_name'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_profile_name', 'users', ['profile_name'])

    # ── problems table ────────────────────────────────────────────────
    op.create_table(
        'problems',
        sa.Column('id', sa.String(32), nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('topic', sa.String(200), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('difficulty', postgresql.ENUM('Easy', 'Medium', 'Hard', name='difficulty_enum', create_type=False), nullable=False),
        sa.Column('question_type', postgresql.ENUM('mcq', 'msq', 'nat', name='question_type_enum', create_type=False), nullable=False, server_default='mcq'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_problems_subject', 'problems', ['subject'])
    op.create_index('ix_problems_is_active', 'problems', ['is_active'])

    # ── problem_options table ─────────────────────────────────────────
    op.create_table(
        'problem_options',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('problem_id', sa.String(32), nullable=False),
        sa.Column('option_text', sa.Text(), nullable=False),
        sa.Column('display_text', sa.Text(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['problem_id'], ['problems.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_problem_options_problem_id', 'problem_options', ['problem_id'])

    # ── nat_answers table ─────────────────────────────────────────────
    op.create_table(
        'nat_answers',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('problem_id', sa.String(32), nullable=False),
        sa.Column('correct_answer', sa.Float(), nullable=False),
        sa.Column('answer_text', sa.Text(), nullable=True),
        sa.Column('tolerance', sa.Float(), nullable=False, server_default='0'),
        sa.Column('answer_unit', sa.String(50), nullable=True),
        sa.ForeignKeyConstraint(['problem_id'], ['problems.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('problem_id', name='uq_nat_answer_problem'),
    )

    # ── user_problem_attempts table ───────────────────────────────────
    op.create_table(
        'user_problem_attempts',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('problem_id', sa.String(32), nullable=False),
        sa.Column('attempt_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('selected_options', sa.JSON(), nullable=True),
        sa.Column('nat_answer_value', sa.Float(), nullable=True),
        sa.Column('nat_answer_text', sa.Text(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('time_taken', sa.Integer(), nullable=True),
        sa.Column('user_explanation', sa.Text(), nullable=True),
        sa.Column('attempted_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['problem_id'], ['problems.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_problem_attempts_user_id', 'user_problem_attempts', ['user_id'])
    op.create_index('ix_user_problem_attempts_problem_id', 'user_problem_attempts', ['problem_id'])
    op.create_index('ix_user_problem_attempts_attempted_at', 'user_problem_attempts', ['attempted_at'])


def downgrade() -> None:
    # Drop all tables in reverse order
    op.drop_table('user_problem_attempts')
    op.drop_table('nat_answers')
    op.drop_table('problem_options')
    op.drop_table('problems')
    op.drop_table('users')
    op.execute("DROP TYPE IF EXISTS question_type_enum")
    op.execute("DROP TYPE IF EXISTS difficulty_enum")
