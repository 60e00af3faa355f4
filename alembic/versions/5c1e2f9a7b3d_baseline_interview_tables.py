"""baseline_interview_tables

Revision ID: 5c1e2f9a7b3d
Revises:
Create Date: 2026-02-02 10:14:27.118204

Production-safe migration: only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e2f9a7b3d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORY = sa.Enum('TECHNICAL', 'BEHAVIORAL', 'SYSTEM_DESIGN', 'CASE_STUDY', name='interviewcategory')
DIFFICULTY = sa.Enum('BEGINNER', 'INTERMEDIATE', 'ADVANCED', name='interviewdifficulty')
STATUS = sa.Enum('NOT_STARTED', 'IN_PROGRESS', 'COMPLETED', name='interviewstatus')


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('external_id', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_external_id'), 'users', ['external_id'], unique=True)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    if not table_exists('interviews'):
        op.create_table('interviews',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=True),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('category', CATEGORY, nullable=False),
            sa.Column('difficulty', DIFFICULTY, nullable=False),
            sa.Column('duration', sa.Integer(), nullable=False),
            sa.Column('topics', sa.JSON(), nullable=False),
            sa.Column('role', sa.String(), nullable=True),
            sa.Column('level', sa.String(), nullable=True),
            sa.Column('icon', sa.String(), nullable=True),
            sa.Column('color', sa.String(), nullable=True),
            sa.Column('is_template', sa.Boolean(), nullable=False),
            sa.Column('status', STATUS, nullable=False),
            sa.Column('rating', sa.Float(), nullable=False),
            sa.Column('completions', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_interviews_user_created', 'interviews', ['user_id', 'created_at'], unique=False)
        op.create_index(op.f('ix_interviews_user_id'), 'interviews', ['user_id'], unique=False)
        op.create_index(op.f('ix_interviews_title'), 'interviews', ['title'], unique=False)
        op.create_index(op.f('ix_interviews_category'), 'interviews', ['category'], unique=False)
        op.create_index(op.f('ix_interviews_difficulty'), 'interviews', ['difficulty'], unique=False)
        op.create_index(op.f('ix_interviews_is_template'), 'interviews', ['is_template'], unique=False)
        op.create_index(op.f('ix_interviews_status'), 'interviews', ['status'], unique=False)
        op.create_index(op.f('ix_interviews_created_at'), 'interviews', ['created_at'], unique=False)

    if not table_exists('interview_questions'):
        op.create_table('interview_questions',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('interview_id', sa.String(length=36), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('question', sa.Text(), nullable=False),
            sa.Column('context', sa.Text(), nullable=True),
            sa.Column('expected_topics', sa.JSON(), nullable=True),
            sa.Column('answer', sa.Text(), nullable=True),
            sa.Column('score', sa.Integer(), nullable=True),
            sa.Column('feedback', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['interview_id'], ['interviews.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('interview_id', 'position', name='uq_interview_question_position')
        )
        op.create_index(op.f('ix_interview_questions_interview_id'), 'interview_questions', ['interview_id'], unique=False)

    if not table_exists('interview_results'):
        op.create_table('interview_results',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('interview_id', sa.String(length=36), nullable=False),
            sa.Column('overall_score', sa.Integer(), nullable=False),
            sa.Column('summary', sa.Text(), nullable=False),
            sa.Column('strengths', sa.Text(), nullable=False),
            sa.Column('weaknesses', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['interview_id'], ['interviews.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_interview_results_interview_id'), 'interview_results', ['interview_id'], unique=True)

    if not table_exists('skill_scores'):
        op.create_table('skill_scores',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('interview_id', sa.String(length=36), nullable=False),
            sa.Column('skill_name', sa.String(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['interview_id'], ['interviews.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('interview_id', 'skill_name', name='uq_skill_score_interview_skill')
        )
        op.create_index(op.f('ix_skill_scores_interview_id'), 'skill_scores', ['interview_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_skill_scores_interview_id'), table_name='skill_scores')
    op.drop_table('skill_scores')
    op.drop_index(op.f('ix_interview_results_interview_id'), table_name='interview_results')
    op.drop_table('interview_results')
    op.drop_index(op.f('ix_interview_questions_interview_id'), table_name='interview_questions')
    op.drop_table('interview_questions')
    op.drop_index(op.f('ix_interviews_created_at'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_status'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_is_template'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_difficulty'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_category'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_title'), table_name='interviews')
    op.drop_index(op.f('ix_interviews_user_id'), table_name='interviews')
    op.drop_index('idx_interviews_user_created', table_name='interviews')
    op.drop_table('interviews')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_external_id'), table_name='users')
    op.drop_table('users')
    STATUS.drop(op.get_bind(), checkfirst=True)
    DIFFICULTY.drop(op.get_bind(), checkfirst=True)
    CATEGORY.drop(op.get_bind(), checkfirst=True)
