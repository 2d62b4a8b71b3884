"""Initial EduGuru schema

Revision ID: 0001_initial
Revises:
Create Date: 2025-01-06 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, master data and record tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', sa.String(50), nullable=False, server_default='GURU'),
        sa.Column('avatar', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'classes',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('grade', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_classes_user_id', 'classes', ['user_id'])

    op.create_table(
        'students',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('nis', sa.String(50), nullable=True),
        sa.Column('class_id', sa.String(255), sa.ForeignKey('classes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_students_class_id', 'students', ['class_id'])
    op.create_index('ix_students_user_id', 'students', ['user_id'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('name', 'user_id', name='uq_subjects_name_user'),
    )
    op.create_index('ix_subjects_user_id', 'subjects', ['user_id'])

    op.create_table(
        'journals',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('class_id', sa.String(255), nullable=True),
        sa.Column('subject', sa.String(255), nullable=True),
        sa.Column('start_time', sa.String(50), nullable=True),
        sa.Column('learning_objective', sa.Text(), nullable=True),
        sa.Column('materials', sa.Text(), nullable=True),
        sa.Column('method', sa.String(100), nullable=True),
        sa.Column('activities', sa.Text(), nullable=True),
        sa.Column('reflection', sa.Text(), nullable=True),
        sa.Column('engagement_level', sa.String(100), nullable=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=True),
    )
    op.create_index('ix_journals_user_id', 'journals', ['user_id'])

    op.create_table(
        'attendance',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('student_id', sa.String(255), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=True),
        sa.Column('class_id', sa.String(255), nullable=True),
        sa.Column('subject', sa.String(255), nullable=True),
        sa.Column('status', sa.String(10), nullable=False),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_attendance_user_id', 'attendance', ['user_id'])

    op.create_table(
        'scores',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('student_id', sa.String(255), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=True),
        sa.Column('class_id', sa.String(255), nullable=True),
        sa.Column('subject', sa.String(255), nullable=True),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('score', sa.Float(), nullable=True),
        sa.Column('assessment_title', sa.String(255), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_scores_user_id', 'scores', ['user_id'])

    op.create_table(
        'counseling',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('student_id', sa.String(255), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('type', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('follow_up', sa.Text(), nullable=True),
        sa.Column('ai_suggestion', sa.Text(), nullable=True),
        sa.Column('is_private', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_counseling_user_id', 'counseling', ['user_id'])


def downgrade() -> None:
    """Drop every EduGuru table."""
    for table in ('counseling', 'scores', 'attendance', 'journals', 'subjects', 'students', 'classes', 'users'):
        op.drop_table(table)
