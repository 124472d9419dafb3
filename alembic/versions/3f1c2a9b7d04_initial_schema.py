"""initial_schema

Revision ID: 3f1c2a9b7d04
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('display_name', sa.String(201), nullable=True),
        sa.Column('university', sa.String(255), nullable=True),
        sa.Column('level', sa.String(50), nullable=True),
        sa.Column('has_completed_profile', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('token_jti', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_activity', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE')
    )
    op.create_index('ix_sessions_id', 'sessions', ['id'])
    op.create_index('ix_sessions_token_jti', 'sessions', ['token_jti'], unique=True)

    op.create_table('universities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_universities_id', 'universities', ['id'])
    op.create_index('uq_universities_name_lower', 'universities', [sa.text('lower(name)')], unique=True)

    op.create_table('classes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('university_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['university_id'], ['universities.id'], ondelete='CASCADE')
    )
    op.create_index('ix_classes_id', 'classes', ['id'])
    op.create_index('ix_classes_university_id', 'classes', ['university_id'])
    op.create_index(
        'uq_classes_university_name_lower', 'classes',
        ['university_id', sa.text('lower(name)')], unique=True
    )

    op.create_table('tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tags_id', 'tags', ['id'])
    op.create_index('uq_tags_name_lower', 'tags', [sa.text('lower(name)')], unique=True)

    op.create_table('tests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('questions_json', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('university_id', sa.Integer(), nullable=False),
        sa.Column('class_id', sa.Integer(), nullable=False),
        sa.Column('tags', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['university_id'], ['universities.id']),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id'])
    )
    op.create_index('ix_tests_id', 'tests', ['id'])
    op.create_index('ix_tests_name', 'tests', ['name'])
    op.create_index('ix_tests_user_id', 'tests', ['user_id'])
    op.create_index('ix_tests_university_id', 'tests', ['university_id'])
    op.create_index('ix_tests_class_id', 'tests', ['class_id'])
    op.create_index('ix_tests_created_at', 'tests', ['created_at'])

    op.create_table('reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('test_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['test_id'], ['tests.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('test_id', 'user_id', name='uq_review_test_user'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range')
    )
    op.create_index('ix_reviews_id', 'reviews', ['id'])
    op.create_index('ix_reviews_test_id', 'reviews', ['test_id'])
    op.create_index('ix_reviews_user_id', 'reviews', ['user_id'])

    op.create_table('saved_tests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('test_id', sa.Integer(), nullable=False),
        sa.Column('saved_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['test_id'], ['tests.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'test_id', name='uq_saved_user_test')
    )
    op.create_index('ix_saved_tests_id', 'saved_tests', ['id'])
    op.create_index('ix_saved_tests_user_id', 'saved_tests', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('saved_tests')
    op.drop_table('reviews')
    op.drop_table('tests')
    op.drop_table('tags')
    op.drop_table('classes')
    op.drop_table('universities')
    op.drop_table('sessions')
    op.drop_table('users')
