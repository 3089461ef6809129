"""create_gallery_schema

Revision ID: 3f1c2a9d8e4b
Revises:
Create Date: 2026-10-19 10:12:41.208113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d8e4b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role = sa.Enum('artist', 'curator', 'admin', name='userrole')
artwork_status = sa.Enum('pending', 'approved', 'rejected', name='artworkstatus')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('profile_image', sa.String(length=255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('user_id'),
    )
    op.create_index('idx_users_username', 'users', ['username'], unique=True)
    op.create_index('idx_users_email', 'users', ['email'], unique=True)
    op.create_index('idx_users_role', 'users', ['role'])

    op.create_table(
        'artworks',
        sa.Column('artwork_id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('medium', sa.String(length=50), nullable=False),
        sa.Column('dimensions', sa.String(length=50), nullable=True),
        sa.Column('artist_id', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=False),
        sa.Column('status', artwork_status, nullable=False, server_default='pending'),
        sa.Column('curator_feedback', sa.Text(), nullable=True),
        sa.Column('curator_id', sa.Integer(), nullable=True),
        sa.Column('view_count', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('like_count', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('artwork_id'),
        sa.ForeignKeyConstraint(['artist_id'], ['users.user_id'], name='fk_artworks_artist_id', onupdate='CASCADE', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['curator_id'], ['users.user_id'], name='fk_artworks_curator_id', onupdate='CASCADE', ondelete='SET NULL'),
    )
    op.create_index('fk_artworks_artist_id', 'artworks', ['artist_id'])
    op.create_index('fk_artworks_curator_id', 'artworks', ['curator_id'])
    op.create_index('idx_artworks_status_created', 'artworks', ['status', 'created_at'])
    op.create_index('idx_artworks_medium', 'artworks', ['medium'])

    # Tag names compare case-sensitively; MySQL needs a binary collation for that
    op.create_table(
        'tags',
        sa.Column('tag_id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column(
            'name',
            sa.String(length=50).with_variant(mysql.VARCHAR(50, collation='utf8mb4_bin'), 'mysql', 'mariadb'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('tag_id'),
    )
    op.create_index('idx_tags_name', 'tags', ['name'], unique=True)

    op.create_table(
        'artwork_tags',
        sa.Column('artwork_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('artwork_id', 'tag_id'),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.artwork_id'], name='fk_artwork_tags_artwork_id', onupdate='CASCADE', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.tag_id'], name='fk_artwork_tags_tag_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('fk_artwork_tags_tag_id', 'artwork_tags', ['tag_id'])

    op.create_table(
        'galleries',
        sa.Column('gallery_id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('curator_id', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('view_count', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('gallery_id'),
        sa.ForeignKeyConstraint(['curator_id'], ['users.user_id'], name='fk_galleries_curator_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('fk_galleries_curator_id', 'galleries', ['curator_id'])
    op.create_index('idx_galleries_published_created', 'galleries', ['is_published', 'created_at'])

    op.create_table(
        'gallery_artworks',
        sa.Column('gallery_id', sa.Integer(), nullable=False),
        sa.Column('artwork_id', sa.Integer(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('gallery_id', 'artwork_id'),
        sa.ForeignKeyConstraint(['gallery_id'], ['galleries.gallery_id'], name='fk_gallery_artworks_gallery_id', onupdate='CASCADE', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.artwork_id'], name='fk_gallery_artworks_artwork_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('fk_gallery_artworks_artwork_id', 'gallery_artworks', ['artwork_id'])
    op.create_index('idx_gallery_artworks_order', 'gallery_artworks', ['gallery_id', 'display_order'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('gallery_artworks')
    op.drop_table('galleries')
    op.drop_table('artwork_tags')
    op.drop_table('tags')
    op.drop_table('artworks')
    op.drop_table('users')
    artwork_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
