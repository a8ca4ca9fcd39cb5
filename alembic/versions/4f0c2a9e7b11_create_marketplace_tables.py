"""create_marketplace_tables

Revision ID: 4f0c2a9e7b11
Revises:
Create Date: 2026-10-18 10:12:40.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f0c2a9e7b11'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('user_type', sa.String(length=20), nullable=False, comment='Account type (customer, artist)'),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('location_city', sa.String(length=100), nullable=True),
        sa.Column('location_state', sa.String(length=100), nullable=True),
        sa.Column('location_country', sa.String(length=100), nullable=True),
        sa.Column('profile_image', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'artists',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='Owning user - exactly one artist profile per user'),
        sa.Column('artist_name', sa.String(length=100), nullable=False, comment='Public artist name'),
        sa.Column('specializations', sa.JSON(), nullable=False, comment="Art forms the artist works in (e.g., ['Warli', 'Gond'])"),
        sa.Column('experience', sa.Integer(), nullable=True, comment='Years of experience (0-100)'),
        sa.Column('awards', sa.JSON(), nullable=False),
        sa.Column('exhibitions', sa.JSON(), nullable=False),
        sa.Column('social_links', sa.JSON(), nullable=False),
        sa.Column('artwork_count', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('followers', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('rating', sa.Float(), nullable=False, server_default=sa.text('0'), comment='Average rating (0-5)'),
        sa.Column('total_sales', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_artists_active_followers', 'artists', ['is_active', 'followers'], unique=False)
    op.create_index('ix_artists_verified', 'artists', ['is_verified'], unique=False)

    op.create_table(
        'artworks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('artist_id', sa.Integer(), nullable=False, comment='Owning artist'),
        sa.Column('artform', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('cultural_significance', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('dimensions', sa.JSON(), nullable=True),
        sa.Column('medium', sa.String(length=200), nullable=False),
        sa.Column('year_created', sa.Integer(), nullable=True),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='INR'),
        sa.Column('is_for_sale', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_sold', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('likes', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('views', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending', comment='Moderation status (pending, approved, rejected)'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_artworks_artform_price', 'artworks', ['artform', 'price'], unique=False)
    op.create_index('ix_artworks_status_created', 'artworks', ['status', 'created_at'], unique=False)
    op.create_index('ix_artworks_artist_id', 'artworks', ['artist_id'], unique=False)

    op.create_table(
        'user_favorites',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='User who liked the artwork'),
        sa.Column('artwork_id', sa.Integer(), nullable=False, comment='Artwork that was liked'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['artwork_id'], ['artworks.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'artwork_id', name='uq_user_favorites_user_artwork'),
        comment='Artworks each user has liked',
    )
    op.create_index(op.f('ix_user_favorites_user_id'), 'user_favorites', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_favorites_artwork_id'), 'user_favorites', ['artwork_id'], unique=False)

    op.create_table(
        'user_follows',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='Follower'),
        sa.Column('artist_id', sa.Integer(), nullable=False, comment='Followed artist'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'artist_id', name='uq_user_follows_user_artist'),
        comment='Artists each user follows',
    )
    op.create_index(op.f('ix_user_follows_user_id'), 'user_follows', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_follows_artist_id'), 'user_follows', ['artist_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_user_follows_artist_id'), table_name='user_follows')
    op.drop_index(op.f('ix_user_follows_user_id'), table_name='user_follows')
    op.drop_table('user_follows')
    op.drop_index(op.f('ix_user_favorites_artwork_id'), table_name='user_favorites')
    op.drop_index(op.f('ix_user_favorites_user_id'), table_name='user_favorites')
    op.drop_table('user_favorites')
    op.drop_index('ix_artworks_artist_id', table_name='artworks')
    op.drop_index('ix_artworks_status_created', table_name='artworks')
    op.drop_index('ix_artworks_artform_price', table_name='artworks')
    op.drop_table('artworks')
    op.drop_index('ix_artists_verified', table_name='artists')
    op.drop_index('ix_artists_active_followers', table_name='artists')
    op.drop_table('artists')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
