"""create vidshare schema

Revision ID: 7b3e2a91c4d0
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7b3e2a91c4d0'
down_revision = None
branch_labels = None
depends_on = None

ID = sa.String(length=32)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', ID, nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('avatar', sa.String(length=512), nullable=False),
        sa.Column('cover_image', sa.String(length=512), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=False)

    op.create_table(
        'videos',
        sa.Column('id', ID, nullable=False),
        sa.Column('owner_id', ID, nullable=False),
        sa.Column('video_file', sa.String(length=512), nullable=False),
        sa.Column('thumbnail', sa.String(length=512), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default='1', nullable=False),
        *_timestamps(),
        sa.CheckConstraint('views >= 0', name=op.f('ck_videos_views_non_negative')),
        sa.CheckConstraint('duration >= 0', name=op.f('ck_videos_duration_non_negative')),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_videos_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_videos')),
    )
    op.create_index('ix_videos_owner_id_created_at', 'videos', ['owner_id', 'created_at'], unique=False)

    op.create_table(
        'comments',
        sa.Column('id', ID, nullable=False),
        sa.Column('video_id', ID, nullable=False),
        sa.Column('owner_id', ID, nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name=op.f('fk_comments_video_id_videos'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_comments_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_comments')),
    )
    op.create_index('ix_comments_video_id_created_at', 'comments', ['video_id', 'created_at'], unique=False)

    op.create_table(
        'tweets',
        sa.Column('id', ID, nullable=False),
        sa.Column('owner_id', ID, nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_tweets_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tweets')),
    )
    op.create_index('ix_tweets_owner_id_created_at', 'tweets', ['owner_id', 'created_at'], unique=False)

    op.create_table(
        'likes',
        sa.Column('id', ID, nullable=False),
        sa.Column('liked_by_id', ID, nullable=False),
        sa.Column('video_id', ID, nullable=True),
        sa.Column('comment_id', ID, nullable=True),
        sa.Column('tweet_id', ID, nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            '(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END'
            ' + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END'
            ' + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1',
            name=op.f('ck_likes_exactly_one_target'),
        ),
        sa.ForeignKeyConstraint(['liked_by_id'], ['users.id'], name=op.f('fk_likes_liked_by_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name=op.f('fk_likes_video_id_videos'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['comment_id'], ['comments.id'], name=op.f('fk_likes_comment_id_comments'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tweet_id'], ['tweets.id'], name=op.f('fk_likes_tweet_id_tweets'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_likes')),
        sa.UniqueConstraint('liked_by_id', 'video_id', name='uq_likes_user_video'),
        sa.UniqueConstraint('liked_by_id', 'comment_id', name='uq_likes_user_comment'),
        sa.UniqueConstraint('liked_by_id', 'tweet_id', name='uq_likes_user_tweet'),
    )
    op.create_index(op.f('ix_likes_video_id'), 'likes', ['video_id'], unique=False)

    op.create_table(
        'subscriptions',
        sa.Column('id', ID, nullable=False),
        sa.Column('subscriber_id', ID, nullable=False),
        sa.Column('channel_id', ID, nullable=False),
        *_timestamps(),
        sa.CheckConstraint('subscriber_id <> channel_id', name=op.f('ck_subscriptions_not_self')),
        sa.ForeignKeyConstraint(['subscriber_id'], ['users.id'], name=op.f('fk_subscriptions_subscriber_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['channel_id'], ['users.id'], name=op.f('fk_subscriptions_channel_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subscriptions')),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_pair'),
    )
    op.create_index(op.f('ix_subscriptions_channel_id'), 'subscriptions', ['channel_id'], unique=False)

    op.create_table(
        'watch_history',
        sa.Column('id', ID, nullable=False),
        sa.Column('user_id', ID, nullable=False),
        sa.Column('video_id', ID, nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_watch_history_user_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name=op.f('fk_watch_history_video_id_videos'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_watch_history')),
        sa.UniqueConstraint('user_id', 'video_id', name='uq_watch_history_user_video'),
    )


def downgrade():
    op.drop_table('watch_history')
    op.drop_index(op.f('ix_subscriptions_channel_id'), table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_index(op.f('ix_likes_video_id'), table_name='likes')
    op.drop_table('likes')
    op.drop_index('ix_tweets_owner_id_created_at', table_name='tweets')
    op.drop_table('tweets')
    op.drop_index('ix_comments_video_id_created_at', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_videos_owner_id_created_at', table_name='videos')
    op.drop_table('videos')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
