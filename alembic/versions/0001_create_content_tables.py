"""create content tables

Revision ID: 0001_content_tables
Revises:
Create Date: 2025-01-15 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '0001_content_tables'
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.Text(), primary_key=True)


def _timestamp(name):
    return sa.Column(name, sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now())


def _updated_at():
    return sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True)


def upgrade():
    op.create_table(
        'posts',
        _id(),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', sa.Text(), nullable=False, server_default='General'),
        sa.Column('tags', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('status', sa.Text(), nullable=False, server_default='draft'),
        sa.Column('attachments', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('youtube_links', postgresql.JSONB(), nullable=False, server_default='[]'),
        _timestamp('date'),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('author', sa.Text(), nullable=True),
        sa.Column('trending', sa.Boolean(), nullable=False, server_default=sa.false()),
        _updated_at(),
    )
    # Public feed reads published posts newest first
    op.create_index('idx_posts_status_date', 'posts', ['status', 'date'], postgresql_using='btree')

    op.create_table(
        'results',
        _id(),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('exam_type', sa.Text(), nullable=False, server_default='B.Tech'),
        sa.Column('semester', sa.Text(), nullable=False, server_default=''),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('link', sa.Text(), nullable=False, server_default=''),
        sa.Column('pdf_file', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False, server_default='Released'),
        _timestamp('date'),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        _updated_at(),
    )

    op.create_table(
        'notes',
        _id(),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('subject', sa.Text(), nullable=False, server_default=''),
        sa.Column('topic', sa.Text(), nullable=False, server_default=''),
        sa.Column('file_url', sa.Text(), nullable=False, server_default=''),
        sa.Column('file_size', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('file_type', sa.Text(), nullable=False, server_default='PDF'),
        sa.Column('thumbnail', sa.Text(), nullable=True),
        _timestamp('upload_date'),
        sa.Column('downloads', sa.Integer(), nullable=False, server_default='0'),
        _updated_at(),
    )

    op.create_table(
        'questions',
        _id(),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('subject', sa.Text(), nullable=False, server_default=''),
        sa.Column('topic', sa.Text(), nullable=False, server_default=''),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('difficulty', sa.Text(), nullable=False, server_default='Medium'),
        _timestamp('created_at'),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        _updated_at(),
    )

    for table, mode_column in (('jobs', 'job_mode'), ('internships', 'mode')):
        extra = (
            [sa.Column('company_logo', sa.Text(), nullable=True), sa.Column('salary', sa.Text(), nullable=True)]
            if table == 'jobs'
            else [sa.Column('stipend', sa.Text(), nullable=True), sa.Column('duration', sa.Text(), nullable=False, server_default='')]
        )
        op.create_table(
            table,
            _id(),
            sa.Column('title', sa.Text(), nullable=False),
            sa.Column('company', sa.Text(), nullable=False, server_default=''),
            *extra,
            sa.Column(mode_column, sa.Text(), nullable=False, server_default='Onsite'),
            sa.Column('location', sa.Text(), nullable=False, server_default=''),
            sa.Column('description', sa.Text(), nullable=False, server_default=''),
            sa.Column('apply_link', sa.Text(), nullable=False, server_default=''),
            sa.Column('status', sa.Text(), nullable=False, server_default='Active'),
            _timestamp('posted_date'),
            sa.Column('applicants', sa.Integer(), nullable=False, server_default='0'),
            _updated_at(),
        )

    op.create_table(
        'youtube_videos',
        _id(),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('video_link', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('embed_link', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=False, server_default='General'),
        _timestamp('uploaded_date'),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        _updated_at(),
    )

    op.create_table(
        'contact_messages',
        _id(),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        _timestamp('date'),
        sa.Column('status', sa.Text(), nullable=False, server_default='unread'),
        sa.Column('reply', sa.Text(), nullable=True),
        sa.Column('replied_at', sa.DateTime(timezone=True), nullable=True),
        _updated_at(),
    )

    op.create_table(
        'admin_users',
        _id(),
        sa.Column('email', sa.Text(), nullable=False, unique=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('password_hash', sa.Text(), nullable=False),
        _timestamp('created_at'),
    )

    op.create_table(
        'revoked_tokens',
        _id(),
        _timestamp('revoked_at'),
    )


def downgrade():
    op.drop_table('revoked_tokens')
    op.drop_table('admin_users')
    op.drop_table('contact_messages')
    op.drop_table('youtube_videos')
    op.drop_table('internships')
    op.drop_table('jobs')
    op.drop_table('questions')
    op.drop_table('notes')
    op.drop_table('results')
    op.drop_index('idx_posts_status_date', table_name='posts')
    op.drop_table('posts')
