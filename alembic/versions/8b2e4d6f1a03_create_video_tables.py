"""create video tables

Revision ID: 8b2e4d6f1a03
Revises: 3f1c9a0b7d21
Create Date: 2025-06-16 09:41:02.618733

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "8b2e4d6f1a03"
down_revision = "3f1c9a0b7d21"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "videos",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("youtube_url", sa.String(length=500), nullable=False),
        sa.Column("youtube_id", sa.String(length=50), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(), nullable=True),
        sa.Column(
            "category",
            sa.Enum(
                "lecture",
                "interview",
                "presentation",
                "documentary",
                "tutorial",
                "webinar",
                "other",
                name="videocategory",
                native_enum=False,
                length=32,
                create_constraint=True,
            ),
            nullable=True,
        ),
        sa.Column("series", sa.String(length=255), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("creator_id", sa.Integer(), nullable=True),
        sa.Column("creation_date", sa.Date(), nullable=False),
        sa.Column("modification_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], name=op.f("fk_videos_creator_id_users")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_videos")),
        sa.UniqueConstraint("youtube_id", name=op.f("uq_videos_youtube_id")),
    )
    op.create_index(op.f("ix_videos_published_at"), "videos", ["published_at"], unique=False)
    op.create_index(op.f("ix_videos_category"), "videos", ["category"], unique=False)
    op.create_table(
        "video_authors",
        sa.Column("video_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column(
            "role",
            sa.Enum(
                "presenter",
                "host",
                "guest",
                "producer",
                "contributor",
                name="videoauthorrole",
                native_enum=False,
                length=32,
                create_constraint=True,
            ),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(["author_id"], ["authors.id"], name=op.f("fk_video_authors_author_id_authors")),
        sa.ForeignKeyConstraint(
            ["video_id"], ["videos.id"], name=op.f("fk_video_authors_video_id_videos"), ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("video_id", "author_id", name=op.f("pk_video_authors")),
        sa.UniqueConstraint("video_id", "order", name="uq_video_authors_order"),
    )
    op.create_index(op.f("ix_video_authors_author_id"), "video_authors", ["author_id"], unique=False)


def downgrade():
    op.drop_index(op.f("ix_video_authors_author_id"), table_name="video_authors")
    op.drop_table("video_authors")
    op.drop_index(op.f("ix_videos_category"), table_name="videos")
    op.drop_index(op.f("ix_videos_published_at"), table_name="videos")
    op.drop_table("videos")
