"""create author and publication tables

Revision ID: 3f1c9a0b7d21
Revises:
Create Date: 2025-06-02 10:14:37.204518

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c9a0b7d21"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "name",
            sa.Enum(
                "admin",
                "researcher",
                "member",
                name="userrole",
                native_enum=False,
                length=32,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_roles")),
        sa.UniqueConstraint("name", name=op.f("uq_roles_name")),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("affiliation", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("creation_date", sa.Date(), nullable=False),
        sa.Column("modification_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_table(
        "users_roles",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name=op.f("fk_users_roles_role_id_roles")),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name=op.f("fk_users_roles_user_id_users")),
        sa.PrimaryKeyConstraint("user_id", "role_id", name=op.f("pk_users_roles")),
    )
    op.create_table(
        "researchers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("orcid", sa.String(length=19), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("creation_date", sa.Date(), nullable=False),
        sa.Column("modification_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name=op.f("fk_researchers_user_id_users")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_researchers")),
        sa.UniqueConstraint("orcid", name=op.f("uq_researchers_orcid")),
        sa.UniqueConstraint("user_id", name=op.f("uq_researchers_user_id")),
    )
    op.create_table(
        "authors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("affiliation", sa.String(), nullable=True),
        sa.Column("orcid", sa.String(length=19), nullable=True),
        sa.Column("researcher_id", sa.Integer(), nullable=True),
        sa.Column("creation_date", sa.Date(), nullable=False),
        sa.Column("modification_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(
            ["researcher_id"], ["researchers.id"], name=op.f("fk_authors_researcher_id_researchers")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_authors")),
        sa.UniqueConstraint("email", name=op.f("uq_authors_email")),
        sa.UniqueConstraint("orcid", name=op.f("uq_authors_orcid")),
        sa.UniqueConstraint("researcher_id", name=op.f("uq_authors_researcher_id")),
    )
    op.create_table(
        "publications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "journal",
                "conference",
                "book",
                "book_chapter",
                "preprint",
                "report",
                name="publicationtype",
                native_enum=False,
                length=32,
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("abstract", sa.String(), nullable=True),
        sa.Column("link", sa.String(length=500), nullable=True),
        sa.Column("doi", sa.String(), nullable=True),
        sa.Column("venue", sa.String(), nullable=True),
        sa.Column("publication_date", sa.Date(), nullable=True),
        sa.Column("creator_id", sa.Integer(), nullable=True),
        sa.Column("creation_date", sa.Date(), nullable=False),
        sa.Column("modification_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], name=op.f("fk_publications_creator_id_users")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_publications")),
    )
    op.create_index(op.f("ix_publications_doi"), "publications", ["doi"], unique=False)
    op.create_index(op.f("ix_publications_publication_date"), "publications", ["publication_date"], unique=False)
    op.create_table(
        "publication_authors",
        sa.Column("publication_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("contribution", sa.String(), nullable=True),
        sa.Column("is_corresponding", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["authors.id"], name=op.f("fk_publication_authors_author_id_authors")),
        sa.ForeignKeyConstraint(
            ["publication_id"],
            ["publications.id"],
            name=op.f("fk_publication_authors_publication_id_publications"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("publication_id", "author_id", name=op.f("pk_publication_authors")),
        sa.UniqueConstraint("publication_id", "order", name="uq_publication_authors_order"),
    )
    op.create_index(op.f("ix_publication_authors_author_id"), "publication_authors", ["author_id"], unique=False)

    op.bulk_insert(
        sa.table("roles", sa.column("name", sa.String)),
        [{"name": "admin"}, {"name": "researcher"}, {"name": "member"}],
    )


def downgrade():
    op.drop_index(op.f("ix_publication_authors_author_id"), table_name="publication_authors")
    op.drop_table("publication_authors")
    op.drop_index(op.f("ix_publications_publication_date"), table_name="publications")
    op.drop_index(op.f("ix_publications_doi"), table_name="publications")
    op.drop_table("publications")
    op.drop_table("authors")
    op.drop_table("researchers")
    op.drop_table("users_roles")
    op.drop_table("users")
    op.drop_table("roles")
