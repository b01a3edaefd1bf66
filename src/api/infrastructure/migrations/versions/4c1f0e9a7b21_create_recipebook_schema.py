"""create recipebook schema

Revision ID: 4c1f0e9a7b21
Revises:
Create Date: 2026-10-17 09:12:44.518203

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "4c1f0e9a7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

group_role = postgresql.ENUM(
    "ADMIN", "POWER_USER", "READ_ONLY", name="group_role", create_type=False
)
recipe_status = postgresql.ENUM(
    "DRAFT", "PUBLISHED", name="recipe_status", create_type=False
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _taxonomy_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("group_id", sa.String(length=26), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("slug", sa.String(length=80), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["group_id"],
            ["groups.id"],
            name=op.f(f"fk_{name}_group_id_groups"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{name}")),
        sa.UniqueConstraint(
            "group_id", "slug", name=op.f(f"uq_{name}_group_id_slug")
        ),
    )
    op.create_index(op.f(f"ix_{name}_group_id"), name, ["group_id"], unique=False)


def _link_table(name: str, term_column: str, term_table: str) -> None:
    op.create_table(
        name,
        sa.Column("recipe_id", sa.String(length=26), nullable=False),
        sa.Column(term_column, sa.String(length=26), nullable=False),
        sa.ForeignKeyConstraint(
            ["recipe_id"],
            ["recipes.id"],
            name=op.f(f"fk_{name}_recipe_id_recipes"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            [term_column],
            [f"{term_table}.id"],
            name=op.f(f"fk_{name}_{term_column}_{term_table}"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("recipe_id", term_column, name=op.f(f"pk_{name}")),
    )
    op.create_index(
        op.f(f"ix_{name}_{term_column}"), name, [term_column], unique=False
    )


def upgrade() -> None:
    """Upgrade schema."""
    group_role.create(op.get_bind(), checkfirst=True)
    recipe_status.create(op.get_bind(), checkfirst=True)

    # VARCHAR(255) accommodates external SSO IDs
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )

    op.create_table(
        "groups",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column(
            "allow_power_user_edit",
            sa.Boolean(),
            server_default=sa.true(),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_groups")),
        sa.UniqueConstraint("slug", name=op.f("uq_groups_slug")),
    )

    op.create_table(
        "group_memberships",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("group_id", sa.String(length=26), nullable=False),
        sa.Column("role", group_role, nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_group_memberships_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["group_id"],
            ["groups.id"],
            name=op.f("fk_group_memberships_group_id_groups"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_group_memberships")),
        sa.UniqueConstraint(
            "user_id",
            "group_id",
            name=op.f("uq_group_memberships_user_id_group_id"),
        ),
    )
    op.create_index(
        op.f("ix_group_memberships_user_id"),
        "group_memberships",
        ["user_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_group_memberships_group_id"),
        "group_memberships",
        ["group_id"],
        unique=False,
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("group_id", sa.String(length=26), nullable=False),
        sa.Column("created_by", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("ingredients", postgresql.JSONB(), nullable=False),
        sa.Column("steps", postgresql.JSONB(), nullable=False),
        sa.Column("servings", sa.Integer(), nullable=True),
        sa.Column("prep_time", sa.Integer(), nullable=True),
        sa.Column("cook_time", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("family_story", sa.Text(), nullable=True),
        sa.Column("photo_url", sa.String(length=2000), nullable=True),
        sa.Column("status", recipe_status, nullable=False),
        sa.Column("source_url", sa.String(length=2000), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["group_id"],
            ["groups.id"],
            name=op.f("fk_recipes_group_id_groups"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.id"],
            name=op.f("fk_recipes_created_by_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_recipes")),
    )
    op.create_index(op.f("ix_recipes_group_id"), "recipes", ["group_id"])
    op.create_index(op.f("ix_recipes_created_by"), "recipes", ["created_by"])
    op.create_index(op.f("ix_recipes_status"), "recipes", ["status"])

    _taxonomy_table("categories")
    _taxonomy_table("tags")
    _link_table("recipe_categories", "category_id", "categories")
    _link_table("recipe_tags", "tag_id", "tags")

    op.create_table(
        "comments",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("recipe_id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["recipe_id"],
            ["recipes.id"],
            name=op.f("fk_comments_recipe_id_recipes"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_comments_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_comments")),
    )
    op.create_index(op.f("ix_comments_recipe_id"), "comments", ["recipe_id"])
    op.create_index(op.f("ix_comments_user_id"), "comments", ["user_id"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("recipe_id", sa.String(length=26), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_favorites_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["recipe_id"],
            ["recipes.id"],
            name=op.f("fk_favorites_recipe_id_recipes"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_favorites")),
        sa.UniqueConstraint(
            "user_id", "recipe_id", name=op.f("uq_favorites_user_id_recipe_id")
        ),
    )
    op.create_index(op.f("ix_favorites_user_id"), "favorites", ["user_id"])
    op.create_index(op.f("ix_favorites_recipe_id"), "favorites", ["recipe_id"])

    op.create_table(
        "import_attempts",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("attempted_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_import_attempts")),
    )
    op.create_index(op.f("ix_import_attempts_key"), "import_attempts", ["key"])
    op.create_index(
        op.f("ix_import_attempts_attempted_at"), "import_attempts", ["attempted_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("import_attempts")
    op.drop_table("favorites")
    op.drop_table("comments")
    op.drop_table("recipe_tags")
    op.drop_table("recipe_categories")
    op.drop_table("tags")
    op.drop_table("categories")
    op.drop_table("recipes")
    op.drop_table("group_memberships")
    op.drop_table("groups")
    op.drop_table("users")
    recipe_status.drop(op.get_bind(), checkfirst=True)
    group_role.drop(op.get_bind(), checkfirst=True)
