"""create_release_tables

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.120391+00:00

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RELEASE_STATES = ("PENDING", "SUCCEEDED", "FAILED")
RELEASE_REASONS = (
    "NONE",
    "VERSION_CONFLICT",
    "INTERNAL",
    "BAD_GATEWAY",
    "SERVICE_UNAVAILABLE",
    "GATEWAY_TIMEOUT",
    "PACKAGE_NOT_FOUND",
    "PACKAGE_NAME_NOT_MATCH",
    "PACKAGE_VERSION_NOT_MATCH",
    "PACKAGE_INVALID_JSON",
    "REMOTE_REPOSITORY_UNAVAILABLE",
    "BUILD_TIMEOUT",
)


def upgrade() -> None:
    """Apply migration changes."""
    op.create_table(
        "releases",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("package_name", sa.String(214), nullable=False),
        sa.Column("version", sa.String(128), nullable=False),
        sa.Column("commit", sa.String(64), nullable=False),
        sa.Column("tag", sa.String(255), nullable=False),
        sa.Column(
            "state",
            sa.Enum(*RELEASE_STATES, name="releasestate"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column(
            "reason",
            sa.Enum(*RELEASE_REASONS, name="releasereason"),
            nullable=False,
            server_default="NONE",
        ),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("package_name", "version", name="uq_release_package_version"),
    )
    op.create_index("ix_releases_package_name", "releases", ["package_name"])

    op.create_table(
        "package_extras",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("package_name", sa.String(214), nullable=False),
        sa.Column("repo_unavailable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "invalid_tags",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("package_name", name="uq_package_extras_package_name"),
    )


def downgrade() -> None:
    """Revert migration changes."""
    op.drop_table("package_extras")
    op.drop_index("ix_releases_package_name", table_name="releases")
    op.drop_table("releases")
    sa.Enum(name="releasereason").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="releasestate").drop(op.get_bind(), checkfirst=True)
