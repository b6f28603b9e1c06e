"""PackageExtra SQLAlchemy model."""

from typing import Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class PackageExtra(BaseModel):
    """Per-package side record refreshed on every tag reconciliation."""

    __tablename__ = "package_extras"
    __repr_fields__ = ("package_name", "repo_unavailable")

    package_name: Mapped[str] = mapped_column(
        String(214), nullable=False, unique=True
    )
    repo_unavailable: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    # [{"tag": ..., "commit": ...}] from the latest run
    invalid_tags: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False
    )
