"""Release SQLAlchemy model."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .enums import ReleaseReason, ReleaseState


class Release(BaseModel):
    """Model for one package version discovered from a remote tag."""

    __tablename__ = "releases"
    __repr_fields__ = ("package_name", "version", "state")

    package_name: Mapped[str] = mapped_column(String(214), nullable=False, index=True)
    version: Mapped[str] = mapped_column(String(128), nullable=False)

    # Remote tag the release was created from
    commit: Mapped[str] = mapped_column(String(64), nullable=False)
    tag: Mapped[str] = mapped_column(String(255), nullable=False)

    # Build outcome, resolved by the build executor
    state: Mapped[ReleaseState] = mapped_column(
        default=ReleaseState.PENDING, nullable=False
    )
    reason: Mapped[ReleaseReason] = mapped_column(
        default=ReleaseReason.NONE, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("package_name", "version", name="uq_release_package_version"),
    )

    @property
    def key(self) -> str:
        """Return the ``name@version`` identifier used in logs."""
        return f"{self.package_name}@{self.version}"

    @property
    def is_succeeded(self) -> bool:
        """Check if the release built successfully."""
        return self.state == ReleaseState.SUCCEEDED

    @property
    def is_failed(self) -> bool:
        """Check if the release build failed."""
        return self.state == ReleaseState.FAILED

    def matches_tag(self, tag: str, commit: str) -> bool:
        """Check if the release was created from the given tag and commit."""
        return self.tag == tag and self.commit == commit
