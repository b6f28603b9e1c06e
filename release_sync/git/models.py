"""Git data transfer objects."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RemoteTag:
    """A tag in a remote repository and the commit it points to."""

    tag: str
    commit: str

    def to_dict(self) -> dict[str, str]:
        """Convert to a JSON-serialisable dictionary."""
        return asdict(self)
