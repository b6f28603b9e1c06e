"""Package manifest exceptions."""


class PackageError(Exception):
    """Base exception for package manifest errors."""

    def __init__(self, message: str, package_name: str | None = None):
        super().__init__(message)
        self.package_name = package_name


class PackageNotFoundError(PackageError):
    """Raised when no manifest exists for the requested package."""

    pass


class PackageManifestError(PackageError):
    """Raised when a manifest cannot be parsed or fails validation."""

    pass
