"""Custom exceptions for modlicense."""


class ModLicenseError(Exception):
    """Base exception for all modlicense errors."""

    pass


class ConfigurationError(ModLicenseError):
    """Exception raised when the configuration file is invalid."""

    pass


class ScanError(ModLicenseError):
    """Exception raised when modules cannot be read from a binary."""

    pass


class LicenseLookupError(ModLicenseError):
    """Exception raised when a finder fails to query its source."""

    pass


class CacheError(ModLicenseError):
    """Exception raised when the cache file cannot be written."""

    pass


class CacheIntegrityError(CacheError):
    """A cached version of a module has a different content hash.

    The module's content changed without a version bump, so none of the
    cached data can be trusted and the whole run must stop.
    """

    def __init__(self, path: str, version: str, cached_hash: str, hash: str) -> None:
        self.path = path
        self.version = version
        self.cached_hash = cached_hash
        self.hash = hash
        super().__init__(
            f"hash mismatch for {path}@{version}: "
            f"cached {cached_hash!r}, binary has {hash!r}"
        )
