"""modlicense - License auditing for the dependencies of Go binaries.

This package reads the modules compiled into a binary and resolves the
license of each one, using operator overrides, the GitHub license API and
a persistent cache of earlier results.
"""

__version__ = "0.1.0"

from modlicense.models import (
    CachedModule,
    CachedVersion,
    LicenseRecord,
    Module,
    Resolution,
    StatusType,
)

__all__ = [
    "__version__",
    "CachedModule",
    "CachedVersion",
    "LicenseRecord",
    "Module",
    "Resolution",
    "StatusType",
]
