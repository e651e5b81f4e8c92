"""Core data models for modlicense.

This module defines the fundamental data structures used throughout the
license resolution system: the modules compiled into a binary, the
licenses resolved for them, and the records persisted in the cache.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Module:
    """Immutable identity of a dependency compiled into a binary.

    Equality and hashing only consider ``path`` and ``version`` so that a
    set of modules deduplicates dependencies shared by several binaries.

    Attributes:
        path: Module import path (e.g., "github.com/pkg/errors").
        version: Exact module version (e.g., "v0.9.1").
        hash: Content hash recorded by the toolchain (e.g., "h1:...").
    """

    path: str
    version: str
    hash: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.path}@{self.version}"


@dataclass(frozen=True)
class LicenseRecord:
    """A resolved license.

    Attributes:
        name: Human-readable license name (e.g., "MIT License").
        spdx: SPDX identifier when known (e.g., "MIT").
    """

    name: str
    spdx: Optional[str] = None

    def __str__(self) -> str:
        return self.spdx or self.name


class StatusType(str, Enum):
    """Severity of a progress update emitted while resolving a module."""

    NORMAL = "normal"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Resolution:
    """Final outcome of resolving one module.

    Attributes:
        module: The module that was resolved.
        license: Resolved license, or None if nothing was found.
        error: Last lookup error when no license was found.
        cached: True if the license came from the cache.
    """

    module: Module
    license: Optional[LicenseRecord] = None
    error: Optional[Exception] = None
    cached: bool = False


@dataclass
class CachedVersion:
    """License previously resolved for one version of a module."""

    version: str
    license: str
    hash: str
    created: datetime
    used: datetime
    spdx: Optional[str] = None

    @property
    def record(self) -> LicenseRecord:
        return LicenseRecord(name=self.license, spdx=self.spdx)


@dataclass
class CachedModule:
    """All cached versions of a single module path.

    Attributes:
        path: Module import path.
        versions: Cached versions in insertion order, at most one per version.
    """

    path: str
    versions: list[CachedVersion] = field(default_factory=list)

    def get(self, version: str) -> Optional[CachedVersion]:
        """Return the cached sub-record for ``version``, if any."""
        for cached in self.versions:
            if cached.version == version:
                return cached
        return None
