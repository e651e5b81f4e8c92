"""JSON file cache for license resolution results.

This module provides a persistent cache that remembers the license resolved
for every (module path, version) pair together with the module's content
hash, so repeated runs over the same binaries skip remote lookups.
"""

import json
import logging
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Optional

from modlicense.exceptions import CacheError, CacheIntegrityError
from modlicense.models import CachedModule, CachedVersion, LicenseRecord, Module

logger = logging.getLogger(__name__)


class ModuleCache:
    """In-memory table of cached modules backed by a JSON file.

    The file is read once with :meth:`load` and written back in full with
    :meth:`save`. All access goes through a single lock because the cache is
    shared by every concurrent resolution task.

    Attributes:
        path: Path to the JSON cache file.
    """

    def __init__(self, path: Path) -> None:
        """Initialize an empty cache.

        Args:
            path: Location of the cache file used by load() and save().
        """
        self.path = path
        self._modules: dict[str, CachedModule] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._modules)

    def load(self) -> bool:
        """Load the cache file, replacing the in-memory contents.

        A missing or unreadable file is not an error: the cache simply
        starts empty and will be created on save.

        Returns:
            True if the file was loaded, False if starting empty.
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            modules = [_module_from_dict(item) for item in data.get("Modules") or []]
        except FileNotFoundError:
            logger.info("No cache file at %s, starting empty", self.path)
            modules = None
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Could not read cache %s (%s), starting empty", self.path, e)
            modules = None

        with self._lock:
            self._modules = {m.path: m for m in modules or []}
            logger.debug("Loaded %d cached modules", len(self._modules))
        return modules is not None

    def save(self) -> None:
        """Write the whole cache back to its file.

        Raises:
            CacheError: If the file cannot be written.
        """
        with self._lock:
            data = {"Modules": [_module_to_dict(m) for m in self._modules.values()]}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheError(f"Cannot write cache file '{self.path}': {e}") from e
        logger.debug("Saved %d cached modules to %s", len(data["Modules"]), self.path)

    def lookup(self, path: str) -> Optional[CachedModule]:
        """Return the cached entry for a module path, if any."""
        with self._lock:
            return self._modules.get(path)

    def record_hit(self, module: Module) -> Optional[LicenseRecord]:
        """Return the cached license for a module and mark it as used.

        Args:
            module: Module being resolved.

        Returns:
            The cached LicenseRecord, or None on a cache miss.

        Raises:
            CacheIntegrityError: If the cached version has a different hash.
        """
        with self._lock:
            entry = self._modules.get(module.path)
            cached = entry.get(module.version) if entry else None
            if cached is None:
                return None

            if cached.hash != module.hash:
                raise CacheIntegrityError(
                    module.path, module.version, cached.hash, module.hash
                )

            cached.used = datetime.now(UTC)
            return cached.record

    def insert(self, module: Module, record: LicenseRecord) -> None:
        """Store the license resolved for a module version.

        Args:
            module: Resolved module; its hash is stored for integrity checks.
            record: License that was found.
        """
        now = datetime.now(UTC)
        cached = CachedVersion(
            version=module.version,
            license=record.name,
            spdx=record.spdx,
            hash=module.hash,
            created=now,
            used=now,
        )

        with self._lock:
            entry = self._modules.get(module.path)
            if entry is None:
                entry = self._modules[module.path] = CachedModule(path=module.path)

            for i, existing in enumerate(entry.versions):
                if existing.version == module.version:
                    entry.versions[i] = cached
                    break
            else:
                entry.versions.append(cached)

    def clear(self, path: Optional[str] = None) -> int:
        """Remove cached modules.

        Args:
            path: If given, only remove this module path.

        Returns:
            Number of module paths removed.
        """
        with self._lock:
            if path is None:
                count = len(self._modules)
                self._modules.clear()
                return count
            return 1 if self._modules.pop(path, None) else 0

    def info(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache information:
                - path: Path to the cache file
                - modules: Number of cached module paths
                - versions: Number of cached module versions
                - size_bytes: Cache file size in bytes
        """
        with self._lock:
            modules = len(self._modules)
            versions = sum(len(m.versions) for m in self._modules.values())

        size_bytes = self.path.stat().st_size if self.path.exists() else 0
        return {
            "path": str(self.path),
            "modules": modules,
            "versions": versions,
            "size_bytes": size_bytes,
        }


def _module_from_dict(data: dict[str, Any]) -> CachedModule:
    versions = [
        CachedVersion(
            version=v["version"],
            license=v.get("license", ""),
            spdx=v.get("spdx") or None,
            hash=v.get("hash", ""),
            created=datetime.fromisoformat(v["created"]),
            used=datetime.fromisoformat(v["used"]),
        )
        for v in data.get("verlic") or []
    ]
    return CachedModule(path=data["path"], versions=versions)


def _module_to_dict(module: CachedModule) -> dict[str, Any]:
    return {
        "path": module.path,
        "verlic": [
            {
                "version": v.version,
                "license": v.license,
                "spdx": v.spdx or "",
                "hash": v.hash,
                "created": v.created.isoformat(),
                "used": v.used.isoformat(),
            }
            for v in module.versions
        ],
    }
