"""Unit tests for the JSON cache layer."""

import json
import threading
from datetime import UTC, datetime, timedelta

import pytest

from modlicense.cache import ModuleCache
from modlicense.exceptions import CacheError, CacheIntegrityError
from modlicense.models import LicenseRecord, Module


@pytest.fixture
def cache_path(tmp_path):
    """Return a cache file path inside a temporary directory."""
    return tmp_path / "cache" / "licenses.json"


@pytest.fixture
def cache(cache_path):
    """Create an empty ModuleCache backed by a temporary file."""
    return ModuleCache(cache_path)


def _write_cache(path, modules):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"Modules": modules}), encoding="utf-8")


class TestCacheBasicOperations:
    """Test cache insertion and lookups."""

    def test_insert_and_hit(self, cache, module, mit_license):
        """Test that an inserted license is returned on the next hit."""
        cache.insert(module, mit_license)

        assert cache.record_hit(module) == mit_license

    def test_miss_returns_none(self, cache, module):
        """Test cache miss returns None."""
        assert cache.record_hit(module) is None
        assert cache.lookup(module.path) is None

    def test_other_version_is_a_miss(self, cache, module, mit_license):
        """Test that a different version of the same path is not a hit."""
        cache.insert(module, mit_license)

        other = Module(path=module.path, version="v2.0.0", hash="h9")
        assert cache.record_hit(other) is None

    def test_new_versions_are_appended(self, cache, module, mit_license):
        """Test that versions accumulate under one path entry."""
        apache = LicenseRecord(name="Apache License 2.0", spdx="Apache-2.0")
        cache.insert(module, mit_license)
        cache.insert(Module(path=module.path, version="v2.0.0", hash="h2"), apache)

        entry = cache.lookup(module.path)
        assert [v.version for v in entry.versions] == ["v1.0.0", "v2.0.0"]
        assert entry.versions[1].spdx == "Apache-2.0"
        assert len(cache) == 1

    def test_same_version_is_replaced(self, cache, module, mit_license):
        """Test that at most one sub-record exists per version."""
        cache.insert(module, mit_license)
        cache.insert(module, LicenseRecord(name="ISC License", spdx="ISC"))

        entry = cache.lookup(module.path)
        assert len(entry.versions) == 1
        assert entry.versions[0].spdx == "ISC"

    def test_insert_sets_timestamps_and_hash(self, cache, module, mit_license):
        """Test that created and used are set together at insertion."""
        before = datetime.now(UTC)
        cache.insert(module, mit_license)

        cached = cache.lookup(module.path).get(module.version)
        assert cached.hash == "h1"
        assert cached.created == cached.used
        assert cached.created >= before

    def test_hit_refreshes_last_used(self, cache, module, mit_license):
        """Test that a hit moves the used timestamp forward."""
        cache.insert(module, mit_license)
        cached = cache.lookup(module.path).get(module.version)
        old = datetime.now(UTC) - timedelta(days=10)
        cached.used = old
        created = cached.created

        cache.record_hit(module)

        assert cached.used > old
        assert cached.created == created

    def test_hash_mismatch_raises(self, cache, module, mit_license):
        """Test that a changed hash for a cached version is fatal."""
        cache.insert(module, mit_license)
        changed = Module(path=module.path, version=module.version, hash="h2")

        with pytest.raises(CacheIntegrityError) as exc_info:
            cache.record_hit(changed)

        assert exc_info.value.cached_hash == "h1"
        assert exc_info.value.hash == "h2"

    def test_concurrent_inserts(self, cache, mit_license):
        """Test that inserts from many threads are all kept."""

        def worker(n):
            for i in range(20):
                cache.insert(
                    Module(path=f"github.com/x/m{n}", version=f"v1.0.{i}", hash="h"),
                    mit_license,
                )

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        info = cache.info()
        assert info["modules"] == 8
        assert info["versions"] == 160


class TestCachePersistence:
    """Test loading and saving the cache file."""

    def test_save_and_load_round_trip(self, cache, cache_path, module, mit_license):
        """Test that a saved cache can be loaded into a new instance."""
        cache.insert(module, mit_license)
        cache.save()

        loaded = ModuleCache(cache_path)
        assert loaded.load() is True
        assert loaded.record_hit(module) == mit_license

    def test_saved_file_format(self, cache, cache_path, module, mit_license):
        """Test the persisted JSON layout."""
        cache.insert(module, mit_license)
        cache.save()

        data = json.loads(cache_path.read_text())
        assert data["Modules"][0]["path"] == "github.com/x/a"
        verlic = data["Modules"][0]["verlic"][0]
        assert verlic["version"] == "v1.0.0"
        assert verlic["license"] == "MIT"
        assert verlic["spdx"] == "MIT"
        assert verlic["hash"] == "h1"
        assert "created" in verlic and "used" in verlic

    def test_load_existing_file(self, cache, cache_path, module):
        """Test loading a hand-written cache file."""
        now = datetime.now(UTC).isoformat()
        _write_cache(
            cache_path,
            [
                {
                    "path": "github.com/x/a",
                    "verlic": [
                        {
                            "version": "v1.0.0",
                            "license": "MIT License",
                            "hash": "h1",
                            "created": now,
                            "used": now,
                        }
                    ],
                }
            ],
        )

        assert cache.load() is True
        assert cache.record_hit(module) == LicenseRecord(name="MIT License")

    def test_load_missing_file_starts_empty(self, cache):
        """Test that a missing file is not an error."""
        assert cache.load() is False
        assert len(cache) == 0

    def test_load_corrupt_file_starts_empty(self, cache, cache_path):
        """Test that an unparsable file is treated as an empty cache."""
        cache_path.parent.mkdir(parents=True)
        cache_path.write_text("{not json")

        assert cache.load() is False
        assert len(cache) == 0

    def test_save_failure_raises(self, tmp_path, module, mit_license):
        """Test that a failed write raises CacheError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        cache = ModuleCache(blocker / "licenses.json")
        cache.insert(module, mit_license)

        with pytest.raises(CacheError):
            cache.save()


class TestCacheClearAndInfo:
    """Test cache clearing and statistics."""

    def test_clear_specific_module(self, cache, module, mit_license):
        """Test clearing a single module path."""
        other = Module(path="github.com/x/b", version="v1.0.0", hash="h")
        cache.insert(module, mit_license)
        cache.insert(other, mit_license)

        assert cache.clear(module.path) == 1
        assert cache.lookup(module.path) is None
        assert cache.lookup(other.path) is not None

    def test_clear_all(self, cache, module, mit_license):
        """Test clearing every module."""
        cache.insert(module, mit_license)
        cache.insert(Module(path="github.com/x/b", version="v1"), mit_license)

        assert cache.clear() == 2
        assert len(cache) == 0

    def test_clear_nonexistent_module(self, cache):
        """Test clearing an unknown path removes nothing."""
        assert cache.clear("github.com/none/none") == 0

    def test_info(self, cache, cache_path, module, mit_license):
        """Test info() before and after saving."""
        cache.insert(module, mit_license)
        info = cache.info()
        assert info["modules"] == 1
        assert info["versions"] == 1
        assert info["size_bytes"] == 0

        cache.save()
        assert cache.info()["size_bytes"] > 0
        assert cache.info()["path"] == str(cache_path)
