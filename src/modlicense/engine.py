"""Concurrent license resolution engine.

This module resolves the license of every module compiled into a binary,
combining the cache, the finder chain and the translator chain:

1. Cache: reuse the license stored for the same path, version and hash
2. Finders: look up the module as it appears in the binary
3. Translators: if nothing was found, retry with the rewritten module path
4. Cache: remember whatever license was found

Modules are resolved concurrently, with at most ``concurrency`` running at
any time.
"""

import asyncio
import functools
import logging
from collections.abc import Iterable
from typing import Optional

from modlicense.cache import ModuleCache
from modlicense.finders.base import BaseFinder, find_license
from modlicense.models import Module, Resolution
from modlicense.outputs.base import BaseOutput, MultiOutput
from modlicense.translators.base import BaseTranslator, translate

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Resolves licenses for a set of modules.

    A cached entry whose version matches but whose hash differs means a
    dependency changed without a version bump. This raises
    CacheIntegrityError out of :meth:`run`, cancelling every other module
    and leaving the cache unsaved.

    Attributes:
        finders: Finder chain in priority order.
        translators: Translator chain in configured order.
        output: Receives start/update/finish events for every module.
        cache: Optional cache of previous results.
        concurrency: Maximum number of modules resolved at the same time.
    """

    DEFAULT_CONCURRENCY = 5

    def __init__(
        self,
        finders: list[BaseFinder],
        translators: Optional[list[BaseTranslator]] = None,
        output: Optional[BaseOutput] = None,
        cache: Optional[ModuleCache] = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        """Initialize the engine.

        Args:
            finders: Finders to try, highest priority first.
            translators: Translators applied before the second lookup.
            output: Output receiving lifecycle events. Defaults to no output.
            cache: Cache to consult and update. None disables caching.
            concurrency: Maximum number of concurrently running modules.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")

        self.finders = finders
        self.translators = translators or []
        self.output = output or MultiOutput()
        self.cache = cache
        self.concurrency = concurrency
        self._semaphore: Optional[asyncio.Semaphore] = None

    async def resolve(self, module: Module) -> Resolution:
        """Resolve the license of a single module.

        Does not acquire a concurrency slot; :meth:`run` does that.

        Args:
            module: Module to resolve.

        Returns:
            Resolution with the license found, or the last lookup error.

        Raises:
            CacheIntegrityError: If the cached hash for this version differs.
        """
        listener = functools.partial(self.output.update, module)

        if self.cache is not None:
            cached = self.cache.record_hit(module)
            if cached is not None:
                logger.debug("Cache hit for %s: %s", module, cached)
                return Resolution(module=module, license=cached, cached=True)

        # Try the module as recorded in the binary first, then translated.
        record, error = await find_license(module, self.finders, listener)
        if record is None:
            translated = await translate(module, self.translators)
            logger.debug("No license for %s, retrying as %s", module, translated.path)
            record, error = await find_license(translated, self.finders, listener)

        if record is not None:
            error = None
            if self.cache is not None:
                self.cache.insert(module, record)

        return Resolution(module=module, license=record, error=error)

    async def _run_one(self, module: Module) -> Resolution:
        async with self._semaphore:
            self.output.start(module)
            resolution = await self.resolve(module)
            self.output.finish(module, resolution.license, resolution.error)
            return resolution

    async def run(self, modules: Iterable[Module]) -> dict[Module, Resolution]:
        """Resolve every module concurrently.

        Modules with the same path and version are resolved once. Outputs
        receive results in completion order.

        Args:
            modules: Modules to resolve.

        Returns:
            Dictionary mapping each module to its Resolution.

        Raises:
            CacheIntegrityError: If any cached hash disagrees with a module.

        Any exception raised while resolving a module cancels every other
        pending resolution before it propagates.
        """
        unique = list(dict.fromkeys(modules))
        logger.info("Resolving licenses for %d modules", len(unique))

        self._semaphore = asyncio.Semaphore(self.concurrency)
        tasks = [asyncio.create_task(self._run_one(m)) for m in unique]

        try:
            results = await asyncio.gather(*tasks)
        except BaseException as e:
            logger.error("Aborting: %s", e)
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        resolved = sum(1 for r in results if r.license is not None)
        logger.info("Resolution complete: %d/%d resolved", resolved, len(unique))
        return {r.module: r for r in results}

    async def close(self) -> None:
        """Close any open finder and translator resources (like HTTP sessions)."""
        for finder in self.finders:
            await finder.close()
        for translator in self.translators:
            await translator.close()

    async def __aenter__(self) -> "ResolutionEngine":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
