"""Shared HTTP session handling for finders and translators that go remote."""

from typing import Optional

import aiohttp

from modlicense import __version__


class HttpClient:
    """Mixin owning a lazily created aiohttp.ClientSession.

    The session is reused for connection pooling across every module
    resolved by the engine.

    Attributes:
        timeout: Total timeout in seconds for a single request.
    """

    USER_AGENT = f"modlicense/{__version__}"

    def __init__(self, timeout: float = 30) -> None:
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        """Create a new aiohttp.ClientSession.

        Subclasses can override this to provide custom session configuration.
        """
        return aiohttp.ClientSession(
            headers={"User-Agent": self.USER_AGENT},
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
