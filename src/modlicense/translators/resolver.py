"""Translator that resolves vanity import paths to their repository.

The go tool finds the repository behind an import path such as
``go.uber.org/zap`` by fetching ``https://go.uber.org/zap?go-get=1`` and
reading the ``go-import`` meta tag::

    <meta name="go-import" content="go.uber.org/zap git https://github.com/uber-go/zap">

This translator does the same and rewrites the module path to the
repository URL without its scheme.
"""

import asyncio
import dataclasses
import logging
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup

from modlicense.http import HttpClient
from modlicense.models import Module
from modlicense.translators.base import BaseTranslator

logger = logging.getLogger(__name__)


def parse_go_import(html: str, path: str) -> Optional[str]:
    """Return the repository URL for ``path`` from a go-get page.

    Args:
        html: Body of the ``?go-get=1`` response.
        path: Module path that was requested.

    Returns:
        Repository URL of the matching import prefix, or None.
    """
    soup = BeautifulSoup(html, "html.parser")
    for meta in soup.find_all("meta", attrs={"name": "go-import"}):
        fields = (meta.get("content") or "").split()
        if len(fields) != 3:
            continue
        prefix, _vcs, repo = fields
        if path == prefix or path.startswith(prefix + "/"):
            return repo
    return None


def repo_path(repo_url: str) -> Optional[str]:
    """Convert a repository URL into a module-style path.

    ``https://github.com/uber-go/zap.git`` becomes ``github.com/uber-go/zap``.
    """
    scheme, sep, rest = repo_url.partition("://")
    if not sep or scheme not in ("http", "https", "git", "ssh"):
        return None

    rest = rest.rstrip("/")
    if rest.endswith(".git"):
        rest = rest[:-4]
    return rest or None


class ResolverTranslator(HttpClient, BaseTranslator):
    """Resolve import paths through the go-get discovery protocol.

    Paths already on a known code host are left alone, and only rewrites
    that land on a known code host are kept. Any failure to fetch or parse
    the discovery page leaves the module unchanged.

    Attributes:
        code_hosts: Hosts whose paths are repository paths.
    """

    CODE_HOSTS = frozenset({"github.com", "gitlab.com", "bitbucket.org"})

    def __init__(
        self,
        code_hosts: Optional[frozenset[str]] = None,
        timeout: float = 10,
    ) -> None:
        super().__init__(timeout=timeout)
        self.code_hosts = self.CODE_HOSTS if code_hosts is None else code_hosts

    async def translate(self, module: Module) -> Optional[Module]:
        host = module.path.split("/", 1)[0]
        if host in self.code_hosts or "." not in host:
            return None

        url = f"https://{module.path}?go-get=1"
        session = await self._get_session()
        try:
            async with session.get(url) as response:
                if response.status != 200:
                    logger.debug("go-get lookup for %s returned %d", module.path, response.status)
                    return None
                html = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.debug("go-get lookup for %s failed: %s", module.path, e)
            return None

        repo = parse_go_import(html, module.path)
        path = repo_path(repo) if repo else None
        if path is None or path.split("/", 1)[0] not in self.code_hosts:
            return None
        return dataclasses.replace(module, path=path)
