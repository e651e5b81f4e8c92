"""GitHub license finder.

Fetches license information from GitHub's repository license API for
modules hosted on github.com.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from modlicense.exceptions import LicenseLookupError
from modlicense.finders.base import StatusListener
from modlicense.finders.http import HttpFinder
from modlicense.models import LicenseRecord, Module, StatusType

logger = logging.getLogger(__name__)


class GitHubFinder(HttpFinder):
    """Finder that queries GitHub's license API.

    Only modules whose path starts with ``github.com/<owner>/<repo>`` are
    looked up; anything else is reported as not found so that the engine
    can retry with a translated path. Supports authentication via a GitHub
    token for higher rate limits.

    Attributes:
        github_token: Optional GitHub personal access token.
        api_url: Base URL of the GitHub REST API.
        max_retries: Retries when rate limited.
    """

    API_URL = "https://api.github.com"

    def __init__(
        self,
        github_token: Optional[str] = None,
        api_url: str = API_URL,
        max_retries: int = 3,
    ) -> None:
        """Initialize GitHubFinder.

        Args:
            github_token: Optional GitHub personal access token for API
                authentication. Increases rate limit from 60 to 5000
                requests/hour.
            api_url: Base URL of the GitHub REST API.
            max_retries: Maximum number of retries for rate limiting.
        """
        super().__init__()
        self.github_token = github_token
        self.api_url = api_url.rstrip("/")
        self.max_retries = max_retries

    @property
    def name(self) -> str:
        return "GitHub"

    @staticmethod
    def parse_repo(path: str) -> Optional[tuple[str, str]]:
        """Extract owner and repository name from a module path.

        Args:
            path: Module path such as "github.com/owner/repo/v2/sub".

        Returns:
            Tuple of (owner, repo), or None for non-GitHub paths.
        """
        parts = path.split("/")
        if len(parts) < 3 or parts[0] != "github.com":
            return None

        owner, repo = parts[1], parts[2]
        if repo.endswith(".git"):
            repo = repo[:-4]
        if not owner or not repo:
            return None

        return (owner, repo)

    async def _fetch_license(
        self, owner: str, repo: str, retry_count: int = 0
    ) -> Optional[dict]:
        """Fetch license information from the GitHub API.

        Args:
            owner: Repository owner.
            repo: Repository name.
            retry_count: Current retry attempt.

        Returns:
            License data dictionary, or None if the repository has no license.

        Raises:
            LicenseLookupError: If the request fails or stays rate limited.
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/license"

        headers = {
            "Accept": "application/vnd.github+json",
        }

        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"

        session = await self._get_session()

        try:
            async with session.get(url, headers=headers) as response:
                if response.status in (403, 429):
                    if retry_count >= self.max_retries:
                        raise LicenseLookupError(
                            f"GitHub rate limit exceeded for {owner}/{repo}"
                        )

                    retry_after = response.headers.get("Retry-After")
                    if retry_after and retry_after.isdigit():
                        wait_time = int(retry_after)
                    else:
                        # Exponential backoff: 1s, 2s, 4s
                        wait_time = 2**retry_count

                    logger.debug(
                        "Rate limited on %s/%s, retrying in %ds", owner, repo, wait_time
                    )
                    await asyncio.sleep(wait_time)
                    return await self._fetch_license(owner, repo, retry_count + 1)

                if response.status == 404:
                    return None

                if response.status != 200:
                    raise LicenseLookupError(
                        f"GitHub API returned {response.status} for {owner}/{repo}"
                    )

                return await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise LicenseLookupError(
                f"GitHub request for {owner}/{repo} failed: {e}"
            ) from e

    async def find(
        self, module: Module, listener: Optional[StatusListener] = None
    ) -> Optional[LicenseRecord]:
        parsed = self.parse_repo(module.path)
        if parsed is None:
            return None

        owner, repo = parsed
        if listener:
            listener(StatusType.NORMAL, f"querying GitHub API for {owner}/{repo}")

        license_data = await self._fetch_license(owner, repo)
        if license_data is None:
            if listener:
                listener(StatusType.WARNING, f"no license found for {owner}/{repo}")
            return None

        license_info = license_data.get("license") or {}
        spdx_id = license_info.get("spdx_id")
        name = license_info.get("name")

        # GitHub reports licenses it cannot classify as NOASSERTION
        if not name or not spdx_id or spdx_id == "NOASSERTION":
            if listener:
                listener(StatusType.WARNING, f"unrecognized license for {owner}/{repo}")
            return None

        return LicenseRecord(name=name, spdx=spdx_id)
