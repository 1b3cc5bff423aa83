"""Remote skill fetcher downloading SKILL.md over HTTP(S)."""

import asyncio
import logging
from typing import Optional

import httpx

from skill_hub.core.exceptions import ContentNotFoundError, FetchError
from skill_hub.core.manifest import SkillEntry
from skill_hub.core.resolver import resolve_content_url
from skill_hub.core.skill import SkillDocument

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = (403, 429, 500, 502, 503, 504)


class RemoteFetcher:
    """Fetcher for downloading skill documents from their manifest URL."""

    MAX_RETRIES = 3
    RETRY_DELAY = 1.0  # seconds

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize remote fetcher.

        Args:
            token: Optional GitHub token, only sent to GitHub hosts
            timeout: Request timeout in seconds
            client: Optional shared client; one is created per fetch otherwise
        """
        self.token = token
        self.timeout = timeout
        self._client = client
        self._headers = {"Accept": "text/markdown, text/plain;q=0.9, */*;q=0.1"}

    def _headers_for(self, github: bool) -> dict[str, str]:
        headers = dict(self._headers)
        if github and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch(self, entry: SkillEntry) -> SkillDocument:
        """Fetch a skill's SKILL.md from its URL.

        Args:
            entry: Manifest entry whose url points at the document

        Returns:
            SkillDocument with the downloaded markdown

        Raises:
            ContentNotFoundError: If the server answers 404
            FetchError: If the download fails after retries
        """
        try:
            location = resolve_content_url(entry.url)
        except ValueError as e:
            raise FetchError(str(e)) from e

        if location.type != "http" or not location.url:
            raise FetchError(f"Not a remote URL: {entry.url}")

        headers = self._headers_for(location.github)

        if self._client is not None:
            content = await self._download(self._client, location.url, headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                content = await self._download(client, location.url, headers)

        return SkillDocument(id=entry.id, content=content, origin=location.url)

    async def _download(
        self, client: httpx.AsyncClient, url: str, headers: dict[str, str]
    ) -> str:
        """Download a document, retrying transient failures.

        Args:
            client: HTTP client
            url: Resolved content URL
            headers: Request headers

        Returns:
            Response body as text

        Raises:
            ContentNotFoundError: On 404
            FetchError: If the request fails after retries
        """
        last_error: Optional[Exception] = None

        for attempt in range(self.MAX_RETRIES):
            try:
                response = await client.get(url, headers=headers, follow_redirects=True)
                response.raise_for_status()
                logger.debug("Fetched %s (%d bytes)", url, len(response.content))
                return response.text

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status == 404:
                    raise ContentNotFoundError(f"Not found: {url}") from e
                last_error = e
                if status not in RETRY_STATUS_CODES:
                    break
            except httpx.HTTPError as e:
                last_error = e

            if attempt < self.MAX_RETRIES - 1:
                delay = self.RETRY_DELAY * (attempt + 1)
                logger.warning(
                    "Fetching %s failed (%s), retrying in %.1fs", url, last_error, delay
                )
                await asyncio.sleep(delay)

        raise FetchError(f"Failed to fetch {url}: {last_error}") from last_error
