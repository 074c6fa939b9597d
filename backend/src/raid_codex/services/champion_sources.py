"""HTTP clients for the third-party champion data sources.

Two sources are used:
- the stats source (InTeleria): champion list with base stats, avatar markup
  and a detail page per champion that carries skill text;
- the ratings source (HellHades): champion list with content ratings and a
  per-champion skills endpoint.

List fetches raise `SourceFetchError` on failure. Per-champion fetches are
enrichment calls and never raise: any failure returns an empty list.
"""

import logging
from typing import Any, Optional

import httpx

from raid_codex.config import Settings, get_settings
from raid_codex.utils.html_text import parse_skills_html

logger = logging.getLogger(__name__)

INTELERIA_DETAIL_URL = "https://www.inteleria.com/champion-list/{slug}/"


class SourceFetchError(RuntimeError):
    """Raised when a champion list cannot be fetched or parsed."""


def unwrap_skill_payload(data: Any) -> list[dict]:
    """Skills come back as `[[skill, ...]]` or `[skill, ...]`."""
    if isinstance(data, list) and data and isinstance(data[0], list):
        data = data[0]
    if not isinstance(data, list):
        return []
    return [s for s in data if isinstance(s, dict)]


class ChampionSourceClient:
    """Async client for both champion sources."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            settings: Source URLs and timeout; defaults to the global settings
            transport: Optional httpx transport (used by tests)
        """
        self.settings = settings or get_settings()
        self.timeout = self.settings.request_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ChampionSourceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Champion lists
    # ------------------------------------------------------------------
    async def fetch_stats_source(self) -> list[dict]:
        """Fetch the stats-source champion list."""
        logger.info("Fetching champion list from InTeleria")
        try:
            client = await self._get_client()
            response = await client.post(
                self.settings.inteleria_api_url,
                json={"length": self.settings.inteleria_list_length},
            )
            response.raise_for_status()
            data = response.json()["data"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise SourceFetchError(f"InTeleria fetch failed: {e}") from e
        if not isinstance(data, list):
            raise SourceFetchError("InTeleria response has no champion list")
        logger.info(f"Got {len(data)} champions from InTeleria")
        return data

    async def fetch_ratings_source(self) -> list[dict]:
        """Fetch the ratings-source champion list."""
        logger.info("Fetching champion list from HellHades")
        try:
            client = await self._get_client()
            response = await client.get(self.settings.hellhades_api_url)
            response.raise_for_status()
            data = response.json()["champions"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise SourceFetchError(f"HellHades fetch failed: {e}") from e
        if not isinstance(data, list):
            raise SourceFetchError("HellHades response has no champion list")
        logger.info(f"Got {len(data)} entries from HellHades")
        return data

    # ------------------------------------------------------------------
    # Per-champion enrichment
    # ------------------------------------------------------------------
    async def fetch_skills(self, source_id: Any) -> list[dict]:
        """Fetch raw skills from the ratings source; empty on any failure.

        `source_id` must be the record's post `id`; the in-game `heroId`
        only resolves for a handful of champions.
        """
        url = self.settings.hellhades_skills_url.format(id=source_id)
        try:
            client = await self._get_client()
            response = await client.get(url)
            if response.status_code != 200:
                logger.warning(f"Skills fetch for {source_id} returned {response.status_code}")
                return []
            return unwrap_skill_payload(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Skills fetch for {source_id} failed: {e}")
            return []

    async def fetch_detail_skills(self, detail_slug: str) -> list[dict]:
        """Scrape skills from a stats-source detail page; empty on any failure."""
        url = INTELERIA_DETAIL_URL.format(slug=detail_slug)
        try:
            client = await self._get_client()
            response = await client.get(url)
            if response.status_code != 200:
                logger.warning(f"Detail page {detail_slug} returned {response.status_code}")
                return []
            return parse_skills_html(response.text)
        except httpx.HTTPError as e:
            logger.warning(f"Detail page {detail_slug} failed: {e}")
            return []

    async def download_file(self, url: str) -> Optional[bytes]:
        """Download a file body; None on any failure."""
        try:
            client = await self._get_client()
            response = await client.get(url)
            if response.status_code != 200:
                logger.warning(f"HTTP {response.status_code} for {url}")
                return None
            return response.content
        except httpx.HTTPError as e:
            logger.warning(f"Download of {url} failed: {e}")
            return None
