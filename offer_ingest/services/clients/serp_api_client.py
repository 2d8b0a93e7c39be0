"""Client for the SerpAPI Google Shopping engine."""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp

from offer_ingest.utils import logger
from offer_ingest.utils.config import (
    SERP_API_KEY,
    SERP_API_URL,
    SERP_COUNTRY,
    SERP_ENGINE,
    SERP_LANGUAGE,
    SERP_PAGE_SIZE,
    SERP_TIMEOUT,
)
from offer_ingest.utils.exceptions import ConfigurationError, SerpAPIException


class SerpAPIClient:
    """
    Client for fetching single pages of shopping results from SerpAPI.

    Attributes:
        api_key: SerpAPI key
        api_url: Search endpoint URL
        engine: SerpAPI engine identifier
        country: Locale/country code sent as `gl`
        language: Language code sent as `hl`
        page_size: Results requested per page
        timeout: Total timeout per request in seconds
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        engine: str = SERP_ENGINE,
        country: str = SERP_COUNTRY,
        language: str = SERP_LANGUAGE,
        page_size: int = SERP_PAGE_SIZE,
        timeout: int = SERP_TIMEOUT,
    ):
        self.api_key = api_key or SERP_API_KEY
        self.api_url = api_url or SERP_API_URL
        self.engine = engine
        self.country = country
        self.language = language
        self.page_size = page_size
        self.timeout = timeout

        if not self.api_key:
            logger.warning("⚠️ No SERP API key provided. API calls will fail.")

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if no API key is available."""
        if not self.api_key:
            raise ConfigurationError("Missing SERP_API_KEY")

    def build_params(self, query: str, start: int) -> Dict[str, Any]:
        return {
            "engine": self.engine,
            "q": query,
            "gl": self.country,
            "hl": self.language,
            "num": self.page_size,
            "start": start,
            "api_key": self.api_key,
        }

    async def fetch_page(self, query: str, start: int = 0) -> List[Dict[str, Any]]:
        """
        Fetch one page of shopping results.

        Args:
            query: Search query
            start: Result offset of the page

        Returns:
            List[Dict[str, Any]]: Raw shopping results of the page, in API order

        Raises:
            ConfigurationError: If no API key is configured
            SerpAPIException: On a non-2xx response, a malformed body or a transport error
        """
        self.ensure_configured()
        logger.debug("📡 Fetching %s page start=%d for query: %s", self.engine, start, query)

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.api_url, params=self.build_params(query, start)) as response:
                    if not 200 <= response.status < 300:
                        error_text = await response.text()
                        logger.error("❌ SERP API error (status %d): %s", response.status, error_text)
                        raise SerpAPIException(f"SERP API returned status {response.status} {response.reason or ''}".strip(), self.engine, response.status)

                    data = await response.json(content_type=None)

        except SerpAPIException:
            raise

        except asyncio.TimeoutError as e:
            logger.error("⌛ SERP API request timed out after %ds", self.timeout)
            raise SerpAPIException("SERP API request timed out", self.engine, 504) from e

        except aiohttp.ClientError as e:
            logger.error("❌ SERP API request failed: %s", e)
            raise SerpAPIException(f"SERP API request failed: {e}", self.engine, 502) from e

        except ValueError as e:
            logger.error("❌ Error parsing SERP API response: %s", e)
            raise SerpAPIException(f"Error parsing SERP API response: {e}", self.engine, 502) from e

        return self._extract_results(data)

    def _extract_results(self, data: Any) -> List[Dict[str, Any]]:
        """Pull the shopping results array out of a decoded response body."""
        if not isinstance(data, dict):
            raise SerpAPIException("Unexpected SERP API response format", self.engine, 502)

        # An engine error arrives as a 200 with an "error" field
        if data.get("error"):
            raise SerpAPIException(f"SERP API error: {data['error']}", self.engine, 502)

        shopping_results = data.get("shopping_results")
        if shopping_results is None:
            logger.warning("⚠️ No shopping results found in SERP response")
            return []

        if not isinstance(shopping_results, list):
            raise SerpAPIException("Invalid shopping results format", self.engine, 502)

        return [item for item in shopping_results if isinstance(item, dict)]
