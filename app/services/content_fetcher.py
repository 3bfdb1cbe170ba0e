# app/services/content_fetcher.py
import asyncio
import time
import logging
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup

from app.config.settings import Settings, settings as default_settings
from app.core.exceptions import ContentFetchException

logger = logging.getLogger(__name__)


class WebsiteContentFetcher:
    """Fetches a page and returns the text of its paragraphs"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.timeout = self.config.CONTENT_FETCH_TIMEOUT
        self.session = None

    async def _get_session(self):
        """Lazy initialization of HTTP session"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def extract(self, url: str) -> str:
        """
        Fetch ``url`` and concatenate the text of every <p> element in
        document order. Paragraphs are joined without a separator.
        """
        start_time = time.time()
        logger.info(f"Reading website content from: {url[:80]}")

        html = await self._fetch(url)
        text = self.extract_paragraph_text(html)

        logger.info(
            f"Extracted {len(text)} characters from {url[:80]} "
            f"in {time.time() - start_time:.2f}s"
        )
        return text

    async def _fetch(self, url: str) -> str:
        session = await self._get_session()
        headers = {
            "User-Agent": self.config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }

        try:
            async with session.get(url, headers=headers) as response:
                if not 200 <= response.status < 300:
                    logger.warning(f"Fetch failed with status {response.status} for: {url}")
                    raise ContentFetchException(f"HTTP error {response.status} while fetching {url}")
                return await response.text(errors="replace")
        except ContentFetchException:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Fetch error for {url}: {type(e).__name__}: {e}")
            raise ContentFetchException(f"Failed to fetch {url}: {e}") from e

    @staticmethod
    def extract_paragraph_text(html_content: str) -> str:
        try:
            soup = BeautifulSoup(html_content, "html5lib")
        except Exception as e:
            raise ContentFetchException(f"Unparsable page body: {e}") from e
        # html5lib closes unterminated <p> elements as browsers do, so paragraphs never nest.
        return "".join(p.get_text() for p in soup.find_all("p"))

    async def close(self):
        """Close HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None
