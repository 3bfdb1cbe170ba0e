# app/services/enrichment_client.py
import asyncio
import aiohttp
import logging
import json
from typing import Optional

from pydantic import ValidationError

from app.config.settings import Settings, settings as default_settings
from app.models.internal import EnrichmentResult, EnrichmentOutcome
from app.core.exceptions import EnrichmentException

logger = logging.getLogger(__name__)

ENRICHMENT_PROMPT = (
    "Any information on the given topics from the context would be great. "
    "Please list chapters from the table of contents if possible. "
    'Here is my context to searched against your context "{content}"'
)


class EnrichmentClient:
    """
    Client for the knowledge-retrieval completion endpoint.

    One instance is shared by all providers; the provider is selected by the
    bearer credential passed to ``enrich``.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.endpoint = self.config.ENRICHMENT_ENDPOINT
        self.timeout = self.config.ENRICHMENT_TIMEOUT
        self.session = None

    async def _get_session(self):
        """Lazy initialization of HTTP session"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    @staticmethod
    def build_prompt(content: str) -> str:
        return ENRICHMENT_PROMPT.format(content=content)

    async def enrich(self, content: str, credential: str) -> EnrichmentOutcome:
        """
        Query the provider identified by ``credential``.

        Never raises: every failure (network, HTTP status, missing
        ``completion`` field, malformed JSON at either level, unexpected
        answer shape) comes back as a failed outcome.
        """
        try:
            result = await self._request(content, credential)
            return EnrichmentOutcome.succeeded(result)
        except EnrichmentException as e:
            return EnrichmentOutcome.failed(str(e))
        except asyncio.TimeoutError:
            return EnrichmentOutcome.failed(f"Request timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            return EnrichmentOutcome.failed(f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.error(f"Unexpected enrichment error: {type(e).__name__}: {e}", exc_info=True)
            return EnrichmentOutcome.failed(f"{type(e).__name__}: {e}")

    async def _request(self, content: str, credential: str) -> EnrichmentResult:
        if not credential:
            raise EnrichmentException("Missing enrichment credential")

        session = await self._get_session()
        payload = {"messages": [{"role": "user", "content": self.build_prompt(content)}]}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
        }

        async with session.post(self.endpoint, json=payload, headers=headers) as response:
            if not 200 <= response.status < 300:
                raise EnrichmentException(f"HTTP error! status: {response.status}")
            body = await response.text()

        return self.parse_response(body)

    @staticmethod
    def parse_response(body: str) -> EnrichmentResult:
        """Decode ``{"completion": "<json>"}`` and validate the nested answer"""
        try:
            outer = json.loads(body)
        except json.JSONDecodeError as e:
            raise EnrichmentException(f"Invalid JSON response: {e}") from e

        logger.debug(f"Parsed response: {json.dumps(outer, indent=2)[:2000]}")

        completion = outer.get("completion") if isinstance(outer, dict) else None
        if not completion:
            raise EnrichmentException("Unexpected response format")

        try:
            inner = json.loads(completion)
        except (json.JSONDecodeError, TypeError) as e:
            raise EnrichmentException(f"Invalid JSON in completion: {e}") from e

        if not isinstance(inner, dict):
            raise EnrichmentException("Completion is not a JSON object")

        try:
            return EnrichmentResult.model_validate(inner)
        except ValidationError as e:
            raise EnrichmentException(f"Unexpected answer shape: {e.error_count()} validation error(s)") from e

    async def close(self):
        """Close HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None
