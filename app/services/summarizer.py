# app/services/summarizer.py
import asyncio
import aiohttp
import logging
import time
import json
from typing import Optional

from app.config.settings import Settings, settings as default_settings
from app.models.internal import ContentContext
from app.core.exceptions import LLMAnalysisException

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = "Provide a concise summary of the following content:\n\n{content}"
KEY_TOPICS_PROMPT = "List the key topics from the following content:\n\n{content}"


class LLMSummarizerService:
    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.base_url = self.config.OPENAI_BASE_URL.rstrip("/")
        self.model = self.config.LLM_MODEL
        self.timeout = self.config.LLM_TIMEOUT
        self.session = None

    async def _get_session(self):
        """Lazy initialization of HTTP session"""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.timeout, connect=10)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"Content-Type": "application/json"}
            )
        return self.session

    async def summarize(self, text: str, request_id: str = None) -> ContentContext:
        """
        Derive a summary and a key-topic list from the extracted text.

        The two completions are independent, so they run concurrently; a
        failure of either one fails the whole stage.
        """
        start_time = time.time()
        logger.info(f"Starting summarization for request {request_id} ({len(text)} characters)")

        summary, key_topics = await asyncio.gather(
            self.complete(SUMMARY_PROMPT.format(content=text)),
            self.complete(KEY_TOPICS_PROMPT.format(content=text)),
        )

        context = ContentContext(summary=summary, key_topics=key_topics)
        logger.info(f"Summarization completed in {time.time() - start_time:.2f}s for request {request_id}")
        logger.debug(f"Summary: {summary}\n\nKey Topics: {key_topics}")
        return context

    async def complete(self, prompt: str) -> str:
        """Single chat completion; returns the first choice's message content"""
        session = await self._get_session()
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {"Authorization": f"Bearer {self.config.OPENAI_API_KEY}"}

        try:
            async with session.post(f"{self.base_url}/chat/completions", json=payload, headers=headers) as response:
                body = await response.text()
                if response.status != 200:
                    logger.error(f"LLM API error: HTTP {response.status}")
                    logger.debug(f"Error response: {body[:500]}")
                    raise LLMAnalysisException(f"LLM API error {response.status}")
        except aiohttp.ClientError as e:
            logger.error(f"HTTP client error calling LLM: {type(e).__name__}: {str(e)}")
            raise LLMAnalysisException(f"LLM request failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout calling LLM after {self.timeout}s")
            raise LLMAnalysisException("LLM request timed out") from e

        try:
            data = json.loads(body)
            content = data["choices"][0]["message"]["content"]
        except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected LLM response format: {type(e).__name__}: {e}")
            raise LLMAnalysisException(f"Unexpected LLM response format: {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise LLMAnalysisException("Empty completion from LLM")
        return content

    async def close(self):
        """Close HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None
