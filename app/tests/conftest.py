# tests/conftest.py
import asyncio
import json
import pytest

from app.config.settings import Settings


class FakeResponse:
    """Stand-in for an aiohttp response; only ``status`` and ``text()`` are used"""

    def __init__(self, status: int = 200, body="", json_body=None, delay: float = 0):
        self.status = status
        self._body = json.dumps(json_body) if json_body is not None else body
        self.delay = delay

    async def text(self, errors: str = "strict"):
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self._body, bytes):
            return self._body.decode("utf-8", errors=errors)
        return self._body


class _RequestContext:
    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Records every request and answers it with ``handler(call)``.

    The handler returns a FakeResponse, or an exception instance which is
    raised when the request context is entered, like aiohttp does.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []
        self.closed = False

    def _request(self, method, url, **kwargs):
        call = {"method": method, "url": url, **kwargs}
        self.calls.append(call)
        return _RequestContext(self.handler(call))

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    async def close(self):
        self.closed = True


def completion_body(inner) -> dict:
    """Outer enrichment payload wrapping ``inner`` as a JSON string"""
    return {"completion": json.dumps(inner)}


def chat_body(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def test_settings():
    """Settings with fake credentials; never reads the local .env file"""
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        OPENAI_BASE_URL="https://llm.test/v1",
        LLM_MODEL="gpt-4o",
        ENRICHMENT_ENDPOINT="https://enrich.test/generate",
        CPP_ARCHITECTURE_TOKEN="arch-token",
        CPP_PERFORMANCE_TOKEN="perf-token",
        ML_RESOURCE_TOKEN="ml-token",
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="",
        CPP_ARCHITECTURE_TOKEN="",
        CPP_PERFORMANCE_TOKEN="",
        ML_RESOURCE_TOKEN="",
    )


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def completion():
    return completion_body


@pytest.fixture
def chat_completion():
    return chat_body
