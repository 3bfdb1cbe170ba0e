# app/services/enrichment_orchestrator.py
import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any, List, Tuple

from app.config.settings import EnrichmentCredentials
from app.models.internal import (
    EnrichmentOutcome,
    EnrichmentResult,
    NamedResult,
    ServiceLabel,
    NOT_FOUND_ANSWER,
)
from app.services.enrichment_client import EnrichmentClient

logger = logging.getLogger(__name__)


def is_valid_response(data: Any) -> bool:
    """True iff ``data`` is present and its Answer is a non-empty list"""
    if data is None:
        return False
    if isinstance(data, EnrichmentResult):
        answer = data.answer
    elif isinstance(data, Mapping):
        answer = data.get("Answer")
    else:
        return False
    return isinstance(answer, list) and len(answer) > 0


def first_answer(data: Any) -> Any:
    if isinstance(data, EnrichmentResult):
        return data.answer[0]
    return data["Answer"][0]


def passes_filter(result: NamedResult) -> bool:
    # Only the first entry is compared against the not-found marker.
    if result.error is not None:
        return False
    return is_valid_response(result.data) and first_answer(result.data) != NOT_FOUND_ANSWER


class EnrichmentOrchestrator:
    def __init__(self, client: EnrichmentClient, credentials: EnrichmentCredentials, call_timeout: float = 90.0):
        self.client = client
        self.credentials = credentials
        self.call_timeout = call_timeout

    def _services(self) -> List[Tuple[ServiceLabel, str]]:
        return [
            (ServiceLabel.ARCHITECTURE, self.credentials.architecture),
            (ServiceLabel.PERFORMANCE, self.credentials.performance),
            (ServiceLabel.ML_RESOURCES, self.credentials.ml_resources),
        ]

    async def orchestrate(self, content: str, request_id: str = None) -> List[NamedResult]:
        """
        Send ``content`` to all three providers concurrently and return the
        results that pass the validity filter, in service order.
        """
        start_time = time.time()
        services = self._services()

        outcomes = await asyncio.gather(
            *(self._enrich(content, credential) for _, credential in services)
        )

        results = []
        for (label, _), outcome in zip(services, outcomes):
            if not outcome.ok:
                logger.warning(
                    f"Enrichment failed for '{label.value}': {outcome.reason}",
                    extra={"request_id": request_id}
                )
            results.append(NamedResult(name=label, data=outcome.data, error=outcome.reason))

        filtered = [result for result in results if passes_filter(result)]
        logger.info(
            f"Enrichment completed: {len(filtered)}/{len(results)} sections kept "
            f"in {time.time() - start_time:.2f}s",
            extra={"request_id": request_id}
        )
        return filtered

    async def _enrich(self, content: str, credential: str) -> EnrichmentOutcome:
        # Each provider gets its own deadline; a slow one only loses its own section.
        try:
            return await asyncio.wait_for(self.client.enrich(content, credential), timeout=self.call_timeout)
        except asyncio.TimeoutError:
            return EnrichmentOutcome.failed(f"Provider did not respond within {self.call_timeout}s")

    async def close(self):
        await self.client.close()
