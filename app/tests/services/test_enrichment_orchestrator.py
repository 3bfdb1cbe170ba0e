# tests/services/test_enrichment_orchestrator.py
import asyncio

import pytest

from app.config.settings import EnrichmentCredentials
from app.models.internal import (
    EnrichmentOutcome,
    EnrichmentResult,
    NamedResult,
    ServiceLabel,
)
from app.services.enrichment_orchestrator import (
    EnrichmentOrchestrator,
    is_valid_response,
    passes_filter,
)

CREDENTIALS = EnrichmentCredentials(architecture="arch", performance="perf", ml_resources="ml")
CONTENT = "Summary: S\n\nKey Topics: T"


class FakeEnrichmentClient:
    """Returns a canned outcome per credential and records every call"""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.calls = []
        self.closed = False

    async def enrich(self, content, credential):
        self.calls.append((content, credential))
        return self.outcomes[credential]

    async def close(self):
        self.closed = True


def ok(*answer, sources=None):
    return EnrichmentOutcome.succeeded(EnrichmentResult(answer=list(answer), sources=sources))


class TestValidityFilter:
    """Test is_valid_response and passes_filter"""

    @pytest.mark.parametrize("data", [
        None,
        {},
        {"Sources": ["s"]},
        {"Answer": "text"},
        {"Answer": None},
        {"Answer": []},
        "Answer",
    ])
    def test_invalid_responses(self, data):
        assert is_valid_response(data) is False

    @pytest.mark.parametrize("data", [
        {"Answer": ["x"]},
        {"Answer": [{"k": "v"}]},
        EnrichmentResult(answer=["x"]),
    ])
    def test_valid_responses(self, data):
        assert is_valid_response(data) is True

    def test_not_found_as_first_entry_is_excluded(self):
        result = NamedResult(
            name=ServiceLabel.ARCHITECTURE,
            data=EnrichmentResult(answer=["Not found in context.", "x"]),
        )
        assert passes_filter(result) is False

    def test_not_found_after_first_entry_is_kept(self):
        result = NamedResult(
            name=ServiceLabel.ARCHITECTURE,
            data=EnrichmentResult(answer=["x", "Not found in context."]),
        )
        assert passes_filter(result) is True

    def test_not_found_match_is_exact(self):
        result = NamedResult(
            name=ServiceLabel.ARCHITECTURE,
            data=EnrichmentResult(answer=["Not found in context"]),
        )
        assert passes_filter(result) is True

    def test_empty_answer_is_excluded(self):
        result = NamedResult(name=ServiceLabel.PERFORMANCE, data=EnrichmentResult(answer=[]))
        assert passes_filter(result) is False

    def test_failed_outcome_is_excluded(self):
        outcome = EnrichmentOutcome.failed("HTTP error! status: 500")
        result = NamedResult(name=ServiceLabel.ML_RESOURCES, data=outcome.data, error=outcome.reason)
        assert passes_filter(result) is False


class TestEnrichmentOrchestrator:
    """Test EnrichmentOrchestrator"""

    async def test_identical_content_sent_to_every_provider(self):
        client = FakeEnrichmentClient({"arch": ok("a"), "perf": ok("p"), "ml": ok("m")})
        orchestrator = EnrichmentOrchestrator(client, CREDENTIALS)

        await orchestrator.orchestrate(CONTENT)

        assert sorted(client.calls) == sorted([(CONTENT, "arch"), (CONTENT, "perf"), (CONTENT, "ml")])

    async def test_results_keep_service_order(self):
        client = FakeEnrichmentClient({"arch": ok("a"), "perf": ok("p"), "ml": ok("m")})
        orchestrator = EnrichmentOrchestrator(client, CREDENTIALS)

        results = await orchestrator.orchestrate(CONTENT)

        assert [r.name for r in results] == [
            ServiceLabel.ARCHITECTURE,
            ServiceLabel.PERFORMANCE,
            ServiceLabel.ML_RESOURCES,
        ]
        assert [r.data.answer for r in results] == [["a"], ["p"], ["m"]]

    async def test_one_failure_does_not_affect_others(self):
        client = FakeEnrichmentClient({
            "arch": ok("a"),
            "perf": EnrichmentOutcome.failed("connection reset"),
            "ml": ok("m"),
        })
        orchestrator = EnrichmentOrchestrator(client, CREDENTIALS)

        results = await orchestrator.orchestrate(CONTENT)

        assert [r.name for r in results] == [ServiceLabel.ARCHITECTURE, ServiceLabel.ML_RESOURCES]

    async def test_filter_drops_not_found_and_failures(self):
        client = FakeEnrichmentClient({
            "arch": ok("x"),
            "perf": ok("Not found in context."),
            "ml": EnrichmentOutcome.failed("HTTP error! status: 500"),
        })
        orchestrator = EnrichmentOrchestrator(client, CREDENTIALS)

        results = await orchestrator.orchestrate(CONTENT)

        assert len(results) == 1
        assert results[0].name == ServiceLabel.ARCHITECTURE
        assert results[0].data.answer == ["x"]

    async def test_all_filtered_yields_empty_list(self):
        client = FakeEnrichmentClient({
            "arch": ok(),
            "perf": ok("Not found in context."),
            "ml": EnrichmentOutcome.failed("timeout"),
        })
        orchestrator = EnrichmentOrchestrator(client, CREDENTIALS)

        assert await orchestrator.orchestrate(CONTENT) == []

    async def test_calls_run_concurrently(self):
        started = []
        all_started = asyncio.Event()

        class BarrierClient(FakeEnrichmentClient):
            async def enrich(self, content, credential):
                started.append(credential)
                if len(started) == 3:
                    all_started.set()
                # Sequential execution would never reach three in-flight calls.
                await all_started.wait()
                return ok(credential)

        orchestrator = EnrichmentOrchestrator(BarrierClient({}), CREDENTIALS)

        results = await asyncio.wait_for(orchestrator.orchestrate(CONTENT), timeout=2)

        assert len(results) == 3

    async def test_provider_past_deadline_becomes_failure(self):
        class SlowClient(FakeEnrichmentClient):
            async def enrich(self, content, credential):
                if credential == "perf":
                    await asyncio.sleep(1)
                return ok(credential)

        orchestrator = EnrichmentOrchestrator(SlowClient({}), CREDENTIALS, call_timeout=0.1)

        results = await orchestrator.orchestrate(CONTENT)

        assert [r.name for r in results] == [ServiceLabel.ARCHITECTURE, ServiceLabel.ML_RESOURCES]

    async def test_close_closes_client(self):
        client = FakeEnrichmentClient({})
        orchestrator = EnrichmentOrchestrator(client, CREDENTIALS)

        await orchestrator.close()

        assert client.closed is True
