import asyncio
import time
import logging
from typing import Dict, Optional
from uuid import uuid4

from app.config.settings import Settings, settings as default_settings
from app.services.content_fetcher import WebsiteContentFetcher
from app.services.summarizer import LLMSummarizerService
from app.services.enrichment_client import EnrichmentClient
from app.services.enrichment_orchestrator import EnrichmentOrchestrator
from app.models.internal import AnalysisReport
from app.core.exceptions import PipelineException

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    def __init__(
        self,
        config: Optional[Settings] = None,
        content_fetcher: Optional[WebsiteContentFetcher] = None,
        summarizer: Optional[LLMSummarizerService] = None,
        orchestrator: Optional[EnrichmentOrchestrator] = None,
    ):
        self.config = config or default_settings
        self.content_fetcher = content_fetcher or WebsiteContentFetcher(self.config)
        self.summarizer = summarizer or LLMSummarizerService(self.config)
        self.orchestrator = orchestrator or EnrichmentOrchestrator(
            EnrichmentClient(self.config),
            self.config.enrichment_credentials(),
            call_timeout=self.config.ENRICHMENT_PROVIDER_TIMEOUT,
        )

    async def process_url(self, url: str) -> AnalysisReport:
        request_id = str(uuid4())
        start_time = time.time()

        logger.info(f"Starting pipeline for url: {url[:80]}", extra={"request_id": request_id})

        try:
            logger.info("Starting content extraction", extra={"request_id": request_id})
            text = await self._run_with_timeout(
                self.content_fetcher.extract(url),
                timeout=self.config.EXTRACTION_STAGE_TIMEOUT,
                stage_name="extraction"
            )

            logger.info("Starting summarization", extra={"request_id": request_id})
            context = await self._run_with_timeout(
                self.summarizer.summarize(text, request_id),
                timeout=self.config.SUMMARY_STAGE_TIMEOUT,
                stage_name="summarization"
            )

            content = context.combined_content
            logger.debug(f"Content to be sent: {content}", extra={"request_id": request_id})

            logger.info("Starting enrichment", extra={"request_id": request_id})
            # Provider failures and timeouts are absorbed per provider by the orchestrator.
            results = await self.orchestrator.orchestrate(content, request_id)

            processing_time = time.time() - start_time
            logger.info(f"Pipeline completed in {processing_time:.2f}s",
                        extra={"request_id": request_id})

            return AnalysisReport(
                request_id=request_id,
                url=url,
                context=context,
                results=results,
                processing_time=processing_time,
            )

        except PipelineException:
            raise

        except Exception as e:
            logger.error(f"Pipeline error: {type(e).__name__}: {str(e)}",
                         extra={"request_id": request_id}, exc_info=True)
            raise PipelineException(f"Pipeline processing failed: {str(e)}") from e

    async def _run_with_timeout(self, coro, timeout: float, stage_name: str):
        try:
            return await asyncio.wait_for(coro, timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Stage '{stage_name}' timed out after {timeout}s")
            raise PipelineException(f"Stage '{stage_name}' timed out", stage=stage_name) from e
        except Exception as e:
            logger.error(f"Stage '{stage_name}' failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise PipelineException(f"Stage '{stage_name}' failed: {str(e)}", stage=stage_name) from e

    async def health_check(self) -> Dict[str, str]:
        """Configuration status of each upstream service; makes no network calls"""
        credentials = self.config.enrichment_credentials()
        checks = {
            "llm": "configured" if self.config.llm_configured else "missing",
            "architecture_enrichment": "configured" if credentials.architecture else "missing",
            "performance_enrichment": "configured" if credentials.performance else "missing",
            "ml_resources_enrichment": "configured" if credentials.ml_resources else "missing",
        }

        missing = [name for name, status in checks.items() if status != "configured"]
        if "llm" in missing:
            overall = "unhealthy"
        elif missing:
            overall = "degraded"
        else:
            overall = "healthy"
        return {"overall": overall, **checks}

    async def close(self):
        try:
            await asyncio.gather(
                self.content_fetcher.close(),
                self.summarizer.close(),
                self.orchestrator.close(),
                return_exceptions=True
            )
        except Exception as e:
            logger.error(f"Error closing pipeline sessions: {e}")
