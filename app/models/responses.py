# app/models/responses.py
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone

from app.models.internal import AnalysisReport


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EnrichmentSection(BaseModel):
    name: str = Field(..., description="Enrichment service label")
    answer: List[Any] = Field(..., description="Answer entries (strings or key/value mappings)")
    sources: Optional[List[str]] = Field(None, description="Sources cited by the provider")


class AnalysisResponse(BaseModel):
    url: str = Field(..., description="Analyzed page URL")
    summary: str = Field(..., description="LLM-generated summary")
    key_topics: str = Field(..., description="LLM-generated key topics")
    sections: List[EnrichmentSection] = Field(..., description="Enrichment results that passed the validity filter")
    processing_time: float = Field(..., description="Processing time in seconds")
    request_id: str = Field(..., description="Request ID for tracking")
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_report(cls, report: AnalysisReport) -> "AnalysisResponse":
        return cls(
            url=report.url,
            summary=report.context.summary,
            key_topics=report.context.key_topics,
            sections=[
                EnrichmentSection(
                    name=result.name.value,
                    answer=list(result.data.answer),
                    sources=result.data.sources,
                )
                for result in report.results
            ],
            processing_time=report.processing_time,
            request_id=report.request_id,
        )


class HealthResponse(BaseModel):
    status: str = Field(..., description="Overall system status")
    timestamp: datetime = Field(default_factory=_utcnow)
    services: Dict[str, str] = Field(..., description="Individual service statuses")
    response_time_ms: Optional[float] = Field(None, description="Health check response time")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    request_id: Optional[str] = Field(None, description="Request ID for tracking")
    timestamp: datetime = Field(default_factory=_utcnow)
