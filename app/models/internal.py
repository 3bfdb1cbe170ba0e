# app/models/internal.py
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any, Union
from enum import Enum

ENRICHMENT_ERROR_ANSWER = "Error occurred while fetching data"
NOT_FOUND_ANSWER = "Not found in context."

AnswerEntry = Union[str, Dict[str, Any]]


class ServiceLabel(str, Enum):
    """Enrichment domains, declared in report order"""
    ARCHITECTURE = "C++ Architecture and Design"
    PERFORMANCE = "C++ Performance and Concurrency"
    ML_RESOURCES = "Machine Learning Resources"


class ContentContext(BaseModel):
    summary: str = Field(..., min_length=1)
    key_topics: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    @property
    def combined_content(self) -> str:
        """The single string sent unchanged to every enrichment provider"""
        return f"Summary: {self.summary}\n\nKey Topics: {self.key_topics}"


class EnrichmentResult(BaseModel):
    """Decoded provider answer. Field names follow the provider's payload."""
    answer: List[AnswerEntry] = Field(..., alias="Answer")
    sources: Optional[List[str]] = Field(None, alias="Sources")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def error(cls) -> "EnrichmentResult":
        return cls(answer=[ENRICHMENT_ERROR_ANSWER])


class EnrichmentOutcome(BaseModel):
    result: Optional[EnrichmentResult] = None
    reason: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def succeeded(cls, result: EnrichmentResult) -> "EnrichmentOutcome":
        return cls(result=result)

    @classmethod
    def failed(cls, reason: str) -> "EnrichmentOutcome":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def data(self) -> EnrichmentResult:
        return self.result if self.result is not None else EnrichmentResult.error()


class NamedResult(BaseModel):
    name: ServiceLabel
    data: EnrichmentResult
    error: Optional[str] = None

    model_config = {"frozen": True}


class AnalysisReport(BaseModel):
    request_id: str
    url: str
    context: ContentContext
    results: List[NamedResult]
    processing_time: float = 0.0
