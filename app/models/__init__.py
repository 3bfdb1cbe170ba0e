# app/models/__init__.py
"""Data models"""

from .responses import AnalysisResponse, EnrichmentSection, HealthResponse, ErrorResponse
from .internal import (
    ServiceLabel,
    ContentContext,
    EnrichmentResult,
    EnrichmentOutcome,
    NamedResult,
    AnalysisReport,
)

__all__ = [
    "AnalysisResponse",
    "EnrichmentSection",
    "HealthResponse",
    "ErrorResponse",
    "ServiceLabel",
    "ContentContext",
    "EnrichmentResult",
    "EnrichmentOutcome",
    "NamedResult",
    "AnalysisReport",
]
