# app/core/__init__.py

# Only exceptions are re-exported here; import the pipeline directly where
# needed to avoid circular imports with the service layer.
from .exceptions import (
    PipelineException,
    ContentFetchException,
    LLMAnalysisException,
    EnrichmentException,
)

__all__ = [
    "PipelineException",
    "ContentFetchException",
    "LLMAnalysisException",
    "EnrichmentException",
]
