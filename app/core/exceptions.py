# app/core/exceptions.py
from fastapi import HTTPException

class CustomHTTPException(HTTPException):
    def __init__(self, status_code: int, detail: str, error_code: str = None):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code

class PipelineException(Exception):
    """Exception raised during pipeline processing"""

    def __init__(self, message: str, stage: str = None):
        super().__init__(message)
        self.stage = stage

class ContentFetchException(Exception):
    """Exception raised while fetching or parsing the page"""
    pass

class LLMAnalysisException(Exception):
    """Exception raised during summarization"""
    pass

class EnrichmentException(Exception):
    """Raised inside the enrichment client; converted to a failed outcome there"""
    pass

class ValidationException(CustomHTTPException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=400, detail=detail, error_code="VALIDATION_ERROR")

class ConfigurationException(CustomHTTPException):
    def __init__(self, detail: str = "Service is not configured"):
        super().__init__(status_code=500, detail=detail, error_code="CONFIGURATION_ERROR")

class UpstreamServiceException(CustomHTTPException):
    def __init__(self, detail: str = "Failed to analyze website content"):
        super().__init__(status_code=502, detail=detail, error_code="UPSTREAM_ERROR")
