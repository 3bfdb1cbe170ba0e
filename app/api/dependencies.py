# app/api/dependencies.py
import logging
from typing import Callable

from fastapi import Request

from app.config.settings import Settings, settings
from app.core.pipeline import AnalysisPipeline
from app.core.exceptions import ConfigurationException, ValidationException

logger = logging.getLogger(__name__)

PipelineFactory = Callable[[Settings], AnalysisPipeline]


def get_settings() -> Settings:
    """Process-wide configuration, loaded once at startup"""
    return settings


def get_pipeline_factory() -> PipelineFactory:
    """
    Factory used to build one pipeline per request.

    Pipelines are not shared between requests; each one owns its HTTP
    sessions and is closed once the request completes.
    """
    return AnalysisPipeline


def check_llm_configuration(config: Settings) -> None:
    if not config.llm_configured:
        logger.error("OPENAI_API_KEY is not set, rejecting request")
        raise ConfigurationException(detail="OPENAI_API_KEY is not set")


def read_url_parameter(request: Request) -> str:
    url = request.query_params.get("url", "").strip()
    if not url:
        raise ValidationException(detail="URL parameter is required")
    return url

