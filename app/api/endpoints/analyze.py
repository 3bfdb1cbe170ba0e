# app/api/endpoints/analyze.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
import logging

from app.config.settings import Settings
from app.models.internal import AnalysisReport
from app.models.responses import AnalysisResponse, ErrorResponse
from app.api.dependencies import (
    PipelineFactory,
    get_settings,
    get_pipeline_factory,
    check_llm_configuration,
    read_url_parameter,
)
from app.core.exceptions import CustomHTTPException, PipelineException, UpstreamServiceException
from app.services.report_renderer import render_report

router = APIRouter()
logger = logging.getLogger(__name__)


async def run_analysis(
    request: Request,
    config: Settings,
    pipeline_factory: PipelineFactory
) -> AnalysisReport:
    """
    Shared request flow for the HTML and JSON endpoints.

    Configuration is checked before the query string is read, and the query
    string before any pipeline is built.
    """
    check_llm_configuration(config)
    url = read_url_parameter(request)

    pipeline = pipeline_factory(config)
    try:
        return await pipeline.process_url(url)
    except PipelineException as e:
        logger.error(f"Analysis failed for '{url}': {str(e)}")
        raise UpstreamServiceException()
    finally:
        await pipeline.close()


@router.get(
    "/analyze",
    response_class=HTMLResponse,
    summary="Analyze a web page",
    description="Summarize a page, enrich it from three knowledge services and render an HTML report."
)
async def analyze_website(
    request: Request,
    config: Settings = Depends(get_settings),
    pipeline_factory: PipelineFactory = Depends(get_pipeline_factory)
):
    """
    - **url**: the page to analyze (query parameter, required)
    """
    try:
        report = await run_analysis(request, config, pipeline_factory)
    except CustomHTTPException as e:
        return PlainTextResponse(e.detail, status_code=e.status_code)

    return HTMLResponse(render_report(report.url, report.results))


@router.get(
    "/api/v1/analyze",
    response_model=AnalysisResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse}
    },
    summary="Analyze a web page (JSON)",
    description="Same pipeline as /analyze, returned as structured JSON."
)
async def analyze_website_json(
    request: Request,
    config: Settings = Depends(get_settings),
    pipeline_factory: PipelineFactory = Depends(get_pipeline_factory)
):
    report = await run_analysis(request, config, pipeline_factory)
    return AnalysisResponse.from_report(report)
