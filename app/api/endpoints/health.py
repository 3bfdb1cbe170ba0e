# app/api/endpoints/health.py
from fastapi import APIRouter, Depends
import time
import logging

from app.config.settings import Settings
from app.models.responses import HealthResponse
from app.api.dependencies import PipelineFactory, get_settings, get_pipeline_factory

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint"""
    return HealthResponse(
        status="healthy",
        services={"api": "healthy"},
        response_time_ms=0.0
    )

@router.get("/detailed", response_model=HealthResponse)
async def detailed_health_check(
    config: Settings = Depends(get_settings),
    pipeline_factory: PipelineFactory = Depends(get_pipeline_factory)
):
    """Configuration status of the LLM and each enrichment provider"""
    start_time = time.time()
    pipeline = pipeline_factory(config)

    try:
        health_status = await pipeline.health_check()
        response_time = (time.time() - start_time) * 1000

        return HealthResponse(
            status=health_status.pop("overall", "unknown"),
            services=health_status,
            response_time_ms=round(response_time, 2)
        )

    except Exception as e:
        logger.error(f"Health check error: {e}")
        response_time = (time.time() - start_time) * 1000

        return HealthResponse(
            status="unhealthy",
            services={"error": str(e)},
            response_time_ms=round(response_time, 2)
        )
    finally:
        await pipeline.close()

@router.get("/live")
async def liveness_check():
    """Kubernetes liveness check endpoint"""
    return {"status": "alive", "timestamp": time.time()}
