# app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import time
import uuid
import logging
from contextlib import asynccontextmanager

from app.api.endpoints import analyze, health
from app.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.config.settings import settings
from app.core.exceptions import CustomHTTPException
from app.models.responses import ErrorResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events"""
    logger.info("Starting Page Insight service...")
    if not settings.llm_configured:
        logger.warning("OPENAI_API_KEY is not set; analysis requests will be rejected")
    missing = [name for name, token in settings.enrichment_credentials()._asdict().items() if not token]
    if missing:
        logger.warning(f"Enrichment credentials missing for: {', '.join(missing)}")

    yield

    logger.info("Page Insight service shut down")

app = FastAPI(
    title="Page Insight",
    description="Summarizes web pages and enriches them from three knowledge-retrieval services",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

# Add middleware
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(analyze.router, tags=["analyze"])
app.include_router(health.router, prefix="/health", tags=["health"])

@app.exception_handler(CustomHTTPException)
async def custom_exception_handler(request: Request, exc: CustomHTTPException):
    error = ErrorResponse(
        error=exc.detail,
        error_code=exc.error_code,
        request_id=getattr(request.state, "request_id", None)
    )
    return JSONResponse(status_code=exc.status_code, content=error.model_dump(mode="json"))

# Add request ID and timing to all requests
@app.middleware("http")
async def add_request_metadata(request: Request, call_next):
    request.state.request_id = str(uuid.uuid4())
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Request-ID"] = request.state.request_id
    response.headers["X-Process-Time"] = f"{process_time:.3f}"

    return response

@app.get("/")
async def root():
    return {"message": "Page Insight", "status": "running", "version": "1.0.0"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG
    )
