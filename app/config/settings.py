# app/config/settings.py
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, NamedTuple
import logging

logger = logging.getLogger(__name__)


class EnrichmentCredentials(NamedTuple):
    """Bearer tokens for the three enrichment providers"""
    architecture: str
    performance: str
    ml_resources: str


class Settings(BaseSettings):
    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = False

    # LLM Configuration
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    LLM_MODEL: str = "gpt-4o"
    LLM_TIMEOUT: int = 60

    # Enrichment providers
    ENRICHMENT_ENDPOINT: str = "https://api.langbase.com/beta/generate"
    CPP_ARCHITECTURE_TOKEN: str = ""
    CPP_PERFORMANCE_TOKEN: str = ""
    ML_RESOURCE_TOKEN: str = ""
    ENRICHMENT_TIMEOUT: int = 60

    # Content fetching
    CONTENT_FETCH_TIMEOUT: int = 15
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )

    # Stage timeouts (seconds)
    EXTRACTION_STAGE_TIMEOUT: float = 20.0
    SUMMARY_STAGE_TIMEOUT: float = 90.0
    ENRICHMENT_PROVIDER_TIMEOUT: float = 90.0

    # Security
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Monitoring
    LOG_LEVEL: str = "INFO"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("DEBUG", mode="before")
    @classmethod
    def parse_debug(cls, v):
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return v

    @property
    def llm_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY.strip())

    def enrichment_credentials(self) -> EnrichmentCredentials:
        return EnrichmentCredentials(
            architecture=self.CPP_ARCHITECTURE_TOKEN,
            performance=self.CPP_PERFORMANCE_TOKEN,
            ml_resources=self.ML_RESOURCE_TOKEN,
        )

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore"
    }


settings = Settings()
