"""
Application configuration settings.
"""
from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List
import logging


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Analytics bundle produced by the upstream batch job
    BUNDLE_PATH: str = "data/analytics_bundle.json"

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Aadhaar Insight Metrics"
    VERSION: str = "1.0.0"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Ranking sizes
    RISK_TOP_N: int = 10
    COMPLIANCE_TOP_N: int = 5
    ACTION_QUEUE_SIZE: int = 10

    # Policy simulator baselines
    BASE_DAILY_CAPACITY: float = 1_000_000  # updates/day at standard staffing
    UNIT_COST_PER_UPDATE: float = 50  # ₹ per update transaction
    NATIONAL_POPULATION: float = 1_400_000_000

    # Pipeline memoization
    CACHE_MAX_ENTRIES: int = 32

    LOG_LEVEL: str = "INFO"

    @property
    def bundle_file(self) -> Path:
        """Resolve bundle path against the project root when relative."""
        path = Path(self.BUNDLE_PATH)
        if path.is_absolute():
            return path
        return self.base_dir / path

    @property
    def base_dir(self) -> Path:
        """Get base directory of the project."""
        return Path(__file__).parent.parent

    class Config:
        env_file = ".env"
        extra = "allow"


# Global settings instance
settings = Settings()


def configure_logging(level: str = None):
    """Configure root logging once for the service process."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
