"""
Configuration management using Pydantic Settings.
Loads environment variables from .env file with validation.
"""

from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field


PACKAGE_DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Static tables
    knowledge_base_path: Path = Field(
        default=PACKAGE_DATA_DIR / "knowledge_base.json",
        description="JSON file holding the policy excerpt catalog"
    )
    decision_history_path: Path = Field(
        default=PACKAGE_DATA_DIR / "decision_history.json",
        description="JSON file holding past claim decisions"
    )

    # Retrieval and similarity
    retrieval_top_k: int = Field(default=5, ge=1)
    similarity_amount_window: float = Field(
        default=50000,
        gt=0,
        description="Absolute dollar distance within which a past claim counts as similar"
    )

    # Risk scoring thresholds
    company_max_amount: float = Field(default=250000)
    secondary_inspection_amount: float = Field(default=200000)
    failure_rate_threshold: int = Field(default=50, ge=0, le=100)
    end_of_day_hour: int = Field(default=16, ge=0, le=23)
    recommended_actions_score: int = Field(default=50, ge=0, le=100)

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")

    def risk_thresholds(self) -> "RiskThresholds":
        """Build the risk scorer thresholds from these settings."""
        from claimsense.pipeline.models import RiskThresholds

        return RiskThresholds(
            company_max_amount=self.company_max_amount,
            secondary_inspection_amount=self.secondary_inspection_amount,
            failure_rate_threshold=self.failure_rate_threshold,
            end_of_day_hour=self.end_of_day_hour,
            recommended_actions_above=self.recommended_actions_score,
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
