"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./capacity.db"

    # Service
    service_name: str = "capacity-gateway"
    log_level: str = "INFO"

    # Ranking defaults, used until weights are saved through /v1/settings
    default_weight_capacity_headroom: float = 0.5
    default_weight_price_competitiveness: float = 0.25
    default_weight_credit_rating: float = 0.25
    default_sensitive_subjects: List[str] = Field(default_factory=lambda: ["Nuclear", "Coal"])


settings = Settings()
