from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from skills.policy_evaluator import PolicyThresholds
from skills.supplier_risk_scorer import ScoringWeights


class Settings(BaseSettings):
    """Configuración centralizada del backend con validación de tipos."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_to_file: bool = True
    log_retention_days: int = Field(default=7, ge=1, le=90)
    cors_origins: list[str] = Field(default=["http://localhost:5173", "http://127.0.0.1:5173"])

    # Groq
    groq_api_key: str = Field(..., min_length=1)
    groq_model: str = Field(default="openai/gpt-oss-120b")

    # Model temperatures
    discovery_temperature: float = Field(default=0.2, ge=0.0, le=1.0)
    monitor_temperature: float = Field(default=0.3, ge=0.0, le=1.0)
    report_temperature: float = Field(default=0.1, ge=0.0, le=1.0)

    # Discovery
    discovery_supplier_count: int = Field(default=5, ge=1, le=25)
    discovery_cache_ttl_seconds: int = Field(default=600, ge=10, le=86400)
    discovery_cache_max_size: int = Field(default=100, ge=1, le=10000)

    # Scoring policy (los defaults reproducen la política vigente)
    emissions_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    compliance_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    signals_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    max_compliance_flags: int = Field(default=5, ge=1, le=100)
    review_threshold: float = Field(default=0.5, gt=0.0, le=1.0)
    hitl_threshold: float = Field(default=0.8, gt=0.0, le=1.0)

    # Audit sessions
    max_active_audits: int = Field(default=4, ge=1, le=100)
    audit_retention_seconds: int = Field(default=3600, ge=10, le=86400)
    max_finished_audits: int = Field(default=50, ge=1, le=1000)
    report_max_findings: int = Field(default=5, ge=1, le=50)

    @property
    def scoring_weights(self) -> ScoringWeights:
        return ScoringWeights(
            emissions=self.emissions_weight,
            compliance=self.compliance_weight,
            signals=self.signals_weight,
            max_compliance_flags=self.max_compliance_flags,
        )

    @property
    def policy_thresholds(self) -> PolicyThresholds:
        return PolicyThresholds(
            review_threshold=self.review_threshold,
            hitl_threshold=self.hitl_threshold,
        )


@lru_cache
def get_settings() -> Settings:
    """Singleton cacheado para evitar recargar .env en cada request."""
    return Settings()


settings = get_settings()
