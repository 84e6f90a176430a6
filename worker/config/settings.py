"""Runtime configuration models for the stats worker."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SyncConfig(BaseModel):
    interval_minutes: int = 30
    client_identity: str = "AbsenceStats-Worker"
    school_year_start_month: int = Field(default=8, ge=1, le=12)
    school_year_start_day: int = Field(default=15, ge=1, le=31)


class SeverityThresholds(BaseModel):
    caution: Optional[float] = None
    warning: Optional[float] = None
    critical: Optional[float] = None


class RiskRules(BaseModel):
    max_safe_rate: float = Field(default=25.0, ge=0, le=100)
    thresholds: SeverityThresholds = Field(
        default_factory=lambda: SeverityThresholds(caution=12, warning=18, critical=25)
    )


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class RuntimeConfig(BaseModel):
    metadata: dict = Field(default_factory=dict)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    risk: RiskRules = Field(default_factory=RiskRules)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
