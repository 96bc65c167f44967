"""
Configuration management for the renovation advisor.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables (HRA_ prefix) or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Collaborator endpoints
    api_base_url: str = Field(default="http://localhost:8080/api", description="Service gateway base URL")
    forecasting_prefix: str = Field(default="/forecasting", description="Path prefix of the simulation service")
    auth_token: str | None = Field(default=None, description="Bearer token for the service gateway")
    request_timeout_s: float = Field(default=600.0, description="Per-request timeout (simulations are slow)")
    weather_source: Literal["pvgis", "epw"] = Field(default="pvgis", description="Weather data source")

    # Energy defaults
    energy_price_eur_per_kwh: float = Field(default=0.25, description="Average energy tariff (EUR/kWh)")
    default_floor_area_m2: float = Field(default=100.0, description="Fallback floor area (m²)")

    # Financial defaults
    discount_rate: float = Field(default=0.04, description="Discount rate for local financial metrics")
    project_lifetime_years: int = Field(default=20, ge=1, le=30, description="Project lifetime (years)")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_dir: str = Field(default="logs", description="Directory for log files")

    @property
    def forecasting_url(self) -> str:
        return self.api_base_url.rstrip("/") + self.forecasting_prefix


# Global settings instance
settings = Settings()
