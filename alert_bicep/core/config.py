"""Settings for the alert template service.

Values come from environment variables (case-insensitive). During local
development `ENV_FILE` may point at an env file to load as well.
"""

import os
from enum import Enum
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alert_bicep.domain.models import RenderOptions

DEFAULT_OPTIONS_DATA_DIR = Path(__file__).resolve().parents[1] / "data"

PROD_METRICS_TOKEN_MIN_LENGTH = 16
_LOOPBACK_HOSTS = ("localhost", "127.0.0.1")


class AppEnvironment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """Typed service settings; see the field comments for the env variable groups."""

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="", extra="ignore"
    )

    # APP_ENV, APP_NAME, APP_LOG_LEVEL
    app_env: AppEnvironment = AppEnvironment.LOCAL
    app_name: str = "service-health-alert-bicep"
    app_log_level: str = "INFO"

    # Logging / metrics; METRICS_TOKEN guards GET /metrics
    observability_enabled: bool = True
    observability_structured_logs: bool = True
    metrics_token: str | None = None

    # HTTP surface
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    max_request_size_mb: int = 1

    # Directory holding services.json, eventTypes.json, regions.json, severity.json
    options_data_dir: Path = DEFAULT_OPTIONS_DATA_DIR

    # Bicep output
    render_indent: str = "    "
    render_compact_threshold: int = 2
    alert_api_version: str = "2023-01-01-preview"
    action_group_api_version: str = "2019-06-01"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin for origin in (o.strip() for o in self.cors_origins.split(",")) if origin]

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            indent=self.render_indent,
            compact_threshold=self.render_compact_threshold,
            alert_api_version=self.alert_api_version,
            action_group_api_version=self.action_group_api_version,
        )

    @field_validator("app_env", mode="before")
    @classmethod
    def parse_app_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        allowed = [env.value for env in AppEnvironment]
        if str(v).lower() not in allowed:
            raise ValueError(f"app_env must be one of {allowed}, got '{v}'")
        return AppEnvironment(str(v).lower())

    @field_validator("render_compact_threshold")
    @classmethod
    def check_compact_threshold(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"render_compact_threshold must be >= 0, got {v}")
        return v

    @field_validator("render_indent")
    @classmethod
    def check_render_indent(cls, v: str) -> str:
        if set(v) - {" "}:
            raise ValueError("render_indent must contain only spaces")
        return v

    @model_validator(mode="after")
    def check_prod_safety(self) -> "Settings":
        """Refuse to start in prod with an unprotected /metrics or loopback CORS origins."""
        if self.app_env != AppEnvironment.PROD:
            return self

        token_too_weak = len(self.metrics_token or "") < PROD_METRICS_TOKEN_MIN_LENGTH
        if self.observability_enabled and token_too_weak:
            raise ValueError(
                f"METRICS_TOKEN must be set and at least {PROD_METRICS_TOKEN_MIN_LENGTH} "
                "characters in production"
            )

        loopback = [o for o in self.cors_origins_list if any(h in o for h in _LOOPBACK_HOSTS)]
        if loopback:
            raise ValueError(
                f"CORS origins must not contain localhost in production: {loopback[0]}"
            )

        return self


settings = Settings()
