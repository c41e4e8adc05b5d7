"""
Unit tests for application settings.

Tests cover:
- Environment parsing
- Rendering option validation and derivation
- Production safety checks
"""

import pytest
from pydantic import ValidationError

from alert_bicep.core.config import AppEnvironment, Settings
from alert_bicep.domain.models import RenderOptions

PROD_TOKEN = "0123456789abcdef0123"


class TestSettings:
    @pytest.mark.anyio
    async def test_defaults(self):
        s = Settings(app_env="local")

        assert s.app_env == AppEnvironment.LOCAL
        assert s.render_options == RenderOptions()
        assert (s.options_data_dir / "services.json").is_file()

    @pytest.mark.anyio
    async def test_app_env_case_insensitive(self):
        assert Settings(app_env="TEST").app_env == AppEnvironment.TEST

    @pytest.mark.anyio
    async def test_invalid_app_env(self):
        with pytest.raises(ValidationError, match="app_env must be one of"):
            Settings(app_env="staging")

    @pytest.mark.anyio
    async def test_cors_origins_list(self):
        s = Settings(cors_origins=" https://a.example , ,https://b.example")
        assert s.cors_origins_list == ["https://a.example", "https://b.example"]

    @pytest.mark.anyio
    async def test_render_options_from_settings(self):
        s = Settings(render_indent="  ", render_compact_threshold=4, alert_api_version="2020-10-01")

        assert s.render_options == RenderOptions(
            indent="  ", compact_threshold=4, alert_api_version="2020-10-01"
        )

    @pytest.mark.anyio
    async def test_negative_compact_threshold_rejected(self):
        with pytest.raises(ValidationError, match="render_compact_threshold must be >= 0"):
            Settings(render_compact_threshold=-1)

    @pytest.mark.anyio
    async def test_tab_indent_rejected(self):
        with pytest.raises(ValidationError, match="render_indent must contain only spaces"):
            Settings(render_indent="\t")


class TestProductionSettings:
    @pytest.mark.anyio
    async def test_requires_metrics_token(self):
        with pytest.raises(ValidationError, match="METRICS_TOKEN"):
            Settings(app_env="prod", cors_origins="https://alerts.example.com")

    @pytest.mark.anyio
    async def test_short_metrics_token_rejected(self):
        with pytest.raises(ValidationError, match="METRICS_TOKEN"):
            Settings(
                app_env="prod", metrics_token="short", cors_origins="https://alerts.example.com"
            )

    @pytest.mark.anyio
    async def test_localhost_cors_rejected(self):
        with pytest.raises(ValidationError, match="must not contain localhost"):
            Settings(app_env="prod", metrics_token=PROD_TOKEN)

    @pytest.mark.anyio
    async def test_token_not_required_without_observability(self):
        s = Settings(
            app_env="prod",
            observability_enabled=False,
            cors_origins="https://alerts.example.com",
        )
        assert s.app_env == AppEnvironment.PROD

    @pytest.mark.anyio
    async def test_valid_production_settings(self):
        s = Settings(
            app_env="prod", metrics_token=PROD_TOKEN, cors_origins="https://alerts.example.com"
        )
        assert s.metrics_token == PROD_TOKEN
