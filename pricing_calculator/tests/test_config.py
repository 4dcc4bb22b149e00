"""
Tests for configuration validation.
"""

import pytest

from pricing_calculator.core.config import Config
from pricing_calculator.main import create_app


def make_config(**overrides):
    return type("OverriddenConfig", (Config,), overrides)()


def test_defaults_are_valid():
    make_config(APP_ENV="development").validate()


@pytest.mark.parametrize("overrides", [
    {"SERVER_PORT": 0},
    {"SERVER_PORT": 70000},
    {"APP_ENV": "testing"},
    {"CLEVER_CLOUD_API_URL": "ftp://catalog"},
    {"DEFAULT_ZONE": ""},
    {"PRICING_TIMEOUT_SECONDS": 0},
    {"PRICING_CACHE_TTL_SECONDS": -1},
])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        make_config(**{"APP_ENV": "development", **overrides}).validate()


def test_environment_helpers():
    assert make_config(APP_ENV="dev").is_development()
    assert not make_config(APP_ENV="prod").is_development()
    assert not make_config(APP_ENV="staging").is_development()


def test_create_app_fails_fast_on_invalid_config():
    with pytest.raises(RuntimeError, match="Configuration error"):
        create_app(make_config(APP_ENV="nowhere"))
