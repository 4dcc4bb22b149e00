"""
Configuration module for loading environment variables.
All configuration values are read once from the process environment.
"""
import os
from pathlib import Path
from typing import List


ALLOWED_ENVIRONMENTS = ("development", "dev", "production", "prod", "staging")


def _get_env_int(key: str, default: int) -> int:
    """Read an integer variable, falling back to default when unset or malformed."""
    value = os.getenv(key, "")
    if value:
        try:
            return int(value)
        except ValueError:
            return default
    return default


def _get_env_list(key: str, default: List[str]) -> List[str]:
    """Read a comma-separated variable."""
    value = os.getenv(key, "")
    if value:
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(default)


class Config:
    """Application configuration loaded from environment variables."""

    # Server Configuration
    SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
    SERVER_PORT: int = _get_env_int("SERVER_PORT", 8080)
    APP_ENV: str = os.getenv("APP_ENV", "development")

    # Clever Cloud catalog
    CLEVER_CLOUD_API_URL: str = os.getenv(
        "CLEVER_CLOUD_API_URL",
        "https://api.clever-cloud.com/v4"
    ).rstrip("/")
    DEFAULT_ZONE: str = os.getenv("DEFAULT_ZONE", "par")  # Paris

    # Pricing Configuration
    PRICING_TIMEOUT_SECONDS: int = _get_env_int("PRICING_TIMEOUT_SECONDS", 30)
    PRICING_CACHE_TTL_SECONDS: int = _get_env_int("PRICING_CACHE_TTL_SECONDS", 0)  # 0 = no caching

    # CORS Configuration
    CORS_ALLOWED_ORIGINS: List[str] = _get_env_list("CORS_ALLOWED_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOWED_METHODS: List[str] = _get_env_list(
        "CORS_ALLOWED_METHODS",
        ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    CORS_ALLOWED_HEADERS: List[str] = _get_env_list(
        "CORS_ALLOWED_HEADERS",
        ["Content-Type", "Connect-Protocol-Version"]
    )

    # SPA build output
    STATIC_DIR: str = os.getenv("STATIC_DIR", str(Path(__file__).parent.parent.parent / "web"))

    def is_development(self) -> bool:
        return self.APP_ENV in ("development", "dev")

    @classmethod
    def validate(cls) -> None:
        """
        Validates that configuration values are set and well-formed.

        Raises:
            ValueError: If any configuration value is missing or invalid.
        """
        if not cls.SERVER_HOST:
            raise ValueError("SERVER_HOST is required")
        if not 1 <= cls.SERVER_PORT <= 65535:
            raise ValueError(f"SERVER_PORT must be between 1 and 65535 (got: {cls.SERVER_PORT})")
        if cls.APP_ENV not in ALLOWED_ENVIRONMENTS:
            raise ValueError(
                f"APP_ENV must be one of {', '.join(ALLOWED_ENVIRONMENTS)} (got: {cls.APP_ENV})"
            )

        if not cls.CLEVER_CLOUD_API_URL.startswith(("http://", "https://")):
            raise ValueError(
                f"CLEVER_CLOUD_API_URL must be a valid URL (got: {cls.CLEVER_CLOUD_API_URL})"
            )
        if not cls.DEFAULT_ZONE:
            raise ValueError("DEFAULT_ZONE is required")
        if cls.PRICING_TIMEOUT_SECONDS <= 0:
            raise ValueError("PRICING_TIMEOUT_SECONDS must be positive")
        if cls.PRICING_CACHE_TTL_SECONDS < 0:
            raise ValueError("PRICING_CACHE_TTL_SECONDS must not be negative")


config = Config()
