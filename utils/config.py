"""Configuration management for the transparency API.

Provides:
- ``KnownValues``: the enumerations the fixtures and filters rely on
- ``AppConfig``: application settings read from environment variables
"""

from pathlib import Path
import os as _os

from utils.records import MetricKind

# Fixtures shipped with the repository (``<repo>/data``)
DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data"


class KnownValues:
    """Container for known valid values used in filtering and validation."""

    MEETING_TYPES = {"bilateral", "multilateral"}

    CASE_STATUSES = {"ongoing", "resolved", "closed"}

    # Ordered from least to most severe
    CASE_SEVERITIES = ("low", "medium", "high", "critical")

    CONTRACT_STATUSES = {"ongoing", "completed", "cancelled"}

    # Transparency scores are published on a 0-10 scale
    TRANSPARENCY_SCORE_RANGE = (0.0, 10.0)

    COUNTRY_NOT_FOUND = "Country not found"

    # 404 messages when the country exists but the dataset does not
    DATASET_NOT_FOUND = {
        MetricKind.BUDGET.value: "Budget data not found",
        MetricKind.CPI.value: "CPI data not found",
        MetricKind.HEALTH.value: "Health data not found",
        MetricKind.EDUCATION.value: "Education data not found",
        "breakdown": "Budget breakdown not found",
    }

    @classmethod
    def is_valid_severity(cls, severity: str) -> bool:
        return severity in cls.CASE_SEVERITIES

    @classmethod
    def dataset_message(cls, dataset: str) -> str:
        """Return the 404 message for a missing dataset.

        Args:
            dataset: Metric kind value or ``"breakdown"``

        Returns:
            Entity-specific message, or a generic one for unknown datasets
        """
        return cls.DATASET_NOT_FOUND.get(dataset, f"{dataset.capitalize()} data not found")


class AppConfig:
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        APP_FIXTURES_DIR: Directory holding the JSON fixtures (default: <repo>/data)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_LOG_LEVEL: Root log level (default: INFO)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    """

    def __init__(self) -> None:
        self.fixtures_dir = Path(_os.getenv("APP_FIXTURES_DIR", str(DEFAULT_FIXTURES_DIR)))
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        self.log_level = _os.getenv("APP_LOG_LEVEL", "INFO").upper()
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
