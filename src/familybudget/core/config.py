#!/usr/bin/env python3
"""
Configuration Management for the Family Budget Report

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production) with appropriate
requirements for each.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .dates import DEFAULT_CHUNK_DAYS
from .errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class MoneybirdConfig:
    """Moneybird API configuration."""

    api_token: str | None = None
    administration_id: str | None = None
    base_url: str = "https://moneybird.com/api/v2"
    timeout: float = 10.0
    rate_limit_delay: float = 1.0  # Seconds between period chunks
    chunk_days: int = DEFAULT_CHUNK_DAYS


@dataclass
class SlackConfig:
    """Slack bot configuration for posting the summary."""

    bot_token: str | None = None
    channel_id: str | None = None
    base_url: str = "https://slack.com/api"
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.channel_id)


@dataclass
class BudgetConfig:
    """Budget calculation settings."""

    vat_rate: Decimal = Decimal("0.21")
    income_tax_rate: Decimal = Decimal("0.30")
    revenue_account_name: str = "Omzet"
    revenue_account_type: str = "revenue"


@dataclass
class ChartConfig:
    """Pie chart rendering settings."""

    width: int = 8
    height: int = 6
    dpi: int = 100
    colors: list = field(
        default_factory=lambda: [
            "#FF6384",  # Red
            "#36A2EB",  # Blue
            "#FFCE56",  # Yellow
            "#4BC0C0",  # Teal
            "#9966FF",  # Purple
            "#FF9F40",  # Orange
            "#2ECC71",  # Green
        ]
    )
    remaining_color: str = "#C8C8C8"
    over_budget_color: str = "#DC3545"


@dataclass
class Config:
    """
    Main configuration class for the family budget report.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    moneybird: MoneybirdConfig
    slack: SlackConfig
    budget: BudgetConfig
    chart: ChartConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BUDGET_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_family_budget"
            data_dir = Path(os.getenv("BUDGET_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("BUDGET_DATA_DIR", "./data")).expanduser().resolve()

        output_dir = data_dir / "reports"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        moneybird = MoneybirdConfig(
            api_token=os.getenv("MONEYBIRD_API_TOKEN"),
            administration_id=os.getenv("MONEYBIRD_ADMINISTRATION_ID"),
            timeout=float(os.getenv("MONEYBIRD_TIMEOUT", "10")),
            rate_limit_delay=float(os.getenv("MONEYBIRD_RATE_LIMIT_DELAY", "1.0")),
            chunk_days=int(os.getenv("MONEYBIRD_CHUNK_DAYS", str(DEFAULT_CHUNK_DAYS))),
        )

        slack = SlackConfig(
            bot_token=os.getenv("SLACK_BOT_TOKEN"),
            channel_id=os.getenv("SLACK_CHANNEL_ID"),
        )

        budget = BudgetConfig(
            vat_rate=_parse_decimal("VAT_RATE", os.getenv("VAT_RATE", "0.21")),
            income_tax_rate=_parse_decimal("INCOME_TAX_RATE", os.getenv("INCOME_TAX_RATE", "0.30")),
            revenue_account_name=os.getenv("REVENUE_ACCOUNT_NAME", "Omzet"),
        )

        chart = ChartConfig(
            width=int(os.getenv("CHART_WIDTH", "8")),
            height=int(os.getenv("CHART_HEIGHT", "6")),
            dpi=int(os.getenv("CHART_DPI", "100")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            moneybird=moneybird,
            slack=slack,
            budget=budget,
            chart=chart,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [("data_dir", self.data_dir), ("output_dir", self.output_dir)]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.environment == Environment.PRODUCTION:
            if not self.moneybird.api_token:
                errors.append("MONEYBIRD_API_TOKEN is required in production")
            if not self.moneybird.administration_id:
                errors.append("MONEYBIRD_ADMINISTRATION_ID is required in production")

        if self.slack.bot_token and not self.slack.channel_id:
            errors.append("SLACK_CHANNEL_ID is required when SLACK_BOT_TOKEN is provided")

        if self.moneybird.timeout <= 0:
            errors.append("Moneybird timeout must be positive")
        if self.moneybird.rate_limit_delay < 0:
            errors.append("Moneybird rate limit delay must be non-negative")
        if self.moneybird.chunk_days < 1:
            errors.append("Moneybird chunk days must be at least 1")

        for name, rate in [("VAT_RATE", self.budget.vat_rate), ("INCOME_TAX_RATE", self.budget.income_tax_rate)]:
            if not Decimal("0") <= rate < Decimal("1"):
                errors.append(f"{name} must be between 0 and 1, got {rate}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)
            logging.getLogger("matplotlib").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "moneybird.api_token",
            "slack.bot_token",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***" if nested_value else None
                    elif isinstance(nested_value, (Path, Decimal)):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_decimal(name: str, value: str) -> Decimal:
    """Parse a decimal setting, naming the variable on failure."""
    try:
        return Decimal(value.strip())
    except InvalidOperation as e:
        raise ConfigurationError(f"{name} is not a valid decimal: {value!r}") from e


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
