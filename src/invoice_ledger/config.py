"""Runtime settings read from environment variables.

    INVOICE_LEDGER_DATABASE_URL         SQLAlchemy URL (default: in-memory SQLite)
    INVOICE_LEDGER_OVERPAYMENT_POLICY   "clamp" (default) or "reject"
    INVOICE_LEDGER_LOG_LEVEL            logging level name (default: INFO)
    INVOICE_LEDGER_SQL_ECHO             "true"/"false" (default: false)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from invoice_ledger.application.use_cases.record_payment import OverpaymentPolicy

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"


class ConfigurationError(ValueError):
    """Raised when an environment variable holds an unusable value."""


class LedgerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INVOICE_LEDGER_", extra="ignore", frozen=True)

    database_url: str = DEFAULT_DATABASE_URL
    overpayment_policy: OverpaymentPolicy = OverpaymentPolicy.CLAMP
    log_level: int = logging.INFO
    sql_echo: bool = False

    @field_validator("overpayment_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            level = logging.getLevelName(value.strip().upper())
            if not isinstance(level, int):
                raise ValueError(f"not a logging level: {value!r}")
            return level
        return value

    @classmethod
    def from_env(cls) -> LedgerSettings:
        """Build settings from the process environment.

        Raises:
            ConfigurationError: If any variable has an invalid value.
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid invoice ledger settings: {e}") from e
