import decimal
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROUNDING_MODE = decimal.ROUND_HALF_UP
DEFAULT_NUMBER_OF_DECIMALS = 2
DEFAULT_MAX_NUMBER_OF_MONTHS_IN_FUTURE = 36

# Property name kept for compatibility with existing deployments.
MAX_NUMBER_OF_MONTHS_PROPERTY = "killbill.invoice.maxNumberOfMonthsInFuture"

ROUNDING_MODES = frozenset(
    {
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
        decimal.ROUND_05UP,
    }
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    APP_NAME: str = "subscription-invoicing"
    version: str = "0.1.0"
    DEBUG: bool = False

    # Amount computation
    INVOICE_ROUNDING_MODE: str = DEFAULT_ROUNDING_MODE
    INVOICE_NUMBER_OF_DECIMALS: int = Field(default=DEFAULT_NUMBER_OF_DECIMALS, ge=0)

    # Target date horizon
    max_number_of_months_in_future: int = Field(
        default=DEFAULT_MAX_NUMBER_OF_MONTHS_IN_FUTURE,
        validation_alias=AliasChoices(
            MAX_NUMBER_OF_MONTHS_PROPERTY,
            "INVOICE_MAX_NUMBER_OF_MONTHS_IN_FUTURE",
            "max_number_of_months_in_future",
        ),
    )

    @field_validator("INVOICE_ROUNDING_MODE")
    @classmethod
    def _check_rounding_mode(cls, value: str) -> str:
        value = value.upper()
        if value not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {value}")
        return value

    @field_validator("max_number_of_months_in_future", mode="before")
    @classmethod
    def _parse_max_months(cls, value: Any) -> int:
        """Fall back to the default when the value is not an integer."""
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_MAX_NUMBER_OF_MONTHS_IN_FUTURE


@dataclass(frozen=True)
class InvoicingConfig:
    """Rounding and horizon settings handed to the invoice generator.

    Defaults: amounts rounded half-up to 2 decimals, target dates at most
    36 whole months ahead of the clock.
    """

    rounding_mode: str = DEFAULT_ROUNDING_MODE
    number_of_decimals: int = DEFAULT_NUMBER_OF_DECIMALS
    max_number_of_months_in_future: int = DEFAULT_MAX_NUMBER_OF_MONTHS_IN_FUTURE

    @classmethod
    def from_settings(cls, source: Settings) -> "InvoicingConfig":
        return cls(
            rounding_mode=source.INVOICE_ROUNDING_MODE,
            number_of_decimals=source.INVOICE_NUMBER_OF_DECIMALS,
            max_number_of_months_in_future=source.max_number_of_months_in_future,
        )

    @property
    def quantum(self) -> decimal.Decimal:
        """Smallest representable amount, e.g. ``Decimal("0.01")``."""
        return decimal.Decimal(1).scaleb(-self.number_of_decimals)


settings = Settings()
