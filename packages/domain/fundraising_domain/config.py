"""Application configuration and environment settings"""
from typing import Dict, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplayFormat(BaseModel):
    """Explicit number and date formatting parameters for one locale.

    Formatting helpers take one of these instead of reading process-wide
    locale state, so the same call always produces the same string.
    """
    locale: str = Field("en-US", description="BCP 47 locale tag this format describes")
    currency_code: str = Field("USD", description="ISO 4217 currency code")
    currency_symbol: str = Field("$", description="Symbol prefixed to currency amounts")
    group_separator: str = Field(",", description="Thousands separator")
    decimal_separator: str = Field(".", description="Decimal separator")
    numeric_date_order: Literal["MDY", "DMY", "YMD"] = Field(
        "MDY", description="Field order for numeric dates"
    )
    numeric_date_separator: str = Field("/", description="Separator for numeric dates")
    zero_pad_numeric_date: bool = Field(False, description="Zero-pad day and month in numeric dates")


DISPLAY_FORMATS: Dict[str, DisplayFormat] = {
    "en-US": DisplayFormat(),
    "en-GB": DisplayFormat(
        locale="en-GB",
        numeric_date_order="DMY",
        zero_pad_numeric_date=True,
    ),
}


def display_format_for(locale: str) -> DisplayFormat:
    """Look up the display format for a locale tag."""
    try:
        return DISPLAY_FORMATS[locale]
    except KeyError:
        raise ValueError(
            f"Unsupported locale '{locale}'. Available locales: {sorted(DISPLAY_FORMATS)}"
        ) from None


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Display
    LOCALE: str = Field("en-US", description="Locale used for report dates and currency strings")

    # Invitations
    APP_URL: str = Field("", description="Public base URL used to build invitation links")
    INVITATION_EXPIRY_DAYS: int = Field(7, description="Days an invitation token stays valid")

    # Validation bounds (USD)
    MIN_CONTRIBUTION: float = Field(1000, description="Lowest minimum contribution a round may set")
    MAX_CONTRIBUTION: float = Field(10_000_000, description="Highest maximum contribution a round may set")
    MIN_TARGET: float = Field(10_000, description="Smallest fundraising target")
    MAX_TARGET: float = Field(1_000_000_000, description="Largest fundraising target")

    LOG_LEVEL: str = Field("INFO", description="Root log level for the command-line tools")

    @property
    def display_format(self) -> DisplayFormat:
        """Get the display format for the configured locale"""
        return display_format_for(self.LOCALE)

    model_config = SettingsConfigDict(
        env_prefix="FUNDRAISING_",
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='ignore',
    )


settings = Settings()
