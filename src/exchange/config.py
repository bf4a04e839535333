"""
Exchange adapter configuration using Pydantic Settings.

This module provides configuration management for exchange adapters,
allowing environment-based configuration with type validation and defaults.

Adapter behaviour is controlled by an immutable ``ExchangeOptions`` struct.
An adapter starts from its own defaults, layers the configured options on
top, and every operation may layer call-time overrides on top of that.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.exchange.enums import (
    CurrencyActivePolicy,
    MarketType,
    PrecisionMode,
    PrimaryNetworkPolicy,
    TradesMethod,
)


class ExchangeOptions(BaseModel):
    """Immutable adapter options."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    # Endpoint family selection
    default_type: MarketType = MarketType.SPOT
    default_types: dict[str, MarketType] = Field(
        default_factory=dict,
        description="Per-operation default market type, keyed by operation name",
    )

    # Operation behaviour
    fetch_trades_method: TradesMethod = TradesMethod.AGGREGATE
    warn_on_fetch_open_orders_without_symbol: bool = True
    ohlcv_default_limit: int = Field(default=100, ge=1)
    order_book_interval: str = "0"

    # Currency normalization policies
    currency_active_policy: CurrencyActivePolicy = CurrencyActivePolicy.ANY
    precision_mode: PrecisionMode = PrecisionMode.DECIMAL_PLACES
    primary_network_policy: PrimaryNetworkPolicy = PrimaryNetworkPolicy.LOWEST_ORDER

    # Fees
    default_taker_fee: Decimal = Decimal("0.004")
    default_maker_fee: Decimal = Decimal("0.001")

    # Wallet
    dust_currency: str = "USDT"
    accounts_by_type: dict[str, str] = Field(
        default_factory=lambda: {
            "main": "MAIN",
            "spot": "MAIN",
            "funding": "FUNDING",
            "margin": "MARGIN",
            "future": "UMFUTURE",
            "delivery": "CMFUTURE",
        }
    )

    @classmethod
    def option_keys(cls) -> frozenset[str]:
        """Get the names that may appear as call-time overrides."""
        return frozenset(cls.model_fields)

    def merged(self, overrides: Mapping[str, Any]) -> "ExchangeOptions":
        """
        Return a new options struct with overrides applied.

        Args:
            overrides: Field values taking precedence over this struct

        Returns:
            Validated ExchangeOptions; self is left untouched

        """
        if not overrides:
            return self
        data = self.model_dump()
        data.update(overrides)
        return type(self).model_validate(data)

    def default_type_for(self, operation: str) -> MarketType:
        """Get the fallback market type for an operation."""
        return self.default_types.get(operation, self.default_type)


class ExchangeConfig(BaseSettings):
    """Root adapter configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FARHADMARKET_", env_nested_delimiter="__"
    )

    # Credentials
    api_key: str = Field(default="", description="Exchange API key")
    secret: str = Field(default="", description="Exchange API secret")

    # Transport
    sandbox: bool = False
    timeout: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Total HTTP request timeout in seconds",
    )

    options: ExchangeOptions = Field(default_factory=ExchangeOptions)

    # Global settings
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    @classmethod
    def from_env(cls) -> "ExchangeConfig":
        """
        Load configuration from environment variables.

        Returns:
            Configured ExchangeConfig instance

        """
        return cls()
