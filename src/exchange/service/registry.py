"""
Exchange adapter registry.

This module provides a clean, exchange-agnostic entry point for creating
adapters. Callers name the exchange; the registry picks the implementation
so the rest of the application only sees the unified interface.
"""

from src.exchange.adapters.farhadmarket import FarhadMarket
from src.exchange.client.base import BaseExchange
from src.exchange.config import ExchangeConfig
from src.exchange.protocols import TransportProtocol


def supported_exchanges() -> list[str]:
    return [FarhadMarket.id]


def create_exchange(
    exchange: str = "farhadmarket",
    config: ExchangeConfig | None = None,
    transport: TransportProtocol | None = None,
) -> BaseExchange:
    """
    Create an adapter for the specified exchange.

    Args:
        exchange: Exchange id (currently only "farhadmarket")
        config: Adapter configuration; read from the environment if omitted
        transport: HTTP transport override, e.g. for tests

    Returns:
        The adapter, ready for use as an async context manager

    Raises:
        ValueError: If exchange is not supported

    """
    match exchange.lower():
        case "farhadmarket":
            return FarhadMarket(config=config, transport=transport)
        case _:
            raise ValueError(f"Unsupported exchange: {exchange}")
