"""Exchange protocols."""

from src.exchange.protocols.exchange import TransportProtocol, UnifiedExchangeProtocol

__all__ = [
    "TransportProtocol",
    "UnifiedExchangeProtocol",
]
