"""Exchange service entry points."""

from src.exchange.service.registry import create_exchange, supported_exchanges

__all__ = ["create_exchange", "supported_exchanges"]
