"""FarhadMarket exchange adapter."""

from src.exchange.adapters.farhadmarket.exchange import FarhadMarket

__all__ = ["FarhadMarket"]
