"""Shared exchange client machinery."""

from src.exchange.client.base import BaseExchange, SignedRequest
from src.exchange.client.transport import HttpResponse, HttpTransport

__all__ = [
    "BaseExchange",
    "HttpResponse",
    "HttpTransport",
    "SignedRequest",
]
