"""Unified exchange models."""

from src.exchange.model.balance import Balance, Balances
from src.exchange.model.book import OrderBook
from src.exchange.model.fees import FundingFees, TradingFee
from src.exchange.model.market import Currency, Market, MarketLimits, MarketPrecision
from src.exchange.model.ohlcv import OHLCV
from src.exchange.model.order import Order
from src.exchange.model.position import Position
from src.exchange.model.ticker import Ticker
from src.exchange.model.trade import Trade
from src.exchange.model.transaction import DepositAddress, Transaction, Transfer
from src.exchange.model.types import Fee, MinMax, PriceLevel

__all__ = [
    "OHLCV",
    "Balance",
    "Balances",
    "Currency",
    "DepositAddress",
    "Fee",
    "FundingFees",
    "Market",
    "MarketLimits",
    "MarketPrecision",
    "MinMax",
    "Order",
    "OrderBook",
    "Position",
    "PriceLevel",
    "Ticker",
    "Trade",
    "TradingFee",
    "Transaction",
    "Transfer",
]
