#!/usr/bin/env python3
"""Print a FarhadMarket ticker and order book summary."""

import asyncio
import logging
import sys

from src.exchange.config import ExchangeConfig
from src.exchange.errors import BaseError
from src.exchange.service import create_exchange

logger = logging.getLogger(__name__)


async def show_market(symbol: str, config: ExchangeConfig) -> None:
    async with create_exchange("farhadmarket", config=config) as exchange:
        ticker = await exchange.fetch_ticker(symbol)
        book = await exchange.fetch_order_book(symbol, limit=5)
        print(ticker.format_summary())
        print(f"Best bid {book.best_bid}  best ask {book.best_ask}  spread {book.spread}")


def main() -> int:
    config = ExchangeConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    symbol = sys.argv[1] if len(sys.argv) > 1 else "BTC/USDT"
    try:
        asyncio.run(show_market(symbol, config))
    except BaseError as e:
        logger.error(f"Request failed: {e.to_dict()}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
