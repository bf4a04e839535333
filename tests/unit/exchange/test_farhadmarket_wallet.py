"""Tests for FarhadMarket wallet operations and fees."""

from decimal import Decimal

import pytest

from src.exchange.enums import TransactionStatus, TransactionType
from src.exchange.errors import BadRequest, ExchangeError
from tests.unit.exchange.helpers import loaded_exchange, reference_transport

TIMESTAMP = 1700000000000


class TestDepositAddress:
    """Test deposit address lookup."""

    @pytest.mark.asyncio
    async def test_address(self):
        transport = reference_transport().add(
            "capital/deposit/address", {"address": "bc1qexample", "tag": "", "coin": "BTC"}
        )
        exchange = await loaded_exchange(transport)
        address = await exchange.fetch_deposit_address("BTC", {"network": "BSC"})

        assert address.currency == "BTC"
        assert address.address == "bc1qexample"
        assert address.tag is None
        assert address.network == "BSC"
        assert transport.calls_to("capital/deposit/address")[0].query == {
            "coin": "BTC",
            "network": "BSC",
        }

    @pytest.mark.asyncio
    async def test_missing_address(self):
        transport = reference_transport().add("capital/deposit/address", {"coin": "BTC"})
        exchange = await loaded_exchange(transport)
        with pytest.raises(ExchangeError, match="no address"):
            await exchange.fetch_deposit_address("BTC")


class TestTransactions:
    """Test deposit and withdrawal history."""

    @pytest.mark.asyncio
    async def test_deposits(self):
        transport = reference_transport().add(
            "capital/deposit/hisrec",
            [
                {
                    "amount": "0.5",
                    "coin": "BTC",
                    "network": "BTC",
                    "status": 1,
                    "address": "addr",
                    "addressTag": "",
                    "txId": "tx1",
                    "insertTime": TIMESTAMP,
                }
            ],
        )
        exchange = await loaded_exchange(transport)
        deposit, = await exchange.fetch_deposits("BTC", since=TIMESTAMP)

        assert deposit.type == TransactionType.DEPOSIT
        assert deposit.status == TransactionStatus.OK
        assert deposit.currency == "BTC"
        assert deposit.amount == Decimal("0.5")
        assert deposit.timestamp == TIMESTAMP
        assert deposit.txid == "tx1"
        assert deposit.tag is None
        assert deposit.fee is None
        assert transport.calls_to("capital/deposit/hisrec")[0].query == {
            "coin": "BTC",
            "startTime": str(TIMESTAMP),
        }

    @pytest.mark.asyncio
    async def test_withdrawals(self):
        transport = reference_transport().add(
            "capital/withdraw/history",
            [
                {
                    "id": "w1",
                    "amount": "1",
                    "transactionFee": "0.0005",
                    "coin": "BTC",
                    "status": 6,
                    "address": "addr",
                    "txId": "tx2",
                    "applyTime": "2023-11-14 22:13:20",
                    "network": "BTC",
                },
                {
                    "id": "w2",
                    "amount": "2",
                    "coin": "BTC",
                    "status": 3,
                    "applyTime": "2023-11-14 22:13:21",
                },
            ],
        )
        exchange = await loaded_exchange(transport)
        first, second = await exchange.fetch_withdrawals()

        assert first.type == TransactionType.WITHDRAWAL
        assert first.status == TransactionStatus.OK
        assert first.timestamp == TIMESTAMP
        assert first.fee.cost == Decimal("0.0005")
        assert first.fee.currency == "BTC"
        assert second.status == TransactionStatus.FAILED
        assert transport.calls_to("capital/withdraw/history")[0].query == {}


class TestTransfers:
    """Test transfers between accounts."""

    @pytest.mark.asyncio
    async def test_transfer(self):
        transport = reference_transport().add(
            "sapi/v1/asset/transfer", {"tranId": 13526853623}, method="POST"
        )
        exchange = await loaded_exchange(transport)
        transfer = await exchange.transfer("USDT", "10", "spot", "future")

        assert transport.calls_to("sapi/v1/asset/transfer")[0].form == {
            "asset": "USDT",
            "amount": "10",
            "type": "MAIN_UMFUTURE",
        }
        assert transfer.id == "13526853623"
        assert transfer.currency == "USDT"
        assert transfer.amount == Decimal("10")
        assert transfer.from_account == "spot"
        assert transfer.to_account == "future"

    @pytest.mark.asyncio
    async def test_unknown_account(self):
        transport = reference_transport()
        exchange = await loaded_exchange(transport)
        with pytest.raises(BadRequest, match="savings"):
            await exchange.transfer("USDT", "10", "savings", "future")
        assert not transport.calls_to("sapi/v1/asset/transfer")

    @pytest.mark.asyncio
    async def test_fetch_transfers(self):
        transport = reference_transport().add(
            "sapi/v1/asset/transfer",
            {
                "total": 2,
                "rows": [
                    {
                        "asset": "USDT",
                        "amount": "1",
                        "type": "MAIN_UMFUTURE",
                        "status": "CONFIRMED",
                        "tranId": 11415955596,
                        "timestamp": TIMESTAMP,
                    },
                    {
                        "asset": "BTC",
                        "amount": "0.1",
                        "type": "MAIN_UMFUTURE",
                        "status": "PENDING",
                        "tranId": 2,
                        "timestamp": TIMESTAMP + 1000,
                    },
                ],
            },
            method="GET",
        )
        exchange = await loaded_exchange(transport)

        transfers = await exchange.fetch_transfers(limit=10)
        assert [t.id for t in transfers] == ["11415955596", "2"]
        assert transfers[0].from_account == "spot"
        assert transfers[0].to_account == "future"
        assert transfers[0].status == TransactionStatus.OK
        assert transfers[1].status == TransactionStatus.PENDING
        assert transport.calls_to("sapi/v1/asset/transfer")[0].query == {
            "type": "MAIN_UMFUTURE",
            "size": "10",
        }

        usdt_only = await exchange.fetch_transfers("USDT")
        assert [t.currency for t in usdt_only] == ["USDT"]

    @pytest.mark.asyncio
    async def test_fetch_transfers_limit_counts_matching_currency(self):
        rows = [
            {
                "asset": asset,
                "amount": "1",
                "status": "CONFIRMED",
                "tranId": index,
                "timestamp": TIMESTAMP + index,
            }
            for index, asset in enumerate(["USDT", "BTC", "USDT"], start=1)
        ]
        transport = reference_transport().add(
            "sapi/v1/asset/transfer", {"total": 3, "rows": rows}, method="GET"
        )
        exchange = await loaded_exchange(transport)

        transfers = await exchange.fetch_transfers("USDT", limit=2)
        assert [t.id for t in transfers] == ["1", "3"]

    @pytest.mark.asyncio
    async def test_fetch_transfers_reverse_direction(self):
        transport = reference_transport().add(
            "sapi/v1/asset/transfer", {"total": 0, "rows": []}, method="GET"
        )
        exchange = await loaded_exchange(transport)
        await exchange.fetch_transfers(params={"fromAccount": "future", "toAccount": "spot"})

        assert transport.calls_to("sapi/v1/asset/transfer")[0].query == {"type": "UMFUTURE_MAIN"}


class TestFees:
    """Test trading and funding fees."""

    TRADE_FEES = {
        "tradeFee": [
            {"symbol": "BTCUSDT", "maker": "0.0009", "taker": "0.001"},
            {"symbol": "XYZUSDT", "maker": "0.001", "taker": "0.001"},
        ],
        "success": True,
    }

    @pytest.mark.asyncio
    async def test_trading_fees(self):
        transport = reference_transport().add("wapi/v3/tradeFee", self.TRADE_FEES)
        exchange = await loaded_exchange(transport)
        fees = await exchange.fetch_trading_fees()

        assert set(fees) == {"BTC/USDT", "XYZ/USDT"}
        assert fees["BTC/USDT"].maker == Decimal("0.0009")
        assert fees["BTC/USDT"].taker == Decimal("0.001")

    @pytest.mark.asyncio
    async def test_trading_fee(self):
        transport = reference_transport().add(
            "wapi/v3/tradeFee", {"tradeFee": self.TRADE_FEES["tradeFee"][:1]}
        )
        exchange = await loaded_exchange(transport)
        fee = await exchange.fetch_trading_fee("BTC/USDT")

        assert fee.symbol == "BTC/USDT"
        assert fee.maker == Decimal("0.0009")
        assert transport.calls_to("wapi/v3/tradeFee")[0].query == {"symbol": "BTCUSDT"}

    @pytest.mark.asyncio
    async def test_funding_fees_from_currencies(self):
        transport = reference_transport()
        exchange = await loaded_exchange(transport)
        fees = await exchange.fetch_funding_fees()

        assert fees.withdraw == {
            "BTC": Decimal("0.00001"),
            "USDT": Decimal("1"),
            "XYZ": None,
        }
        assert fees.deposit == {}
        assert fees.info["BTC"]["BTC"] == Decimal("0.0005")
        assert len(transport.calls) == 2
