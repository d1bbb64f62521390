"""
Pytest fixtures and fakes for the txguard tests.

Data sources are replaced by in-memory fakes that return the same
(value, StructuredError | None) pairs as the real clients.
"""
from __future__ import annotations

from typing import Any

import pytest
from eth_abi import encode

from txguard.core.enums import ErrorCode
from txguard.core.models import RawTransactionRequest, StructuredError
from txguard.services.decision_ledger import DecisionLedger
from txguard.services.risk_indicators import RiskIndicatorEngine
from txguard.services.signature_registry import selector_for

EOA = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
TOKEN = "0x6B175474E89094C44Da98b954EedeAC495271d0F"  # DAI
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
ROUTER = "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"  # Uniswap V2
SPENDER = "0x1111111111111111111111111111111111111111"
UNKNOWN_CONTRACT = "0x2222222222222222222222222222222222222222"

UINT256_MAX = 2**256 - 1
ONE_ETH = 10**18
BLOCKS_PER_DAY = 7200
CURRENT_BLOCK = 20_000_000


def calldata(prototype: str, *args: Any) -> str:
    """ABI-encode a call: selector + arguments."""
    types = prototype[prototype.index("(") + 1:-1].split(",")
    return "0x" + selector_for(prototype) + encode(types, list(args)).hex()


def raw(to: str = EOA, value: int | str = 0, data: str = "0x") -> RawTransactionRequest:
    if isinstance(value, int):
        value = hex(value)
    return RawTransactionRequest(to=to, value=value, data=data)


def error(code: ErrorCode = ErrorCode.UPSTREAM_ERROR, message: str = "boom") -> StructuredError:
    return StructuredError(code=code, message=message, source="fake")


class FakeExplorer:
    """Explorer fake. `history` answers sort=asc, `recent` answers sort=desc."""

    def __init__(
        self,
        source: dict | None = None,
        source_error: StructuredError | None = None,
        history: list | None = None,
        recent: list | None = None,
        history_error: StructuredError | None = None,
    ):
        self.source = source
        self.source_error = source_error
        self.history = history
        self.recent = recent
        self.history_error = history_error
        self.calls: list[tuple] = []

    async def get_contract_source(self, address):
        self.calls.append(("source", address))
        if self.source_error:
            return None, self.source_error
        return self.source, None

    async def get_transactions(self, address, sort="asc", page=1, offset=1, **kwargs):
        self.calls.append(("txlist", address, sort, offset))
        if self.history_error:
            return None, self.history_error
        if sort == "asc":
            return self.history, None
        return self.recent, None


class FakeRpc:
    def __init__(self, has_code: bool | None = True, code_error=None, block: int | None = CURRENT_BLOCK, block_error=None):
        self._has_code = has_code
        self.code_error = code_error
        self.block = block
        self.block_error = block_error
        self.calls: list[tuple] = []

    async def has_code(self, address):
        self.calls.append(("code", address))
        if self.code_error:
            return None, self.code_error
        return self._has_code, None

    async def get_block_number(self):
        self.calls.append(("block",))
        if self.block_error:
            return None, self.block_error
        return self.block, None


def verified_source() -> dict:
    return {"verified": True, "source_code": "contract Token {}", "contract_name": "Token", "compiler_version": "v0.8.20"}


def unverified_source() -> dict:
    return {"verified": False, "source_code": None, "contract_name": "", "compiler_version": ""}


def first_tx(days_old: int) -> list:
    return [{"blockNumber": str(CURRENT_BLOCK - days_old * BLOCKS_PER_DAY), "from": EOA, "to": ""}]


@pytest.fixture
def explorer():
    return FakeExplorer(source=verified_source(), history=first_tx(100), recent=[{"from": EOA, "to": ROUTER}])


@pytest.fixture
def rpc():
    return FakeRpc()


@pytest.fixture
def engine(explorer, rpc):
    return RiskIndicatorEngine(explorer=explorer, rpc=rpc)


@pytest.fixture
def ledger():
    return DecisionLedger(max_recent=100)
