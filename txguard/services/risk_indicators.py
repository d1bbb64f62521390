"""
Risk indicator engine.
Runs independent heuristic checks (contract verification, token age,
exchange liquidity, value magnitude) and aggregates them in a fixed order.
Never raises: failures become "unable to verify" warning indicators.
"""
import asyncio
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, List, Optional, Tuple, Union

from txguard.core.config import settings
from txguard.core.enums import ErrorCode, IndicatorType, Severity
from txguard.core.known_addresses import known_protocol, is_exchange_router
from txguard.core.logger import get_logger
from txguard.core.models import RiskIndicator, StructuredError
from txguard.services.explorer_client import ExplorerClient
from txguard.services.rpc_client import RpcClient
from txguard.services.transaction_decoder import has_call_data

logger = get_logger(__name__)

SECONDS_PER_BLOCK = 12
SECONDS_PER_DAY = 24 * 60 * 60
VERY_NEW_TOKEN_DAYS = 7
NEW_TOKEN_DAYS = 30
RECENT_TX_WINDOW = 100

EXPLORER_SOURCE = "Etherscan API"
EXPLORER_ERROR_SOURCE = "Etherscan API (Error)"
RPC_SOURCE = "Ethereum RPC"
ANALYSIS_SOURCE = "Transaction Analysis"


def _unable_to_verify_contract(source: str = EXPLORER_SOURCE) -> RiskIndicator:
    return RiskIndicator(
        type=IndicatorType.UNVERIFIED_CONTRACT,
        severity=Severity.WARNING,
        message="Unable to verify contract status",
        source=f"{source} (Error)",
    )


def _unable_to_determine_age(source: str = EXPLORER_SOURCE) -> RiskIndicator:
    return RiskIndicator(
        type=IndicatorType.NEW_TOKEN,
        severity=Severity.WARNING,
        message="Unable to determine token age",
        source=f"{source} (Error)",
    )


def _unable_to_verify_dex() -> RiskIndicator:
    return RiskIndicator(
        type=IndicatorType.NO_DEX_POOL,
        severity=Severity.WARNING,
        message="Unable to verify DEX pool presence",
        source=EXPLORER_ERROR_SOURCE,
    )


def check_transaction_value(
    value_eth: Union[str, Decimal, float, int, None],
    high_threshold: Optional[Decimal] = None,
    medium_threshold: Optional[Decimal] = None,
) -> Optional[RiskIndicator]:
    """Flag large native transfers: warning above 10 ETH, info above 1 ETH, nothing otherwise."""
    if value_eth is None:
        return None
    try:
        value = Decimal(str(value_eth))
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None

    high = settings.high_value_threshold_eth if high_threshold is None else high_threshold
    medium = settings.medium_value_threshold_eth if medium_threshold is None else medium_threshold

    if value > high:
        return RiskIndicator(
            type=IndicatorType.HIGH_VALUE,
            severity=Severity.WARNING,
            message=f"High value transaction: {value:.2f} ETH",
            source=ANALYSIS_SOURCE,
        )
    if value > medium:
        return RiskIndicator(
            type=IndicatorType.HIGH_VALUE,
            severity=Severity.INFO,
            message=f"Medium value transaction: {value:.2f} ETH",
            source=ANALYSIS_SOURCE,
        )
    return None


class RiskIndicatorEngine:
    """
    Evaluates risk signals for a pending transaction.

    Data sources are injected: `explorer` answers contract-source and
    transaction-history lookups, `rpc` answers code and block-height lookups.
    Both return (value, error) pairs instead of raising.
    """

    def __init__(self, explorer: Optional[Any] = None, rpc: Optional[Any] = None):
        self.explorer = explorer if explorer is not None else ExplorerClient()
        self.rpc = rpc if rpc is not None else RpcClient()

    async def assess(
        self,
        recipient: str,
        token_address: Optional[str] = None,
        value_eth: Optional[Union[str, Decimal]] = None,
        raw_data: Optional[str] = None,
    ) -> List[RiskIndicator]:
        """All applicable indicators, in check order. Never raises."""
        try:
            return await self._assess(recipient, token_address, value_eth, raw_data)
        except Exception:
            logger.exception("risk_assessment_failed", recipient=recipient)
            return [RiskIndicator(
                type=IndicatorType.UNVERIFIED_CONTRACT,
                severity=Severity.WARNING,
                message="Unable to analyze risk indicators",
                source="Risk Analysis (Error)",
            )]

    async def _assess(
        self,
        recipient: str,
        token_address: Optional[str],
        value_eth: Optional[Union[str, Decimal]],
        raw_data: Optional[str],
    ) -> List[RiskIndicator]:
        is_contract_call = has_call_data(raw_data)
        # (check coroutine, indicator reported if it raises)
        checks: List[Tuple[Awaitable[Optional[RiskIndicator]], RiskIndicator]] = []

        # Step 1: contract verification, only for contract calls
        if is_contract_call:
            try:
                has_code, error = await self.rpc.has_code(recipient)
            except Exception as e:
                has_code, error = None, StructuredError(code=ErrorCode.UPSTREAM_ERROR, message=str(e), source=RPC_SOURCE)
            if error is None and has_code is False:
                # Call data to an address without code: report it alone
                return [RiskIndicator(
                    type=IndicatorType.UNVERIFIED_CONTRACT,
                    severity=Severity.WARNING,
                    message="Transaction data sent to non-contract address",
                    source=ANALYSIS_SOURCE,
                )]
            if error is not None:
                logger.warning("code_lookup_failed", recipient=recipient, error=error.message)
                checks.append((self._code_lookup_failed(), _unable_to_verify_contract(RPC_SOURCE)))
            else:
                checks.append((self.check_contract_verification(recipient), _unable_to_verify_contract()))

        # Step 2: token age, only for a token other than the recipient
        if token_address and token_address.lower() != (recipient or "").lower():
            checks.append((self.check_token_age(token_address), _unable_to_determine_age()))

        # Step 3: exchange liquidity, whenever a token is given
        if token_address:
            checks.append((self.check_dex_pool_presence(token_address), _unable_to_verify_dex()))

        # Independent lookups; gather keeps submission order
        results = await asyncio.gather(*(check for check, _ in checks), return_exceptions=True)
        indicators = []
        for (_, fallback), result in zip(checks, results):
            if isinstance(result, Exception):
                logger.warning("risk_check_failed", indicator=fallback.type.value, error=str(result))
                indicators.append(fallback)
            elif result is not None:
                indicators.append(result)

        # Step 4: value magnitude, no I/O
        value_indicator = check_transaction_value(value_eth)
        if value_indicator:
            indicators.append(value_indicator)

        if not indicators and not is_contract_call:
            indicators.append(RiskIndicator(
                type=IndicatorType.UNVERIFIED_CONTRACT,
                severity=Severity.INFO,
                message="Simple ETH transfer to wallet address",
                source=ANALYSIS_SOURCE,
            ))

        return indicators

    async def _code_lookup_failed(self) -> RiskIndicator:
        return _unable_to_verify_contract(RPC_SOURCE)

    async def check_contract_verification(self, address: str) -> RiskIndicator:
        """
        Verification status from the explorer. The known-protocol whitelist is
        consulted only when the lookup fails or is inconclusive.
        """
        try:
            source, error = await self.explorer.get_contract_source(address)
        except Exception as e:
            source, error = None, e
            logger.warning("contract_verification_failed", address=address, error=str(e))

        if error is None and source is not None:
            if source.get("verified"):
                return RiskIndicator(
                    type=IndicatorType.UNVERIFIED_CONTRACT,
                    severity=Severity.INFO,
                    message="Contract is verified on Etherscan",
                    source=EXPLORER_SOURCE,
                )
            return RiskIndicator(
                type=IndicatorType.UNVERIFIED_CONTRACT,
                severity=Severity.WARNING,
                message="Contract is not verified on Etherscan",
                source=EXPLORER_SOURCE,
            )

        protocol = known_protocol(address)
        if protocol:
            return RiskIndicator(
                type=IndicatorType.UNVERIFIED_CONTRACT,
                severity=Severity.INFO,
                message=f"Verified Contract (Known Protocol: {protocol})",
                source="Fallback Verification",
            )

        return _unable_to_verify_contract()

    async def check_token_age(self, token_address: str) -> RiskIndicator:
        """Age of a token estimated from its first transaction's block."""
        unable = _unable_to_determine_age()

        try:
            current_block, error = await self.rpc.get_block_number()
            if error or current_block is None:
                logger.warning("token_age_block_height_failed", token=token_address)
                return _unable_to_determine_age(RPC_SOURCE)

            transactions, error = await self.explorer.get_transactions(
                token_address, sort="asc", page=1, offset=1
            )
            if error or not transactions:
                logger.warning("token_age_history_failed", token=token_address)
                return unable

            creation_block = int(transactions[0]["blockNumber"])
        except Exception as e:
            logger.warning("token_age_check_failed", token=token_address, error=str(e))
            return unable

        block_age = max(current_block - creation_block, 0)
        estimated_days = (block_age * SECONDS_PER_BLOCK) // SECONDS_PER_DAY

        if estimated_days < VERY_NEW_TOKEN_DAYS:
            return RiskIndicator(
                type=IndicatorType.NEW_TOKEN,
                severity=Severity.WARNING,
                message=f"Token is very new ({estimated_days} days old)",
                source=EXPLORER_SOURCE,
            )
        if estimated_days < NEW_TOKEN_DAYS:
            return RiskIndicator(
                type=IndicatorType.NEW_TOKEN,
                severity=Severity.INFO,
                message=f"Token is relatively new ({estimated_days} days old)",
                source=EXPLORER_SOURCE,
            )
        return RiskIndicator(
            type=IndicatorType.NEW_TOKEN,
            severity=Severity.INFO,
            message=f"Token age: {estimated_days} days",
            source=EXPLORER_SOURCE,
        )

    async def check_dex_pool_presence(self, token_address: str) -> RiskIndicator:
        """Whether recent token transactions touch a known exchange router."""
        unable = _unable_to_verify_dex()

        try:
            transactions, error = await self.explorer.get_transactions(
                token_address, sort="desc", page=1, offset=RECENT_TX_WINDOW
            )
        except Exception as e:
            logger.warning("dex_presence_check_failed", token=token_address, error=str(e))
            return unable

        if error or not transactions:
            logger.warning("dex_presence_history_failed", token=token_address)
            return unable

        has_exchange_activity = any(
            is_exchange_router(tx.get("to")) or is_exchange_router(tx.get("from"))
            for tx in transactions
            if isinstance(tx, dict)
        )

        if has_exchange_activity:
            return RiskIndicator(
                type=IndicatorType.NO_DEX_POOL,
                severity=Severity.INFO,
                message="Token has Uniswap trading activity",
                source=EXPLORER_SOURCE,
            )
        return RiskIndicator(
            type=IndicatorType.NO_DEX_POOL,
            severity=Severity.WARNING,
            message="No major DEX trading activity found",
            source=EXPLORER_SOURCE,
        )
