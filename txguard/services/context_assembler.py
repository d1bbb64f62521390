"""
Decision record assembler.
Combines decoder, explainer and risk-engine output into one immutable TransactionContext.
"""
import time
from typing import List, Optional

from txguard.core.models import DecodedTransaction, IntentAnalysis, RiskIndicator, TransactionContext
from txguard.services.intent_explainer import format_ether


def now_ms() -> int:
    return int(time.time() * 1000)


def assemble(
    tx_hash: Optional[str],
    decoded: DecodedTransaction,
    intent: IntentAnalysis,
    indicators: List[RiskIndicator],
    timestamp: Optional[int] = None,
) -> TransactionContext:
    """Build the context. A missing hash becomes `pending_<timestamp>`."""
    created_at = now_ms() if timestamp is None else timestamp
    return TransactionContext(
        hash=tx_hash or f"pending_{created_at}",
        kind=decoded.kind,
        recipient=decoded.to,
        value=format_ether(decoded.value),
        intent=intent.intent,
        estimated_outcome=intent.estimated_outcome,
        risk_indicators=list(indicators),
        timestamp=created_at,
    )
