"""
Transaction analyzer - main orchestrator.
raw request -> decode -> explain -> assess risk -> assemble context.
"""
from typing import Optional

from pydantic import BaseModel

from txguard.core.enums import RiskLevel, TransactionKind
from txguard.core.logger import get_logger
from txguard.core.models import DecodedTransaction, IntentAnalysis, RawTransactionRequest, TransactionContext
from txguard.services.context_assembler import assemble, now_ms
from txguard.services.decision_ledger import derive_risk_level
from txguard.services.intent_explainer import IntentExplainer, extract_token_addresses, format_ether
from txguard.services.risk_indicators import RiskIndicatorEngine
from txguard.services.transaction_decoder import TransactionDecoder

logger = get_logger(__name__)

# Functions whose `to` is the token contract itself
_TOKEN_CALLS = ("transfer(", "transferFrom(", "approve(")


class AnalysisResult(BaseModel):
    """Everything the review screen needs for one pending transaction."""
    context: TransactionContext
    analysis: IntentAnalysis
    decoded: DecodedTransaction
    risk_level: RiskLevel


def token_address_for(decoded: DecodedTransaction) -> Optional[str]:
    """Token whose age / liquidity should be checked, if any."""
    function_name = decoded.function_name or ""
    if function_name.startswith(_TOKEN_CALLS):
        return decoded.to
    if decoded.kind == TransactionKind.SWAP:
        path = extract_token_addresses(decoded.parameters, function_name)
        if path:
            return path[-1]
    return None


class TransactionAnalyzer:
    """Runs the understanding pipeline for one pending transaction."""

    def __init__(
        self,
        decoder: Optional[TransactionDecoder] = None,
        explainer: Optional[IntentExplainer] = None,
        engine: Optional[RiskIndicatorEngine] = None,
    ):
        self.decoder = decoder or TransactionDecoder()
        self.explainer = explainer or IntentExplainer()
        self.engine = engine or RiskIndicatorEngine()

    async def analyze(self, request: RawTransactionRequest, tx_hash: Optional[str] = None) -> AnalysisResult:
        decoded = self.decoder.decode(request)
        analysis = self.explainer.explain(decoded)

        indicators = await self.engine.assess(
            request.to,
            token_address_for(decoded),
            format_ether(decoded.value),
            request.data,
        )

        timestamp = now_ms()
        context = assemble(tx_hash or request.hash, decoded, analysis, indicators, timestamp)
        risk_level = derive_risk_level(indicators)

        logger.info(
            "transaction_analyzed",
            kind=decoded.kind.value,
            confidence=analysis.confidence.value,
            indicators=len(indicators),
            risk_level=risk_level.value,
        )

        return AnalysisResult(
            context=context,
            analysis=analysis,
            decoded=decoded,
            risk_level=risk_level,
        )
