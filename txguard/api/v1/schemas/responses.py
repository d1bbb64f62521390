"""
Response schemas for v1 API endpoints.
"""
from typing import List
from pydantic import BaseModel
from txguard.core.enums import RiskLevel
from txguard.core.models import (
    DecodedTransaction,
    IntentAnalysis,
    RiskIndicator,
    TransactionContext,
    LedgerEntry,
)


class ExplainTransactionResponse(BaseModel):
    """Response for /v1/transactions:explain"""
    decoded: DecodedTransaction
    analysis: IntentAnalysis
    explanation: str


class AnalyzeTransactionResponse(BaseModel):
    """Response for /v1/transactions:analyze"""
    context: TransactionContext
    analysis: IntentAnalysis
    decoded: DecodedTransaction
    risk_level: RiskLevel


class AssessRiskResponse(BaseModel):
    """Response for /v1/risk:assess"""
    indicators: List[RiskIndicator]
    risk_level: RiskLevel


class RecentDecisionsResponse(BaseModel):
    """Response for /v1/decisions/recent"""
    count: int
    decisions: List[LedgerEntry]
