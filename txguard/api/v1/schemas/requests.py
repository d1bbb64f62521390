"""
Request schemas for v1 API endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field
from txguard.core.enums import UserChoice
from txguard.core.models import RawTransactionRequest, TransactionContext


class AnalyzeTransactionRequest(BaseModel):
    """Request for /v1/transactions:analyze"""
    transaction: RawTransactionRequest
    hash: Optional[str] = Field(None, description="Transaction hash, if already known")


class AssessRiskRequest(BaseModel):
    """Request for /v1/risk:assess"""
    recipient: str = Field(..., min_length=1)
    token_address: Optional[str] = None
    value_eth: Optional[str] = Field(None, description="Native value in ETH, decimal string")
    data: str = Field("0x", description="Raw call data")


class LogDecisionRequest(BaseModel):
    """Request for /v1/decisions"""
    context: TransactionContext
    user_choice: UserChoice
    user_address: str = Field(..., min_length=1)
    is_demo: Optional[bool] = Field(None, description="Defaults to whether the hash belongs to a demo scenario")
