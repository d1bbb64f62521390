"""
Pydantic models for the transaction understanding pipeline.
Raw request -> decoded transaction -> intent analysis / risk indicators -> context.
"""
from typing import Optional, List, Any, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .enums import (
    TransactionKind,
    IndicatorType,
    Severity,
    Confidence,
    RiskLevel,
    UserChoice,
    ErrorCode,
)


class StructuredError(BaseModel):
    """Structured error returned by a data-source call instead of raising."""
    code: ErrorCode
    message: str
    source: Optional[str] = Field(None, description="Which provider/service failed")
    retryable: bool = Field(False, description="Whether the caller could retry")


class RawTransactionRequest(BaseModel):
    """Transaction request as handed over by the wallet (eth_sendTransaction params)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: str = ""
    value: str = "0x0"
    data: str = "0x"
    from_address: Optional[str] = Field(None, alias="from")
    gas: Optional[str] = None
    gas_price: Optional[str] = Field(None, alias="gasPrice")
    hash: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def normalize_value(cls, value: Union[str, int, None]) -> str:
        """Accept a hex quantity or a non-negative int; store as hex."""
        if value is None or value == "":
            return "0x0"
        if isinstance(value, int):
            if value < 0:
                raise ValueError("value must be non-negative")
            return hex(value)
        text = str(value).strip()
        digits = text[2:] if text.lower().startswith("0x") else text
        if digits == "":
            return "0x0"
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"value is not a hex quantity: {value!r}")
        return "0x" + digits.lower()

    @field_validator("data", mode="before")
    @classmethod
    def normalize_data(cls, data: Optional[str]) -> str:
        if not data:
            return "0x"
        return str(data)


class DecodedTransaction(BaseModel):
    """Typed view of a raw request. `value` is a decimal string in wei."""
    model_config = ConfigDict(frozen=True)

    to: str
    value: str
    data: str
    kind: TransactionKind
    selector: Optional[str] = None
    function_name: Optional[str] = None
    parameters: Optional[List[Any]] = None


class IntentAnalysis(BaseModel):
    """Plain-language explanation of a decoded transaction."""
    model_config = ConfigDict(frozen=True)

    intent: str
    estimated_outcome: str
    confidence: Confidence
    details: List[str] = Field(default_factory=list)


class RiskIndicator(BaseModel):
    """One discrete risk signal. Never a safety guarantee."""
    model_config = ConfigDict(frozen=True)

    type: IndicatorType
    severity: Severity
    message: str
    source: str


class TransactionContext(BaseModel):
    """Immutable artifact handed to the review UI and, after a decision, to the ledger."""
    model_config = ConfigDict(frozen=True)

    hash: str
    kind: TransactionKind
    recipient: str
    value: str  # ETH, decimal string
    intent: str
    estimated_outcome: str
    risk_indicators: List[RiskIndicator] = Field(default_factory=list)
    timestamp: int  # milliseconds since epoch


class DecisionRecord(BaseModel):
    """User decision as recorded after review."""
    model_config = ConfigDict(frozen=True)

    transaction_hash: str
    user_choice: UserChoice
    risk_level: RiskLevel
    timestamp: int
    address_hash: str
    is_demo: bool = False


class LedgerEntry(BaseModel):
    """Row stored by the decision ledger. Identity is only the address hash."""
    model_config = ConfigDict(frozen=True)

    transaction_hash: str
    user_address_hash: str
    approved: bool
    risk_level: RiskLevel
    is_demo: bool = False
    timestamp: int  # seconds since epoch


class DecisionStats(BaseModel):
    """Running totals kept by the ledger."""
    total_decisions: int = 0
    total_approvals: int = 0
    total_rejections: int = 0
    last_updated: Optional[datetime] = None


class DemoScenario(BaseModel):
    """Synthetic transaction used for walkthroughs."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: str
    transaction: TransactionContext
    expected_user_action: Optional[str] = None
    demo_notes: List[str] = Field(default_factory=list)
