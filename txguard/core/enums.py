"""
Core enums and types for the decision firewall.
Defines transaction kinds, indicator types and the small closed value sets.
"""
from enum import Enum


class TransactionKind(str, Enum):
    """Coarse classification of a pending transaction."""
    TRANSFER = "transfer"
    SWAP = "swap"
    APPROVAL = "approval"
    LIQUIDITY = "liquidity"
    UNKNOWN = "unknown"


class IndicatorType(str, Enum):
    """Risk signal categories."""
    NEW_TOKEN = "new_token"
    UNVERIFIED_CONTRACT = "unverified_contract"
    NO_DEX_POOL = "no_dex_pool"
    HIGH_VALUE = "high_value"


class Severity(str, Enum):
    """Indicator severity. There is deliberately no 'safe' level."""
    INFO = "info"
    WARNING = "warning"


class Confidence(str, Enum):
    """How sure the explainer is about its interpretation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    """Aggregate risk level recorded with a decision."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserChoice(str, Enum):
    """Binary decision made by the wallet user."""
    APPROVED = "approved"
    REJECTED = "rejected"


class ScenarioCategory(str, Enum):
    """Demo scenario grouping."""
    SAFE = "safe"
    RISKY = "risky"
    COMPLEX = "complex"


class ErrorCode(str, Enum):
    """Standardized data-source error codes."""
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    MISSING_API_KEY = "MISSING_API_KEY"
    NOT_FOUND = "NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
