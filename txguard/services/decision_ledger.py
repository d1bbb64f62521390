"""
Decision ledger.

Append-only, in-process record of approve/reject decisions with running
totals. Mirrors the on-chain logging contract: it validates the transaction
hash and risk level, and never stores a raw user address, only its
salted keccak hash.
"""
import threading
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from eth_utils import keccak

from txguard.core.config import settings
from txguard.core.enums import RiskLevel, Severity, UserChoice
from txguard.core.logger import get_logger
from txguard.core.models import DecisionRecord, DecisionStats, LedgerEntry, RiskIndicator, TransactionContext

logger = get_logger(__name__)

_EMPTY_HASHES = {"", "0x", "0x" + "0" * 64}


class InvalidDecisionError(ValueError):
    """Rejected ledger call (empty hash, bad risk level, bad count)."""


def derive_risk_level(indicators: Optional[Iterable[RiskIndicator]]) -> RiskLevel:
    """high for two or more warnings, medium for one, low otherwise."""
    warning_count = sum(1 for indicator in indicators or [] if indicator.severity == Severity.WARNING)
    if warning_count >= 2:
        return RiskLevel.HIGH
    if warning_count == 1:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def hash_user_address(address: str, salt: Optional[str] = None) -> str:
    """One-way digest of a wallet address: keccak256(lower(address) + salt)."""
    salt = settings.address_hash_salt if salt is None else salt
    return "0x" + keccak(text=address.lower() + salt).hex()


class DecisionLedger:
    """Append-only decision log with aggregate totals."""

    def __init__(self, max_recent: Optional[int] = None):
        self.max_recent = max_recent or settings.recent_decisions_limit
        self._entries: List[LedgerEntry] = []
        self._stats = DecisionStats()
        self._lock = threading.Lock()

    def log_decision(
        self,
        transaction_hash: str,
        user_address_hash: str,
        approved: bool,
        risk_level: str,
        is_demo: bool = False,
    ) -> LedgerEntry:
        if not transaction_hash or transaction_hash.strip().lower() in _EMPTY_HASHES:
            raise InvalidDecisionError("Transaction hash cannot be empty")

        try:
            level = RiskLevel(risk_level)
        except ValueError:
            raise InvalidDecisionError("Risk level must be 'low', 'medium', or 'high'")

        if not user_address_hash:
            raise InvalidDecisionError("User address hash cannot be empty")

        entry = LedgerEntry(
            transaction_hash=transaction_hash,
            user_address_hash=user_address_hash,
            approved=bool(approved),
            risk_level=level,
            is_demo=is_demo,
            timestamp=int(time.time()),
        )

        with self._lock:
            self._entries.append(entry)
            self._stats = DecisionStats(
                total_decisions=self._stats.total_decisions + 1,
                total_approvals=self._stats.total_approvals + (1 if entry.approved else 0),
                total_rejections=self._stats.total_rejections + (0 if entry.approved else 1),
                last_updated=datetime.fromtimestamp(entry.timestamp, tz=timezone.utc),
            )

        logger.info(
            "decision_logged",
            approved=entry.approved,
            risk_level=level.value,
            is_demo=is_demo,
        )
        return entry

    def get_stats(self) -> DecisionStats:
        with self._lock:
            return self._stats.model_copy()

    def get_decision_count(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_recent_decisions(self, count: int) -> List[LedgerEntry]:
        """Most recent `count` entries, newest first."""
        if count < 1 or count > self.max_recent:
            raise InvalidDecisionError(f"Count must be between 1 and {self.max_recent}")
        with self._lock:
            return list(reversed(self._entries[-count:]))


class DecisionLogger:
    """Turns a reviewed TransactionContext plus the user's choice into a ledger entry."""

    def __init__(self, ledger: DecisionLedger, salt: Optional[str] = None):
        self.ledger = ledger
        self.salt = salt

    def log_decision(
        self,
        context: TransactionContext,
        user_choice: UserChoice,
        user_address: str,
        is_demo: bool = False,
    ) -> DecisionRecord:
        if not user_address:
            raise InvalidDecisionError("User address is required")

        try:
            choice = UserChoice(user_choice)
        except ValueError:
            raise InvalidDecisionError("User choice must be 'approved' or 'rejected'")

        risk_level = derive_risk_level(context.risk_indicators)
        address_hash = hash_user_address(user_address, self.salt)

        self.ledger.log_decision(
            transaction_hash=context.hash,
            user_address_hash=address_hash,
            approved=choice == UserChoice.APPROVED,
            risk_level=risk_level.value,
            is_demo=is_demo,
        )

        return DecisionRecord(
            transaction_hash=context.hash,
            user_choice=choice,
            risk_level=risk_level,
            timestamp=int(time.time() * 1000),
            address_hash=address_hash,
            is_demo=is_demo,
        )
