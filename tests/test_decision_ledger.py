"""
Tests for the decision ledger, risk level derivation and address hashing.
"""
from __future__ import annotations

import pytest

from txguard.core.enums import IndicatorType, RiskLevel, Severity, TransactionKind, UserChoice
from txguard.core.models import RiskIndicator, TransactionContext
from txguard.services.decision_ledger import (
    DecisionLedger,
    DecisionLogger,
    InvalidDecisionError,
    derive_risk_level,
    hash_user_address,
)

from conftest import EOA

TX_HASH = "0x" + "ab" * 32
ADDRESS_HASH = "0x" + "cd" * 32


def _indicator(severity):
    return RiskIndicator(type=IndicatorType.NEW_TOKEN, severity=severity, message="m", source="s")


def _context(hash=TX_HASH, warnings=0):
    indicators = [_indicator(Severity.WARNING) for _ in range(warnings)] + [_indicator(Severity.INFO)]
    return TransactionContext(
        hash=hash,
        kind=TransactionKind.TRANSFER,
        recipient=EOA,
        value="0.1",
        intent="Send 0.1 ETH to 0x742d...f44e",
        estimated_outcome="0.1 ETH will be transferred from your wallet",
        risk_indicators=indicators,
        timestamp=1700000000000,
    )


@pytest.mark.parametrize("warnings, expected", [
    (0, RiskLevel.LOW),
    (1, RiskLevel.MEDIUM),
    (2, RiskLevel.HIGH),
    (3, RiskLevel.HIGH),
])
def test_derive_risk_level(warnings, expected):
    assert derive_risk_level(_context(warnings=warnings).risk_indicators) == expected


def test_derive_risk_level_of_nothing():
    assert derive_risk_level(None) == RiskLevel.LOW
    assert derive_risk_level([]) == RiskLevel.LOW


def test_address_hash_is_salted_and_case_insensitive():
    digest = hash_user_address(EOA, "salt")
    assert digest.startswith("0x")
    assert len(digest) == 66
    assert digest == hash_user_address(EOA.lower(), "salt")
    assert digest != hash_user_address(EOA, "other-salt")
    assert EOA.lower()[2:] not in digest


def test_log_decision_updates_totals(ledger):
    ledger.log_decision(TX_HASH, ADDRESS_HASH, True, "low")
    ledger.log_decision("0x" + "01" * 32, ADDRESS_HASH, False, "high", is_demo=True)

    stats = ledger.get_stats()
    assert stats.total_decisions == 2
    assert stats.total_approvals == 1
    assert stats.total_rejections == 1
    assert stats.total_decisions == stats.total_approvals + stats.total_rejections
    assert stats.last_updated is not None
    assert ledger.get_decision_count() == 2


def test_recent_decisions_newest_first(ledger):
    for index in range(1, 4):
        ledger.log_decision(f"0x{index:064x}", ADDRESS_HASH, True, "medium")

    recent = ledger.get_recent_decisions(2)
    assert [entry.transaction_hash for entry in recent] == [f"0x{3:064x}", f"0x{2:064x}"]
    assert len(ledger.get_recent_decisions(100)) == 3


@pytest.mark.parametrize("count", [0, 101])
def test_recent_decisions_bounds(ledger, count):
    with pytest.raises(InvalidDecisionError, match="Count must be between 1 and 100"):
        ledger.get_recent_decisions(count)


@pytest.mark.parametrize("tx_hash", ["", "0x", "0x" + "0" * 64])
def test_empty_transaction_hash_rejected(ledger, tx_hash):
    with pytest.raises(InvalidDecisionError, match="Transaction hash cannot be empty"):
        ledger.log_decision(tx_hash, ADDRESS_HASH, True, "low")
    assert ledger.get_decision_count() == 0


def test_invalid_risk_level_rejected(ledger):
    with pytest.raises(InvalidDecisionError, match="Risk level must be 'low', 'medium', or 'high'"):
        ledger.log_decision(TX_HASH, ADDRESS_HASH, True, "critical")
    assert ledger.get_stats().total_decisions == 0


def test_decision_logger_records_hash_not_address(ledger):
    decision_logger = DecisionLogger(ledger, salt="salt")
    record = decision_logger.log_decision(_context(warnings=1), UserChoice.REJECTED, EOA)

    assert record.transaction_hash == TX_HASH
    assert record.user_choice == UserChoice.REJECTED
    assert record.risk_level == RiskLevel.MEDIUM
    assert record.address_hash == hash_user_address(EOA, "salt")
    assert record.is_demo is False

    entry = ledger.get_recent_decisions(1)[0]
    assert entry.approved is False
    assert entry.user_address_hash == record.address_hash
    assert EOA not in entry.model_dump_json()


def test_decision_logger_accepts_plain_string_choice(ledger):
    record = DecisionLogger(ledger).log_decision(_context(), "approved", EOA, is_demo=True)
    assert record.user_choice == UserChoice.APPROVED
    assert ledger.get_stats().total_approvals == 1
    assert ledger.get_recent_decisions(1)[0].is_demo is True


def test_decision_logger_rejects_bad_input(ledger):
    decision_logger = DecisionLogger(ledger)
    with pytest.raises(InvalidDecisionError, match="User choice must be 'approved' or 'rejected'"):
        decision_logger.log_decision(_context(), "maybe", EOA)
    with pytest.raises(InvalidDecisionError, match="User address is required"):
        decision_logger.log_decision(_context(), UserChoice.APPROVED, "")
    with pytest.raises(InvalidDecisionError, match="Transaction hash cannot be empty"):
        decision_logger.log_decision(_context(hash="0x"), UserChoice.APPROVED, EOA)
    assert ledger.get_decision_count() == 0
