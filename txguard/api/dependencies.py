"""
FastAPI dependencies.
Process-wide pipeline objects, built once and overridable in tests.
"""
from functools import lru_cache

from fastapi import Depends

from txguard.services.decision_ledger import DecisionLedger, DecisionLogger
from txguard.services.risk_indicators import RiskIndicatorEngine
from txguard.services.signature_registry import DEFAULT_REGISTRY
from txguard.services.transaction_analyzer import TransactionAnalyzer
from txguard.services.transaction_decoder import TransactionDecoder


@lru_cache()
def get_decoder() -> TransactionDecoder:
    return TransactionDecoder(DEFAULT_REGISTRY)


@lru_cache()
def get_risk_engine() -> RiskIndicatorEngine:
    return RiskIndicatorEngine()


@lru_cache()
def get_analyzer() -> TransactionAnalyzer:
    return TransactionAnalyzer(decoder=get_decoder(), engine=get_risk_engine())


@lru_cache()
def get_ledger() -> DecisionLedger:
    return DecisionLedger()


def get_decision_logger(ledger: DecisionLedger = Depends(get_ledger)) -> DecisionLogger:
    return DecisionLogger(ledger)
