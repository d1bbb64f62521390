"""
Transaction endpoints - decode, explain, analyze and risk assessment.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from txguard.api.dependencies import get_analyzer, get_decoder, get_risk_engine
from txguard.api.v1.schemas.requests import AnalyzeTransactionRequest, AssessRiskRequest
from txguard.api.v1.schemas.responses import (
    AnalyzeTransactionResponse,
    AssessRiskResponse,
    ExplainTransactionResponse,
)
from txguard.core.models import DecodedTransaction, RawTransactionRequest
from txguard.services.decision_ledger import derive_risk_level
from txguard.services.intent_explainer import explain, generate_explanation
from txguard.services.risk_indicators import RiskIndicatorEngine
from txguard.services.transaction_analyzer import TransactionAnalyzer
from txguard.services.transaction_decoder import InvalidTransactionError, TransactionDecoder

router = APIRouter()


def _decode_or_400(decoder: TransactionDecoder, transaction: RawTransactionRequest) -> DecodedTransaction:
    try:
        return decoder.decode(transaction)
    except InvalidTransactionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/transactions:decode", response_model=DecodedTransaction)
async def decode_transaction(
    transaction: RawTransactionRequest,
    decoder: TransactionDecoder = Depends(get_decoder),
):
    """Classify a raw transaction request and decode known call data."""
    return _decode_or_400(decoder, transaction)


@router.post("/transactions:explain", response_model=ExplainTransactionResponse)
async def explain_transaction(
    transaction: RawTransactionRequest,
    decoder: TransactionDecoder = Depends(get_decoder),
):
    """Decode and explain a transaction in plain language. No network calls."""
    decoded = _decode_or_400(decoder, transaction)
    return ExplainTransactionResponse(
        decoded=decoded,
        analysis=explain(decoded),
        explanation=generate_explanation(decoded),
    )


@router.post("/transactions:analyze", response_model=AnalyzeTransactionResponse)
async def analyze_transaction(
    request: AnalyzeTransactionRequest,
    analyzer: TransactionAnalyzer = Depends(get_analyzer),
):
    """
    **Full pre-signing review**

    Decodes the request, explains its intent, evaluates risk indicators and
    returns the assembled transaction context with a derived risk level.
    Indicators are informational; nothing is blocked.
    """
    try:
        result = await analyzer.analyze(request.transaction, request.hash)
    except InvalidTransactionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AnalyzeTransactionResponse(**result.model_dump())


@router.post("/risk:assess", response_model=AssessRiskResponse)
async def assess_risk(
    request: AssessRiskRequest,
    engine: RiskIndicatorEngine = Depends(get_risk_engine),
):
    """Run the risk indicator checks for a recipient / token / value / data tuple."""
    indicators = await engine.assess(
        request.recipient,
        request.token_address,
        request.value_eth,
        request.data,
    )
    return AssessRiskResponse(indicators=indicators, risk_level=derive_risk_level(indicators))
