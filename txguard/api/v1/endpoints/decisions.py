"""
Decision ledger endpoints - log a reviewed decision and read aggregate totals.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from txguard.api.dependencies import get_decision_logger, get_ledger
from txguard.api.v1.schemas.requests import LogDecisionRequest
from txguard.api.v1.schemas.responses import RecentDecisionsResponse
from txguard.core.models import DecisionRecord, DecisionStats
from txguard.services.decision_ledger import DecisionLedger, DecisionLogger, InvalidDecisionError
from txguard.services.demo_scenarios import is_demo_transaction

router = APIRouter()


@router.post("/decisions", response_model=DecisionRecord, status_code=status.HTTP_201_CREATED)
async def log_decision(
    request: LogDecisionRequest,
    decision_logger: DecisionLogger = Depends(get_decision_logger),
):
    """Record the user's approve/reject choice for a reviewed transaction."""
    is_demo = request.is_demo
    if is_demo is None:
        is_demo = is_demo_transaction(request.context.hash)

    try:
        return decision_logger.log_decision(
            request.context,
            request.user_choice,
            request.user_address,
            is_demo=is_demo,
        )
    except InvalidDecisionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/decisions/stats", response_model=DecisionStats)
async def decision_stats(ledger: DecisionLedger = Depends(get_ledger)):
    return ledger.get_stats()


@router.get("/decisions/recent", response_model=RecentDecisionsResponse)
async def recent_decisions(
    count: int = Query(10),
    ledger: DecisionLedger = Depends(get_ledger),
):
    """Most recent decisions, newest first. Only address hashes are exposed."""
    try:
        decisions = ledger.get_recent_decisions(count)
    except InvalidDecisionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return RecentDecisionsResponse(count=len(decisions), decisions=decisions)
