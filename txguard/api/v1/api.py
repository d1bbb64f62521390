"""
V1 API router - aggregates all v1 endpoints.
"""
from fastapi import APIRouter
from txguard.api.v1.endpoints import transactions, decisions, demo

api_router = APIRouter()

# Include all v1 endpoints
api_router.include_router(transactions.router, tags=["Transaction Understanding"])
api_router.include_router(decisions.router, tags=["Decision Ledger"])
api_router.include_router(demo.router, tags=["Demo Scenarios"])
