"""
FastAPI application main entry point.
Pre-signing transaction review: decode, explain, flag risk signals, log decisions.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from txguard.core.config import settings

# Import V1 API router
from txguard.api.v1.api import api_router as api_v1_router

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Explains what a pending wallet transaction does and surfaces simple risk signals. "
        "Informational only: it does not detect exploits or guarantee safety."
    ),
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include V1 API routes
app.include_router(api_v1_router, prefix="/v1")


@app.get("/")
async def root():
    """Health check and API info."""
    return {
        "status": "operational",
        "service": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "decode": "POST /v1/transactions:decode",
            "explain": "POST /v1/transactions:explain",
            "analyze": "POST /v1/transactions:analyze",
            "risk": "POST /v1/risk:assess",
            "decisions": "POST /v1/decisions",
            "demo": "GET /v1/demo/scenarios",
            "demo_presentation": "GET /v1/demo/scenarios:presentation"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "explorer_configured": settings.has_explorer_api_key(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
