"""
MoneyFlow Core: FastAPI application entry point.

Configures the app, middleware, and registers all API routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moneyflow.config import settings
from moneyflow.api import fees, limits, profiles, roles

app = FastAPI(
    title=settings.APP_NAME,
    description="Fees, commissions, limits and cached profiles for agent-based mobile money.",
    version="0.1.0",
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers ---
app.include_router(fees.router, prefix="/api/v1", tags=["Fees"])
app.include_router(limits.router, prefix="/api/v1/limits", tags=["Limits"])
app.include_router(profiles.router, prefix="/api/v1/profiles", tags=["Profiles"])
app.include_router(roles.router, prefix="/api/v1/roles", tags=["Roles"])


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": "0.1.0",
    }
