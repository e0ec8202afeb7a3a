"""Health check endpoints including AI and payment configuration status."""

from fastapi import APIRouter, Depends

from contract_obligation.config import settings
from contract_obligation.services.results_store import ResultStore, get_result_store

router = APIRouter()


@router.get("")
async def health():
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/config")
async def config_health(store: ResultStore = Depends(get_result_store)):
    """Report which external integrations are configured, without exposing keys."""
    return {
        "status": "healthy",
        "anthropic_configured": bool(settings.anthropic_api_key),
        "paystack_configured": bool(settings.paystack_secret_key),
        "stored_results": len(store.entries()),
    }
