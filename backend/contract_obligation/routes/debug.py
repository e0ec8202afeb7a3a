"""Diagnostics for result storage and payment lookups.

Only served when ``debug_endpoints_enabled`` is set.
"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Query

from contract_obligation.config import settings
from contract_obligation.exceptions import PaymentGatewayError
from contract_obligation.services.paystack import PaystackService, get_paystack_service
from contract_obligation.services.results_store import ResultStore, get_result_store
from contract_obligation.utils import require_reference

logger = logging.getLogger(__name__)


def require_debug_enabled() -> None:
    if not settings.debug_endpoints_enabled:
        raise HTTPException(status_code=403, detail="Debug endpoints are disabled")


router = APIRouter(dependencies=[Depends(require_debug_enabled)])


@router.get("/storage")
async def storage_summary(store: ResultStore = Depends(get_result_store)):
    """Summarize stored results without exposing obligations or text."""
    now = time.time()
    entries = [
        {
            "reference": r.reference,
            "status": r.status,
            "filename": r.filename,
            "obligations_count": len(r.obligations),
            "timestamp": r.timestamp,
            "age_minutes": round((now - r.timestamp) / 60),
        }
        for r in store.entries()
    ]
    return {"success": True, "total_entries": len(entries), "entries": entries}


@router.get("/payment")
async def payment_lookup(
    reference: str | None = Query(None),
    store: ResultStore = Depends(get_result_store),
    paystack: PaystackService = Depends(get_paystack_service),
):
    """Show how a reference resolves: directly, and through Paystack metadata."""
    reference = require_reference(reference)
    logger.info(f"Debug: looking up reference {reference}")

    direct = store.get(reference)

    transaction = None
    try:
        transaction = await paystack.verify_transaction(reference)
    except PaymentGatewayError as e:
        logger.info(f"Debug: Paystack verification failed: {e.message}")

    metadata_reference = transaction.internal_reference if transaction else None
    via_metadata = store.get(metadata_reference) if metadata_reference else None

    return {
        "debug": True,
        "search_reference": reference,
        "direct_lookup": "found" if direct else "not found",
        "paystack_verification": "success" if transaction else "failed",
        "paystack_status": transaction.status if transaction else None,
        "metadata_reference": metadata_reference,
        "metadata_lookup": "found" if via_metadata else "not found",
        "paystack_data": transaction.raw if transaction else None,
        "direct_data": direct.to_dict() if direct else None,
        "metadata_data": via_metadata.to_dict() if via_metadata else None,
    }
