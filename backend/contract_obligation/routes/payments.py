"""Paystack payment endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel, Field, field_validator

from contract_obligation.config import settings
from contract_obligation.exceptions import PaymentGatewayError
from contract_obligation.middleware.rate_limit import rate_limit_payment
from contract_obligation.services.paystack import PaystackService, get_paystack_service
from contract_obligation.services.posthog import track_event
from contract_obligation.services.results_store import ResultStore, get_result_store
from contract_obligation.utils import require_reference

logger = logging.getLogger(__name__)

router = APIRouter()


class InitializePaymentRequest(BaseModel):
    email: str
    amount: int = Field(default_factory=lambda: settings.payment_amount, gt=0)
    metadata: dict = Field(default_factory=dict)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("A valid email address is required")
        return v


@router.post("/initialize")
@rate_limit_payment()
async def initialize_payment(
    request: Request,
    response: Response,
    body: InitializePaymentRequest,
    paystack: PaystackService = Depends(get_paystack_service),
):
    """
    Start a Paystack transaction.

    ``metadata.reference`` should carry the internal results reference so the
    payment can be linked back to the stored obligations.
    """
    try:
        data = await paystack.initialize_transaction(
            email=body.email,
            amount=body.amount,
            metadata=body.metadata,
        )
    except PaymentGatewayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    track_event(
        body.metadata.get("reference") or body.email,
        "payment_initialized",
        {"amount": data["amount"], "currency": settings.payment_currency},
    )
    return {"success": True, "data": data}


@router.get("/verify")
@rate_limit_payment()
async def verify_payment(
    request: Request,
    response: Response,
    reference: str | None = Query(None),
    paystack: PaystackService = Depends(get_paystack_service),
    store: ResultStore = Depends(get_result_store),
):
    """Verify a Paystack transaction and mark the linked results as paid."""
    reference = require_reference(reference)

    try:
        transaction = await paystack.verify_transaction(reference)
    except PaymentGatewayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    internal = transaction.internal_reference
    if transaction.is_successful and internal:
        logger.info(f"Payment successful, updating status for reference: {internal}")
        store.update_status(internal, "success")
        track_event(internal, "payment_verified", {"amount": transaction.amount})
    else:
        logger.info(
            f"Payment not successful or no metadata reference: "
            f"status={transaction.status} metadata_reference={internal}"
        )

    return {"success": True, "data": transaction.raw}
