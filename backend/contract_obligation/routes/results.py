"""Storage and retrieval of extraction results that sit behind the paywall."""

import json
import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from contract_obligation.exceptions import PaymentGatewayError
from contract_obligation.middleware.rate_limit import rate_limit_unauthenticated
from contract_obligation.services.export import render_text_report
from contract_obligation.services.paystack import PaystackService, get_paystack_service
from contract_obligation.services.results_store import (
    ResultStore,
    StoredResult,
    get_result_store,
)
from contract_obligation.utils import (
    attachment_disposition,
    generate_reference,
    require_reference,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class StoreResultsRequest(BaseModel):
    obligations: list[dict] = Field(default_factory=list)
    extracted_text: str = ""
    filename: str = "unknown"
    page_info: str = ""


class StoreResultsResponse(BaseModel):
    success: bool
    reference: str


async def load_paid_result(
    reference: str,
    store: ResultStore,
    paystack: PaystackService,
) -> StoredResult:
    """
    Return a stored result that has been paid for.

    ``reference`` is either our internal reference or a Paystack transaction
    reference. For the latter, the transaction is verified and its metadata
    points at the stored entry, which is marked paid on the way.

    Raises:
        HTTPException: 400 if Paystack cannot verify the reference, 403 if
            payment is not complete, 404 if no stored result matches
    """
    result = store.get(reference)

    if result is None:
        try:
            transaction = await paystack.verify_transaction(reference)
        except PaymentGatewayError as e:
            logger.warning(f"Paystack verification failed for {reference}: {e.message}")
            raise HTTPException(
                status_code=400,
                detail="Unable to verify payment. Please try again or contact support.",
            ) from e

        if not transaction.is_successful:
            raise HTTPException(
                status_code=403,
                detail=(
                    f"Payment status: {transaction.status}. "
                    "Please complete payment to access results."
                ),
            )

        internal = transaction.internal_reference
        if internal is None:
            raise HTTPException(
                status_code=404,
                detail=(
                    "Payment verified but no associated data found. This may be a "
                    "test payment or the data may have expired."
                ),
            )

        logger.info(f"Resolved Paystack reference {reference} to {internal}")
        result = store.update_status(internal, "success")

    if result is None:
        raise HTTPException(
            status_code=404,
            detail="Results not found or expired. Data is only available for 1 hour after payment.",
        )

    if result.status != "success":
        raise HTTPException(status_code=403, detail="Payment not verified")

    return result


@router.post("", response_model=StoreResultsResponse)
@rate_limit_unauthenticated()
async def store_results(
    request: Request,
    response: Response,
    body: StoreResultsRequest,
    store: ResultStore = Depends(get_result_store),
):
    """Store extraction results as pending and return a reference for payment."""
    reference = generate_reference()
    store.put(
        reference,
        StoredResult(
            reference=reference,
            status="pending",
            obligations=body.obligations,
            extracted_text=body.extracted_text,
            filename=body.filename,
            page_info=body.page_info,
        ),
    )
    return StoreResultsResponse(success=True, reference=reference)


@router.get("")
@rate_limit_unauthenticated()
async def get_results(
    request: Request,
    response: Response,
    reference: str | None = Query(None),
    store: ResultStore = Depends(get_result_store),
    paystack: PaystackService = Depends(get_paystack_service),
):
    """Return paid-for results by reference."""
    reference = require_reference(reference)
    result = await load_paid_result(reference, store, paystack)
    return {"success": True, "data": result.to_dict()}


@router.get("/export")
@rate_limit_unauthenticated()
async def export_results(
    request: Request,
    response: Response,
    reference: str | None = Query(None),
    format: Literal["txt", "json"] = Query("txt"),
    store: ResultStore = Depends(get_result_store),
    paystack: PaystackService = Depends(get_paystack_service),
):
    """Download paid-for results as a plain-text report or JSON file."""
    reference = require_reference(reference)
    result = await load_paid_result(reference, store, paystack)

    stem = result.filename.rsplit(".", 1)[0] or "contract"
    if format == "json":
        content = json.dumps(result.to_dict(), indent=2)
        media_type = "application/json"
    else:
        content = render_text_report(result)
        media_type = "text/plain"

    return PlainTextResponse(
        content,
        media_type=media_type,
        headers={"Content-Disposition": attachment_disposition(f"{stem}-obligations.{format}")},
    )
