"""Volume pricing endpoint."""

from fastapi import APIRouter, HTTPException, Query

from contract_obligation.config import settings
from contract_obligation.services.pricing import PRICING_TIERS, pricing_breakdown

router = APIRouter()


@router.get("")
async def get_pricing(contracts: int = Query(1)):
    """Price a batch of contracts, with the tier table for display."""
    try:
        breakdown = pricing_breakdown(contracts)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return {
        **breakdown,
        "currency": settings.payment_currency,
        "single_contract_amount": settings.payment_amount,
        "tiers": [
            {
                "min_contracts": t.min_contracts,
                "max_contracts": t.max_contracts,
                "price_per_contract": t.price_per_contract,
                "description": t.description,
            }
            for t in PRICING_TIERS
        ],
    }
