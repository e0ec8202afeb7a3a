"""Volume pricing for contract analysis."""

from dataclasses import dataclass

from contract_obligation.config import settings


@dataclass(frozen=True)
class PricingTier:
    min_contracts: int
    max_contracts: int | None
    price_per_contract: int
    description: str


@dataclass(frozen=True)
class PricingCalculation:
    contract_count: int
    price_per_contract: int
    total_price: int
    savings: int
    tier: PricingTier


# Tiers are in USD and ordered by contract count
PRICING_TIERS = [
    PricingTier(min_contracts=1, max_contracts=4, price_per_contract=5, description="Standard Rate"),
    PricingTier(min_contracts=5, max_contracts=9, price_per_contract=4, description="Volume Discount"),
    PricingTier(min_contracts=10, max_contracts=None, price_per_contract=3, description="Bulk Discount"),
]


def calculate_pricing(contract_count: int) -> PricingCalculation:
    """
    Price a batch of contracts.

    Raises:
        ValueError: contract_count is not positive
    """
    if contract_count <= 0:
        raise ValueError("Contract count must be greater than 0")

    tier = next(
        (
            t
            for t in PRICING_TIERS
            if contract_count >= t.min_contracts
            and (t.max_contracts is None or contract_count <= t.max_contracts)
        ),
        None,
    )
    if tier is None:
        raise ValueError(f"No pricing tier found for contract count: {contract_count}")

    total_price = contract_count * tier.price_per_contract
    standard_price = contract_count * PRICING_TIERS[0].price_per_contract

    return PricingCalculation(
        contract_count=contract_count,
        price_per_contract=tier.price_per_contract,
        total_price=total_price,
        savings=standard_price - total_price,
        tier=tier,
    )


def convert_to_zar(usd_amount: float) -> int:
    """Convert a USD price to whole South African Rand."""
    return round(usd_amount * settings.usd_to_zar_rate)


def pricing_summary(contract_count: int) -> str:
    """Human-readable price line, e.g. "$40 for 10 contracts ($4 each)"."""
    pricing = calculate_pricing(contract_count)

    if contract_count == 1:
        return f"${pricing.total_price} for {contract_count} contract"

    if pricing.savings > 0:
        return (
            f"${pricing.total_price} for {contract_count} contracts "
            f"(${pricing.price_per_contract} each - Save ${pricing.savings}!)"
        )

    return (
        f"${pricing.total_price} for {contract_count} contracts "
        f"(${pricing.price_per_contract} each)"
    )


def pricing_breakdown(contract_count: int) -> dict:
    """Detailed pricing for the UI."""
    pricing = calculate_pricing(contract_count)
    return {
        "contract_count": pricing.contract_count,
        "price_per_contract": pricing.price_per_contract,
        "total_price": pricing.total_price,
        "total_price_zar": convert_to_zar(pricing.total_price),
        "savings": pricing.savings,
        "tier_description": pricing.tier.description,
        "has_savings": pricing.savings > 0,
        "summary": pricing_summary(contract_count),
    }
