"""Tests for volume pricing."""

import pytest

from contract_obligation.services.pricing import (
    calculate_pricing,
    convert_to_zar,
    pricing_breakdown,
    pricing_summary,
)


class TestCalculatePricing:
    """Tests for calculate_pricing."""

    @pytest.mark.parametrize(
        "count,per_contract,total,savings,tier",
        [
            (1, 5, 5, 0, "Standard Rate"),
            (4, 5, 20, 0, "Standard Rate"),
            (5, 4, 20, 5, "Volume Discount"),
            (9, 4, 36, 9, "Volume Discount"),
            (10, 3, 30, 20, "Bulk Discount"),
            (25, 3, 75, 50, "Bulk Discount"),
        ],
    )
    def test_tiers(self, count, per_contract, total, savings, tier):
        pricing = calculate_pricing(count)

        assert pricing.price_per_contract == per_contract
        assert pricing.total_price == total
        assert pricing.savings == savings
        assert pricing.tier.description == tier

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_raises(self, count):
        with pytest.raises(ValueError, match="greater than 0"):
            calculate_pricing(count)


class TestPricingText:
    """Tests for currency conversion and summaries."""

    def test_convert_to_zar(self):
        assert convert_to_zar(5) == 90
        assert convert_to_zar(30) == 540

    def test_single_contract_summary(self):
        assert pricing_summary(1) == "$5 for 1 contract"

    def test_summary_without_savings(self):
        assert pricing_summary(3) == "$15 for 3 contracts ($5 each)"

    def test_summary_with_savings(self):
        assert pricing_summary(10) == "$30 for 10 contracts ($3 each - Save $20!)"

    def test_breakdown(self):
        breakdown = pricing_breakdown(5)

        assert breakdown["total_price"] == 20
        assert breakdown["total_price_zar"] == 360
        assert breakdown["has_savings"] is True
        assert breakdown["tier_description"] == "Volume Discount"
        assert breakdown["summary"] == pricing_summary(5)
