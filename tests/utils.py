# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from src.schemas.models import (
    CreativeFinancingInputs,
    CreativeOfferInputs,
    DealAnalyzerInputs,
    LeaseOptionInputs,
    MortgageInputs,
    MultiFamilyInputs,
    NovationInputs,
    RentalInputs,
    SavedDeal,
    SellerFinanceInputs,
    SyndicationInputs,
    WholesaleInputs,
)

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_START = date(2024, 1, 15)

# Canonical wholesale deal: ARV 250k, manual rehab 30k
# preferred = 165,000 - 30,000; MAO = 207,500 - 30,000; exit bracket 200k..300k -> 0.70
WHOLESALE_ARV = 250_000.0
WHOLESALE_REHAB = 30_000.0


# -----------------------------
# Input factories
# -----------------------------


def make_creative_inputs(**overrides: Any) -> CreativeFinancingInputs:
    """A seller-carry deal that passes every default criterion."""
    base: dict[str, Any] = dict(
        purchase_price=180_000.0,
        listed_price=200_000.0,
        down_payment=15_000.0,
        interest_rate_pct=3.0,
        term_years=30,
        balloon_years=7.0,
        rental_revenue=2_400.0,
        operating_expenses=400.0,
        buyer_entry_fee=0.0,
        closing_costs=0.0,
        interest_only=False,
        first_payment_date=DEFAULT_START,
    )
    base.update(overrides)
    return CreativeFinancingInputs(**base)


def make_mortgage_inputs(**overrides: Any) -> MortgageInputs:
    base: dict[str, Any] = dict(
        loan_amount=200_000.0,
        interest_rate_pct=6.0,
        term_years=30,
        down_payment=40_000.0,
        rental_revenue=2_000.0,
        operating_expenses={"taxes": 250.0, "insurance": 100.0, "maintenance": 150.0},
        closing_costs=5_000.0,
        first_payment_date=DEFAULT_START,
    )
    base.update(overrides)
    return MortgageInputs(**base)


def make_wholesale_inputs(**overrides: Any) -> WholesaleInputs:
    base: dict[str, Any] = dict(arv=WHOLESALE_ARV, rehab_cost=WHOLESALE_REHAB)
    base.update(overrides)
    return WholesaleInputs(**base)


def make_seller_finance_inputs(**overrides: Any) -> SellerFinanceInputs:
    base: dict[str, Any] = dict(
        purchase_price=200_000.0,
        down_payment_pct=10.0,
        interest_rate_pct=5.0,
        loan_term_years=30,
        balloon_term_years=5,
        monthly_rent=2_000.0,
        vacancy_pct=5.0,
        management_pct=8.0,
        property_taxes=2_400.0,
        insurance=1_200.0,
        maintenance_pct=5.0,
        seller_concessions=0.0,
        appreciation_pct=3.0,
        payment_frequency="monthly",
    )
    base.update(overrides)
    return SellerFinanceInputs(**base)


def make_multifamily_inputs(**overrides: Any) -> MultiFamilyInputs:
    base: dict[str, Any] = dict(
        purchase_price=1_000_000.0,
        number_of_units=10,
        average_rent=1_200.0,
        other_income=500.0,
        vacancy_pct=5.0,
        management_pct=8.0,
        repairs_pct=5.0,
        capex_pct=5.0,
        property_tax=12_000.0,
        insurance=6_000.0,
        utilities=4_800.0,
        down_payment_pct=25.0,
        interest_rate_pct=6.0,
        loan_term_years=30,
        closing_costs=20_000.0,
    )
    base.update(overrides)
    return MultiFamilyInputs(**base)


def make_rental_inputs(**overrides: Any) -> RentalInputs:
    return RentalInputs(**overrides)


def make_deal_analyzer_inputs(**overrides: Any) -> DealAnalyzerInputs:
    """The model defaults: MAO 177,500 covers the 150,000 price."""
    return DealAnalyzerInputs(**overrides)


def make_creative_offer_inputs(**overrides: Any) -> CreativeOfferInputs:
    base: dict[str, Any] = dict(
        purchase_price=150_000.0,
        arv=250_000.0,
        repair_costs=30_000.0,
        closing_costs=5_000.0,
        holding_costs=6_000.0,
        selling_costs=15_000.0,
        existing_loan_balance=120_000.0,
        existing_monthly_payment=900.0,
        option_fee=5_000.0,
        lease_term_months=24,
        monthly_rent=2_000.0,
        rent_credit_pct=20.0,
        down_payment_pct=10.0,
        interest_rate_pct=6.0,
        loan_term_years=15,
        balloon_term_years=5,
    )
    base.update(overrides)
    return CreativeOfferInputs(**base)


def make_lease_option_inputs(**overrides: Any) -> LeaseOptionInputs:
    base: dict[str, Any] = dict(
        property_value=300_000.0,
        option_fee=5_000.0,
        option_period_months=12,
        monthly_rent=2_000.0,
        purchase_price=250_000.0,
        down_payment=25_000.0,
        interest_rate_pct=6.0,
        loan_term_years=30,
    )
    base.update(overrides)
    return LeaseOptionInputs(**base)


def make_syndication_inputs(**overrides: Any) -> SyndicationInputs:
    base: dict[str, Any] = dict(
        property_value=5_000_000.0,
        total_units=50,
        average_rent=1_200.0,
        vacancy_pct=5.0,
        operating_expenses=200_000.0,
        management_fee_pct=3.0,
        gp_split_pct=20.0,
        lp_split_pct=80.0,
        investment_amount=1_500_000.0,
    )
    base.update(overrides)
    return SyndicationInputs(**base)


def make_novation_inputs(**overrides: Any) -> NovationInputs:
    base: dict[str, Any] = dict(
        original_loan_amount=250_000.0,
        current_balance=200_000.0,
        interest_rate_pct=7.0,
        remaining_term_months=300,
        new_interest_rate_pct=5.0,
        new_term_months=300,
        closing_costs=6_000.0,
    )
    base.update(overrides)
    return NovationInputs(**base)


# -----------------------------
# Saved deals
# -----------------------------


def make_saved_deal(
    *,
    deal_id: str = "deal-1",
    type: str = "creative",
    name: str = "Oak St",
    when: datetime | None = None,
    annual_cash_flow: float | None = 6_000.0,
    inputs: dict[str, Any] | None = None,
) -> SavedDeal:
    results: dict[str, Any] = {}
    if annual_cash_flow is not None:
        results["cash_flow"] = {"monthly_cash_flow": annual_cash_flow / 12, "annual_cash_flow": annual_cash_flow}
    return SavedDeal(
        id=deal_id,
        type=type,
        name=name,
        date=(when or datetime(2024, 1, 1, tzinfo=timezone.utc)).isoformat(),
        inputs=inputs if inputs is not None else {"purchase_price": 180_000.0, "interest_only": False},
        results=results,
    )
