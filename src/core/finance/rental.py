# src/core/finance/rental.py

from __future__ import annotations

from src.core.finance.amortization import monthly_payment
from src.core.finance.cashflow import ratio_pct
from src.schemas.models import RentalComparison, RentalInputs, RentalMetrics, StrategyRecommendation

NIGHTS_PER_MONTH = 30
DOMINANCE_FACTOR = 1.2  # one strategy must beat the other by 20% to be preferred
MAX_SAFE_BREAK_EVEN_PCT = 70.0
MAX_SAFE_VACANCY_PCT = 5.0
MAX_SAFE_SEASONALITY_PCT = 20.0


def _financing(inputs: RentalInputs) -> tuple[float, float]:
    """Return (down payment amount, monthly mortgage)."""
    down = inputs.purchase_price * inputs.down_payment_pct / 100
    loan = inputs.purchase_price - down
    return down, monthly_payment(loan, inputs.interest_rate_pct, inputs.term_years)


def _fixed_monthly_costs(inputs: RentalInputs, mortgage: float) -> float:
    return mortgage + inputs.property_taxes / 12 + inputs.insurance / 12 + inputs.maintenance + inputs.utilities


def long_term_metrics(inputs: RentalInputs) -> RentalMetrics:
    """Traditional lease: rent less vacancy; management is a percent of scheduled rent."""
    down, mortgage = _financing(inputs)
    expenses = _fixed_monthly_costs(inputs, mortgage) + inputs.monthly_rent * inputs.management_pct / 100

    effective_income = inputs.monthly_rent * (1 - inputs.vacancy_pct / 100)
    monthly_cf = effective_income - expenses
    annual_cf = monthly_cf * 12
    annual_rent = inputs.monthly_rent * 12

    return RentalMetrics(
        strategy="long-term",
        monthly_mortgage=mortgage,
        total_monthly_expenses=expenses,
        monthly_cash_flow=monthly_cf,
        annual_cash_flow=annual_cf,
        cap_rate_pct=ratio_pct(annual_cf, inputs.purchase_price),
        roi_pct=ratio_pct(annual_cf, down),
        cash_on_cash_return_pct=ratio_pct(annual_cf, down),
        gross_rent_multiplier=inputs.purchase_price / annual_rent if annual_rent else None,
        vacancy_pct=inputs.vacancy_pct,
        annual_revenue=effective_income * 12,
    )


def short_term_metrics(inputs: RentalInputs) -> RentalMetrics:
    """
    Nightly rental over a 30-night month.

    Revenue = occupied nights * nightly rate * (1 + seasonal adjustment%), less platform fees
    and per-night cleaning. Break-even occupancy is the share of nights needed for the net
    per-night take to cover fixed monthly costs (None when each night loses money).
    """
    down, mortgage = _financing(inputs)
    expenses = _fixed_monthly_costs(inputs, mortgage)

    nights = NIGHTS_PER_MONTH * inputs.occupancy_pct / 100
    adr = inputs.nightly_rate * (1 + inputs.seasonal_adjustment_pct / 100)
    gross = nights * adr
    platform_fees = gross * inputs.platform_fee_pct / 100
    cleaning = nights * inputs.cleaning_fee
    monthly_cf = gross - platform_fees - cleaning - expenses
    annual_cf = monthly_cf * 12

    per_night = inputs.nightly_rate * (1 - inputs.platform_fee_pct / 100) - inputs.cleaning_fee
    break_even = expenses / per_night / NIGHTS_PER_MONTH * 100 if per_night > 0 else None

    return RentalMetrics(
        strategy="short-term",
        monthly_mortgage=mortgage,
        total_monthly_expenses=expenses,
        monthly_cash_flow=monthly_cf,
        annual_cash_flow=annual_cf,
        cap_rate_pct=ratio_pct(annual_cf, inputs.purchase_price),
        roi_pct=ratio_pct(annual_cf, down),
        cash_on_cash_return_pct=ratio_pct(annual_cf, down),
        break_even_occupancy_pct=break_even,
        annual_revenue=gross * 12,
        average_daily_rate=adr,
    )


def recommend_strategy(
    inputs: RentalInputs,
    long_term: RentalMetrics | None = None,
    short_term: RentalMetrics | None = None,
) -> StrategyRecommendation:
    """Prefer a strategy only when its annual cash flow beats the other by 20%; otherwise 'mixed'."""
    lt = long_term or long_term_metrics(inputs)
    st = short_term or short_term_metrics(inputs)

    reasoning: list[str] = []
    risks: list[str] = []

    if st.annual_cash_flow > lt.annual_cash_flow * DOMINANCE_FACTOR:
        strategy = "short-term"
        reasoning.append("Short-term rental shows significantly higher annual cash flow")
    elif lt.annual_cash_flow > st.annual_cash_flow * DOMINANCE_FACTOR:
        strategy = "long-term"
        reasoning.append("Long-term rental shows significantly higher annual cash flow")
    else:
        strategy = "mixed"
        reasoning.append("Both strategies show similar cash flow potential")

    if st.break_even_occupancy_pct is None or st.break_even_occupancy_pct > MAX_SAFE_BREAK_EVEN_PCT:
        risks.append("High break-even occupancy rate for short-term rental")
    if lt.vacancy_pct > MAX_SAFE_VACANCY_PCT:
        risks.append("High vacancy rate for long-term rental")
    if inputs.seasonal_adjustment_pct > MAX_SAFE_SEASONALITY_PCT:
        risks.append("Significant seasonal variations in short-term rental income")

    return StrategyRecommendation(strategy=strategy, reasoning=reasoning, risks=risks)


def compare_strategies(inputs: RentalInputs) -> RentalComparison:
    lt = long_term_metrics(inputs)
    st = short_term_metrics(inputs)
    return RentalComparison(long_term=lt, short_term=st, recommendation=recommend_strategy(inputs, lt, st))
