# src/core/finance/creative.py
"""
Creative financing, mortgage and seller-finance evaluations.

Each evaluation composes the payment, schedule, balloon, cash-flow and criteria
formulas into a single result record that callers render or persist.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from src.core.finance.amortization import (
    PERIODS_PER_YEAR,
    AmortizationRow,
    PeriodRow,
    balloon_balance,
    generate_schedule,
    interest_only_payment,
    monthly_payment,
    periodic_schedule,
    schedule_totals,
)
from src.core.finance.cashflow import cash_flow, ratio_pct, seller_profit
from src.core.finance.criteria import DEFAULT_THRESHOLDS, check_criteria
from src.schemas.models import (
    CashFlowResult,
    CreativeFinancingInputs,
    CriteriaThresholds,
    DealCriteria,
    MortgageInputs,
    SellerFinanceInputs,
    SellerProfit,
)

logger = logging.getLogger(__name__)

MORTGAGE_BALLOON_YEARS = (5, 6, 9, 10)

# =========================
# Result records
# =========================


class CreativeFinancingResult(BaseModel):
    loan_amount: float
    monthly_payment: float
    balloon_balance: float = Field(..., description="Balance due at the end of balloon_years.")
    seller_profit: SellerProfit
    cash_flow: CashFlowResult
    criteria: DealCriteria
    schedule: list[AmortizationRow] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class MortgageAnalysis(BaseModel):
    monthly_payment: float
    balloon_balances: dict[int, float] = Field(..., description="Balance at the end of years 5, 6, 9 and 10.")
    total_operating_expenses: float = Field(..., description="Sum of the monthly expense line items.")
    cash_flow: CashFlowResult
    total_paid: float
    total_interest: float
    schedule: list[AmortizationRow] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SellerFinanceResult(BaseModel):
    loan_amount: float
    periodic_payment: float
    total_periods: int
    total_interest: float = Field(..., description="Interest paid through the last scheduled period.")
    balloon_amount: float = Field(..., description="Balance at the balloon period; 0 with no balloon.")
    monthly_cash_flow: float
    annual_cash_flow: float
    cash_on_cash_return_pct: float | None
    property_value_at_balloon: float
    equity_after_balloon: float
    roi_pct: float | None
    schedule: list[PeriodRow] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


# =========================
# Evaluations
# =========================


def evaluate_creative_financing(
    inputs: CreativeFinancingInputs,
    thresholds: CriteriaThresholds = DEFAULT_THRESHOLDS,
) -> CreativeFinancingResult:
    """
    Seller-carry offer: payment, schedule, balloon, seller profit, cash flow and criteria.

    Cash invested = down payment + buyer entry fee + closing costs.
    """
    loan = inputs.purchase_price - inputs.down_payment
    if inputs.interest_only:
        payment = interest_only_payment(loan, inputs.interest_rate_pct)
    else:
        payment = monthly_payment(loan, inputs.interest_rate_pct, inputs.term_years)

    schedule = generate_schedule(
        loan,
        inputs.interest_rate_pct,
        inputs.term_years,
        inputs.first_payment_date,
        inputs.interest_only,
    )
    balloon = balloon_balance(
        loan,
        inputs.interest_rate_pct,
        inputs.term_years,
        inputs.balloon_years,
        inputs.interest_only,
    )
    cf = cash_flow(
        inputs.rental_revenue,
        inputs.operating_expenses,
        payment,
        inputs.down_payment + inputs.buyer_entry_fee + inputs.closing_costs,
    )
    criteria = check_criteria(
        cf.monthly_cash_flow,
        inputs.purchase_price,
        cf.cash_on_cash_return_pct,
        inputs.down_payment,
        inputs.interest_rate_pct,
        inputs.balloon_years,
        thresholds,
    )
    logger.debug("creative financing: loan=%.2f payment=%.2f passes=%s", loan, payment, criteria.passes_all)

    return CreativeFinancingResult(
        loan_amount=loan,
        monthly_payment=payment,
        balloon_balance=balloon,
        seller_profit=seller_profit(inputs.listed_price, inputs.purchase_price),
        cash_flow=cf,
        criteria=criteria,
        schedule=schedule,
    )


def analyze_mortgage(inputs: MortgageInputs) -> MortgageAnalysis:
    """Amortizing mortgage with balloon checkpoints and rental cash flow (cash invested = down + closing)."""
    payment = monthly_payment(inputs.loan_amount, inputs.interest_rate_pct, inputs.term_years)
    schedule = generate_schedule(inputs.loan_amount, inputs.interest_rate_pct, inputs.term_years, inputs.first_payment_date)
    balloons = {
        year: balloon_balance(inputs.loan_amount, inputs.interest_rate_pct, inputs.term_years, year)
        for year in MORTGAGE_BALLOON_YEARS
    }
    expenses = sum(inputs.operating_expenses.values())
    cf = cash_flow(inputs.rental_revenue, expenses, payment, inputs.down_payment + inputs.closing_costs)
    total_paid, total_interest, _ = schedule_totals(schedule)

    return MortgageAnalysis(
        monthly_payment=payment,
        balloon_balances=balloons,
        total_operating_expenses=expenses,
        cash_flow=cf,
        total_paid=total_paid,
        total_interest=total_interest,
        schedule=schedule,
    )


def analyze_seller_finance(inputs: SellerFinanceInputs) -> SellerFinanceResult:
    """
    Seller-financed purchase held to the balloon.

    - Loan = price - down payment - seller concessions.
    - Expenses = (management% + maintenance%) of effective gross income + taxes + insurance.
    - Annual debt service = periodic payment * periods per year.
    - ROI = (cash flow over the balloon term + equity gain) / cash invested.
    """
    down = inputs.purchase_price * inputs.down_payment_pct / 100
    loan = max(inputs.purchase_price - down - inputs.seller_concessions, 0.0)
    per_year = PERIODS_PER_YEAR[inputs.payment_frequency]

    rows = periodic_schedule(
        loan,
        inputs.interest_rate_pct,
        inputs.loan_term_years,
        inputs.balloon_term_years,
        inputs.payment_frequency,
    )
    payment = rows[0].payment if rows else 0.0
    total_interest = rows[-1].total_interest if rows else 0.0
    balloon_period = inputs.balloon_term_years * per_year
    balloon_amount = rows[balloon_period - 1].balance if 0 < balloon_period <= len(rows) else 0.0

    egi = inputs.monthly_rent * 12 * (1 - inputs.vacancy_pct / 100)
    expenses = egi * (inputs.management_pct + inputs.maintenance_pct) / 100 + inputs.property_taxes + inputs.insurance
    annual_cf = egi - expenses - payment * per_year

    invested = down + inputs.seller_concessions
    value_at_balloon = inputs.purchase_price * (1 + inputs.appreciation_pct / 100) ** inputs.balloon_term_years
    equity_after = value_at_balloon - balloon_amount
    total_return = annual_cf * inputs.balloon_term_years + (equity_after - invested)

    return SellerFinanceResult(
        loan_amount=loan,
        periodic_payment=payment,
        total_periods=inputs.loan_term_years * per_year,
        total_interest=total_interest,
        balloon_amount=balloon_amount,
        monthly_cash_flow=annual_cf / 12,
        annual_cash_flow=annual_cf,
        cash_on_cash_return_pct=ratio_pct(annual_cf, invested),
        property_value_at_balloon=value_at_balloon,
        equity_after_balloon=equity_after,
        roi_pct=ratio_pct(total_return, invested),
        schedule=rows,
    )
