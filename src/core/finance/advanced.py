# src/core/finance/advanced.py

from __future__ import annotations

from src.core.finance.amortization import monthly_payment, payment_for_months
from src.core.finance.cashflow import ratio_pct
from src.schemas.models import (
    LeaseOptionInputs,
    LeaseOptionResult,
    NovationInputs,
    NovationResult,
    SyndicationInputs,
    SyndicationResult,
)


def analyze_lease_option(inputs: LeaseOptionInputs) -> LeaseOptionResult:
    """
    Buyer's view of a lease option.

    ROI = (property value - strike price) / (option fee + down payment) * 100, None with nothing invested.
    """
    loan = inputs.purchase_price - inputs.down_payment
    invested = inputs.option_fee + inputs.down_payment
    profit = inputs.property_value - inputs.purchase_price
    return LeaseOptionResult(
        loan_amount=loan,
        monthly_payment=monthly_payment(loan, inputs.interest_rate_pct, inputs.loan_term_years),
        total_option_payments=inputs.monthly_rent * inputs.option_period_months,
        potential_profit=profit,
        total_investment=invested,
        roi_pct=ratio_pct(profit, invested),
    )


def analyze_syndication(inputs: SyndicationInputs) -> SyndicationResult:
    """
    Annual NOI split between partners.

    GPI = units * rent * 12
    NOI = GPI - vacancy - operating expenses - management fee (vacancy and fee are % of GPI)
    LP cash-on-cash = NOI * lp_split / LP capital
    """
    gpi = inputs.total_units * inputs.average_rent * 12
    vacancy = gpi * inputs.vacancy_pct / 100
    fees = gpi * inputs.management_fee_pct / 100
    noi = gpi - vacancy - inputs.operating_expenses - fees
    lp_share = noi * inputs.lp_split_pct / 100
    return SyndicationResult(
        gross_potential_income=gpi,
        vacancy_loss=vacancy,
        management_fees=fees,
        noi=noi,
        cap_rate_pct=ratio_pct(noi, inputs.property_value),
        gp_share=noi * inputs.gp_split_pct / 100,
        lp_share=lp_share,
        cash_on_cash_return_pct=ratio_pct(lp_share, inputs.investment_amount),
    )


def analyze_novation(inputs: NovationInputs) -> NovationResult:
    """
    Current vs replacement payment on the current balance.

    total_savings = monthly savings * new term (months) - closing costs
    break_even    = closing costs / monthly savings; None unless the new loan is cheaper per month.
    """
    current = payment_for_months(inputs.current_balance, inputs.interest_rate_pct, inputs.remaining_term_months)
    new = payment_for_months(inputs.current_balance, inputs.new_interest_rate_pct, inputs.new_term_months)
    savings = current - new
    return NovationResult(
        current_monthly_payment=current,
        new_monthly_payment=new,
        monthly_savings=savings,
        total_savings=savings * inputs.new_term_months - inputs.closing_costs,
        break_even_months=inputs.closing_costs / savings if savings > 0 else None,
    )
