# src/core/finance/multifamily.py

from __future__ import annotations

from src.core.finance.amortization import monthly_payment
from src.core.finance.cashflow import ratio_pct
from src.schemas.models import MultiFamilyInputs, MultiFamilyResult


def _safe_div(numerator: float, denominator: float) -> float | None:
    if denominator == 0:
        return None
    return numerator / denominator


def analyze_multifamily(inputs: MultiFamilyInputs) -> MultiFamilyResult:
    """
    Apartment / multifamily underwriting.

    Income:
        monthly gross = units * average rent + other income
        EGI (annual)  = annual gross * (1 - vacancy%)
    Expenses (annual):
        (management% + repairs% + capex%) of EGI + property tax + insurance + utilities
    Debt:
        loan = price * (1 - down%), amortized monthly over loan_term_years
    Returns:
        cash-on-cash on (down payment + closing costs), cap rate = NOI / price,
        1% rule (monthly gross / price >= 1%), GRM = price / annual gross,
        DSCR = NOI / annual debt service. Undefined ratios are None.
    """
    monthly_gross = inputs.number_of_units * inputs.average_rent + inputs.other_income
    annual_gross = monthly_gross * 12
    egi = annual_gross * (1 - inputs.vacancy_pct / 100)

    variable_pct = inputs.management_pct + inputs.repairs_pct + inputs.capex_pct
    annual_expenses = egi * variable_pct / 100 + inputs.property_tax + inputs.insurance + inputs.utilities
    annual_noi = egi - annual_expenses

    loan = inputs.purchase_price * (1 - inputs.down_payment_pct / 100)
    payment = monthly_payment(loan, inputs.interest_rate_pct, inputs.loan_term_years)
    annual_debt = payment * 12

    monthly_cf = annual_noi / 12 - payment
    annual_cf = monthly_cf * 12
    total_investment = inputs.purchase_price * inputs.down_payment_pct / 100 + inputs.closing_costs

    one_pct = inputs.purchase_price > 0 and monthly_gross / inputs.purchase_price >= 0.01

    return MultiFamilyResult(
        monthly_gross_income=monthly_gross,
        annual_gross_income=annual_gross,
        effective_gross_income=egi,
        monthly_expenses=annual_expenses / 12,
        annual_expenses=annual_expenses,
        monthly_noi=annual_noi / 12,
        annual_noi=annual_noi,
        monthly_mortgage_payment=payment,
        annual_mortgage_payment=annual_debt,
        monthly_cash_flow=monthly_cf,
        annual_cash_flow=annual_cf,
        cash_on_cash_return_pct=ratio_pct(annual_cf, total_investment),
        cap_rate_pct=ratio_pct(annual_noi, inputs.purchase_price),
        total_investment=total_investment,
        one_percent_rule=one_pct,
        gross_rent_multiplier=_safe_div(inputs.purchase_price, annual_gross),
        dscr=_safe_div(annual_noi, annual_debt),
    )
