# src/core/finance/offers.py
"""
Creative offer structures for one property: subject-to, lease option and owner finance.
"""

from __future__ import annotations

import logging

from src.core.finance.amortization import monthly_payment, periodic_schedule
from src.core.finance.cashflow import ratio_pct
from src.schemas.models import (
    CreativeOfferComparison,
    CreativeOfferInputs,
    LeaseOptionOffer,
    OwnerFinanceOffer,
    SubjectToOffer,
)

logger = logging.getLogger(__name__)

# Rule-of-thumb monthly rent for a subject-to rental: 0.8% of ARV
SUBJECT_TO_RENT_PCT_OF_ARV = 0.008


def subject_to_offer(inputs: CreativeOfferInputs) -> SubjectToOffer:
    """
    Take title subject to the existing loan and rent the property out.

    initial_investment = repairs + closing
    monthly_cash_flow  = 0.8% of ARV - existing payment - holding / 12
    equity_capture     = ARV - existing balance - repairs
    exit_profit        = equity_capture - selling costs
    """
    rent = inputs.arv * SUBJECT_TO_RENT_PCT_OF_ARV
    initial = inputs.repair_costs + inputs.closing_costs
    monthly = rent - inputs.existing_monthly_payment - inputs.holding_costs / 12
    equity = inputs.arv - inputs.existing_loan_balance - inputs.repair_costs
    return SubjectToOffer(
        initial_investment=initial,
        estimated_rent=rent,
        monthly_cash_flow=monthly,
        annual_cash_flow=monthly * 12,
        equity_capture=equity,
        roi_pct=ratio_pct(monthly * 12, initial),
        exit_profit=equity - inputs.selling_costs,
    )


def lease_option_offer(inputs: CreativeOfferInputs) -> LeaseOptionOffer:
    """
    Buy, then lease to a tenant-buyer who holds an option at option_purchase_price (ARV when 0).

    Rent credits (rent_credit_pct of every payment) come off the strike price at exercise.
    """
    strike = inputs.option_purchase_price or inputs.arv
    monthly = inputs.monthly_rent - inputs.holding_costs / 12
    collected = inputs.monthly_rent * inputs.lease_term_months
    credits = inputs.monthly_rent * inputs.rent_credit_pct / 100 * inputs.lease_term_months
    return LeaseOptionOffer(
        initial_investment=inputs.option_fee + inputs.repair_costs,
        monthly_cash_flow=monthly,
        annual_cash_flow=monthly * 12,
        total_rent_collected=collected,
        total_rent_credits=credits,
        option_purchase_price=strike,
        exit_profit=strike - inputs.purchase_price - credits - inputs.selling_costs,
    )


def owner_finance_offer(inputs: CreativeOfferInputs) -> OwnerFinanceOffer:
    """
    Sell with owner financing and earn the interest.

    With 0 < balloon_term_years < loan_term_years the note is called at the balloon:
    total interest runs to that month and the remaining balance is the balloon.
    Otherwise interest is counted over the full term and there is no balloon.
    """
    down = inputs.purchase_price * inputs.down_payment_pct / 100
    loan = inputs.purchase_price - down
    pmt = monthly_payment(loan, inputs.interest_rate_pct, inputs.loan_term_years)

    if 0 < inputs.balloon_term_years < inputs.loan_term_years:
        last = periodic_schedule(loan, inputs.interest_rate_pct, inputs.loan_term_years, inputs.balloon_term_years)[-1]
        total_interest, balloon = last.total_interest, last.balance
    else:
        total_interest, balloon = pmt * inputs.loan_term_years * 12 - loan, 0.0

    return OwnerFinanceOffer(
        down_payment=down,
        loan_amount=loan,
        monthly_payment=pmt,
        total_interest=total_interest,
        balloon_amount=balloon,
        equity_capture=inputs.arv - inputs.purchase_price - inputs.repair_costs,
        interest_roi_pct=ratio_pct(total_interest, down),
    )


def compare_offers(inputs: CreativeOfferInputs) -> CreativeOfferComparison:
    """All three structures side by side."""
    comparison = CreativeOfferComparison(
        subject_to=subject_to_offer(inputs),
        lease_option=lease_option_offer(inputs),
        owner_finance=owner_finance_offer(inputs),
    )
    logger.debug(
        "creative offers: subject-to cf=%.2f lease-option exit=%.2f owner-finance interest=%.2f",
        comparison.subject_to.monthly_cash_flow,
        comparison.lease_option.exit_profit,
        comparison.owner_finance.total_interest,
    )
    return comparison
