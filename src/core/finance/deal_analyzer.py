# src/core/finance/deal_analyzer.py
"""
Automated flip screening: MAO backed out of a target profit, a 0..100 deal
score, creative structures for a price gap, and an ARV x rehab sensitivity grid.
"""

from __future__ import annotations

import logging

from src.core.finance.amortization import monthly_payment
from src.core.finance.cashflow import ratio_pct
from src.schemas.models import (
    DealAnalyzerInputs,
    DealAnalyzerResult,
    FinancingOption,
    SensitivityAnalysis,
    SensitivityScenario,
)

logger = logging.getLogger(__name__)

# Rule-of-thumb income: annual rent = 8% of ARV, 40% of it lost to expenses
ANNUAL_RENT_PCT_OF_ARV = 0.08
EXPENSE_RATIO = 0.40

ARV_FACTORS = (0.8, 0.9, 1.0, 1.1, 1.2)
REHAB_FACTORS = (0.5, 0.75, 1.0, 1.25, 1.5)
# A scenario is still viable at 70% of the desired return
VIABLE_ROI_SHARE = 0.7

SELLER_FINANCE_DOWN_PCT = 0.20
SELLER_FINANCE_RATE_PCT = 6.0
SELLER_FINANCE_TERM_YEARS = 5
LEASE_OPTION_FEE_PCT = 0.10
LEASE_OPTION_RENT_PCT_OF_ARV = 0.007
LEASE_OPTION_TERM_YEARS = 3
SUBJECT_TO_DOWN = 5_000.0
SUBJECT_TO_RATE_PCT = 4.5
SUBJECT_TO_TERM_YEARS = 25
SUBJECT_TO_PAYMENT = 650.0


def maximum_allowable_offer(inputs: DealAnalyzerInputs) -> float:
    """MAO = ARV - rehab - holding - closing - desired profit."""
    return inputs.arv - inputs.rehab_costs - inputs.holding_costs - inputs.closing_costs - inputs.desired_profit


def deal_score(potential_profit: float, coc_pct: float | None, desired_profit: float, desired_roi_pct: float) -> float:
    """
    Half profit, half return, each scored against its target:
        profit_score = min(100, profit / desired_profit * 50)
        roi_score    = min(50, coc / desired_roi * 50)
        score        = clamp(profit_score + roi_score, 0, 100)
    An undefined return scores 0.
    """
    profit_score = min(100.0, potential_profit / desired_profit * 50)
    roi_score = 0.0 if coc_pct is None else min(50.0, coc_pct / desired_roi_pct * 50)
    return max(0.0, min(100.0, profit_score + roi_score))


def financing_options(inputs: DealAnalyzerInputs, mao: float) -> list[FinancingOption]:
    """Seller financing, lease option and subject-to structures; empty when the MAO covers the price."""
    if inputs.purchase_price - mao <= 0:
        return []
    base = max(mao, 0.0)

    seller_down = base * SELLER_FINANCE_DOWN_PCT
    seller_pmt = monthly_payment(inputs.purchase_price - seller_down, SELLER_FINANCE_RATE_PCT, SELLER_FINANCE_TERM_YEARS)
    lease_fee = base * LEASE_OPTION_FEE_PCT
    lease_rent = inputs.arv * LEASE_OPTION_RENT_PCT_OF_ARV

    return [
        FinancingOption(
            strategy="Seller Financing",
            down_payment=seller_down,
            interest_rate_pct=SELLER_FINANCE_RATE_PCT,
            term_years=SELLER_FINANCE_TERM_YEARS,
            monthly_payment=seller_pmt,
            total_cost=seller_pmt * SELLER_FINANCE_TERM_YEARS * 12 + seller_down,
            benefits=[
                "Lower upfront cash needed",
                "No bank qualifying required",
                "Potentially lower interest rates",
                "Flexible terms negotiable with seller",
            ],
        ),
        FinancingOption(
            strategy="Lease Option",
            down_payment=lease_fee,
            interest_rate_pct=0.0,
            term_years=LEASE_OPTION_TERM_YEARS,
            monthly_payment=lease_rent,
            total_cost=lease_rent * LEASE_OPTION_TERM_YEARS * 12 + lease_fee,
            benefits=[
                "Minimal upfront investment",
                "Time to arrange permanent financing",
                "Lock in purchase price today",
                "Generate cash flow while securing future equity",
            ],
        ),
        FinancingOption(
            strategy="Subject-To",
            down_payment=SUBJECT_TO_DOWN,
            interest_rate_pct=SUBJECT_TO_RATE_PCT,
            term_years=SUBJECT_TO_TERM_YEARS,
            monthly_payment=SUBJECT_TO_PAYMENT,
            total_cost=SUBJECT_TO_PAYMENT * SUBJECT_TO_TERM_YEARS * 12 + SUBJECT_TO_DOWN,
            benefits=[
                "Take over existing financing",
                "No loan qualification needed",
                "Close quickly",
                "Usually lower interest rate than new loans",
            ],
        ),
    ]


def _risk_level(roi_pct: float | None, desired_roi_pct: float) -> str:
    if roi_pct is None:
        return "high"
    if roi_pct >= desired_roi_pct:
        return "low"
    if roi_pct >= desired_roi_pct * VIABLE_ROI_SHARE:
        return "medium"
    return "high"


def sensitivity_analysis(inputs: DealAnalyzerInputs) -> SensitivityAnalysis:
    """
    5 x 5 grid of ARV factors x rehab factors.

    Per cell:
        total_cost = purchase + rehab * rehab_factor + holding + closing
        profit     = arv * arv_factor - total_cost
        roi        = profit / total_cost * 100 (None when total_cost is 0)
    Risk is low at the desired return, medium at 70% of it, high below.
    """
    scenarios: list[SensitivityScenario] = []
    for arv_factor in ARV_FACTORS:
        for rehab_factor in REHAB_FACTORS:
            arv = inputs.arv * arv_factor
            rehab = inputs.rehab_costs * rehab_factor
            total_cost = inputs.purchase_price + rehab + inputs.holding_costs + inputs.closing_costs
            profit = arv - total_cost
            roi = ratio_pct(profit, total_cost)
            risk = _risk_level(roi, inputs.desired_roi_pct)
            scenarios.append(
                SensitivityScenario(
                    name=f"ARV {arv_factor * 100:.0f}%, Rehab {rehab_factor * 100:.0f}%",
                    arv_factor=arv_factor,
                    rehab_factor=rehab_factor,
                    arv=arv,
                    rehab_costs=rehab,
                    total_cost=total_cost,
                    profit=profit,
                    roi_pct=roi,
                    risk_level=risk,
                    is_viable=risk != "high",
                )
            )

    viable = sum(1 for s in scenarios if s.is_viable)
    rate = viable / len(scenarios) * 100
    insights: list[str] = []
    if rate < 30:
        insights.append("High risk: Less than 30% of scenarios are viable")
    elif rate < 50:
        insights.append("Moderate risk: Less than 50% of scenarios are viable")

    # Sensitivity: share of the downside scenarios that stop being viable
    low_arv = [s for s in scenarios if s.arv_factor < 1.0]
    high_rehab = [s for s in scenarios if s.rehab_factor > 1.0]
    if sum(1 for s in low_arv if not s.is_viable) / len(low_arv) > 0.6:
        insights.append("High ARV sensitivity: Deal is very sensitive to ARV variations")
    if sum(1 for s in high_rehab if not s.is_viable) / len(high_rehab) > 0.6:
        insights.append("High rehab cost sensitivity: Deal is very sensitive to rehab cost variations")

    return SensitivityAnalysis(
        scenarios=scenarios,
        viable_scenarios=viable,
        viability_rate_pct=rate,
        risk_insights=insights,
    )


def analyze_deal(inputs: DealAnalyzerInputs) -> DealAnalyzerResult:
    """
    Screen a flip against desired profit and return.

    total_investment = purchase + rehab + holding + closing
    potential_profit = ARV - total_investment
    cap rate uses rule-of-thumb rent (8% of ARV per year, 40% expenses) over total_investment.
    """
    mao = maximum_allowable_offer(inputs)
    total_investment = inputs.purchase_price + inputs.rehab_costs + inputs.holding_costs + inputs.closing_costs
    profit = inputs.arv - total_investment
    coc = ratio_pct(profit, total_investment)

    annual_rent = inputs.arv * ANNUAL_RENT_PCT_OF_ARV
    noi = annual_rent * (1 - EXPENSE_RATIO)
    score = deal_score(profit, coc, inputs.desired_profit, inputs.desired_roi_pct)
    logger.debug("deal analyzer: mao=%.2f profit=%.2f coc=%s score=%.1f", mao, profit, coc, score)

    return DealAnalyzerResult(
        maximum_allowable_offer=mao,
        potential_profit=profit,
        total_investment=total_investment,
        cash_on_cash_return_pct=coc,
        estimated_annual_rent=annual_rent,
        cap_rate_pct=ratio_pct(noi, total_investment),
        is_viable=mao >= inputs.purchase_price,
        meets_criteria=coc is not None and coc >= inputs.desired_roi_pct,
        deal_score=score,
        price_gap=max(inputs.purchase_price - mao, 0.0),
        financing_options=financing_options(inputs, mao),
        sensitivity=sensitivity_analysis(inputs),
    )
