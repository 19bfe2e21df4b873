# src/core/finance/__init__.py

from .advanced import analyze_lease_option, analyze_novation, analyze_syndication
from .amortization import (
    AmortizationRow,
    annual_summary,
    balloon_balance,
    generate_schedule,
    interest_only_payment,
    monthly_payment,
    payment_for_months,
    periodic_schedule,
    schedule_totals,
)
from .cashflow import cash_flow, seller_profit
from .creative import analyze_mortgage, analyze_seller_finance, evaluate_creative_financing
from .criteria import check_criteria
from .deal_analyzer import analyze_deal, sensitivity_analysis
from .multifamily import analyze_multifamily
from .offers import compare_offers, lease_option_offer, owner_finance_offer, subject_to_offer
from .rental import compare_strategies
from .tax import capital_gains, depreciation_schedule, tax_savings
from .wholesale import exit_percentage, wholesale_analysis

__all__ = [
    "AmortizationRow",
    "monthly_payment",
    "payment_for_months",
    "interest_only_payment",
    "generate_schedule",
    "balloon_balance",
    "periodic_schedule",
    "schedule_totals",
    "annual_summary",
    "cash_flow",
    "seller_profit",
    "check_criteria",
    "exit_percentage",
    "wholesale_analysis",
    "evaluate_creative_financing",
    "analyze_mortgage",
    "analyze_seller_finance",
    "analyze_multifamily",
    "compare_strategies",
    "depreciation_schedule",
    "capital_gains",
    "tax_savings",
    "analyze_deal",
    "sensitivity_analysis",
    "subject_to_offer",
    "lease_option_offer",
    "owner_finance_offer",
    "compare_offers",
    "analyze_lease_option",
    "analyze_syndication",
    "analyze_novation",
]
