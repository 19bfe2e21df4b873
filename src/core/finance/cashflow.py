# src/core/finance/cashflow.py

from __future__ import annotations

from src.schemas.models import CashFlowInputs, CashFlowResult, SellerProfit


def ratio_pct(numerator: float, denominator: float) -> float | None:
    """numerator / denominator * 100, or None when the denominator is 0 (undefined)."""
    if denominator == 0:
        return None
    return numerator / denominator * 100


def cash_flow(revenue: float, expenses: float, debt_service: float, cash_invested: float) -> CashFlowResult:
    """
    Monthly/annual cash flow and cash-on-cash return.

    Args:
        revenue: Monthly revenue.
        expenses: Monthly operating expenses.
        debt_service: Monthly loan payment.
        cash_invested: Total cash invested.

    Returns:
        CashFlowResult; cash_on_cash_return_pct is None when cash_invested == 0.
    """
    monthly = revenue - expenses - debt_service
    annual = monthly * 12
    return CashFlowResult(
        monthly_cash_flow=monthly,
        annual_cash_flow=annual,
        cash_on_cash_return_pct=ratio_pct(annual, cash_invested),
    )


def cash_flow_from(inputs: CashFlowInputs) -> CashFlowResult:
    return cash_flow(
        inputs.monthly_revenue,
        inputs.monthly_expenses,
        inputs.monthly_debt_service,
        inputs.total_cash_invested,
    )


def seller_profit(listed_price: float, offer_price: float) -> SellerProfit:
    """How far the offer sits below the listed price (negative when above)."""
    amount = listed_price - offer_price
    return SellerProfit(amount=amount, percentage=ratio_pct(amount, listed_price))
