# src/core/finance/criteria.py

from __future__ import annotations

from src.schemas.models import CriteriaThresholds, DealCriteria

DEFAULT_THRESHOLDS = CriteriaThresholds()


def _down_payment_ok(down_payment: float, purchase_price: float, max_ratio: float) -> bool:
    # No price means the ratio is undefined; treat as a failed check.
    if purchase_price <= 0:
        return False
    return down_payment / purchase_price <= max_ratio


def check_criteria(
    monthly_cash_flow: float,
    purchase_price: float,
    cash_on_cash_return_pct: float | None,
    down_payment: float,
    interest_rate_pct: float,
    balloon_years: float,
    thresholds: CriteriaThresholds = DEFAULT_THRESHOLDS,
) -> DealCriteria:
    """
    Screen a creative-financing deal against policy thresholds.

    Rules (defaults in parentheses):
      - monthly cash flow >= min_monthly_cash_flow ($200)
      - purchase price <= max_purchase_price ($500,000)
      - cash-on-cash % >= min_cash_on_cash_pct (13%); an undefined CoC fails
      - down payment / price <= max_down_payment_ratio (0.15, inclusive)
      - interest rate % <= max_interest_rate_pct (4%)
      - balloon years >= min_balloon_years (5)
    """
    t = thresholds
    return DealCriteria(
        meets_minimum_cash_flow=monthly_cash_flow >= t.min_monthly_cash_flow,
        meets_maximum_offer_price=purchase_price <= t.max_purchase_price,
        meets_minimum_cash_on_cash=(
            cash_on_cash_return_pct is not None and cash_on_cash_return_pct >= t.min_cash_on_cash_pct
        ),
        meets_maximum_down_payment=_down_payment_ok(down_payment, purchase_price, t.max_down_payment_ratio),
        meets_maximum_interest_rate=interest_rate_pct <= t.max_interest_rate_pct,
        meets_minimum_balloon=balloon_years >= t.min_balloon_years,
    )
