# src/core/portfolio.py

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any, cast

import numpy as np

from src.schemas.models import PortfolioStats, SavedDeal

RECENT_LIMIT = 5


def annual_cash_flow_of(deal: SavedDeal) -> float | None:
    """
    Pull an annual cash flow out of a deal's opaque results blob.

    Accepts {"cash_flow": {"annual_cash_flow": x}}, {"cash_flow": x} or {"annual_cash_flow": x}.
    Returns None when the deal carries no usable cash-flow figure.
    """
    results: dict[str, Any] = deal.results or {}
    raw: Any = results.get("cash_flow")
    if isinstance(raw, dict):
        raw = raw.get("annual_cash_flow")
    if raw is None:
        raw = results.get("annual_cash_flow")
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def portfolio_stats(deals: Sequence[SavedDeal]) -> PortfolioStats:
    """
    Dashboard summary:
      - count per deal type
      - up to five most recent deals (ISO dates sort chronologically)
      - mean / median / p25 / p75 of annual cash flow over deals that report one
    """
    by_type = Counter(d.type for d in deals)
    recent = sorted(deals, key=lambda d: d.date, reverse=True)[:RECENT_LIMIT]

    flows = [cf for cf in (annual_cash_flow_of(d) for d in deals) if cf is not None]
    if not flows:
        return PortfolioStats(total_deals=len(deals), deals_by_type=dict(by_type), recent=list(recent))

    arr = np.asarray(flows, dtype=float)
    return PortfolioStats(
        total_deals=len(deals),
        deals_by_type=dict(by_type),
        recent=list(recent),
        deals_with_cash_flow=len(flows),
        average_annual_cash_flow=float(arr.mean()),
        median_annual_cash_flow=float(np.median(arr)),
        p25_annual_cash_flow=float(cast(float, np.percentile(arr, 25))),
        p75_annual_cash_flow=float(cast(float, np.percentile(arr, 75))),
    )
