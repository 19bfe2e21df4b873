# src/core/finance/tax.py

from __future__ import annotations

import math
from dataclasses import dataclass

from src.core.errors import require_non_negative
from src.schemas.models import CapitalGainsRates, CapitalGainsResult, PropertyType, TaxSavings

RECOVERY_YEARS: dict[str, float] = {"residential": 27.5, "commercial": 39.0}


@dataclass(frozen=True)
class DepreciationEntry:
    year: int
    basis: float  # basis at the start of the year
    depreciation: float
    remaining_basis: float


def annual_depreciation(basis: float, property_type: PropertyType = "residential") -> float:
    """Straight-line depreciation: basis / recovery period (27.5 residential, 39 commercial)."""
    require_non_negative("basis", basis)
    return basis / RECOVERY_YEARS[property_type]


def depreciation_schedule(basis: float, property_type: PropertyType = "residential") -> list[DepreciationEntry]:
    """
    One entry per whole recovery year (27 rows residential, 39 commercial).

    The half year left over by the 27.5-year residential period is not scheduled.
    """
    per_year = annual_depreciation(basis, property_type)
    years = math.floor(RECOVERY_YEARS[property_type])

    out: list[DepreciationEntry] = []
    remaining = float(basis)
    for year in range(1, years + 1):
        start = remaining
        remaining -= per_year
        out.append(DepreciationEntry(year, basis=start, depreciation=per_year, remaining_basis=max(0.0, remaining)))
    return out


def capital_gains(
    purchase_price: float,
    sale_price: float,
    holding_years: int,
    schedule: list[DepreciationEntry],
    rates: CapitalGainsRates | None = None,
) -> CapitalGainsResult:
    """
    Tax due on sale.

    - Depreciation taken = sum of the first holding_years schedule entries.
    - Recapture tax = depreciation taken * recapture rate (25% default).
    - Gain = sale price - purchase price + depreciation taken, taxed at the long-term rate
      when held at least one year, otherwise the short-term rate.
    """
    r = rates or CapitalGainsRates()
    held = max(0, holding_years)
    total_dep = sum(e.depreciation for e in schedule[:held])
    is_long_term = held >= 1
    rate = r.long_term_rate_pct if is_long_term else r.short_term_rate_pct

    gain = sale_price - purchase_price + total_dep
    recapture = total_dep * r.recapture_rate_pct / 100
    gains_tax = gain * rate / 100

    return CapitalGainsResult(
        purchase_price=purchase_price,
        estimated_sale_price=sale_price,
        holding_years=held,
        is_long_term=is_long_term,
        total_depreciation=total_dep,
        capital_gains=gain,
        depreciation_recapture=recapture,
        capital_gains_tax=gains_tax,
        total_tax=recapture + gains_tax,
    )


def tax_savings(annual_dep: float, marginal_rate_pct: float, holding_years: int) -> TaxSavings:
    """Income tax sheltered by depreciation at the marginal rate, per year and over the hold."""
    yearly = annual_dep * marginal_rate_pct / 100
    return TaxSavings(
        annual_depreciation=annual_dep,
        annual_tax_savings=yearly,
        total_tax_savings=yearly * max(0, holding_years),
        marginal_tax_rate_pct=marginal_rate_pct,
    )
