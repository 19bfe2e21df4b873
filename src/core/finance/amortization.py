# src/core/finance/amortization.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import relativedelta

from src.core.errors import InvalidInputError, require_non_negative, require_positive

_EPS = 1e-6  # for floating cleanup

PERIODS_PER_YEAR = {"monthly": 12, "quarterly": 4, "annually": 1}


@dataclass(frozen=True)
class AmortizationRow:
    """
    Immutable record of a single monthly payment.

    Attributes:
        payment_number (int): 1-based payment index.
        payment_date (date): Start date advanced by payment_number calendar months.
        payment (float): Total payment this month.
        principal (float): Principal paid this month (0 for interest-only loans).
        interest (float): Interest paid this month.
        balance (float): Balance after this payment. For interest-only loans this is the original principal.
    """

    payment_number: int
    payment_date: date
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True)
class PeriodRow:
    """One period of a schedule at arbitrary payment frequency, with running interest."""

    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    total_interest: float


@dataclass(frozen=True)
class YearDebt:
    year: int
    payment: float
    interest: float
    principal: float
    ending_balance: float


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 12 / 100


def periodic_payment(principal: float, annual_rate_pct: float, term_years: int, periods_per_year: int = 12) -> float:
    """
    Constant payment for a fully-amortizing loan.

    Formula (standard annuity):
        PMT = [ P * r * (1 + r)^n ] / [ (1 + r)^n - 1 ]

    Where:
        r = annual_rate_pct / periods_per_year / 100
        n = term_years * periods_per_year

    If r == 0 the formula is 0/0; the payment is then principal / n.
    """
    require_non_negative("principal", principal)
    require_non_negative("annual_rate_pct", annual_rate_pct)
    require_positive("term_years", term_years)
    require_positive("periods_per_year", periods_per_year)

    return _annuity(principal, annual_rate_pct / periods_per_year / 100, term_years * periods_per_year)


def _annuity(principal: float, r: float, n: int) -> float:
    if principal == 0:
        return 0.0
    if r == 0:
        return principal / n

    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def payment_for_months(principal: float, annual_rate_pct: float, months: int) -> float:
    """Monthly P&I payment for a loan with `months` payments left (terms not in whole years)."""
    require_non_negative("principal", principal)
    require_non_negative("annual_rate_pct", annual_rate_pct)
    require_positive("months", months)
    return _annuity(principal, _monthly_rate(annual_rate_pct), months)


def monthly_payment(principal: float, annual_rate_pct: float, term_years: int) -> float:
    """
    Monthly P&I payment for a fully-amortizing fixed-rate loan.

    Args:
        principal: Loan amount (>= 0).
        annual_rate_pct: APR in percent (e.g., 6.0 for 6%).
        term_years: Term in years (> 0).

    Returns:
        The fixed monthly payment; principal / (term_years * 12) when the rate is 0.
    """
    return periodic_payment(principal, annual_rate_pct, term_years, 12)


def interest_only_payment(principal: float, annual_rate_pct: float) -> float:
    """Monthly interest-only payment: principal * annual_rate_pct / 12 / 100."""
    require_non_negative("principal", principal)
    require_non_negative("annual_rate_pct", annual_rate_pct)
    return principal * annual_rate_pct / 12 / 100


def generate_schedule(
    principal: float,
    annual_rate_pct: float,
    term_years: int,
    start_date: date | None = None,
    interest_only: bool = False,
) -> list[AmortizationRow]:
    """
    Build a month-by-month schedule of term_years * 12 rows.

    Model:
        - interest[i] = balance[i-1] * monthly rate
        - Amortizing: principal[i] = payment - interest[i]; balance[i] = balance[i-1] - principal[i].
        - Interest-only: principal[i] = 0 and balance[i] is reported as the original principal
          on every row (the loan is never paid down within the term).
        - payment_date[i] = start_date + i months; day-of-month clamps to the month's last day
          when the start day does not exist (Jan 31 -> Feb 28/29).

    Args:
        principal: Loan amount.
        annual_rate_pct: APR in percent.
        term_years: Term in years.
        start_date: Anchor date for payment dates (defaults to today).
        interest_only: Whether the loan is interest-only.

    Returns:
        One AmortizationRow per month, in order.
    """
    require_non_negative("principal", principal)
    require_non_negative("annual_rate_pct", annual_rate_pct)
    require_positive("term_years", term_years)

    anchor = start_date or date.today()
    r = _monthly_rate(annual_rate_pct)
    n = term_years * 12
    pmt = interest_only_payment(principal, annual_rate_pct) if interest_only else monthly_payment(principal, annual_rate_pct, term_years)

    schedule: list[AmortizationRow] = []
    bal = float(principal)

    for i in range(1, n + 1):
        interest = bal * r
        if interest_only:
            principal_paid = 0.0
            bal = float(principal)
        else:
            principal_paid = pmt - interest
            bal = bal - principal_paid
            # Clean tiny residual drift on the last payment
            if i == n and abs(bal) < _EPS:
                bal = 0.0
        schedule.append(
            AmortizationRow(
                payment_number=i,
                payment_date=anchor + relativedelta(months=i),
                payment=pmt,
                principal=principal_paid,
                interest=interest,
                balance=bal,
            )
        )

    return schedule


def balloon_balance(
    principal: float,
    annual_rate_pct: float,
    term_years: int,
    balloon_year: float,
    interest_only: bool = False,
) -> float:
    """
    Remaining balance due as a balloon at the end of balloon_year.

    Reads row balloon_year * 12 (1-based) of the full schedule. When that row does not
    exist (balloon beyond the term, or balloon_year <= 0) the original principal is returned.
    """
    schedule = generate_schedule(principal, annual_rate_pct, term_years, interest_only=interest_only)
    index = int(balloon_year * 12)
    if index < 1 or index > len(schedule):
        return float(principal)
    return schedule[index - 1].balance


def periodic_schedule(
    principal: float,
    annual_rate_pct: float,
    term_years: int,
    balloon_years: int = 0,
    frequency: str = "monthly",
) -> list[PeriodRow]:
    """
    Amortization at monthly/quarterly/annual frequency, truncated at a balloon period.

    The schedule stops after the balloon period when 0 < balloon period < total periods.
    Reported balances are floored at 0.
    """
    if frequency not in PERIODS_PER_YEAR:
        raise InvalidInputError(f"unknown payment frequency: {frequency!r}")
    require_non_negative("balloon_years", balloon_years)

    per_year = PERIODS_PER_YEAR[frequency]
    total_periods = term_years * per_year
    balloon_period = balloon_years * per_year
    r = annual_rate_pct / 100 / per_year
    pmt = periodic_payment(principal, annual_rate_pct, term_years, per_year)

    rows: list[PeriodRow] = []
    bal = float(principal)
    total_interest = 0.0
    for period in range(1, total_periods + 1):
        interest = bal * r
        principal_paid = pmt - interest
        bal -= principal_paid
        total_interest += interest
        rows.append(PeriodRow(period, pmt, principal_paid, interest, max(bal, 0.0), total_interest))
        if period == balloon_period and 0 < balloon_period < total_periods:
            break
    return rows


def schedule_totals(schedule: list[AmortizationRow]) -> tuple[float, float, float]:
    """
    Sum a schedule.

    Returns:
        (total_paid, total_interest, total_principal)
    """
    total_paid = sum(row.payment for row in schedule)
    total_interest = sum(row.interest for row in schedule)
    total_principal = sum(row.principal for row in schedule)
    return (total_paid, total_interest, total_principal)


def annual_summary(schedule: list[AmortizationRow]) -> list[YearDebt]:
    """Aggregate a monthly schedule into 1-based years (a trailing partial year is kept)."""
    out: list[YearDebt] = []
    for start in range(0, len(schedule), 12):
        chunk = schedule[start : start + 12]
        out.append(
            YearDebt(
                year=start // 12 + 1,
                payment=sum(r.payment for r in chunk),
                interest=sum(r.interest for r in chunk),
                principal=sum(r.principal for r in chunk),
                ending_balance=chunk[-1].balance,
            )
        )
    return out
