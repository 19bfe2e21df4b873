# tests/unit/test_amortization.py
from datetime import date

import pytest

from src.core.errors import InvalidInputError
from src.core.finance.amortization import (
    annual_summary,
    balloon_balance,
    generate_schedule,
    interest_only_payment,
    monthly_payment,
    periodic_payment,
    periodic_schedule,
    schedule_totals,
)


def test_monthly_payment_reference_value():
    # 200k @ 6% over 30 years
    assert monthly_payment(200_000, 6.0, 30) == pytest.approx(1199.10, abs=0.01)


def test_zero_principal_pays_nothing():
    assert monthly_payment(0, 6.0, 30) == 0.0


def test_zero_rate_is_straight_line():
    assert monthly_payment(120_000, 0.0, 10) == pytest.approx(1_000.0)
    sched = generate_schedule(120_000, 0.0, 10, date(2024, 1, 1))
    assert {r.interest for r in sched} == {0.0}
    assert sched[-1].balance == pytest.approx(0.0, abs=1e-6)


def test_interest_only_payment():
    assert interest_only_payment(100_000, 6.0) == pytest.approx(500.0)


@pytest.mark.parametrize(
    "principal,rate,term",
    [(-1, 5.0, 30), (100_000, -1.0, 30), (100_000, 5.0, 0)],
)
def test_invalid_inputs_raise(principal, rate, term):
    with pytest.raises(InvalidInputError):
        monthly_payment(principal, rate, term)


def test_schedule_length_and_final_balance():
    sched = generate_schedule(200_000, 6.0, 30, date(2024, 1, 1))
    assert len(sched) == 360
    assert [r.payment_number for r in sched[:3]] == [1, 2, 3]
    assert sched[-1].balance == pytest.approx(0.0, abs=1e-6)


def test_schedule_rows_are_consistent():
    sched = generate_schedule(150_000, 4.5, 15, date(2024, 1, 1))
    prev = 150_000.0
    for row in sched:
        assert row.principal + row.interest == pytest.approx(row.payment)
        assert row.interest == pytest.approx(prev * 4.5 / 12 / 100)
        assert row.balance == pytest.approx(prev - row.principal, abs=1e-6)
        prev = row.balance


def test_principal_sums_to_loan_amount():
    sched = generate_schedule(250_000, 5.25, 20, date(2024, 1, 1))
    total_paid, total_interest, total_principal = schedule_totals(sched)
    assert total_principal == pytest.approx(250_000, abs=1e-4)
    assert total_paid == pytest.approx(total_interest + total_principal)


def test_interest_only_schedule_keeps_balance():
    sched = generate_schedule(100_000, 6.0, 5, date(2024, 1, 1), interest_only=True)
    assert len(sched) == 60
    assert {r.balance for r in sched} == {100_000.0}
    assert {r.principal for r in sched} == {0.0}
    assert sched[0].payment == pytest.approx(500.0)


def test_payment_dates_advance_by_month_and_clamp():
    sched = generate_schedule(10_000, 5.0, 1, date(2024, 1, 31))
    assert sched[0].payment_date == date(2024, 2, 29)  # leap year clamp
    assert sched[1].payment_date == date(2024, 3, 31)
    assert sched[11].payment_date == date(2025, 1, 31)


def test_balloon_balance_matches_schedule_row():
    sched = generate_schedule(200_000, 6.0, 30, date(2024, 1, 1))
    assert balloon_balance(200_000, 6.0, 30, 5) == pytest.approx(sched[59].balance)
    assert 0 < balloon_balance(200_000, 6.0, 30, 5) < 200_000


def test_balloon_at_full_term_is_paid_off():
    assert balloon_balance(200_000, 6.0, 30, 30) == pytest.approx(0.0, abs=1e-6)


def test_balloon_out_of_range_returns_principal():
    assert balloon_balance(200_000, 6.0, 30, 0) == 200_000
    assert balloon_balance(200_000, 6.0, 30, 31) == 200_000


def test_fractional_balloon_year_truncates_to_month():
    sched = generate_schedule(100_000, 5.0, 30, date(2024, 1, 1))
    # 7.5 years -> row 90
    assert balloon_balance(100_000, 5.0, 30, 7.5) == pytest.approx(sched[89].balance)


def test_interest_only_balloon_is_principal():
    assert balloon_balance(90_000, 4.0, 30, 7, interest_only=True) == 90_000


def test_periodic_payment_by_frequency():
    quarterly = periodic_payment(100_000, 6.0, 10, 4)
    monthly = periodic_payment(100_000, 6.0, 10, 12)
    assert quarterly > monthly * 2.9


def test_periodic_schedule_truncates_at_balloon():
    rows = periodic_schedule(100_000, 6.0, 30, balloon_years=5, frequency="quarterly")
    assert len(rows) == 20
    assert rows[-1].total_interest == pytest.approx(sum(r.interest for r in rows))


def test_periodic_schedule_full_term_without_balloon():
    rows = periodic_schedule(100_000, 6.0, 10, frequency="annually")
    assert len(rows) == 10
    assert rows[-1].balance == pytest.approx(0.0, abs=1e-6)


def test_periodic_schedule_rejects_unknown_frequency():
    with pytest.raises(InvalidInputError):
        periodic_schedule(100_000, 6.0, 10, frequency="weekly")


def test_annual_summary_rolls_up_months():
    sched = generate_schedule(100_000, 6.0, 2, date(2024, 1, 1))
    years = annual_summary(sched)
    assert [y.year for y in years] == [1, 2]
    assert years[0].ending_balance == pytest.approx(sched[11].balance)
    assert years[0].interest + years[1].interest == pytest.approx(sum(r.interest for r in sched))
