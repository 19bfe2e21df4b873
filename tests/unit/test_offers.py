# tests/unit/test_offers.py
import pytest

from src.core.finance.amortization import balloon_balance, monthly_payment
from src.core.finance.offers import compare_offers, lease_option_offer, owner_finance_offer, subject_to_offer
from tests.utils import make_creative_offer_inputs


def test_subject_to_offer():
    r = subject_to_offer(make_creative_offer_inputs())

    assert r.estimated_rent == pytest.approx(2_000)
    assert r.initial_investment == pytest.approx(35_000)
    assert r.monthly_cash_flow == pytest.approx(600)
    assert r.annual_cash_flow == pytest.approx(7_200)
    assert r.equity_capture == pytest.approx(100_000)
    assert r.roi_pct == pytest.approx(7_200 / 35_000 * 100)
    assert r.exit_profit == pytest.approx(85_000)


def test_subject_to_roi_undefined_without_investment():
    r = subject_to_offer(make_creative_offer_inputs(repair_costs=0, closing_costs=0))
    assert r.roi_pct is None


def test_lease_option_offer_credits_rent():
    r = lease_option_offer(make_creative_offer_inputs())

    assert r.initial_investment == pytest.approx(35_000)
    assert r.monthly_cash_flow == pytest.approx(1_500)
    assert r.total_rent_collected == pytest.approx(48_000)
    assert r.total_rent_credits == pytest.approx(9_600)
    assert r.option_purchase_price == pytest.approx(250_000)
    assert r.exit_profit == pytest.approx(250_000 - 150_000 - 9_600 - 15_000)


def test_lease_option_explicit_strike_price():
    r = lease_option_offer(make_creative_offer_inputs(option_purchase_price=260_000, rent_credit_pct=0))
    assert r.total_rent_credits == 0.0
    assert r.exit_profit == pytest.approx(260_000 - 150_000 - 15_000)


def test_owner_finance_with_balloon():
    r = owner_finance_offer(make_creative_offer_inputs())
    pmt = monthly_payment(135_000, 6.0, 15)
    balloon = balloon_balance(135_000, 6.0, 15, 5)

    assert r.down_payment == pytest.approx(15_000)
    assert r.loan_amount == pytest.approx(135_000)
    assert r.monthly_payment == pytest.approx(pmt)
    assert r.balloon_amount == pytest.approx(balloon)
    # interest = payments made - principal repaid
    assert r.total_interest == pytest.approx(pmt * 60 - (135_000 - balloon))
    assert r.equity_capture == pytest.approx(70_000)
    assert r.interest_roi_pct == pytest.approx(r.total_interest / 15_000 * 100)


@pytest.mark.parametrize("balloon_years", [0, 15, 20])
def test_owner_finance_without_balloon(balloon_years):
    r = owner_finance_offer(make_creative_offer_inputs(balloon_term_years=balloon_years))
    assert r.balloon_amount == 0.0
    assert r.total_interest == pytest.approx(r.monthly_payment * 180 - 135_000)


def test_owner_finance_zero_down_has_no_interest_roi():
    r = owner_finance_offer(make_creative_offer_inputs(down_payment_pct=0))
    assert r.loan_amount == pytest.approx(150_000)
    assert r.interest_roi_pct is None


def test_compare_offers_bundles_all_three():
    inputs = make_creative_offer_inputs()
    r = compare_offers(inputs)
    assert r.subject_to == subject_to_offer(inputs)
    assert r.lease_option == lease_option_offer(inputs)
    assert r.owner_finance == owner_finance_offer(inputs)
