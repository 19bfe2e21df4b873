# tests/test_cli.py
import json

import pytest

import main
from src.store.deals import JsonDealStore


@pytest.fixture
def run(tmp_path, monkeypatch, capsys):
    """Run the CLI in an isolated cwd with a tmp store; returns (exit_code, stdout, stderr)."""
    monkeypatch.chdir(tmp_path)
    store = tmp_path / "deals.json"

    def _run(*argv):
        code = main.main(["--store", str(store), *argv])
        out, err = capsys.readouterr()
        return code, out, err

    _run.store_path = store
    return _run


def test_mortgage_prints_report(run):
    code, out, _ = run(
        "mortgage",
        "--loan-amount", "200000",
        "--interest-rate-pct", "6",
        "--term-years", "30",
        "--rental-revenue", "2000",
        "--expense", "taxes=250",
        "--expense", "insurance=$100",
        "--first-payment-date", "2024-01-15",
    )  # fmt: skip
    assert code == 0
    assert "# Mortgage Analysis" in out
    assert "$1,199.10" in out
    assert "Year 5:" in out


def test_creative_saves_deal(run):
    code, out, _ = run(
        "creative",
        "--purchase-price", "180000",
        "--listed-price", "200000",
        "--down-payment", "15000",
        "--interest-rate-pct", "3",
        "--rental-revenue", "2400",
        "--operating-expenses", "400",
        "--save", "Oak St",
    )  # fmt: skip
    assert code == 0
    assert "MEETS ALL CRITERIA" in out
    deals = JsonDealStore(run.store_path).list()
    assert [(d.type, d.name) for d in deals] == [("creative", "Oak St")]
    assert "schedule" not in deals[0].results
    assert deals[0].results["cash_flow"]["annual_cash_flow"] > 0


def test_wholesale_report_to_file(run, tmp_path):
    out_path = tmp_path / "wholesale.md"
    code, out, _ = run("wholesale", "--arv", "250000", "--rehab-cost", "30000", "--out", str(out_path))
    assert code == 0
    assert "Report written" in out
    text = out_path.read_text(encoding="utf-8")
    assert "$177,500.00" in text
    assert "$135,000.00" in text


def test_json_calculators(run):
    code, out, _ = run("rental")
    assert code == 0
    assert json.loads(out)["recommendation"]["strategy"] in {"long-term", "short-term", "mixed"}

    code, out, _ = run("multifamily", "--purchase-price", "500000", "--number-of-units", "4", "--average-rent", "1500")
    assert code == 0
    assert json.loads(out)["monthly_gross_income"] == 6000

    code, out, _ = run("tax", "--purchase-price", "300000", "--sale-price", "350000", "--land-value", "25000")
    assert code == 0
    payload = json.loads(out)
    assert payload["capital_gains"]["total_depreciation"] == pytest.approx(50_000)

    code, out, _ = run("seller-finance", "--purchase-price", "200000", "--down-payment-pct", "10", "--save", "Carry")
    assert code == 0
    assert "schedule" not in json.loads(out.split("Saved as")[0])
    assert JsonDealStore(run.store_path).list()[0].type == "advanced"


def test_deals_commands(run, tmp_path):
    run("wholesale", "--arv", "250000", "--rehab-cost", "30000", "--save", "Elm")
    deal_id = JsonDealStore(run.store_path).list()[0].id

    code, out, _ = run("deals", "list")
    assert code == 0 and "Elm" in out and deal_id in out

    code, out, _ = run("deals", "stats")
    assert json.loads(out)["deals_by_type"] == {"wholesale": 1}

    code, out, _ = run("deals", "export", "--format", "xlsx", "--out-dir", str(tmp_path), "--filename", "d.xlsx")
    assert code == 0 and (tmp_path / "d.xlsx").exists()

    code, _, _ = run("deals", "delete", deal_id)
    assert code == 0
    code, out, _ = run("deals", "list")
    assert "No saved deals." in out


def test_errors_exit_with_status_1(run):
    code, _, err = run("deals", "delete", "missing-id")
    assert code == 1
    assert "missing-id" in err

    code, _, err = run("creative", "--purchase-price", "100", "--down-payment", "500")
    assert code == 1
    assert "Error:" in err


def test_misspelled_rehab_item_is_an_error(run):
    code, out, err = run("wholesale", "--arv", "250000", "--rehab-item", "kitchn=5000")
    assert code == 1
    assert "Error:" in err and "kitchn" in err
    assert out == ""


def test_deals_list_rejects_unknown_type(run):
    with pytest.raises(SystemExit) as exc:
        run("deals", "list", "--type", "bogus")
    assert exc.value.code == 2


def test_deals_list_filters_by_type(run):
    run("wholesale", "--arv", "250000", "--rehab-cost", "30000", "--save", "Elm")
    run("novation", "--current-balance", "200000", "--interest-rate-pct", "7", "--save", "Refi")

    code, out, _ = run("deals", "list", "--type", "advanced")
    assert code == 0
    assert "Refi" in out and "Elm" not in out


def test_deal_analyzer_command(run):
    code, out, _ = run("deal-analyzer", "--purchase-price", "200000", "--save", "Flip")
    assert code == 0
    payload = json.loads(out.split("Saved as")[0])
    assert payload["maximum_allowable_offer"] == pytest.approx(177_500)
    assert len(payload["financing_options"]) == 3
    assert len(payload["sensitivity"]["scenarios"]) == 25
    assert JsonDealStore(run.store_path).list()[0].type == "advanced"


def test_creative_offer_command(run):
    code, out, _ = run(
        "creative-offer",
        "--purchase-price", "150000",
        "--arv", "250000",
        "--repair-costs", "30000",
        "--monthly-rent", "2000",
        "--save", "Lease",
    )  # fmt: skip
    assert code == 0
    payload = json.loads(out.split("Saved as")[0])
    assert set(payload) == {"subject_to", "lease_option", "owner_finance"}
    assert payload["lease_option"]["total_rent_credits"] == pytest.approx(9_600)
    assert JsonDealStore(run.store_path).list()[0].type == "creative"


def test_advanced_financing_commands(run):
    code, out, _ = run("lease-option", "--property-value", "300000", "--purchase-price", "250000", "--option-fee", "5000")
    assert code == 0
    assert json.loads(out)["roi_pct"] == pytest.approx(1_000.0)

    code, out, _ = run("syndication", "--total-units", "10", "--average-rent", "1000", "--investment-amount", "100000")
    assert code == 0
    payload = json.loads(out)
    assert payload["gross_potential_income"] == pytest.approx(120_000)
    assert payload["cap_rate_pct"] is None

    code, _, err = run("syndication", "--gp-split-pct", "50")
    assert code == 1
    assert "must equal 100" in err

    code, out, _ = run("novation", "--current-balance", "100000", "--interest-rate-pct", "5", "--new-interest-rate-pct", "6")
    assert code == 0
    assert json.loads(out)["break_even_months"] is None


def test_corrupted_store_is_reported(run):
    run.store_path.write_text("{not json", encoding="utf-8")
    code, _, err = run("deals", "list")
    assert code == 1
    assert "Invalid JSON" in err


def test_bad_config_is_reported(run, tmp_path):
    cfg = tmp_path / "bad.json"
    cfg.write_text("{oops", encoding="utf-8")
    code = main.main(["--config", str(cfg), "deals", "list"])
    assert code == 1
