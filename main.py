# main.py
"""
Entry Point: Real Estate Calculator Suite

Purpose
-------
Run one calculator from the command line, print the result and optionally
save it to the local deal store:
  - mortgage, creative, wholesale       -> Markdown report (stdout or --out)
  - multifamily, rental, tax, seller-finance -> JSON result
  - deal-analyzer, creative-offer           -> JSON result
  - lease-option, syndication, novation     -> JSON result
  - deals list|delete|export|stats      -> manage saved deals

Design
------
- Calculator flags are generated from the input models, so every input field
  is settable as --field-name (defaults come from the model).
- Thresholds, MAO policy, store path and logging come from the JSON config
  (./calculator.json or ./config.json, or --config) with RECALC_* env overrides.

Usage
-----
    python main.py creative --purchase-price 180000 --listed-price 200000 \
        --down-payment 15000 --interest-rate-pct 3.5 --rental-revenue 2000 \
        --operating-expenses 400 --save "Oak St"
    python main.py wholesale --arv 250000 --square-footage 1800 --condition easy
    python main.py deals export --format xlsx --out-dir exports
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from typing import Any, Literal, get_args, get_origin

from pydantic import BaseModel, ValidationError

from src.core.errors import CALCULATOR_ERRORS, InvalidInputError
from src.core.finance import (
    analyze_deal,
    analyze_lease_option,
    analyze_mortgage,
    analyze_multifamily,
    analyze_novation,
    analyze_seller_finance,
    analyze_syndication,
    capital_gains,
    compare_offers,
    compare_strategies,
    depreciation_schedule,
    evaluate_creative_financing,
    tax_savings,
    wholesale_analysis,
)
from src.core.logging import setup_logging
from src.core.portfolio import portfolio_stats
from src.inputs.inputs import AppConfig, ConfigLoader
from src.inputs.validation import safe_float
from src.reports.export import EXPORT_FORMATS, export_deals
from src.reports.generator import (
    generate_creative_report,
    generate_mortgage_report,
    generate_wholesale_report,
    write_report,
)
from src.schemas.models import (
    CapitalGainsRates,
    CreativeFinancingInputs,
    CreativeOfferInputs,
    DealAnalyzerInputs,
    DealType,
    LeaseOptionInputs,
    MortgageInputs,
    MultiFamilyInputs,
    NovationInputs,
    RehabItems,
    RentalInputs,
    SellerFinanceInputs,
    SyndicationInputs,
    WholesaleInputs,
)
from src.store.deals import JsonDealStore

# ----------------------------
# Model-driven flags
# ----------------------------


def _add_model_args(p: argparse.ArgumentParser, model: type[BaseModel]) -> None:
    """Add one --flag per scalar field of `model`. Unset flags stay None so model defaults apply."""
    for name, field in model.model_fields.items():
        flag = "--" + name.replace("_", "-")
        ann = field.annotation
        help_text = (field.description or "").replace("%", "%%")
        if ann is bool:
            p.add_argument(flag, action="store_true", default=None, help=help_text)
        elif ann in (int, float):
            p.add_argument(flag, type=ann, default=None, help=help_text)
        elif get_origin(ann) is Literal:
            p.add_argument(flag, choices=get_args(ann), default=None, help=help_text)
        elif ann is str:
            p.add_argument(flag, type=str, default=None, help=help_text)


def _model_kwargs(args: argparse.Namespace, model: type[BaseModel]) -> dict[str, Any]:
    return {name: getattr(args, name) for name in model.model_fields if getattr(args, name, None) is not None}


def _build(model: type[BaseModel], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid {model.__name__}:\n{e}") from e


def _key_value(text: str) -> tuple[str, float]:
    """Parse NAME=AMOUNT (amount is lenient: '$1,200' works)."""
    name, sep, amount = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=AMOUNT, got {text!r}")
    return name.strip(), safe_float(amount)


def _iso_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}") from e


# ----------------------------
# Parser
# ----------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    p = argparse.ArgumentParser(description="Real Estate Calculator Suite")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (thresholds, policy, store, logging).")
    p.add_argument("--store", type=str, default=None, help="Deal store JSON path (overrides config).")
    p.add_argument("--log-level", type=str, default=None, help="Log level (overrides config).")
    sub = p.add_subparsers(dest="command", required=True)

    def calculator(name: str, help_text: str) -> argparse.ArgumentParser:
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("--save", metavar="NAME", default=None, help="Save the result to the deal store under NAME.")
        return sp

    sp = calculator("mortgage", "Amortizing mortgage with balloon checkpoints and cash flow")
    _add_model_args(sp, MortgageInputs)
    sp.add_argument("--expense", action="append", type=_key_value, default=[], metavar="NAME=AMOUNT")
    sp.add_argument("--first-payment-date", type=_iso_date, default=None)
    sp.add_argument("--out", type=str, default=None, help="Write the Markdown report here instead of stdout.")

    sp = calculator("creative", "Seller-carry creative financing offer against deal criteria")
    _add_model_args(sp, CreativeFinancingInputs)
    sp.add_argument("--first-payment-date", type=_iso_date, default=None)
    sp.add_argument("--out", type=str, default=None, help="Write the Markdown report here instead of stdout.")

    sp = calculator("wholesale", "Wholesale MAO and investor view")
    _add_model_args(sp, WholesaleInputs)
    sp.add_argument("--rehab-item", action="append", type=_key_value, default=[], metavar="ITEM=AMOUNT")
    sp.add_argument("--out", type=str, default=None, help="Write the Markdown report here instead of stdout.")

    sp = calculator("multifamily", "Multifamily NOI, cap rate and cash flow")
    _add_model_args(sp, MultiFamilyInputs)

    sp = calculator("rental", "Long-term vs short-term rental comparison")
    _add_model_args(sp, RentalInputs)

    sp = calculator("seller-finance", "Seller-financed purchase held to the balloon")
    _add_model_args(sp, SellerFinanceInputs)

    sp = calculator("deal-analyzer", "Desired-profit MAO, deal score and ARV x rehab sensitivity grid")
    _add_model_args(sp, DealAnalyzerInputs)

    sp = calculator("creative-offer", "Subject-to, lease option and owner finance offers side by side")
    _add_model_args(sp, CreativeOfferInputs)

    sp = calculator("lease-option", "Buyer-side lease option ROI")
    _add_model_args(sp, LeaseOptionInputs)

    sp = calculator("syndication", "Syndication NOI with GP/LP split")
    _add_model_args(sp, SyndicationInputs)

    sp = calculator("novation", "Loan novation savings and break-even")
    _add_model_args(sp, NovationInputs)

    sp = calculator("tax", "Depreciation, capital gains and tax savings")
    sp.add_argument("--purchase-price", type=float, required=True)
    sp.add_argument("--sale-price", type=float, required=True)
    sp.add_argument("--holding-years", type=int, default=5)
    sp.add_argument("--land-value", type=float, default=0.0, help="Excluded from the depreciable basis.")
    sp.add_argument("--property-type", choices=("residential", "commercial"), default="residential")
    sp.add_argument("--marginal-rate-pct", type=float, default=24.0)
    _add_model_args(sp, CapitalGainsRates)

    deals = sub.add_parser("deals", help="Manage saved deals")
    dsub = deals.add_subparsers(dest="deals_command", required=True)
    dl = dsub.add_parser("list", help="List saved deals")
    dl.add_argument("--type", dest="deal_type", choices=get_args(DealType), default=None)
    dd = dsub.add_parser("delete", help="Delete a saved deal")
    dd.add_argument("deal_id")
    de = dsub.add_parser("export", help="Export saved deals")
    de.add_argument("--format", dest="fmt", choices=EXPORT_FORMATS, default="csv")
    de.add_argument("--out-dir", default=".")
    de.add_argument("--filename", default=None)
    dsub.add_parser("stats", help="Portfolio statistics")

    return p.parse_args(argv)


# ----------------------------
# Commands
# ----------------------------


def _emit(text: str, out: str | None) -> None:
    if out:
        write_report(out, text)
        print(f"Report written to {out}")
    else:
        print(text, end="")


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", exclude={"schedule"})


def run_calculator(args: argparse.Namespace, cfg: AppConfig) -> tuple[DealType, dict[str, Any], dict[str, Any]]:
    """Run the selected calculator, print its output and return (type, inputs, results) for saving."""
    cmd = args.command
    if cmd == "mortgage":
        data = _model_kwargs(args, MortgageInputs)
        data["operating_expenses"] = dict(args.expense)
        mi = _build(MortgageInputs, data)
        mres = analyze_mortgage(mi)
        _emit(generate_mortgage_report(mi, mres), args.out)
        return "mortgage", mi.model_dump(mode="json"), _dump(mres)

    if cmd == "creative":
        ci = _build(CreativeFinancingInputs, _model_kwargs(args, CreativeFinancingInputs))
        cres = evaluate_creative_financing(ci, cfg.criteria)
        _emit(generate_creative_report(ci, cres), args.out)
        return "creative", ci.model_dump(mode="json"), _dump(cres)

    if cmd == "wholesale":
        data = _model_kwargs(args, WholesaleInputs)
        data["rehab_items"] = _build(RehabItems, dict(args.rehab_item))
        wi = _build(WholesaleInputs, data)
        wres = wholesale_analysis(wi, cfg.wholesale)
        _emit(generate_wholesale_report(wi, wres), args.out)
        return "wholesale", wi.model_dump(mode="json"), _dump(wres)

    if cmd == "tax":
        basis = max(args.purchase_price - args.land_value, 0.0)
        schedule = depreciation_schedule(basis, args.property_type)
        rates = _build(CapitalGainsRates, _model_kwargs(args, CapitalGainsRates))
        gains = capital_gains(args.purchase_price, args.sale_price, args.holding_years, schedule, rates)
        savings = tax_savings(schedule[0].depreciation if schedule else 0.0, args.marginal_rate_pct, args.holding_years)
        inputs = {
            "purchase_price": args.purchase_price,
            "sale_price": args.sale_price,
            "holding_years": args.holding_years,
            "land_value": args.land_value,
            "property_type": args.property_type,
            "marginal_rate_pct": args.marginal_rate_pct,
        }
        results = {"capital_gains": gains.model_dump(mode="json"), "tax_savings": savings.model_dump(mode="json")}
        print(json.dumps(results, indent=2))
        return "tax", inputs, results

    model, fn, deal_type = {
        "multifamily": (MultiFamilyInputs, analyze_multifamily, "multifamily"),
        "rental": (RentalInputs, compare_strategies, "rental"),
        "seller-finance": (SellerFinanceInputs, analyze_seller_finance, "advanced"),
        "deal-analyzer": (DealAnalyzerInputs, analyze_deal, "advanced"),
        "creative-offer": (CreativeOfferInputs, compare_offers, "creative"),
        "lease-option": (LeaseOptionInputs, analyze_lease_option, "advanced"),
        "syndication": (SyndicationInputs, analyze_syndication, "advanced"),
        "novation": (NovationInputs, analyze_novation, "advanced"),
    }[cmd]
    inputs_model = _build(model, _model_kwargs(args, model))
    result = fn(inputs_model)
    results = _dump(result)
    print(json.dumps(results, indent=2))
    return deal_type, inputs_model.model_dump(mode="json"), results


def run_deals(args: argparse.Namespace, store: JsonDealStore) -> int:
    cmd = args.deals_command
    if cmd == "list":
        deals = store.list_by_type(args.deal_type) if args.deal_type else store.list()
        if not deals:
            print("No saved deals.")
        for d in deals:
            print(f"{d.id}  {d.type:<12} {d.date[:10]}  {d.name}")
        return 0
    if cmd == "delete":
        store.require(args.deal_id)
        store.delete(args.deal_id)
        print(f"Deleted {args.deal_id}")
        return 0
    if cmd == "export":
        path = export_deals(store.list(), args.fmt, args.out_dir, args.filename)
        print(f"Exported to {path}")
        return 0
    stats = portfolio_stats(store.list())
    print(stats.model_dump_json(indent=2, exclude={"recent"}))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        loader = ConfigLoader()
        cfg = loader.load(args.config)
        cfg = loader.with_overrides(cfg, store_path=args.store, log_level=args.log_level)
    except (FileNotFoundError, ValueError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    setup_logging(cfg.log_level, cfg.log_file)
    store = JsonDealStore(cfg.store_path)

    try:
        if args.command == "deals":
            return run_deals(args, store)
        deal_type, inputs, results = run_calculator(args, cfg)
        if args.save:
            deal = store.save(deal_type, args.save, inputs, results)
            print(f"Saved as {deal.id}")
    except CALCULATOR_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
