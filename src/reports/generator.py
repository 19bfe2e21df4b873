# src/reports/generator.py
from __future__ import annotations

from src.core.finance.amortization import AmortizationRow, annual_summary
from src.core.finance.creative import CreativeFinancingResult, MortgageAnalysis
from src.schemas.models import (
    CashFlowResult,
    CreativeFinancingInputs,
    DealCriteria,
    MortgageInputs,
    WholesaleInputs,
    WholesaleResult,
)

_CRITERIA_LABELS = {
    "meets_minimum_cash_flow": "Minimum monthly cash flow",
    "meets_maximum_offer_price": "Maximum purchase price",
    "meets_minimum_cash_on_cash": "Minimum cash-on-cash return",
    "meets_maximum_down_payment": "Maximum down payment ratio",
    "meets_maximum_interest_rate": "Maximum interest rate",
    "meets_minimum_balloon": "Minimum balloon term",
}


def fmt_currency(x: float | None) -> str:
    """
    Format a float as USD-style currency with thousands separators.

    Example:
        123456.789 -> $123,456.79
        -2000 -> -$2,000.00
        None -> N/A
    """
    if x is None:
        return "N/A"
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def fmt_pct(x: float | None) -> str:
    """
    Format a percent value (already x100) with two decimals.

    Example:
        12.0 -> 12.00%
        None -> N/A (undefined ratio)
    """
    if x is None:
        return "N/A"
    return f"{x:.2f}%"


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


# -----------------------
# Shared sections
# -----------------------


def _render_cash_flow(cf: CashFlowResult) -> str:
    lines = [
        _section("Cash Flow"),
        f"- **Monthly Cash Flow:** {fmt_currency(cf.monthly_cash_flow)}",
        f"- **Annual Cash Flow:** {fmt_currency(cf.annual_cash_flow)}",
        f"- **Cash-on-Cash Return:** {fmt_pct(cf.cash_on_cash_return_pct)}",
    ]
    return "\n".join(lines) + "\n"


def _render_criteria(criteria: DealCriteria) -> str:
    """
    Render the pass/fail checklist with an overall verdict.
    """
    lines = [_section("Deal Criteria")]
    for key, ok in criteria.model_dump().items():
        mark = "x" if ok else " "
        lines.append(f"- [{mark}] {_CRITERIA_LABELS.get(key, key)}")
    lines.append("")
    lines.append(f"**Verdict:** {'MEETS ALL CRITERIA' if criteria.passes_all else 'DOES NOT MEET ALL CRITERIA'}")
    return "\n".join(lines) + "\n"


def _render_schedule_summary(schedule: list[AmortizationRow]) -> str:
    """
    Annual roll-up of the monthly schedule.

    Columns:
      Year | Payments | Interest | Principal | Ending Balance
    """
    if not schedule:
        return ""
    years = annual_summary(schedule)
    header = [
        _section(f"Amortization ({len(years)} Years, first payment {schedule[0].payment_date.isoformat()})"),
        "| Year | Payments | Interest | Principal | Ending Balance |",
        "| ---: | ---: | ---: | ---: | ---: |",
    ]
    rows = [
        f"| {y.year} | {fmt_currency(y.payment)} | {fmt_currency(y.interest)} "
        f"| {fmt_currency(y.principal)} | {fmt_currency(y.ending_balance)} |"
        for y in years
    ]
    return "\n".join(header + rows) + "\n"


# -----------------------
# Reports
# -----------------------


def generate_creative_report(
    inputs: CreativeFinancingInputs,
    result: CreativeFinancingResult,
    title: str | None = None,
) -> str:
    """
    Markdown report for a creative-financing evaluation.

    Sections: offer terms, financing, seller profit, cash flow, criteria, amortization.
    """
    loan_kind = "Interest-only" if inputs.interest_only else "Amortizing"
    parts = [
        f"# {title or 'Creative Financing Analysis'}\n",
        _section("Offer"),
        f"- **Purchase Price:** {fmt_currency(inputs.purchase_price)}",
        f"- **Listed Price:** {fmt_currency(inputs.listed_price)}",
        f"- **Down Payment:** {fmt_currency(inputs.down_payment)}",
        f"- **Seller Discount:** {fmt_currency(result.seller_profit.amount)} ({fmt_pct(result.seller_profit.percentage)})",
        _section("Financing"),
        f"- **Loan Amount:** {fmt_currency(result.loan_amount)}",
        f"- **Rate / Term:** {inputs.interest_rate_pct:.2f}% / {inputs.term_years} years ({loan_kind})",
        f"- **Monthly Payment:** {fmt_currency(result.monthly_payment)}",
        f"- **Balloon Due (Year {inputs.balloon_years:g}):** {fmt_currency(result.balloon_balance)}",
        _render_cash_flow(result.cash_flow),
        _render_criteria(result.criteria),
        _render_schedule_summary(result.schedule),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def generate_mortgage_report(inputs: MortgageInputs, result: MortgageAnalysis, title: str | None = None) -> str:
    parts = [
        f"# {title or 'Mortgage Analysis'}\n",
        _section("Loan"),
        f"- **Loan Amount:** {fmt_currency(inputs.loan_amount)}",
        f"- **Rate / Term:** {inputs.interest_rate_pct:.2f}% / {inputs.term_years} years",
        f"- **Monthly Payment:** {fmt_currency(result.monthly_payment)}",
        f"- **Total Interest:** {fmt_currency(result.total_interest)}",
        _section("Balloon Balances"),
        *[f"- Year {year}: {fmt_currency(bal)}" for year, bal in sorted(result.balloon_balances.items())],
        _render_cash_flow(result.cash_flow),
        _render_schedule_summary(result.schedule),
    ]
    return "\n".join(part for part in parts if part).strip() + "\n"


def generate_wholesale_report(inputs: WholesaleInputs, result: WholesaleResult, title: str | None = None) -> str:
    lines = [
        f"# {title or 'Wholesale Deal Analysis'}\n",
        _section("Offers"),
        f"- **ARV:** {fmt_currency(inputs.arv)} (exit at {result.exit_percentage:.0%} = {fmt_currency(result.preferred_exit_price)})",
        f"- **Rehab ({result.rehab_source.replace('_', ' ')}):** {fmt_currency(result.total_rehab_cost)}",
        f"- **Preferred Offer:** {fmt_currency(result.preferred_offer)}",
        f"- **Maximum Allowable Offer:** {fmt_currency(result.max_allowable_offer)}",
        f"- **Assignment Fee:** {fmt_currency(result.assignment_fee)}",
        f"- **Wholesale Price:** {fmt_currency(result.wholesale_price)}",
        _section("Investor View"),
        f"- **Investor Profit:** {fmt_currency(result.investor_profit)}",
        f"- **Investor ROI:** {fmt_pct(result.roi)}",
        f"- **Minimum Score:** {fmt_pct(result.minimum_score)}",
    ]
    if result.needs_alternatives:
        lines += [
            _section("Feasibility"),
            f"- Seller asks {fmt_currency(inputs.seller_asking_price)}, above the MAO. "
            "Consider creative financing alternatives.",
        ]
    return "\n".join(lines).strip() + "\n"


def write_report(path: str, markdown: str) -> None:
    """
    Convenience helper to write a generated report to disk.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(markdown)
