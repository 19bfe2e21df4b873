# src/core/finance/wholesale.py

from __future__ import annotations

from src.core.finance.cashflow import ratio_pct
from src.schemas.models import (
    ExitTier,
    PropertyCondition,
    RehabCostTable,
    RehabItems,
    RehabSource,
    WholesaleInputs,
    WholesalePolicy,
    WholesaleResult,
)

DEFAULT_POLICY = WholesalePolicy()


def exit_percentage(arv: float, tiers: list[ExitTier] | None = None) -> float:
    """
    Exit price as a fraction of ARV, from the first bracket with arv < below_arv.

    Default brackets: <150k 0.60, <200k 0.65, <300k 0.70, <400k 0.75, else 0.80.
    """
    for tier in tiers or DEFAULT_POLICY.exit_tiers:
        if tier.below_arv is None or arv < tier.below_arv:
            return tier.exit_pct
    # WholesalePolicy guarantees an open last tier; hand-built tier lists may not.
    raise ValueError("exit tiers do not cover the given ARV")


def quick_rehab_cost(square_footage: float, condition: PropertyCondition, table: RehabCostTable | None = None) -> float:
    """Flat rehab estimate by condition and square-footage band (<1500, <2000, <2500, >=2500)."""
    bands = (table or DEFAULT_POLICY.rehab_table).for_condition(condition)
    if square_footage < 1500:
        return bands.under_1500
    if square_footage < 2000:
        return bands.under_2000
    if square_footage < 2500:
        return bands.under_2500
    return bands.over_2500


def resolve_rehab_cost(
    manual_cost: float,
    square_footage: float,
    condition: PropertyCondition,
    items: RehabItems,
    table: RehabCostTable | None = None,
) -> tuple[float, RehabSource]:
    """
    Pick the rehab figure by precedence:
      1) square footage > 0 -> quick estimate table
      2) itemized total > 0 -> itemized total
      3) manually entered cost
    """
    if square_footage > 0:
        return quick_rehab_cost(square_footage, condition, table), "square_footage"
    itemized = items.total
    if itemized > 0:
        return itemized, "itemized"
    return manual_cost, "manual"


def assignment_fee(arv: float, user_fee: float, policy: WholesalePolicy = DEFAULT_POLICY) -> float:
    """User fee when set; otherwise 5% of ARV, floored at $3,000 and capped at 10% of ARV."""
    if user_fee > 0:
        return user_fee
    return min(max(arv * policy.assignment_fee_pct, policy.assignment_fee_min), arv * policy.assignment_fee_cap_pct)


def needs_alternatives(seller_asking_price: float, max_allowable_offer: float) -> bool:
    """A wholesale is not feasible when the seller wants more than the MAO."""
    return seller_asking_price > 0 and seller_asking_price > max_allowable_offer


def wholesale_analysis(inputs: WholesaleInputs, policy: WholesalePolicy = DEFAULT_POLICY) -> WholesaleResult:
    """
    Offer, fee and investor-return figures for a wholesale flip.

    Formulas (default policy):
      preferred_offer     = ARV * 0.66 - rehab
      max_allowable_offer = ARV * 0.83 - rehab
      wholesale_price     = preferred_offer + assignment_fee
      investor_profit     = ARV - wholesale_price - rehab - holding - closing
      roi                 = investor_profit / (wholesale_price + rehab + holding + closing) * 100
      minimum_score       = investor_profit / ARV * 100
      preferred_exit      = ARV * exit_percentage(ARV)

    roi and minimum_score are None when their denominators are not positive.
    """
    arv = inputs.arv
    rehab, source = resolve_rehab_cost(
        inputs.rehab_cost,
        inputs.square_footage,
        inputs.condition,
        inputs.rehab_items,
        policy.rehab_table,
    )
    exit_pct = exit_percentage(arv, policy.exit_tiers)
    fee = assignment_fee(arv, inputs.wholesale_fee, policy)

    preferred_offer = arv * policy.preferred_offer_pct - rehab
    max_offer = arv * policy.max_offer_pct - rehab
    wholesale_price = preferred_offer + fee
    investor_profit = arv - wholesale_price - rehab - inputs.holding_cost - inputs.closing_cost

    total_investment = wholesale_price + rehab + inputs.holding_cost + inputs.closing_cost
    roi = ratio_pct(investor_profit, total_investment) if total_investment > 0 else None
    minimum_score = ratio_pct(investor_profit, arv) if arv > 0 else None

    return WholesaleResult(
        max_allowable_offer=max_offer,
        preferred_offer=preferred_offer,
        assignment_fee=fee,
        wholesale_price=wholesale_price,
        investor_profit=investor_profit,
        roi=roi,
        minimum_score=minimum_score,
        exit_percentage=exit_pct,
        total_rehab_cost=rehab,
        preferred_exit_price=arv * exit_pct,
        potential_profit=fee,
        rehab_source=source,
        needs_alternatives=needs_alternatives(inputs.seller_asking_price, max_offer),
    )
