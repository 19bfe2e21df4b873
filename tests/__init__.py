# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_creative_inputs, make_saved_deal
"""

from .utils import (
    make_creative_inputs,
    make_creative_offer_inputs,
    make_deal_analyzer_inputs,
    make_lease_option_inputs,
    make_mortgage_inputs,
    make_multifamily_inputs,
    make_novation_inputs,
    make_rental_inputs,
    make_saved_deal,
    make_seller_finance_inputs,
    make_syndication_inputs,
    make_wholesale_inputs,
)

__all__ = [
    "make_creative_inputs",
    "make_creative_offer_inputs",
    "make_deal_analyzer_inputs",
    "make_lease_option_inputs",
    "make_mortgage_inputs",
    "make_multifamily_inputs",
    "make_novation_inputs",
    "make_rental_inputs",
    "make_saved_deal",
    "make_seller_finance_inputs",
    "make_syndication_inputs",
    "make_wholesale_inputs",
]
