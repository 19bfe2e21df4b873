# src/schemas/models.py

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Percent convention: every *_pct field and every interest rate uses percent units (6.5 = 6.5%).

PropertyCondition = Literal["easy", "medium", "bad"]
PaymentFrequency = Literal["monthly", "quarterly", "annually"]
PropertyType = Literal["residential", "commercial"]
RentalStrategy = Literal["long-term", "short-term", "mixed"]
DealType = Literal["wholesale", "creative", "mortgage", "apartment", "advanced", "multifamily", "rental", "tax"]
RehabSource = Literal["square_footage", "itemized", "manual"]

# =========================
# Loan terms
# =========================


class LoanTerms(BaseModel):
    """Loan parameters shared by the payment and schedule formulas."""

    principal: float = Field(..., ge=0, description="Loan amount (currency units).")
    annual_rate_pct: float = Field(..., ge=0, description="Annual interest rate in percent (e.g., 6.0 = 6%).")
    term_years: int = Field(..., gt=0, description="Loan term in years; defines the schedule length (term_years * 12).")
    interest_only: bool = Field(False, description="Interest-only loan: payment = interest, balance never falls.")

    model_config = ConfigDict(frozen=True)


# =========================
# Cash flow & criteria
# =========================


class CashFlowInputs(BaseModel):
    """Monthly operating figures plus the cash put into the deal."""

    monthly_revenue: float = Field(0.0, description="Monthly rental/other revenue.")
    monthly_expenses: float = Field(0.0, description="Monthly operating expenses (excluding debt service).")
    monthly_debt_service: float = Field(0.0, description="Monthly loan payment.")
    total_cash_invested: float = Field(0.0, description="Total cash invested (down payment, fees, closing costs).")


class CashFlowResult(BaseModel):
    """Derived cash-flow figures. cash_on_cash_return_pct is None when no cash was invested."""

    monthly_cash_flow: float
    annual_cash_flow: float
    cash_on_cash_return_pct: float | None = Field(
        None, description="Annual cash flow / cash invested * 100; None (undefined) when cash invested is 0."
    )

    model_config = ConfigDict(frozen=True)


class CriteriaThresholds(BaseModel):
    """Policy thresholds for creative-financing deal screening."""

    min_monthly_cash_flow: float = Field(200.0, description="Minimum monthly cash flow.")
    max_purchase_price: float = Field(500_000.0, description="Maximum purchase price.")
    min_cash_on_cash_pct: float = Field(13.0, description="Minimum cash-on-cash return in percent.")
    max_down_payment_ratio: float = Field(0.15, ge=0, description="Maximum down payment / purchase price (fraction).")
    max_interest_rate_pct: float = Field(4.0, ge=0, description="Maximum interest rate in percent.")
    min_balloon_years: float = Field(5.0, ge=0, description="Minimum balloon term in years.")

    model_config = ConfigDict(frozen=True, extra="forbid")


class DealCriteria(BaseModel):
    """Pass/fail record of a deal against CriteriaThresholds."""

    meets_minimum_cash_flow: bool
    meets_maximum_offer_price: bool
    meets_minimum_cash_on_cash: bool
    meets_maximum_down_payment: bool
    meets_maximum_interest_rate: bool
    meets_minimum_balloon: bool

    model_config = ConfigDict(frozen=True)

    @property
    def passes_all(self) -> bool:
        return all(
            (
                self.meets_minimum_cash_flow,
                self.meets_maximum_offer_price,
                self.meets_minimum_cash_on_cash,
                self.meets_maximum_down_payment,
                self.meets_maximum_interest_rate,
                self.meets_minimum_balloon,
            )
        )

    def failed(self) -> list[str]:
        """Names of the criteria that did not pass, in declaration order."""
        return [name for name, ok in self.model_dump().items() if not ok]


class SellerProfit(BaseModel):
    """Seller's concession relative to the listed price."""

    amount: float = Field(..., description="listed_price - offer_price.")
    percentage: float | None = Field(None, description="amount / listed_price * 100; None when listed price is 0.")

    model_config = ConfigDict(frozen=True)


# =========================
# Wholesale policy & inputs
# =========================


class ExitTier(BaseModel):
    """One ARV bracket: applies when arv < below_arv (None = open upper bracket)."""

    below_arv: float | None = Field(None, description="Exclusive upper bound of the bracket; None for the last bracket.")
    exit_pct: float = Field(..., ge=0, le=1, description="Exit price as a fraction of ARV.")

    model_config = ConfigDict(frozen=True)


def _default_exit_tiers() -> list[ExitTier]:
    return [
        ExitTier(below_arv=150_000.0, exit_pct=0.60),
        ExitTier(below_arv=200_000.0, exit_pct=0.65),
        ExitTier(below_arv=300_000.0, exit_pct=0.70),
        ExitTier(below_arv=400_000.0, exit_pct=0.75),
        ExitTier(below_arv=None, exit_pct=0.80),
    ]


class RehabBands(BaseModel):
    """Flat rehab estimates by square-footage band for one property condition."""

    under_1500: float
    under_2000: float
    under_2500: float
    over_2500: float

    model_config = ConfigDict(frozen=True)


class RehabCostTable(BaseModel):
    """Quick rehab estimates keyed by property condition."""

    easy: RehabBands = RehabBands(under_1500=25_000.0, under_2000=35_000.0, under_2500=45_000.0, over_2500=55_000.0)
    medium: RehabBands = RehabBands(under_1500=40_000.0, under_2000=55_000.0, under_2500=70_000.0, over_2500=85_000.0)
    bad: RehabBands = RehabBands(under_1500=60_000.0, under_2000=80_000.0, under_2500=100_000.0, over_2500=120_000.0)

    model_config = ConfigDict(frozen=True)

    def for_condition(self, condition: PropertyCondition) -> RehabBands:
        return getattr(self, condition)


class WholesalePolicy(BaseModel):
    """Fixed-percentage heuristics behind the wholesale MAO calculator."""

    preferred_offer_pct: float = Field(0.66, description="Preferred offer = ARV * this - rehab.")
    max_offer_pct: float = Field(0.83, description="Maximum allowable offer = ARV * this - rehab.")
    assignment_fee_pct: float = Field(0.05, description="Default assignment fee as a fraction of ARV.")
    assignment_fee_min: float = Field(3_000.0, description="Floor for the default assignment fee.")
    assignment_fee_cap_pct: float = Field(0.10, description="Cap for the default assignment fee as a fraction of ARV.")
    exit_tiers: list[ExitTier] = Field(default_factory=_default_exit_tiers, description="ARV brackets, ascending.")
    rehab_table: RehabCostTable = Field(default_factory=RehabCostTable, description="Quick rehab estimates.")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("exit_tiers")
    @classmethod
    def _tiers_ascending_with_open_tail(cls, tiers: list[ExitTier]) -> list[ExitTier]:
        if not tiers:
            raise ValueError("exit_tiers must not be empty")
        if tiers[-1].below_arv is not None:
            raise ValueError("last exit tier must be open (below_arv = null)")
        bounds = [t.below_arv for t in tiers[:-1]]
        if any(b is None for b in bounds):
            raise ValueError("only the last exit tier may be open")
        if bounds != sorted(bounds):  # type: ignore[type-var]
            raise ValueError("exit_tiers must be sorted by below_arv ascending")
        return tiers


class RehabItems(BaseModel):
    """Itemized rehab budget."""

    kitchen: float = 0.0
    bathrooms: float = 0.0
    flooring: float = 0.0
    paint: float = 0.0
    hvac: float = 0.0
    roof: float = 0.0
    other: float = 0.0

    model_config = ConfigDict(extra="forbid")

    @property
    def total(self) -> float:
        return sum(self.model_dump().values())


class WholesaleInputs(BaseModel):
    """Inputs for the wholesale flip calculator (missing numbers are 0)."""

    arv: float = Field(0.0, description="After Repair Value.")
    rehab_cost: float = Field(0.0, description="Manually entered rehab cost (lowest precedence).")
    holding_cost: float = Field(0.0, description="Investor holding costs.")
    closing_cost: float = Field(0.0, description="Investor closing costs.")
    wholesale_fee: float = Field(0.0, description="User-set assignment fee; 0 means use the ARV-based default.")
    square_footage: float = Field(0.0, description="If > 0, rehab is estimated from the quick cost table.")
    condition: PropertyCondition = Field("medium", description="Property condition for the quick cost table.")
    rehab_items: RehabItems = Field(default_factory=RehabItems, description="Itemized rehab budget (second precedence).")
    seller_asking_price: float = Field(0.0, description="Seller's asking price, used for the feasibility check.")


class WholesaleResult(BaseModel):
    """Offer and profit figures for a wholesale deal."""

    max_allowable_offer: float
    preferred_offer: float
    assignment_fee: float
    wholesale_price: float
    investor_profit: float
    roi: float | None = Field(None, description="Investor ROI in percent; None when the investor's total cost is 0.")
    minimum_score: float | None = Field(None, description="Investor profit / ARV * 100; None when ARV is 0.")
    exit_percentage: float = Field(..., description="Exit price as a fraction of ARV (e.g., 0.70).")
    total_rehab_cost: float
    preferred_exit_price: float
    potential_profit: float = Field(..., description="Wholesaler's profit (the assignment fee).")
    rehab_source: RehabSource = Field(..., description="Which input produced total_rehab_cost.")
    needs_alternatives: bool = Field(False, description="True when the seller's asking price exceeds the MAO.")

    model_config = ConfigDict(frozen=True)


# =========================
# Creative financing & mortgage
# =========================


class CreativeFinancingInputs(BaseModel):
    """Seller-carry / creative financing offer."""

    purchase_price: float = Field(0.0, ge=0)
    listed_price: float = Field(0.0, ge=0)
    down_payment: float = Field(0.0, ge=0, description="Down payment in currency units.")
    interest_rate_pct: float = Field(0.0, ge=0)
    term_years: int = Field(30, gt=0)
    balloon_years: float = Field(7.0, ge=0)
    rental_revenue: float = Field(0.0, description="Monthly rental revenue.")
    operating_expenses: float = Field(0.0, description="Monthly operating expenses.")
    buyer_entry_fee: float = Field(0.0, ge=0)
    closing_costs: float = Field(0.0, ge=0)
    interest_only: bool = False
    first_payment_date: date | None = None

    @model_validator(mode="after")
    def _down_payment_within_price(self) -> CreativeFinancingInputs:
        if self.down_payment > self.purchase_price:
            raise ValueError("down_payment cannot exceed purchase_price")
        return self


class MortgageInputs(BaseModel):
    """Mortgage analyzer inputs; operating expenses are monthly line items."""

    loan_amount: float = Field(0.0, ge=0)
    interest_rate_pct: float = Field(0.0, ge=0)
    term_years: int = Field(30, gt=0)
    down_payment: float = Field(0.0, ge=0)
    rental_revenue: float = Field(0.0, description="Monthly rental revenue.")
    operating_expenses: dict[str, float] = Field(default_factory=dict, description="Monthly expense line items.")
    closing_costs: float = Field(0.0, ge=0)
    first_payment_date: date | None = None


# =========================
# Seller finance
# =========================


class SellerFinanceInputs(BaseModel):
    """Seller-financed purchase with an optional balloon."""

    purchase_price: float = Field(0.0, ge=0)
    down_payment_pct: float = Field(0.0, ge=0, le=100)
    interest_rate_pct: float = Field(0.0, ge=0)
    loan_term_years: int = Field(30, gt=0)
    balloon_term_years: int = Field(0, ge=0, description="0 = no balloon.")
    monthly_rent: float = 0.0
    vacancy_pct: float = Field(0.0, ge=0, le=100)
    management_pct: float = Field(0.0, ge=0, le=100, description="Management as percent of effective gross income.")
    property_taxes: float = Field(0.0, description="Annual property taxes.")
    insurance: float = Field(0.0, description="Annual insurance.")
    maintenance_pct: float = Field(0.0, ge=0, le=100, description="Maintenance as percent of effective gross income.")
    seller_concessions: float = Field(0.0, ge=0)
    appreciation_pct: float = Field(0.0, description="Annual appreciation in percent.")
    payment_frequency: PaymentFrequency = "monthly"


# =========================
# Multifamily / apartment
# =========================


class MultiFamilyInputs(BaseModel):
    """Apartment/multifamily underwriting inputs (expense percentages apply to effective gross income)."""

    purchase_price: float = Field(0.0, ge=0)
    number_of_units: int = Field(0, ge=0)
    average_rent: float = Field(0.0, description="Average monthly rent per unit.")
    other_income: float = Field(0.0, description="Other monthly income for the whole property.")
    vacancy_pct: float = Field(0.0, ge=0, le=100)
    management_pct: float = Field(0.0, ge=0, le=100)
    repairs_pct: float = Field(0.0, ge=0, le=100)
    capex_pct: float = Field(0.0, ge=0, le=100)
    property_tax: float = Field(0.0, description="Annual property tax.")
    insurance: float = Field(0.0, description="Annual insurance.")
    utilities: float = Field(0.0, description="Annual owner-paid utilities.")
    down_payment_pct: float = Field(0.0, ge=0, le=100)
    interest_rate_pct: float = Field(0.0, ge=0)
    loan_term_years: int = Field(30, gt=0)
    closing_costs: float = Field(0.0, ge=0)
    appreciation_pct: float = 0.0


class MultiFamilyResult(BaseModel):
    monthly_gross_income: float
    annual_gross_income: float
    effective_gross_income: float
    monthly_expenses: float
    annual_expenses: float
    monthly_noi: float
    annual_noi: float
    monthly_mortgage_payment: float
    annual_mortgage_payment: float
    monthly_cash_flow: float
    annual_cash_flow: float
    cash_on_cash_return_pct: float | None
    cap_rate_pct: float | None
    total_investment: float
    one_percent_rule: bool
    gross_rent_multiplier: float | None
    dscr: float | None = Field(None, description="Annual NOI / annual debt service; None with no debt.")

    model_config = ConfigDict(frozen=True)


# =========================
# Rental strategy comparison
# =========================


class RentalInputs(BaseModel):
    """Single-property inputs for comparing long-term and short-term rental strategies."""

    purchase_price: float = Field(300_000.0, gt=0)
    down_payment_pct: float = Field(20.0, ge=0, le=100)
    interest_rate_pct: float = Field(6.5, ge=0)
    term_years: int = Field(30, gt=0)
    rehab_costs: float = 20_000.0
    property_taxes: float = Field(3_000.0, description="Annual property taxes.")
    insurance: float = Field(1_200.0, description="Annual insurance.")
    maintenance: float = Field(200.0, description="Monthly maintenance.")
    utilities: float = Field(150.0, description="Monthly utilities.")
    monthly_rent: float = 2_000.0
    vacancy_pct: float = Field(5.0, ge=0, le=100)
    management_pct: float = Field(8.0, ge=0, le=100, description="Long-term management as percent of rent.")
    nightly_rate: float = 150.0
    occupancy_pct: float = Field(75.0, ge=0, le=100)
    cleaning_fee: float = Field(50.0, description="Cleaning cost per occupied night.")
    platform_fee_pct: float = Field(15.0, ge=0, le=100)
    seasonal_adjustment_pct: float = 10.0


class RentalMetrics(BaseModel):
    strategy: Literal["long-term", "short-term"]
    monthly_mortgage: float
    total_monthly_expenses: float
    monthly_cash_flow: float
    annual_cash_flow: float
    cap_rate_pct: float | None
    roi_pct: float | None
    cash_on_cash_return_pct: float | None
    gross_rent_multiplier: float | None = None
    vacancy_pct: float = 0.0
    break_even_occupancy_pct: float | None = None
    annual_revenue: float = 0.0
    average_daily_rate: float = 0.0

    model_config = ConfigDict(frozen=True)


class StrategyRecommendation(BaseModel):
    strategy: RentalStrategy
    reasoning: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)


class RentalComparison(BaseModel):
    long_term: RentalMetrics
    short_term: RentalMetrics
    recommendation: StrategyRecommendation


# =========================
# Tax / depreciation
# =========================


class CapitalGainsRates(BaseModel):
    short_term_rate_pct: float = Field(22.0, ge=0, le=100)
    long_term_rate_pct: float = Field(15.0, ge=0, le=100)
    recapture_rate_pct: float = Field(25.0, ge=0, le=100)


class CapitalGainsResult(BaseModel):
    purchase_price: float
    estimated_sale_price: float
    holding_years: int
    is_long_term: bool
    total_depreciation: float
    capital_gains: float
    depreciation_recapture: float
    capital_gains_tax: float
    total_tax: float

    model_config = ConfigDict(frozen=True)


class TaxSavings(BaseModel):
    annual_depreciation: float
    annual_tax_savings: float
    total_tax_savings: float
    marginal_tax_rate_pct: float

    model_config = ConfigDict(frozen=True)


# =========================
# Automated deal analyzer
# =========================


class DealAnalyzerInputs(BaseModel):
    """Flip deal screened against a target profit and return."""

    purchase_price: float = Field(150_000.0, ge=0)
    arv: float = Field(250_000.0, ge=0, description="After Repair Value.")
    rehab_costs: float = Field(35_000.0, ge=0)
    holding_costs: float = Field(5_000.0, ge=0)
    closing_costs: float = Field(7_500.0, ge=0)
    desired_profit: float = Field(25_000.0, gt=0, description="Target profit backed out of the ARV for the MAO.")
    desired_roi_pct: float = Field(15.0, gt=0, description="Target cash-on-cash return in percent.")


class FinancingOption(BaseModel):
    """Creative structure suggested when the asking price is above the MAO."""

    strategy: str
    down_payment: float
    interest_rate_pct: float
    term_years: int
    monthly_payment: float
    total_cost: float
    benefits: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SensitivityScenario(BaseModel):
    name: str = Field(..., description='e.g. "ARV 90%, Rehab 125%".')
    arv_factor: float
    rehab_factor: float
    arv: float
    rehab_costs: float
    total_cost: float
    profit: float
    roi_pct: float | None
    risk_level: Literal["low", "medium", "high"]
    is_viable: bool

    model_config = ConfigDict(frozen=True)


class SensitivityAnalysis(BaseModel):
    scenarios: list[SensitivityScenario]
    viable_scenarios: int
    viability_rate_pct: float
    risk_insights: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DealAnalyzerResult(BaseModel):
    maximum_allowable_offer: float
    potential_profit: float
    total_investment: float
    cash_on_cash_return_pct: float | None
    estimated_annual_rent: float = Field(..., description="Rule-of-thumb rent: 8% of ARV per year.")
    cap_rate_pct: float | None
    is_viable: bool = Field(..., description="MAO covers the purchase price.")
    meets_criteria: bool = Field(..., description="Cash-on-cash return reaches desired_roi_pct.")
    deal_score: float = Field(..., description="0..100: up to 50 for profit, up to 50 for return.")
    price_gap: float = Field(..., description="Purchase price above the MAO; 0 when the MAO covers it.")
    financing_options: list[FinancingOption] = Field(default_factory=list)
    sensitivity: SensitivityAnalysis

    model_config = ConfigDict(frozen=True)


# =========================
# Creative offers (subject-to, lease option, owner finance)
# =========================


class CreativeOfferInputs(BaseModel):
    """One property priced three ways. Holding costs are annual; every other cost is one-off."""

    purchase_price: float = Field(0.0, ge=0)
    arv: float = Field(0.0, ge=0, description="After Repair Value.")
    repair_costs: float = Field(0.0, ge=0)
    closing_costs: float = Field(0.0, ge=0)
    holding_costs: float = Field(0.0, ge=0, description="Annual holding costs.")
    selling_costs: float = Field(0.0, ge=0)
    # subject-to
    existing_loan_balance: float = Field(0.0, ge=0)
    existing_monthly_payment: float = Field(0.0, ge=0)
    # lease option
    option_fee: float = Field(0.0, ge=0)
    lease_term_months: int = Field(24, gt=0)
    monthly_rent: float = Field(0.0, ge=0)
    rent_credit_pct: float = Field(20.0, ge=0, le=100, description="Share of each rent payment credited to the price.")
    option_purchase_price: float = Field(0.0, ge=0, description="Strike price; 0 means the ARV.")
    # owner finance
    down_payment_pct: float = Field(10.0, ge=0, le=100)
    interest_rate_pct: float = Field(6.0, ge=0)
    loan_term_years: int = Field(15, gt=0)
    balloon_term_years: int = Field(5, ge=0, description="0, or not shorter than the loan term, means no balloon.")


class SubjectToOffer(BaseModel):
    initial_investment: float = Field(..., description="Repairs + closing costs.")
    estimated_rent: float = Field(..., description="Rule-of-thumb monthly rent: 0.8% of ARV.")
    monthly_cash_flow: float
    annual_cash_flow: float
    equity_capture: float
    roi_pct: float | None
    exit_profit: float = Field(..., description="Sell after repairs, net of selling costs.")

    model_config = ConfigDict(frozen=True)


class LeaseOptionOffer(BaseModel):
    initial_investment: float = Field(..., description="Option fee + repairs.")
    monthly_cash_flow: float
    annual_cash_flow: float
    total_rent_collected: float
    total_rent_credits: float
    option_purchase_price: float
    exit_profit: float = Field(..., description="Tenant-buyer exercises the option.")

    model_config = ConfigDict(frozen=True)


class OwnerFinanceOffer(BaseModel):
    down_payment: float
    loan_amount: float
    monthly_payment: float
    total_interest: float = Field(..., description="Through the balloon, or over the full term with no balloon.")
    balloon_amount: float
    equity_capture: float
    interest_roi_pct: float | None = Field(..., description="Interest earned / down payment.")

    model_config = ConfigDict(frozen=True)


class CreativeOfferComparison(BaseModel):
    subject_to: SubjectToOffer
    lease_option: LeaseOptionOffer
    owner_finance: OwnerFinanceOffer

    model_config = ConfigDict(frozen=True)


# =========================
# Advanced financing (lease option, syndication, novation)
# =========================


class LeaseOptionInputs(BaseModel):
    """Buyer-side lease option: option fee now, financed purchase later."""

    property_value: float = Field(0.0, ge=0)
    option_fee: float = Field(0.0, ge=0)
    option_period_months: int = Field(12, gt=0)
    monthly_rent: float = Field(0.0, ge=0)
    purchase_price: float = Field(0.0, ge=0, description="Strike price.")
    down_payment: float = Field(0.0, ge=0)
    interest_rate_pct: float = Field(0.0, ge=0)
    loan_term_years: int = Field(30, gt=0)

    @model_validator(mode="after")
    def _down_payment_within_price(self) -> LeaseOptionInputs:
        if self.down_payment > self.purchase_price:
            raise ValueError("down_payment cannot exceed purchase_price")
        return self


class LeaseOptionResult(BaseModel):
    loan_amount: float
    monthly_payment: float
    total_option_payments: float = Field(..., description="Rent paid over the option period.")
    potential_profit: float = Field(..., description="Property value above the strike price.")
    total_investment: float = Field(..., description="Option fee + down payment.")
    roi_pct: float | None

    model_config = ConfigDict(frozen=True)


class SyndicationInputs(BaseModel):
    """Multifamily syndication split between general (GP) and limited (LP) partners."""

    property_value: float = Field(0.0, ge=0)
    total_units: int = Field(0, ge=0)
    average_rent: float = Field(0.0, ge=0, description="Average monthly rent per unit.")
    vacancy_pct: float = Field(5.0, ge=0, le=100)
    operating_expenses: float = Field(0.0, ge=0, description="Annual operating expenses.")
    management_fee_pct: float = Field(3.0, ge=0, le=100, description="Percent of gross potential income.")
    gp_split_pct: float = Field(20.0, ge=0, le=100)
    lp_split_pct: float = Field(80.0, ge=0, le=100)
    investment_amount: float = Field(0.0, ge=0, description="Total LP capital.")

    @model_validator(mode="after")
    def _splits_sum_to_100(self) -> SyndicationInputs:
        if abs(self.gp_split_pct + self.lp_split_pct - 100.0) > 1e-9:
            raise ValueError("gp_split_pct + lp_split_pct must equal 100")
        return self


class SyndicationResult(BaseModel):
    gross_potential_income: float
    vacancy_loss: float
    management_fees: float
    noi: float
    cap_rate_pct: float | None
    gp_share: float
    lp_share: float = Field(..., description="Limited partners' share of NOI.")
    cash_on_cash_return_pct: float | None = Field(..., description="LP share / LP capital.")

    model_config = ConfigDict(frozen=True)


class NovationInputs(BaseModel):
    """Replace an existing loan on the current balance. Terms are in months."""

    original_loan_amount: float = Field(0.0, ge=0)
    current_balance: float = Field(0.0, ge=0)
    interest_rate_pct: float = Field(0.0, ge=0)
    remaining_term_months: int = Field(360, gt=0)
    new_interest_rate_pct: float = Field(0.0, ge=0)
    new_term_months: int = Field(360, gt=0)
    closing_costs: float = Field(0.0, ge=0)


class NovationResult(BaseModel):
    current_monthly_payment: float
    new_monthly_payment: float
    monthly_savings: float
    total_savings: float = Field(..., description="Savings over the new term, net of closing costs.")
    break_even_months: float | None = Field(..., description="None when the new loan saves nothing per month.")

    model_config = ConfigDict(frozen=True)


# =========================
# Persisted deals & dashboard
# =========================


class SavedDeal(BaseModel):
    """Persisted calculator run. inputs/results are opaque JSON blobs owned by the caller."""

    id: str = Field(..., description="UUID4 string.")
    type: DealType
    name: str
    date: str = Field(..., description="ISO-8601 timestamp of the save.")
    inputs: dict = Field(default_factory=dict)
    results: dict = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")


class PortfolioStats(BaseModel):
    """Dashboard summary across saved deals."""

    total_deals: int
    deals_by_type: dict[str, int]
    recent: list[SavedDeal] = Field(default_factory=list, description="Up to five most recent deals, newest first.")
    deals_with_cash_flow: int = 0
    average_annual_cash_flow: float = 0.0
    median_annual_cash_flow: float | None = None
    p25_annual_cash_flow: float | None = None
    p75_annual_cash_flow: float | None = None
