"""Indian income tax: slab computation and old vs new regime comparison (FY 2024-25)"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sky_financial.domain.models import (
    NEW_REGIME_COLOR,
    OLD_REGIME_COLOR,
    BreakdownEntry,
    CalculationInput,
    TaxRegime,
    TaxResult,
)
from sky_financial.utils.currency import round_currency

CESS_RATE = 0.04  # Health and education cess


@dataclass(frozen=True)
class TaxSlab:
    """Marginal rate applied to income between lower and upper (None = no cap)"""

    lower: int
    upper: Optional[int]
    rate: float


@dataclass(frozen=True)
class RegimeRules:
    """Slab table plus rebate, relief and deduction rules of one regime"""

    slabs: Tuple[TaxSlab, ...]
    rebate_limit: int  # Section 87A: no tax at or below this taxable income
    marginal_relief: bool  # Cap tax at the income exceeding rebate_limit
    standard_deduction: int
    allows_deductions: bool  # Whether 80C/80D style deductions reduce income


REGIME_RULES: Dict[TaxRegime, RegimeRules] = {
    TaxRegime.NEW: RegimeRules(
        slabs=(
            TaxSlab(0, 300_000, 0.0),
            TaxSlab(300_000, 700_000, 0.05),
            TaxSlab(700_000, 1_000_000, 0.10),
            TaxSlab(1_000_000, 1_200_000, 0.15),
            TaxSlab(1_200_000, 1_500_000, 0.20),
            TaxSlab(1_500_000, None, 0.30),
        ),
        rebate_limit=700_000,
        marginal_relief=True,
        standard_deduction=75_000,
        allows_deductions=False,
    ),
    TaxRegime.OLD: RegimeRules(
        slabs=(
            TaxSlab(0, 250_000, 0.0),
            TaxSlab(250_000, 500_000, 0.05),
            TaxSlab(500_000, 1_000_000, 0.20),
            TaxSlab(1_000_000, None, 0.30),
        ),
        rebate_limit=500_000,
        marginal_relief=False,
        standard_deduction=50_000,
        allows_deductions=True,
    ),
}


def _slab_tax(taxable_income: float, slabs: Tuple[TaxSlab, ...]) -> float:
    """Sum the marginal tax of every slab the income reaches into"""
    tax = 0.0
    for slab in slabs:
        if taxable_income <= slab.lower:
            break
        top = taxable_income if slab.upper is None else min(taxable_income, slab.upper)
        tax += (top - slab.lower) * slab.rate
    return tax


def tax_liability(taxable_income: float, regime: TaxRegime) -> int:
    """
    Tax payable on taxable income under one regime, cess included.

    Rules:
    - Income within the nil slab pays exactly 0
    - Rebate u/s 87A: income <= rebate limit (7L new, 5L old) pays 0
    - New regime marginal relief: tax never exceeds income above 7L
    - 4% cess on the tax left after rebate/relief, rounded to whole rupees

    Example:
        7,00,001 under NEW -> slab tax 20,000.10, relief caps it at 1,
        1 + 4% cess = 1.04 -> 1
    """
    rules = REGIME_RULES[TaxRegime(regime)]

    if taxable_income <= rules.slabs[0].upper:
        return 0

    tax = _slab_tax(taxable_income, rules.slabs)

    if taxable_income <= rules.rebate_limit:
        tax = 0.0
    elif rules.marginal_relief:
        tax = min(tax, taxable_income - rules.rebate_limit)

    return round_currency(tax + (tax * CESS_RATE))


def taxable_income(gross_income: float, regime: TaxRegime, deductions: float = 0.0) -> float:
    """Income left after the regime's standard deduction (and user deductions where allowed)"""
    rules = REGIME_RULES[TaxRegime(regime)]
    income = gross_income - rules.standard_deduction
    if rules.allows_deductions:
        income -= deductions
    return max(0.0, income)


def compare_regimes(data: CalculationInput) -> TaxResult:
    """
    Compute tax under both regimes for an annual income.

    Old regime: 50k standard deduction plus the user's deductions.
    New regime: 75k standard deduction only; user deductions are ignored.
    """
    taxable_old = taxable_income(data.amount, TaxRegime.OLD, data.deductions)
    taxable_new = taxable_income(data.amount, TaxRegime.NEW, data.deductions)

    old_tax = tax_liability(taxable_old, TaxRegime.OLD)
    new_tax = tax_liability(taxable_new, TaxRegime.NEW)

    if new_tax < old_tax:
        better_regime = TaxRegime.NEW
    elif old_tax < new_tax:
        better_regime = TaxRegime.OLD
    else:
        better_regime = None

    return TaxResult(
        gross_income=data.amount,
        taxable_old=taxable_old,
        taxable_new=taxable_new,
        old_tax=old_tax,
        new_tax=new_tax,
        savings=abs(old_tax - new_tax),
        better_regime=better_regime,
        breakdown=[
            BreakdownEntry(label="Old Regime Tax", value=old_tax, color=OLD_REGIME_COLOR),
            BreakdownEntry(label="New Regime Tax", value=new_tax, color=NEW_REGIME_COLOR),
        ],
    )
