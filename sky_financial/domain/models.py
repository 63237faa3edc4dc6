"""Domain models - pure Python dataclasses representing calculator inputs and results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class CalculatorKind(str, Enum):
    """Calculator selected by the caller"""

    SIP = "SIP"
    LUMPSUM = "LUMPSUM"
    EMI = "EMI"
    PPF = "PPF"
    TAX = "TAX"


class TaxRegime(str, Enum):
    """Indian income-tax regime"""

    OLD = "OLD"
    NEW = "NEW"


# Chart colour tags
INVESTED_COLOR = "#3b82f6"
RETURNS_COLOR = "#10b981"
OLD_REGIME_COLOR = "#ef4444"
NEW_REGIME_COLOR = "#10b981"


@dataclass(frozen=True)
class CalculationInput:
    """
    Raw calculator input.

    rate and duration only matter for SIP/LUMPSUM/EMI/PPF,
    deductions only for TAX.
    """

    amount: float
    rate: float = 0.0
    duration: int = 0  # years
    deductions: float = 0.0


@dataclass
class BreakdownEntry:
    """One chart slice"""

    label: str
    value: int
    color: str


@dataclass
class InvestmentResult:
    """Outcome of a SIP, lumpsum or PPF projection"""

    kind: CalculatorKind
    invested_amount: int
    wealth_gained: int
    total_value: int
    breakdown: List[BreakdownEntry] = field(default_factory=list)


@dataclass
class EmiResult:
    """Loan repayment schedule summary"""

    principal: int
    interest: int
    monthly_payment: int
    total_payable: int
    breakdown: List[BreakdownEntry] = field(default_factory=list)
    kind: CalculatorKind = CalculatorKind.EMI


@dataclass
class TaxResult:
    """Old vs new regime comparison"""

    gross_income: float
    taxable_old: float
    taxable_new: float
    old_tax: int
    new_tax: int
    savings: int
    better_regime: Optional[TaxRegime]  # None when both regimes cost the same
    breakdown: List[BreakdownEntry] = field(default_factory=list)
    kind: CalculatorKind = CalculatorKind.TAX


CalculationResult = Union[InvestmentResult, EmiResult, TaxResult]
