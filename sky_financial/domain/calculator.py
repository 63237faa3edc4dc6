"""Calculation engine entry point - routes each calculator kind to its formulas"""

from typing import Callable, Dict

from sky_financial.domain.exceptions import UnknownCalculatorError
from sky_financial.domain.investments import (
    calculate_emi,
    calculate_lumpsum,
    calculate_ppf,
    calculate_sip,
)
from sky_financial.domain.models import CalculationInput, CalculationResult, CalculatorKind
from sky_financial.domain.tax import compare_regimes

FORMULAS: Dict[CalculatorKind, Callable[[CalculationInput], CalculationResult]] = {
    CalculatorKind.SIP: calculate_sip,
    CalculatorKind.LUMPSUM: calculate_lumpsum,
    CalculatorKind.EMI: calculate_emi,
    CalculatorKind.PPF: calculate_ppf,
    CalculatorKind.TAX: compare_regimes,
}


def calculate(kind: CalculatorKind | str, data: CalculationInput) -> CalculationResult:
    """
    Main entry point: evaluate one calculator for the given input.

    Pure and stateless. Numeric inputs are not range-checked here; see
    domain.bounds for the limits the API enforces.

    Raises:
        UnknownCalculatorError: kind is not one of CalculatorKind
    """
    try:
        calculator_kind = CalculatorKind(kind)
    except ValueError as e:
        raise UnknownCalculatorError(f"Unknown calculator: {kind}") from e

    return FORMULAS[calculator_kind](data)
