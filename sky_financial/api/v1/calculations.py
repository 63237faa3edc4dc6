"""POST /v1/calculate and GET /v1/calculators - financial calculator endpoints"""

import time
import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request
from pydantic import TypeAdapter

from sky_financial.api.v1.schemas import (
    BreakdownSchema,
    CalculationRequest,
    CalculationResponse,
    CalculatorInfo,
    CalculatorListResponse,
    DefaultInputSchema,
    InputBoundsSchema,
)
from sky_financial.api.dependencies import get_request_id
from sky_financial.domain.bounds import bounds_for, clamp_input, default_input, find_violations
from sky_financial.domain.calculator import calculate
from sky_financial.domain.exceptions import InputOutOfRangeError
from sky_financial.domain.models import CalculationInput, CalculationResult, CalculatorKind, TaxResult
from sky_financial.infrastructure.observability.logging import log_calculation
from sky_financial.infrastructure.observability.metrics import record_calculation
from sky_financial.utils.currency import format_inr

router = APIRouter()

_response_adapter = TypeAdapter(CalculationResponse)


def to_response(result: CalculationResult) -> CalculationResponse:
    """Map a domain result onto its response schema, adding display strings"""
    body = asdict(result)
    body["kind"] = result.kind.value
    body["breakdown"] = [
        BreakdownSchema(
            label=entry.label,
            value=entry.value,
            color=entry.color,
            formatted=format_inr(entry.value),
        )
        for entry in result.breakdown
    ]
    return _response_adapter.validate_python(body)


@router.get("/calculators", response_model=CalculatorListResponse)
def list_calculators():
    """
    List every calculator with its default input and accepted ranges.

    Returns:
        One entry per calculator kind, in display order
    """
    calculators = []
    for kind in CalculatorKind:
        bounds = bounds_for(kind)
        calculators.append(
            CalculatorInfo(
                kind=kind,
                defaults=DefaultInputSchema(**asdict(default_input(kind))),
                bounds=InputBoundsSchema(**asdict(bounds)),
            )
        )
    return CalculatorListResponse(calculators=calculators)


@router.post("/calculate", response_model=CalculationResponse)
def create_calculation(request_body: CalculationRequest, request: Request):
    """
    Evaluate one calculator.

    Flow:
    1. Check the input against the calculator's ranges (or clamp it)
    2. Run the calculation engine
    3. Record metrics and logs
    4. Return the typed result with formatted breakdown values
    """
    start_time = time.time()
    request_id = get_request_id(request)
    kind = request_body.kind

    data = CalculationInput(
        amount=request_body.amount,
        rate=request_body.rate,
        duration=request_body.duration,
        deductions=request_body.deductions,
    )

    try:
        if request_body.clamp:
            data = clamp_input(kind, data)
        else:
            violations = find_violations(kind, data)
            if violations:
                raise InputOutOfRangeError(violations)

    except InputOutOfRangeError as e:
        logging.warning(f"Input out of range: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.violations)

    result = calculate(kind, data)

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(kind, result.better_regime if isinstance(result, TaxResult) else None)
    log_calculation(request_id, kind.value, duration_ms)

    return to_response(result)
