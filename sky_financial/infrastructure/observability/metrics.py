"""Prometheus metrics for calculator usage, regime recommendations and language model calls"""

from typing import Optional

from prometheus_client import Counter, Histogram

from sky_financial.domain.models import CalculatorKind, TaxRegime

# Calculation metrics
calculation_counter = Counter(
    "sky_calculation_total",
    "Total calculations served",
    ["kind"],  # SIP | LUMPSUM | EMI | PPF | TAX
)

tax_recommendation_counter = Counter(
    "sky_tax_recommendation_total",
    "Regime recommended by the tax comparison",
    ["regime"],  # old | new | equal
)

# Language model metrics
llm_latency_histogram = Histogram(
    "llm_stream_latency_seconds",
    "Time until a language model reply stream completes",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

llm_failure_counter = Counter(
    "llm_stream_failures_total",
    "Failed language model calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency until response headers are sent; streamed chat replies are timed by llm_stream_latency_seconds",
    ["method", "endpoint", "status"],
)


def record_calculation(kind: CalculatorKind, better_regime: Optional[TaxRegime] = None) -> None:
    """Record calculator usage; tax comparisons also record which regime won"""
    kind = CalculatorKind(kind)
    calculation_counter.labels(kind=kind.value).inc()

    if kind is CalculatorKind.TAX:
        regime = better_regime.value.lower() if better_regime else "equal"
        tax_recommendation_counter.labels(regime=regime).inc()
