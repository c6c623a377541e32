"""
Financial Calculation Engine

Pure calculation modules for property investment research: loan
installments, cash flow projections and market data summaries.
None of these modules perform I/O or keep state between calls.
"""

from propscope.calculations import (
    aggregation,
    amortization,
    columns,
    comparables,
    projection,
    properties,
    statistics,
)

__all__ = [
    "aggregation",
    "amortization",
    "columns",
    "comparables",
    "projection",
    "properties",
    "statistics",
]
