"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results.
Called on every edit of the projection table.
"""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from propscope.api.schemas import (
    GlobalSettingsInput,
    PropertyInput,
    property_from_input,
    settings_from_input,
)
from propscope.calculations import amortization, projection
from propscope.calculations.errors import CalculationError
from propscope.calculations.projection import ProjectionMode
from propscope.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class AmortizationInput(BaseModel):
    """Input for a single loan's installment calculation."""

    principal: float = Field(allow_inf_nan=False)
    annual_rate: float = Field(allow_inf_nan=False)  # percent, e.g. 4.5
    years: float = Field(allow_inf_nan=False)


class AmortizationResponse(BaseModel):
    monthly_payment: float
    first_month_principal: float
    first_month_interest: float


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Monthly installment and first-month principal/interest split."""
    result = amortization.amortize(inputs.principal, inputs.annual_rate, inputs.years)
    return AmortizationResponse(
        monthly_payment=result.monthly_payment,
        first_month_principal=result.first_month_principal,
        first_month_interest=result.first_month_interest,
    )


class ProjectionInput(BaseModel):
    """Input for projecting every row of the projection table."""

    properties: List[PropertyInput]
    settings: Optional[GlobalSettingsInput] = None
    mode: ProjectionMode = ProjectionMode.whole_unit

    # Loan-to-valuation percentages; configured defaults when omitted
    loan_percentage_1: Optional[float] = None
    loan_percentage_2: Optional[float] = None


class ProjectionResponse(BaseModel):
    mode: ProjectionMode
    loan_percentage_1: float
    loan_percentage_2: float
    results: List[dict]


@router.post("/projection", response_model=ProjectionResponse)
async def calculate_projection(inputs: ProjectionInput):
    """Cash flow projections for each property under the selected income mode."""
    app_settings = get_settings()
    settings = settings_from_input(inputs.settings)

    loan_pct_1 = inputs.loan_percentage_1
    if loan_pct_1 is None:
        loan_pct_1 = app_settings.default_loan_percentage_1
    loan_pct_2 = inputs.loan_percentage_2
    if loan_pct_2 is None:
        loan_pct_2 = app_settings.default_loan_percentage_2

    properties = [property_from_input(p, settings) for p in inputs.properties]

    try:
        results = projection.project_all(
            properties, settings, inputs.mode, loan_pct_1, loan_pct_2
        )
    except CalculationError as e:
        logger.info(f"Projection rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ProjectionResponse(
        mode=inputs.mode,
        loan_percentage_1=loan_pct_1,
        loan_percentage_2=loan_pct_2,
        results=[
            {**asdict(result), "mode": result.mode.value, "property_id": prop.id}
            for prop, result in zip(properties, results)
        ],
    )
