"""
Projection row API endpoints.

Rows are owned by the client; these endpoints apply the default rules
(maintenance from size, rent from bedroom type) and return updated rows.
"""

import logging
from dataclasses import replace
from typing import List, Literal, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from propscope.api.schemas import (
    GlobalSettingsInput,
    PropertyInput,
    PropertyResponse,
    property_from_input,
    property_to_response,
    settings_from_input,
)
from propscope.calculations import properties

logger = logging.getLogger(__name__)

router = APIRouter()


class UnitListingInput(BaseModel):
    """A unit selected from the developer's unit listing."""

    type: str = ""
    size: float = 0.0
    spa_price: float = 0.0


class FromListingsInput(BaseModel):
    units: List[UnitListingInput]
    settings: Optional[GlobalSettingsInput] = None


class PropertyListResponse(BaseModel):
    """Response for a list of projection rows."""

    properties: List[PropertyResponse]
    total: int


@router.post("/from-listings", response_model=PropertyListResponse)
async def create_from_listings(inputs: FromListingsInput):
    """Build projection rows from selected unit listings."""
    settings = settings_from_input(inputs.settings)

    if not inputs.units:
        rows = [properties.default_property(settings, property_id=1)]
    else:
        rows = [
            properties.property_from_listing(
                unit.type,
                unit.size,
                unit.spa_price,
                settings,
                index=index,
                property_id=index + 1,
            )
            for index, unit in enumerate(inputs.units)
        ]

    return PropertyListResponse(
        properties=[property_to_response(p) for p in rows],
        total=len(rows),
    )


EditableField = Literal[
    "type",
    "bedrooms_type",
    "size",
    "spa_price",
    "valuation_psf",
    "net_psf",
    "whole_unit_rental",
    "co_living_rental",
    "airbnb_rental_per_night",
    "maintenance_sinking",
    "wifi",
]

TEXT_FIELDS = ("type", "bedrooms_type")


class PropertyEditInput(BaseModel):
    """A single field edit on a projection row.

    Setting maintenance_sinking to null clears a manual override.
    """

    property: PropertyInput
    field: EditableField
    value: Optional[Union[float, str]] = None
    settings: Optional[GlobalSettingsInput] = None


@router.post("/edit", response_model=PropertyResponse)
async def edit_property(inputs: PropertyEditInput):
    """Apply one edit, recomputing dependent defaults."""
    settings = settings_from_input(inputs.settings)
    prop = property_from_input(inputs.property, settings)
    value = inputs.value

    if inputs.field in TEXT_FIELDS:
        text = "" if value is None else str(value)
        if inputs.field == "bedrooms_type":
            prop = prop.with_bedrooms_type(text, settings)
        else:
            prop = replace(prop, type=text)
        return property_to_response(prop)

    if inputs.field == "maintenance_sinking" and value is None:
        return property_to_response(prop.reset_maintenance())

    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.info(f"Rejected edit of {inputs.field}: {value!r}")
        raise HTTPException(
            status_code=400, detail=f"{inputs.field} must be a number"
        )

    if inputs.field == "size":
        prop = prop.with_size(number, settings)
    elif inputs.field == "maintenance_sinking":
        prop = prop.with_maintenance(number)
    else:
        prop = replace(prop, **{inputs.field: number})

    return property_to_response(prop)


class MaintenanceFeeInput(BaseModel):
    """Rows as currently shown, and the new maintenance fee per sqft."""

    properties: List[PropertyInput]
    maintenance_fee_psf: float = Field(ge=0, allow_inf_nan=False)
    settings: Optional[GlobalSettingsInput] = None


@router.post("/maintenance-fee", response_model=PropertyListResponse)
async def apply_maintenance_fee(inputs: MaintenanceFeeInput):
    """Recompute every row's maintenance for a changed fee per sqft.

    The change replaces manually entered maintenance figures.
    """
    settings = settings_from_input(inputs.settings)
    rows = properties.apply_maintenance_fee_psf(
        [property_from_input(p, settings) for p in inputs.properties],
        inputs.maintenance_fee_psf,
    )
    return PropertyListResponse(
        properties=[property_to_response(p) for p in rows],
        total=len(rows),
    )
