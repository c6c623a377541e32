"""
Request/response schemas shared by several API modules.
"""

from typing import List, Optional

from pydantic import BaseModel

from propscope.calculations.properties import (
    GlobalSettings,
    MaintenanceCharge,
    OccupancyTiers,
    Property,
    RentalAssumption,
)
from propscope.config import default_global_settings


class RentalAssumptionInput(BaseModel):
    type: str
    rent: float


class OccupancyInput(BaseModel):
    """Airbnb occupancy tiers in percent."""

    current: float
    best: float
    worst: float


class GlobalSettingsInput(BaseModel):
    """Projection assumptions. Omitted fields fall back to configured defaults."""

    interest_rate: Optional[float] = None
    loan_tenure: Optional[int] = None
    management_fee_percent: Optional[float] = None
    maintenance_fee_psf: Optional[float] = None
    lppsa_interest_rate: Optional[float] = None
    airbnb_operator_fee_percent: Optional[float] = None
    airbnb_occupancy: Optional[OccupancyInput] = None
    rental_assumptions: Optional[List[RentalAssumptionInput]] = None


def settings_from_input(data: Optional[GlobalSettingsInput]) -> GlobalSettings:
    """Merge provided assumptions over the configured defaults."""
    defaults = default_global_settings()
    if data is None:
        return defaults

    provided = data.model_dump(exclude_none=True)
    occupancy = defaults.airbnb_occupancy
    if data.airbnb_occupancy is not None:
        occupancy = OccupancyTiers(**provided.pop("airbnb_occupancy"))
    assumptions = defaults.rental_assumptions
    if data.rental_assumptions is not None:
        assumptions = [RentalAssumption(**a) for a in provided.pop("rental_assumptions")]

    values = {
        "interest_rate": defaults.interest_rate,
        "loan_tenure": defaults.loan_tenure,
        "management_fee_percent": defaults.management_fee_percent,
        "maintenance_fee_psf": defaults.maintenance_fee_psf,
        "lppsa_interest_rate": defaults.lppsa_interest_rate,
        "airbnb_operator_fee_percent": defaults.airbnb_operator_fee_percent,
    }
    values.update(provided)
    return GlobalSettings(
        airbnb_occupancy=occupancy,
        rental_assumptions=assumptions,
        **values,
    )


class GlobalSettingsResponse(BaseModel):
    interest_rate: float
    loan_tenure: int
    management_fee_percent: float
    maintenance_fee_psf: float
    lppsa_interest_rate: float
    airbnb_operator_fee_percent: float
    airbnb_occupancy: OccupancyInput
    rental_assumptions: List[RentalAssumptionInput]


def settings_to_response(settings: GlobalSettings) -> GlobalSettingsResponse:
    return GlobalSettingsResponse(
        interest_rate=settings.interest_rate,
        loan_tenure=settings.loan_tenure,
        management_fee_percent=settings.management_fee_percent,
        maintenance_fee_psf=settings.maintenance_fee_psf,
        lppsa_interest_rate=settings.lppsa_interest_rate,
        airbnb_operator_fee_percent=settings.airbnb_operator_fee_percent,
        airbnb_occupancy=OccupancyInput(
            current=settings.airbnb_occupancy.current,
            best=settings.airbnb_occupancy.best,
            worst=settings.airbnb_occupancy.worst,
        ),
        rental_assumptions=[
            RentalAssumptionInput(type=a.type, rent=a.rent)
            for a in settings.rental_assumptions
        ],
    )


class PropertyInput(BaseModel):
    """
    One projection row.

    maintenance_override carries a manually entered maintenance amount;
    leave it empty to use size x maintenance fee psf.
    """

    id: int = 0
    type: str = ""
    bedrooms_type: str = ""
    size: float
    spa_price: float = 0.0
    valuation_psf: float = 0.0
    net_psf: float = 0.0
    whole_unit_rental: float = 0.0
    co_living_rental: float = 0.0
    airbnb_rental_per_night: float = 0.0
    maintenance_override: Optional[float] = None
    wifi: float = 0.0


class PropertyResponse(BaseModel):
    """Projection row with its effective maintenance figure."""

    id: int
    type: str
    bedrooms_type: str
    size: float
    spa_price: float
    valuation_psf: float
    net_psf: float
    whole_unit_rental: float
    co_living_rental: float
    airbnb_rental_per_night: float
    maintenance_sinking: float
    maintenance_default: float
    maintenance_override: Optional[float] = None
    wifi: float


def property_from_input(data: PropertyInput, settings: GlobalSettings) -> Property:
    """Convert a request row to a Property, deriving the maintenance default."""
    maintenance = MaintenanceCharge.for_size(data.size, settings.maintenance_fee_psf)
    if data.maintenance_override is not None:
        maintenance = MaintenanceCharge(
            computed_default=maintenance.computed_default,
            override=data.maintenance_override,
        )

    return Property(
        id=data.id,
        type=data.type,
        bedrooms_type=data.bedrooms_type,
        size=data.size,
        spa_price=data.spa_price,
        valuation_psf=data.valuation_psf,
        net_psf=data.net_psf,
        whole_unit_rental=data.whole_unit_rental,
        co_living_rental=data.co_living_rental,
        airbnb_rental_per_night=data.airbnb_rental_per_night,
        maintenance=maintenance,
        wifi=data.wifi,
    )


def property_to_response(prop: Property) -> PropertyResponse:
    """Convert Property to response schema."""
    return PropertyResponse(
        id=prop.id,
        type=prop.type,
        bedrooms_type=prop.bedrooms_type,
        size=prop.size,
        spa_price=prop.spa_price,
        valuation_psf=prop.valuation_psf,
        net_psf=prop.net_psf,
        whole_unit_rental=prop.whole_unit_rental,
        co_living_rental=prop.co_living_rental,
        airbnb_rental_per_night=prop.airbnb_rental_per_night,
        maintenance_sinking=prop.maintenance_sinking,
        maintenance_default=prop.maintenance.computed_default,
        maintenance_override=prop.maintenance.override,
        wifi=prop.wifi,
    )
