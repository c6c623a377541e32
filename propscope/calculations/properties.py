"""
Property and Assumption Models

The inputs to a projection: one property row being evaluated and the
global assumptions shared by every row. Also holds the default rules the
projection table applies while a user edits a row (maintenance derived
from size, rent derived from bedroom type).
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional


DEFAULT_VALUATION_PSF = 500.0
DEFAULT_NET_PSF = 480.0
NET_PSF_DISCOUNT = 0.95
DEFAULT_WHOLE_UNIT_RENTAL = 2500.0
DEFAULT_CO_LIVING_RENTAL = 3000.0
DEFAULT_WIFI = 150.0


@dataclass(frozen=True)
class RentalAssumption:
    """Default monthly rent for a bedroom type label."""

    type: str
    rent: float


@dataclass(frozen=True)
class OccupancyTiers:
    """Airbnb occupancy percentages for the three projection tiers."""

    current: float = 65.0
    best: float = 80.0
    worst: float = 50.0


@dataclass(frozen=True)
class GlobalSettings:
    """Assumptions shared by every property's projection. Rates are percentages."""

    interest_rate: float = 4.5
    loan_tenure: int = 35
    management_fee_percent: float = 12.0
    maintenance_fee_psf: float = 0.33
    lppsa_interest_rate: float = 4.0
    airbnb_operator_fee_percent: float = 20.0
    airbnb_occupancy: OccupancyTiers = field(default_factory=OccupancyTiers)
    rental_assumptions: List[RentalAssumption] = field(default_factory=list)

    def rental_for(self, bedrooms_type: str) -> Optional[float]:
        """Rent of the first assumption whose type matches, ignoring case."""
        wanted = bedrooms_type.lower()
        for assumption in self.rental_assumptions:
            if assumption.type.lower() == wanted:
                return assumption.rent
        return None


@dataclass(frozen=True)
class MaintenanceCharge:
    """
    Monthly maintenance & sinking fund.

    The computed default follows size x fee-per-sqft. A manual override
    holds until it is cleared or until size or the fee per sqft changes,
    whichever comes first.
    """

    computed_default: float = 0.0
    override: Optional[float] = None

    @classmethod
    def for_size(cls, size: float, fee_psf: float) -> "MaintenanceCharge":
        return cls(computed_default=round(size * fee_psf, 2))

    @property
    def is_manually_overridden(self) -> bool:
        return self.override is not None

    @property
    def amount(self) -> float:
        if self.override is not None:
            return self.override
        return self.computed_default

    def recompute(self, size: float, fee_psf: float) -> "MaintenanceCharge":
        """New default for the changed size or fee; drops any override."""
        return MaintenanceCharge.for_size(size, fee_psf)


@dataclass(frozen=True)
class Property:
    """One unit/layout row in the projection table."""

    id: int = 0
    type: str = ""
    bedrooms_type: str = ""
    size: float = 0.0  # sqft
    spa_price: float = 0.0
    valuation_psf: float = 0.0
    net_psf: float = 0.0
    whole_unit_rental: float = 0.0
    co_living_rental: float = 0.0
    airbnb_rental_per_night: float = 0.0
    maintenance: MaintenanceCharge = field(default_factory=MaintenanceCharge)
    wifi: float = 0.0

    @property
    def maintenance_sinking(self) -> float:
        """Effective monthly maintenance (override if set, else computed default)."""
        return self.maintenance.amount

    def with_size(self, size: float, settings: GlobalSettings) -> "Property":
        return replace(
            self,
            size=size,
            maintenance=self.maintenance.recompute(size, settings.maintenance_fee_psf),
        )

    def with_maintenance_fee_psf(self, fee_psf: float) -> "Property":
        return replace(self, maintenance=self.maintenance.recompute(self.size, fee_psf))

    def with_maintenance(self, amount: float) -> "Property":
        return replace(self, maintenance=replace(self.maintenance, override=amount))

    def reset_maintenance(self) -> "Property":
        return replace(self, maintenance=replace(self.maintenance, override=None))

    def with_bedrooms_type(self, bedrooms_type: str, settings: GlobalSettings) -> "Property":
        """Change the bedroom label, taking the matching assumption's rent if any."""
        updated = replace(self, bedrooms_type=bedrooms_type)
        rent = settings.rental_for(bedrooms_type)
        if rent is not None:
            updated = replace(updated, whole_unit_rental=rent)
        return updated


def default_property(settings: GlobalSettings, property_id: int = 0) -> Property:
    """Starting row for an empty projection table."""
    return Property(
        id=property_id,
        type="Type A",
        bedrooms_type="3 Bedrooms",
        size=1000.0,
        spa_price=500_000.0,
        valuation_psf=DEFAULT_VALUATION_PSF,
        net_psf=DEFAULT_NET_PSF,
        whole_unit_rental=DEFAULT_WHOLE_UNIT_RENTAL,
        co_living_rental=DEFAULT_CO_LIVING_RENTAL,
        maintenance=MaintenanceCharge.for_size(1000.0, settings.maintenance_fee_psf),
        wifi=DEFAULT_WIFI,
    )


def apply_maintenance_fee_psf(
    properties: List[Property], fee_psf: float
) -> List[Property]:
    """Recompute every row's maintenance after the fee-per-sqft changes.

    Manual overrides are discarded along with the old default.
    """
    return [p.with_maintenance_fee_psf(fee_psf) for p in properties]


def property_from_listing(
    unit_type: str,
    size: float,
    spa_price: float,
    settings: GlobalSettings,
    index: int = 0,
    property_id: int = 0,
) -> Property:
    """
    Build a projection row from a selected unit listing.

    PSF figures come from the listing's SPA price; a listing with no usable
    size falls back to fixed PSF defaults. Rentals start from defaults for
    the user to adjust.
    """
    size = size or 0.0
    spa_price = spa_price or 0.0

    if size > 0:
        valuation_psf = spa_price / size
        net_psf = valuation_psf * NET_PSF_DISCOUNT
    else:
        valuation_psf = DEFAULT_VALUATION_PSF
        net_psf = DEFAULT_NET_PSF

    return Property(
        id=property_id,
        type=unit_type or f"Unit {index + 1}",
        bedrooms_type=unit_type or "N/A",
        size=size,
        spa_price=spa_price,
        valuation_psf=valuation_psf,
        net_psf=net_psf,
        whole_unit_rental=DEFAULT_WHOLE_UNIT_RENTAL,
        co_living_rental=DEFAULT_CO_LIVING_RENTAL,
        maintenance=MaintenanceCharge.for_size(size, settings.maintenance_fee_psf),
        wifi=DEFAULT_WIFI,
    )
