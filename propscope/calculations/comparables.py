"""
Comparable Property Summaries

Summaries over structured (already typed) inputs: the comparable
developments picked from the discovery step, and room-rental listings.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from propscope.calculations import statistics


@dataclass(frozen=True)
class Layout:
    """One unit layout of a comparable development."""

    layout_type: str
    size_sqft: float
    asking_price: float
    rental_price: float


@dataclass(frozen=True)
class Comparable:
    """A comparable development and its selected layouts."""

    name: str
    layouts: List[Layout] = field(default_factory=list)
    year_of_completion: str = "n/a"
    total_units: int = 0
    tenure: str = ""
    distance_km: float = 0.0


@dataclass(frozen=True)
class LayoutRentalSummary:
    layout_type: str
    count: int
    min_rental: float
    max_rental: float
    min_size: float
    max_size: float
    min_asking_price: float
    max_asking_price: float
    avg_rental_psf: float
    avg_asking_price_psf: float


@dataclass(frozen=True)
class DevelopmentSummary:
    name: str
    count: int
    min_price: float
    max_price: float
    avg_price: float
    min_size: float
    max_size: float
    avg_price_psf: float
    year_of_completion: str
    total_units: int
    tenure: str
    rental_breakdown: List[LayoutRentalSummary]


@dataclass(frozen=True)
class RoomRentalListing:
    property_name: str
    room_type: str
    rental_price: float
    furnishing: str = ""
    source: str = ""


@dataclass(frozen=True)
class RoomRentalSummary:
    room_type: str
    count: int
    min_price: float
    max_price: float
    avg_price: float


MASTER_ROOM = "Master Room"
MEDIUM_ROOM = "Medium Room"
SMALL_ROOM = "Small/Single Room"


def _sort_key(key: str):
    return (key.casefold(), key)


def _layout_summary(layout_type: str, layouts: List[Layout]) -> LayoutRentalSummary:
    rentals = [l.rental_price for l in layouts]
    sizes = [l.size_sqft for l in layouts]
    prices = [l.asking_price for l in layouts]
    total_size = sum(sizes)

    return LayoutRentalSummary(
        layout_type=layout_type,
        count=len(layouts),
        min_rental=min(rentals),
        max_rental=max(rentals),
        min_size=min(sizes),
        max_size=max(sizes),
        min_asking_price=min(prices),
        max_asking_price=max(prices),
        # Size-weighted, not a mean of per-layout PSFs
        avg_rental_psf=sum(rentals) / total_size if total_size > 0 else 0.0,
        avg_asking_price_psf=sum(prices) / total_size if total_size > 0 else 0.0,
    )


def summarize_comparables(comparables: Sequence[Comparable]) -> List[DevelopmentSummary]:
    """
    Summarize selected comparable layouts per development.

    Developments sharing a name are merged; the first one's details
    (completion year, units, tenure) are reported. Developments with no
    selected layouts are skipped.
    """
    layouts_by_dev: Dict[str, List[Layout]] = defaultdict(list)
    details: Dict[str, Comparable] = {}
    for comparable in comparables:
        if not comparable.layouts:
            continue
        details.setdefault(comparable.name, comparable)
        layouts_by_dev[comparable.name].extend(comparable.layouts)

    summaries = []
    for name in sorted(layouts_by_dev, key=_sort_key):
        layouts = layouts_by_dev[name]
        prices = [l.asking_price for l in layouts]
        sizes = [l.size_sqft for l in layouts]
        avg_price = statistics.mean(prices)
        avg_size = statistics.mean(sizes)

        by_type: Dict[str, List[Layout]] = defaultdict(list)
        for layout in layouts:
            by_type[layout.layout_type].append(layout)

        comparable = details[name]
        summaries.append(
            DevelopmentSummary(
                name=name,
                count=len(layouts),
                min_price=min(prices),
                max_price=max(prices),
                avg_price=avg_price,
                min_size=min(sizes),
                max_size=max(sizes),
                avg_price_psf=avg_price / avg_size if avg_size > 0 else 0.0,
                year_of_completion=comparable.year_of_completion,
                total_units=comparable.total_units,
                tenure=comparable.tenure,
                rental_breakdown=[
                    _layout_summary(layout_type, by_type[layout_type])
                    for layout_type in sorted(by_type, key=_sort_key)
                ],
            )
        )
    return summaries


def room_category(room_type: str):
    lowered = room_type.lower()
    if "master" in lowered:
        return MASTER_ROOM
    if "medium" in lowered:
        return MEDIUM_ROOM
    if "small" in lowered or "single" in lowered:
        return SMALL_ROOM
    return None


def summarize_room_rentals(listings: Sequence[RoomRentalListing]) -> List[RoomRentalSummary]:
    """Price range and average per room category; unrecognised room types are ignored."""
    prices: Dict[str, List[float]] = {MASTER_ROOM: [], MEDIUM_ROOM: [], SMALL_ROOM: []}
    for listing in listings:
        category = room_category(listing.room_type)
        if category:
            prices[category].append(listing.rental_price)

    return [
        RoomRentalSummary(
            room_type=category,
            count=len(values),
            min_price=min(values),
            max_price=max(values),
            avg_price=statistics.mean(values),
        )
        for category, values in prices.items()
        if values
    ]
