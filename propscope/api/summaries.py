"""
Market data summary API endpoints.

Uploaded spreadsheets arrive already parsed into a list of
header -> cell records.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from propscope.calculations import aggregation, comparables, statistics
from propscope.calculations.aggregation import GroupSummary, SummaryKind
from propscope.calculations.errors import CalculationError

logger = logging.getLogger(__name__)

router = APIRouter()


class RecordsInput(BaseModel):
    """Parsed spreadsheet rows."""

    records: List[Dict[str, Any]]
    # Transactions only: drop blank and corporate sellers first
    exclude_corporate_sellers: bool = False


class SummaryResponse(BaseModel):
    kind: SummaryKind
    record_count: int
    groups: List[dict]


def group_to_dict(group: GroupSummary) -> dict:
    """Serialize a group summary, adding a display string for the mode."""
    data = asdict(group)
    data["subgroups"] = [group_to_dict(g) for g in group.subgroups]
    if group.mode_values is not None:
        data["mode_display"] = statistics.format_mode(group.mode_values)
    return data


class LayoutInput(BaseModel):
    layout_type: str
    size_sqft: float
    asking_price: float
    rental_price: float


class ComparableInput(BaseModel):
    name: str
    layouts: List[LayoutInput]
    year_of_completion: str = "n/a"
    total_units: int = 0
    tenure: str = ""
    distance_km: float = 0.0


class ComparablesInput(BaseModel):
    comparables: List[ComparableInput]


@router.post("/comparables")
async def summarize_comparables(inputs: ComparablesInput):
    """Per-development summary of the selected comparable layouts."""
    summaries = comparables.summarize_comparables(
        [
            comparables.Comparable(
                name=c.name,
                layouts=[comparables.Layout(**l.model_dump()) for l in c.layouts],
                year_of_completion=c.year_of_completion,
                total_units=c.total_units,
                tenure=c.tenure,
                distance_km=c.distance_km,
            )
            for c in inputs.comparables
        ]
    )
    return {"developments": [asdict(s) for s in summaries], "total": len(summaries)}


class RoomRentalInput(BaseModel):
    property_name: str
    room_type: str
    rental_price: float
    furnishing: str = ""
    source: str = ""


class RoomRentalsInput(BaseModel):
    listings: List[RoomRentalInput]


@router.post("/room-rentals")
async def summarize_room_rentals(inputs: RoomRentalsInput):
    """Price range per room category."""
    summaries = comparables.summarize_room_rentals(
        [comparables.RoomRentalListing(**l.model_dump()) for l in inputs.listings]
    )
    return {"rooms": [asdict(s) for s in summaries]}


@router.post("/airbnb/occupancy-tiers")
async def airbnb_occupancy_tiers(inputs: RecordsInput):
    """Worst/current/best occupancy tiers from listing occupancy rates."""
    try:
        tiers = aggregation.occupancy_tiers(inputs.records)
    except CalculationError as e:
        logger.info(f"Occupancy tiers rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(tiers)


@router.post("/{kind}", response_model=SummaryResponse)
async def summarize_dataset(kind: SummaryKind, inputs: RecordsInput):
    """Grouped statistics for an uploaded dataset."""
    try:
        records = inputs.records
        if kind == SummaryKind.transaction and inputs.exclude_corporate_sellers:
            records = aggregation.filter_private_sellers(records)
        groups = aggregation.summarize(records, kind)
    except CalculationError as e:
        logger.info(f"Summary of {kind.value} rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return SummaryResponse(
        kind=kind,
        record_count=len(records),
        groups=[group_to_dict(g) for g in groups],
    )
