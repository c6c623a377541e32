"""
Dataset Summaries

Reduces uploaded listing/transaction records into per-development market
statistics. Every dataset kind follows the same steps:

1. Resolve the columns the kind needs (fails before any grouping)
2. Clean numeric cells, dropping rows that cannot be used
3. Group by development, and by bedroom type for two-level kinds
4. Compute the kind's statistics per group, sorted by key
"""

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from propscope.calculations import statistics
from propscope.calculations.columns import (
    ASKING_PRICE,
    BEDROOM,
    DEVELOPMENT,
    NIGHTLY_RATE,
    OCCUPANCY,
    RENT,
    SELLER,
    SIZE,
    TRANSACTION_PRICE,
    ColumnMapping,
    ColumnRole,
    clean_label,
    clean_numeric,
    resolve_columns,
)
from propscope.calculations.errors import EmptyInputError, NoValidRowsError
from propscope.calculations.statistics import Quartiles

Record = Dict[str, Any]

NO_SUBGROUP = "N/A"
CORPORATE_SELLER_KEYWORDS = ("sdn bhd", "berhad")


class SummaryKind(str, enum.Enum):
    """Uploaded dataset kinds."""

    whole_unit_rental = "wholeUnitRental"
    asking_price = "askingPrice"
    transaction = "transaction"
    airbnb = "airbnb"


@dataclass(frozen=True)
class SummaryConfig:
    """Which columns a summary needs and which statistics it reports."""

    roles: Tuple[ColumnRole, ...]
    value_role: str
    divisor_role: Optional[str] = None
    subgroup_role: Optional[str] = None
    with_mean: bool = True
    with_median: bool = False
    with_mode: bool = False
    with_quartiles: bool = False


SUMMARY_CONFIGS: Dict[SummaryKind, SummaryConfig] = {
    SummaryKind.whole_unit_rental: SummaryConfig(
        roles=(DEVELOPMENT, BEDROOM, RENT, SIZE),
        value_role=RENT.name,
        divisor_role=SIZE.name,
        subgroup_role=BEDROOM.name,
        with_mode=True,
    ),
    SummaryKind.asking_price: SummaryConfig(
        roles=(DEVELOPMENT, BEDROOM, ASKING_PRICE, SIZE),
        value_role=ASKING_PRICE.name,
        divisor_role=SIZE.name,
        subgroup_role=BEDROOM.name,
    ),
    SummaryKind.transaction: SummaryConfig(
        roles=(DEVELOPMENT, TRANSACTION_PRICE, SIZE),
        value_role=TRANSACTION_PRICE.name,
        divisor_role=SIZE.name,
        with_median=True,
    ),
    SummaryKind.airbnb: SummaryConfig(
        roles=(DEVELOPMENT, OCCUPANCY, NIGHTLY_RATE),
        value_role=NIGHTLY_RATE.name,
        with_quartiles=True,
    ),
}


@dataclass
class GroupSummary:
    """Statistics for one development (or one bedroom type within it)."""

    key: str
    count: int
    min_value: float
    max_value: float
    mean_value: Optional[float] = None
    min_psf: Optional[float] = None
    max_psf: Optional[float] = None
    median_value: Optional[float] = None
    median_psf: Optional[float] = None
    mode_values: Optional[List[float]] = None
    occupancy: Optional[Quartiles] = None
    subgroups: List["GroupSummary"] = field(default_factory=list)


def _load(records: Sequence[Record]) -> pd.DataFrame:
    """Records as a frame of the original cell values."""
    return pd.DataFrame(list(records), dtype=object)


def _numeric(column: pd.Series) -> pd.Series:
    return column.map(clean_numeric).astype(float)


def _labels(column: pd.Series) -> pd.Series:
    return column.map(clean_label)


def _clean_frame(raw: pd.DataFrame, columns: ColumnMapping, config: SummaryConfig) -> pd.DataFrame:
    """Cleaned key/value/psf columns, keeping only usable rows."""
    frame = pd.DataFrame(
        {
            "key": _labels(raw[columns[DEVELOPMENT.name]]),
            "value": _numeric(raw[columns[config.value_role]]),
        },
        index=raw.index,
    )
    keep = frame["key"].ne("") & frame["value"].notna()

    if config.divisor_role:
        divisor = _numeric(raw[columns[config.divisor_role]])
        keep &= divisor.gt(0)
        frame["psf"] = frame["value"] / divisor

    if config.subgroup_role:
        subkeys = _labels(raw[columns[config.subgroup_role]])
        frame["subkey"] = subkeys.where(subkeys.ne(""), NO_SUBGROUP)

    if OCCUPANCY.name in columns:
        frame["occupancy"] = _numeric(raw[columns[OCCUPANCY.name]])

    return frame[keep]


def _summarize_groups(
    frame: pd.DataFrame,
    key_column: str,
    config: SummaryConfig,
    subgroup_column: Optional[str] = None,
) -> List[GroupSummary]:
    # Sorted case-insensitively, then by exact text
    ordered = frame.assign(_fold=frame[key_column].str.casefold())
    grouped = ordered.groupby(["_fold", key_column], sort=True)

    stats = grouped["value"].agg(["count", "min", "max", "mean", "median"])
    if config.divisor_role:
        stats = stats.join(grouped["psf"].agg(["min", "max", "median"]).add_suffix("_psf"))

    summaries = []
    for name, group in grouped:
        row = stats.loc[name]
        summary = GroupSummary(
            key=name[1],
            count=int(row["count"]),
            min_value=float(row["min"]),
            max_value=float(row["max"]),
        )

        if config.with_mean:
            summary.mean_value = float(row["mean"])

        if config.divisor_role:
            summary.min_psf = float(row["min_psf"])
            summary.max_psf = float(row["max_psf"])
            if config.with_median:
                summary.median_psf = float(row["median_psf"])

        if config.with_median:
            summary.median_value = float(row["median"])

        if config.with_mode:
            summary.mode_values = statistics.mode(group["value"])

        if config.with_quartiles and "occupancy" in group:
            summary.occupancy = statistics.quartiles(group["occupancy"].dropna().tolist())

        if subgroup_column:
            summary.subgroups = _summarize_groups(group, subgroup_column, config)

        summaries.append(summary)
    return summaries


def summarize_records(records: Sequence[Record], config: SummaryConfig) -> List[GroupSummary]:
    """
    Summarize records according to a summary configuration.

    Raises:
        EmptyInputError: If there are no records
        MissingColumnsError: If a required column cannot be resolved
        NoValidRowsError: If no record survives cleaning
    """
    if not records:
        raise EmptyInputError()

    raw = _load(records)
    columns = resolve_columns(list(raw.columns), config.roles)
    frame = _clean_frame(raw, columns, config)
    if frame.empty:
        raise NoValidRowsError()

    subgroup_column = "subkey" if config.subgroup_role else None
    return _summarize_groups(frame, "key", config, subgroup_column)


def summarize(records: Sequence[Record], kind: SummaryKind) -> List[GroupSummary]:
    """Summarize an uploaded dataset of the given kind."""
    return summarize_records(records, SUMMARY_CONFIGS[SummaryKind(kind)])


def occupancy_tiers(records: Sequence[Record]) -> Quartiles:
    """
    Market-wide occupancy tiers from an Airbnb dataset.

    The 25th/50th/75th percentiles of every listing's occupancy rate become
    the worst/current/best tiers used by airbnb projections.
    """
    if not records:
        raise EmptyInputError()

    raw = _load(records)
    role = ColumnRole(OCCUPANCY.name, OCCUPANCY.label, OCCUPANCY.fragments)
    columns = resolve_columns(list(raw.columns), (role,))
    samples = _numeric(raw[columns[role.name]]).dropna().tolist()

    tiers = statistics.quartiles(samples)
    if tiers is None:
        raise NoValidRowsError(
            f"At least {statistics.MIN_QUARTILE_SAMPLES} occupancy rates are needed "
            f"to estimate occupancy tiers (found {len(samples)})."
        )
    return tiers


def filter_private_sellers(records: Sequence[Record]) -> List[Record]:
    """
    Keep only transactions sold by individuals.

    Drops rows with a blank seller or a corporate seller name.

    Raises:
        EmptyInputError: If there are no records
        MissingColumnsError: If no seller column can be found
        NoValidRowsError: If every row was filtered out
    """
    if not records:
        raise EmptyInputError()

    raw = _load(records)
    columns = resolve_columns(list(raw.columns), (SELLER,))
    sellers = _labels(raw[columns[SELLER.name]]).str.lower()

    pattern = "|".join(re.escape(k) for k in CORPORATE_SELLER_KEYWORDS)
    corporate = sellers.str.contains(pattern, regex=True).astype(bool)
    keep = sellers.ne("") & ~corporate

    kept = [record for record, usable in zip(records, keep) if usable]
    if not kept:
        raise NoValidRowsError(
            "After filtering for corporate and blank sellers, "
            "no valid transactions remained. Please check your data."
        )
    return kept
