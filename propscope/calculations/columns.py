"""
Column Role Detection

Uploaded spreadsheets have no fixed header names. Each semantic role a
summary needs is described by an ordered list of header fragments; the
first unclaimed header containing a fragment (case-insensitive) claims
the role.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from propscope.calculations.errors import MissingColumnsError


@dataclass(frozen=True)
class ColumnRole:
    """A semantic column and the header fragments that identify it."""

    name: str
    label: str  # shown to the user when the column is missing
    fragments: Tuple[str, ...]
    required: bool = True


DEVELOPMENT = ColumnRole("development", "Development", ("development", "project"))
BEDROOM = ColumnRole("bedroom", "No. Bedroom", ("bedroom", "layout", "type"))
ASKING_PRICE = ColumnRole("price", "Asking Price", ("price", "asking"))
RENT = ColumnRole("rent", "Rental Price", ("rent", "price"))
TRANSACTION_PRICE = ColumnRole("price", "Price", ("price",))
SIZE = ColumnRole("size", "Size (sqft)", ("size", "sqft", "built-up", "bu"))
NIGHTLY_RATE = ColumnRole("rate", "Price per Night", ("night", "price", "rate"))
OCCUPANCY = ColumnRole("occupancy", "Occupancy Rate", ("occupancy",), required=False)
SELLER = ColumnRole("seller", "Seller", ("seller",))


# role name -> resolved header name
ColumnMapping = Dict[str, str]


def find_header(headers: Sequence[str], fragments: Iterable[str]) -> Optional[str]:
    """First header containing a fragment, trying fragments in priority order."""
    normalized = [(h, str(h).strip().lower()) for h in headers]
    for fragment in fragments:
        for header, text in normalized:
            if fragment in text:
                return header
    return None


def resolve_columns(headers: Sequence[str], roles: Sequence[ColumnRole]) -> ColumnMapping:
    """
    Resolve each role to a header.

    Roles are resolved in the order given and a header claimed by one role
    is not offered to the roles after it, so list narrow roles (occupancy)
    ahead of broad ones (rate). Optional roles that cannot be found are
    left out of the mapping.

    Raises:
        MissingColumnsError: Listing every required role that could not be found
    """
    mapping: ColumnMapping = {}
    missing = []

    for role in roles:
        claimed = set(mapping.values())
        available = [h for h in headers if h not in claimed]
        header = find_header(available, role.fragments)
        if header is not None:
            mapping[role.name] = header
        elif role.required:
            missing.append(role.label)

    if missing:
        raise MissingColumnsError(missing)
    return mapping


_STRIP_SYMBOLS = re.compile(r"RM|[,%]")
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def clean_numeric(value: Any) -> Optional[float]:
    """
    Parse a spreadsheet cell as a number.

    Currency (``RM``), thousands separators and percent signs are stripped
    and the leading numeric part is parsed, so ``"RM 1,200 / month"`` gives
    1200.0. Returns None when nothing numeric remains.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _STRIP_SYMBOLS.sub("", str(value)).strip()
        match = _LEADING_NUMBER.match(text)
        if not match:
            return None
        number = float(match.group(0))

    if not math.isfinite(number):
        return None
    return number


def clean_label(value: Any) -> str:
    """Text of a grouping cell, or an empty string for blank cells."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()
