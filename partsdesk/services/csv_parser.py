# partsdesk/services/csv_parser.py

import math
import re
from typing import Dict, List, Sequence

from ..models.catalog import Part

SEPARATOR = ","
MIN_COLUMNS = 10

TEXT_FIELDS = ("part_no", "part_name", "location")
NUMERIC_FIELDS = (
    "on_hand",
    "due_in",
    "on_order",
    "amd3",
    "mav",
    "stk_eff",
    "sys_gen_stock",
)
COLUMNS = TEXT_FIELDS + NUMERIC_FIELDS

_LINE_BREAK = re.compile(r"\r?\n")
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def to_number(raw: str) -> float:
    """
    Parse a numeric cell, falling back to 0 for anything unusable.

    Only the leading number is read, so "12 pcs" gives 12. NaN and
    infinities count as unusable so they never leak into sums.
    """
    match = _LEADING_NUMBER.match(raw.strip()) if isinstance(raw, str) else None
    if match is None:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def parse_catalog_csv(text: str) -> List[Part]:
    """
    Convert raw catalog text into Part records.

      - line 0 is a header and is always dropped
      - each data line is split on ',' (no quoting)
      - lines with fewer than 10 columns are skipped
      - columns 0-2 are trimmed text, columns 3-9 numbers (0 on failure)

    Output keeps input order, duplicates included. Never raises.
    """
    if not text:
        return []

    lines = _LINE_BREAK.split(text)
    parts: List[Part] = []

    for line in lines[1:]:
        cols = line.split(SEPARATOR)
        if len(cols) < MIN_COLUMNS:
            continue

        record = {name: cols[i].strip() for i, name in enumerate(TEXT_FIELDS)}
        for offset, name in enumerate(NUMERIC_FIELDS, start=len(TEXT_FIELDS)):
            record[name] = to_number(cols[offset])

        parts.append(Part(**record))

    return parts


def find_duplicate_part_numbers(parts: Sequence[Part]) -> List[str]:
    """Return case-normalized part numbers that occur more than once, in first-seen order."""
    counts: Dict[str, int] = {}
    for p in parts:
        counts[p.key] = counts.get(p.key, 0) + 1
    return [k for k, n in counts.items() if n > 1]
