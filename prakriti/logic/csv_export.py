"""RFC4180 CSV export of stored survey responses.

Rows are written in the order given; the store already returns them newest
first.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from prakriti.models.submission import SurveyResponseRecord


HEADER = [
    "Timestamp",
    "Name",
    "Gender",
    "Phone",
    "Email",
    "City",
    "Scores",
    "Result",
    "Description",
]

# Record attribute backing each header column
_FIELDS = ["timestamp", "name", "gender", "phone", "email", "city", "scores", "result", "description"]


def build_export_csv(records: Iterable[SurveyResponseRecord], *, include_header: bool = True) -> bytes:
    buf = io.StringIO(newline="")
    writer = csv.writer(buf)
    if include_header:
        writer.writerow(HEADER)
    for record in records:
        writer.writerow([getattr(record, f) for f in _FIELDS])
    return buf.getvalue().encode("utf-8")


__all__ = ["HEADER", "build_export_csv"]
