from __future__ import annotations

import csv
import io

from ..core.constants import ABSENT_MARK, EXPORT_FIXED_COLUMNS, PRESENT_MARK
from .matrix import PresenceMatrix


def serialize_csv(matrix: PresenceMatrix, *, present: str = PRESENT_MARK, absent: str = ABSENT_MARK) -> str:
    """Header ``Name,Email,StudentID,<dates...>`` then one row per person.

    Fields containing a comma or quote are quoted the standard CSV way.
    """

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([*EXPORT_FIXED_COLUMNS, *matrix.dates])
    for person, row in zip(matrix.people, matrix.cells):
        writer.writerow([person.name, person.email, person.student_id, *(present if hit else absent for hit in row)])
    return out.getvalue()
