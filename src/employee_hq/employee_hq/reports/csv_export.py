from __future__ import annotations

import csv
import io
from typing import Iterable

from ..attendance.model import AttendanceWithProfile
from ..core.constants import CSV_COLUMNS


def _fmt_hours(value: float) -> str:
    # Two decimals, trailing zeros dropped: 9.0 -> "9", 2.75 -> "2.75".
    return f"{value or 0:.2f}".rstrip("0").rstrip(".")


def to_csv_row(item: AttendanceWithProfile) -> list:
    r = item.record
    p = item.profile
    return [
        r.work_date.strftime("%Y-%m-%d"),
        p.employee_id if p else "",
        p.name if p else "",
        p.department if p else "",
        r.status.value,
        r.check_in_time.strftime("%H:%M") if r.check_in_time else "",
        r.check_out_time.strftime("%H:%M") if r.check_out_time else "",
        _fmt_hours(r.total_hours),
    ]


def write_attendance_csv(items: Iterable[AttendanceWithProfile]) -> str:
    """Render attendance rows as CSV text, header first."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for item in items:
        writer.writerow(to_csv_row(item))
    return out.getvalue()
