from __future__ import annotations

import csv
import io
from typing import Iterable

from ..common.datetime_utils import format_clock, format_duration
from ..core.constants import CSV_HEADER, DEFAULT_UTC_OFFSET_HOURS
from .model import AttendanceRecord


def render_attendance_csv(
    records: Iterable[AttendanceRecord],
    *,
    now_ms: int,
    utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
) -> str:
    """Render records as CSV text.

    Times are shown in the business timezone. "Total Hours" is HH:MM:SS from
    time in to time out, or to ``now_ms`` while the record is still open.
    csv.writer quotes any field holding a comma, quote or newline.
    """
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(CSV_HEADER)
    for r in records:
        worked = r.worked_ms(now_ms)
        writer.writerow(
            [
                r.player_id,
                r.player_name,
                r.date,
                format_clock(r.time_in, utc_offset_hours),
                format_clock(r.time_out, utc_offset_hours),
                format_duration(worked) if worked is not None else "",
                r.status.value,
            ]
        )
    return out.getvalue()
