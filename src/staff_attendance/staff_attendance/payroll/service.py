from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.ledger import AttendanceLedger
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_hhmm
from ..core.enums import PunchType


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    """Per-day rows and per-employee totals over a date range, from stored ledgers."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[str] = None,
    ) -> ReportData:
        ledgers = self._attendance.get_in_range(start_date=start, end_date=end, user_id=user_id)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for ledger in ledgers:
            out_rows.append(self._to_row(ledger))

            s = summary_map.get(ledger.user_id)
            if not s:
                s = {"user_id": ledger.user_id, "days": 0, "work_minutes": 0, "break_minutes": 0}
                summary_map[ledger.user_id] = s
            s["days"] += 1
            s["work_minutes"] += ledger.totals.work_min
            s["break_minutes"] += ledger.totals.break_min

        summary = [
            {
                "user_id": s["user_id"],
                "days": s["days"],
                "work_minutes": s["work_minutes"],
                "total_hours": format_hhmm(s["work_minutes"]),
                "break_hours": format_hhmm(s["break_minutes"]),
            }
            for s in summary_map.values()
        ]
        summary.sort(key=lambda x: (-x["work_minutes"], x["user_id"]))
        return ReportData(rows=out_rows, summary=summary)

    @staticmethod
    def _to_row(ledger: AttendanceLedger) -> dict:
        check_in = ledger.first(PunchType.IN)
        check_out = next((p for p in reversed(ledger.punches) if p.type == PunchType.OUT), None)
        return {
            "user_id": ledger.user_id,
            "work_date": ledger.work_date.strftime("%Y-%m-%d"),
            "check_in": check_in.at.strftime("%H:%M") if check_in else "-",
            "check_out": check_out.at.strftime("%H:%M") if check_out else "-",
            "sessions": len(ledger.sessions()),
            "worked_hours": format_hhmm(ledger.totals.work_min),
            "break_hours": format_hhmm(ledger.totals.break_min),
            "status": check_in.status.value if check_in and check_in.status else "-",
            "manual_punches": sum(1 for p in ledger.punches if p.manual_punch),
        }
