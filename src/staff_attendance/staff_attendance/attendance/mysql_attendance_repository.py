from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dumps_json, fetchall, fetchone, loads_json
from .ledger import AttendanceLedger
from .repository import AttendanceRepository

_COLUMNS = "id, user_id, work_date, punches, work_min, break_min"


def _to_ledger(row: Dict[str, Any]) -> AttendanceLedger:
    # work_min/break_min are stored for reporting queries; the ledger recomputes its own.
    return AttendanceLedger.from_dict(
        {
            "id": row["id"],
            "userId": row["user_id"],
            "date": row["work_date"],
            "punches": loads_json(row.get("punches"), default=[]),
        }
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceLedger]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_ledgers
                WHERE user_id=%s AND work_date=%s
                """,
                (str(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_ledger(r) if r else None

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceLedger]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_ledgers
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (str(user_id), int(limit)),
            )
            return [_to_ledger(r) for r in fetchall(cur)]

    def get_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceLedger]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(str(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_ledgers
                WHERE {where}
                ORDER BY work_date DESC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_ledger(r) for r in fetchall(cur)]

    def get_all(self) -> Sequence[AttendanceLedger]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_ledgers
                ORDER BY work_date DESC, user_id ASC
                """
            )
            return [_to_ledger(r) for r in fetchall(cur)]

    def save(self, ledger: AttendanceLedger) -> None:
        punches = dumps_json([p.to_dict() for p in ledger.punches])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_ledgers(id, user_id, work_date, punches, work_min, break_min)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    punches=VALUES(punches), work_min=VALUES(work_min), break_min=VALUES(break_min)
                """,
                (
                    ledger.id,
                    ledger.user_id,
                    ledger.work_date,
                    punches,
                    ledger.totals.work_min,
                    ledger.totals.break_min,
                ),
            )
