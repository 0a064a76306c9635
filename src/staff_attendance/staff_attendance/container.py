from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .attendance.locks import KeyedLock
from .attendance.manual import ManualPunchAuthorizer
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.rollover import DayRolloverHandler
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.leave_deduction import LeaveDeductionBridge
from .payroll.service import AttendanceReportService
from .timings.model import StoreTimings
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    timings: StoreTimings

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    report_service: AttendanceReportService
    leave_bridge: LeaveDeductionBridge


def wire_container(
    *,
    attendance_repo: AttendanceRepository,
    users_repo: UserRepository,
    timings: StoreTimings,
) -> Container:
    attendance_service = AttendanceService(
        attendance_repo,
        timings,
        users=users_repo,
        rollover=DayRolloverHandler(attendance_repo),
        manual=ManualPunchAuthorizer(users_repo),
        locks=KeyedLock(),
    )
    return Container(
        timings=timings,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        report_service=AttendanceReportService(attendance_repo),
        leave_bridge=LeaveDeductionBridge(),
    )


def build_container(*, db_config: dict, store_timings: Mapping[str, str], grace_minutes: int = 0) -> Container:
    # Timings are validated before anything touches the database.
    timings = StoreTimings.from_mapping(store_timings, grace_minutes=grace_minutes)
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_container(
        attendance_repo=MySQLAttendanceRepository(conn),
        users_repo=MySQLUserRepository(conn),
        timings=timings,
    )
