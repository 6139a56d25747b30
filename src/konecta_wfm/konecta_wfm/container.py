from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auxlogs.model import AuxLimits
from .auxlogs.mysql_aux_repository import MySQLAuxLogRepository
from .auxlogs.repository import AuxLogRepository
from .auxlogs.service import AuxService
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .shift_swaps.mysql_shift_swap_repository import MySQLShiftSwapRepository
from .shift_swaps.repository import ShiftSwapRepository
from .shift_swaps.service import ShiftSwapService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .wallboard.mysql_wallboard_repository import MySQLWallboardRepository
from .wallboard.repository import WallboardRepository
from .wallboard.service import WallboardService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    aux_repo: AuxLogRepository
    leave_repo: LeaveRepository
    swaps_repo: ShiftSwapRepository
    notifications_repo: NotificationRepository
    wallboard_repo: WallboardRepository

    auth_service: AuthService
    user_service: UserService
    schedule_service: ScheduleService
    attendance_service: AttendanceService
    aux_service: AuxService
    notification_service: NotificationService
    leave_service: LeaveService
    shift_swap_service: ShiftSwapService
    wallboard_service: WallboardService


def wire_services(
    *,
    users_repo: UserRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    aux_repo: AuxLogRepository,
    leave_repo: LeaveRepository,
    swaps_repo: ShiftSwapRepository,
    notifications_repo: NotificationRepository,
    wallboard_repo: WallboardRepository,
    aux_limits: Optional[AuxLimits] = None,
) -> Container:
    """Build services over any repository implementations (MySQL or in-memory)."""

    notification_service = NotificationService(notifications_repo)

    return Container(
        users_repo=users_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        aux_repo=aux_repo,
        leave_repo=leave_repo,
        swaps_repo=swaps_repo,
        notifications_repo=notifications_repo,
        wallboard_repo=wallboard_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        schedule_service=ScheduleService(schedules_repo, users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            schedules_repo,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        aux_service=AuxService(aux_repo, limits=aux_limits),
        notification_service=notification_service,
        leave_service=LeaveService(leave_repo, notification_service),
        shift_swap_service=ShiftSwapService(swaps_repo, users_repo, notification_service),
        wallboard_service=WallboardService(wallboard_repo),
    )


def build_container(*, db_config: dict, aux_limits: Optional[AuxLimits] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        aux_repo=MySQLAuxLogRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        swaps_repo=MySQLShiftSwapRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        wallboard_repo=MySQLWallboardRepository(conn),
        aux_limits=aux_limits,
    )
