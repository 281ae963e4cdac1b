from __future__ import annotations

from dataclasses import dataclass

from .attendance.ledger import AttendanceLedger
from .attendance.service import AttendanceService
from .attendance.store_repository import StoreLedgerRepository
from .core.constants import ATTENDANCE_TABLE, DEFAULT_REST_TIMEOUT_SECONDS, STUDENTS_TABLE
from .core.enums import WriteMode
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_store import MySQLTableStore
from .database.rest_store import RestTableStore
from .database.table_store import TableStore
from .roster.service import RosterService
from .roster.store_repository import StoreRosterRepository

STUDENT_COLUMNS = ("id", "name", "roll_num", "status", "created_at")
ATTENDANCE_COLUMNS = ("id", "student_id", "date", "status")


@dataclass(frozen=True)
class Container:
    store: TableStore

    roster_repo: StoreRosterRepository
    ledger_repo: StoreLedgerRepository
    ledger: AttendanceLedger

    roster_service: RosterService
    attendance_service: AttendanceService


def build_store(settings) -> TableStore:
    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    students_table = getattr(settings, "STUDENTS_TABLE", STUDENTS_TABLE)
    attendance_table = getattr(settings, "ATTENDANCE_TABLE", ATTENDANCE_TABLE)

    if backend == "rest":
        return RestTableStore(
            getattr(settings, "REST_URL", ""),
            getattr(settings, "REST_API_KEY", ""),
            timeout=float(getattr(settings, "REST_TIMEOUT_SECONDS", DEFAULT_REST_TIMEOUT_SECONDS)),
        )
    if backend == "mysql":
        db_config = getattr(settings, "DB_CONFIG")
        config = DBConfig(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )
        return MySQLTableStore(
            DatabaseConnection.get_instance(config),
            schema={students_table: STUDENT_COLUMNS, attendance_table: ATTENDANCE_COLUMNS},
        )
    raise ValueError(f"Unsupported STORE_BACKEND: {backend!r}")


def assemble(
    store: TableStore,
    *,
    students_table: str = STUDENTS_TABLE,
    attendance_table: str = ATTENDANCE_TABLE,
    write_mode: WriteMode = WriteMode.ATOMIC,
) -> Container:
    roster_repo = StoreRosterRepository(store, table=students_table)
    ledger_repo = StoreLedgerRepository(store, table=attendance_table)
    ledger = AttendanceLedger(ledger_repo, write_mode=WriteMode(write_mode))

    return Container(
        store=store,
        roster_repo=roster_repo,
        ledger_repo=ledger_repo,
        ledger=ledger,
        roster_service=RosterService(roster_repo),
        attendance_service=AttendanceService(roster_repo, ledger),
    )


def build_container(*, settings) -> Container:
    return assemble(
        build_store(settings),
        students_table=getattr(settings, "STUDENTS_TABLE", STUDENTS_TABLE),
        attendance_table=getattr(settings, "ATTENDANCE_TABLE", ATTENDANCE_TABLE),
        write_mode=WriteMode(str(getattr(settings, "LEDGER_WRITE_MODE", WriteMode.ATOMIC.value)).lower()),
    )
