from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.aggregator import AttendanceAggregator
from .auth.token_service import StaticTokenService, TokenService
from .core.constants import DEFAULT_PASS_PERCENTAGE, GOOD_STANDING_PERCENTAGE
from .database.connection import DBConfig, DatabaseConnection
from .fees.aggregator import FeeAggregator
from .grades.aggregator import GradeAggregator
from .grades.policy.standard_policy import StandardGradingPolicy
from .leaves.service import LeaveService
from .store.memory_store import InMemoryRecordStore
from .store.mysql_store import MySQLRecordStore
from .store.repository import RecordStore
from .summary.facade import SummaryFacade


@dataclass(frozen=True)
class Container:
    store: RecordStore
    token_service: TokenService

    attendance_aggregator: AttendanceAggregator
    grade_aggregator: GradeAggregator
    fee_aggregator: FeeAggregator

    summary_facade: SummaryFacade
    leave_service: LeaveService

    good_standing_percentage: float = GOOD_STANDING_PERCENTAGE


def build_store(*, backend: str, db_config: Optional[dict] = None) -> RecordStore:
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql store")
        return MySQLRecordStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(
    *,
    db_config: Optional[dict] = None,
    store_backend: str = "mysql",
    store: Optional[RecordStore] = None,
    api_tokens: Optional[Mapping[str, Mapping]] = None,
    token_service: Optional[TokenService] = None,
    pass_percentage: float = DEFAULT_PASS_PERCENTAGE,
    good_standing_percentage: float = GOOD_STANDING_PERCENTAGE,
) -> Container:
    store = store or build_store(backend=store_backend, db_config=db_config)
    token_service = token_service or StaticTokenService.from_config(api_tokens)

    attendance_aggregator = AttendanceAggregator()
    grade_aggregator = GradeAggregator(policy=StandardGradingPolicy(pass_percentage=pass_percentage))
    fee_aggregator = FeeAggregator()

    summary_facade = SummaryFacade(
        store,
        attendance=attendance_aggregator,
        grades=grade_aggregator,
        fees=fee_aggregator,
    )
    leave_service = LeaveService(store)

    return Container(
        store=store,
        token_service=token_service,
        attendance_aggregator=attendance_aggregator,
        grade_aggregator=grade_aggregator,
        fee_aggregator=fee_aggregator,
        summary_facade=summary_facade,
        leave_service=leave_service,
        good_standing_percentage=float(good_standing_percentage),
    )
