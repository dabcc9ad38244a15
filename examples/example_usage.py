"""Example: use the service layer directly (no Flask).

Builds an in-memory store, then prints the dashboard summary a parent would see.
"""

import json
from datetime import date, datetime

from college_erp.attendance.model import AttendanceRecord
from college_erp.auth.context import AuthContext
from college_erp.container import build_container
from college_erp.core.enums import AttendanceStatus, PaymentMethod, Role
from college_erp.fees.model import FeeAssignment, Payment
from college_erp.grades.model import MarkRecord
from college_erp.store.memory_store import InMemoryRecordStore


def main():
    store = InMemoryRecordStore()
    for day in range(1, 21):
        store.add_attendance(
            AttendanceRecord(
                student_id=1,
                subject_id=301,
                date=date(2024, 9, day),
                status=AttendanceStatus.ABSENT if day in (4, 11) else AttendanceStatus.PRESENT,
            )
        )
    store.add_mark(MarkRecord(1, 301, "End-Term", 78, 100, 5, "2024-25", credits=4))
    store.add_mark(MarkRecord(1, 302, "End-Term", 65, 100, 5, "2024-25", credits=4))
    store.add_mark(MarkRecord(1, 303, "End-Term", 30, 100, 5, "2024-25", credits=3))
    store.add_fee(FeeAssignment(1, 1, 10, 50000, "2024-25", 5, due_date=date(2024, 10, 31)))
    store.add_payment(1, Payment(25000, datetime(2024, 8, 1), PaymentMethod.UPI, "TXN0001"))

    container = build_container(store=store)
    parent = AuthContext(user_id=3, role=Role.PARENT, ward_ids=frozenset({1}))
    for summary in container.summary_facade.build_ward_summaries(parent, now=datetime(2024, 9, 30)):
        print(json.dumps(summary.to_dict(), indent=2))


if __name__ == "__main__":
    main()
