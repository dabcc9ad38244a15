from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Portal roles used for authorization."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    LEAVE = "Leave"


class MarkStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"


class FeeStatus(str, Enum):
    """Derived on every read, never persisted."""

    PAID = "Paid"
    PARTIAL = "Partial"
    PENDING = "Pending"
    OVERDUE = "Overdue"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    ONLINE = "Online"
    CHEQUE = "Cheque"
    DD = "DD"
    UPI = "UPI"
    CARD = "Card"


class LeaveType(str, Enum):
    SICK = "Sick Leave"
    CASUAL = "Casual Leave"
    EMERGENCY = "Emergency Leave"
    MEDICAL = "Medical Leave"
    PERSONAL = "Personal"
    OTHER = "Other"


class LeaveStatus(str, Enum):
    """Leave lifecycle: Pending -> Approved | Rejected | Cancelled (terminal)."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
