from __future__ import annotations

from datetime import datetime

import pytest

from college_erp.auth.context import AuthContext
from college_erp.core.enums import Role


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 9, 30, 10, 0, 0)


@pytest.fixture
def admin() -> AuthContext:
    return AuthContext(user_id=1, role=Role.ADMIN)


@pytest.fixture
def student() -> AuthContext:
    return AuthContext(user_id=2, role=Role.STUDENT, student_id=1)


@pytest.fixture
def other_student() -> AuthContext:
    return AuthContext(user_id=4, role=Role.STUDENT, student_id=2)


@pytest.fixture
def parent() -> AuthContext:
    return AuthContext(user_id=3, role=Role.PARENT, ward_ids=frozenset({1}))
