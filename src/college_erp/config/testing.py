SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "college_erp_test",
}

STORE_BACKEND = "memory"

PASS_PERCENTAGE = 40.0
GOOD_STANDING_PERCENTAGE = 75.0

API_TOKENS = {
    "admin-token": {"user_id": 1, "role": "admin"},
    "student-token": {"user_id": 2, "role": "student", "student_id": 1},
    "other-student-token": {"user_id": 4, "role": "student", "student_id": 2},
    "parent-token": {"user_id": 3, "role": "parent", "ward_ids": [1]},
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
