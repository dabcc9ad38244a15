import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "college_erp"),
}

# "memory" keeps everything in-process; "mysql" uses DB_CONFIG
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

PASS_PERCENTAGE = float(os.getenv("PASS_PERCENTAGE", "40"))
GOOD_STANDING_PERCENTAGE = float(os.getenv("GOOD_STANDING_PERCENTAGE", "75"))

# Bearer token -> identity, resolved by StaticTokenService
API_TOKENS = json.loads(
    os.getenv(
        "API_TOKENS",
        json.dumps(
            {
                "dev-admin": {"user_id": 1, "role": "admin"},
                "dev-student": {"user_id": 2, "role": "student", "student_id": 1},
                "dev-parent": {"user_id": 3, "role": "parent", "ward_ids": [1]},
            }
        ),
    )
)

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
