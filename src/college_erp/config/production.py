import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "college_erp"),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

PASS_PERCENTAGE = float(os.getenv("PASS_PERCENTAGE", "40"))
GOOD_STANDING_PERCENTAGE = float(os.getenv("GOOD_STANDING_PERCENTAGE", "75"))

API_TOKENS = json.loads(os.getenv("API_TOKENS", "{}"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
