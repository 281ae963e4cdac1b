import os

SECRET_KEY = "test-secret"

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger_test"),
}

REST_URL = os.getenv("REST_URL", "")
REST_API_KEY = os.getenv("REST_API_KEY", "")
REST_TIMEOUT_SECONDS = float(os.getenv("REST_TIMEOUT_SECONDS", "5"))

STUDENTS_TABLE = "students"
ATTENDANCE_TABLE = "attendance"

LEDGER_WRITE_MODE = os.getenv("LEDGER_WRITE_MODE", "atomic")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
