import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

# "mysql" or "local" (JSON file, no database needed)
STORE_BACKEND = os.getenv("STORE_BACKEND", "local")
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "instance/attendance.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Creates the demo admin/staff accounts when missing
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
