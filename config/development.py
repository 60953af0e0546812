import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "biometric_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Facilities without their own timezone use this one
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Africa/Lagos")

# Recent device events remembered per process (advisory duplicate filter)
DEDUP_WINDOW_SIZE = int(os.getenv("DEDUP_WINDOW_SIZE", "1000"))
# Same employee, day and type within this many minutes is one physical scan
DUPLICATE_TOLERANCE_MINUTES = int(os.getenv("DUPLICATE_TOLERANCE_MINUTES", "5"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
