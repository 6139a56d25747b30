import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "konecta_wfm"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# AUX ceilings in minutes; break also covers last_break
BREAK_LIMIT_MINUTES = int(os.getenv("BREAK_LIMIT_MINUTES", "15"))
LUNCH_LIMIT_MINUTES = int(os.getenv("LUNCH_LIMIT_MINUTES", "60"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users and today's schedules on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
