import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_payroll"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

STANDARD_WORKDAY_HOURS = os.getenv("STANDARD_WORKDAY_HOURS", "8")
OVERTIME_MULTIPLIER = os.getenv("OVERTIME_MULTIPLIER", "1.5")
DEFAULT_DAILY_RATE = os.getenv("DEFAULT_DAILY_RATE", "150000")
