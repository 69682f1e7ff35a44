import os

from config.config import COMPANY_NAME, DASHBOARD_MONTHS, DB_CONFIG, LOG_LEVEL, PROFESSIONAL_TAX  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
