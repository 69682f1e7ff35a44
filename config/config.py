"""Settings shared by every environment, read from the process environment."""
import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workzen"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Printed on payslip PDFs
COMPANY_NAME = os.getenv("COMPANY_NAME", "WorkZen")

# Flat monthly deduction on every payslip
PROFESSIONAL_TAX = os.getenv("PROFESSIONAL_TAX", "200")

# Trailing window shown on the payroll dashboard
DASHBOARD_MONTHS = int(os.getenv("DASHBOARD_MONTHS", "6"))
