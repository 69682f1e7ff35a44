"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200
DEFAULT_PAGE_SIZE = 10
DEFAULT_DASHBOARD_MONTHS = 6
DEFAULT_PROFESSIONAL_TAX = Decimal("200")
DEFAULT_SALARY_STRUCTURE = "Regular Pay"
DEFAULT_COMPANY_NAME = "WorkZen"
