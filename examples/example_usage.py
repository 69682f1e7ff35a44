"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; payroll figures come from the services.
Usage: python examples/example_usage.py <emp_id> [month] [year]
"""

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from workzen.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    args = sys.argv[1:]
    emp_id = int(args[0]) if args else 1
    month = args[1] if len(args) > 1 else None
    year = args[2] if len(args) > 2 else None

    detail = container.payroll_service.get_payslip_detail(emp_id, month=month, year=year)
    print(json.dumps(detail, indent=2))


if __name__ == "__main__":
    main()
