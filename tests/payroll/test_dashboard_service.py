from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from workzen.payroll.dashboard import PayrollDashboardService

ASHA = 1


@pytest.fixture
def dashboard(container):
    return container.payroll_dashboard_service


def test_monthly_stats_cover_trailing_window(container, dashboard):
    for month, year in ((1, 2025), (2, 2025), (8, 2024)):
        container.payroll_service.mark_done(ASHA, month=month, year=year)

    data = dashboard.get_dashboard(today=date(2025, 3, 10))

    stats = data["monthly_stats"]
    assert [(s["year"], s["month"]) for s in stats] == [
        (2024, 10),
        (2024, 11),
        (2024, 12),
        (2025, 1),
        (2025, 2),
        (2025, 3),
    ]
    assert stats[0]["label"] == "Oct 2024"
    assert [s["employee_count"] for s in stats] == [0, 0, 0, 1, 1, 0]
    assert all(s["employer_cost"] == 0.0 for s in stats)


def test_employer_cost_sums_payroll_rows(repos, container, dashboard):
    repos.profiles.by_user_id[5] = repos.profiles.by_user_id[4]
    for day in range(3, 8):
        repos.attendance.add(ASHA, date(2025, 2, day))
        repos.attendance.add(2, date(2025, 2, day))
    a = container.payroll_service.mark_done(ASHA, month=2, year=2025)
    b = container.payroll_service.mark_done(2, month=2, year=2025)

    feb = dashboard.get_dashboard(today=date(2025, 2, 28))["monthly_stats"][-1]

    assert feb["employee_count"] == 2
    assert feb["employer_cost"] == float(a.employer_cost + b.employer_cost)
    assert a.employer_cost == Decimal("7500.00")


def test_payruns_come_from_payrun_table_in_window(container, dashboard):
    container.payroll_service.mark_done(ASHA, month=2, year=2025)
    container.payroll_service.mark_done(ASHA, month=8, year=2024)
    container.payroll_service.create_payrun(month=3, year=2025)

    payruns = dashboard.get_dashboard(today=date(2025, 3, 10))["payruns"]

    assert [(p["year"], p["month"]) for p in payruns] == [(2025, 3), (2025, 2)]
    assert payruns[0]["employee_count"] == 0
    assert payruns[1]["employee_count"] == 1
    assert payruns[1]["name"] == "Payrun Feb 2025"


def test_warns_about_employees_without_bank_details(dashboard):
    data = dashboard.get_dashboard(today=date(2025, 3, 10))

    assert data["total_employees"] == 3
    assert data["warnings"]["employees_without_bank"] == [
        {"employee_id": 2, "employee_code": "EMP-0002", "name": "Vikram Shah", "email": "vikram@workzen.local"}
    ]


def test_window_size_is_configurable(repos):
    service = PayrollDashboardService(
        employees=repos.employees,
        profiles=repos.profiles,
        payrolls=repos.payrolls,
        payruns=repos.payruns,
        months=3,
    )
    stats = service.get_dashboard(today=date(2025, 1, 5))["monthly_stats"]
    assert [s["label"] for s in stats] == ["Nov 2024", "Dec 2024", "Jan 2025"]
