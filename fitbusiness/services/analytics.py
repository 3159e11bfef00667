"""Portfolio analytics: dashboard summaries over companies and staff."""

from __future__ import annotations

import statistics
from collections import defaultdict
from datetime import date
from typing import Any

from fitbusiness.models.company import Company
from fitbusiness.models.employee import Employee
from fitbusiness.models.enums import CompanyStatus, RiskLevel
from fitbusiness.services.aggregates import average_fit_score, risk_index_band, round_half_away_from_zero


def portfolio_overview(companies: list[Company], employees: list[Employee]) -> dict[str, Any]:
    """Headline numbers for the overview and risk-analysis pages.

    Args:
        companies: The companies visible to the caller.
        employees: The employees visible to the caller.

    Returns:
        Dict with counts, the global average FitScore, the mean health
        risk index, and companies/employees bucketed by risk level.
    """
    companies_by_band = {level.value: 0 for level in RiskLevel}
    for company in companies:
        companies_by_band[risk_index_band(company.risk_index).value] += 1

    employees_by_risk = {level.value: 0 for level in RiskLevel}
    for employee in employees:
        employees_by_risk[employee.risk.value] += 1

    average_risk_index = (
        round_half_away_from_zero(statistics.mean(c.risk_index for c in companies)) if companies else 0
    )

    return {
        "company_count": len(companies),
        "active_companies": sum(1 for c in companies if c.status is CompanyStatus.ACTIVE),
        "employee_count": len(employees),
        "average_fit_score": average_fit_score(employees),
        "average_risk_index": average_risk_index,
        "risk_index_band": risk_index_band(average_risk_index).value if companies else None,
        "companies_by_risk_band": companies_by_band,
        "employees_by_risk_level": employees_by_risk,
    }


def sector_breakdown(employees: list[Employee]) -> list[dict[str, Any]]:
    """Employee count and average FitScore per sector, largest first."""
    by_sector: dict[str, list[Employee]] = defaultdict(list)
    for employee in employees:
        by_sector[employee.sector.value].append(employee)

    rows = [
        {
            "sector": sector,
            "employee_count": len(members),
            "average_fit_score": average_fit_score(members),
        }
        for sector, members in by_sector.items()
    ]
    rows.sort(key=lambda r: (-r["employee_count"], r["sector"]))
    return rows


def risk_index_timeline(companies: list[Company]) -> list[dict[str, Any]]:
    """Mean health risk index per month across the companies' histories."""
    by_month: dict[date, list[float]] = defaultdict(list)
    for company in companies:
        for point in company.risk_index_history:
            by_month[point.recorded_on].append(point.value)

    return [
        {
            "recorded_on": month,
            "average_risk_index": round(statistics.mean(values), 1),
            "company_count": len(values),
        }
        for month, values in sorted(by_month.items())
    ]
