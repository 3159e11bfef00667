"""Aggregate recalculator: company statistics derived from the employee set."""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Iterable

from fitbusiness.models.employee import Employee
from fitbusiness.models.enums import RiskLevel

# Employee FitScore thresholds
HIGH_RISK_BELOW = 60
LOW_RISK_FROM = 80

# Company health risk index (IRS) bands, higher is healthier
IRS_HIGH_RISK_BELOW = 50
IRS_LOW_RISK_FROM = 80


@dataclass(frozen=True)
class CompanyStats:
    """Derived company fields written back by the store."""

    total_employees: int
    average_fit_score: int


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties going away from zero.

    Python's ``round`` uses banker's rounding (``round(70.5) == 70``), which
    would make the stored average disagree with ordinary arithmetic rounding.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def risk_level_for(fit_score: float) -> RiskLevel:
    """Classify an employee's FitScore: <60 High, 60-79 Medium, >=80 Low."""
    if fit_score < HIGH_RISK_BELOW:
        return RiskLevel.HIGH
    if fit_score < LOW_RISK_FROM:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def risk_index_band(risk_index: float) -> RiskLevel:
    """Classify a company's health risk index: <50 High, 50-79 Medium, >=80 Low."""
    if risk_index < IRS_HIGH_RISK_BELOW:
        return RiskLevel.HIGH
    if risk_index < IRS_LOW_RISK_FROM:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def average_fit_score(employees: Iterable[Employee]) -> int:
    """Rounded mean FitScore, 0 for an empty set."""
    scores = [e.fit_score for e in employees]
    if not scores:
        return 0
    return round_half_away_from_zero(statistics.mean(scores))


def compute_company_stats(employees: Iterable[Employee], company_id: str) -> CompanyStats:
    """Recompute a company's headcount and average score from scratch.

    Args:
        employees: The full current employee collection.
        company_id: The company whose subset is aggregated.

    Returns:
        CompanyStats for that subset (zeros when it is empty).
    """
    subset = [e for e in employees if e.company_id == company_id]
    return CompanyStats(
        total_employees=len(subset),
        average_fit_score=average_fit_score(subset),
    )
