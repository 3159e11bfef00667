"""Mock data generator used to seed each new store."""

from __future__ import annotations

import random
import unicodedata
from datetime import date, datetime, timedelta, timezone
from typing import Any

from fitbusiness.models.audit import AuditActor, AuditLog, AuditTarget
from fitbusiness.models.company import Address, Company, Contact, RiskIndexPoint
from fitbusiness.models.employee import (
    Employee,
    EmployeeDraft,
    ExercisePlan,
    FitScorePoint,
    Goal,
    WellnessMetrics,
)
from fitbusiness.models.enums import (
    AuditTargetType,
    CompanyStatus,
    Gender,
    GoalStatus,
    RiskLevel,
    Sector,
)
from fitbusiness.services.aggregates import compute_company_stats
from fitbusiness.services.builders import avatar_url_for, build_employee

HISTORY_MONTHS = 12

SEED_COMPANIES: list[dict[str, Any]] = [
    {
        "name": "InovaTech Soluções",
        "tax_id": "11.222.333/0001-44",
        "sector": Sector.TECHNOLOGY,
        "status": CompanyStatus.ACTIVE,
        "average_risk": RiskLevel.LOW,
        "risk_index": 82,
        "address": ("Av. Inovação, 123", "Tecnoparque", "São Paulo, SP", "01234-567"),
        "contact": ("contato@inovatech.com", "(11) 98765-4321"),
    },
    {
        "name": "Manufatura Forte",
        "tax_id": "55.666.777/0001-88",
        "sector": Sector.INDUSTRY,
        "status": CompanyStatus.ACTIVE,
        "average_risk": RiskLevel.MEDIUM,
        "risk_index": 65,
        "address": ("Rua da Produção, 456", "Distrito Industrial", "Joinville, SC", "89200-000"),
        "contact": ("contato@manufaturaforte.com.br", "(47) 91234-5678"),
    },
    {
        "name": "LogiExpress Brasil",
        "tax_id": "99.888.777/0001-66",
        "sector": Sector.LOGISTICS,
        "status": CompanyStatus.ACTIVE,
        "average_risk": RiskLevel.HIGH,
        "risk_index": 48,
        "address": ("Rod. Principal, Km 10", "Centro Logístico", "Cajamar, SP", "07750-000"),
        "contact": ("operacoes@logiexpress.com", "(11) 95555-1234"),
    },
    {
        "name": "Varejo Total",
        "tax_id": "12.345.678/0001-99",
        "sector": Sector.RETAIL,
        "status": CompanyStatus.INACTIVE,
        "average_risk": RiskLevel.LOW,
        "risk_index": 77,
        "address": ("R. Comercial, 789", "Centro", "Rio de Janeiro, RJ", "20000-000"),
        "contact": ("sac@varejototal.com", "(21) 98888-4444"),
    },
    {
        "name": "Clínica Bem Viver",
        "tax_id": "34.567.890/0001-12",
        "sector": Sector.HEALTH,
        "status": CompanyStatus.ACTIVE,
        "average_risk": RiskLevel.MEDIUM,
        "risk_index": 71,
        "address": ("Av. Saúde, 101", "Jardins", "Belo Horizonte, MG", "30100-000"),
        "contact": ("adm@clinicabemviver.med.br", "(31) 97777-3333"),
    },
]

# name, title, sector, fit score, sleep, stress, mood, energy, birth date, gender, weight, height
SEED_EMPLOYEE_POOL: list[tuple] = [
    ("Carlos Andrade", "Senior Software Engineer", Sector.TECHNOLOGY, 88, 7.5, 25, 5, 5, "1988-05-20", Gender.MALE, 82, 180),
    ("Beatriz Lima", "Product Designer", Sector.TECHNOLOGY, 92, 8, 20, 5, 5, "1992-11-15", Gender.FEMALE, 65, 168),
    ("Ricardo Souza", "Project Manager", Sector.TECHNOLOGY, 75, 6.5, 60, 3, 3, "1985-02-10", Gender.MALE, 88, 175),
    ("Fernanda Costa", "Machine Operator", Sector.INDUSTRY, 65, 7, 55, 4, 4, "1995-07-30", Gender.FEMALE, 70, 170),
    ("Jorge Martins", "Production Supervisor", Sector.INDUSTRY, 58, 6, 70, 3, 3, "1980-01-25", Gender.MALE, 95, 182),
    ("Luiza Pereira", "Quality Analyst", Sector.INDUSTRY, 72, 7, 40, 4, 4, "1998-09-05", Gender.FEMALE, 68, 165),
    ("Marcos Almeida", "Delivery Driver", Sector.LOGISTICS, 45, 5.5, 80, 2, 2, "1990-03-12", Gender.MALE, 85, 178),
    ("Patrícia Rocha", "Logistics Coordinator", Sector.LOGISTICS, 52, 6, 75, 3, 3, "1987-06-22", Gender.FEMALE, 72, 173),
    ("Thiago Nunes", "Warehouse Assistant", Sector.LOGISTICS, 61, 6.5, 65, 4, 4, "1999-12-01", Gender.MALE, 78, 176),
    ("Vanessa Dias", "Sales Associate", Sector.RETAIL, 80, 7, 30, 5, 4, "1993-04-18", Gender.FEMALE, 62, 169),
    ("Dr. Roberto Neves", "General Practitioner", Sector.HEALTH, 68, 6.5, 60, 4, 4, "1975-10-08", Gender.MALE, 90, 185),
    ("Juliana Faria", "Head Nurse", Sector.HEALTH, 55, 6, 75, 3, 3, "1989-08-14", Gender.FEMALE, 67, 166),
]

AUDIT_ACTIONS = [
    "viewed_dashboard",
    "edited_employee",
    "added_company",
    "removed_employee",
    "generated_report",
    "changed_company_status",
]

AUDIT_USERS = [
    AuditActor(id="user-admin-1", name="Alice Admin"),
    AuditActor(id="user-hr-2", name="Bruno RH"),
]


def _slug(text: str) -> str:
    """Lower-case ASCII letters and digits only."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    return "".join(ch for ch in ascii_text.lower() if ch.isalnum())


def _month_start(today: date, months_back: int) -> date:
    index = today.year * 12 + (today.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def generate_fit_score_history(base_score: int, rng: random.Random, today: date | None = None) -> list[FitScorePoint]:
    """Twelve monthly scores drifting by -5..+5 from the base, clamped to 0-100."""
    today = today or date.today()
    history = []
    score = base_score
    for months_back in range(HISTORY_MONTHS - 1, -1, -1):
        score = max(0, min(100, score + rng.randint(-5, 5)))
        history.append(FitScorePoint(recorded_on=_month_start(today, months_back), score=score))
    return history


def generate_risk_index_history(current: float, rng: random.Random, today: date | None = None) -> list[RiskIndexPoint]:
    """Twelve monthly IRS readings ending at the current value."""
    today = today or date.today()
    values = [float(current)]
    for _ in range(HISTORY_MONTHS - 1):
        values.append(max(0.0, min(100.0, values[-1] + rng.randint(-4, 4))))
    values.reverse()
    return [
        RiskIndexPoint(recorded_on=_month_start(today, HISTORY_MONTHS - 1 - i), value=value)
        for i, value in enumerate(values)
    ]


def generate_seed_data(
    rng: random.Random | None = None,
    today: date | None = None,
) -> tuple[list[Company], list[Employee]]:
    """Build the demo companies and their staff.

    Each company gets the pool entries of its sector; its derived
    statistics are computed from that roster like any other recompute.
    """
    rng = rng or random.Random()
    today = today or date.today()
    companies: list[Company] = []
    employees: list[Employee] = []

    for index, base in enumerate(SEED_COMPANIES, start=1):
        company_id = f"co-{index}"
        street, district, city, postal_code = base["address"]
        email, phone = base["contact"]
        company = Company(
            company_id=company_id,
            name=base["name"],
            tax_id=base["tax_id"],
            sector=base["sector"],
            status=base["status"],
            address=Address(street=street, district=district, city=city, postal_code=postal_code),
            contact=Contact(email=email, phone=phone),
            risk_index=base["risk_index"],
            risk_index_history=generate_risk_index_history(base["risk_index"], rng, today),
            average_risk=base["average_risk"],
        )

        pool = [p for p in SEED_EMPLOYEE_POOL if p[2] == company.sector]
        domain = _slug(company.name.split(" ")[0])
        for position, entry in enumerate(pool, start=1):
            name, title, _, fit_score, sleep, stress, mood, energy, birth, gender, weight, height = entry
            parts = name.split(" ")
            employee_email = f"{_slug(parts[0])}.{_slug(parts[1])}@{domain}.com"
            draft = EmployeeDraft(
                name=name,
                email=employee_email,
                title=title,
                company_id=company_id,
                company_name=company.name,
                sector=company.sector,
                avatar_url=avatar_url_for(employee_email),
                admission_date=date(2022, 8, 15),
                fit_score=fit_score,
                fit_score_history=generate_fit_score_history(fit_score, rng, today),
                metrics=WellnessMetrics(sleep_hours=sleep, stress_pct=stress, mood=mood, energy=energy),
                exercise_plan=ExercisePlan(
                    name="Daily Walk",
                    target="10,000 steps/day",
                    frequency="Daily",
                    progress=rng.randint(0, 100),
                ),
                goals=[
                    Goal(
                        goal_id="goal-1",
                        description="Reach 10,000 steps per day",
                        target_date=date(today.year, 12, 31),
                        status=GoalStatus.IN_PROGRESS,
                    )
                ],
                birth_date=date.fromisoformat(birth),
                gender=gender,
                weight_kg=weight,
                height_cm=height,
            )
            employees.append(build_employee(draft, f"emp-{company_id}-{position}", today))

        stats = compute_company_stats(employees, company_id)
        companies.append(company.model_copy(update={
            "total_employees": stats.total_employees,
            "average_fit_score": stats.average_fit_score,
        }))

    return companies, employees


def generate_audit_logs(
    companies: list[Company],
    employees: list[Employee],
    count: int = 50,
    rng: random.Random | None = None,
) -> list[AuditLog]:
    """Random audit entries over the last 30 days, newest first."""
    rng = rng or random.Random()
    targets = [
        AuditTarget(type=AuditTargetType.COMPANY, id=c.company_id, name=c.name) for c in companies
    ] + [
        AuditTarget(type=AuditTargetType.EMPLOYEE, id=e.employee_id, name=e.name) for e in employees
    ]
    if not targets:
        return []

    now = datetime.now(timezone.utc)
    logs = [
        AuditLog(
            log_id=f"log-{i + 1}",
            timestamp=now - timedelta(days=rng.randint(0, 29), hours=rng.randint(0, 23)),
            user=rng.choice(AUDIT_USERS),
            action=rng.choice(AUDIT_ACTIONS),
            target=rng.choice(targets),
        )
        for i in range(count)
    ]
    logs.sort(key=lambda log: log.timestamp, reverse=True)
    return logs
