"""In-memory record store for FitBusiness.

Holds the companies and employees of one session. Every employee mutation
ends with a from-scratch recompute of the affected company's derived
statistics, so callers never observe a changed roster with stale aggregates.
In production this would front a real backend.
"""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable

import structlog

from fitbusiness.models.audit import AuditActor, AuditLog, AuditTarget
from fitbusiness.models.company import Company, CompanyDraft
from fitbusiness.models.employee import Employee, EmployeeDraft
from fitbusiness.models.enums import AuditTargetType
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.services.aggregates import compute_company_stats, risk_level_for
from fitbusiness.services.builders import build_company, build_employee, new_company_id, new_employee_id

if TYPE_CHECKING:
    from fitbusiness.services.bulk_import import ImportSession

logger = structlog.get_logger()


class StoreError(Exception):
    """Base class for record store failures."""


class RecordNotFoundError(StoreError):
    """Raised when an operation targets an id the store does not hold."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind.capitalize()} '{record_id}' not found")
        self.kind = kind
        self.record_id = record_id


class DataStore:
    """In-memory store for one dashboard session."""

    def __init__(self) -> None:
        self.companies: dict[str, Company] = {}
        self.employees: dict[str, Employee] = {}
        self.audit_logs: list[AuditLog] = []
        self.import_sessions: dict[str, ImportSession] = {}

    def reset(self) -> None:
        """Drop all session data."""
        self.__init__()

    def seed(self, rng: random.Random | None = None, audit_log_count: int = 50) -> None:
        """Replace the current contents with generated mock data."""
        from fitbusiness.services.seed_data import generate_audit_logs, generate_seed_data

        self.reset()
        companies, employees = generate_seed_data(rng)
        for company in companies:
            self.companies[company.company_id] = company
        for employee in employees:
            self.employees[employee.employee_id] = employee
        self.audit_logs = generate_audit_logs(companies, employees, audit_log_count, rng)
        logger.info(
            "store_seeded",
            companies=len(self.companies),
            employees=len(self.employees),
            audit_logs=len(self.audit_logs),
        )

    # ─── Companies ──────────────────────────────────────────────────────────

    def list_companies(self) -> list[Company]:
        return list(self.companies.values())

    def get_company(self, company_id: str) -> Company | None:
        return self.companies.get(company_id)

    def require_company(self, company_id: str) -> Company:
        company = self.companies.get(company_id)
        if company is None:
            raise RecordNotFoundError("company", company_id)
        return company

    def add_company(self, draft: CompanyDraft | None = None) -> Company:
        """Create a company from a sparse draft. Always succeeds.

        A new company has no employees yet, so its headcount starts at zero.
        """
        company = build_company(draft, new_company_id())
        self.companies[company.company_id] = company
        logger.info("company_added", company_id=company.company_id, name=company.name)
        return company

    def update_company(self, company: Company) -> Company:
        """Replace a stored company; derived statistics are kept from the store."""
        stored = self.require_company(company.company_id)
        updated = company.model_copy(update={
            "total_employees": stored.total_employees,
            "average_fit_score": stored.average_fit_score,
        })
        self.companies[company.company_id] = updated
        logger.info("company_updated", company_id=company.company_id)
        return updated

    def delete_company(self, company_id: str) -> int:
        """Delete a company and every employee that references it.

        Returns:
            The number of employees removed by the cascade.
        """
        self.require_company(company_id)
        remaining = {eid: e for eid, e in self.employees.items() if e.company_id != company_id}
        removed = len(self.employees) - len(remaining)
        del self.companies[company_id]
        self.employees = remaining
        self.close_imports(company_id)
        logger.info("company_deleted", company_id=company_id, employees_removed=removed)
        return removed

    # ─── Employees ──────────────────────────────────────────────────────────

    def list_employees(self) -> list[Employee]:
        return list(self.employees.values())

    def get_employee(self, employee_id: str) -> Employee | None:
        return self.employees.get(employee_id)

    def require_employee(self, employee_id: str) -> Employee:
        employee = self.employees.get(employee_id)
        if employee is None:
            raise RecordNotFoundError("employee", employee_id)
        return employee

    def get_employees_by_company(self, company_id: str) -> list[Employee]:
        return [e for e in self.employees.values() if e.company_id == company_id]

    def add_employee(self, draft: EmployeeDraft) -> Employee:
        """Create one employee and recompute its company."""
        self.require_company(draft.company_id)
        employee = build_employee(draft, new_employee_id())
        self.employees[employee.employee_id] = employee
        self.recalculate_company(employee.company_id)
        logger.info("employee_added", employee_id=employee.employee_id, company_id=employee.company_id)
        return employee

    def bulk_add_employees(self, drafts: Iterable[EmployeeDraft], company_id: str) -> list[Employee]:
        """Create a batch of employees for one company with a single recompute."""
        self.require_company(company_id)
        batch = [build_employee(d, new_employee_id()) for d in drafts]
        foreign = [e.employee_id for e in batch if e.company_id != company_id]
        if foreign:
            raise StoreError(f"Batch for company '{company_id}' contains employees of another company")
        for employee in batch:
            self.employees[employee.employee_id] = employee
        self.recalculate_company(company_id)
        logger.info("employees_bulk_added", company_id=company_id, count=len(batch))
        return batch

    def update_employee(self, employee: Employee) -> Employee:
        """Replace a stored employee and recompute the affected companies."""
        previous = self.require_employee(employee.employee_id)
        self.require_company(employee.company_id)
        updated = employee.model_copy(update={"risk": risk_level_for(employee.fit_score)})
        self.employees[employee.employee_id] = updated
        self.recalculate_company(updated.company_id)
        if previous.company_id != updated.company_id:
            self.recalculate_company(previous.company_id)
        logger.info("employee_updated", employee_id=employee.employee_id, company_id=updated.company_id)
        return updated

    def bulk_delete_employees(self, ids: Iterable[str], company_id: str) -> int:
        """Remove the given employees and recompute ``company_id`` once.

        Nothing happens when ``ids`` is empty or ``company_id`` is falsy.
        Unknown ids and ids of another company's employees are ignored.
        """
        targets = set(ids)
        if not targets or not company_id:
            return 0
        remaining = {
            eid: e for eid, e in self.employees.items()
            if eid not in targets or e.company_id != company_id
        }
        removed = len(self.employees) - len(remaining)
        self.employees = remaining
        self.recalculate_company(company_id)
        logger.info("employees_bulk_deleted", company_id=company_id, count=removed)
        return removed

    # ─── Aggregates ─────────────────────────────────────────────────────────

    def recalculate_company(self, company_id: str) -> Company | None:
        """Rewrite a company's headcount and average FitScore from its roster."""
        company = self.companies.get(company_id)
        if company is None:
            return None
        stats = compute_company_stats(self.employees.values(), company_id)
        updated = company.model_copy(update={
            "total_employees": stats.total_employees,
            "average_fit_score": stats.average_fit_score,
        })
        self.companies[company_id] = updated
        return updated

    def integrity_problems(self) -> list[str]:
        """Describe every orphaned employee and every company with stale aggregates."""
        problems = [
            f"employee '{e.employee_id}' references missing company '{e.company_id}'"
            for e in self.employees.values()
            if e.company_id not in self.companies
        ]
        for company in self.companies.values():
            stats = compute_company_stats(self.employees.values(), company.company_id)
            # A company with no employees keeps its creation default average
            if stats.total_employees == 0 and company.total_employees == 0:
                continue
            if (company.total_employees, company.average_fit_score) != (
                stats.total_employees, stats.average_fit_score,
            ):
                problems.append(f"company '{company.company_id}' has stale aggregates")
        return problems

    # ─── Import sessions ────────────────────────────────────────────────────

    def open_import(self, session: ImportSession) -> ImportSession:
        """Register an import session; a company has at most one open import."""
        replaced = self.close_imports(session.company_id)
        self.import_sessions[session.session_id] = session
        if replaced:
            logger.info("import_replaced", company_id=session.company_id, replaced=replaced)
        return session

    def close_imports(self, company_id: str) -> int:
        """Drop every open import session of a company."""
        stale = [sid for sid, s in self.import_sessions.items() if s.company_id == company_id]
        for sid in stale:
            del self.import_sessions[sid]
        return len(stale)

    # ─── Audit trail ────────────────────────────────────────────────────────

    def record_audit(
        self,
        user: AuthenticatedUser,
        action: str,
        target_type: AuditTargetType,
        target_id: str,
        target_name: str,
    ) -> AuditLog:
        """Append an audit entry for an action taken by ``user``."""
        entry = AuditLog(
            log_id=f"log-{uuid.uuid4().hex[:12]}",
            timestamp=datetime.now(timezone.utc),
            user=AuditActor(id=user.user_id, name=user.name),
            action=action,
            target=AuditTarget(type=target_type, id=target_id, name=target_name),
        )
        self.audit_logs.append(entry)
        return entry

    def list_audit_logs(self) -> list[AuditLog]:
        return list(self.audit_logs)
