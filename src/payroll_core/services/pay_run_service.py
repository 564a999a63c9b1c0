"""Pay run service - main orchestrator for payroll operations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.calculators import (
    CalculationResult,
    DeductionRule,
    EmployeeSnapshot,
    PayPeriod,
    PayrollEngine,
    TimeEntrySnapshot,
)
from payroll_core.calculators.money import round_cents
from payroll_core.errors import NotFoundError, UniquenessViolationError
from payroll_core.events import (
    PAY_CHECK_CREATED,
    PAY_RUN_COMPLETED,
    PAY_RUN_CREATED,
    EventBatch,
    EventEmitter,
)
from payroll_core.models import Deduction, Employee, PayCheck, PayRun, TimeEntry
from payroll_core.schemas import PayRunCreate
from payroll_core.services.state_machine import (
    InvalidTransitionError,
    PayRunStateMachine,
    PayRunStatus,
)
from payroll_core.store import RecordStore

logger = logging.getLogger(__name__)


class PayRunService:
    """Service for managing pay run lifecycle.

    Operations:
    - create_pay_run: Open a draft run for a period
    - add_pay_check: Calculate one employee's check and accumulate run totals
    - process_pay_run: draft → processing
    - complete_pay_run: processing → completed
    - void_pay_run: any non-voided status → voided, totals and checks kept
    """

    def __init__(
        self,
        session: AsyncSession,
        events: EventEmitter | EventBatch | None = None,
        engine: PayrollEngine | None = None,
    ):
        self.session = session
        self.events = events or EventEmitter()
        self.engine = engine or PayrollEngine()
        self.pay_runs = RecordStore(session, PayRun, label="PayRun")
        self.pay_checks = RecordStore(session, PayCheck, label="PayCheck")
        self.employees = RecordStore(session, Employee)
        self.time_entries = RecordStore(session, TimeEntry, label="TimeEntry")
        self.deductions = RecordStore(session, Deduction)

    # ------------------------------------------------------------------
    # Pay runs
    # ------------------------------------------------------------------

    async def create_pay_run(self, data: PayRunCreate) -> PayRun:
        """Open a new pay run in draft with zero totals."""
        pay_run = await self.pay_runs.insert(
            {
                **data.model_dump(),
                "status": PayRunStatus.DRAFT.value,
                "total_gross": Decimal("0.00"),
                "total_net": Decimal("0.00"),
                "total_taxes": Decimal("0.00"),
                "total_deductions": Decimal("0.00"),
                "employee_count": 0,
            }
        )
        logger.info(
            "Pay run %s created for %s..%s",
            pay_run.pay_run_id,
            pay_run.period_start,
            pay_run.period_end,
        )
        self.events.emit(PAY_RUN_CREATED, {"pay_run": pay_run})
        return pay_run

    async def get_pay_run(self, pay_run_id: UUID) -> PayRun:
        pay_run = await self.pay_runs.get(pay_run_id)
        if pay_run is None:
            raise NotFoundError("PayRun", pay_run_id)
        return pay_run

    async def list_pay_runs(
        self,
        status: str | None = None,
        entity_id: str | None = None,
    ) -> list[PayRun]:
        """List pay runs, newest pay date first."""
        query = self.pay_runs.query()
        if status is not None:
            query = query.where("status", "=", status)
        if entity_id is not None:
            query = query.where("entity_id", "=", entity_id)
        return await query.order_by("pay_date", "desc").execute()

    async def transition_status(self, pay_run: PayRun, to_status: PayRunStatus) -> PayRun:
        """Move a pay run to a new status and stamp the matching timestamp.

        Raises InvalidTransitionError if the transition is not allowed.
        """
        from_status = pay_run.status
        PayRunStateMachine.validate_transition(from_status, to_status)

        now = datetime.now(timezone.utc)
        changes: dict[str, object] = {"status": to_status.value}
        if to_status == PayRunStatus.PROCESSING:
            changes["processed_at"] = now
        elif to_status == PayRunStatus.COMPLETED:
            changes["completed_at"] = now
        elif to_status == PayRunStatus.VOIDED:
            changes["voided_at"] = now

        pay_run = await self.pay_runs.update(pay_run.pay_run_id, changes)
        logger.info(
            "Pay run %s: %s -> %s", pay_run.pay_run_id, from_status, to_status.value
        )
        return pay_run

    async def process_pay_run(self, pay_run_id: UUID) -> PayRun:
        pay_run = await self.get_pay_run(pay_run_id)
        return await self.transition_status(pay_run, PayRunStatus.PROCESSING)

    async def complete_pay_run(self, pay_run_id: UUID) -> PayRun:
        pay_run = await self.get_pay_run(pay_run_id)
        pay_run = await self.transition_status(pay_run, PayRunStatus.COMPLETED)
        self.events.emit(PAY_RUN_COMPLETED, {"pay_run": pay_run})
        return pay_run

    async def void_pay_run(self, pay_run_id: UUID) -> PayRun:
        """Void a pay run. Totals and pay checks are left as they are."""
        pay_run = await self.get_pay_run(pay_run_id)
        return await self.transition_status(pay_run, PayRunStatus.VOIDED)

    # ------------------------------------------------------------------
    # Pay checks
    # ------------------------------------------------------------------

    async def add_pay_check(self, pay_run_id: UUID, employee_id: UUID) -> PayCheck:
        """Calculate an employee's check for the run and add it to the totals."""
        pay_run = await self.get_pay_run(pay_run_id)
        if not PayRunStateMachine.can_accept_pay_checks(pay_run.status):
            raise InvalidTransitionError(
                pay_run.status,
                pay_run.status,
                "pay checks can only be added to draft or processing pay runs",
            )

        employee = await self.employees.get(employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)

        existing = await (
            self.pay_checks.query()
            .where("pay_run_id", "=", pay_run_id)
            .where("employee_id", "=", employee_id)
            .count()
        )
        if existing:
            raise UniquenessViolationError("PayCheck", "employee_id", employee_id)

        result = await self.calculate(pay_run, employee)

        pay_check = await self.pay_checks.insert(
            {"pay_run_id": pay_run_id, **result.to_pay_check_values()}
        )
        await self._accumulate_totals(pay_run, result)

        logger.info(
            "Pay check %s added to run %s from %d time entries: gross=%s net=%s",
            pay_check.pay_check_id,
            pay_run_id,
            result.entries_used,
            result.gross,
            result.net,
        )
        self.events.emit(PAY_CHECK_CREATED, {"pay_check": pay_check})
        return pay_check

    async def calculate(self, pay_run: PayRun, employee: Employee) -> CalculationResult:
        """Gather the employee's inputs for the run's period and run the engine."""
        entries = await (
            self.time_entries.query()
            .where("employee_id", "=", employee.employee_id)
            .where("approved", "=", True)
            .where("work_date", ">=", pay_run.period_start)
            .where("work_date", "<=", pay_run.period_end)
            .order_by("work_date")
            .execute()
        )
        deductions = await self.deductions.query().order_by("code").execute()

        return self.engine.calculate(
            period=PayPeriod.from_model(pay_run),
            employee=EmployeeSnapshot.from_model(employee),
            time_entries=[TimeEntrySnapshot.from_model(e) for e in entries],
            deductions=[DeductionRule.from_model(d) for d in deductions],
        )

    async def _accumulate_totals(self, pay_run: PayRun, result: CalculationResult) -> PayRun:
        return await self.pay_runs.update(
            pay_run.pay_run_id,
            {
                "total_gross": round_cents(pay_run.total_gross + result.gross),
                "total_net": round_cents(pay_run.total_net + result.net),
                "total_taxes": round_cents(pay_run.total_taxes + result.total_taxes),
                "total_deductions": round_cents(
                    pay_run.total_deductions + result.total_deductions
                ),
                "employee_count": pay_run.employee_count + 1,
            },
        )

    async def get_pay_check(self, pay_check_id: UUID) -> PayCheck:
        pay_check = await self.pay_checks.get(pay_check_id)
        if pay_check is None:
            raise NotFoundError("PayCheck", pay_check_id)
        return pay_check

    async def list_pay_checks_by_run(self, pay_run_id: UUID) -> list[PayCheck]:
        return await (
            self.pay_checks.query()
            .where("pay_run_id", "=", pay_run_id)
            .order_by("created_at")
            .execute()
        )

    async def list_pay_checks_by_employee(self, employee_id: UUID) -> list[PayCheck]:
        return await (
            self.pay_checks.query()
            .where("employee_id", "=", employee_id)
            .order_by("created_at")
            .execute()
        )

    # ------------------------------------------------------------------
    # Employer taxes
    # ------------------------------------------------------------------

    def compute_futa(self, gross: Decimal) -> Decimal:
        """Employer FUTA for one gross amount."""
        return self.engine.tax_calculator.futa(gross)

    def compute_suta(self, gross: Decimal, state_code: str | None = None) -> Decimal:
        """Employer SUTA for one gross amount."""
        return self.engine.tax_calculator.suta(gross, state_code)
