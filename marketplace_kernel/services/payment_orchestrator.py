"""
Payment Orchestrator -- the Ledger Transfer Engine.

Pays a job: debits the contract's client, credits the contractor and
marks the job paid, all in one transaction.

Workflow (one ``TransferStateMachine`` per attempt):

    PRE_CHECK       guard resolves (job, contract); advisory balance check.
                    Read-only; no write transaction is open yet.
    DEBIT_PENDING   write scope opened.  Job re-resolved under lock, then
                    conditional debit of the payer.
    CREDIT_PENDING  credit of the payee.
    JOB_MARKING     conditional paid transition of the job.
    COMMITTED       session commit returned.
    ABORTED         anything above raised; the scope rolled back.

Invariants enforced:
    - Conservation: payer -price, payee +price, nothing else, or nothing at all.
    - No overdraft: the authoritative funds check is the conditional debit,
      not the advisory pre-check.
    - At-most-once: the job is re-resolved under lock inside the write scope
      and flipped with ``UPDATE ... WHERE paid = false``.  Concurrent payers
      of one job serialize and exactly one sees it unpaid.

Failure modes:
    - JobNotFoundError: missing, already paid, or caller not the client
      (including "a concurrent payer committed first").
    - InsufficientFundsError: advisory pre-check or conditional debit.
    - TransferFailedError: storage/transaction failure, or a broken internal
      invariant (TransferIntegrityError), such as a payee that vanished
      mid-transfer.  Details are logged; the message carried to the caller
      is generic.

Transaction boundary:
    auto_commit=True (default): the orchestrator owns the session's
    transactions.  It ends the read-only PRE_CHECK transaction and opens
    the write scope at ``isolation_level`` (BEGIN IMMEDIATE on SQLite).
    auto_commit=False: the caller owns the transaction; the write phase runs
    in a SAVEPOINT so a failed transfer leaves nothing behind.

No retries are attempted.  A failed transfer is reported; the caller may
resubmit.
"""

from dataclasses import replace
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace_kernel.db.engine import write_scope
from marketplace_kernel.domain.clock import Clock, SystemClock
from marketplace_kernel.domain.dtos import JobInfo, PayableJob
from marketplace_kernel.domain.transfer import (
    TransferPlan,
    TransferStage,
    TransferStateMachine,
)
from marketplace_kernel.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    JobNotFoundError,
    TransferFailedError,
    TransferIntegrityError,
)
from marketplace_kernel.logging_config import LogContext, get_logger
from marketplace_kernel.selectors.job_access_guard import CAUSE_ALREADY_PAID, JobAccessGuard
from marketplace_kernel.services.account_store import AccountStore
from marketplace_kernel.services.job_service import JobService

logger = get_logger("services.payment_orchestrator")


class PaymentOrchestrator:
    """
    Orchestrates the pay-job transfer.

    One orchestrator per session; sessions are not shared between threads.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        auto_commit: bool = True,
        isolation_level: str = "SERIALIZABLE",
    ):
        """
        Args:
            session: SQLAlchemy session.
            clock: Source of payment dates. Defaults to SystemClock.
            auto_commit: If True (default), the orchestrator owns transaction
                boundaries.  If False, the caller does.
            isolation_level: Isolation of the write scope on PostgreSQL.
        """
        self._session = session
        self._clock = clock or SystemClock()
        self._auto_commit = auto_commit
        self._isolation_level = isolation_level

        self._guard = JobAccessGuard(session)
        self._accounts = AccountStore(session)
        self._jobs = JobService(session)

    def pay_job(self, caller_id: UUID, job_id: UUID) -> JobInfo:
        """
        Pay ``job_id`` from ``caller_id``'s balance to the contractor.

        Returns:
            The job as committed (paid=True, payment_date set).

        Raises:
            JobNotFoundError, InsufficientFundsError, TransferFailedError.
        """
        with LogContext.bind(actor_id=str(caller_id), job_id=str(job_id)):
            machine = TransferStateMachine(job_id=job_id)
            logger.info("transfer_started")

            try:
                self._pre_check(caller_id, job_id)
                with write_scope(
                    self._session,
                    isolation_level=self._isolation_level,
                    auto_commit=self._auto_commit,
                ):
                    payable, paid_at = self._apply(caller_id, job_id, machine)
            except (JobNotFoundError, InsufficientFundsError) as exc:
                self._abort(machine, exc.code)
                raise
            except TransferIntegrityError as exc:
                self._abort(machine, exc.code)
                logger.error("transfer_integrity_violation", exc_info=True)
                raise TransferFailedError(str(job_id)) from exc
            except SQLAlchemyError as exc:
                self._abort(machine, "storage_failure")
                logger.error("transfer_storage_failure", exc_info=True)
                if self._lost_race(caller_id, job_id):
                    raise JobNotFoundError(str(job_id), cause=CAUSE_ALREADY_PAID) from exc
                raise TransferFailedError(str(job_id)) from exc
            except Exception as exc:
                self._abort(machine, type(exc).__name__)
                raise

            machine.advance(TransferStage.COMMITTED)
            logger.info(
                "transfer_committed",
                extra={
                    "payer_id": str(payable.payer_id),
                    "payee_id": str(payable.payee_id),
                    "amount": payable.price,
                    "stages": [s.value for s in machine.history],
                },
            )
            return replace(payable.job, paid=True, payment_date=paid_at)

    # -----------------------------------------------------------------
    # Stages
    # -----------------------------------------------------------------

    def _pre_check(self, caller_id: UUID, job_id: UUID) -> PayableJob:
        """Resolve the job and run the advisory funds check.  Read-only."""
        try:
            payable = self._guard.resolve_payable_job(caller_id, job_id)
            payer = self._accounts.get(payable.payer_id)
        finally:
            if self._auto_commit:
                # End the read transaction; the write scope opens its own.
                self._session.rollback()

        if payable.price > payer.balance:
            raise InsufficientFundsError(str(job_id), payable.price, payer.balance)
        return payable

    def _apply(
        self,
        caller_id: UUID,
        job_id: UUID,
        machine: TransferStateMachine,
    ) -> tuple[PayableJob, datetime]:
        """Debit, credit, mark paid.  Runs inside the write scope."""
        # A payer that committed after the pre-check makes this raise.
        payable = self._guard.resolve_payable_job(caller_id, job_id, lock=True)
        plan = self._plan_of(payable)

        machine.advance(TransferStage.DEBIT_PENDING)
        if self._accounts.conditionally_adjust(plan.payer_id, -plan.amount) != 1:
            raise InsufficientFundsError(str(job_id), plan.amount)

        machine.advance(TransferStage.CREDIT_PENDING)
        try:
            rows = self._accounts.conditionally_adjust(plan.payee_id, plan.amount)
        except AccountNotFoundError as exc:
            raise TransferIntegrityError(str(job_id), str(plan.payee_id), 0) from exc
        if rows != 1:
            raise TransferIntegrityError(str(job_id), str(plan.payee_id), rows)

        machine.advance(TransferStage.JOB_MARKING)
        paid_at = self._clock.now()
        if self._jobs.mark_paid(job_id, paid_at) != 1:
            raise JobNotFoundError(str(job_id), cause=CAUSE_ALREADY_PAID)

        return payable, paid_at

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    @staticmethod
    def _plan_of(payable: PayableJob) -> TransferPlan:
        return TransferPlan(
            job_id=payable.job.id,
            contract_id=payable.contract.id,
            payer_id=payable.payer_id,
            payee_id=payable.payee_id,
            amount=payable.price,
        )

    def _abort(self, machine: TransferStateMachine, reason: str) -> None:
        stage = machine.stage
        machine.abort(reason)
        logger.warning(
            "transfer_aborted",
            extra={"stage": stage.value, "reason": reason},
        )

    def _lost_race(self, caller_id: UUID, job_id: UUID) -> bool:
        """
        After a storage failure, tell "a concurrent payer won" apart from
        everything else.  A serialization failure against the winning
        transfer leaves the job paid, which the guard reports as not found.
        """
        if not self._auto_commit:
            return False
        try:
            self._guard.resolve_payable_job(caller_id, job_id)
        except JobNotFoundError:
            return True
        except SQLAlchemyError:
            logger.warning("transfer_race_check_failed", exc_info=True)
            return False
        finally:
            self._session.rollback()
        return False
