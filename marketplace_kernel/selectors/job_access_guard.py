"""
Module: marketplace_kernel.selectors.job_access_guard
Responsibility: Resolve a job the caller is allowed to pay.
Architecture position: Kernel > Selectors.  Read-only.

Invariants enforced:
    - A job is payable by the caller iff it exists, is unpaid, and its
      contract's client is the caller.
    - All three failures raise the same JobNotFoundError.  The specific
      cause is logged (``payable_job_rejected``, field ``cause``) and kept on
      the exception's private ``_cause`` slot; it never reaches the caller.

Failure modes:
    - JobNotFoundError (see above).

Locking:
    ``lock=True`` issues SELECT ... FOR UPDATE OF jobs so that, inside a
    write scope on PostgreSQL, a second payer of the same job blocks until
    the first commits.  SQLite renders no FOR UPDATE; its write scopes
    already hold the database write lock.
"""

from uuid import UUID

from sqlalchemy import select

from marketplace_kernel.domain.dtos import ContractInfo, JobInfo, PayableJob
from marketplace_kernel.exceptions import JobNotFoundError
from marketplace_kernel.logging_config import get_logger
from marketplace_kernel.models import Contract, Job
from marketplace_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.job_access_guard")

CAUSE_MISSING = "missing"
CAUSE_ALREADY_PAID = "already_paid"
CAUSE_NOT_CLIENT = "not_client"


class JobAccessGuard(BaseSelector[Job]):
    """Joins a job with its contract and checks the caller may pay it."""

    def resolve_payable_job(
        self,
        caller_id: UUID,
        job_id: UUID,
        lock: bool = False,
    ) -> PayableJob:
        """
        Resolve an unpaid job whose contract's client is ``caller_id``.

        Args:
            caller_id: Authenticated account making the request.
            job_id: Job to pay.
            lock: Lock the job row for the rest of the caller's transaction.

        Returns:
            PayableJob DTO (job + contract).

        Raises:
            JobNotFoundError: Job missing, already paid, or caller not the client.
        """
        stmt = (
            select(Job, Contract)
            .join(Contract, Job.contract_id == Contract.id)
            .where(Job.id == job_id)
            .execution_options(populate_existing=True)
        )
        if lock:
            stmt = stmt.with_for_update(of=Job)

        row = self.session.execute(stmt).one_or_none()

        if row is None:
            self._reject(caller_id, job_id, CAUSE_MISSING)
        job, contract = row

        if job.paid:
            self._reject(caller_id, job_id, CAUSE_ALREADY_PAID)
        if contract.client_id != caller_id:
            self._reject(caller_id, job_id, CAUSE_NOT_CLIENT)

        return PayableJob(
            job=JobInfo.from_model(job),
            contract=ContractInfo.from_model(contract),
        )

    def _reject(self, caller_id: UUID, job_id: UUID, cause: str) -> None:
        logger.info(
            "payable_job_rejected",
            extra={"caller_id": str(caller_id), "job_id": str(job_id), "cause": cause},
        )
        raise JobNotFoundError(str(job_id), cause=cause)
