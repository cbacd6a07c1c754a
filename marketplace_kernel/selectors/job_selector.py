"""
Module: marketplace_kernel.selectors.job_selector
Responsibility: Read-only job queries: a caller's unpaid jobs and a
    client's outstanding obligation.
Architecture position: Kernel > Selectors.

The outstanding obligation is the Deposit Guard's input.  DepositService
calls outstanding_for_client() with its own write-scope session so the sum
and the credit that depends on it see the same snapshot.
"""

from uuid import UUID

from sqlalchemy import func, or_, select

from marketplace_kernel.domain.dtos import JobInfo
from marketplace_kernel.models import Contract, ContractStatus, Job
from marketplace_kernel.selectors.base import BaseSelector


class JobSelector(BaseSelector[Job]):
    """Job queries."""

    def list_unpaid_for_party(self, caller_id: UUID) -> list[JobInfo]:
        """Unpaid jobs on in-progress contracts the caller is a party to."""
        stmt = (
            select(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .where(
                Job.paid.is_(False),
                Contract.status == ContractStatus.IN_PROGRESS.value,
                or_(Contract.client_id == caller_id, Contract.contractor_id == caller_id),
            )
            .order_by(Job.created_at, Job.id)
        )
        return [JobInfo.from_model(j) for j in self.session.execute(stmt).scalars()]

    def outstanding_for_client(self, client_id: UUID) -> int:
        """
        Total price of unpaid jobs on contracts where ``client_id`` is the client.

        Contract status is not considered.  Returns 0 when there are no
        unpaid jobs.
        """
        stmt = (
            select(func.coalesce(func.sum(Job.price), 0))
            .join(Contract, Job.contract_id == Contract.id)
            .where(Job.paid.is_(False), Contract.client_id == client_id)
        )
        return int(self.session.execute(stmt).scalar_one())
