"""
JobService -- the paid transition of a job.

Flush-only building block used by the PaymentOrchestrator inside the
transfer's transaction.  ``mark_paid`` is a conditional UPDATE on
``paid = false``, so even if two transfers for the same job both got this
far, only one of them could flip the flag.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import update

from marketplace_kernel.models import Job
from marketplace_kernel.services.base import BaseService


class JobService(BaseService[Job]):

    def mark_paid(self, job_id: UUID, paid_at: datetime) -> int:
        """Set paid/payment_date together; returns rows modified (0 if already paid)."""
        stmt = (
            update(Job)
            .where(Job.id == job_id, Job.paid.is_(False))
            .values(paid=True, payment_date=paid_at)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount
