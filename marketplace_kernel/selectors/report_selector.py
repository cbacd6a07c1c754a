"""
Module: marketplace_kernel.selectors.report_selector
Responsibility: Admin aggregates over paid jobs in a payment-date window.
Architecture position: Kernel > Selectors.  Read-only.

    best_profession -- the contractor profession with the highest total of
                       paid job prices in the window.
    best_clients    -- clients ranked by total paid in the window.

Both windows are inclusive on both ends.  Window bounds are normalized to
UTC; naive datetimes are taken as UTC.
"""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import aliased

from marketplace_kernel.domain.dtos import ClientPayment, ProfessionEarnings
from marketplace_kernel.models import Account, Contract, Job
from marketplace_kernel.selectors.base import BaseSelector


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ReportSelector(BaseSelector[Job]):
    """Aggregate queries for the admin surface."""

    def best_profession(self, start: datetime, end: datetime) -> ProfessionEarnings | None:
        """Highest-earning contractor profession, or None if nothing was paid."""
        contractor = aliased(Account)
        total = func.sum(Job.price).label("total")
        stmt = (
            select(contractor.profession, total)
            .join(Contract, Job.contract_id == Contract.id)
            .join(contractor, Contract.contractor_id == contractor.id)
            .where(
                Job.paid.is_(True),
                Job.payment_date.between(_utc(start), _utc(end)),
            )
            .group_by(contractor.profession)
            .order_by(total.desc(), contractor.profession)
            .limit(1)
        )
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            return None
        return ProfessionEarnings(profession=row.profession, total=int(row.total))

    def best_clients(self, start: datetime, end: datetime, limit: int = 2) -> list[ClientPayment]:
        """Top ``limit`` clients by total paid; ties broken by account id."""
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        client = aliased(Account)
        total = func.sum(Job.price).label("total")
        stmt = (
            select(client.id, client.first_name, client.last_name, total)
            .join(Contract, Job.contract_id == Contract.id)
            .join(client, Contract.client_id == client.id)
            .where(
                Job.paid.is_(True),
                Job.payment_date.between(_utc(start), _utc(end)),
            )
            .group_by(client.id, client.first_name, client.last_name)
            .order_by(total.desc(), client.id)
            .limit(limit)
        )
        return [
            ClientPayment(
                id=row.id,
                full_name=f"{row.first_name} {row.last_name}",
                paid=int(row.total),
            )
            for row in self.session.execute(stmt)
        ]
