"""
Module: marketplace_kernel.models.job
Responsibility: ORM persistence for billable jobs under a contract.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - price >= 0 (ck_job_price_non_negative).
    - paid is monotonic false -> true and never reverts.
    - paid implies payment_date is set (ck_job_paid_has_payment_date).
    - Exactly one transfer causes the false -> true transition; the
      transition is a conditional UPDATE ... WHERE paid = false issued by
      JobService.mark_paid() inside the transfer's transaction.

Failure modes:
    - IntegrityError if a row is written paid without a payment_date.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace_kernel.db.base import TimestampedBase, UUIDString

if TYPE_CHECKING:
    from marketplace_kernel.models.contract import Contract


class Job(TimestampedBase):
    """A unit of billable work with a price and a paid/unpaid state."""

    __tablename__ = "jobs"

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_job_price_non_negative"),
        CheckConstraint(
            "NOT paid OR payment_date IS NOT NULL",
            name="ck_job_paid_has_payment_date",
        ),
        Index("idx_job_contract", "contract_id"),
        Index("idx_job_paid", "paid"),
    )

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    price: Mapped[int] = mapped_column(nullable=False)

    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    payment_date: Mapped[datetime | None] = mapped_column(nullable=True)

    contract_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("contracts.id"),
        nullable=False,
    )

    contract: Mapped["Contract"] = relationship(back_populates="jobs")

    def __repr__(self) -> str:
        return f"<Job {self.id} price={self.price} paid={self.paid}>"
