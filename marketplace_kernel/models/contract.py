"""
Module: marketplace_kernel.models.contract
Responsibility: ORM persistence for contracts linking one client account to
    one contractor account.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - client_id <> contractor_id (ck_contract_distinct_parties).
    - Contracts are immutable for the purposes of the payment kernel; status
      transitions happen outside it.

Failure modes:
    - IntegrityError if both parties are the same account or either account
      does not exist.
"""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace_kernel.db.base import TimestampedBase, UUIDString

if TYPE_CHECKING:
    from marketplace_kernel.models.account import Account
    from marketplace_kernel.models.job import Job


class ContractStatus(str, Enum):
    """Contract lifecycle status."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


ACTIVE_STATUSES: frozenset[ContractStatus] = frozenset({
    ContractStatus.NEW,
    ContractStatus.IN_PROGRESS,
})


class Contract(TimestampedBase):
    """
    Agreement between a client (payer) and a contractor (payee).

    Guarantees:
        - The Transfer Engine treats client_id as payer and contractor_id as
          payee for every job under this contract.
    """

    __tablename__ = "contracts"

    __table_args__ = (
        CheckConstraint("client_id <> contractor_id", name="ck_contract_distinct_parties"),
        Index("idx_contract_client", "client_id"),
        Index("idx_contract_contractor", "contractor_id"),
        Index("idx_contract_status", "status"),
    )

    terms: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[ContractStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ContractStatus.NEW.value,
    )

    client_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    contractor_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    client: Mapped["Account"] = relationship(foreign_keys=[client_id])
    contractor: Mapped["Account"] = relationship(foreign_keys=[contractor_id])
    jobs: Mapped[list["Job"]] = relationship(back_populates="contract")

    def __repr__(self) -> str:
        return f"<Contract {self.id} {self.status}>"
