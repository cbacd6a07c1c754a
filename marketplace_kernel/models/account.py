"""
Module: marketplace_kernel.models.account
Responsibility: ORM persistence for marketplace accounts (profiles) and
    their monetary balance.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - balance >= 0 (ck_account_balance_non_negative).  The database rejects
      any statement that would drive a balance negative.
    - balance is written ONLY by AccountStore.conditionally_adjust().  No
      other code path assigns Account.balance.

Failure modes:
    - IntegrityError if a write would violate the non-negative CHECK.

Audit relevance:
    Account balances are the shared, mutable-by-many resource of the
    system.  Every change to a balance is a transfer leg or a deposit.
"""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_kernel.db.base import TimestampedBase


class Account(TimestampedBase):
    """
    A marketplace participant holding a monetary balance.

    Contract:
        Client or contractor is contextual, not intrinsic: the same account
        pays on contracts where it is the client and is paid on contracts
        where it is the contractor.

    Guarantees:
        - balance is a non-negative integer in minor currency units.

    Non-goals:
        - Accounts are provisioned externally and never deleted by the kernel.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    profession: Mapped[str] = mapped_column(String(100), nullable=False)

    balance: Mapped[int] = mapped_column(nullable=False, default=0)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Account {self.id} balance={self.balance}>"
