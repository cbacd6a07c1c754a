"""
AccountStore -- the single write path for account balances.

Responsibility:
    Typed access to accounts and the conditional atomic balance adjustment
    every transfer leg and deposit goes through.

Architecture position:
    Kernel > Services -- flush-only building block.  Runs inside the
    caller's transaction; never commits.

Invariants enforced:
    - Non-negative balance: ``conditionally_adjust`` is one statement,
      ``UPDATE accounts SET balance = balance + :delta
      WHERE id = :id AND balance + :delta >= 0``.  The check and the write
      cannot be separated by a concurrent writer.
    - Single choke point: no other code in the system writes
      ``Account.balance``.

Failure modes:
    - AccountNotFoundError when the account id does not exist.
    - TypeError when delta is not an int.
"""

from uuid import UUID

from sqlalchemy import select, update

from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.exceptions import AccountNotFoundError
from marketplace_kernel.logging_config import get_logger
from marketplace_kernel.models import Account
from marketplace_kernel.services.base import BaseService

logger = get_logger("services.account_store")


class AccountStore(BaseService[Account]):
    """Accessor over account balances."""

    def get(self, account_id: UUID) -> AccountInfo:
        """
        Load an account, bypassing any stale copy in the identity map.

        Raises:
            AccountNotFoundError: If the account doesn't exist.
        """
        stmt = (
            select(Account)
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )
        account = self.session.execute(stmt).scalar_one_or_none()
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return AccountInfo.from_model(account)

    def exists(self, account_id: UUID) -> bool:
        stmt = select(Account.id).where(Account.id == account_id)
        return self.session.execute(stmt).first() is not None

    def conditionally_adjust(self, account_id: UUID, delta: int) -> int:
        """
        Apply ``balance += delta`` only if the result stays non-negative.

        Credits (delta >= 0) always satisfy the condition.  Debits succeed
        only when the current balance covers the amount.

        Args:
            account_id: Account to adjust.
            delta: Signed amount in minor units.

        Returns:
            Number of rows modified: 1 on success, 0 if the debit would
            overdraw the account.

        Raises:
            AccountNotFoundError: If the account doesn't exist.
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise TypeError(f"delta must be an int, got {type(delta).__name__}")

        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.balance + delta >= 0)
            .values(balance=Account.balance + delta)
            .execution_options(synchronize_session=False)
        )
        rows = self.session.execute(stmt).rowcount

        if rows == 0 and not self.exists(account_id):
            raise AccountNotFoundError(str(account_id))

        logger.debug(
            "balance_adjusted" if rows else "balance_adjustment_refused",
            extra={"account_id": str(account_id), "delta": delta, "rows": rows},
        )
        return rows
