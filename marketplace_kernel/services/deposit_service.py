"""
DepositService -- the Deposit Guard.

Responsibility:
    Credit a client's own balance, capped by a fraction of what the client
    still owes on unpaid jobs.

Architecture position:
    Kernel > Services -- orchestrator.  Owns its transaction when
    ``auto_commit`` is True, like PaymentOrchestrator.

Invariants enforced:
    - A caller deposits only into its own account.
    - amount <= ratio * outstanding, evaluated in ``Decimal``.
    - The outstanding sum and the credit run in one write scope, so a job
      paid (or added) concurrently cannot slip between the check and the
      write.
    - The credit goes through AccountStore.conditionally_adjust.

Failure modes:
    - ForbiddenError: caller is not the target account.
    - InvalidAmountError: amount is not a positive int (bools rejected).
    - AccountNotFoundError: target account does not exist.
    - DepositLimitExceededError: amount above the threshold.  A client
      with no unpaid jobs has a threshold of 0.
    - DepositFailedError: storage or transaction failure.  Logged with full
      detail; the message is generic.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace_kernel.db.engine import write_scope
from marketplace_kernel.domain.deposit_policy import DEFAULT_THRESHOLD_RATIO, evaluate_deposit
from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.exceptions import (
    DepositFailedError,
    DepositLimitExceededError,
    ForbiddenError,
    InvalidAmountError,
)
from marketplace_kernel.logging_config import LogContext, get_logger
from marketplace_kernel.selectors.job_selector import JobSelector
from marketplace_kernel.services.account_store import AccountStore

logger = get_logger("services.deposit_service")


def _display(threshold: Decimal) -> int | Decimal:
    """Integral thresholds print as ints (250, not 250.00)."""
    if threshold == threshold.to_integral_value():
        return int(threshold)
    return threshold.normalize()


class DepositService:
    """Deposits into a client's own balance."""

    def __init__(
        self,
        session: Session,
        threshold_ratio: Decimal = DEFAULT_THRESHOLD_RATIO,
        auto_commit: bool = True,
        isolation_level: str = "SERIALIZABLE",
    ):
        self._session = session
        self._threshold_ratio = Decimal(threshold_ratio)
        self._auto_commit = auto_commit
        self._isolation_level = isolation_level

        self._accounts = AccountStore(session)
        self._jobs = JobSelector(session)

    def deposit(self, caller_id: UUID, target_id: UUID, amount: int) -> AccountInfo:
        """
        Add ``amount`` to ``target_id``'s balance.

        Returns:
            The account as committed.
        """
        with LogContext.bind(actor_id=str(caller_id), account_id=str(target_id)):
            if caller_id != target_id:
                logger.warning("deposit_rejected", extra={"reason": ForbiddenError.code})
                raise ForbiddenError(str(caller_id), str(target_id))
            if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
                logger.warning("deposit_rejected", extra={"reason": InvalidAmountError.code})
                raise InvalidAmountError(amount)

            if self._auto_commit and self._session.in_transaction():
                # Close any read transaction left by the caller's lookups.
                self._session.rollback()

            try:
                account = self._apply(target_id, amount)
            except SQLAlchemyError as exc:
                logger.error("deposit_storage_failure", exc_info=True)
                raise DepositFailedError(str(target_id)) from exc

            logger.info(
                "deposit_committed",
                extra={"amount": amount, "balance": account.balance},
            )
            return account

    def _apply(self, target_id: UUID, amount: int) -> AccountInfo:
        """Threshold check and credit in one write scope."""
        with write_scope(
            self._session,
            isolation_level=self._isolation_level,
            auto_commit=self._auto_commit,
        ):
            self._accounts.get(target_id)
            outstanding = self._jobs.outstanding_for_client(target_id)
            decision = evaluate_deposit(amount, outstanding, self._threshold_ratio)
            if not decision.allowed:
                logger.warning(
                    "deposit_rejected",
                    extra={
                        "reason": DepositLimitExceededError.code,
                        "amount": amount,
                        "outstanding": outstanding,
                        "threshold": decision.threshold,
                    },
                )
                raise DepositLimitExceededError(
                    str(target_id), amount, _display(decision.threshold)
                )
            self._accounts.conditionally_adjust(target_id, amount)
            return self._accounts.get(target_id)
