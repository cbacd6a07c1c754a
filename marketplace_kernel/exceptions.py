"""
Typed Exception Hierarchy for the Marketplace Kernel.

Every error has a typed exception class (catch by type, not message), a
``code`` class attribute (machine-readable, API-safe), and structured
attributes (not just a message string).

    MarketplaceError (base)
    |
    +-- AccountError
    |   +-- AccountNotFoundError
    |   +-- InsufficientFundsError
    |
    +-- ContractError
    |   +-- ContractNotFoundError
    |
    +-- JobError
    |   +-- JobNotFoundError
    |
    +-- AccessError
    |   +-- ForbiddenError
    |
    +-- DepositError
    |   +-- InvalidAmountError
    |   +-- DepositLimitExceededError
    |   +-- DepositFailedError
    |
    +-- TransferError
        +-- TransferIntegrityError
        +-- TransferFailedError

Category   | Code                    | When Raised
-----------|-------------------------|-----------------------------------------
Account    | ACCOUNT_NOT_FOUND       | Account ID doesn't exist
           | INSUFFICIENT_FUNDS      | Payer balance below job price
Contract   | CONTRACT_NOT_FOUND      | Missing, or caller is not a party
Job        | JOB_NOT_FOUND           | Missing, already paid, or caller not client
Access     | FORBIDDEN               | Caller is not the target account
Deposit    | INVALID_AMOUNT          | Deposit amount not a positive integer
           | DEPOSIT_LIMIT_EXCEEDED  | Deposit above outstanding-obligation threshold
           | DEPOSIT_FAILED          | Storage/transaction failure (opaque)
Transfer   | TRANSFER_INTEGRITY      | Credit to a validated payee touched 0 rows
           | TRANSFER_FAILED         | Storage/transaction failure (opaque)

JobNotFoundError deliberately conflates three causes.  The cause is kept in
``_cause`` for internal logging only; it is not part of ``str(exc)`` and is
not serialized by the HTTP layer.

TransferFailedError and DepositFailedError carry generic messages.  The
underlying storage error is chained via ``raise ... from`` and logged, never
shown to the caller.
"""


class MarketplaceError(Exception):
    """
    Base exception for all marketplace kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "MARKETPLACE_ERROR"


# Account-related exceptions


class AccountError(MarketplaceError):
    """Base exception for account-related errors."""

    code: str = "ACCOUNT_ERROR"


class AccountNotFoundError(AccountError):
    """Account with given ID was not found."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class InsufficientFundsError(AccountError):
    """The payer cannot cover the job price."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(self, job_id: str, price: int, balance: int | None = None):
        self.job_id = job_id
        self.price = price
        self.balance = balance
        super().__init__(
            f"Job: {job_id}, cannot be paid because the price exceeds the client's balance."
        )


# Contract-related exceptions


class ContractError(MarketplaceError):
    """Base exception for contract-related errors."""

    code: str = "CONTRACT_ERROR"


class ContractNotFoundError(ContractError):
    """No contract with this ID that the caller is a party to."""

    code: str = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: str):
        self.contract_id = contract_id
        super().__init__(f"Contract not found: {contract_id}")


# Job-related exceptions


class JobError(MarketplaceError):
    """Base exception for job-related errors."""

    code: str = "JOB_ERROR"


class JobNotFoundError(JobError):
    """
    No payable job for this caller.

    Raised alike for a missing job, an already-paid job, and a job whose
    contract client is not the caller.
    """

    code: str = "JOB_NOT_FOUND"

    def __init__(self, job_id: str, cause: str | None = None):
        self.job_id = job_id
        self._cause = cause
        super().__init__(f"Job not found: {job_id}")

    @property
    def cause(self) -> str | None:
        return self._cause


# Access-related exceptions


class AccessError(MarketplaceError):
    """Base exception for caller identity errors."""

    code: str = "ACCESS_ERROR"


class ForbiddenError(AccessError):
    """The caller may not act on the target account."""

    code: str = "FORBIDDEN"

    def __init__(self, caller_id: str, target_id: str):
        self.caller_id = caller_id
        self.target_id = target_id
        super().__init__(
            f"User: {target_id}, does not match requesting user ID: {caller_id}"
        )


# Deposit-related exceptions


class DepositError(MarketplaceError):
    """Base exception for deposit errors."""

    code: str = "DEPOSIT_ERROR"


class InvalidAmountError(DepositError):
    """Deposit amount is not a positive integer."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Amount {amount!r} must be a positive integer")


class DepositLimitExceededError(DepositError):
    """Deposit amount is above the outstanding-obligation threshold."""

    code: str = "DEPOSIT_LIMIT_EXCEEDED"

    def __init__(self, account_id: str, amount: int, threshold):
        self.account_id = account_id
        self.amount = amount
        self.threshold = threshold
        super().__init__(
            f"User: {account_id}, cannot be deposited to with an amount over {threshold}"
        )


class DepositFailedError(DepositError):
    """Opaque wrapper for a storage failure during a deposit."""

    code: str = "DEPOSIT_FAILED"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"User: {account_id}, cannot be deposited to due to an unknown error.")


# Transfer-related exceptions


class TransferError(MarketplaceError):
    """Base exception for transfer errors."""

    code: str = "TRANSFER_ERROR"


class TransferIntegrityError(TransferError):
    """
    An internal invariant broke mid-transfer.

    The payee was validated through the contract, so a credit that modifies
    no row means the data changed underneath us.  Never user-actionable.
    """

    code: str = "TRANSFER_INTEGRITY"

    def __init__(self, job_id: str, account_id: str, rows: int):
        self.job_id = job_id
        self.account_id = account_id
        self.rows = rows
        super().__init__(
            f"Credit to account {account_id} for job {job_id} modified {rows} rows"
        )


class TransferFailedError(TransferError):
    """Opaque wrapper for any storage or transaction failure."""

    code: str = "TRANSFER_FAILED"

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job: {job_id}, cannot be paid due to an unknown error.")
