"""Services for the marketplace kernel (write side)."""

from marketplace_kernel.services.account_store import AccountStore
from marketplace_kernel.services.deposit_service import DepositService
from marketplace_kernel.services.job_service import JobService
from marketplace_kernel.services.payment_orchestrator import PaymentOrchestrator

__all__ = [
    "AccountStore",
    "DepositService",
    "JobService",
    "PaymentOrchestrator",
]
