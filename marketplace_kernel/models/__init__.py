"""Domain models for the marketplace kernel."""

from marketplace_kernel.models.account import Account
from marketplace_kernel.models.contract import ACTIVE_STATUSES, Contract, ContractStatus
from marketplace_kernel.models.job import Job

__all__ = [
    "Account",
    "Contract",
    "ContractStatus",
    "ACTIVE_STATUSES",
    "Job",
]
