"""Selectors for the marketplace kernel (read side)."""

from marketplace_kernel.selectors.contract_selector import ContractSelector
from marketplace_kernel.selectors.job_access_guard import JobAccessGuard
from marketplace_kernel.selectors.job_selector import JobSelector
from marketplace_kernel.selectors.report_selector import ReportSelector

__all__ = [
    "ContractSelector",
    "JobAccessGuard",
    "JobSelector",
    "ReportSelector",
]
