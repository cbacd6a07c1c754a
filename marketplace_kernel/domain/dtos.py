"""
Read-side data transfer objects.

Services and selectors return these frozen dataclasses instead of ORM
entities, so callers never hold a live row they could mutate by field
assignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from marketplace_kernel.models import Account, Contract, Job


@dataclass(frozen=True)
class AccountInfo:
    id: UUID
    first_name: str
    last_name: str
    profession: str
    balance: int

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_model(cls, account: Account) -> AccountInfo:
        return cls(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            profession=account.profession,
            balance=account.balance,
        )


@dataclass(frozen=True)
class ContractInfo:
    id: UUID
    terms: str
    status: str
    client_id: UUID
    contractor_id: UUID

    @classmethod
    def from_model(cls, contract: Contract) -> ContractInfo:
        return cls(
            id=contract.id,
            terms=contract.terms,
            status=str(getattr(contract.status, "value", contract.status)),
            client_id=contract.client_id,
            contractor_id=contract.contractor_id,
        )


@dataclass(frozen=True)
class JobInfo:
    id: UUID
    contract_id: UUID
    description: str
    price: int
    paid: bool
    payment_date: datetime | None

    @classmethod
    def from_model(cls, job: Job) -> JobInfo:
        return cls(
            id=job.id,
            contract_id=job.contract_id,
            description=job.description,
            price=job.price,
            paid=job.paid,
            payment_date=job.payment_date,
        )


@dataclass(frozen=True)
class PayableJob:
    """An unpaid job together with the contract that names its payer and payee."""

    job: JobInfo
    contract: ContractInfo

    @property
    def payer_id(self) -> UUID:
        return self.contract.client_id

    @property
    def payee_id(self) -> UUID:
        return self.contract.contractor_id

    @property
    def price(self) -> int:
        return self.job.price


@dataclass(frozen=True)
class ProfessionEarnings:
    profession: str
    total: int


@dataclass(frozen=True)
class ClientPayment:
    id: UUID
    full_name: str
    paid: int
