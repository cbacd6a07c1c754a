"""
Request/response models for the HTTP surface.

Response models are built from the kernel's frozen DTOs
(``from_attributes``).  Field names are camelCase on the wire.
"""
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class AccountResponse(_WireModel):
    id: UUID
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    profession: str
    balance: int


class ContractResponse(_WireModel):
    id: UUID
    terms: str
    status: str
    client_id: UUID = Field(alias="ClientId")
    contractor_id: UUID = Field(alias="ContractorId")


class JobResponse(_WireModel):
    id: UUID
    description: str
    price: int
    paid: bool
    payment_date: Optional[datetime] = Field(default=None, alias="paymentDate")
    contract_id: UUID = Field(alias="ContractId")


class DepositRequest(BaseModel):
    """Deposit body.  The amount is validated by the kernel, not here."""
    amount: Any = None


class ProfessionResponse(BaseModel):
    profession: str


class ClientPaymentResponse(_WireModel):
    id: UUID
    full_name: str = Field(alias="fullName")
    paid: int


class ErrorMessage(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    errors: List[ErrorMessage]


def error_body(*messages: str) -> dict:
    return ErrorResponse(errors=[ErrorMessage(message=m) for m in messages]).model_dump()
