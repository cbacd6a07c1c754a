"""
API routes for contracts
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace_api.dependencies import get_db, get_profile, parse_id
from marketplace_api.schemas import ContractResponse
from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.exceptions import ContractNotFoundError
from marketplace_kernel.selectors.contract_selector import ContractSelector


router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("", response_model=List[ContractResponse])
def list_contracts(
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
):
    """Non-terminated contracts of the caller"""
    contracts = ContractSelector(db).list_active_for_party(profile.id)
    return [ContractResponse.model_validate(c) for c in contracts]


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(
    contract_id: str,
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
):
    """Get a contract by ID, if the caller is a party to it"""
    parsed = parse_id(contract_id, lambda: ContractNotFoundError(contract_id))
    contract = ContractSelector(db).get_for_party(profile.id, parsed)
    return ContractResponse.model_validate(contract)
