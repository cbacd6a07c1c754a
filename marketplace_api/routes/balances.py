"""
API routes for balances.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace_api.dependencies import get_db, get_profile, get_settings, parse_id
from marketplace_api.schemas import AccountResponse, DepositRequest, ErrorResponse
from marketplace_config import MarketplaceSettings
from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.exceptions import ForbiddenError
from marketplace_kernel.services.deposit_service import DepositService


router = APIRouter(prefix="/balances", tags=["balances"])


@router.post(
    "/deposit/{user_id}",
    response_model=AccountResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"description": "Account not found"},
        422: {"model": ErrorResponse},
    },
)
def deposit(
    user_id: str,
    body: DepositRequest,
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
    settings: MarketplaceSettings = Depends(get_settings),
):
    """Deposit into the caller's own balance"""
    target_id = parse_id(user_id, lambda: ForbiddenError(str(profile.id), user_id))
    service = DepositService(
        db,
        threshold_ratio=settings.deposit_threshold_ratio,
        isolation_level=settings.transfer_isolation_level,
    )
    account = service.deposit(profile.id, target_id, body.amount)
    return AccountResponse.model_validate(account)
