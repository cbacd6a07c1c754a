"""
Admin report routes.

Query dates are ISO 8601.  Invalid parameters are reported together in
one 400 body; an empty result is a 404.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from marketplace_api.dependencies import get_db, get_profile
from marketplace_api.schemas import (
    ClientPaymentResponse,
    ErrorResponse,
    ProfessionResponse,
    error_body,
)
from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.selectors.report_selector import ReportSelector


router = APIRouter(prefix="/admin", tags=["admin"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"description": "No paid jobs in range"},
}


def _parse_date(name: str, value: Optional[str], errors: List[str]) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        errors.append(f'Parameter "{name}", value: {value} is not a valid date')
        return None


def _parse_limit(value: Optional[str], errors: List[str]) -> Optional[int]:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        limit = None
    if limit is None or limit < 1:
        errors.append(f'Parameter "limit", value: {value} is not an acceptable integer')
        return None
    return limit


@router.get("/best-profession", response_model=ProfessionResponse, responses=_ERROR_RESPONSES)
def best_profession(
    start: Optional[str] = None,
    end: Optional[str] = None,
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
):
    """Profession that earned the most in the date range"""
    errors: List[str] = []
    parsed_start = _parse_date("start", start, errors)
    parsed_end = _parse_date("end", end, errors)
    if errors:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(*errors))

    earnings = ReportSelector(db).best_profession(parsed_start, parsed_end)
    if earnings is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return ProfessionResponse(profession=earnings.profession)


@router.get("/best-clients", response_model=List[ClientPaymentResponse], responses=_ERROR_RESPONSES)
def best_clients(
    start: Optional[str] = None,
    end: Optional[str] = None,
    limit: Optional[str] = "2",
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
):
    """Clients who paid the most in the date range"""
    errors: List[str] = []
    parsed_start = _parse_date("start", start, errors)
    parsed_end = _parse_date("end", end, errors)
    parsed_limit = _parse_limit(limit, errors)
    if errors:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(*errors))

    clients = ReportSelector(db).best_clients(parsed_start, parsed_end, limit=parsed_limit)
    if not clients:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return [ClientPaymentResponse.model_validate(c) for c in clients]
