"""
API routes for jobs: unpaid listing and payment.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace_api.dependencies import get_db, get_profile, get_settings, parse_id
from marketplace_api.schemas import ErrorResponse, JobResponse
from marketplace_config import MarketplaceSettings
from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.exceptions import JobNotFoundError
from marketplace_kernel.selectors.job_selector import JobSelector
from marketplace_kernel.services.payment_orchestrator import PaymentOrchestrator


router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/unpaid", response_model=List[JobResponse])
def get_unpaid_jobs(
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
):
    """Unpaid jobs on the caller's in-progress contracts"""
    jobs = JobSelector(db).list_unpaid_for_party(profile.id)
    return [JobResponse.model_validate(job) for job in jobs]


@router.post(
    "/{job_id}/pay",
    response_model=JobResponse,
    responses={
        404: {"description": "Job not found, already paid, or not the caller's"},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def pay_job(
    job_id: str,
    profile: AccountInfo = Depends(get_profile),
    db: Session = Depends(get_db),
    settings: MarketplaceSettings = Depends(get_settings),
):
    """Pay a job from the caller's balance to the contractor"""
    parsed = parse_id(job_id, lambda: JobNotFoundError(job_id))
    orchestrator = PaymentOrchestrator(
        db, isolation_level=settings.transfer_isolation_level
    )
    job = orchestrator.pay_job(profile.id, parsed)
    return JobResponse.model_validate(job)
