"""
FastAPI application factory.

Kernel exceptions are mapped to HTTP status codes in one handler.  Not
found is always an empty 404; every other business error carries
``{"errors": [{"message": ...}]}``.
"""
from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from marketplace_api.routes import admin, balances, contracts, jobs
from marketplace_api.schemas import error_body
from marketplace_config import MarketplaceSettings, get_active_config
from marketplace_kernel import __version__
from marketplace_kernel.db.engine import init_engine_from_settings
from marketplace_kernel.exceptions import (
    AccountNotFoundError,
    ContractNotFoundError,
    DepositFailedError,
    DepositLimitExceededError,
    ForbiddenError,
    InsufficientFundsError,
    InvalidAmountError,
    JobNotFoundError,
    MarketplaceError,
    TransferFailedError,
)
from marketplace_kernel.logging_config import LogContext, configure_logging, get_logger

logger = get_logger("api")

# First match wins; anything unlisted is a 500.
STATUS_BY_ERROR: tuple[tuple[type[MarketplaceError], int], ...] = (
    (JobNotFoundError, status.HTTP_404_NOT_FOUND),
    (ContractNotFoundError, status.HTTP_404_NOT_FOUND),
    (AccountNotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_400_BAD_REQUEST),
    (InvalidAmountError, status.HTTP_400_BAD_REQUEST),
    (InsufficientFundsError, 422),
    (DepositLimitExceededError, 422),
    (TransferFailedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (DepositFailedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


# Failures whose own message is already generic.
OPAQUE_ERRORS = (TransferFailedError, DepositFailedError)


def status_for(exc: MarketplaceError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    status_code = status_for(exc)
    logger.info(
        "request_rejected",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    if status_code == status.HTTP_404_NOT_FOUND:
        return Response(status_code=status_code)
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR and not isinstance(exc, OPAQUE_ERRORS):
        # Unmapped kernel errors carry internal detail; keep it in the log.
        return JSONResponse(status_code=status_code, content=error_body("Internal error"))
    return JSONResponse(status_code=status_code, content=error_body(str(exc)))


async def bind_request_id(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid4())
    with LogContext.bind(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def create_app(
    settings: Optional[MarketplaceSettings] = None,
    init_db: bool = True,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings.  Defaults to get_active_config().
        init_db: Initialize the engine from ``settings``.  Pass False when
            the engine is already initialized (tests, embedding).
    """
    settings = settings or get_active_config()
    configure_logging(level=settings.log_level)
    if init_db:
        init_engine_from_settings(settings)

    app = FastAPI(
        title="Marketplace Ledger",
        description="Contracts, jobs and balances between clients and contractors",
        version=__version__,
    )
    app.state.settings = settings

    app.middleware("http")(bind_request_id)
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)

    app.include_router(contracts.router)
    app.include_router(jobs.router)
    app.include_router(balances.router)
    app.include_router(admin.router)

    logger.info("app_created", extra={"version": __version__})
    return app
