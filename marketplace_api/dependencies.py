"""
FastAPI dependencies: database session, settings, calling profile.
"""
from typing import Callable, Generator, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from marketplace_config import MarketplaceSettings
from marketplace_kernel.db.engine import get_session_factory
from marketplace_kernel.domain.dtos import AccountInfo
from marketplace_kernel.exceptions import AccountNotFoundError
from marketplace_kernel.services.account_store import AccountStore


def get_db() -> Generator[Session, None, None]:
    """One session per request, always closed."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> MarketplaceSettings:
    return request.app.state.settings


def get_profile(
    profile_id: Optional[str] = Header(
        default=None, alias="profile_id", convert_underscores=False
    ),
    db: Session = Depends(get_db),
) -> AccountInfo:
    """Resolve the ``profile_id`` header to an account; 401 if missing or unknown."""
    if not profile_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        account_id = UUID(profile_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        profile = AccountStore(db).get(account_id)
    except AccountNotFoundError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    finally:
        # Leave no read transaction open for the handler's write scope.
        db.rollback()

    return profile


def parse_id(value: str, on_invalid: Callable[[], Exception]) -> UUID:
    """Parse a path id; a malformed id is reported as ``on_invalid()``."""
    try:
        return UUID(value)
    except ValueError:
        raise on_invalid() from None
