"""
BaseService -- abstract base for flush-only kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for the
    write-side building blocks (AccountStore, JobService).  They receive a
    SQLAlchemy ``Session`` and work inside the caller's transaction --
    never ``session.commit()``.

Invariants enforced:
    Transaction boundaries belong to the orchestrating caller
    (PaymentOrchestrator, DepositService, or a test harness).  A building
    block that committed on its own would split the all-or-nothing
    transfer into independently visible pieces.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from marketplace_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for flush-only kernel services.

    Guarantees:
        - The service never calls ``session.commit()`` or
          ``session.rollback()``.
    """

    def __init__(self, session: Session):
        self.session = session
