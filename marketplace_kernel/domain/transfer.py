"""
Transfer state machine (``marketplace_kernel.domain.transfer``).

Responsibility
--------------
Pure value objects describing the stages of a job payment.  The
PaymentOrchestrator drives one ``TransferStateMachine`` per attempt and
logs every stage change, so a reader of the log can tell exactly where an
aborted transfer stopped.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.  No imports
from ``db/``, ``services/``, ``selectors/``, or outer layers.

Invariants enforced
-------------------
* Stages advance only along ``VALID_TRANSITIONS``.
* COMMITTED and ABORTED are terminal.
* Every in-flight stage may abort; a committed attempt may not.

Stage order::

    PRE_CHECK -> DEBIT_PENDING -> CREDIT_PENDING -> JOB_MARKING -> COMMITTED
        \\              \\                \\               \\
         +--------------+----------------+---------------+--> ABORTED

Reaching COMMITTED does not commit anything by itself; the orchestrator
advances to COMMITTED only after the session commit returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID


class TransferStage(str, Enum):
    """Stage of a single pay-job attempt."""

    PRE_CHECK = "pre_check"
    DEBIT_PENDING = "debit_pending"
    CREDIT_PENDING = "credit_pending"
    JOB_MARKING = "job_marking"
    COMMITTED = "committed"
    ABORTED = "aborted"


VALID_TRANSITIONS: dict[TransferStage, frozenset[TransferStage]] = {
    TransferStage.PRE_CHECK: frozenset({
        TransferStage.DEBIT_PENDING, TransferStage.ABORTED,
    }),
    TransferStage.DEBIT_PENDING: frozenset({
        TransferStage.CREDIT_PENDING, TransferStage.ABORTED,
    }),
    TransferStage.CREDIT_PENDING: frozenset({
        TransferStage.JOB_MARKING, TransferStage.ABORTED,
    }),
    TransferStage.JOB_MARKING: frozenset({
        TransferStage.COMMITTED, TransferStage.ABORTED,
    }),
    # Terminal states
    TransferStage.COMMITTED: frozenset(),
    TransferStage.ABORTED: frozenset(),
}


class InvalidTransferTransitionError(ValueError):
    """A stage change not listed in VALID_TRANSITIONS was requested."""

    def __init__(self, from_stage: TransferStage, to_stage: TransferStage):
        self.from_stage = from_stage
        self.to_stage = to_stage
        super().__init__(
            f"Invalid transfer transition: {from_stage.value} -> {to_stage.value}"
        )


@dataclass(frozen=True)
class TransferPlan:
    """Who pays whom, how much, for which job.  Frozen once resolved."""

    job_id: UUID
    contract_id: UUID
    payer_id: UUID
    payee_id: UUID
    amount: int


@dataclass
class TransferStateMachine:
    """Tracks the stage of one transfer attempt.

    ``history`` records every stage entered, starting with PRE_CHECK.
    """

    job_id: UUID
    stage: TransferStage = TransferStage.PRE_CHECK
    history: list[TransferStage] = field(default_factory=lambda: [TransferStage.PRE_CHECK])
    abort_reason: str | None = None

    @property
    def is_terminal(self) -> bool:
        return not VALID_TRANSITIONS[self.stage]

    def advance(self, to_stage: TransferStage) -> TransferStage:
        """Move to ``to_stage``; raises InvalidTransferTransitionError if not allowed."""
        if to_stage not in VALID_TRANSITIONS[self.stage]:
            raise InvalidTransferTransitionError(self.stage, to_stage)
        self.stage = to_stage
        self.history.append(to_stage)
        return to_stage

    def abort(self, reason: str) -> None:
        """Mark the attempt aborted.  A no-op on an already-aborted attempt."""
        if self.stage is TransferStage.ABORTED:
            return
        self.advance(TransferStage.ABORTED)
        self.abort_reason = reason
