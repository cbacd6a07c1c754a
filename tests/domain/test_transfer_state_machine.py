"""Tests for the transfer state machine (pure, no database)."""

from uuid import uuid4

import pytest

from marketplace_kernel.domain.transfer import (
    VALID_TRANSITIONS,
    InvalidTransferTransitionError,
    TransferStage,
    TransferStateMachine,
)

HAPPY_PATH = [
    TransferStage.DEBIT_PENDING,
    TransferStage.CREDIT_PENDING,
    TransferStage.JOB_MARKING,
    TransferStage.COMMITTED,
]


class TestTransitions:

    def test_starts_in_pre_check(self):
        machine = TransferStateMachine(job_id=uuid4())
        assert machine.stage is TransferStage.PRE_CHECK
        assert machine.history == [TransferStage.PRE_CHECK]
        assert not machine.is_terminal

    def test_happy_path(self):
        machine = TransferStateMachine(job_id=uuid4())
        for stage in HAPPY_PATH:
            machine.advance(stage)

        assert machine.stage is TransferStage.COMMITTED
        assert machine.history == [TransferStage.PRE_CHECK, *HAPPY_PATH]
        assert machine.is_terminal

    def test_cannot_skip_a_stage(self):
        machine = TransferStateMachine(job_id=uuid4())
        with pytest.raises(InvalidTransferTransitionError) as exc_info:
            machine.advance(TransferStage.CREDIT_PENDING)
        assert exc_info.value.from_stage is TransferStage.PRE_CHECK
        assert machine.stage is TransferStage.PRE_CHECK

    @pytest.mark.parametrize("steps", range(len(HAPPY_PATH)))
    def test_every_in_flight_stage_can_abort(self, steps):
        machine = TransferStateMachine(job_id=uuid4())
        for stage in HAPPY_PATH[:steps]:
            machine.advance(stage)

        machine.abort("INSUFFICIENT_FUNDS")

        assert machine.stage is TransferStage.ABORTED
        assert machine.abort_reason == "INSUFFICIENT_FUNDS"
        assert machine.is_terminal

    def test_committed_cannot_abort(self):
        machine = TransferStateMachine(job_id=uuid4())
        for stage in HAPPY_PATH:
            machine.advance(stage)
        with pytest.raises(InvalidTransferTransitionError):
            machine.abort("late")

    def test_abort_twice_keeps_first_reason(self):
        machine = TransferStateMachine(job_id=uuid4())
        machine.abort("first")
        machine.abort("second")
        assert machine.abort_reason == "first"
        assert machine.history.count(TransferStage.ABORTED) == 1

    def test_terminal_stages_have_no_exits(self):
        assert VALID_TRANSITIONS[TransferStage.COMMITTED] == frozenset()
        assert VALID_TRANSITIONS[TransferStage.ABORTED] == frozenset()

    def test_every_stage_has_an_entry(self):
        assert set(VALID_TRANSITIONS) == set(TransferStage)
