"""Tests for JobAccessGuard.resolve_payable_job."""

from uuid import uuid4

import pytest

from marketplace_kernel.exceptions import JobNotFoundError
from marketplace_kernel.selectors.job_access_guard import (
    CAUSE_ALREADY_PAID,
    CAUSE_MISSING,
    CAUSE_NOT_CLIENT,
    JobAccessGuard,
)


class TestResolvePayableJob:

    def test_resolves_job_and_contract(self, session, payable_job):
        client, contractor, job = payable_job(price=10, client_balance=0)

        payable = JobAccessGuard(session).resolve_payable_job(client.id, job.id)

        assert payable.job.id == job.id
        assert payable.payer_id == client.id
        assert payable.payee_id == contractor.id
        assert payable.price == 10

    def test_lock_on_resolve(self, session, payable_job):
        client, _, job = payable_job(price=10, client_balance=0)

        payable = JobAccessGuard(session).resolve_payable_job(client.id, job.id, lock=True)
        session.rollback()

        assert payable.job.paid is False

    def test_missing(self, session, payable_job):
        client, _, _ = payable_job(price=10, client_balance=0)

        with pytest.raises(JobNotFoundError) as exc_info:
            JobAccessGuard(session).resolve_payable_job(client.id, uuid4())
        assert exc_info.value.cause == CAUSE_MISSING

    def test_already_paid(self, session, create_account, create_contract, create_job):
        client = create_account()
        job = create_job(create_contract(client, create_account()), price=10, paid=True)

        with pytest.raises(JobNotFoundError) as exc_info:
            JobAccessGuard(session).resolve_payable_job(client.id, job.id)
        assert exc_info.value.cause == CAUSE_ALREADY_PAID

    def test_contractor_is_not_client(self, session, payable_job):
        _, contractor, job = payable_job(price=10, client_balance=0)

        with pytest.raises(JobNotFoundError) as exc_info:
            JobAccessGuard(session).resolve_payable_job(contractor.id, job.id)
        assert exc_info.value.cause == CAUSE_NOT_CLIENT

    def test_rejections_share_code_and_message_shape(self, session, payable_job):
        _, contractor, job = payable_job(price=10, client_balance=0)
        guard = JobAccessGuard(session)

        with pytest.raises(JobNotFoundError) as not_client:
            guard.resolve_payable_job(contractor.id, job.id)

        assert not_client.value.code == "JOB_NOT_FOUND"
        assert str(not_client.value) == f"Job not found: {job.id}"
        assert "not_client" not in str(not_client.value)
