"""Tests for the admin aggregates."""

from datetime import datetime, timezone

import pytest

from marketplace_kernel.selectors.report_selector import ReportSelector

START = datetime(2020, 8, 1, tzinfo=timezone.utc)
END = datetime(2020, 8, 31, 23, 59, 59, tzinfo=timezone.utc)
INSIDE = datetime(2020, 8, 15, 12, 0, tzinfo=timezone.utc)
OUTSIDE = datetime(2021, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def marketplace(create_account, create_contract, create_job):
    """
    Two clients, two professions.

    Programmers earn 2000+300 in August; the musician earns 21.
    Client Ash pays 2000+21, client Harry pays 300.  Everything else is
    outside the window or unpaid.
    """
    harry = create_account(first_name="Harry", last_name="Potter", profession="Wizard")
    ash = create_account(first_name="Ash", last_name="Kethcum", profession="Pokemon master")
    linus = create_account(first_name="Linus", last_name="Torvalds", profession="Programmer")
    alan = create_account(first_name="Alan", last_name="Turing", profession="Programmer")
    john = create_account(first_name="John", last_name="Lenon", profession="Musician")

    create_job(create_contract(ash, linus), price=2000, paid=True, payment_date=INSIDE)
    create_job(create_contract(harry, alan), price=300, paid=True, payment_date=INSIDE)
    create_job(create_contract(ash, john), price=21, paid=True, payment_date=INSIDE)
    create_job(create_contract(harry, john), price=5000, paid=True, payment_date=OUTSIDE)
    create_job(create_contract(harry, john), price=9000)
    return {"harry": harry, "ash": ash}


class TestBestProfession:

    def test_highest_total(self, session, marketplace):
        best = ReportSelector(session).best_profession(START, END)
        assert best.profession == "Programmer"
        assert best.total == 2300

    def test_window_is_inclusive(self, session, marketplace):
        best = ReportSelector(session).best_profession(INSIDE, INSIDE)
        assert best.profession == "Programmer"

    def test_naive_bounds_are_utc(self, session, marketplace):
        naive_start = START.replace(tzinfo=None)
        naive_end = END.replace(tzinfo=None)
        assert ReportSelector(session).best_profession(naive_start, naive_end).total == 2300

    def test_empty_window(self, session, marketplace):
        empty = datetime(1999, 1, 1, tzinfo=timezone.utc)
        assert ReportSelector(session).best_profession(empty, empty) is None


class TestBestClients:

    def test_ranked_by_total_paid(self, session, marketplace):
        clients = ReportSelector(session).best_clients(START, END)

        assert [c.id for c in clients] == [marketplace["ash"].id, marketplace["harry"].id]
        assert clients[0].full_name == "Ash Kethcum"
        assert clients[0].paid == 2021
        assert clients[1].paid == 300

    def test_limit(self, session, marketplace):
        clients = ReportSelector(session).best_clients(START, END, limit=1)
        assert len(clients) == 1

    def test_limit_must_be_positive(self, session, clean_tables):
        with pytest.raises(ValueError):
            ReportSelector(session).best_clients(START, END, limit=0)

    def test_outside_window_counts_nothing(self, session, marketplace):
        clients = ReportSelector(session).best_clients(OUTSIDE, OUTSIDE)
        assert [c.paid for c in clients] == [5000]
