# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Engine-level tests for the duty scheduler: resolver, ledger, aggregator,
ticket log, and both storage backends.
"""

import random
import sys
import threading
from datetime import date

import pytest

from duty_scheduler.core.dependencies import build_memory_container, build_sql_container
from duty_scheduler.core.errors import (
    BookingLimitExceeded,
    BookingNotFound,
    DuplicateBooking,
    InvalidDateKind,
    PastDateBooking,
    TicketNotFound,
    UnknownMember,
)
from duty_scheduler.models.domain import Booking
from duty_scheduler.repositories.booking_repository import BookingRepository
from duty_scheduler.services.booking_service import BookingService
from duty_scheduler.services.dates import (
    day_name,
    is_valid_date,
    is_valid_month,
    is_weekend,
    parse_date,
    weekend_dates,
)
from duty_scheduler.services.resolver import resolve_month
from duty_scheduler.services.schedule_service import ScheduleService

TODAY = date(2025, 6, 1)
SATURDAY = "2025-06-07"
SUNDAY = "2025-06-08"
NEXT_SATURDAY = "2025-06-14"
WEDNESDAY = "2025-06-04"
MONTH = "2025-06"
JUNE_WEEKENDS = [
    "2025-06-07", "2025-06-08", "2025-06-14", "2025-06-15",
    "2025-06-21", "2025-06-22", "2025-06-28", "2025-06-29",
]
PRIORITIES = {"Shrishti": 1, "Aakash": 2, "Ashish": 3, "Sahil": 4}


def _booking(booking_id, user_id, day=SATURDAY):
    return Booking(id=booking_id, user_id=user_id, date=day, month=day[:7])


@pytest.fixture(params=["memory", "sql"])
def container(request):
    if request.param == "memory":
        return build_memory_container(clock=lambda: TODAY)
    return build_sql_container("sqlite://", clock=lambda: TODAY)


def _assert_projection_consistent(container, month):
    """Every assigned date points at the best-ranked current booking."""
    bookings = container.booking_repo.get_by_month(month)
    entries = container.schedule_repo.get_by_month(month)
    assert len({e.date for e in entries}) == len(entries)
    by_date = {}
    for b in bookings:
        by_date.setdefault(b.date, []).append(b)
    assert {e.date for e in entries} == set(by_date)
    for entry in entries:
        best = min(by_date[entry.date], key=lambda b: (PRIORITIES[b.user_id], b.id))
        assert entry.assigned_to == best.user_id


# ============================================
# Calendar helpers
# ============================================
class TestDates:
    def test_weekend_dates_for_june_2025(self):
        assert weekend_dates("2025-06") == JUNE_WEEKENDS

    def test_weekend_dates_february_leap_year(self):
        assert weekend_dates("2024-02") == [
            "2024-02-03", "2024-02-04", "2024-02-10", "2024-02-11",
            "2024-02-17", "2024-02-18", "2024-02-24", "2024-02-25",
        ]

    def test_is_weekend(self):
        assert is_weekend(parse_date(SATURDAY))
        assert is_weekend(parse_date(SUNDAY))
        assert not is_weekend(parse_date(WEDNESDAY))

    def test_day_name(self):
        assert day_name(parse_date(SATURDAY)) == "Saturday"
        assert day_name(parse_date(SUNDAY)) == "Sunday"

    def test_parse_date_rejects_impossible_date(self):
        with pytest.raises(ValueError):
            parse_date("2025-02-30")

    def test_validators(self):
        assert is_valid_date("2025-06-07")
        assert not is_valid_date("2025-6-7")
        assert is_valid_month("2025-06")
        assert not is_valid_month("2025-13")
        assert not is_valid_month("2025-6")


# ============================================
# Conflict resolver (pure)
# ============================================
class TestResolver:
    def test_single_booking_is_confirmed(self):
        result = resolve_month([_booking(1, "Aakash")], PRIORITIES)
        assert result.flags == {1: (True, False)}
        assert result.assignments == {SATURDAY: "Aakash"}
        assert result.conflicts == []

    def test_priority_wins_regardless_of_insertion_order(self):
        bookings = [_booking(1, "Ashish"), _booking(2, "Shrishti"), _booking(3, "Aakash")]
        result = resolve_month(bookings, PRIORITIES)
        assert result.assignments[SATURDAY] == "Shrishti"
        assert len(result.conflicts) == 1
        assert result.conflicts[0].winner == "Shrishti"
        assert result.conflicts[0].losers == ["Aakash", "Ashish"]
        assert result.flags[2] == (True, False)
        assert result.flags[1] == (False, True)
        assert result.flags[3] == (False, True)

    def test_equal_priority_falls_back_to_insertion_order(self):
        bookings = [_booking(7, "Late"), _booking(3, "Early")]
        result = resolve_month(bookings, {"Early": 1, "Late": 1})
        assert result.assignments[SATURDAY] == "Early"
        assert result.conflicts[0].losers == ["Late"]

    def test_unknown_member_ranks_last(self):
        bookings = [_booking(1, "Stranger"), _booking(2, "Sahil")]
        result = resolve_month(bookings, PRIORITIES)
        assert result.assignments[SATURDAY] == "Sahil"

    def test_dates_are_independent(self):
        bookings = [
            _booking(1, "Aakash", SATURDAY),
            _booking(2, "Shrishti", SUNDAY),
            _booking(3, "Sahil", SUNDAY),
        ]
        result = resolve_month(bookings, PRIORITIES)
        assert result.assignments == {SATURDAY: "Aakash", SUNDAY: "Shrishti"}
        assert [c.date for c in result.conflicts] == [SUNDAY]

    def test_conflicts_are_ordered_by_date(self):
        bookings = [
            _booking(1, "Aakash", NEXT_SATURDAY),
            _booking(2, "Shrishti", NEXT_SATURDAY),
            _booking(3, "Aakash", SATURDAY),
            _booking(4, "Sahil", SATURDAY),
        ]
        result = resolve_month(bookings, PRIORITIES)
        assert [c.date for c in result.conflicts] == [SATURDAY, NEXT_SATURDAY]

    def test_empty_month(self):
        result = resolve_month([], PRIORITIES)
        assert result.assignments == {}
        assert result.conflicts == []
        assert result.flags == {}

    def test_rerun_is_identical(self):
        bookings = [_booking(1, "Aakash"), _booking(2, "Shrishti"), _booking(3, "Sahil", SUNDAY)]
        first = resolve_month(bookings, PRIORITIES)
        second = resolve_month(bookings, PRIORITIES)
        assert first == second
        assert [c.model_dump_json() for c in first.conflicts] == [
            c.model_dump_json() for c in second.conflicts
        ]


# ============================================
# Team directory
# ============================================
class TestDirectory:
    def test_members_sorted_by_priority(self, container):
        names = [m.name for m in container.directory.list_members()]
        assert names == ["Shrishti", "Aakash", "Ashish", "Sahil"]

    def test_find_by_name(self, container):
        assert container.directory.find_by_name("Aakash").priority == 2
        assert container.directory.find_by_name("Nobody") is None

    def test_access_key_exact_match(self, container):
        member = container.directory.find_by_access_key("SHRISHTI_2025_SECURE")
        assert member is not None
        assert member.name == "Shrishti"

    def test_access_key_prefix_does_not_match(self, container):
        assert container.directory.find_by_access_key("SHRISHTI_2025") is None

    def test_access_key_is_case_sensitive(self, container):
        assert container.directory.validate_access_key("shrishti_2025_secure") is None

    def test_empty_access_key_never_matches(self, container):
        assert container.directory.validate_access_key("") is None
        assert container.directory.validate_access_key(None) is None

    def test_seed_is_skipped_when_team_exists(self, container):
        container.directory.seed_defaults()
        assert container.team_repo.count() == 4


# ============================================
# Booking ledger — scenarios
# ============================================
class TestBookingScenarios:
    def test_scenario_a_first_booking_confirmed(self, container):
        result = container.booking_service.request_booking("Aakash", SATURDAY)
        assert result == {"success": True, "conflicts": []}
        schedule = container.schedule_service.get_monthly_schedule(MONTH)
        assert schedule.assignments == {SATURDAY: "Aakash"}
        booking = container.booking_service.list_user_bookings("Aakash", MONTH)[0]
        assert booking.is_confirmed and not booking.is_conflicted

    def test_scenario_b_higher_priority_takes_the_date(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        result = container.booking_service.request_booking("Shrishti", SATURDAY)

        conflicts = [c.model_dump() for c in result["conflicts"]]
        assert conflicts == [{"date": SATURDAY, "winner": "Shrishti", "losers": ["Aakash"]}]
        schedule = container.schedule_service.get_monthly_schedule(MONTH)
        assert schedule.assignments[SATURDAY] == "Shrishti"
        aakash = container.booking_service.list_user_bookings("Aakash", MONTH)[0]
        assert aakash.is_conflicted and not aakash.is_confirmed

    def test_scenario_c_weekday_rejected_without_mutation(self, container):
        with pytest.raises(InvalidDateKind):
            container.booking_service.request_booking("Aakash", WEDNESDAY)
        assert container.booking_repo.count() == 0
        assert container.schedule_repo.count() == 0

    def test_scenario_d_third_booking_rejected(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Aakash", SUNDAY)
        with pytest.raises(BookingLimitExceeded):
            container.booking_service.request_booking("Aakash", NEXT_SATURDAY)
        assert len(container.booking_service.list_user_bookings("Aakash", MONTH)) == 2
        assert container.schedule_repo.get_by_date(NEXT_SATURDAY) is None

    def test_scenario_e_cancel_winner_promotes_loser(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Shrishti", SATURDAY)

        assert container.booking_service.cancel_booking("Shrishti", SATURDAY) == {"success": True}

        schedule = container.schedule_service.get_monthly_schedule(MONTH)
        assert schedule.assignments[SATURDAY] == "Aakash"
        assert [c for c in schedule.conflicts if c.date == SATURDAY] == []
        aakash = container.booking_service.list_user_bookings("Aakash", MONTH)[0]
        assert aakash.is_confirmed and not aakash.is_conflicted


# ============================================
# Booking ledger — validation and cancellation
# ============================================
class TestBookingRules:
    def test_duplicate_booking_rejected(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        with pytest.raises(DuplicateBooking):
            container.booking_service.request_booking("Aakash", SATURDAY)
        assert container.booking_repo.count() == 1

    def test_store_rejects_second_booking_for_same_user_and_date(self, container):
        container.booking_repo.create(user_id="Aakash", date=SATURDAY, month=MONTH)
        with pytest.raises(DuplicateBooking):
            container.booking_repo.create(user_id="Aakash", date=SATURDAY, month=MONTH)
        assert container.booking_repo.count() == 1

    def test_store_delete_returns_detached_booking(self, container):
        created = container.booking_repo.create(user_id="Aakash", date=SATURDAY, month=MONTH)
        removed = container.booking_repo.delete(created.id)
        assert removed == created
        assert container.booking_repo.get(created.id) is None
        assert container.booking_repo.delete(created.id) is None

    def test_explicit_zero_limit_blocks_every_booking(self, container):
        service = BookingService(
            booking_repo=container.booking_repo,
            schedule_repo=container.schedule_repo,
            directory=container.directory,
            clock=lambda: TODAY,
            max_bookings_per_month=0,
            unit_of_work=container.unit_of_work,
        )
        with pytest.raises(BookingLimitExceeded):
            service.request_booking("Aakash", SATURDAY)
        assert container.booking_repo.count() == 0

    def test_explicit_limit_of_one(self, container):
        service = BookingService(
            booking_repo=container.booking_repo,
            schedule_repo=container.schedule_repo,
            directory=container.directory,
            clock=lambda: TODAY,
            max_bookings_per_month=1,
            unit_of_work=container.unit_of_work,
        )
        service.request_booking("Aakash", SATURDAY)
        with pytest.raises(BookingLimitExceeded, match="1 bookings"):
            service.request_booking("Aakash", SUNDAY)

    def test_past_date_rejected(self, container):
        with pytest.raises(PastDateBooking):
            container.booking_service.request_booking("Aakash", "2025-05-31")
        assert container.booking_repo.count() == 0

    def test_today_is_bookable(self, container):
        result = container.booking_service.request_booking("Aakash", TODAY.isoformat())
        assert result["success"] is True

    def test_weekday_check_precedes_past_check(self, container):
        with pytest.raises(InvalidDateKind):
            container.booking_service.request_booking("Aakash", "2025-05-28")

    def test_malformed_date_rejected(self, container):
        with pytest.raises(InvalidDateKind):
            container.booking_service.request_booking("Aakash", "2025-06-31")

    def test_unknown_member_rejected(self, container):
        with pytest.raises(UnknownMember):
            container.booking_service.request_booking("Mallory", SATURDAY)

    def test_limit_is_per_month(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Aakash", SUNDAY)
        result = container.booking_service.request_booking("Aakash", "2025-07-05")
        assert result["success"] is True

    def test_conflicted_bookings_count_toward_limit(self, container):
        container.booking_service.request_booking("Shrishti", SATURDAY)
        container.booking_service.request_booking("Shrishti", SUNDAY)
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Aakash", SUNDAY)
        with pytest.raises(BookingLimitExceeded):
            container.booking_service.request_booking("Aakash", NEXT_SATURDAY)

    def test_error_messages_are_human_readable(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Aakash", SUNDAY)
        with pytest.raises(BookingLimitExceeded, match="already has 2 bookings"):
            container.booking_service.request_booking("Aakash", NEXT_SATURDAY)
        with pytest.raises(InvalidDateKind, match="not a weekend"):
            container.booking_service.request_booking("Sahil", WEDNESDAY)
        with pytest.raises(PastDateBooking, match="past date"):
            container.booking_service.request_booking("Sahil", "2025-05-31")

    def test_cancel_missing_booking(self, container):
        with pytest.raises(BookingNotFound):
            container.booking_service.cancel_booking("Aakash", SATURDAY)

    def test_cancel_other_users_date_not_found(self, container):
        container.booking_service.request_booking("Shrishti", SATURDAY)
        with pytest.raises(BookingNotFound):
            container.booking_service.cancel_booking("Aakash", SATURDAY)
        assert container.schedule_repo.get_by_date(SATURDAY).assigned_to == "Shrishti"

    def test_cancel_sole_booking_unassigns_date(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.cancel_booking("Aakash", SATURDAY)
        assert container.schedule_repo.get_by_date(SATURDAY) is None
        assert container.schedule_service.get_monthly_schedule(MONTH).assignments == {}

    def test_cancel_loser_keeps_winner(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Shrishti", SATURDAY)
        container.booking_service.cancel_booking("Aakash", SATURDAY)
        schedule = container.schedule_service.get_monthly_schedule(MONTH)
        assert schedule.assignments == {SATURDAY: "Shrishti"}
        assert schedule.conflicts == []

    def test_cancel_frees_a_slot_under_the_limit(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Aakash", SUNDAY)
        container.booking_service.cancel_booking("Aakash", SUNDAY)
        result = container.booking_service.request_booking("Aakash", NEXT_SATURDAY)
        assert result["success"] is True

    def test_list_bookings_for_month(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Sahil", SUNDAY)
        container.booking_service.request_booking("Sahil", "2025-07-05")
        bookings = container.booking_service.list_bookings(MONTH)
        assert [(b.user_id, b.date) for b in bookings] == [("Aakash", SATURDAY), ("Sahil", SUNDAY)]


# ============================================
# Invariants across operation sequences
# ============================================
class TestInvariants:
    def test_projection_tracks_best_booking_through_random_sequence(self, container):
        rng = random.Random(2025)
        members = list(PRIORITIES)
        for _ in range(60):
            user = rng.choice(members)
            day = rng.choice(JUNE_WEEKENDS)
            held = {b.date for b in container.booking_service.list_user_bookings(user, MONTH)}
            if day in held and rng.random() < 0.7:
                container.booking_service.cancel_booking(user, day)
            else:
                try:
                    container.booking_service.request_booking(user, day)
                except (BookingLimitExceeded, DuplicateBooking):
                    pass
            _assert_projection_consistent(container, MONTH)

            schedule = container.schedule_service.get_monthly_schedule(MONTH)
            for status in schedule.user_statuses:
                assert status.confirmed_days <= 2
                assert status.confirmed_days + status.conflicted_days <= len(status.bookings)
                assert status.remaining_days == max(0, 2 - status.confirmed_days)

    def test_resolve_twice_is_idempotent(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Shrishti", SATURDAY)
        container.booking_service.request_booking("Sahil", SUNDAY)

        first_conflicts = container.booking_service.resolve_conflicts(MONTH)
        first_rows = container.schedule_repo.get_by_month(MONTH)
        first_flags = container.booking_repo.get_by_month(MONTH)
        second_conflicts = container.booking_service.resolve_conflicts(MONTH)

        assert first_conflicts == second_conflicts
        assert container.schedule_repo.get_by_month(MONTH) == first_rows
        assert container.booking_repo.get_by_month(MONTH) == first_flags

    def test_monthly_schedule_is_read_only(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        before = container.booking_repo.get_by_month(MONTH)
        container.schedule_service.get_monthly_schedule(MONTH)
        container.schedule_service.get_monthly_schedule(MONTH)
        assert container.booking_repo.get_by_month(MONTH) == before


class TestConcurrency:
    def test_parallel_requests_respect_limit(self):
        container = build_memory_container(clock=lambda: TODAY)
        outcomes = []
        lock = threading.Lock()

        def book(day):
            try:
                container.booking_service.request_booking("Aakash", day)
                result = "ok"
            except BookingLimitExceeded:
                result = "limit"
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=book, args=(d,)) for d in JUNE_WEEKENDS]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 2
        assert outcomes.count("limit") == len(JUNE_WEEKENDS) - 2
        assert len(container.booking_service.list_user_bookings("Aakash", MONTH)) == 2

    def test_parallel_requests_across_months_keep_every_booking(self):
        container = build_memory_container(clock=lambda: TODAY)
        months = [f"2025-{m:02d}" for m in range(7, 13)] + ["2026-01", "2026-02"]
        errors = []

        def book_month(month):
            try:
                for day in weekend_dates(month)[:2]:
                    for member in PRIORITIES:
                        container.booking_service.request_booking(member, day)
            except Exception as exc:  # surfaced by the assertion below
                errors.append(exc)

        interval = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        try:
            threads = [threading.Thread(target=book_month, args=(m,)) for m in months]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        finally:
            sys.setswitchinterval(interval)

        assert errors == []
        assert container.booking_repo.count() == len(months) * 2 * len(PRIORITIES)
        ids = [b.id for m in months for b in container.booking_repo.get_by_month(m)]
        assert len(set(ids)) == len(ids)
        for month in months:
            assert len(container.booking_repo.get_by_month(month)) == 2 * len(PRIORITIES)
            _assert_projection_consistent(container, month)

    def test_parallel_creates_get_distinct_ids(self):
        repo = BookingRepository()
        created = []
        lock = threading.Lock()

        def create_many(worker):
            for i in range(50):
                booking = repo.create(user_id=f"user-{worker}", date=f"day-{i}", month=MONTH)
                with lock:
                    created.append(booking.id)

        interval = sys.getswitchinterval()
        sys.setswitchinterval(1e-6)
        try:
            threads = [threading.Thread(target=create_many, args=(w,)) for w in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        finally:
            sys.setswitchinterval(interval)

        assert len(set(created)) == 400
        assert repo.count() == 400


# ============================================
# Atomicity — a failed mutation leaves no trace
# ============================================
class TestAtomicity:
    @staticmethod
    def _fail_projection(container, monkeypatch):
        def replace_month(month, assignments):
            raise RuntimeError("projection write failed")

        monkeypatch.setattr(container.schedule_repo, "replace_month", replace_month)

    def test_failed_projection_rewrite_discards_new_booking(self, container, monkeypatch):
        self._fail_projection(container, monkeypatch)
        with pytest.raises(RuntimeError):
            container.booking_service.request_booking("Aakash", SATURDAY)
        assert container.booking_repo.count() == 0
        assert container.schedule_repo.get_by_month(MONTH) == []

    def test_store_is_usable_after_failed_mutation(self, container, monkeypatch):
        self._fail_projection(container, monkeypatch)
        with pytest.raises(RuntimeError):
            container.booking_service.request_booking("Aakash", SATURDAY)
        monkeypatch.undo()
        result = container.booking_service.request_booking("Aakash", SATURDAY)
        assert result["success"] is True
        assert container.booking_repo.count() == 1
        assert container.schedule_repo.get_by_date(SATURDAY).assigned_to == "Aakash"

    def test_failed_rewrite_keeps_earlier_month_state(self, container, monkeypatch):
        container.booking_service.request_booking("Aakash", SATURDAY)
        self._fail_projection(container, monkeypatch)
        with pytest.raises(RuntimeError):
            container.booking_service.request_booking("Shrishti", SATURDAY)
        bookings = container.booking_repo.get_by_month(MONTH)
        assert [(b.user_id, b.is_confirmed, b.is_conflicted) for b in bookings] == [
            ("Aakash", True, False),
        ]
        assert container.schedule_repo.get_by_date(SATURDAY).assigned_to == "Aakash"

    def test_failed_cancel_keeps_booking_and_assignment(self, container, monkeypatch):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Sahil", SATURDAY)
        self._fail_projection(container, monkeypatch)
        with pytest.raises(RuntimeError):
            container.booking_service.cancel_booking("Aakash", SATURDAY)
        bookings = container.booking_repo.get_by_month(MONTH)
        assert [(b.user_id, b.is_confirmed, b.is_conflicted) for b in bookings] == [
            ("Aakash", True, False),
            ("Sahil", False, True),
        ]
        assert container.schedule_repo.get_by_date(SATURDAY).assigned_to == "Aakash"


# ============================================
# Aggregator and export
# ============================================
class TestScheduleQueries:
    def test_user_statuses_cover_every_member_in_priority_order(self, container):
        schedule = container.schedule_service.get_monthly_schedule(MONTH)
        assert [s.user_id for s in schedule.user_statuses] == list(PRIORITIES)
        assert all(s.remaining_days == 2 for s in schedule.user_statuses)

    def test_zero_limit_leaves_no_remaining_days(self, container):
        service = ScheduleService(
            booking_repo=container.booking_repo,
            schedule_repo=container.schedule_repo,
            ticket_repo=container.ticket_repo,
            directory=container.directory,
            max_bookings_per_month=0,
        )
        schedule = service.get_monthly_schedule(MONTH)
        assert all(s.remaining_days == 0 for s in schedule.user_statuses)

    def test_user_status_counts(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Aakash", SUNDAY)
        container.booking_service.request_booking("Shrishti", SATURDAY)
        schedule = container.schedule_service.get_monthly_schedule(MONTH)
        aakash = next(s for s in schedule.user_statuses if s.user_id == "Aakash")
        assert aakash.confirmed_days == 1
        assert aakash.conflicted_days == 1
        assert aakash.remaining_days == 1
        assert [b.date for b in aakash.bookings] == [SATURDAY, SUNDAY]

    def test_export_snapshot(self, container):
        container.booking_service.request_booking("Aakash", SATURDAY)
        container.booking_service.request_booking("Shrishti", SATURDAY)
        container.ticket_service.create_ticket(SATURDAY, ["INC-1"], created_by="Shrishti")
        container.ticket_service.create_ticket(SUNDAY, ["INC-2"], created_by="Aakash")

        snapshot = container.schedule_service.export_schedule(MONTH)

        assert snapshot["month"] == MONTH
        assert snapshot["schedule"] == {SATURDAY: "Shrishti"}
        assert snapshot["conflicts"] == [
            {"date": SATURDAY, "winner": "Shrishti", "losers": ["Aakash"]}
        ]
        assert [m["name"] for m in snapshot["teamMembers"]] == list(PRIORITIES)
        assert all("accessKey" not in m for m in snapshot["teamMembers"])
        assert snapshot["userStatuses"][1]["userId"] == "Aakash"
        assert len(snapshot["calendar"]) == 8
        assert snapshot["calendar"][0] == {
            "date": SATURDAY, "dayOfWeek": "Saturday", "assignedTo": "Shrishti",
        }
        assert snapshot["calendar"][1]["assignedTo"] is None
        assert list(snapshot["tickets"]) == [SATURDAY]
        assert snapshot["tickets"][SATURDAY][0]["ticketIds"] == ["INC-1"]
        assert "exportedAt" in snapshot


# ============================================
# Ticket log
# ============================================
class TestTickets:
    def test_create_and_list(self, container):
        ticket = container.ticket_service.create_ticket(
            SATURDAY, [" INC-1 ", "", "INC-2"], created_by="Aakash", priority="P1",
        )
        assert ticket.ticket_ids == ["INC-1", "INC-2"]
        assert ticket.status == "open"
        assert [t.id for t in container.ticket_service.list_tickets(SATURDAY)] == [ticket.id]
        assert container.ticket_service.list_tickets(SUNDAY) == []

    def test_create_requires_ids(self, container):
        with pytest.raises(ValueError):
            container.ticket_service.create_ticket(SATURDAY, ["  "], created_by="Aakash")

    def test_create_rejects_bad_priority(self, container):
        with pytest.raises(ValueError):
            container.ticket_service.create_ticket(
                SATURDAY, ["INC-1"], created_by="Aakash", priority="P9",
            )

    def test_update(self, container):
        ticket = container.ticket_service.create_ticket(SATURDAY, ["INC-1"], created_by="Aakash")
        updated = container.ticket_service.update_ticket(
            ticket.id, {"status": "resolved", "notes": "rolled back"},
        )
        assert updated.status == "resolved"
        assert updated.notes == "rolled back"
        assert updated.ticket_ids == ["INC-1"]
        assert updated.updated_at is not None

    def test_update_missing(self, container):
        with pytest.raises(TicketNotFound):
            container.ticket_service.update_ticket(999, {"status": "resolved"})

    def test_delete(self, container):
        ticket = container.ticket_service.create_ticket(SATURDAY, ["INC-1"], created_by="Aakash")
        assert container.ticket_service.delete_ticket(ticket.id) == {"success": True}
        assert container.ticket_service.list_tickets(SATURDAY) == []
        with pytest.raises(TicketNotFound):
            container.ticket_service.delete_ticket(ticket.id)
