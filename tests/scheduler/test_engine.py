"""Tests for InterviewScheduler."""

from itertools import combinations

import pytest

from crisp_scheduler.exceptions import (
    DuplicateCandidateError,
    DuplicateOrganizationError,
    EngineNotInitializedError,
    InvalidCandidateError,
    InvalidOrganizationError,
    InvalidTimeWindowError,
)
from crisp_scheduler.models import ConflictReason, TimeInterval, TimeWindow
from crisp_scheduler.scheduler import InterviewScheduler
from crisp_scheduler.scheduler.config import parse_request


class TestScenarios:
    """Reference scenarios."""

    def test_single_candidate_two_rounds(self, scheduler):
        scheduler.register_organization("Acme", 30, 2, 2)
        scheduler.register_candidate("S1", "Asha", ["Acme"])

        interviews, conflicts = scheduler.run()

        assert conflicts == []
        assert [(i.round, i.interval, i.panel) for i in interviews] == [
            (1, TimeInterval(540, 570), 0),
            (2, TimeInterval(570, 600), 0),
        ]

    def test_single_panel_serializes_candidates(self, scheduler):
        scheduler.register_organization("Acme", 30, 2, 1)
        scheduler.register_candidate("S2", "Ben", ["Acme"])
        scheduler.register_candidate("S1", "Asha", ["Acme"])

        interviews, conflicts = scheduler.run()

        assert conflicts == []
        first = [i for i in interviews if i.student_id == "S1"]
        second = [i for i in interviews if i.student_id == "S2"]
        assert [i.interval for i in first] == [TimeInterval(540, 570), TimeInterval(570, 600)]
        assert [i.interval for i in second] == [TimeInterval(600, 630), TimeInterval(630, 660)]
        assert all(i.panel == 0 for i in interviews)

    def test_rounds_longer_than_window(self, scheduler):
        scheduler.register_organization("Marathon", 480, 2, 1)
        scheduler.register_candidate("S1", "Asha", ["Marathon"])

        interviews, conflicts = scheduler.run()

        assert interviews == []
        assert len(conflicts) == 1
        assert conflicts[0].student_id == "S1"
        assert conflicts[0].reason == "Cannot schedule all interviews for student S1"
        assert scheduler.tracker.is_panel_free("Marathon", 0, TimeInterval(540, 1020))

    def test_multiple_panels_run_in_parallel(self, scheduler):
        scheduler.register_organization("Acme", 30, 1, 2)
        for student_id in ("S1", "S2", "S3"):
            scheduler.register_candidate(student_id, "", ["Acme"])

        interviews, _ = scheduler.run()

        assert [(i.student_id, i.interval.start, i.panel) for i in interviews] == [
            ("S1", 540, 0),
            ("S2", 540, 1),
            ("S3", 570, 0),
        ]


class TestOrdering:
    """Tests for candidate processing order."""

    def test_fewest_organizations_first_then_id(self, scheduler):
        scheduler.register_organization("X", 30, 1, 1)
        scheduler.register_organization("Y", 30, 1, 1)
        scheduler.register_candidate("B", "", ["X", "Y"])
        scheduler.register_candidate("C", "", ["X"])
        scheduler.register_candidate("A", "", ["X"])

        interviews, _ = scheduler.run()

        x_order = [i.student_id for i in interviews if i.organization == "X"]
        assert x_order == ["A", "C", "B"]

    def test_shortlist_order_is_attempt_order(self, scheduler):
        scheduler.register_organization("A", 30, 1, 1)
        scheduler.register_organization("B", 30, 1, 1)
        scheduler.register_candidate("S0", "", ["B"])
        scheduler.register_candidate("S1", "", ["B", "A"])

        scheduler.run()

        s1 = [i for i in scheduler.get_schedule() if i.student_id == "S1"]
        assert [(i.organization, i.interval.start) for i in s1] == [("B", 570), ("A", 540)]
        # Per-candidate view is sorted by start time
        assert [i.organization for i in scheduler.get_candidate_schedule("S1")] == ["A", "B"]


class TestConflicts:
    """Tests for conflict notices."""

    def test_unknown_organization_becomes_conflict(self, scheduler):
        scheduler.register_organization("Acme", 30, 1, 1)
        scheduler.register_candidate("S1", "", ["Acme", "Ghost"])
        scheduler.register_candidate("S2", "", ["Acme"])

        interviews, conflicts = scheduler.run()

        assert [i.student_id for i in interviews] == ["S2"]
        assert len(conflicts) == 1
        assert conflicts[0].student_id == "S1"
        assert conflicts[0].kind == ConflictReason.UNKNOWN_ORGANIZATION
        assert scheduler.tracker.is_panel_free("Acme", 0, TimeInterval(570, 600))
        assert scheduler.tracker.student_bookings["S1"] == []

    def test_one_conflict_does_not_abort_run(self, scheduler):
        scheduler.register_organization("Acme", 30, 1, 1)
        scheduler.register_organization("Huge", 600, 1, 1)
        scheduler.register_candidate("S1", "", ["Huge"])
        scheduler.register_candidate("S2", "", ["Acme"])

        interviews, conflicts = scheduler.run()

        assert [c.student_id for c in conflicts] == ["S1"]
        assert [i.student_id for i in interviews] == ["S2"]

    def test_budget_conflict_message(self, make_scheduler):
        engine = make_scheduler(max_steps=1)
        engine.register_organization("Acme", 30, 2, 1)
        engine.register_candidate("S1", "", ["Acme"])

        interviews, conflicts = engine.run()

        assert interviews == []
        assert conflicts[0].kind == ConflictReason.BUDGET_EXHAUSTED
        assert conflicts[0].reason == "Search budget exhausted for student S1"


class TestRegistration:
    """Tests for configuration errors."""

    def test_register_before_initialize(self):
        engine = InterviewScheduler()
        with pytest.raises(EngineNotInitializedError):
            engine.register_organization("Acme", 30, 1, 1)
        with pytest.raises(EngineNotInitializedError):
            engine.register_candidate("S1", "", [])
        with pytest.raises(EngineNotInitializedError):
            engine.run()

    def test_duplicate_organization(self, scheduler):
        scheduler.register_organization("Acme", 30, 1, 1)
        with pytest.raises(DuplicateOrganizationError):
            scheduler.register_organization("Acme", 45, 1, 1)

    @pytest.mark.parametrize(
        "duration,rounds,panels",
        [(0, 1, 1), (30, 0, 1), (30, 1, 0), (-15, 1, 1)],
    )
    def test_non_positive_fields(self, scheduler, duration, rounds, panels):
        with pytest.raises(InvalidOrganizationError):
            scheduler.register_organization("Acme", duration, rounds, panels)
        assert "Acme" not in scheduler.organizations

    def test_duplicate_candidate(self, scheduler):
        scheduler.register_candidate("S1", "", [])
        with pytest.raises(DuplicateCandidateError):
            scheduler.register_candidate("S1", "Other", [])

    def test_empty_candidate_id(self, scheduler):
        with pytest.raises(InvalidCandidateError):
            scheduler.register_candidate("", "", [])

    def test_invalid_window(self):
        engine = InterviewScheduler()
        with pytest.raises(InvalidTimeWindowError):
            engine.initialize(TimeWindow(1020, 540))

    def test_initialize_resets_state(self, scheduler, day_window):
        scheduler.register_organization("Acme", 30, 1, 1)
        scheduler.register_candidate("S1", "", ["Acme"])
        scheduler.run()

        scheduler.initialize(day_window)

        assert scheduler.get_schedule() == []
        assert scheduler.organizations == {}
        assert scheduler.candidates == {}

    def test_run_twice_without_initialize(self, scheduler):
        scheduler.register_organization("Acme", 30, 1, 1)
        scheduler.register_candidate("S1", "", ["Acme"])

        scheduler.run()
        interviews, conflicts = scheduler.run()

        assert conflicts == []
        assert [i.interval.start for i in interviews] == [540, 570]


class TestProperties:
    """Invariants over a busier batch."""

    @pytest.fixture
    def busy_scheduler(self, scheduler):
        scheduler.register_organization("Acme", 30, 2, 2)
        scheduler.register_organization("Globex", 45, 3, 1)
        scheduler.register_organization("Initech", 60, 1, 1)
        scheduler.register_organization("Umbrella", 120, 2, 1)
        shortlists = {
            "S01": ["Acme", "Globex"],
            "S02": ["Globex"],
            "S03": ["Initech", "Acme", "Umbrella"],
            "S04": ["Umbrella"],
            "S05": ["Umbrella", "Initech"],
            "S06": ["Acme"],
            "S07": ["Globex", "Initech"],
            "S08": ["Umbrella", "Globex", "Acme"],
            "S09": ["Initech"],
            "S10": ["Acme", "Initech", "Globex"],
        }
        for student_id, shortlist in shortlists.items():
            scheduler.register_candidate(student_id, "", shortlist)
        return scheduler

    def test_no_panel_double_booking(self, busy_scheduler):
        interviews, _ = busy_scheduler.run()
        for a, b in combinations(interviews, 2):
            if a.organization == b.organization and a.panel == b.panel:
                assert not a.interval.overlaps(b.interval)

    def test_no_student_double_booking(self, busy_scheduler):
        interviews, _ = busy_scheduler.run()
        for a, b in combinations(interviews, 2):
            if a.student_id == b.student_id:
                assert not a.interval.overlaps(b.interval)

    def test_round_monotonicity(self, busy_scheduler):
        interviews, _ = busy_scheduler.run()
        by_pair: dict = {}
        for interview in interviews:
            by_pair.setdefault((interview.student_id, interview.organization), []).append(interview)
        for rounds in by_pair.values():
            assert [i.round for i in rounds] == list(range(1, len(rounds) + 1))
            for earlier, later in zip(rounds, rounds[1:]):
                assert later.interval.start >= earlier.interval.end

    def test_window_containment(self, busy_scheduler, day_window):
        interviews, _ = busy_scheduler.run()
        assert all(day_window.contains(i.interval) for i in interviews)

    def test_all_or_nothing(self, busy_scheduler):
        interviews, conflicts = busy_scheduler.run()
        conflicted = [c.student_id for c in conflicts]
        assert len(conflicted) == len(set(conflicted))

        for candidate in busy_scheduler.candidates.values():
            count = sum(1 for i in interviews if i.student_id == candidate.id)
            expected = sum(
                busy_scheduler.organizations[name].num_rounds for name in candidate.shortlist
            )
            if candidate.id in conflicted:
                assert count == 0
            else:
                assert count == expected

    def test_determinism(self, sample_request_data):
        request = parse_request(sample_request_data)
        results = []
        for _ in range(2):
            engine = InterviewScheduler()
            results.append(engine.schedule(request))
        assert results[0].interviews == results[1].interviews
        assert results[0].conflicts == results[1].conflicts


class TestScheduleResult:
    """Tests for schedule() and statistics."""

    def test_schedule_request(self, sample_request_data):
        result = InterviewScheduler().schedule(parse_request(sample_request_data))

        # S003 shortlists an unregistered organization
        assert [c.student_id for c in result.conflicts] == ["S003"]
        assert result.statistics.total_candidates == 3
        assert result.statistics.scheduled_candidates == 2
        assert result.statistics.total_interviews == 4
        assert result.statistics.by_organization == {"Acme": 2, "Globex": 2}
        assert result.window == TimeWindow(540, 1020)

    def test_panel_utilization(self, scheduler):
        scheduler.register_organization("Acme", 30, 2, 2)
        scheduler.register_candidate("S1", "", ["Acme"])
        scheduler.run()

        stats = scheduler.get_statistics()

        assert stats.panel_utilization == {"Acme": 0.0625}
        assert stats.success_rate == 100.0
