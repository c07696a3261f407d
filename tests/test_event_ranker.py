"""Tests for event scoring and ranking."""

import logging
from datetime import date, datetime, time, timedelta, timezone

import pytest

from spark_ranker.config.models import EventRankingOptions
from spark_ranker.matching.events import (
    EventRanker,
    locations_overlap,
    rank_events,
    urgency_bonus,
)
from tests.helpers import NOW, make_event


@pytest.fixture
def ranker():
    return EventRanker(now=NOW)


class TestUrgencyBonus:
    """Tests for urgency_bonus buckets."""

    @pytest.mark.parametrize(
        "hours,bonus,reason",
        [
            (0, 0.3, "Happening today!"),
            (24, 0.3, "Happening today!"),
            (24.5, 0.25, "This week"),
            (72, 0.25, "This week"),
            (100, 0.15, "Next 7 days"),
            (168, 0.15, "Next 7 days"),
            (169, 0.05, None),
        ],
    )
    def test_buckets(self, hours, bonus, reason):
        assert urgency_bonus(hours) == (bonus, reason)


class TestLocationsOverlap:
    """Tests for locations_overlap."""

    def test_substring_either_way(self):
        assert locations_overlap("Brooklyn Bridge Park", "brooklyn")
        assert locations_overlap("Brooklyn", "Downtown Brooklyn")

    def test_unrelated(self):
        assert not locations_overlap("Queens", "Brooklyn")

    def test_missing_side(self):
        assert not locations_overlap(None, "Brooklyn")
        assert not locations_overlap("Brooklyn", "")


class TestEventScore:
    """Tests for EventRanker.score."""

    def test_quick_spark_happening_today(self, requester, ranker):
        """Ten hours out and twenty minutes long earns urgency and Quick Spark."""
        result = ranker.score(requester, make_event(1, hours_from_now=10, duration=20))
        assert result.reasons == ["Happening today!", "Quick Spark"]
        assert result.score == pytest.approx(0.3 + 0.2 + 0.1)

    def test_quick_spark_disabled(self, requester):
        ranker = EventRanker(EventRankingOptions(prioritize_quick_sparks=False), now=NOW)
        result = ranker.score(requester, make_event(1, hours_from_now=10, duration=20))
        assert "Quick Spark" not in result.reasons
        assert result.score == pytest.approx(0.3 + 0.1)

    @pytest.mark.parametrize("duration,expected", [(30, True), (31, False), (0, False), (None, False)])
    def test_quick_spark_duration_boundary(self, requester, ranker, duration, expected):
        result = ranker.score(requester, make_event(1, duration=duration))
        assert ("Quick Spark" in result.reasons) is expected

    def test_tag_relevance(self, requester, ranker):
        result = ranker.score(requester, make_event(1, tags=["hiking", "music"]))
        assert result.keyword_score == pytest.approx(1 / 3)
        assert result.reasons[0] == "Matches interests: hiking"
        assert result.score == pytest.approx(1 / 3 * 0.4 + 0.05 + 0.1)

    def test_tag_reason_lists_at_most_two(self, requester, ranker):
        requester = requester.model_copy(update={"keywords": ["a", "b", "c"]})
        result = ranker.score(requester, make_event(1, tags=["a", "b", "c"]))
        assert result.reasons[0] == "Matches interests: a, b"

    def test_past_event_scores_zero(self, requester, ranker):
        result = ranker.score(requester, make_event(1, hours_from_now=-1, tags=["hiking"]))
        assert result.score == 0.0
        assert result.reasons == ["Event has passed"]

    def test_undated_event_is_treated_as_passed(self, requester, ranker):
        result = ranker.score(requester, make_event(1, event_date=None))
        assert result.score == 0.0
        assert result.reasons == ["Event has passed"]

    def test_event_time_sets_start(self, requester, ranker):
        """A date plus a time of day eight hours after NOW is happening today."""
        event = make_event(1, event_date=date(2025, 6, 1), event_time=time(20, 0))
        result = ranker.score(requester, event)
        assert "Happening today!" in result.reasons

    def test_event_earlier_today_has_passed(self, requester, ranker):
        event = make_event(1, event_date=date(2025, 6, 1), event_time=time(9, 0))
        assert ranker.score(requester, event).reasons == ["Event has passed"]

    def test_offset_date_keeps_its_calendar_day(self, requester):
        """The time of day applies to the local date, not the UTC one."""
        ranker = EventRanker(now=datetime(2025, 11, 3, 20, 0, tzinfo=timezone.utc))
        event = make_event(1, event_date="2025-11-04T00:00:00+02:00", event_time="18:00")

        result = ranker.score(requester, event)

        assert result.reasons == ["Happening today!"]
        assert result.score == pytest.approx(0.3 + 0.1)

    def test_location_match(self, requester, ranker):
        result = ranker.score(requester, make_event(1, location="Brooklyn Bridge Park"))
        assert "Near you (Brooklyn Bridge Park)" in result.reasons
        assert result.score == pytest.approx(0.05 + 0.15 + 0.1)

    def test_plenty_of_spots(self, requester, ranker):
        result = ranker.score(
            requester, make_event(1, max_participants=20, participant_count=3)
        )
        assert result.score == pytest.approx(0.05 + 0.1)
        assert result.reasons == []

    def test_few_spots_left(self, requester, ranker):
        result = ranker.score(
            requester, make_event(1, max_participants=10, participant_count=7)
        )
        assert result.reasons == ["3 spots left"]
        assert result.score == pytest.approx(0.05 + 0.05)

    def test_one_spot_left(self, requester, ranker):
        result = ranker.score(
            requester, make_event(1, max_participants=10, participant_count=9)
        )
        assert result.reasons == ["1 spot left"]

    def test_full_event_halves_score(self, requester, ranker):
        result = ranker.score(
            requester,
            make_event(1, hours_from_now=10, duration=20, max_participants=4, participant_count=4),
        )
        assert result.reasons[-1] == "Event full"
        assert result.score == pytest.approx((0.3 + 0.2) * 0.5)

    def test_zero_cap_is_unlimited(self, requester, ranker):
        result = ranker.score(requester, make_event(1, hours_from_now=10, max_participants=0))
        assert result.reasons == ["Happening today!"]
        assert result.score == pytest.approx(0.3 + 0.1)

    def test_full_never_outranks_identical_open_event(self, requester, ranker):
        for hours in (2, 30, 100, 400):
            for tags in ([], ["hiking"], ["hiking", "coffee"]):
                base = {"hours_from_now": hours, "tags": tags, "duration": 15, "max_participants": 6}
                open_event = make_event(1, participant_count=2, **base)
                full_event = make_event(2, participant_count=6, **base)
                assert ranker.score(requester, full_event).score <= ranker.score(
                    requester, open_event
                ).score

    def test_now_argument_overrides_ranker_now(self, requester, ranker):
        event = make_event(1, hours_from_now=10)
        later = NOW + timedelta(hours=11)
        assert ranker.score(requester, event, now=later).reasons == ["Event has passed"]

    def test_score_can_exceed_one(self, requester, ranker):
        event = make_event(
            1, hours_from_now=1, duration=10, tags=["hiking", "coffee"], location="Brooklyn"
        )
        result = ranker.score(requester, event)
        assert result.score == pytest.approx(0.4 + 0.3 + 0.2 + 0.15 + 0.1)


class TestEventRank:
    """Tests for EventRanker.rank."""

    def test_past_events_never_returned(self, requester, ranker):
        events = [
            make_event(1, hours_from_now=-5, tags=["hiking", "coffee"], duration=10),
            make_event(2, hours_from_now=50),
        ]
        assert [r.candidate_id for r in ranker.rank(requester, events)] == [2]

    def test_low_scores_dropped(self, requester, ranker):
        """A distant full event scores 0.025 and is filtered out."""
        events = [
            make_event(1, hours_from_now=300, max_participants=2, participant_count=2),
            make_event(2, hours_from_now=300),
        ]
        assert [r.candidate_id for r in ranker.rank(requester, events)] == [2]

    def test_sorted_by_urgency(self, requester, ranker):
        events = [
            make_event(1, hours_from_now=200),
            make_event(2, hours_from_now=5),
            make_event(3, hours_from_now=48),
        ]
        assert [r.candidate_id for r in ranker.rank(requester, events)] == [2, 3, 1]

    def test_output_bounded_and_sorted(self, requester):
        events = [
            make_event(i, hours_from_now=i * 9, duration=i * 4, tags=["hiking"] if i % 2 else [])
            for i in range(1, 25)
        ]
        for limit in (0, 1, 5, 30):
            ranked = EventRanker(EventRankingOptions(limit=limit), now=NOW).rank(requester, events)
            assert len(ranked) <= limit
            scores = [r.score for r in ranked]
            assert scores == sorted(scores, reverse=True)

    def test_ties_break_on_event_id(self, requester, ranker):
        events = [make_event(i, hours_from_now=50) for i in (4, 2, 9)]
        assert [r.candidate_id for r in ranker.rank(requester, events)] == [2, 4, 9]

    def test_rank_events_helper(self, requester):
        events = [make_event(1, hours_from_now=5), make_event(2, hours_from_now=-5)]
        ranked = rank_events(requester, events, now=NOW)
        assert [r.candidate_id for r in ranked] == [1]

    def test_logs_passed_count(self, requester, ranker, caplog):
        caplog.set_level(logging.INFO, logger="spark_ranker")
        ranker.rank(requester, [make_event(1, hours_from_now=-1), make_event(2)])

        completed = [r for r in caplog.records if getattr(r, "event", None) == "ranking.events.completed"]
        assert len(completed) == 1
        assert completed[0].passed_count == 1
        assert completed[0].returned_count == 1
