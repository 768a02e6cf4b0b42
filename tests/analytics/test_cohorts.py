"""Tests for the cohort aggregator — dedupe vs raw mode, distributions, trends.

Score references (default config): mid = 54 / rank 3, high = 71 / rank 4,
low = 10 / rank 1, expert = 100 / rank 5.
"""

from __future__ import annotations

import pytest

from src.analytics.attributes import by_month, by_organization, by_survey
from src.analytics.cohorts import (
    aggregate,
    latest_per_respondent,
    monthly_trend,
    rank_distribution,
    ranked_cohorts,
)
from src.analytics.temporal import rank_changes
from src.taxonomy.defaults import build_default_rank_definition


# ===================================================================
# Fixtures
# ===================================================================


@pytest.fixture
def resubmitted(make_response) -> list:
    """Alice submits twice (mid, then high); Bob once (mid)."""
    return [
        make_response("Alice", "2025-01-10T09:00:00+00:00", "mid"),
        make_response("Bob", "2025-01-12T09:00:00+00:00", "mid"),
        make_response("Alice", "2025-02-10T09:00:00+00:00", "high"),
    ]


# ===================================================================
# De-duplication
# ===================================================================


class TestLatestPerRespondent:
    def test_keeps_latest(self, resubmitted) -> None:
        latest = latest_per_respondent(resubmitted)
        assert [r.respondent_name for r in latest] == ["Alice", "Bob"]
        assert latest[0].id == resubmitted[2].id

    def test_input_order_irrelevant(self, resubmitted) -> None:
        latest = latest_per_respondent(reversed(resubmitted))
        alice = next(r for r in latest if r.respondent_name == "Alice")
        assert alice.id == resubmitted[2].id

    def test_equal_timestamps_keep_last_seen(self, make_response) -> None:
        first = make_response("Alice", "2025-01-10T09:00:00+00:00", "low")
        second = make_response("Alice", "2025-01-10T09:00:00+00:00", "expert")
        assert latest_per_respondent([first, second]) == [second]

    def test_equal_timestamps_agree_with_rank_changes(self, make_response) -> None:
        responses = [
            make_response("Alice", "2025-01-10T09:00:00+00:00", "low"),
            make_response("Alice", "2025-01-10T09:00:00+00:00", "expert"),
        ]
        dist = rank_distribution(responses)
        (record,) = rank_changes(responses)
        occupied = [b.rank for b in dist.buckets if b.count]
        assert occupied == [record.current_rank]
        assert record.current_rank == 5
        assert record.previous_rank == 1


class TestAggregate:
    """aggregate: one core, two modes selected explicitly."""

    def test_dedupe_mode_counts_members_once(self, resubmitted) -> None:
        result = aggregate(resubmitted, by_organization, dedupe_by_respondent=True)
        cohort = result["org-1"]
        assert cohort.member_count == 2
        assert cohort.response_count == 2

    def test_raw_mode_counts_every_response(self, resubmitted) -> None:
        cohort = aggregate(resubmitted, by_organization, dedupe_by_respondent=False)["org-1"]
        assert cohort.member_count == 2
        assert cohort.response_count == 3

    def test_modes_differ(self, resubmitted) -> None:
        deduped = aggregate(resubmitted, by_organization, dedupe_by_respondent=True)["org-1"]
        raw = aggregate(resubmitted, by_organization, dedupe_by_respondent=False)["org-1"]
        assert deduped.scores != raw.scores

    def test_dedupe_uses_later_response(self, resubmitted) -> None:
        cohort = aggregate(resubmitted, by_organization, dedupe_by_respondent=True)["org-1"]
        # mean of Alice(high) and Bob(mid)
        assert cohort.scores.basics == 60.0
        assert cohort.scores.prompting == 50.0
        assert cohort.scores.tools == 73.0
        assert cohort.scores.automation == 69.5
        assert cohort.overall_score == 63
        assert cohort.average_rank == 3.5
        assert cohort.rank_distribution == {1: 0, 2: 0, 3: 1, 4: 1, 5: 0}

    def test_dedupe_flag_is_keyword_only(self, resubmitted) -> None:
        with pytest.raises(TypeError):
            aggregate(resubmitted, by_organization)  # type: ignore[call-arg]

    def test_none_key_excluded(self, resubmitted) -> None:
        result = aggregate(
            resubmitted,
            lambda r: None if r.respondent_name == "Bob" else "kept",
            dedupe_by_respondent=False,
        )
        assert list(result) == ["kept"]
        assert result["kept"].member_count == 1

    def test_empty_input_yields_no_cohorts(self) -> None:
        assert aggregate([], by_organization, dedupe_by_respondent=True) == {}

    def test_keys_sorted(self, make_response) -> None:
        responses = [
            make_response("A", survey_id="s-2"),
            make_response("B", survey_id="s-1"),
        ]
        assert list(aggregate(responses, by_survey, dedupe_by_respondent=False)) == ["s-1", "s-2"]

    def test_month_scope(self, resubmitted) -> None:
        result = aggregate(resubmitted, by_month, dedupe_by_respondent=False)
        assert list(result) == ["2025-01", "2025-02"]
        assert result["2025-01"].response_count == 2


class TestRankedCohorts:
    def test_highest_average_rank_first(self, make_response) -> None:
        responses = [
            make_response("A", answers="low", survey_id="s-low"),
            make_response("B", answers="expert", survey_id="s-top"),
            make_response("C", answers="mid", survey_id="s-mid"),
        ]
        cohorts = aggregate(responses, by_survey, dedupe_by_respondent=False)
        assert [c.scope_key for c in ranked_cohorts(cohorts)] == ["s-top", "s-mid", "s-low"]

    def test_ties_by_key(self, make_response) -> None:
        responses = [
            make_response("A", survey_id="s-b"),
            make_response("B", survey_id="s-a"),
        ]
        cohorts = aggregate(responses, by_survey, dedupe_by_respondent=False)
        assert [c.scope_key for c in ranked_cohorts(cohorts)] == ["s-a", "s-b"]


# ===================================================================
# Rank distribution
# ===================================================================


class TestRankDistribution:
    """rank_distribution: latest response per respondent only."""

    def test_respondent_counted_once_with_later_rank(self, resubmitted) -> None:
        dist = rank_distribution(resubmitted)
        counts = {b.rank: b.count for b in dist.buckets}
        assert counts == {1: 0, 2: 0, 3: 1, 4: 1, 5: 0}
        assert dist.unique_respondent_count == 2
        assert dist.average_rank == 3.5

    def test_labels_from_taxonomy(self, resubmitted) -> None:
        dist = rank_distribution(resubmitted, build_default_rank_definition("org-1"))
        assert [b.label for b in dist.buckets] == ["Beginner", "Basic", "Practice", "Advance", "Expert"]

    def test_response_rate(self, resubmitted) -> None:
        assert rank_distribution(resubmitted, member_count=3).response_rate == 67
        assert rank_distribution(resubmitted, member_count=8).response_rate == 25

    def test_no_member_count_means_zero_rate(self, resubmitted) -> None:
        assert rank_distribution(resubmitted).response_rate == 0
        assert rank_distribution(resubmitted, member_count=0).response_rate == 0

    def test_empty(self) -> None:
        dist = rank_distribution([])
        assert len(dist.buckets) == 5
        assert all(b.count == 0 for b in dist.buckets)
        assert dist.average_rank == 0.0


# ===================================================================
# Monthly trend
# ===================================================================


class TestMonthlyTrend:
    """monthly_trend: raw buckets, oldest first."""

    def test_every_response_counts(self, make_response) -> None:
        responses = [
            make_response("A", "2025-03-02T00:00:00+00:00", "low"),
            make_response("A", "2025-03-20T00:00:00+00:00", "expert"),
        ]
        (point,) = monthly_trend(responses)
        assert point.month == "2025-03"
        assert point.response_count == 2
        assert point.average_score == 55
        assert point.average_rank == 3.0

    def test_sorted_ascending(self, resubmitted) -> None:
        assert [p.month for p in monthly_trend(resubmitted)] == ["2025-01", "2025-02"]

    def test_limit_keeps_latest_months(self, make_response) -> None:
        responses = [
            make_response("A", f"2025-0{m}-01T00:00:00+00:00") for m in (1, 2, 3, 4)
        ]
        assert [p.month for p in monthly_trend(responses, limit=2)] == ["2025-03", "2025-04"]
        assert monthly_trend(responses, limit=0) == []

    def test_empty(self) -> None:
        assert monthly_trend([]) == []
