"""Tests for insight context assembly and readiness gating."""

from __future__ import annotations

import pytest

from src.insight.aggregation import ResponseAggregation
from src.insight.context import build_insight_context, insight_ready
from src.models.scores import LiteracyScores
from src.taxonomy.defaults import build_default_rank_definition


class TestInsightReady:
    def test_explicit_minimum(self) -> None:
        assert insight_ready(3, 3) is True
        assert insight_ready(2, 3) is False

    def test_default_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_REQUIRED_RESPONDENTS", "2")
        assert insight_ready(2) is True
        assert insight_ready(1) is False


class TestBuildInsightContext:
    def test_rank_and_label_consistent(self) -> None:
        scores = LiteracyScores(basics=60, prompting=72, ethics=60, tools=88, automation=77)
        context = build_insight_context("Acme", scores, build_default_rank_definition("acme"))
        assert context.overall_score == 71
        assert context.rank == 4
        assert context.rank_label == "Advance"
        assert context.context_id.version == 7

    def test_without_taxonomy(self) -> None:
        context = build_insight_context("Aiko", LiteracyScores())
        assert context.rank == 1
        assert context.rank_label == "Rank 1"
        assert context.aggregation is None

    def test_carries_aggregation(self) -> None:
        aggregation = ResponseAggregation(total_respondents=7)
        context = build_insight_context("Acme", LiteracyScores(), aggregation=aggregation)
        assert context.aggregation.total_respondents == 7
