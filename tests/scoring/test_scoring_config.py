"""Tests for ScoringConfig defaults and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.models.common import LiteracyDimension
from src.scoring.config import DEFAULT_SCORING_CONFIG, ScoreSource, ScoringConfig


class TestDefaults:
    def test_every_axis_weighted(self) -> None:
        assert set(DEFAULT_SCORING_CONFIG.axis_weights) == {d.value for d in LiteracyDimension}

    def test_weights_sum_to_one(self) -> None:
        for weights in DEFAULT_SCORING_CONFIG.axis_weights.values():
            assert sum(weights.values()) == pytest.approx(1.0)

    def test_every_source_used(self) -> None:
        used = {s for w in DEFAULT_SCORING_CONFIG.axis_weights.values() for s in w}
        assert used == {s.value for s in ScoreSource}

    def test_narrative_questions_not_weighted(self) -> None:
        cfg = DEFAULT_SCORING_CONFIG
        assert cfg.needs_question_id == "q7"
        assert cfg.feedback_question_id == "q9"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_SCORING_CONFIG.self_assessment_step = 10.0

    def test_self_assessment_weights_unequal(self) -> None:
        weights = DEFAULT_SCORING_CONFIG.axis_weights
        assert weights["basics"]["SELF_ASSESSMENT"] == 1.0
        assert weights["ethics"]["SELF_ASSESSMENT"] == 1.0
        assert weights["automation"]["SELF_ASSESSMENT"] == 0.4


class TestValidation:
    def test_unknown_axis_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown axes"):
            ScoringConfig(axis_weights={"charisma": {"FREE_TEXT": 1.0}})

    def test_unknown_source_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown sources"):
            ScoringConfig(axis_weights={"basics": {"LUCK": 1.0}})

    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(ValidationError, match="negative weight"):
            ScoringConfig(axis_weights={"basics": {"SELF_ASSESSMENT": -0.5}})

    def test_points_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ScoringConfig(points_per_tool=0)
