"""Dimension scorer — maps one response onto the five literacy axes.

Two steps, both driven by ``ScoringConfig``:

1. Extract 0-100 *source* scores from individual answers (usage
   frequency, tool breadth, paid tools, use-case breadth, free text,
   time reduction, self-assessment).
2. Blend sources into axes by the configured weights. A source whose
   question was unanswered is missing and contributes 0.

Every axis is clamped to [0, 100] and rounded half-up to an integer.
Pure and deterministic: same response, taxonomy and config always
yield the same scores.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from src.models.common import LiteracyBase, LiteracyDimension
from src.models.scores import LiteracyScores, ScoredResponse
from src.models.survey import SurveyResponse
from src.models.taxonomy import RankDefinition
from src.scoring.config import DEFAULT_SCORING_CONFIG, ScoreSource, ScoringConfig
from src.scoring.normalizer import (
    extract_token,
    extract_tokens,
    extract_value,
    first_rank_answer,
)
from src.scoring.ranking import clamp_score, overall_score, rank_from_score, round_half_up
from src.taxonomy.defaults import DEFAULT_RANK_DEFINITION


class ScoreBreakdown(LiteracyBase, frozen=True):
    """Provenance for one scored response: sources found and missing."""

    response_id: str
    sources: dict[ScoreSource, float] = Field(default_factory=dict)
    missing_sources: list[ScoreSource] = Field(default_factory=list)
    scores: LiteracyScores


class LiteracyScorer:
    """Scores responses against one ``ScoringConfig``."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or DEFAULT_SCORING_CONFIG

    @property
    def config(self) -> ScoringConfig:
        return self._config

    # ---------------------------------------------------------------
    # Sources
    # ---------------------------------------------------------------

    def _breadth(self, selected: frozenset[str], recognized: frozenset[str], points: float) -> float | None:
        if not selected:
            return None
        count = len(selected & recognized)
        return min(self._config.breadth_cap, count * points)

    def _self_assessment(
        self,
        response: SurveyResponse,
        rank_definition: RankDefinition,
    ) -> float | None:
        answer = first_rank_answer(response)
        if answer is None:
            return None
        position = rank_definition.tier_position(answer.value)
        if position is None:
            return 0.0
        return position * self._config.self_assessment_step

    def score_sources(
        self,
        response: SurveyResponse,
        rank_definition: RankDefinition | None = None,
    ) -> dict[ScoreSource, float]:
        """Extract every available source score from *response*.

        Unanswered questions are omitted from the result. An answered
        radio question with an unrecognized token scores 0.
        """
        cfg = self._config
        rank_definition = rank_definition or DEFAULT_RANK_DEFINITION
        sources: dict[ScoreSource, float] = {}

        usage = extract_token(response, cfg.usage_question_id)
        if usage is not None:
            sources[ScoreSource.USAGE_FREQUENCY] = cfg.usage_scores.get(usage, 0.0)

        tools = self._breadth(
            extract_tokens(response, cfg.tools_question_id),
            cfg.recognized_tools,
            cfg.points_per_tool,
        )
        if tools is not None:
            sources[ScoreSource.TOOL_BREADTH] = tools

        paid = extract_token(response, cfg.paid_tools_question_id)
        if paid is not None:
            sources[ScoreSource.PAID_TOOLS] = cfg.paid_tool_scores.get(paid, 0.0)

        use_cases = self._breadth(
            extract_tokens(response, cfg.use_case_question_id),
            cfg.recognized_use_cases,
            cfg.points_per_use_case,
        )
        if use_cases is not None:
            sources[ScoreSource.USE_CASE_BREADTH] = use_cases

        if any(
            isinstance(extract_value(response, qid), str)
            for qid in cfg.free_text_question_ids
        ):
            sources[ScoreSource.FREE_TEXT] = cfg.free_text_score

        reduction = extract_token(response, cfg.time_reduction_question_id)
        if reduction is not None:
            sources[ScoreSource.TIME_REDUCTION] = cfg.time_reduction_scores.get(reduction, 0.0)

        self_assessed = self._self_assessment(response, rank_definition)
        if self_assessed is not None:
            sources[ScoreSource.SELF_ASSESSMENT] = self_assessed

        return sources

    # ---------------------------------------------------------------
    # Axes
    # ---------------------------------------------------------------

    def blend(self, sources: dict[ScoreSource, float]) -> LiteracyScores:
        """Blend source scores into the five axes."""
        axes: dict[str, int] = {}
        for dimension in LiteracyDimension:
            weights = self._config.axis_weights.get(dimension.value, {})
            total = Decimal(0)
            for source_name, weight in weights.items():
                value = sources.get(ScoreSource(source_name))
                if value is None:
                    continue
                total += Decimal(str(weight)) * Decimal(str(value))
            axes[dimension.value] = int(round_half_up(clamp_score(total)))
        return LiteracyScores(**axes)

    def score(
        self,
        response: SurveyResponse,
        rank_definition: RankDefinition | None = None,
    ) -> LiteracyScores:
        """Score *response* on the five axes."""
        return self.blend(self.score_sources(response, rank_definition))

    def explain(
        self,
        response: SurveyResponse,
        rank_definition: RankDefinition | None = None,
    ) -> ScoreBreakdown:
        """Score *response* and record which sources were present."""
        sources = self.score_sources(response, rank_definition)
        return ScoreBreakdown(
            response_id=response.id,
            sources=sources,
            missing_sources=[s for s in ScoreSource if s not in sources],
            scores=self.blend(sources),
        )

    def score_full(
        self,
        response: SurveyResponse,
        rank_definition: RankDefinition | None = None,
    ) -> ScoredResponse:
        """Score *response* and reduce it to overall score and rank."""
        scores = self.score(response, rank_definition)
        overall = overall_score(scores)
        return ScoredResponse(
            response_id=response.id,
            respondent_name=response.respondent_name,
            submitted_at=response.submitted_at,
            scores=scores,
            overall_score=overall,
            rank=rank_from_score(overall),
        )


def score_response(
    response: SurveyResponse,
    rank_definition: RankDefinition | None = None,
    config: ScoringConfig | None = None,
) -> LiteracyScores:
    """Score one response with the default (or given) configuration."""
    return LiteracyScorer(config).score(response, rank_definition)
