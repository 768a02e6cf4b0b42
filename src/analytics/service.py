"""Literacy analytics service — the engine's call surface.

Exposes every engine operation behind one object and composes them
into an organization summary. The tenant taxonomy is read once per
summary and threaded through every step, so one computation never
sees two versions of it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog
from pydantic import Field

from src.analytics.attributes import (
    AttributeKind,
    ScopeExtractor,
    attribute_extractor,
    by_organization,
    find_attribute_question,
)
from src.analytics.cohorts import aggregate, monthly_trend, rank_distribution, ranked_cohorts
from src.analytics.distribution import SurveyDistribution, survey_distributions
from src.analytics.growth import (
    RankGrowthComparison,
    cohort_growth_rate,
    growth_rate,
    rank_growth_comparison,
)
from src.analytics.temporal import rank_change_stats, rank_changes
from src.analytics.time_savings import TimeSavingsSummary, time_savings
from src.config.settings import get_settings
from src.insight.context import insight_ready
from src.models.common import LiteracyBase
from src.models.scores import (
    CohortAggregate,
    LiteracyScores,
    RankChangeRecord,
    RankChangeStats,
    RankDistribution,
    TrendPoint,
)
from src.models.survey import Survey, SurveyResponse
from src.models.taxonomy import RankDefinition
from src.scoring import ranking
from src.scoring.config import ScoringConfig
from src.scoring.scorer import LiteracyScorer
from src.taxonomy.provider import RankTaxonomyProvider

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class OrganizationSummary(LiteracyBase, frozen=True):
    """Everything an organization dashboard or report needs."""

    org_id: str
    rank_definition: RankDefinition
    response_count: int = 0
    average: CohortAggregate | None = None
    rank_distribution: RankDistribution
    departments: list[CohortAggregate] = Field(default_factory=list)
    positions: list[CohortAggregate] = Field(default_factory=list)
    rank_changes: list[RankChangeRecord] = Field(default_factory=list)
    rank_change_stats: RankChangeStats = Field(default_factory=RankChangeStats)
    trend: list[TrendPoint] = Field(default_factory=list)
    trend_growth_rate: float | None = None
    time_savings: TimeSavingsSummary
    survey_distributions: list[SurveyDistribution] = Field(default_factory=list)
    insight_ready: bool = False


class LiteracyAnalyticsService:
    """Facade over taxonomy, scoring, cohort and temporal analytics."""

    def __init__(
        self,
        provider: RankTaxonomyProvider,
        config: ScoringConfig | None = None,
    ) -> None:
        self._provider = provider
        self._scorer = LiteracyScorer(config)

    # ---- taxonomy ----

    def get_rank_definition(self, org_id: str) -> RankDefinition:
        return self._provider.get_rank_definition(org_id)

    def save_rank_definition(
        self,
        definition: RankDefinition | Mapping[str, Any],
    ) -> RankDefinition:
        saved = self._provider.save_rank_definition(definition)
        logger.info("rank_definition_saved", org_id=saved.org_id)
        return saved

    # ---- scoring ----

    def score_response(
        self,
        response: SurveyResponse,
        rank_definition: RankDefinition | None = None,
    ) -> LiteracyScores:
        return self._scorer.score(response, rank_definition)

    @staticmethod
    def overall_score(scores: LiteracyScores) -> int:
        return ranking.overall_score(scores)

    @staticmethod
    def rank_from_score(score: float) -> int:
        return ranking.rank_from_score(score)

    # ---- aggregation ----

    def aggregate(
        self,
        responses: Iterable[SurveyResponse],
        scope_extractor: ScopeExtractor,
        rank_definition: RankDefinition | None = None,
        *,
        dedupe_by_respondent: bool,
    ) -> dict[str, CohortAggregate]:
        return aggregate(
            responses,
            scope_extractor,
            rank_definition,
            dedupe_by_respondent=dedupe_by_respondent,
            config=self._scorer.config,
        )

    def rank_changes(
        self,
        responses: Iterable[SurveyResponse],
        rank_definition: RankDefinition | None = None,
    ) -> list[RankChangeRecord]:
        return rank_changes(responses, rank_definition, config=self._scorer.config)

    @staticmethod
    def rank_change_stats(records: Iterable[RankChangeRecord]) -> RankChangeStats:
        return rank_change_stats(records)

    @staticmethod
    def growth_rate(ordered_scores: Sequence[float]) -> float | None:
        return growth_rate(ordered_scores)

    def time_savings(self, responses: Iterable[SurveyResponse]) -> TimeSavingsSummary:
        return time_savings(responses, self._scorer.config)

    @staticmethod
    def survey_distributions(
        surveys: Iterable[Survey],
        responses: Iterable[SurveyResponse],
    ) -> list[SurveyDistribution]:
        return survey_distributions(surveys, responses)

    # ---- composition ----

    def compare_organizations(
        self,
        org_ids: Iterable[str],
        responses: Iterable[SurveyResponse],
        *,
        trend_months: int | None = None,
    ) -> list[RankGrowthComparison]:
        """Recent-versus-previous rank comparison per organization.

        Each organization is ranked against its own taxonomy. Results
        keep the order of *org_ids*.
        """
        pool = list(responses)
        comparisons = []
        for org_id in org_ids:
            definition = self.get_rank_definition(org_id)
            comparisons.append(
                rank_growth_comparison(
                    org_id,
                    [r for r in pool if r.org_id == org_id],
                    definition,
                    trend_months=trend_months,
                    config=self._scorer.config,
                )
            )
        logger.info("organizations_compared", organizations=len(comparisons), responses=len(pool))
        return comparisons

    def organization_summary(
        self,
        org_id: str,
        responses: Iterable[SurveyResponse],
        *,
        member_count: int | None = None,
        surveys: Sequence[Survey] = (),
        trend_months: int | None = None,
        min_required_respondents: int | None = None,
    ) -> OrganizationSummary:
        """Compose the organization view from one taxonomy snapshot.

        Responses from other organizations are ignored. Department and
        position cohorts appear only when the surveys carry a matching
        attribute question. The trend keeps ``TREND_MONTHS`` months
        unless *trend_months* is given.
        """
        if trend_months is None:
            trend_months = get_settings().TREND_MONTHS
        definition = self.get_rank_definition(org_id)
        own = [r for r in responses if r.org_id == org_id]
        cfg = self._scorer.config

        averages = aggregate(own, by_organization, definition, dedupe_by_respondent=False, config=cfg)

        cohorts: dict[AttributeKind, list[CohortAggregate]] = {}
        for kind in AttributeKind:
            question = find_attribute_question(surveys, kind)
            if question is None:
                cohorts[kind] = []
                continue
            grouped = aggregate(
                own,
                attribute_extractor(question),
                definition,
                dedupe_by_respondent=True,
                config=cfg,
            )
            cohorts[kind] = ranked_cohorts(grouped)

        records = rank_changes(own, definition, config=cfg)
        trend = monthly_trend(own, definition, limit=trend_months, config=cfg)

        summary = OrganizationSummary(
            org_id=org_id,
            rank_definition=definition,
            response_count=len(own),
            average=averages.get(org_id),
            rank_distribution=rank_distribution(own, definition, member_count=member_count, config=cfg),
            departments=cohorts[AttributeKind.DEPARTMENT],
            positions=cohorts[AttributeKind.POSITION],
            rank_changes=records,
            rank_change_stats=rank_change_stats(records),
            trend=trend,
            trend_growth_rate=cohort_growth_rate(trend),
            time_savings=time_savings(own, cfg),
            survey_distributions=survey_distributions(surveys, own),
            insight_ready=insight_ready(len(own), min_required_respondents),
        )
        logger.info(
            "organization_summary_built",
            org_id=org_id,
            responses=len(own),
            respondents=summary.rank_distribution.unique_respondent_count,
            departments=len(summary.departments),
            positions=len(summary.positions),
        )
        return summary
