"""Answer-distribution aggregation handed to the narrative generator.

``ResponseAggregation`` is the structured context contract: token
counts per question, the self-assessed rank distribution, and a few
trimmed free-text samples. ``render_aggregation_context`` turns it into
the plain-text block embedded in the generator's prompt.

Deterministic -- no LLM calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import Field

from src.config.settings import Settings, get_settings
from src.models.common import LiteracyBase
from src.models.survey import SurveyResponse
from src.models.taxonomy import RANK_TIER_IDS, RankDefinition
from src.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from src.scoring.normalizer import extract_token, extract_tokens, extract_value, first_rank_answer
from src.scoring.ranking import round_half_up
from src.taxonomy.defaults import DEFAULT_RANK_TIERS

# Display labels, in display order. Keys are answer tokens.
USAGE_LABELS: dict[str, str] = {
    "daily": "Almost every day",
    "weekly": "A few times a week",
    "monthly": "A few times a month",
    "used_before": "Used before, not now",
    "never": "Never used",
}
TOOL_LABELS: dict[str, str] = {
    "chatgpt": "ChatGPT",
    "claude": "Claude",
    "gemini": "Gemini",
    "internal": "In-house AI",
    "image_gen": "Image generation AI",
    "video_audio": "Video / audio AI",
    "other": "Other",
}
PAID_TOOL_LABELS: dict[str, str] = {
    "personal": "Personal subscription",
    "company_subsidy": "Company subsidy",
    "free_only": "Free tier only",
}
USE_CASE_LABELS: dict[str, str] = {
    "document": "Writing and documents",
    "brainstorming": "Brainstorming",
    "research": "Research and analysis",
    "coding": "Coding",
    "media_gen": "Media generation",
    "ad_copy": "Ad copy",
    "other": "Other",
}
TIME_REDUCTION_LABELS: dict[str, str] = {
    "less_than_5": "Under 5 hours",
    "5_to_10": "5-10 hours",
    "10_to_20": "10-20 hours",
    "more_than_20": "Over 20 hours",
    "no_effect": "No effect",
}
NEEDS_LABELS: dict[str, str] = {
    "use_cases": "Use cases and templates",
    "training": "Study sessions and training",
    "tool_subsidy": "Paid tool subsidy",
    "specialized_support": "Dedicated support team",
    "security_rules": "Security and usage rules",
    "other": "Other",
}


def _zeroed(labels: Mapping[str, str]) -> dict[str, int]:
    return {token: 0 for token in labels}


class ResponseAggregation(LiteracyBase):
    """Answer distribution across a set of responses."""

    total_respondents: int = 0
    usage_frequency: dict[str, int] = Field(default_factory=lambda: _zeroed(USAGE_LABELS))
    tool_usage: dict[str, int] = Field(default_factory=lambda: _zeroed(TOOL_LABELS))
    paid_tool_status: dict[str, int] = Field(default_factory=lambda: _zeroed(PAID_TOOL_LABELS))
    use_cases: dict[str, int] = Field(default_factory=lambda: _zeroed(USE_CASE_LABELS))
    time_reduction: dict[str, int] = Field(default_factory=lambda: _zeroed(TIME_REDUCTION_LABELS))
    needs: dict[str, int] = Field(default_factory=lambda: _zeroed(NEEDS_LABELS))
    rank_distribution: dict[str, int] = Field(
        default_factory=lambda: {tier_id: 0 for tier_id in RANK_TIER_IDS},
    )
    free_text_samples: list[str] = Field(default_factory=list)
    feedback_samples: list[str] = Field(default_factory=list)


def _count_token(counts: dict[str, int], token: str | None) -> None:
    if token is not None and token in counts:
        counts[token] += 1


def _count_tokens(counts: dict[str, int], tokens: Iterable[str]) -> None:
    for token in sorted(tokens):
        _count_token(counts, token)


def _add_sample(samples: list[str], value: object, limit: int, max_chars: int) -> None:
    if isinstance(value, str) and len(samples) < limit:
        samples.append(value[:max_chars])


def aggregate_responses(
    responses: Iterable[SurveyResponse],
    config: ScoringConfig | None = None,
    settings: Settings | None = None,
) -> ResponseAggregation:
    """Count answer tokens and collect free-text samples.

    ``total_respondents`` is the raw response count. Unrecognized
    tokens are ignored.
    """
    cfg = config or DEFAULT_SCORING_CONFIG
    settings = settings or get_settings()
    limit = settings.NARRATIVE_SAMPLE_LIMIT
    max_chars = settings.NARRATIVE_SAMPLE_MAX_CHARS

    agg = ResponseAggregation()
    for response in responses:
        agg.total_respondents += 1
        _count_token(agg.usage_frequency, extract_token(response, cfg.usage_question_id))
        _count_tokens(agg.tool_usage, extract_tokens(response, cfg.tools_question_id))
        _count_token(agg.paid_tool_status, extract_token(response, cfg.paid_tools_question_id))
        _count_tokens(agg.use_cases, extract_tokens(response, cfg.use_case_question_id))
        _count_token(agg.time_reduction, extract_token(response, cfg.time_reduction_question_id))
        _count_tokens(agg.needs, extract_tokens(response, cfg.needs_question_id))

        rank_answer = first_rank_answer(response)
        if rank_answer is not None:
            _count_token(agg.rank_distribution, rank_answer.value)

        for qid in cfg.free_text_question_ids:
            _add_sample(agg.free_text_samples, extract_value(response, qid), limit, max_chars)
        _add_sample(
            agg.feedback_samples,
            extract_value(response, cfg.feedback_question_id),
            limit,
            max_chars,
        )
    return agg


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _pct_line(label: str, count: int, total: int) -> str:
    pct = int(round_half_up(count / total * 100))
    return f"- {label}: {count} ({pct}%)"


def _full_section(title: str, counts: Mapping[str, int], labels: Mapping[str, str], total: int) -> str | None:
    if sum(counts.values()) == 0:
        return None
    lines = [_pct_line(labels[token], counts.get(token, 0), total) for token in labels]
    return "\n".join([f"[{title}]", *lines])


def _nonzero_section(title: str, counts: Mapping[str, int], labels: Mapping[str, str], total: int) -> str | None:
    lines = [
        _pct_line(label, counts.get(token, 0), total)
        for token, label in labels.items()
        if token != "other" and counts.get(token, 0) > 0
    ]
    if not lines:
        return None
    return "\n".join([f"[{title}]", *lines])


def render_aggregation_context(
    aggregation: ResponseAggregation,
    rank_definition: RankDefinition | None = None,
) -> str:
    """Plain-text summary of *aggregation*; empty when there are no responses.

    Self-assessed ranks are labelled with the tenant taxonomy when given.
    """
    total = aggregation.total_respondents
    if total == 0:
        return ""

    tiers = rank_definition.ranks if rank_definition is not None else DEFAULT_RANK_TIERS
    rank_labels = {
        tier.id: f"Rank {index} ({tier.name})"
        for index, tier in enumerate(tiers, start=1)
    }
    sections = [
        _full_section("AI usage frequency", aggregation.usage_frequency, USAGE_LABELS, total),
        _nonzero_section("Tools used (multiple answers)", aggregation.tool_usage, TOOL_LABELS, total),
        _full_section("Paid tool status", aggregation.paid_tool_status, PAID_TOOL_LABELS, total),
        _nonzero_section("Use cases (multiple answers)", aggregation.use_cases, USE_CASE_LABELS, total),
        _full_section("Weekly hours saved", aggregation.time_reduction, TIME_REDUCTION_LABELS, total),
        _nonzero_section("Needs going forward (multiple answers)", aggregation.needs, NEEDS_LABELS, total),
        _full_section("Self-assessed AI level", aggregation.rank_distribution, rank_labels, total),
    ]
    if aggregation.free_text_samples:
        sections.append(
            "\n".join(["[How AI is used (excerpts)]", *(f'- "{t}"' for t in aggregation.free_text_samples)])
        )
    if aggregation.feedback_samples:
        sections.append(
            "\n".join(["[Feedback and requests (excerpts)]", *(f'- "{t}"' for t in aggregation.feedback_samples)])
        )
    return "\n\n".join(s for s in sections if s)
