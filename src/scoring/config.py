"""Scoring configuration — the canonical question-to-axis weighting table.

Every business rule the dimension scorer applies lives here: which
question feeds which source, how answer tokens map to 0-100 source
scores, and how sources blend into the five axes. The defaults are the
reference table; an organization may run with an overridden instance,
but the scorer never reads rules from anywhere else.

Deterministic -- no I/O.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, model_validator

from src.models.common import LiteracyBase, LiteracyDimension


class ScoreSource(StrEnum):
    """Intermediate 0-100 signals extracted from a response."""

    USAGE_FREQUENCY = "USAGE_FREQUENCY"
    TOOL_BREADTH = "TOOL_BREADTH"
    PAID_TOOLS = "PAID_TOOLS"
    USE_CASE_BREADTH = "USE_CASE_BREADTH"
    FREE_TEXT = "FREE_TEXT"
    TIME_REDUCTION = "TIME_REDUCTION"
    SELF_ASSESSMENT = "SELF_ASSESSMENT"


class ScoringConfig(LiteracyBase, frozen=True):
    """Configuration for the dimension scorer.

    Source scores are looked up from token tables (radio questions),
    counted against a recognized-token set (checkbox questions), or
    detected as non-blank (free text). Axes are weighted sums of
    sources; a missing source contributes 0.
    """

    # --- Usage frequency (radio) ---
    usage_question_id: str = "q1"
    usage_scores: dict[str, float] = Field(
        default_factory=lambda: {
            "daily": 100.0,
            "weekly": 75.0,
            "monthly": 50.0,
            "used_before": 25.0,
            "never": 0.0,
        },
    )

    # --- Tool breadth (checkbox) ---
    tools_question_id: str = "q2"
    recognized_tools: frozenset[str] = frozenset(
        {"chatgpt", "claude", "gemini", "internal", "image_gen", "video_audio", "other"}
    )
    points_per_tool: float = Field(default=25.0, gt=0.0)

    # --- Paid tool status (radio) ---
    paid_tools_question_id: str = "q3"
    paid_tool_scores: dict[str, float] = Field(
        default_factory=lambda: {
            "personal": 100.0,
            "company_subsidy": 100.0,
            "free_only": 50.0,
        },
    )

    # --- Use-case breadth (checkbox) ---
    use_case_question_id: str = "q4"
    recognized_use_cases: frozenset[str] = frozenset(
        {"document", "brainstorming", "research", "coding", "media_gen", "ad_copy", "other"}
    )
    points_per_use_case: float = Field(default=20.0, gt=0.0)

    # --- Free-text presence ---
    free_text_question_ids: tuple[str, ...] = ("q5",)
    free_text_score: float = 100.0

    # --- Time reduction (radio) ---
    time_reduction_question_id: str = "q6"
    time_reduction_scores: dict[str, float] = Field(
        default_factory=lambda: {
            "more_than_20": 100.0,
            "10_to_20": 75.0,
            "5_to_10": 50.0,
            "less_than_5": 25.0,
            "no_effect": 0.0,
        },
    )

    # --- Time saved (reporting only, not scored) ---
    time_saved_hours: dict[str, float] = Field(
        default_factory=lambda: {
            "less_than_5": 2.5,
            "5_to_10": 7.5,
            "10_to_20": 15.0,
            "more_than_20": 25.0,
            "no_effect": 0.0,
        },
    )
    weekly_work_hours: float = Field(default=40.0, gt=0.0)

    # --- Narrative-only questions (not scored) ---
    needs_question_id: str = "q7"
    feedback_question_id: str = "q9"

    # --- Self-assessment (rank question) ---
    self_assessment_step: float = 20.0

    breadth_cap: float = 100.0

    axis_weights: dict[str, dict[str, float]] = Field(
        default_factory=lambda: {
            # Self-assessment enters basics and ethics at full weight but automation at 0.4.
            "basics": {"SELF_ASSESSMENT": 1.0},
            "ethics": {"SELF_ASSESSMENT": 1.0},
            "prompting": {"USE_CASE_BREADTH": 0.7, "FREE_TEXT": 0.3},
            "tools": {"TOOL_BREADTH": 0.5, "USAGE_FREQUENCY": 0.3, "PAID_TOOLS": 0.2},
            "automation": {"SELF_ASSESSMENT": 0.4, "USAGE_FREQUENCY": 0.3, "TIME_REDUCTION": 0.3},
        },
    )

    @model_validator(mode="after")
    def _known_axes_and_sources(self) -> "ScoringConfig":
        axes = {d.value for d in LiteracyDimension}
        unknown_axes = set(self.axis_weights) - axes
        if unknown_axes:
            msg = f"unknown axes in axis_weights: {sorted(unknown_axes)}"
            raise ValueError(msg)
        sources = {s.value for s in ScoreSource}
        for axis, weights in self.axis_weights.items():
            unknown = set(weights) - sources
            if unknown:
                msg = f"unknown sources for axis {axis!r}: {sorted(unknown)}"
                raise ValueError(msg)
            if any(w < 0.0 for w in weights.values()):
                msg = f"negative weight for axis {axis!r}"
                raise ValueError(msg)
        return self


DEFAULT_SCORING_CONFIG = ScoringConfig()
