"""Shared pytest fixtures for the literacy engine test suite.

Provides:
- answer_sets: canonical answer tuples with known scores (see below)
- make_response: factory for SurveyResponse values
- provider: RankTaxonomyProvider over an in-memory store

Canonical answer sets under the default ScoringConfig:

=========  ======  =====  =========  =====  ==========  =======  ====
name       basics  ethics prompting  tools  automation  overall  rank
=========  ======  =====  =========  =====  ==========  =======  ====
empty      0       0      0          0      0           0        1
low        20      20     0          0      8           10       1
basic      40      40     0          38     39          31       2
mid        60      60     28         58     62          54       3
high       60      60     72         88     77          71       4
expert     100     100    100        100    100         100      5
=========  ======  =====  =========  =====  ==========  =======  ====
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from itertools import count

import pytest

from src.models.survey import ChoiceAnswer, MultiChoiceAnswer, SurveyResponse, TextAnswer
from src.taxonomy.provider import RankTaxonomyProvider
from src.taxonomy.store import InMemoryRankDefinitionStore


def _radio(qid: str, value: str) -> ChoiceAnswer:
    return ChoiceAnswer(type="radio", question_id=qid, value=value)


def _rank(value: str) -> ChoiceAnswer:
    return ChoiceAnswer(type="rank", question_id="q8", value=value)


def _checkbox(qid: str, *values: str) -> MultiChoiceAnswer:
    return MultiChoiceAnswer(question_id=qid, value=frozenset(values))


def _textarea(qid: str, value: str) -> TextAnswer:
    return TextAnswer(type="textarea", question_id=qid, value=value)


ANSWER_SETS: dict[str, tuple] = {
    "empty": (),
    "low": (
        _radio("q1", "never"),
        _rank("rank1"),
    ),
    "basic": (
        _radio("q1", "monthly"),
        _checkbox("q2", "chatgpt"),
        _radio("q3", "free_only"),
        _radio("q6", "less_than_5"),
        _rank("rank2"),
    ),
    "mid": (
        _radio("q1", "weekly"),
        _checkbox("q2", "chatgpt", "claude"),
        _radio("q3", "free_only"),
        _checkbox("q4", "document", "research"),
        _radio("q6", "5_to_10"),
        _rank("rank3"),
    ),
    "high": (
        _radio("q1", "daily"),
        _checkbox("q2", "chatgpt", "claude", "gemini"),
        _radio("q3", "company_subsidy"),
        _checkbox("q4", "document", "brainstorming", "research"),
        _textarea("q5", "Drafting proposals and summarising meetings"),
        _radio("q6", "10_to_20"),
        _rank("rank3"),
    ),
    "expert": (
        _radio("q1", "daily"),
        _checkbox("q2", "chatgpt", "claude", "gemini", "internal"),
        _radio("q3", "personal"),
        _checkbox("q4", "document", "brainstorming", "research", "coding", "media_gen"),
        _textarea("q5", "Built an automated weekly reporting pipeline"),
        _radio("q6", "more_than_20"),
        _rank("rank5"),
    ),
}


@pytest.fixture
def answer_sets() -> dict[str, tuple]:
    """Canonical answer tuples keyed by name (see module docstring)."""
    return ANSWER_SETS


@pytest.fixture
def make_response() -> Callable[..., SurveyResponse]:
    """Factory: make_response(name, when, answers, *, org_id, survey_id, extra).

    ``answers`` is an ANSWER_SETS key or an explicit answer sequence;
    ``extra`` answers are appended.
    """
    ids = count(1)

    def _make(
        name: str = "Alice",
        when: str | datetime = "2025-01-15T09:00:00+00:00",
        answers: str | Sequence = "mid",
        *,
        org_id: str = "org-1",
        survey_id: str = "survey-1",
        extra: Sequence = (),
    ) -> SurveyResponse:
        if isinstance(when, str):
            when = datetime.fromisoformat(when)
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        resolved = ANSWER_SETS[answers] if isinstance(answers, str) else tuple(answers)
        return SurveyResponse(
            id=f"resp-{next(ids)}",
            survey_id=survey_id,
            org_id=org_id,
            respondent_name=name,
            submitted_at=when,
            answers=(*resolved, *extra),
        )

    return _make


@pytest.fixture
def store() -> InMemoryRankDefinitionStore:
    return InMemoryRankDefinitionStore()


@pytest.fixture
def provider(store: InMemoryRankDefinitionStore) -> RankTaxonomyProvider:
    return RankTaxonomyProvider(store)
