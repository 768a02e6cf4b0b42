"""Per-survey, per-question answer distributions.

Choice questions (radio / rank / checkbox) report one row per authored
option with the option label; free-text questions report how many
responses answered. Percentages are whole numbers of the survey's
response count; checkbox rows can therefore sum past 100.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.models.common import LiteracyBase, QuestionType
from src.models.survey import Question, Survey, SurveyResponse
from src.scoring.normalizer import extract_value
from src.scoring.ranking import round_half_up

ANSWERED_LABEL = "Answered"
NO_DATA_LABEL = "No data"

_CHOICE_TYPES = frozenset({QuestionType.RADIO, QuestionType.RANK, QuestionType.CHECKBOX})


class OptionCount(LiteracyBase, frozen=True):
    """One distribution row."""

    label: str
    count: int = 0
    pct: int = 0


class QuestionDistribution(LiteracyBase, frozen=True):
    """Answer distribution of one question."""

    question_id: str
    title: str
    description: str | None = None
    type: QuestionType
    total: int = 0
    rows: tuple[OptionCount, ...]


class SurveyDistribution(LiteracyBase, frozen=True):
    """Answer distributions of every question in one survey."""

    survey_id: str
    title: str
    total: int = 0
    questions: tuple[QuestionDistribution, ...] = ()


def _pct(count: int, total: int) -> int:
    if total == 0:
        return 0
    return int(round_half_up(count / total * 100))


def question_distribution(
    question: Question,
    responses: Iterable[SurveyResponse],
) -> QuestionDistribution:
    """Distribution of answers to *question* across *responses*.

    Tokens with no authored option are not reported. A choice question
    without options yields a single "No data" row.
    """
    pool = list(responses)
    total = len(pool)

    if question.type in _CHOICE_TYPES:
        counts = {option.value: 0 for option in question.options}
        for response in pool:
            value = extract_value(response, question.id)
            tokens = value if isinstance(value, frozenset) else {value}
            for token in tokens:
                if token in counts:
                    counts[token] += 1
        rows = tuple(
            OptionCount(label=option.label, count=counts[option.value], pct=_pct(counts[option.value], total))
            for option in question.options
        )
    else:
        answered = sum(1 for r in pool if extract_value(r, question.id) is not None)
        rows = (OptionCount(label=ANSWERED_LABEL, count=answered, pct=_pct(answered, total)),)

    return QuestionDistribution(
        question_id=question.id,
        title=question.title,
        description=question.description,
        type=question.type,
        total=total,
        rows=rows or (OptionCount(label=NO_DATA_LABEL),),
    )


def survey_distribution(
    survey: Survey,
    responses: Iterable[SurveyResponse],
) -> SurveyDistribution:
    """Question distributions over the responses submitted to *survey*."""
    own = [r for r in responses if r.survey_id == survey.id]
    return SurveyDistribution(
        survey_id=survey.id,
        title=survey.title,
        total=len(own),
        questions=tuple(question_distribution(q, own) for q in survey.questions),
    )


def survey_distributions(
    surveys: Iterable[Survey],
    responses: Iterable[SurveyResponse],
) -> list[SurveyDistribution]:
    """Distributions for every active survey, in the given order."""
    pool = list(responses)
    return [survey_distribution(s, pool) for s in surveys if s.is_active]
