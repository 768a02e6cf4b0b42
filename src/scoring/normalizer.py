"""Answer normalizer: typed value extraction independent of question type.

``extract_value`` returns a token (radio / rank), a frozenset of tokens
(checkbox), trimmed text (text / textarea), or ``ABSENT`` (None) when
the question is unanswered or blank. It never raises for a missing
answer.
"""

from __future__ import annotations

from typing import Final, TypeAlias

from src.models.survey import (
    ChoiceAnswer,
    MultiChoiceAnswer,
    Question,
    SurveyResponse,
    TextAnswer,
)

NormalizedValue: TypeAlias = str | frozenset[str]

ABSENT: Final = None


def extract_value(
    response: SurveyResponse,
    question_id: str,
    *,
    question: Question | None = None,
) -> NormalizedValue | None:
    """Extract the normalized answer to *question_id* from *response*.

    When *question* is given, radio / rank / checkbox tokens are resolved
    to their option labels; tokens with no matching option pass through.
    """
    answer = response.answer_for(question_id)
    if answer is None:
        return ABSENT

    if isinstance(answer, MultiChoiceAnswer):
        tokens = frozenset(t for t in answer.value if t)
        if not tokens:
            return ABSENT
        if question is not None:
            return frozenset(question.label_for(t) for t in tokens)
        return tokens

    if isinstance(answer, ChoiceAnswer):
        if not answer.value:
            return ABSENT
        if question is not None:
            return question.label_for(answer.value)
        return answer.value

    if isinstance(answer, TextAnswer):
        text = answer.value.strip()
        return text if text else ABSENT

    msg = f"unsupported answer type: {type(answer).__name__}"
    raise TypeError(msg)


def extract_token(response: SurveyResponse, question_id: str) -> str | None:
    """Single token for a radio / rank question, else None."""
    if not isinstance(response.answer_for(question_id), ChoiceAnswer):
        return None
    value = extract_value(response, question_id)
    return value if isinstance(value, str) else None


def extract_tokens(response: SurveyResponse, question_id: str) -> frozenset[str]:
    """Token set for a checkbox question; empty when absent."""
    value = extract_value(response, question_id)
    if isinstance(value, frozenset):
        return value
    return frozenset()


def first_rank_answer(response: SurveyResponse) -> ChoiceAnswer | None:
    """Return the first ``rank``-typed answer (the self-assessment), if any."""
    for answer in response.answers:
        if isinstance(answer, ChoiceAnswer) and answer.type == "rank":
            return answer
    return None
