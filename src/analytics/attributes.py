"""Scope extractors and department / position attribute detection.

A scope extractor maps a response to the cohort key it belongs to, or
None to leave it out of every cohort.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from enum import StrEnum

from src.models.scores import month_key
from src.models.survey import Question, Survey, SurveyResponse
from src.scoring.normalizer import extract_value

ScopeExtractor = Callable[[SurveyResponse], str | None]


class AttributeKind(StrEnum):
    """Respondent attributes collected by survey questions."""

    DEPARTMENT = "department"
    POSITION = "position"


# Title keywords (case-insensitive) and id fragments per attribute.
_TITLE_KEYWORDS: dict[AttributeKind, tuple[str, ...]] = {
    AttributeKind.DEPARTMENT: ("department", "division", "部署", "所属部署", "所属", "事業部"),
    AttributeKind.POSITION: ("position", "job title", "役職", "職位", "職種", "役割"),
}
_ID_FRAGMENTS: dict[AttributeKind, tuple[str, ...]] = {
    AttributeKind.DEPARTMENT: ("department", "dept"),
    AttributeKind.POSITION: ("position", "role"),
}


# ---------------------------------------------------------------------------
# Built-in extractors
# ---------------------------------------------------------------------------


def by_organization(response: SurveyResponse) -> str | None:
    return response.org_id


def by_survey(response: SurveyResponse) -> str | None:
    return response.survey_id


def by_month(response: SurveyResponse) -> str | None:
    """``YYYY-MM`` bucket of the submission timestamp."""
    return month_key(response.submitted_at)


# ---------------------------------------------------------------------------
# Attribute questions
# ---------------------------------------------------------------------------


def find_attribute_question(
    surveys: Iterable[Survey],
    kind: AttributeKind,
) -> Question | None:
    """Detect the question collecting *kind* across a tenant's surveys.

    Only active surveys are searched. Matches a title keyword or an id
    fragment; first match wins.
    """
    keywords = _TITLE_KEYWORDS[kind]
    fragments = _ID_FRAGMENTS[kind]
    for survey in surveys:
        if not survey.is_active:
            continue
        for question in survey.questions:
            title = question.title.lower()
            qid = question.id.lower()
            if any(k.lower() in title for k in keywords) or any(f in qid for f in fragments):
                return question
    return None


def attribute_value(response: SurveyResponse, question: Question) -> str | None:
    """Label-resolved attribute value; multi-select values joined by ", "."""
    value = extract_value(response, question.id, question=question)
    if value is None:
        return None
    if isinstance(value, frozenset):
        return ", ".join(sorted(value))
    return value


def attribute_extractor(question: Question) -> ScopeExtractor:
    """Scope extractor grouping responses by their answer to *question*."""

    def _extract(response: SurveyResponse) -> str | None:
        return attribute_value(response, question)

    return _extract


def attribute_options(
    responses: Iterable[SurveyResponse],
    question: Question,
) -> list[str]:
    """Distinct attribute values present in *responses*, sorted."""
    values: set[str] = set()
    for response in responses:
        value = attribute_value(response, question)
        if value is None:
            continue
        values.update(part.strip() for part in value.split(",") if part.strip())
    return sorted(values)


def filter_by_attributes(
    responses: Iterable[SurveyResponse],
    questions: Mapping[AttributeKind, Question],
    filters: Mapping[AttributeKind, str | None],
) -> list[SurveyResponse]:
    """Keep responses whose attribute equals every non-empty filter value.

    Filters for attributes with no detected question are ignored.
    """
    active = [
        (questions[kind], value)
        for kind, value in filters.items()
        if value and kind in questions
    ]
    return [
        r for r in responses
        if all(attribute_value(r, q) == v for q, v in active)
    ]
