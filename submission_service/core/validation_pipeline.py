"""
Ordered, short-circuiting validation over a raw submission payload.
"""

import logging
from typing import Any, Mapping, Sequence, Tuple

from submission_service.core.field_rules import (
    ACCEPTED,
    FieldRule,
    LengthRangeRule,
    PatternRule,
    PresenceRule,
    TypeRule,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

SUBMISSION_FIELDS: Tuple[str, ...] = ("title", "description", "author")

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 5
DESCRIPTION_MAX_LENGTH = 1000


class ValidationPipeline:
    """
    Evaluates rules in their declared order and returns the first rejection.

    Rules never see each other's results; the order only decides which
    failure is reported when several would fail. The pipeline holds no
    per-request state and can be shared freely between concurrent requests.
    """

    def __init__(self, rules: Sequence[FieldRule]):
        self._rules = tuple(rules)

    @property
    def rules(self) -> Tuple[FieldRule, ...]:
        return self._rules

    def validate(self, record: Mapping[str, Any]) -> ValidationOutcome:
        for rule in self._rules:
            outcome = rule.evaluate(record)
            if not outcome.accepted:
                logger.debug(f"Rule {type(rule).__name__} rejected field '{outcome.field}': {outcome.reason_code.value}")
                return outcome
        return ACCEPTED


def build_submission_pipeline() -> ValidationPipeline:
    """Build the pipeline for title/description/author submissions, in client-facing precedence order."""
    return ValidationPipeline([
        PresenceRule(fields=SUBMISSION_FIELDS),
        TypeRule(expected_types=tuple((name, str) for name in SUBMISSION_FIELDS)),
        LengthRangeRule(
            field_name="title",
            min_length=TITLE_MIN_LENGTH,
            max_length=TITLE_MAX_LENGTH,
            label="Title",
        ),
        LengthRangeRule(
            field_name="description",
            min_length=DESCRIPTION_MIN_LENGTH,
            max_length=DESCRIPTION_MAX_LENGTH,
            label="Description",
            empty_is_distinct=True,
        ),
        PatternRule(field_name="author", label="Author name"),
    ])
