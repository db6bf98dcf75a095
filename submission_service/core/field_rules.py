"""
Declarative field rules for validating submission payloads.

A rule is an immutable object built once at startup and shared across
requests. ``evaluate`` is pure: it only reads the record it is given and
returns either ``ACCEPTED`` or a ``Rejected`` outcome describing the first
problem it found for its field(s).
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from submission_service.core.exceptions import ReasonCode
from submission_service.core.name_predicates import (
    AUTHOR_NAME_PREDICATES,
    AUTHOR_NAME_RECOMMENDATIONS,
    NamePredicate,
)


@dataclass(frozen=True)
class Accepted:
    """Outcome of a rule (or pipeline) that found nothing wrong."""

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """
    Outcome of a failed rule.

    Attributes:
        reason_code: Which kind of failure this is.
        message: Human readable description, safe to return to clients.
        field: The offending field, when the failure concerns a single field.
        context: Reason-specific details (lengths, limits, provided value...).
    """

    reason_code: ReasonCode
    message: str
    field: Optional[str] = None
    context: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return False

    def details(self) -> Dict[str, Any]:
        """Flatten the outcome into the ``details`` object of an error envelope."""
        return {"reason_code": self.reason_code.value, "field": self.field, **self.context}


ACCEPTED = Accepted()

ValidationOutcome = Union[Accepted, Rejected]

# JSON-facing names for Python runtime types, used in InvalidType details
_JSON_TYPE_NAMES = {
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
    list: "array",
    dict: "object",
    type(None): "null",
}


def json_type_name(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


class FieldRule:
    """Base class for all rules. Subclasses implement ``evaluate``."""

    def evaluate(self, record: Mapping[str, Any]) -> ValidationOutcome:
        raise NotImplementedError


def _string_value(record: Mapping[str, Any], field_name: str) -> Union[str, Rejected]:
    """Return the field as a string, or the rejection to report when it is not one."""
    value = record.get(field_name)
    if value is None:
        return Rejected(
            reason_code=ReasonCode.MISSING_FIELD,
            message=f"Missing required field: {field_name}",
            field=field_name,
            context={"missing": [field_name]},
        )
    if not isinstance(value, str):
        return Rejected(
            reason_code=ReasonCode.INVALID_TYPE,
            message=f"{field_name} must be a string",
            field=field_name,
            context={"invalid": [{"field": field_name, "expected": "string", "actual": json_type_name(value)}]},
        )
    return value


@dataclass(frozen=True)
class PresenceRule(FieldRule):
    """
    Fails with MISSING_FIELD when any of ``fields`` is absent or null.

    All missing fields are reported together, in declared order. Empty
    strings count as present unless ``reject_empty`` is set.
    """

    fields: Tuple[str, ...]
    reject_empty: bool = False

    def _is_missing(self, record: Mapping[str, Any], field_name: str) -> bool:
        if field_name not in record or record[field_name] is None:
            return True
        return self.reject_empty and record[field_name] == ""

    def evaluate(self, record: Mapping[str, Any]) -> ValidationOutcome:
        missing = [name for name in self.fields if self._is_missing(record, name)]
        if not missing:
            return ACCEPTED
        return Rejected(
            reason_code=ReasonCode.MISSING_FIELD,
            message="Missing required fields",
            field=missing[0],
            context={"missing": missing, "required": list(self.fields)},
        )


@dataclass(frozen=True)
class TypeRule(FieldRule):
    """Fails with INVALID_TYPE when a field's runtime type differs from the declared one."""

    expected_types: Tuple[Tuple[str, type], ...]

    def evaluate(self, record: Mapping[str, Any]) -> ValidationOutcome:
        mismatches = []
        for field_name, expected in self.expected_types:
            value = record.get(field_name)
            # bool is a subclass of int; a JSON true/false is never a number here
            if isinstance(value, bool) and expected is not bool:
                matches = False
            else:
                matches = isinstance(value, expected)
            if not matches:
                mismatches.append({
                    "field": field_name,
                    "expected": _JSON_TYPE_NAMES.get(expected, expected.__name__),
                    "actual": json_type_name(value),
                })
        if not mismatches:
            return ACCEPTED
        return Rejected(
            reason_code=ReasonCode.INVALID_TYPE,
            message="All fields must be of the correct data type",
            field=mismatches[0]["field"],
            context={"invalid": mismatches},
        )


@dataclass(frozen=True)
class LengthRangeRule(FieldRule):
    """
    Checks the length of the trimmed value against ``[min_length, max_length]``.

    With ``empty_is_distinct`` set, a value that is empty after trimming is
    reported as EMPTY_VALUE instead of TOO_SHORT.
    """

    field_name: str
    min_length: int
    max_length: int
    label: str
    empty_is_distinct: bool = False

    def evaluate(self, record: Mapping[str, Any]) -> ValidationOutcome:
        value = _string_value(record, self.field_name)
        if isinstance(value, Rejected):
            return value

        length = len(value.strip())

        if length == 0 and self.empty_is_distinct and self.min_length > 0:
            return Rejected(
                reason_code=ReasonCode.EMPTY_VALUE,
                message=f"{self.label} cannot be empty or whitespace only",
                field=self.field_name,
                context={"providedValue": value},
            )

        if length < self.min_length:
            return Rejected(
                reason_code=ReasonCode.TOO_SHORT,
                message=f"{self.label} too short",
                field=self.field_name,
                context={
                    "currentLength": length,
                    "minimumRequired": self.min_length,
                    "missingCharacters": self.min_length - length,
                    "providedValue": value,
                },
            )

        if length > self.max_length:
            return Rejected(
                reason_code=ReasonCode.TOO_LONG,
                message=f"{self.label} too long",
                field=self.field_name,
                context={
                    "currentLength": length,
                    "maximumAllowed": self.max_length,
                    "excessCharacters": length - self.max_length,
                    "providedValue": value,
                },
            )

        return ACCEPTED


@dataclass(frozen=True)
class PatternRule(FieldRule):
    """
    Runs every predicate against the trimmed value and fails with
    INVALID_FORMAT listing all of the predicates that did not hold.
    """

    field_name: str
    label: str
    predicates: Tuple[NamePredicate, ...] = AUTHOR_NAME_PREDICATES
    recommendations: Tuple[str, ...] = AUTHOR_NAME_RECOMMENDATIONS

    def failing_predicates(self, value: str) -> Sequence[NamePredicate]:
        trimmed = value.strip()
        return [predicate for predicate in self.predicates if not predicate(trimmed)]

    def evaluate(self, record: Mapping[str, Any]) -> ValidationOutcome:
        value = _string_value(record, self.field_name)
        if isinstance(value, Rejected):
            return value

        failing = self.failing_predicates(value)
        if not failing:
            return ACCEPTED
        return Rejected(
            reason_code=ReasonCode.INVALID_FORMAT,
            message=f"Invalid {self.label.lower()}",
            field=self.field_name,
            context={
                "issues": [{"check": p.name, "message": p.message} for p in failing],
                "providedValue": value,
                "recommendations": list(self.recommendations),
            },
        )
