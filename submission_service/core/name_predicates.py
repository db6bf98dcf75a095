"""
Named predicates for person-name fields.

Each predicate is evaluated on its own so that a rejected name can report
every rule it breaks instead of a single opaque pattern mismatch.
"""

import re
from dataclasses import dataclass
from typing import Callable

UPPERCASE_LETTERS = "A-ZÁÉÍÓÚÑÜ"
LOWERCASE_LETTERS = "a-záéíóúñü"

_CAPITAL_START = re.compile(f"[{UPPERCASE_LETTERS}]")
_ALLOWED_CHARACTERS = re.compile(f"[{UPPERCASE_LETTERS}{LOWERCASE_LETTERS}'\\-. ]+")
_LETTER = re.compile(f"[{UPPERCASE_LETTERS}{LOWERCASE_LETTERS}]")

MIN_NAME_LETTERS = 2


def starts_with_capital(value: str) -> bool:
    """True if the first character is an uppercase (possibly accented) letter."""
    return _CAPITAL_START.match(value) is not None


def has_only_allowed_characters(value: str) -> bool:
    """True if the value is made only of letters, spaces, hyphens, apostrophes and dots."""
    return _ALLOWED_CHARACTERS.fullmatch(value) is not None


def count_letters(value: str) -> int:
    return len(_LETTER.findall(value))


def has_minimum_letters(value: str, minimum: int = MIN_NAME_LETTERS) -> bool:
    """True if the value holds at least ``minimum`` letters once punctuation is ignored."""
    return count_letters(value) >= minimum


@dataclass(frozen=True)
class NamePredicate:
    """A single named check over a name, with the message shown when it fails."""

    name: str
    message: str
    check: Callable[[str], bool]

    def __call__(self, value: str) -> bool:
        return self.check(value)


CAPITAL_START = NamePredicate(
    name="capital_start",
    message="Must start with a capital letter",
    check=starts_with_capital,
)
ALLOWED_CHARACTERS = NamePredicate(
    name="allowed_characters",
    message="Contains characters that are not allowed",
    check=has_only_allowed_characters,
)
MINIMUM_LETTERS = NamePredicate(
    name="minimum_letters",
    message=f"Must contain at least {MIN_NAME_LETTERS} letters",
    check=has_minimum_letters,
)

AUTHOR_NAME_PREDICATES = (CAPITAL_START, ALLOWED_CHARACTERS, MINIMUM_LETTERS)

AUTHOR_NAME_RECOMMENDATIONS = (
    "Start with a capital letter",
    "Use only letters, spaces, hyphens, apostrophes and dots",
    'Example: "Ana-María López"',
)
