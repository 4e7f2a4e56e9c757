"""Field validators for respondent personal info.

Each validator takes a raw value and returns a `FieldVerdict`. Leading and
trailing whitespace is trimmed before any rule runs. Rules are checked in a
fixed order and the first failing rule determines the message, so every
failure reason has its own message and success has a message of its own.

These functions are pure and are called both for live feedback in the
survey flow and by the response assembler before anything is persisted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

# Latin letters, Gujarati letters and vowel signs, and whitespace
_LETTERS_RE = re.compile(r"[A-Za-z\u0A81-\u0AE3\s]+")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

TEXT_MIN_LENGTH = 2
TEXT_MAX_LENGTH = 50
PHONE_LENGTH = 10
PHONE_LEADING_DIGITS = frozenset("6789")
EMAIL_MAX_LENGTH = 100
GENDERS = ("Male", "Female", "Other")

OK_MESSAGE = "Looks good."


@dataclass(frozen=True)
class FieldVerdict:
    is_valid: bool
    message: str


def _ok() -> FieldVerdict:
    return FieldVerdict(True, OK_MESSAGE)


def _fail(message: str) -> FieldVerdict:
    return FieldVerdict(False, message)


def _trimmed(value: Optional[str]) -> str:
    return (value or "").strip()


def _validate_letters(value: Optional[str], label: str) -> FieldVerdict:
    text = _trimmed(value)
    if not text:
        return _fail(f"{label} is required.")
    if len(text) < TEXT_MIN_LENGTH:
        return _fail(f"{label} must be at least {TEXT_MIN_LENGTH} characters.")
    if len(text) > TEXT_MAX_LENGTH:
        return _fail(f"{label} must be at most {TEXT_MAX_LENGTH} characters.")
    if not _LETTERS_RE.fullmatch(text):
        return _fail(f"{label} must contain only letters and spaces.")
    return _ok()


def validate_name(value: Optional[str]) -> FieldVerdict:
    return _validate_letters(value, "Name")


def validate_city(value: Optional[str]) -> FieldVerdict:
    return _validate_letters(value, "City")


def validate_phone(value: Optional[str]) -> FieldVerdict:
    text = _trimmed(value)
    if not text:
        return _fail("Phone number is required.")
    # ASCII digits only; str.isdigit() also accepts Gujarati numerals
    if not all("0" <= ch <= "9" for ch in text):
        return _fail("Phone number must contain digits only.")
    if len(text) != PHONE_LENGTH:
        return _fail(f"Phone number must be exactly {PHONE_LENGTH} digits.")
    if text[0] not in PHONE_LEADING_DIGITS:
        return _fail("Phone number must start with 6, 7, 8 or 9.")
    return _ok()


def validate_email(value: Optional[str]) -> FieldVerdict:
    text = _trimmed(value)
    if not text:
        return _fail("Email is required.")
    if "@" not in text:
        return _fail("Email must contain an @ symbol.")
    if not _EMAIL_RE.fullmatch(text):
        return _fail("Please provide a valid email.")
    if len(text) > EMAIL_MAX_LENGTH:
        return _fail(f"Email must be at most {EMAIL_MAX_LENGTH} characters.")
    return _ok()


def validate_gender(value: Optional[str]) -> FieldVerdict:
    # Exact match only; no trimming or case folding
    if not value:
        return _fail("Gender is required.")
    if value not in GENDERS:
        return _fail("Please select a valid gender.")
    return _ok()


# Field order is the order messages are reported in
FIELD_VALIDATORS: Dict[str, Callable[[Optional[str]], FieldVerdict]] = {
    "name": validate_name,
    "gender": validate_gender,
    "phone": validate_phone,
    "email": validate_email,
    "city": validate_city,
}

PERSONAL_FIELDS = tuple(FIELD_VALIDATORS)


def validate_personal_info(info: Mapping[str, Optional[str]]) -> Dict[str, FieldVerdict]:
    """Run every field validator and return verdicts keyed by field name."""
    return {field: check(info.get(field)) for field, check in FIELD_VALIDATORS.items()}


def collect_failures(verdicts: Mapping[str, FieldVerdict]) -> List[str]:
    return [v.message for v in verdicts.values() if not v.is_valid]


def normalize_personal_info(info: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Return the trimmed values that are stored once validation passed."""
    normalized = {field: _trimmed(info.get(field)) for field in PERSONAL_FIELDS}
    normalized["gender"] = info.get("gender") or ""
    return normalized


__all__ = [
    "FieldVerdict",
    "OK_MESSAGE",
    "GENDERS",
    "PERSONAL_FIELDS",
    "FIELD_VALIDATORS",
    "validate_name",
    "validate_city",
    "validate_phone",
    "validate_email",
    "validate_gender",
    "validate_personal_info",
    "collect_failures",
    "normalize_personal_info",
]
