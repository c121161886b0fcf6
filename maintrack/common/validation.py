from __future__ import annotations

import re

PHONE_RE = re.compile(r"^[0-9]{9}$")

MIN_NAME_LENGTH = 3


def is_valid_phone(value: str) -> bool:
    """Exactly nine digits, nothing else."""
    return bool(PHONE_RE.match(str(value or "")))


def is_valid_email(value: str) -> bool:
    """Exactly one '@' and at least one '.' anywhere in the string."""
    v = str(value or "")
    return v.count("@") == 1 and "." in v


def is_valid_department_name(value: str) -> bool:
    return len(str(value or "")) >= MIN_NAME_LENGTH


def name_problem(value: str) -> str:
    """Return why ``value`` is not an acceptable person name, or "" when it is.

    Rules: at least three characters, first character an uppercase letter, no digits.
    """
    v = str(value or "")
    if len(v) < MIN_NAME_LENGTH:
        return f"must have at least {MIN_NAME_LENGTH} characters"
    if not v[0].isupper():
        return "must start with an uppercase letter"
    if any(ch.isdigit() for ch in v):
        return "must not contain digits"
    return ""


def is_valid_name(value: str) -> bool:
    return name_problem(value) == ""
