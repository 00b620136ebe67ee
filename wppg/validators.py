"""Answer validators used by the wizard questions.

Every validator takes the raw answer and returns the (possibly normalised)
value, or raises ``ValidationError`` with a message suitable for showing to
the user before the question is asked again.
"""

from __future__ import annotations

import re
from typing import Any

from email_validator import EmailNotValidError
from email_validator import validate_email as _validate_email_address

PASSWORD_MIN_LENGTH = 12
PASSWORD_SYMBOLS = "!@#$%^&*()-_=+{};:,<.>[]"

_PASSWORD_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"[0-9]"),
    re.compile("[" + re.escape(PASSWORD_SYMBOLS) + "]"),
)

_DB_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]+$")


class ValidationError(ValueError):
    """Raised by a validator when an answer is not acceptable."""


def validate_not_empty(answer: Any) -> str:
    """Accept any non-blank string."""
    if not isinstance(answer, str) or not answer.strip():
        raise ValidationError("The value must not be empty.")
    return answer


def validate_email(answer: Any) -> str:
    """Accept a syntactically valid email address.

    Deliverability is not checked and the ``.test`` special-use domain is
    allowed.
    """
    if not isinstance(answer, str) or not answer:
        raise ValidationError("The email address seems invalid.")
    try:
        _validate_email_address(answer, check_deliverability=False, test_environment=True)
    except EmailNotValidError as exc:
        raise ValidationError("The email address seems invalid.") from exc
    return answer


def validate_password(answer: Any) -> str:
    """Enforce the admin password policy.

    At least 12 characters with one lowercase letter, one uppercase letter,
    one digit and one symbol from ``PASSWORD_SYMBOLS``.
    """
    if (
        not isinstance(answer, str)
        or len(answer) < PASSWORD_MIN_LENGTH
        or not all(rule.search(answer) for rule in _PASSWORD_RULES)
    ):
        raise ValidationError(
            f"The password must contain at least {PASSWORD_MIN_LENGTH} characters: "
            "1 lowercase letter [a-z], 1 uppercase letter [A-Z], 1 number [0-9] "
            f"and 1 special symbol [{PASSWORD_SYMBOLS}]."
        )
    return answer


def validate_port(answer: Any) -> int:
    """Accept a TCP port number in ``(0, 65535]`` and return it as an int."""
    if isinstance(answer, bool):
        raise ValidationError("Invalid port number!")
    text = str(answer).strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError("Invalid port number!")
    port = int(text)
    if port <= 0 or port > 65535:
        raise ValidationError("Invalid port number!")
    return port


def validate_db_prefix(answer: Any) -> str:
    """Accept a database table prefix made of letters, digits and underscores."""
    if not isinstance(answer, str) or not _DB_PREFIX_RE.match(answer):
        raise ValidationError(
            "The table prefix may only contain letters, digits and underscores."
        )
    return answer
