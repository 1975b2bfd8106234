"""
Field Validators for ElectroMart

Pure predicates over primitive request values:
- String length bounds
- Non-negative numbers
- Enumerated vocabularies (statuses, payment methods, roles)
- Date shape, email shape, password policy, phone numbers

Every check returns a bool and never raises. A value of the wrong type
(None, a bool where a number is expected, a number where text is expected)
is simply invalid.
"""

from dataclasses import dataclass
from typing import Any, Iterable


# Identifiers are unsigned 32-bit
MAX_RECORD_ID = 0xFFFFFFFF

# Widest integer the store can hold (signed 64-bit)
MAX_INTEGER = 2**63 - 1
MIN_INTEGER = -(2**63)

DEFAULT_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
PHONE_MAX_LENGTH = 11

MIN_RATING = 0
MAX_RATING = 5

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*()_+|~-=\\`{}[]:\";'<>?,./"

DEFAULT_STATUSES = (
    "pending",
    "shipped",
    "delivered",
    "returned",
    "cancelled",
    "refunded",
    "processing",
    "completed",
)
DEFAULT_PAYMENT_METHODS = ("credit card", "debit card", "paypal", "cash", "check")
DEFAULT_ROLES = ("regular", "admin")


@dataclass(frozen=True)
class Vocabulary:
    """Fixed literal sets accepted by the enumerated fields."""

    order_statuses: tuple[str, ...] = DEFAULT_STATUSES
    payment_statuses: tuple[str, ...] = DEFAULT_STATUSES
    shipping_statuses: tuple[str, ...] = DEFAULT_STATUSES
    payment_methods: tuple[str, ...] = DEFAULT_PAYMENT_METHODS
    user_roles: tuple[str, ...] = DEFAULT_ROLES


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_string(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> bool:
    """True iff value is a non-empty string no longer than max_length."""
    return _is_text(value) and 0 < len(value) <= max_length


def check_int(value: Any, max_value: int = MAX_INTEGER) -> bool:
    """True iff value is an integer in the inclusive 0..max_value range."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= max_value


def check_record_id(value: Any) -> bool:
    """True iff value fits the unsigned 32-bit identifier range."""
    return check_int(value, MAX_RECORD_ID)


def check_float(value: Any) -> bool:
    """True iff value is a non-negative number."""
    return _is_number(value) and value >= 0


def check_rating(value: Any) -> bool:
    """True iff value is an integer in the inclusive 0..5 range."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_RATING <= value <= MAX_RATING
    )


def check_email(value: Any) -> bool:
    """
    Loose email shape check.

    Only requires an "@" and a "." somewhere in the string.
    """
    return _is_text(value) and "@" in value and "." in value


def check_date(value: Any) -> bool:
    """
    Check for the YYYY-MM-DD shape.

    Month and day ranges are not validated: "2023-13-99" passes.
    Surrounding whitespace is not trimmed, so " 2023-04-01" fails.
    """
    if not _is_text(value):
        return False

    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        return False

    return all(
        char in "0123456789"
        for i, char in enumerate(value)
        if i not in (4, 7)
    )


def check_choice(value: Any, choices: Iterable[str]) -> bool:
    """True iff value is a case-sensitive exact member of choices."""
    return _is_text(value) and value in tuple(choices)


def check_status(value: Any, statuses: Iterable[str] = DEFAULT_STATUSES) -> bool:
    return check_choice(value, statuses)


def check_payment_method(
    value: Any,
    methods: Iterable[str] = DEFAULT_PAYMENT_METHODS,
) -> bool:
    return check_choice(value, methods)


def check_role(value: Any, roles: Iterable[str] = DEFAULT_ROLES) -> bool:
    return check_choice(value, roles)


def check_password(
    value: Any,
    special_characters: str = PASSWORD_SPECIAL_CHARACTERS,
) -> bool:
    """
    Password policy.

    At least 8 characters with a digit, an uppercase letter, a lowercase
    letter and one of the special characters.
    """
    if not _is_text(value) or len(value) < PASSWORD_MIN_LENGTH:
        return False

    return (
        any(c in "0123456789" for c in value)
        and any("A" <= c <= "Z" for c in value)
        and any("a" <= c <= "z" for c in value)
        and any(c in special_characters for c in value)
    )


def check_phone(value: Any, max_length: int = PHONE_MAX_LENGTH) -> bool:
    """True iff value is a non-empty run of ASCII digits up to max_length."""
    return (
        check_string(value, max_length)
        and all(c in "0123456789" for c in value)
    )
