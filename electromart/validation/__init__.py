"""
Validation Module for ElectroMart

Stateless field checks shared by every entity:
- String, number and rating bounds
- Enumerated vocabularies
- Date, email, password and phone shapes
"""

from electromart.validation.checks import (
    MAX_RECORD_ID,
    MAX_INTEGER,
    MIN_INTEGER,
    DEFAULT_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    PASSWORD_SPECIAL_CHARACTERS,
    DEFAULT_STATUSES,
    DEFAULT_PAYMENT_METHODS,
    DEFAULT_ROLES,
    Vocabulary,
    check_string,
    check_int,
    check_record_id,
    check_float,
    check_rating,
    check_email,
    check_date,
    check_choice,
    check_status,
    check_payment_method,
    check_role,
    check_password,
    check_phone,
)

__all__ = [
    # Limits
    "MAX_RECORD_ID",
    "MAX_INTEGER",
    "MIN_INTEGER",
    "DEFAULT_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "PHONE_MAX_LENGTH",
    "PASSWORD_SPECIAL_CHARACTERS",
    # Vocabularies
    "DEFAULT_STATUSES",
    "DEFAULT_PAYMENT_METHODS",
    "DEFAULT_ROLES",
    "Vocabulary",
    # Checks
    "check_string",
    "check_int",
    "check_record_id",
    "check_float",
    "check_rating",
    "check_email",
    "check_date",
    "check_choice",
    "check_status",
    "check_payment_method",
    "check_role",
    "check_password",
    "check_phone",
]
