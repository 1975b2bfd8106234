"""
Unit tests for field validators.
"""

import pytest

from electromart.validation import (
    DEFAULT_ROLES,
    DEFAULT_STATUSES,
    DEFAULT_PAYMENT_METHODS,
    MAX_INTEGER,
    MAX_RECORD_ID,
    Vocabulary,
    check_string,
    check_int,
    check_record_id,
    check_float,
    check_rating,
    check_email,
    check_date,
    check_status,
    check_payment_method,
    check_role,
    check_password,
    check_phone,
)


class TestCheckString:
    """Tests for string length bounds."""

    def test_accepts_regular_text(self):
        assert check_string("Laptop", 255)

    def test_rejects_empty(self):
        assert not check_string("", 255)

    def test_length_bound_is_inclusive(self):
        assert check_string("a" * 255, 255)
        assert not check_string("a" * 256, 255)

    def test_rejects_non_strings(self):
        assert not check_string(None)
        assert not check_string(42)


class TestNumbers:
    """Tests for non-negative number checks."""

    @pytest.mark.parametrize("value,expected", [(0, True), (7, True), (-1, False)])
    def test_check_int(self, value, expected):
        assert check_int(value) is expected

    @pytest.mark.parametrize("value,expected", [(0.0, True), (19.99, True), (3, True), (-0.01, False)])
    def test_check_float(self, value, expected):
        assert check_float(value) is expected

    def test_booleans_are_not_numbers(self):
        assert not check_int(True)
        assert not check_float(False)

    def test_check_int_rejects_floats(self):
        assert not check_int(1.5)

    def test_check_int_upper_bound(self):
        assert check_int(MAX_INTEGER)
        assert not check_int(MAX_INTEGER + 1)
        assert not check_int(10**20)

    def test_check_record_id_range(self):
        assert check_record_id(0)
        assert check_record_id(MAX_RECORD_ID)
        assert not check_record_id(MAX_RECORD_ID + 1)
        assert not check_record_id(-1)


class TestCheckRating:
    """Tests for the 0..5 rating range."""

    @pytest.mark.parametrize("value,expected", [(-1, False), (0, True), (3, True), (5, True), (6, False)])
    def test_range(self, value, expected):
        assert check_rating(value) is expected

    def test_rejects_none(self):
        assert not check_rating(None)


class TestCheckDate:
    """Tests for the YYYY-MM-DD shape check."""

    @pytest.mark.parametrize("value,expected", [
        ("2023-04-01", True),
        ("2023/04/01", False),
        ("20ab-cd-0e", False),
        ("2023-13-99", True),
        ("2023-4-1", False),
        ("", False),
    ])
    def test_shapes(self, value, expected):
        assert check_date(value) is expected

    def test_surrounding_whitespace_is_rejected(self):
        assert not check_date(" 2023-04-01")
        assert not check_date("2023-04-01 ")

    def test_non_ascii_digits_rejected(self):
        assert not check_date("２０２３-04-01")


class TestVocabularies:
    """Tests for enumerated literal sets."""

    def test_status_membership(self):
        for status in DEFAULT_STATUSES:
            assert check_status(status)
        assert not check_status("lost")

    def test_status_is_case_sensitive(self):
        assert not check_status("Pending")

    def test_payment_methods(self):
        assert check_payment_method("credit card")
        assert not check_payment_method("Credit Card")
        assert not check_payment_method("bitcoin")

    def test_roles(self):
        assert check_role("regular")
        assert check_role("admin")
        assert not check_role("root")

    def test_custom_vocabulary(self):
        vocabulary = Vocabulary(order_statuses=("open", "closed"))

        assert check_status("open", vocabulary.order_statuses)
        assert not check_status("pending", vocabulary.order_statuses)
        assert vocabulary.payment_methods == DEFAULT_PAYMENT_METHODS
        assert vocabulary.user_roles == DEFAULT_ROLES


class TestCheckEmail:
    def test_requires_at_and_dot(self):
        assert check_email("ada@example.com")
        assert not check_email("ada.example.com")
        assert not check_email("ada@example")


class TestCheckPassword:
    """Tests for the password policy."""

    def test_accepts_strong_password(self):
        assert check_password("Secur3!pass")

    @pytest.mark.parametrize("value", [
        "Sh0rt!",          # too short
        "alllower1!",      # no uppercase
        "ALLUPPER1!",      # no lowercase
        "NoDigits!!",      # no digit
        "NoSpecial11",     # no special character
    ])
    def test_rejects_weak_passwords(self, value):
        assert not check_password(value)


class TestCheckPhone:
    def test_digits_only(self):
        assert check_phone("0791234567")
        assert not check_phone("079-123-4567")

    def test_length_bound(self):
        assert check_phone("1" * 11)
        assert not check_phone("1" * 12)
        assert not check_phone("")
