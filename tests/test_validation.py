"""Tests for form input validation."""

from decimal import Decimal

import pytest

from ledgerbook.domain.entities import PaymentMethod, TransactionType
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.validation import (
    clean_optional_text,
    validate_amount,
    validate_name,
    validate_payment_method,
    validate_phone,
    validate_title,
    validate_transaction_type,
)


class TestName:
    def test_valid_name_is_stripped(self):
        assert validate_name("  Rami ") == "Rami"

    @pytest.mark.parametrize("name", [None, "", "a", "  b  "])
    def test_too_short(self, name):
        with pytest.raises(ValidationError) as exc_info:
            validate_name(name)
        assert exc_info.value.field == "name"


class TestPhone:
    def test_blank_means_absent(self):
        assert validate_phone(None) is None
        assert validate_phone("") is None
        assert validate_phone("   ") is None

    def test_valid(self):
        assert validate_phone("03123456") == "03123456"

    def test_too_short(self):
        with pytest.raises(ValidationError, match="Phone too short"):
            validate_phone("1234")


class TestTitle:
    def test_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_title("x")
        assert exc_info.value.field == "title"

    def test_valid(self):
        assert validate_title("Netflix") == "Netflix"


class TestAmount:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("25", Decimal("25")),
            ("25.50", Decimal("25.50")),
            ("$1,234.56", Decimal("1234.56")),
            (Decimal("0.01"), Decimal("0.01")),
            (7, Decimal("7")),
            ("1.500", Decimal("1.500")),
        ],
    )
    def test_valid(self, raw, expected):
        assert validate_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-5", Decimal("0"), "-0.01"])
    def test_not_positive(self, raw):
        with pytest.raises(ValidationError, match="Amount must be positive"):
            validate_amount(raw)

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing(self, raw):
        with pytest.raises(ValidationError, match="Amount is required"):
            validate_amount(raw)

    def test_not_numeric(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_amount("abc")
        assert exc_info.value.field == "amount"

    def test_too_many_places(self):
        with pytest.raises(ValidationError, match="decimal places"):
            validate_amount("1.005")

    def test_too_large(self):
        with pytest.raises(ValidationError, match="too large"):
            validate_amount("1E+30")

    def test_float_rejected(self):
        with pytest.raises(ValidationError):
            validate_amount(1.5)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            validate_amount("NaN")


class TestEnums:
    def test_transaction_type(self):
        assert validate_transaction_type("netflix_subscription") is TransactionType.NETFLIX_SUBSCRIPTION
        assert validate_transaction_type(TransactionType.PHONELINE_PAYMENT) is TransactionType.PHONELINE_PAYMENT

    def test_bad_transaction_type(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_transaction_type("groceries")
        assert exc_info.value.field == "type"

    def test_payment_method(self):
        assert validate_payment_method("whish") is PaymentMethod.WHISH

    def test_bad_payment_method(self):
        with pytest.raises(ValidationError, match="Method must be one of"):
            validate_payment_method("card")


def test_clean_optional_text():
    assert clean_optional_text(None) is None
    assert clean_optional_text("  ") is None
    assert clean_optional_text(" note ") == "note"
