"""Input validation for customer, transaction and payment forms.

Validation runs before anything reaches the store. Each failure raises
``ValidationError`` carrying the name of the offending field.
"""

from decimal import Decimal
from typing import Optional, Union

from ledgerbook.domain.entities import PaymentMethod, TransactionType
from ledgerbook.domain.errors import ValidationError
from ledgerbook.utils.amount_parser import parse_amount

MIN_NAME_LENGTH = 2
MIN_PHONE_LENGTH = 5
MIN_TITLE_LENGTH = 2
MAX_AMOUNT_PLACES = 2
MAX_AMOUNT = Decimal("9999999999.99")


def validate_name(name: Optional[str]) -> str:
    if name is None or len(name.strip()) < MIN_NAME_LENGTH:
        raise ValidationError("Name too short", field="name")
    return name.strip()


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """Return a cleaned phone number, or None when left blank."""
    if phone is None or phone.strip() == "":
        return None
    phone = phone.strip()
    if len(phone) < MIN_PHONE_LENGTH:
        raise ValidationError("Phone too short", field="phone")
    return phone


def validate_title(title: Optional[str]) -> str:
    if title is None or len(title.strip()) < MIN_TITLE_LENGTH:
        raise ValidationError("Title too short", field="title")
    return title.strip()


def validate_amount(amount: Union[Decimal, str, int, None]) -> Decimal:
    """Coerce and check an amount: positive, at most two decimal places."""
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        raise ValidationError("Amount is required", field="amount")
    if isinstance(amount, float):
        raise ValidationError("Amount must be a decimal value, not a float", field="amount")

    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = parse_amount(str(amount))
        except ValueError as e:
            raise ValidationError(f"Invalid amount: {e}", field="amount") from e

    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be positive", field="amount")
    if value > MAX_AMOUNT:
        raise ValidationError("Amount too large", field="amount")
    if value != value.quantize(Decimal(1).scaleb(-MAX_AMOUNT_PLACES)):
        raise ValidationError(
            f"Amount must have at most {MAX_AMOUNT_PLACES} decimal places", field="amount"
        )
    return value


def validate_transaction_type(value: Union[TransactionType, str, None]) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Type must be one of: {allowed}", field="type") from None


def validate_payment_method(
    value: Union[PaymentMethod, str, None], field: str = "method"
) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"Method must be one of: {allowed}", field=field) from None


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Strip free text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
