"""
Custom Validators
Validation functions for the inputs the Daraja pipeline needs before it
touches the network
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from urllib.parse import urlparse

from safpay.errors.exceptions import ValidationError


def validate_amount(amount: Any) -> tuple[bool, Optional[str]]:
    """
    Validate payment amount

    Args:
        amount: Amount to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if amount is None or isinstance(amount, bool):
        return False, "Amount is required"

    try:
        if isinstance(amount, str):
            if not amount.strip():
                return False, "Amount is required"
            amount_decimal = Decimal(amount.strip())
        elif isinstance(amount, (int, float)):
            amount_decimal = Decimal(str(amount))
        elif isinstance(amount, Decimal):
            amount_decimal = amount
        else:
            return False, f"Amount must be a number, got {type(amount).__name__}"
    except (InvalidOperation, ValueError) as e:
        return False, f"Invalid amount format: {str(e)}"

    if not amount_decimal.is_finite() or amount_decimal <= 0:
        return False, "Amount must be greater than 0"

    # Daraja only takes whole shillings
    if amount_decimal != amount_decimal.to_integral_value():
        return False, "Amount must be a whole number"

    return True, None


def validate_phone_number(phone: Any) -> tuple[bool, Optional[str]]:
    """
    Validate that a payer phone number was supplied

    Daraja does its own MSISDN validation, so only presence is checked here.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if phone is None:
        return False, "Phone number is required"

    if not str(phone).strip():
        return False, "Phone number is required"

    return True, None


def validate_url(url: Any) -> tuple[bool, Optional[str]]:
    """
    Validate a callback URL

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"

    parsed = urlparse(url.strip())
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return False, "URL must be an absolute http(s) URL"

    return True, None


def check_amount_phone(amount: Any, phone: Any) -> None:
    """
    Raise ValidationError unless both amount and phone are present and usable.

    Runs before any call to Daraja.
    """
    amount_ok, amount_error = validate_amount(amount)
    phone_ok, phone_error = validate_phone_number(phone)

    if not (amount_ok and phone_ok):
        errors = {}
        if amount_error:
            errors['ammount'] = amount_error
        if phone_error:
            errors['phone'] = phone_error
        raise ValidationError("Amount and phone number are required.", details=errors)
