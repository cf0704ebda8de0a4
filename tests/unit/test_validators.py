"""
Unit Tests for input validators
"""

import pytest

from safpay.errors.exceptions import ValidationError
from safpay.utils.validators import (
    check_amount_phone,
    validate_amount,
    validate_phone_number,
    validate_url,
)


class TestCheckAmountPhone:

    @pytest.mark.parametrize('amount, phone', [
        (1, '254712345678'),
        (500, '254712345678'),
        ('750', '0712345678'),
        ('10.0', '254712345678'),
        (100, 254712345678),
    ])
    def test_valid_inputs_pass(self, amount, phone):
        check_amount_phone(amount, phone)

    @pytest.mark.parametrize('amount, phone', [
        (0, '254712345678'),
        (None, '254712345678'),
        ('', '254712345678'),
        (-5, '254712345678'),
        (0.5, '254712345678'),
        (10.9, '254712345678'),
        ('10.5', '254712345678'),
        (100, ''),
        (100, '   '),
        (100, None),
        (None, None),
    ])
    def test_invalid_inputs_raise(self, amount, phone):
        with pytest.raises(ValidationError) as exc_info:
            check_amount_phone(amount, phone)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == 'Amount and phone number are required.'

    def test_error_details_name_the_bad_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            check_amount_phone(0, '')

        assert set(exc_info.value.details) == {'ammount', 'phone'}


class TestFieldValidators:

    def test_amount_rejects_non_numbers(self):
        assert validate_amount('abc')[0] is False
        assert validate_amount(True)[0] is False
        assert validate_amount([100])[0] is False

    def test_amount_rejects_fractions(self):
        assert validate_amount(0.5) == (False, 'Amount must be a whole number')
        assert validate_amount('10.9') == (False, 'Amount must be a whole number')
        assert validate_amount(10.0) == (True, None)

    def test_phone_accepts_any_non_blank_value(self):
        assert validate_phone_number('254712345678') == (True, None)

    @pytest.mark.parametrize('url, expected', [
        ('https://example.com/payment/safpayment/paybillcallback', True),
        ('http://example.com/cb', True),
        ('', False),
        ('example.com/cb', False),
        ('ftp://example.com/cb', False),
        (None, False),
    ])
    def test_validate_url(self, url, expected):
        assert validate_url(url)[0] is expected
