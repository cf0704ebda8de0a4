"""
Utils Package
Utility functions and helpers
"""

from safpay.utils.logger import get_logger, RequestLogger
from safpay.utils.validators import (
    validate_phone_number,
    validate_amount,
    validate_url,
    check_amount_phone
)

__all__ = [
    'get_logger',
    'RequestLogger',
    'validate_phone_number',
    'validate_amount',
    'validate_url',
    'check_amount_phone'
]
