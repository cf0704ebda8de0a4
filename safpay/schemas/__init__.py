"""
Schemas Package
Marshmallow schemas for request/response validation
"""

from safpay.schemas.payment_schema import (
    StkPushRequestSchema,
    RegisterPaybillSchema
)
from safpay.schemas.callback_schema import (
    PaybillCallbackSchema,
    PaymentResultSchema
)

__all__ = [
    'StkPushRequestSchema',
    'RegisterPaybillSchema',
    'PaybillCallbackSchema',
    'PaymentResultSchema'
]
