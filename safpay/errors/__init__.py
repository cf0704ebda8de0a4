from safpay.errors.exceptions import (
    AppError,
    ValidationError,
    UpstreamAuthError,
    UpstreamPaymentError,
    MalformedResponseError,
    MalformedCallbackError,
    ConfigurationError,
)

__all__ = [
    'AppError',
    'ValidationError',
    'UpstreamAuthError',
    'UpstreamPaymentError',
    'MalformedResponseError',
    'MalformedCallbackError',
    'ConfigurationError',
]
