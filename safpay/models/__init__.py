from safpay.models.payment import (
    PaymentStatus,
    AccessToken,
    RequestSignature,
    PushContext,
    PushPaymentRequest,
    InitiationResult,
    RegistrationResult,
    PushResultCallback,
    DirectPaymentCallback,
    ProviderCallback,
    PaymentResult,
)

__all__ = [
    'PaymentStatus',
    'AccessToken',
    'RequestSignature',
    'PushContext',
    'PushPaymentRequest',
    'InitiationResult',
    'RegistrationResult',
    'PushResultCallback',
    'DirectPaymentCallback',
    'ProviderCallback',
    'PaymentResult',
]
