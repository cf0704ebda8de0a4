from safpay.services.payment_service import PaymentService
from safpay.services.callback_service import CallbackService

__all__ = ['PaymentService', 'CallbackService']
