from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from safpay.errors.exceptions import ValidationError
from safpay.models.payment import InitiationResult, PushContext, RegistrationResult
from safpay.providers import get_provider
from safpay.providers.mpesa_provider import MPesaProvider
from safpay.providers.signing import sign_request
from safpay.utils.logger import get_logger
from safpay.utils.validators import check_amount_phone, validate_url

logger = get_logger(__name__)


def with_token(context: PushContext, provider: MPesaProvider) -> PushContext:
    return replace(context, token=provider.fetch_access_token())


def with_signature(context: PushContext, provider: MPesaProvider, now: Optional[datetime] = None) -> PushContext:
    # The timestamp is baked into the password, so both are derived together right before submission
    credentials = provider.credentials
    signature = sign_request(credentials.short_code, credentials.pass_key, now)
    return replace(context, timestamp=signature.timestamp, password=signature.password)


class PaymentService:
    """Orchestrates outbound Daraja requests"""

    @staticmethod
    def initiate_stk_push(
            amount: Any,
            phone: Any,
            provider: Optional[MPesaProvider] = None,
            now: Optional[datetime] = None
    ) -> InitiationResult:
        """
        Run the STK push pipeline: validate -> token -> timestamp/password -> submit

        Args:
            amount: Amount to charge (whole shillings)
            phone: Payer MSISDN, e.g. "254712345678"
            provider: Provider to use; defaults to the app's configured one
            now: Clock override for the request timestamp

        Returns:
            InitiationResult carrying Daraja's acknowledgment

        Raises:
            ValidationError: amount or phone missing, before any network call
            UpstreamAuthError, UpstreamPaymentError, MalformedResponseError
        """
        check_amount_phone(amount, phone)

        provider = provider or get_provider()
        context = PushContext(amount=int(Decimal(str(amount).strip())), phone=str(phone).strip())

        context = with_token(context, provider)
        context = with_signature(context, provider, now)

        logger.info(f'Sending STK push of {context.amount} to {context.phone}')
        return provider.initiate_push_payment(context)

    @staticmethod
    def register_paybill_urls(
            confirmation_url: Any,
            provider: Optional[MPesaProvider] = None
    ) -> RegistrationResult:
        """
        Register the C2B confirmation/validation URL with Daraja

        Raises:
            ValidationError: confirmation_url missing, before the token fetch
        """
        if not confirmation_url:
            raise ValidationError("No url provided in register paybill endpoint")

        is_valid, error = validate_url(confirmation_url)
        if not is_valid:
            raise ValidationError(error, details={'confirmation_url': error})

        provider = provider or get_provider()
        token = provider.fetch_access_token()

        logger.info(f'Registering C2B urls for paybill {provider.config.paybill_number}: {confirmation_url}')
        return provider.register_callback_urls(confirmation_url.strip(), token)
