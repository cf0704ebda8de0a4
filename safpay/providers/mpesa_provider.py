"""
M-Pesa Payment Provider
Based on the Safaricom Daraja API.

Supported flows
---------------
Authentication
    GET  <SAFARICOM_AUTH_URL>        (Basic auth, consumer key/secret)
    A fresh token is fetched for every initiating request; nothing is cached.

STK Push (Lipa na M-Pesa Online)
    POST <SAFARICOM_STK_ENDPOINT>
    The result is delivered later to the STK callback URL.

C2B URL registration
    POST <SAFARICOM_REGISTER_PAYBILL>
    Registers one URL as both confirmation and validation endpoint.

Callbacks
    Daraja POSTs results without any signature header; payloads are not
    authenticated (see CallbackService).
"""

import base64
from typing import Any, Dict, Optional

import requests

from safpay.config import DarajaConfig
from safpay.errors.exceptions import (
    MalformedResponseError,
    UpstreamAuthError,
    UpstreamPaymentError,
)
from safpay.models.payment import (
    AccessToken,
    InitiationResult,
    PushContext,
    PushPaymentRequest,
    RegistrationResult,
)
from safpay.utils.logger import get_logger

logger = get_logger(__name__)

TRANSACTION_TYPE = "CustomerPayBillOnline"
C2B_RESPONSE_TYPE = "Completed"
REGISTRATION_SUCCESS = "Success"
STK_ACCEPTED_STATUS = "Request sent"


class MPesaProvider:
    """M-Pesa (Daraja API) adapter bound to one immutable DarajaConfig."""

    def __init__(self, config: DarajaConfig):
        self.config = config
        self.credentials = config.credentials
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    # Authentication

    def _basic_auth_header(self) -> str:
        raw = f"{self.credentials.consumer_key}:{self.credentials.consumer_secret}"
        return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("utf-8")

    def fetch_access_token(self) -> AccessToken:
        """
        Obtain a bearer token from the Daraja OAuth endpoint.

        Raises:
            UpstreamAuthError: Network failure, non-2xx status or non-JSON body
            MalformedResponseError: Body has no access_token
        """
        logger.info("MPesaProvider: requesting access token")
        headers = {
            "Authorization": self._basic_auth_header(),
            "Content-Type":  "application/json",
        }

        try:
            resp = self._session.get(self.config.auth_url, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise UpstreamAuthError(f"Error generating auth token: {exc}") from exc

        if not resp.ok:
            logger.error("MPesaProvider: token request failed with HTTP %s", resp.status_code)
            raise UpstreamAuthError(
                f"Error generating auth token: HTTP {resp.status_code}",
                details=self._safe_json(resp),
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamAuthError("Error generating auth token: response is not JSON") from exc

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise MalformedResponseError(
                "Daraja auth response did not include an access_token",
                details=data,
            )

        return AccessToken(value=token)

    # STK push

    def build_push_request(self, context: PushContext) -> PushPaymentRequest:
        return PushPaymentRequest(
            short_code=self.credentials.short_code,
            password=context.password,
            timestamp=context.timestamp,
            transaction_type=TRANSACTION_TYPE,
            amount=context.amount,
            payer_phone=context.phone,
            payee_short_code=self.credentials.short_code,
            callback_url=self.config.stk_callback_url,
            account_reference=self.config.account_reference,
            description=self.config.transaction_desc,
        )

    def initiate_push_payment(self, context: PushContext) -> InitiationResult:
        """
        Submit a Lipa na M-Pesa Online request.

        The context must already carry token, timestamp and password. The
        returned result is Daraja's acknowledgment of the submission, not a
        payment confirmation.

        Raises:
            UpstreamPaymentError: Network failure or non-2xx status
            MalformedResponseError: 2xx response whose body is not JSON
        """
        push_request = self.build_push_request(context)

        try:
            resp = self._session.post(
                self.config.stk_push_url,
                json=push_request.to_payload(),
                headers=self._bearer_headers(context.token),
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamPaymentError(f"Could not send stk push request: {exc}") from exc

        if not resp.ok:
            failure = self._safe_json(resp)
            logger.error("MPesaProvider [stk_push] HTTP %s", resp.status_code)
            logger.error("MPesaProvider [stk_push] failure reason: %s", failure)
            raise UpstreamPaymentError("Could not send stk push request", details=failure)

        data = self._json_or_raise(resp, "stk_push")
        logger.info("MPesaProvider [stk_push] accepted: %s", data)
        return InitiationResult(status=STK_ACCEPTED_STATUS, details=data)

    # C2B registration

    def register_callback_urls(self, confirmation_url: str, token: AccessToken) -> RegistrationResult:
        """
        Register ``confirmation_url`` as both C2B confirmation and validation URL.

        A ResponseDescription other than "Success" is a business rejection and
        is reported in the result rather than raised.
        """
        payload = {
            "ShortCode":       int(self.config.paybill_number),
            "ResponseType":    C2B_RESPONSE_TYPE,
            "ConfirmationURL": confirmation_url,
            "ValidationURL":   confirmation_url,
        }

        try:
            resp = self._session.post(
                self.config.register_url,
                json=payload,
                headers=self._bearer_headers(token),
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamPaymentError(f"Could not register paybill urls: {exc}") from exc

        data = self._json_or_raise(resp, "register_c2b_urls")

        if isinstance(data, dict) and data.get("ResponseDescription") == REGISTRATION_SUCCESS:
            return RegistrationResult(success=True, details=data)

        logger.warning("MPesaProvider [register_c2b_urls] failed: %s", data)
        return RegistrationResult(success=False, details=data)

    # HTTP helpers

    @staticmethod
    def _bearer_headers(token: Optional[AccessToken]) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type":  "application/json",
        }

    @staticmethod
    def _safe_json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return {"raw": resp.text[:300]}

    @staticmethod
    def _json_or_raise(resp: requests.Response, context: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"MPesaProvider [{context}]: response is not JSON",
                details={"status_code": resp.status_code, "raw": resp.text[:300]},
            ) from exc
