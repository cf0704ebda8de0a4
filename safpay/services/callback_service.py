"""
Callback Service
Parses and reconciles the asynchronous notifications Daraja sends back

Two payload shapes arrive on two endpoints:

    STK push result   {"Body": {"stkCallback": {...}}}
    C2B paybill       {"TransID": ..., "TransTime": ..., ...}

Both are parsed into a callback variant and reconciled into the same
PaymentResult. Business failures (a declined payment) are logged and
returned, never raised; only payloads that cannot be parsed raise
MalformedCallbackError.

Daraja does not sign callbacks and no source verification happens here:
anyone who can reach these endpoints can post a payload. Treat the result
as unverified until it is cross-checked with Daraja.
"""

from typing import Any, Dict, List, Optional

from marshmallow import ValidationError as SchemaValidationError

from safpay.errors.exceptions import MalformedCallbackError
from safpay.models.payment import (
    DirectPaymentCallback,
    PaymentResult,
    PaymentStatus,
    ProviderCallback,
    PushResultCallback,
)
from safpay.providers.signing import decode_timestamp
from safpay.schemas.callback_schema import PaybillCallbackSchema, PaymentResultSchema
from safpay.utils.logger import get_logger

logger = get_logger(__name__)

STK_SUCCESS_DESC = "The service request is processed successfully."
STK_SUCCESS_CODE = 0

C2B_SERVICE_PROVIDER = "SAFARICOMC2B"
C2B_SERVICE_PROVIDED = "GRIDPAYMENT"
C2B_DESCRIPTION = "Customer payment for grid bundles"

PUSH_RESULT = "push_result"
DIRECT_PAYMENT = "direct_payment"

paybill_schema = PaybillCallbackSchema()
payment_result_schema = PaymentResultSchema()


def _find_item(items: List[Dict[str, Any]], name: str) -> Any:
    """Value of the first {Name, Value} item called ``name``"""
    for item in items:
        if isinstance(item, dict) and item.get("Name") == name:
            return item.get("Value")
    return None


def _digits(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return "".join(ch for ch in str(value) if ch.isdigit())


def _full_name(first: Optional[str], last: Optional[str]) -> Optional[str]:
    parts = [part for part in (first, last) if part]
    return " ".join(parts) if parts else None


class CallbackService:
    """Service for reconciling Daraja callbacks"""

    @staticmethod
    def parse_push_result(payload: Any) -> PushResultCallback:
        if not isinstance(payload, dict):
            raise MalformedCallbackError("STK callback payload must be a JSON object")

        body = payload.get("Body")
        stk = body.get("stkCallback") if isinstance(body, dict) else None
        if not isinstance(stk, dict):
            stk = {}

        metadata = stk.get("CallbackMetadata")
        items = metadata.get("Item") if isinstance(metadata, dict) else None

        return PushResultCallback(
            result_code=stk.get("ResultCode"),
            result_desc=stk.get("ResultDesc"),
            merchant_request_id=stk.get("MerchantRequestID"),
            checkout_request_id=stk.get("CheckoutRequestID"),
            items=items if isinstance(items, list) else None,
            raw=stk,
        )

    @staticmethod
    def parse_direct_payment(payload: Any) -> DirectPaymentCallback:
        if not isinstance(payload, dict):
            raise MalformedCallbackError("Paybill callback payload must be a JSON object")

        try:
            data = paybill_schema.load(payload)
        except SchemaValidationError as e:
            raise MalformedCallbackError("Invalid paybill callback payload", details=e.messages) from e

        return DirectPaymentCallback(
            trans_id=data.get("TransID"),
            trans_time=data["TransTime"],
            bill_ref_number=data.get("BillRefNumber"),
            first_name=data.get("FirstName"),
            last_name=data.get("LastName"),
            trans_amount=data.get("TransAmount"),
            msisdn=data.get("MSISDN"),
            raw=payload,
        )

    @staticmethod
    def parse_callback(kind: str, payload: Any) -> ProviderCallback:
        """
        Parse a raw callback body into its variant

        Args:
            kind: PUSH_RESULT or DIRECT_PAYMENT (decided by the receiving endpoint)
            payload: Decoded JSON body
        """
        if kind == PUSH_RESULT:
            return CallbackService.parse_push_result(payload)
        if kind == DIRECT_PAYMENT:
            return CallbackService.parse_direct_payment(payload)
        raise ValueError(f"Unknown callback kind: {kind}")

    @staticmethod
    def reconcile(callback: ProviderCallback) -> PaymentResult:
        if isinstance(callback, PushResultCallback):
            return CallbackService.reconcile_push_result(callback)
        if isinstance(callback, DirectPaymentCallback):
            return CallbackService.reconcile_direct_payment(callback)
        raise TypeError(f"Unsupported callback type: {type(callback).__name__}")

    @staticmethod
    def reconcile_push_result(callback: PushResultCallback) -> PaymentResult:
        """
        Turn an STK result into a PaymentResult

        Success requires both the exact ResultDesc text and an integer ResultCode of 0.
        """
        succeeded = (
            callback.result_desc == STK_SUCCESS_DESC
            and not isinstance(callback.result_code, bool)
            and callback.result_code == STK_SUCCESS_CODE
        )

        if not succeeded:
            logger.info({
                "paymentstatus": "Payment failed",
                "details": callback.raw,
            })
            return PaymentResult(
                status=PaymentStatus.FAILED,
                payment_id=callback.checkout_request_id,
                merchant_request_id=callback.merchant_request_id,
                result_desc=callback.result_desc,
                raw_callback=callback.raw,
            )

        if callback.items is None:
            raise MalformedCallbackError("Successful STK callback is missing CallbackMetadata.Item")

        amount = _find_item(callback.items, "Amount")
        phone_number = _find_item(callback.items, "PhoneNumber")
        receipt = _find_item(callback.items, "MpesaReceiptNumber")
        date = decode_timestamp(_find_item(callback.items, "TransactionDate"))

        logger.info({
            "paymentstatus": "Payment processed successfully",
            "amount": amount,
            "phoneNumber": phone_number,
            "mpesacode": receipt,
            "date": date.isoformat(),
        })

        return PaymentResult(
            status=PaymentStatus.SUCCESS,
            payment_id=callback.checkout_request_id,
            merchant_request_id=callback.merchant_request_id,
            date=date,
            amount=amount,
            phone_number=None if phone_number is None else str(phone_number),
            provider_receipt_id=receipt,
            result_desc=callback.result_desc,
            raw_callback=callback.raw,
        )

    @staticmethod
    def reconcile_direct_payment(callback: DirectPaymentCallback) -> PaymentResult:
        """C2B payloads carry no result code; a confirmation means the money moved"""
        return PaymentResult(
            status=PaymentStatus.SUCCESS,
            payment_id=callback.trans_id,
            date=decode_timestamp(callback.trans_time),
            amount=callback.trans_amount,
            phone_number=callback.msisdn,
            provider_receipt_id=callback.trans_id,
            customer_id=_digits(callback.bill_ref_number),
            customer_name=_full_name(callback.first_name, callback.last_name),
            service_provider=C2B_SERVICE_PROVIDER,
            service_provider_ref=callback.trans_id,
            service_provided=C2B_SERVICE_PROVIDED,
            description=C2B_DESCRIPTION,
            raw_callback=callback.raw,
        )

    @staticmethod
    def record_payment(result: PaymentResult) -> Dict[str, Any]:
        """
        Persistence hook for reconciled payments

        Nothing is stored yet; the serialized record is logged and returned.
        """
        record = payment_result_schema.dump(result)
        logger.info({"paymentData": record})
        return record

    @staticmethod
    def handle_push_result(payload: Any) -> PaymentResult:
        callback = CallbackService.parse_callback(PUSH_RESULT, payload)
        return CallbackService.reconcile(callback)

    @staticmethod
    def handle_direct_payment(payload: Any) -> Dict[str, Any]:
        callback = CallbackService.parse_callback(DIRECT_PAYMENT, payload)
        result = CallbackService.reconcile(callback)
        return CallbackService.record_payment(result)
