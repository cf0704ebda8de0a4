from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class PaymentStatus(str, Enum):
    SUCCESS = 'success'
    FAILED = 'failed'


@dataclass(frozen=True)
class AccessToken:
    """Daraja OAuth bearer token. Fetched per request, never cached."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RequestSignature:
    timestamp: str
    password: str


@dataclass(frozen=True)
class PushContext:
    """
    State threaded through the STK push pipeline.

    Each stage returns a copy with its own fields filled in
    (see dataclasses.replace); nothing mutates a shared request object.
    """
    amount: int
    phone: str
    token: Optional[AccessToken] = None
    timestamp: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class PushPaymentRequest:
    short_code: str
    password: str
    timestamp: str
    transaction_type: str
    amount: int
    payer_phone: str
    payee_short_code: str
    callback_url: str
    account_reference: str
    description: str

    def to_payload(self) -> Dict[str, Any]:
        """Daraja processrequest body"""
        return {
            "BusinessShortCode": self.short_code,
            "Password":          self.password,
            "Timestamp":         self.timestamp,
            "TransactionType":   self.transaction_type,
            "Amount":            self.amount,
            "PartyA":            self.payer_phone,
            "PartyB":            self.payee_short_code,
            "PhoneNumber":       self.payer_phone,
            "CallBackURL":       self.callback_url,
            "AccountReference":  self.account_reference,
            "TransactionDesc":   self.description,
        }


@dataclass(frozen=True)
class InitiationResult:
    """Submission acknowledgment only; the outcome arrives on the callback."""
    status: str
    details: Dict[str, Any]


@dataclass(frozen=True)
class RegistrationResult:
    success: bool
    details: Dict[str, Any]


# Callback variants

@dataclass(frozen=True)
class PushResultCallback:
    """Body.stkCallback of an STK push result notification"""
    result_code: Any
    result_desc: Optional[str]
    merchant_request_id: Optional[str]
    checkout_request_id: Optional[str]
    items: Optional[List[Dict[str, Any]]]
    raw: Dict[str, Any]


@dataclass(frozen=True)
class DirectPaymentCallback:
    """Flat C2B paybill confirmation"""
    trans_id: Optional[str]
    trans_time: str
    bill_ref_number: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    trans_amount: Optional[float]
    msisdn: Optional[str]
    raw: Dict[str, Any]


ProviderCallback = Union[PushResultCallback, DirectPaymentCallback]


@dataclass
class PaymentResult:
    """Normalized outcome produced by either callback path"""
    status: PaymentStatus
    payment_id: Optional[str] = None
    merchant_request_id: Optional[str] = None
    date: Optional[datetime] = None
    amount: Optional[float] = None
    phone_number: Optional[str] = None
    provider_receipt_id: Optional[str] = None
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    service_provider: Optional[str] = None
    service_provider_ref: Optional[str] = None
    service_provided: Optional[str] = None
    description: Optional[str] = None
    result_desc: Optional[str] = None
    raw_callback: Dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == PaymentStatus.SUCCESS
