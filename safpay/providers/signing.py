"""
Daraja request signing

Lipa na M-Pesa Online requests carry a timestamp and a password derived from
it, so both must be produced together, immediately before the request:

    Timestamp = YYYYMMDDHHMMSS (local time)
    Password  = Base64(BusinessShortCode + Passkey + Timestamp)

Daraja also reports transaction times in the same 14-digit compact format;
decode_timestamp() turns those back into datetimes.
"""

import base64
from datetime import datetime
from typing import Any, Optional

from safpay.errors.exceptions import MalformedCallbackError
from safpay.models.payment import RequestSignature

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def generate_timestamp(now: Optional[datetime] = None) -> str:
    """Format ``now`` (default: current local time) as 14 zero-padded digits."""
    now = now or datetime.now()
    return now.strftime(TIMESTAMP_FORMAT)


def generate_password(short_code: str, pass_key: str, timestamp: str) -> str:
    raw = f"{short_code}{pass_key}{timestamp}"
    return base64.b64encode(raw.encode("utf-8")).decode("utf-8")


def sign_request(short_code: str, pass_key: str, now: Optional[datetime] = None) -> RequestSignature:
    timestamp = generate_timestamp(now)
    return RequestSignature(
        timestamp=timestamp,
        password=generate_password(short_code, pass_key, timestamp),
    )


def decode_timestamp(value: Any) -> datetime:
    """
    Decode a Daraja compact timestamp into a naive local datetime.

    Args:
        value: 14-digit string or integer, e.g. "20240115103000" or 20240115103000

    Returns:
        datetime(2024, 1, 15, 10, 30, 0)

    Raises:
        MalformedCallbackError: If value is not 14 digits or not a valid instant
    """
    if value is None or isinstance(value, bool):
        raise MalformedCallbackError(f"Invalid transaction timestamp: {value!r}")

    text = str(value).strip()
    if len(text) != 14 or not text.isdigit():
        raise MalformedCallbackError(f"Invalid transaction timestamp: {value!r}")

    try:
        return datetime(
            year=int(text[0:4]),
            month=int(text[4:6]),
            day=int(text[6:8]),
            hour=int(text[8:10]),
            minute=int(text[10:12]),
            second=int(text[12:14]),
        )
    except ValueError as exc:
        raise MalformedCallbackError(f"Invalid transaction timestamp: {value!r}") from exc
