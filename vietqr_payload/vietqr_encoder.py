"""VietQR payload encoder following the NAPAS / EMVCo merchant presented layout."""
from __future__ import annotations

import math
import re
import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Literal

from .banks import BANK_BINS
from .config import settings
from .crc import CRC_FIELD_PREFIX, crc16_ccitt
from .services.errors import (
    err_field_too_long,
    err_invalid_account,
    err_invalid_amount,
    err_invalid_bank_bin,
    err_missing_reference,
)
from .tlv import TLVError, TLVItem, build_tlv

PAYLOAD_FORMAT_INDICATOR = "01"
STATIC_INITIATION = "11"
DYNAMIC_INITIATION = "12"
CURRENCY_VND = "704"
COUNTRY_VN = "VN"
MIN_ACCOUNT_LENGTH = 6

_BANK_BIN_RE = re.compile(r"[0-9]{6}")

Template = Literal["compact", "compact2"]


@dataclass(frozen=True)
class PaymentRequest:
    bank_bin: str
    account_number: str
    account_name: str | None = None
    amount: int | float | Decimal | None = None
    transaction_id: str | None = None
    template: Template = "compact2"
    purpose: str | None = None


@dataclass(frozen=True)
class AdditionalData:
    reference: str
    purpose: str | None = None

    def to_subitems(self) -> Iterable[TLVItem]:
        yield TLVItem(tag="01", value=self.reference)
        if self.purpose:
            yield TLVItem(tag="08", value=self.purpose)


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def amount_units(amount: int | float | Decimal) -> int:
    """Scale an amount by 100 and round half up, as written into tag 54."""

    scaled = Decimal(str(amount)) * 100
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _validate(request: PaymentRequest) -> None:
    if not isinstance(request.bank_bin, str) or not _BANK_BIN_RE.fullmatch(request.bank_bin):
        raise err_invalid_bank_bin()
    if not request.account_number or len(request.account_number) < MIN_ACCOUNT_LENGTH:
        raise err_invalid_account()
    if request.amount is not None:
        if isinstance(request.amount, bool) or not math.isfinite(request.amount) or request.amount < 0:
            raise err_invalid_amount()


def encode_payment(request: PaymentRequest, *, clock: Callable[[], int] | None = None) -> EncodedPayload:
    """Build the VietQR payload and its CRC for a payment request.

    ``clock`` returns epoch milliseconds and is only consulted when the
    request carries no ``transaction_id``.
    """

    _validate(request)

    has_amount = request.amount is not None and request.amount > 0
    items = [
        TLVItem(tag="00", value=PAYLOAD_FORMAT_INDICATOR),
        TLVItem(tag="01", value=DYNAMIC_INITIATION if has_amount else STATIC_INITIATION),
        TLVItem(tag="53", value=CURRENCY_VND),
    ]
    if has_amount:
        items.append(TLVItem(tag="54", value=str(amount_units(request.amount))))
    if request.transaction_id:
        items.append(TLVItem(tag="57", value=request.transaction_id))
    items.append(TLVItem(tag="58", value=COUNTRY_VN))

    if request.transaction_id:
        reference = request.transaction_id
    elif settings.require_reference:
        raise err_missing_reference()
    else:
        reference = str((clock or _now_ms)())

    try:
        tag62_value = build_tlv(AdditionalData(reference=reference, purpose=request.purpose).to_subitems())
        items.append(TLVItem(tag="62", value=tag62_value))
        payload_no_crc = build_tlv(items)
    except TLVError as exc:
        raise err_field_too_long(str(exc)) from exc

    crc = crc16_ccitt(f"{payload_no_crc}{CRC_FIELD_PREFIX}")
    return EncodedPayload(payload=f"{payload_no_crc}{CRC_FIELD_PREFIX}{crc}", crc=crc)


def generate_vietqr_string(request: PaymentRequest, *, clock: Callable[[], int] | None = None) -> str:
    """Return the VietQR payload string for ``request``."""

    return encode_payment(request, clock=clock).payload


def generate_mock_vietqr() -> str:
    """Payload of a fixed demo tuition payment."""

    return generate_vietqr_string(
        PaymentRequest(
            bank_bin=BANK_BINS["VCB"],
            account_number="001100223344",
            account_name="TRUONG THPT HA NOI",
            amount=1_500_000,
            transaction_id="PT202501001",
        )
    )


def format_vnd(amount: int | float | Decimal | None) -> str:
    """Render a whole-dong amount for display, e.g. ``1.500.000 ₫``."""

    if not amount:
        return "0 ₫"
    whole = int(Decimal(str(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return f"{whole:,} ₫".replace(",", ".")
