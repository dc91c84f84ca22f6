"""Payment QR generation service."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..banks import lookup_bin
from ..monitoring import record_payload_generated
from ..vietqr_encoder import EncodedPayload, PaymentRequest, encode_payment, format_vnd
from .errors import ServiceError, err_unknown_bank

logger = logging.getLogger("vietqr.generator")


@dataclass(slots=True)
class GenerateResult:
    request: PaymentRequest
    encoded: EncodedPayload
    amount_display: str


class PaymentQRGenerator:
    def __init__(self, clock: Callable[[], int] | None = None):
        self.clock = clock

    @staticmethod
    def resolve_bank_bin(bank_bin: str | None, bank_code: str | None) -> str:
        if bank_bin:
            return bank_bin
        if not bank_code:
            raise ServiceError(code="ERR_BANK_BIN", message="bank_bin or bank_code is required", status_code=422)
        try:
            return lookup_bin(bank_code)
        except KeyError:
            raise err_unknown_bank(f"Unknown bank code {bank_code!r}") from None

    def create(self, request: PaymentRequest) -> GenerateResult:
        try:
            encoded = encode_payment(request, clock=self.clock)
        except ServiceError as exc:
            logger.info(
                "payment request rejected",
                extra={"code": exc.code, "bank_bin": request.bank_bin},
            )
            raise

        initiation = "dynamic" if request.amount and request.amount > 0 else "static"
        record_payload_generated(initiation)
        logger.info(
            "vietqr payload generated",
            extra={
                "bank_bin": request.bank_bin,
                "initiation": initiation,
                "has_reference": bool(request.transaction_id),
                "crc": encoded.crc,
            },
        )
        return GenerateResult(request=request, encoded=encoded, amount_display=format_vnd(request.amount))
