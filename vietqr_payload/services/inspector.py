"""Validation and decoding of externally supplied payloads."""
from __future__ import annotations

import logging

from ..monitoring import record_validation_failure
from ..tlv import TLVError
from ..vietqr_decoder import DecodedPayload, ValidationResult, decode_vietqr, validate_vietqr
from .errors import err_bad_payload

logger = logging.getLogger("vietqr.validator")


class PayloadInspector:
    def __init__(self, strict: bool | None = None):
        self.strict = strict

    def validate(self, payload: str) -> ValidationResult:
        result = validate_vietqr(payload, strict=self.strict)
        if not result.valid:
            # label on the message head only; malformed details are unbounded
            record_validation_failure((result.error or "unknown").split(":", 1)[0])
            logger.info(
                "payload failed validation",
                extra={"reason": result.error, "payload_length": len(payload)},
            )
        return result

    def decode(self, payload: str) -> DecodedPayload:
        try:
            return decode_vietqr(payload)
        except TLVError as exc:
            raise err_bad_payload(f"Malformed payload: {exc}") from exc
