"""Decoding and validation of VietQR payload strings."""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any

from .config import settings
from .crc import crc_matches
from .tlv import TLVError, parse_tlv

ERR_FORMAT_INDICATOR = "Invalid payload format indicator"
ERR_MISSING_CRC = "Missing CRC"
ERR_NOT_VND = "Not a VND transaction"
ERR_NOT_VIETNAM = "Not a Vietnam transaction"
ERR_CRC_MISMATCH = "CRC mismatch"

_AMOUNT_RE = re.compile(r"[0-9]+")


@dataclass(slots=True)
class DecodedPayload:
    fields: dict[str, str]
    additional_data: dict[str, str] = field(default_factory=dict)

    @property
    def format_indicator(self) -> str | None:
        return self.fields.get("00")

    @property
    def point_of_initiation(self) -> str | None:
        return self.fields.get("01")

    @property
    def currency(self) -> str | None:
        return self.fields.get("53")

    @property
    def amount_units(self) -> int | None:
        raw = self.fields.get("54")
        return int(raw) if raw and _AMOUNT_RE.fullmatch(raw) else None

    @property
    def bill_number(self) -> str | None:
        return self.fields.get("57")

    @property
    def country(self) -> str | None:
        return self.fields.get("58")

    @property
    def reference(self) -> str | None:
        return self.additional_data.get("01")

    @property
    def purpose(self) -> str | None:
        return self.additional_data.get("08")

    @property
    def crc(self) -> str | None:
        return self.fields.get("63")

    def to_dict(self) -> dict[str, Any]:
        return {
            "format_indicator": self.format_indicator,
            "point_of_initiation": self.point_of_initiation,
            "currency": self.currency,
            "amount_units": self.amount_units,
            "bill_number": self.bill_number,
            "country": self.country,
            "reference": self.reference,
            "purpose": self.purpose,
            "crc": self.crc,
        }


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    error: str | None = None
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def decode_vietqr(payload: str) -> DecodedPayload:
    """Walk the top-level TLV fields and the tag 62 template.

    Raises ``TLVError`` when the structure is damaged. The CRC is not checked here.
    """

    fields: dict[str, str] = {}
    order: list[str] = []
    for item in parse_tlv(payload):
        if item.tag in fields:
            raise TLVError(f"Duplicate tag {item.tag}")
        fields[item.tag] = item.value
        order.append(item.tag)
    if "63" in fields and order[-1] != "63":
        raise TLVError("CRC field must be the last field")

    additional: dict[str, str] = {}
    if "62" in fields:
        additional = {sub.tag: sub.value for sub in parse_tlv(fields["62"])}
    return DecodedPayload(fields=fields, additional_data=additional)


def _validate_coarse(payload: str) -> ValidationResult:
    if not payload.startswith("00"):
        return ValidationResult(valid=False, error=ERR_FORMAT_INDICATOR)
    if "63" not in payload:
        return ValidationResult(valid=False, error=ERR_MISSING_CRC)
    if "704" not in payload:
        return ValidationResult(valid=False, error=ERR_NOT_VND)
    if "VN" not in payload:
        return ValidationResult(valid=False, error=ERR_NOT_VIETNAM)
    return ValidationResult(valid=True)


def _validate_strict(payload: str) -> ValidationResult:
    if not payload.startswith("00"):
        return ValidationResult(valid=False, error=ERR_FORMAT_INDICATOR)
    try:
        decoded = decode_vietqr(payload)
    except TLVError as exc:
        return ValidationResult(valid=False, error=f"Malformed payload: {exc}")
    if decoded.crc is None or len(decoded.crc) != 4:
        return ValidationResult(valid=False, error=ERR_MISSING_CRC)
    if decoded.currency != "704":
        return ValidationResult(valid=False, error=ERR_NOT_VND)
    if decoded.country != "VN":
        return ValidationResult(valid=False, error=ERR_NOT_VIETNAM)
    if not crc_matches(payload):
        return ValidationResult(valid=False, error=ERR_CRC_MISMATCH)
    return ValidationResult(valid=True, data=decoded.to_dict())


def validate_vietqr(payload: str, *, strict: bool | None = None) -> ValidationResult:
    """Classify a candidate payload; never raises for malformed input.

    Checks run in a fixed order and the first failure wins. ``strict`` defaults
    to ``settings.strict_validation``, which is on unless ``VIETQR_STRICT=false``.
    Strict mode decodes the TLV structure and re-checks the CRC, so it rejects
    strings the lightweight check accepts. Pass ``strict=False`` for the
    lightweight check: prefix ``00`` plus the presence of ``63``, ``704`` and
    ``VN`` anywhere in the string, with no CRC verification.
    """

    if strict is None:
        strict = settings.strict_validation
    if strict:
        return _validate_strict(payload)
    return _validate_coarse(payload)
