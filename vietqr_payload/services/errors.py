"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


class ValidationError(ServiceError):
    """Payment request rejected before any payload is produced."""


def err_invalid_bank_bin(message: str | None = None) -> ValidationError:
    return ValidationError(code="ERR_BANK_BIN", message=message or "Invalid bank BIN. Must be 6 digits.", status_code=422)


def err_invalid_account(message: str | None = None) -> ValidationError:
    return ValidationError(code="ERR_ACCOUNT", message=message or "Invalid account number.", status_code=422)


def err_invalid_amount(message: str | None = None) -> ValidationError:
    return ValidationError(code="ERR_AMOUNT", message=message or "Amount must be a non-negative number.", status_code=422)


def err_missing_reference(message: str | None = None) -> ValidationError:
    return ValidationError(code="ERR_REFERENCE", message=message or "Transaction reference is required", status_code=422)


def err_field_too_long(message: str | None = None) -> ValidationError:
    return ValidationError(code="ERR_FIELD_LENGTH", message=message or "Field value too long for TLV encoding", status_code=422)


def err_unknown_bank(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_UNKNOWN_BANK", message=message or "Unknown bank code", status_code=404)


def err_bad_payload(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_BAD_PAYLOAD", message=message or "Invalid request payload", status_code=422)
