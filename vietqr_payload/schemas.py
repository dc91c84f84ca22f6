"""Pydantic schemas for API contracts."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class BankInfo(BaseModel):
    code: str
    bin: str


class GenerateQRRequest(BaseModel):
    bank_bin: str | None = Field(default=None, description="6-digit NAPAS BIN")
    bank_code: str | None = Field(default=None, description="Bank short code, used when bank_bin is absent")
    account_number: str
    account_name: str | None = None
    amount: float | None = Field(default=None, description="Amount in VND; empty or zero for an open-amount QR")
    transaction_id: str | None = None
    purpose: str | None = None
    template: Literal["compact", "compact2"] | None = None


class GenerateQRResponse(BaseModel):
    payload: str
    crc: str
    amount_display: str
    template: str


class PayloadRequest(BaseModel):
    payload: str
    strict: bool | None = None


class ValidateResponse(BaseModel):
    valid: bool
    error: str | None = None
    data: dict[str, Any] | None = None


class DecodeResponse(BaseModel):
    format_indicator: str | None
    point_of_initiation: str | None
    currency: str | None
    amount_units: int | None
    bill_number: str | None
    country: str | None
    reference: str | None
    purpose: str | None
    crc: str | None
    crc_valid: bool
