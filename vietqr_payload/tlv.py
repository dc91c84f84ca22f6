"""Utility helpers to build and parse EMV-style TLV payloads.

The length subfield is two uppercase hex digits. Values are capped at 99
characters even though the subfield could carry up to 0xFF.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

MAX_VALUE_LENGTH = 99

_TAG_RE = re.compile(r"[0-9]{2}")
_LENGTH_RE = re.compile(r"[0-9A-F]{2}")


class TLVError(ValueError):
    """Raised when a TLV field cannot be encoded or decoded."""


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        if not _TAG_RE.fullmatch(self.tag):
            raise TLVError(f"Tag must be two digits, got {self.tag!r}")
        if len(self.value) > MAX_VALUE_LENGTH:
            raise TLVError(f"Value of tag {self.tag} is {len(self.value)} chars, limit is {MAX_VALUE_LENGTH}")
        return f"{self.tag}{len(self.value):02X}{self.value}"


def encode_field(tag: str, value: str) -> str:
    """Serialize a single ``tag + length + value`` triplet."""

    return TLVItem(tag=tag, value=value).serialize()


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def parse_tlv(payload: str) -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items."""

    idx = 0
    total = len(payload)
    while idx + 4 <= total:
        tag = payload[idx : idx + 2]
        raw_length = payload[idx + 2 : idx + 4]
        if not _LENGTH_RE.fullmatch(raw_length):
            raise TLVError(f"Invalid length {raw_length!r} for tag {tag!r} at offset {idx}")
        value_start = idx + 4
        value_end = value_start + int(raw_length, 16)
        if value_end > total:
            raise TLVError(f"Length of tag {tag!r} exceeds payload")
        yield TLVItem(tag=tag, value=payload[value_start:value_end])
        idx = value_end
    if idx != total:
        raise TLVError("Dangling TLV data detected")
