"""NAPAS bank identification numbers for Vietnamese banks."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

BANK_BINS: Mapping[str, str] = MappingProxyType(
    {
        "VCB": "970415",  # Vietcombank
        "TCB": "970403",  # Techcombank
        "MB": "970422",  # MB Bank
        "VIB": "970441",  # VIB
        "ICB": "970488",  # VietinBank
        "STB": "970426",  # Sacombank
        "ACB": "970416",  # ACB
        "BIDV": "970418",  # BIDV
        "DAB": "970406",  # Dong A Bank
        "VAB": "970427",  # Viet A Bank
        "TPB": "970423",  # Tien Phong Bank
        "OJB": "970432",  # OceanBank
        "NAB": "970428",  # Nam A Bank
        "PVB": "970433",  # PVcomBank
        "VBB": "970405",  # Vietnam International Bank
        "MSB": "970429",  # Maritime Bank
        "SHB": "970443",  # SHB
        "BVB": "970457",  # Bac A Bank
        "KLP": "970449",  # Kienlongbank
        "EXB": "970439",  # Eximbank
        "ICBV": "970488",  # alias of ICB
        "HDB": "970437",  # HDBank
        "NCB": "970438",  # National Citizen Bank
        "OCB": "970448",  # Orient Commercial Bank
        "VAM": "970430",  # PG Bank
        "CIMB": "970436",  # CIMB
    }
)


def lookup_bin(code: str) -> str:
    """Return the BIN for a bank short code, case-insensitive."""

    return BANK_BINS[code.strip().upper()]


def bank_codes_for_bin(bank_bin: str) -> list[str]:
    return sorted(code for code, value in BANK_BINS.items() if value == bank_bin)
