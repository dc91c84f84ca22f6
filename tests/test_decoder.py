import pytest

from vietqr_payload.config import settings
from vietqr_payload.crc import crc16_ccitt
from vietqr_payload.tlv import TLVError
from vietqr_payload.vietqr_decoder import decode_vietqr, validate_vietqr
from vietqr_payload.vietqr_encoder import PaymentRequest, generate_vietqr_string

TUITION = PaymentRequest(
    bank_bin="970415",
    account_number="001100223344",
    amount=1500000,
    transaction_id="PT202501001",
    purpose="HOC PHI",
)


def _with_crc(body: str) -> str:
    body = body + "6304"
    return body + crc16_ccitt(body)


def _with_bad_crc(body: str) -> str:
    good = _with_crc(body)
    wrong = "0000" if good[-4:] != "0000" else "1111"
    return good[:-4] + wrong


def test_decode_generated_payload():
    decoded = decode_vietqr(generate_vietqr_string(TUITION))
    assert decoded.format_indicator == "01"
    assert decoded.point_of_initiation == "12"
    assert decoded.currency == "704"
    assert decoded.amount_units == 150000000
    assert decoded.bill_number == "PT202501001"
    assert decoded.country == "VN"
    assert decoded.reference == "PT202501001"
    assert decoded.purpose == "HOC PHI"
    assert len(decoded.crc) == 4


def test_decode_to_dict_keys():
    data = decode_vietqr(generate_vietqr_string(TUITION)).to_dict()
    assert set(data) == {
        "format_indicator",
        "point_of_initiation",
        "currency",
        "amount_units",
        "bill_number",
        "country",
        "reference",
        "purpose",
        "crc",
    }


def test_decode_rejects_duplicate_tags():
    with pytest.raises(TLVError):
        decode_vietqr("000201000201")


def test_decode_rejects_crc_before_other_fields():
    with pytest.raises(TLVError):
        decode_vietqr("00020163041234" + "5802VN")


def test_strict_validation_accepts_generated_payload():
    result = validate_vietqr(generate_vietqr_string(TUITION), strict=True)
    assert result.valid is True
    assert result.error is None
    assert result.data["bill_number"] == "PT202501001"


@pytest.mark.parametrize(
    "payload, error",
    [
        ("010211", "Invalid payload format indicator"),
        ("0002015303704" + "5802VN", "Missing CRC"),
        (_with_crc("000201" + "5303360" + "5802VN"), "Not a VND transaction"),
        (_with_crc("000201" + "5303704" + "5802ID"), "Not a Vietnam transaction"),
        (_with_bad_crc("000201" + "5303704" + "5802VN"), "CRC mismatch"),
    ],
)
def test_strict_validation_errors(payload, error):
    result = validate_vietqr(payload, strict=True)
    assert result.valid is False
    assert result.error == error


def test_strict_validation_reports_malformed_structure():
    result = validate_vietqr("000201" + "5399704", strict=True)
    assert result.valid is False
    assert result.error.startswith("Malformed payload:")


def test_strict_validation_does_not_raise_on_garbage():
    result = validate_vietqr("00" + "ÿ" * 7, strict=True)
    assert result.valid is False


def test_strict_validation_rejects_tampered_amount():
    payload = generate_vietqr_string(TUITION)
    tampered = payload.replace("5409150000000", "5409150000001")
    assert validate_vietqr(tampered, strict=True).error == "CRC mismatch"


@pytest.mark.parametrize(
    "payload, error",
    [
        ("0102115303704", "Invalid payload format indicator"),
        ("00020153037045802VN", "Missing CRC"),
        ("0002016304ABCD5802VN", "Not a VND transaction"),
        ("000201630470400", "Not a Vietnam transaction"),
    ],
)
def test_coarse_validation_checks_in_order(payload, error):
    result = validate_vietqr(payload, strict=False)
    assert result.valid is False
    assert result.error == error


def test_coarse_validation_accepts_substring_matches():
    # substring probes only: no structure or CRC check
    result = validate_vietqr("0063704VN", strict=False)
    assert result.valid is True
    assert result.data is None


def test_validation_mode_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(settings, "strict_validation", False)
    assert validate_vietqr("0063704VN").valid is True
    monkeypatch.setattr(settings, "strict_validation", True)
    assert validate_vietqr("0063704VN").valid is False


@pytest.mark.parametrize("payload", ["000²01", "00020153٠٣704", "0002015303704570bPT202501001"])
def test_strict_validation_reports_bad_length_subfields(payload):
    result = validate_vietqr(payload, strict=True)
    assert result.valid is False
    assert result.error.startswith("Malformed payload:")


def test_decode_reads_hex_lengths_of_generated_payload():
    payload = generate_vietqr_string(TUITION)
    assert "570BPT202501001" in payload
    assert decode_vietqr(payload).bill_number == "PT202501001"


def test_decode_ignores_non_ascii_amount_digits():
    decoded = decode_vietqr("000201" + "5402²³" + "5303704")
    assert decoded.amount_units is None
