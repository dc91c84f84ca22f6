from vietqr_payload.crc import crc16_ccitt, crc_matches


def test_empty_input_returns_initial_register():
    assert crc16_ccitt("") == "FFFF"


def test_standard_check_vector():
    assert crc16_ccitt("123456789") == "29B1"


def test_output_is_four_uppercase_hex_digits():
    for sample in ("A", "000201", "VN", "6304"):
        crc = crc16_ccitt(sample)
        assert len(crc) == 4
        assert crc == crc.upper()
        int(crc, 16)


def test_str_input_is_hashed_as_utf8_bytes():
    text = "Học phí tháng 9"
    assert crc16_ccitt(text) == crc16_ccitt(text.encode("utf-8"))


def test_crc_matches_accepts_self_consistent_payload():
    body = "0002010102115303704" + "5802VN" + "6304"
    assert crc_matches(body + crc16_ccitt(body))


def test_crc_matches_rejects_tampered_payload():
    body = "0002010102115303704" + "5802VN" + "6304"
    crc = crc16_ccitt(body)
    tampered = body.replace("5802VN", "5802VM") + crc
    assert not crc_matches(tampered)


def test_crc_matches_requires_crc_field_marker():
    assert not crc_matches("000201")
    assert not crc_matches("0002015802VN1234")
