import pytest

from qr_encoder import encode_char, encode_content, encode_text, make_data_bitstream, prepare_content
from qr_errors import InvalidContentError
from qr_tables import MAX_VERSION, Mode, capacity, data_bit_length, smallest_version
from qr_utils import bits_to_bytes, bits_to_int


def test_encode_char_alphabet():
    assert encode_char('0') == 0
    assert encode_char('9') == 9
    assert encode_char('A') == 10
    assert encode_char('Z') == 35
    assert encode_char(' ') == 36
    assert encode_char(':') == 44


def test_encode_char_rejects_lowercase():
    with pytest.raises(InvalidContentError):
        encode_char('a')


def test_encode_content_pairs_and_odd_character():
    bits = encode_content("HE")
    assert len(bits) == 11
    assert bits_to_int(bits) == 17 * 45 + 14

    bits = encode_content("HEL")
    assert len(bits) == 17
    assert bits_to_int(bits[11:]) == 21


def test_hello_world_bitstream():
    version, bits = encode_text("HELLO WORLD")
    assert version == 1
    assert len(bits) == data_bit_length(1) == 152
    assert bits_to_int(bits[:4]) == 0b0010
    assert bits_to_int(bits[4:13]) == 11
    assert bits_to_int(bits[13:24]) == 779
    # 74 data bits + 4 terminator bits + 2 fill bits, then pad bytes
    assert bits_to_bytes(bits)[10:] == bytes([0xEC, 0x11] * 4 + [0xEC])


def test_lowercase_is_uppercased():
    assert encode_text("hello world") == encode_text("HELLO WORLD")


def test_invalid_character_raises():
    with pytest.raises(InvalidContentError):
        encode_text("HELLO WORLD!")


def test_smallest_version_is_selected():
    assert encode_text("A" * 25)[0] == 1
    assert encode_text("A" * 26)[0] == 2
    assert encode_text("A" * 47)[0] == 2
    assert encode_text("A" * 48)[0] == 3
    assert encode_text("A" * 154)[0] == 5


def test_over_length_content_is_truncated():
    limit = capacity(MAX_VERSION)
    assert prepare_content("A" * (limit + 20)) == "A" * limit
    version, bits = encode_text("A" * (limit + 20))
    assert version == MAX_VERSION
    assert bits_to_int(bits[4:13]) == limit


def test_stream_length_matches_every_version():
    for version in range(1, MAX_VERSION + 1):
        bits = make_data_bitstream("AB", version)
        assert len(bits) == data_bit_length(version)


def test_stream_too_long_for_version_raises():
    with pytest.raises(InvalidContentError):
        make_data_bitstream("A" * 30, 1)


def test_byte_mode_stream():
    version, bits = encode_text("hello!", Mode.BYTE)
    assert version == 1
    assert bits_to_int(bits[:4]) == 0b0100
    assert bits_to_int(bits[4:12]) == 6
    assert bits_to_bytes(bits[12:60]) == b"hello!"


def test_byte_mode_rejects_non_latin1():
    with pytest.raises(InvalidContentError):
        encode_text("€", Mode.BYTE)


def test_capacity_is_non_decreasing():
    for mode in Mode:
        capacities = [capacity(v, 'L', mode) for v in range(1, 10)]
        assert capacities == sorted(capacities)


def test_smallest_version_none_when_too_long():
    assert smallest_version(capacity(MAX_VERSION) + 1) is None
