import pytest

from qr_codec import decode_matrix, encode
from qr_decoder import decode_bitstream, decode_char
from qr_ecc import append_error_correction, correct_message
from qr_encoder import encode_text
from qr_errors import UncorrectableError, UnsupportedModeError
from qr_reader import read_data_bits, read_format
from qr_tables import Mode
from qr_utils import int_to_bits


def stream_for(text, mode=Mode.ALPHANUMERIC):
    version, bits = encode_text(text, mode)
    return version, append_error_correction(bits, version)


def flip(bits, start, count):
    bits = list(bits)
    for i in range(start, start + count):
        bits[i] ^= 1
    return bits


def test_decode_char():
    assert decode_char(0) == '0'
    assert decode_char(10) == 'A'
    assert decode_char(44) == ':'
    with pytest.raises(UncorrectableError):
        decode_char(45)


@pytest.mark.parametrize("text", ["", "A", "AB", "HELLO WORLD", "$%*+-./: 0123456789", "X" * 154])
def test_alphanumeric_stream_round_trip(text):
    version, bits = stream_for(text)
    assert decode_bitstream(bits, version) == text


def test_byte_stream_round_trip():
    version, bits = stream_for("Grüße, world!", Mode.BYTE)
    assert decode_bitstream(bits, version) == "Grüße, world!"


def test_corrected_stream():
    version, bits = stream_for("HELLO WORLD")
    # three damaged codewords, the most seven correction bytes can repair
    damaged = flip(flip(flip(bits, 0, 8), 40, 3), 96, 5)
    assert decode_bitstream(damaged, version) == "HELLO WORLD"


def test_uncorrectable_stream():
    version, bits = stream_for("HELLO WORLD")
    with pytest.raises(UncorrectableError):
        decode_bitstream(flip(bits, 0, 80), version)


def test_correct_message_checks_ecc_length():
    version, bits = stream_for("HELLO WORLD")
    with pytest.raises(UncorrectableError):
        correct_message(bits[:152], bits[152:200], version)


def test_unsupported_mode():
    bits = [0, 0, 0, 1] + int_to_bits(3, 10) + [0] * 138
    full = append_error_correction(bits, 1)
    with pytest.raises(UnsupportedModeError):
        decode_bitstream(full, 1)


def test_version_too_large():
    with pytest.raises(UnsupportedModeError):
        decode_bitstream([0] * 100, 10)


def test_count_past_end_of_data():
    # alphanumeric header claiming 500 characters
    bits = [0, 0, 1, 0] + int_to_bits(500, 9) + [0] * 139
    full = append_error_correction(bits, 1)
    with pytest.raises(UncorrectableError):
        decode_bitstream(full, 1)


def test_read_data_bits_recovers_stream():
    version, bits = encode_text("HELLO WORLD")
    symbol = encode("HELLO WORLD")
    result = read_data_bits(symbol.modules)
    assert (result.version, result.level, result.mask_id) == (1, 'L', 0)
    assert result.bits[:152] == bits
    assert len(result.bits) == 208


def test_read_format_falls_back_to_second_copy():
    m = encode("HELLO WORLD").to_lists()
    # four adjacent flips leave the word at least 4 bits from every valid word
    for c in range(4):
        m[8][c] ^= 1
    assert read_format(m) == ('L', 0)


def test_hello_world_matrix_decodes():
    assert decode_matrix(encode("HELLO WORLD").modules) == "HELLO WORLD"


@pytest.mark.parametrize("text", ["A", "HELLO WORLD", "THE QUICK BROWN FOX", "Z" * 25, "Q" * 60, "R" * 154])
def test_symbol_round_trip(text):
    assert decode_matrix(encode(text).modules) == text


def test_damaged_matrix_still_decodes():
    m = encode("HELLO WORLD").to_lists()
    m[20][20] ^= 1
    m[10][10] ^= 1
    assert decode_matrix(m) == "HELLO WORLD"


def test_non_square_matrix():
    m = encode("HELLO WORLD").to_lists()
    m[0] = m[0][:-1]
    with pytest.raises(UnsupportedModeError):
        decode_matrix(m)


def test_invalid_side_length():
    with pytest.raises(UnsupportedModeError):
        decode_matrix([[0] * 22 for _ in range(22)])
