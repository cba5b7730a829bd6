"""
Turns a raw QR bit stream back into text.
"""

from qr_ecc import correct_message
from qr_encoder import ALPHANUMERIC_CHARSET
from qr_errors import UncorrectableError, UnsupportedModeError
from qr_tables import COUNT_BITS, Mode, data_bit_length, ecc_byte_count
from qr_utils import bits_to_int, bytes_to_bits

# Character count fields are only defined here for versions 1-9
MAX_COUNT_VERSION = 9


def decode_char(code: int) -> str:
    """
    Get the character for a value of the 45-symbol alphanumeric alphabet.

    @param code: Value between 0 and 44
    @return: The character
    """
    if not 0 <= code < len(ALPHANUMERIC_CHARSET):
        raise UncorrectableError(f"{code} is not an alphanumeric character value")
    return ALPHANUMERIC_CHARSET[code]


def _take(bits, pos: int, width: int):
    if pos + width > len(bits):
        raise UncorrectableError("The character count runs past the end of the data")
    return bits_to_int(bits[pos:pos + width]), pos + width


def decode_bitstream(bits, version: int) -> str:
    """
    Decode the text held by a raw bit stream.

    The stream is split into its message and correction regions, repaired
    with Reed-Solomon, then read according to its mode indicator.

    @param bits: Raw bit stream read from the matrix
    @param version: QR code version
    @return: The decoded text
    """
    if version > MAX_COUNT_VERSION:
        raise UnsupportedModeError(f"Version {version} is too large")
    message_len = data_bit_length(version)
    ecc_len = ecc_byte_count(version) * 8
    message = correct_message(bits[:message_len], bits[message_len:message_len + ecc_len], version)
    message_bits = bytes_to_bits(message)

    mode_value, pos = _take(message_bits, 0, 4)
    try:
        mode = Mode(mode_value)
    except ValueError:
        raise UnsupportedModeError(f"Mode not accepted: {mode_value:04b}") from None
    count, pos = _take(message_bits, pos, COUNT_BITS[mode])

    if mode == Mode.BYTE:
        data = bytearray()
        for _ in range(count):
            value, pos = _take(message_bits, pos, 8)
            data.append(value)
        return data.decode('iso-8859-1')

    result = []
    for _ in range(count // 2):
        code, pos = _take(message_bits, pos, 11)
        result.append(decode_char(code // 45))
        result.append(decode_char(code % 45))
    if count % 2:
        code, pos = _take(message_bits, pos, 6)
        result.append(decode_char(code))
    return ''.join(result)
