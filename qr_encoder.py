"""
Data encoding for QR codes.

Turns text into the pre-error-correction bit stream: mode indicator,
character count, encoded data, terminator and pad bytes.
"""

import logging

from qr_errors import InvalidContentError
from qr_tables import (
    COUNT_BITS, DEFAULT_LEVEL, MAX_VERSION, Mode,
    capacity, data_bit_length, smallest_version,
)
from qr_utils import bytes_to_bits, int_to_bits

logger = logging.getLogger(__name__)

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

PAD_BYTES = ([1, 1, 1, 0, 1, 1, 0, 0], [0, 0, 0, 1, 0, 0, 0, 1])


def encode_char(character: str) -> int:
    """
    Get the value of a character in the 45-symbol alphanumeric alphabet.

    @param character: A single character
    @return: Value between 0 and 44
    """
    value = ALPHANUMERIC_CHARSET.find(character)
    if value < 0 or len(character) != 1:
        raise InvalidContentError(f"{character!r} is not an alphanumeric QR character")
    return value


def encode_content(content: str) -> list[int]:
    """
    Encode alphanumeric text two characters at a time.

    Each pair becomes an 11-bit value c1*45 + c2; a trailing odd
    character is encoded alone in 6 bits.

    @param content: Validated alphanumeric text
    @return: Encoded data bits
    """
    bits = []
    for i in range(0, len(content) - 1, 2):
        bits.extend(int_to_bits(encode_char(content[i]) * 45 + encode_char(content[i + 1]), 11))
    if len(content) % 2:
        bits.extend(int_to_bits(encode_char(content[-1]), 6))
    return bits


def prepare_content(text: str, mode: Mode = Mode.ALPHANUMERIC, level: str = DEFAULT_LEVEL) -> str:
    """
    Normalise and validate text before encoding.

    Alphanumeric content is upper-cased. Content longer than the largest
    supported version can hold is truncated.

    @param text: Input text
    @param mode: Encoding mode
    @return: Text ready for make_data_bitstream
    """
    if mode == Mode.ALPHANUMERIC:
        text = text.upper()
        bad = sorted({c for c in text if c not in ALPHANUMERIC_CHARSET})
        if bad:
            raise InvalidContentError(f"The text is not alphanumeric: {''.join(bad)!r}")
    else:
        try:
            text.encode('iso-8859-1')
        except UnicodeEncodeError as e:
            raise InvalidContentError(f"The text cannot be encoded in byte mode: {e}") from e

    limit = capacity(MAX_VERSION, level, mode)
    if len(text) > limit:
        logger.warning("Content of %d characters truncated to %d", len(text), limit)
        text = text[:limit]
    return text


def make_data_bitstream(text: str, version: int, mode: Mode = Mode.ALPHANUMERIC) -> list[int]:
    """
    Construct the complete data bitstream for QR encoding following ISO/IEC 18004 specifications.

    Includes mode indicator, length header, data payload, terminator, and padding bits.

    @param text: Validated text to encode
    @param version: QR code version
    @param mode: Encoding mode
    @return: Bit list whose length equals the version's data bit length
    """
    max_bits = data_bit_length(version)
    bitstream = int_to_bits(int(mode), 4) + int_to_bits(len(text), COUNT_BITS[mode])
    if mode == Mode.ALPHANUMERIC:
        bitstream += encode_content(text)
    else:
        bitstream += bytes_to_bits(text.encode('iso-8859-1'))
    if len(bitstream) > max_bits:
        raise InvalidContentError(f"{len(text)} characters do not fit in a version {version} QR code")

    # Terminator
    bitstream += [0] * min(4, max_bits - len(bitstream))
    bitstream += [0] * (-len(bitstream) % 8)
    i = 0
    while len(bitstream) < max_bits:
        bitstream += PAD_BYTES[i % 2]
        i += 1
    return bitstream


def encode_text(text: str, mode: Mode = Mode.ALPHANUMERIC, level: str = DEFAULT_LEVEL):
    """
    Choose the version and build the data bitstream for a text.

    @param text: Input text
    @param mode: Encoding mode
    @return: Tuple of (version, bitstream)
    """
    text = prepare_content(text, mode, level)
    version = smallest_version(len(text), level, mode)
    logger.debug("Encoding %d characters as version %d", len(text), version)
    return version, make_data_bitstream(text, version, mode)
