"""
Format information: error correction level and mask id, protected by a
(15, 5) BCH code and XORed with a fixed mask.
"""

from qr_errors import UncorrectableError
from qr_tables import LEVEL_BITS

FORMAT_GENERATOR = 0b10100110111
FORMAT_MASK = 0b101010000010010

# Most damaged bits a format word can have and still be read
MAX_FORMAT_ERRORS = 3


def bch_remainder(data: int) -> int:
    """
    10-bit remainder of the 5 format data bits, by GF(2) long division.

    @param data: Level code (2 bits) followed by mask id (3 bits)
    @return: Remainder of at most 10 bits
    """
    remainder = data << 10
    while remainder.bit_length() > 10:
        remainder ^= FORMAT_GENERATOR << (remainder.bit_length() - FORMAT_GENERATOR.bit_length())
    return remainder


def format_bits(level: str, mask_id: int) -> int:
    """
    Compute the 15-bit format information word.

    @param level: Error correction level ('L', 'M', 'Q' or 'H')
    @param mask_id: Numeric identifier for mask pattern (0-7)
    @return: Masked format word, bit 14 placed first
    """
    data = (LEVEL_BITS[level] << 3) | mask_id
    return ((data << 10) | bch_remainder(data)) ^ FORMAT_MASK


# All 32 valid words, used to read a damaged strip
VALID_FORMATS = {
    format_bits(level, mask_id): (level, mask_id)
    for level in LEVEL_BITS for mask_id in range(8)
}


def format_positions(size: int):
    """
    Module positions of the two format information copies, in bit order.

    @param size: Number of modules per side
    @return: Tuple (top-left strip, split bottom-left/top-right strip)
    """
    top_left = [*((8, i) for i in range(0, 6)), (8, 7), (8, 8), (7, 8), *((i, 8) for i in range(5, -1, -1))]
    split = [*((size - 1 - i, 8) for i in range(0, 7)), *((8, size - 8 + i) for i in range(0, 8))]
    return top_left, split


def decode_format(word: int):
    """
    Recover the error correction level and mask id from a format word.

    The nearest valid word is used, so up to MAX_FORMAT_ERRORS damaged
    bits are tolerated.

    @param word: 15-bit word as read from the symbol
    @return: Tuple of (level, mask_id)
    """
    best = min(VALID_FORMATS, key=lambda valid: bin(valid ^ word).count("1"))
    if bin(best ^ word).count("1") > MAX_FORMAT_ERRORS:
        raise UncorrectableError(f"Unreadable format information {word:015b}")
    return VALID_FORMATS[best]
