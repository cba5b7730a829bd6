"""
Bridge between QR bit streams and the reedsolo Reed-Solomon codec.
"""

import logging

import reedsolo

from qr_errors import UncorrectableError
from qr_tables import ecc_byte_count
from qr_utils import bits_to_bytes, bytes_to_bits

logger = logging.getLogger(__name__)


def generate_error_correction(data_cw: bytes, version: int) -> list[int]:
    """
    Generate Reed-Solomon error correction codewords for the input data.

    @param data_cw: Data codewords
    @param version: QR code version determining error correction capacity
    @return: List of error correction codewords
    """
    ec_cw = ecc_byte_count(version)
    rs = reedsolo.RSCodec(ec_cw)
    full = rs.encode(bytes(data_cw))
    return list(full[-ec_cw:])


def append_error_correction(bits: list[int], version: int) -> list[int]:
    """
    Append the correction codewords to a finished data bit stream.

    @param bits: Data bit stream, a whole number of bytes
    @param version: QR code version
    @return: Data bits followed by correction bits
    """
    ec_cw = generate_error_correction(bits_to_bytes(bits), version)
    return bits + bytes_to_bits(ec_cw)


def correct_message(message_bits: list[int], ecc_bits: list[int], version: int) -> bytes:
    """
    Ask the codec to repair the message region using the correction region.

    @param message_bits: Data region of a read bit stream
    @param ecc_bits: Correction region of a read bit stream
    @param version: QR code version
    @return: Corrected data codewords
    """
    ec_cw = ecc_byte_count(version)
    ecc = bits_to_bytes(ecc_bits)
    if len(ecc) != ec_cw:
        raise UncorrectableError(f"Expected {ec_cw} correction bytes, read {len(ecc)}")
    rs = reedsolo.RSCodec(ec_cw)
    try:
        decoded, _, errata = rs.decode(bits_to_bytes(message_bits) + ecc)
    except reedsolo.ReedSolomonError as e:
        raise UncorrectableError(f"Too many errors to correct: {e}") from e
    if errata:
        logger.debug("Corrected %d codewords", len(errata))
    return bytes(decoded)
