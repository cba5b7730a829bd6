"""
Entry points of the QR code codec.

    symbol = encode("HELLO WORLD")
    image = symbol_to_image(symbol)
    text = decode(image)   # None if the image holds no QR code
"""

import logging

from PIL import Image

from qr_decoder import decode_bitstream
from qr_ecc import append_error_correction
from qr_encoder import encode_text
from qr_localizer import locate_symbol
from qr_matrix import MatrixBuilder, Symbol
from qr_reader import read_data_bits
from qr_tables import DEFAULT_LEVEL, FIXED_MASK_ID, Mode

logger = logging.getLogger(__name__)


def encode(text: str, mode: Mode = Mode.ALPHANUMERIC) -> Symbol:
    """
    Build the QR code symbol for a text.

    @param text: Text to encode
    @param mode: Mode.ALPHANUMERIC (default) or Mode.BYTE
    @return: The finished Symbol
    """
    version, bits = encode_text(text, mode, DEFAULT_LEVEL)
    full = append_error_correction(bits, version)
    return MatrixBuilder(version, DEFAULT_LEVEL, FIXED_MASK_ID).build(full)


def decode_matrix(modules) -> str:
    """
    Decode an already sampled module matrix.

    @param modules: Square matrix of 0/1 values
    @return: The decoded text
    """
    result = read_data_bits(modules)
    return decode_bitstream(result.bits, result.version)


def decode(raster: Image.Image):
    """
    Find and decode the QR code in an image.

    @param raster: Any Pillow image
    @return: The decoded text, or None when no QR code is found
    """
    located = locate_symbol(raster)
    if located is None:
        return None
    return decode_matrix(located.modules)
