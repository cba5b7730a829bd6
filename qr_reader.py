"""
Reads the raw bit stream back out of a sampled QR code matrix.
"""

import logging
from dataclasses import dataclass

from qr_errors import UncorrectableError, UnsupportedModeError
from qr_format import decode_format, format_positions
from qr_matrix import CellState, function_module_states, mask_predicate, zigzag_positions
from qr_tables import check_supported, version_for_size
from qr_utils import bits_to_int

logger = logging.getLogger(__name__)


@dataclass
class ReadResult:
    version: int
    level: str
    mask_id: int
    bits: list


def read_format(modules):
    """
    Get the error correction level and mask id of a matrix.

    The top-left strip is read first; the split copy next to the other two
    finder patterns is used when the first one cannot be decoded.

    @param modules: Square matrix of 0/1 values
    @return: Tuple of (level, mask_id)
    """
    error = None
    for positions in format_positions(len(modules)):
        word = bits_to_int(modules[r][c] for r, c in positions)
        try:
            return decode_format(word)
        except UncorrectableError as e:
            error = e
    raise error


def read_data_bits(modules) -> ReadResult:
    """
    Replay the zig-zag walk over a matrix and collect the unmasked data bits.

    @param modules: Square matrix of 0/1 values
    @return: ReadResult with the version, format and raw bit stream
    """
    size = len(modules)
    if any(len(row) != size for row in modules):
        raise UnsupportedModeError("The module matrix is not square")
    version = version_for_size(size)
    check_supported(version)

    level, mask_id = read_format(modules)
    logger.debug("Version %d, level %s, mask %d", version, level, mask_id)

    state = function_module_states(version)
    bits = [
        modules[r][c] ^ mask_predicate(mask_id, r, c)
        for r, c in zigzag_positions(size)
        if state[r][c] is CellState.FREE
    ]
    return ReadResult(version, level, mask_id, bits)
