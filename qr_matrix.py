"""
QR code matrix construction.

Lays the function patterns on a version-sized grid, threads the data and
error correction bits through the remaining modules in zig-zag order under
a fixed mask, and writes the format information.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from qr_errors import StructuralOverwriteError
from qr_format import format_bits, format_positions
from qr_tables import (
    DEFAULT_LEVEL, FIXED_MASK_ID,
    alignment_coordinates, check_supported, symbol_size,
)
from qr_utils import int_to_bits

logger = logging.getLogger(__name__)

TIMING_INDEX = 6


class CellState(Enum):
    """Construction-time tag of a module."""
    FREE = 0
    STRUCTURAL = 1
    RESERVED = 2
    DATA = 3


MASKS = [
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
]


def mask_predicate(mask_id: int, r: int, c: int) -> bool:
    """
    Evaluate a mask pattern at a module.

    @param mask_id: Numeric identifier for mask pattern (0-7)
    @param r: Row index
    @param c: Column index
    @return: True if the module is flipped by the mask
    """
    return MASKS[mask_id](r, c)


def zigzag_positions(size: int):
    """
    Yield every module position in data placement order.

    The walk starts at the bottom-right module and moves up and down in
    two-column strides, skipping the vertical timing column.

    @param size: Number of modules per side
    """
    up = True
    col = size - 1
    while col > 0:
        if col == TIMING_INDEX:
            col -= 1
            continue
        rows = range(size - 1, -1, -1) if up else range(size)
        for r in rows:
            for c in (col, col - 1):
                yield r, c
        up = not up
        col -= 2


@dataclass(frozen=True)
class Symbol:
    """A finished QR code module grid (1 = dark, 0 = light)."""
    version: int
    level: str
    mask_id: int
    modules: tuple

    @property
    def size(self) -> int:
        return len(self.modules)

    def to_lists(self) -> list[list[int]]:
        return [list(row) for row in self.modules]


class MatrixBuilder:
    """
    Builds one QR code symbol.

    Owns the module grid and a parallel grid of CellState tags. Structural
    modules can never be overwritten once placed.

    Usage:
        builder = MatrixBuilder(version=1)
        symbol = builder.build(bits)
    """

    def __init__(self, version: int, level: str = DEFAULT_LEVEL, mask_id: int = FIXED_MASK_ID):
        check_supported(version)
        self.version = version
        self.level = level
        self.mask_id = mask_id
        self.size = symbol_size(version)
        self.modules = [[0] * self.size for _ in range(self.size)]
        self.state = [[CellState.FREE] * self.size for _ in range(self.size)]
        self._built = False

    def _place(self, r: int, c: int, value: int, state: CellState = CellState.STRUCTURAL):
        if self.state[r][c] is not CellState.FREE:
            raise StructuralOverwriteError(
                f"Module ({r}, {c}) already holds a {self.state[r][c].name.lower()} module")
        self.modules[r][c] = value
        self.state[r][c] = state

    def is_free(self, r: int, c: int) -> bool:
        return self.state[r][c] is CellState.FREE

    def place_finder_pattern(self, r: int, c: int):
        """
        Insert a 7x7 finder pattern and its separator.

        Finder patterns consist of concentric squares: dark 7x7, light 5x5,
        dark 3x3. The separator is the light ring around them.

        @param r: Top-left row coordinate
        @param c: Top-left column coordinate
        """
        for dr in range(-1, 8):
            for dc in range(-1, 8):
                nr, nc = r + dr, c + dc
                if 0 <= nr < self.size and 0 <= nc < self.size:
                    ring = max(abs(dr - 3), abs(dc - 3))
                    self._place(nr, nc, 1 if ring in (0, 1, 3) else 0)

    def place_alignment_pattern(self, r: int, c: int) -> bool:
        """
        Insert a 5x5 alignment pattern unless it would overlap a finder pattern.

        @param r: Centre row coordinate
        @param c: Centre column coordinate
        @return: True if the pattern was placed
        """
        cells = [(r + dr, c + dc) for dr in range(-2, 3) for dc in range(-2, 3)]
        if not all(0 <= nr < self.size and 0 <= nc < self.size and self.is_free(nr, nc)
                   for nr, nc in cells):
            return False
        for nr, nc in cells:
            self._place(nr, nc, 0 if max(abs(nr - r), abs(nc - c)) == 1 else 1)
        return True

    def place_timing_patterns(self):
        """Alternating strips on row 6 and column 6 between the finder patterns."""
        for i in range(8, self.size - 8):
            for (r, c) in [(TIMING_INDEX, i), (i, TIMING_INDEX)]:
                if self.is_free(r, c):
                    self._place(r, c, 1 if i % 2 == 0 else 0)

    def reserve_format_areas(self):
        top_left, split = format_positions(self.size)
        for r, c in top_left + split:
            self._place(r, c, 0, CellState.RESERVED)

    def apply_patterns(self):
        """
        Apply all function patterns to the matrix including:
        - Finder patterns and separators
        - Alignment patterns (version 2+)
        - Timing patterns
        - Dark module
        - Format information areas
        """
        size = self.size
        for (r, c) in [(0, 0), (0, size - 7), (size - 7, 0)]:
            self.place_finder_pattern(r, c)

        coords = alignment_coordinates(self.version)
        for r in coords:
            for c in coords:
                self.place_alignment_pattern(r, c)

        self.place_timing_patterns()
        self._place(4 * self.version + 9, 8, 1)
        self.reserve_format_areas()

    def map_data(self, bits):
        """
        Map data and error correction bits into the free modules using the zig-zag walk.

        Each bit is XORed with the mask before it is written. Modules left
        over once the bits run out hold a masked 0.

        @param bits: Combined data and error correction bits
        """
        bit_idx = 0
        for r, c in zigzag_positions(self.size):
            if not self.is_free(r, c):
                continue
            bit = bits[bit_idx] if bit_idx < len(bits) else 0
            bit_idx += 1
            self._place(r, c, bit ^ mask_predicate(self.mask_id, r, c), CellState.DATA)
        if bit_idx < len(bits):
            logger.warning("%d bits did not fit in the matrix", len(bits) - bit_idx)

    def place_format_info(self):
        """Write the format information word into both reserved strips."""
        word = format_bits(self.level, self.mask_id)
        logger.debug("Format information %s", format(word, "015b"))
        bits = int_to_bits(word, 15)
        for positions in format_positions(self.size):
            for bit, (r, c) in zip(bits, positions):
                self.modules[r][c] = bit

    def build(self, bits) -> Symbol:
        """
        Construct the symbol in a single pass.

        @param bits: Combined data and error correction bits
        @return: The finished Symbol
        """
        if self._built:
            raise RuntimeError("A MatrixBuilder builds exactly one symbol")
        self._built = True
        self.apply_patterns()
        self.map_data(bits)
        self.place_format_info()
        return self.to_symbol()

    def to_symbol(self) -> Symbol:
        """Freeze the current module values into a Symbol."""
        return Symbol(self.version, self.level, self.mask_id,
                      tuple(tuple(row) for row in self.modules))


def function_module_states(version: int) -> list[list[CellState]]:
    """
    Tag grid of a version with every function module placed and data cells FREE.

    @param version: QR code version
    @return: Grid of CellState values
    """
    builder = MatrixBuilder(version)
    builder.apply_patterns()
    return builder.state
