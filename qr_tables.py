"""
QR code configuration tables.

Per-version layout and capacity data for versions 1-9. Only versions up to
MAX_VERSION can be built or read: beyond it a symbol needs several
Reed-Solomon blocks or a version information area.
"""

from enum import IntEnum

from qr_errors import UnsupportedModeError


class Mode(IntEnum):
    """Mode indicators (4 bits) supported by the codec."""
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100


# Character count field width for versions 1-9
COUNT_BITS = {
    Mode.ALPHANUMERIC: 9,
    Mode.BYTE: 8,
}

# Error correction level -> 2-bit code used in the format information
LEVEL_BITS = {'L': 0b01, 'M': 0b00, 'Q': 0b11, 'H': 0b10}

DEFAULT_LEVEL = 'L'
FIXED_MASK_ID = 0

MIN_VERSION = 1
MAX_VERSION = 5

# Parameters at error correction level L
VERSION_PARAMETERS = {
    1: {"size": 21, "data_codewords": 19, "ec_codewords": 7, "alignment": ()},
    2: {"size": 25, "data_codewords": 34, "ec_codewords": 10, "alignment": (6, 18)},
    3: {"size": 29, "data_codewords": 55, "ec_codewords": 15, "alignment": (6, 22)},
    4: {"size": 33, "data_codewords": 80, "ec_codewords": 20, "alignment": (6, 26)},
    5: {"size": 37, "data_codewords": 108, "ec_codewords": 26, "alignment": (6, 30)},
    6: {"size": 41, "data_codewords": 136, "ec_codewords": 18, "alignment": (6, 34)},
    7: {"size": 45, "data_codewords": 156, "ec_codewords": 20, "alignment": (6, 22, 38)},
    8: {"size": 49, "data_codewords": 194, "ec_codewords": 24, "alignment": (6, 24, 42)},
    9: {"size": 53, "data_codewords": 232, "ec_codewords": 30, "alignment": (6, 26, 46)},
}

# Character capacity by version, then level, then mode
CAPACITIES = {
    1: {'L': {Mode.ALPHANUMERIC: 25, Mode.BYTE: 17}, 'M': {Mode.ALPHANUMERIC: 20, Mode.BYTE: 14},
        'Q': {Mode.ALPHANUMERIC: 16, Mode.BYTE: 11}, 'H': {Mode.ALPHANUMERIC: 10, Mode.BYTE: 7}},
    2: {'L': {Mode.ALPHANUMERIC: 47, Mode.BYTE: 32}, 'M': {Mode.ALPHANUMERIC: 38, Mode.BYTE: 26},
        'Q': {Mode.ALPHANUMERIC: 29, Mode.BYTE: 20}, 'H': {Mode.ALPHANUMERIC: 20, Mode.BYTE: 14}},
    3: {'L': {Mode.ALPHANUMERIC: 77, Mode.BYTE: 53}, 'M': {Mode.ALPHANUMERIC: 61, Mode.BYTE: 42},
        'Q': {Mode.ALPHANUMERIC: 47, Mode.BYTE: 32}, 'H': {Mode.ALPHANUMERIC: 35, Mode.BYTE: 24}},
    4: {'L': {Mode.ALPHANUMERIC: 114, Mode.BYTE: 78}, 'M': {Mode.ALPHANUMERIC: 90, Mode.BYTE: 62},
        'Q': {Mode.ALPHANUMERIC: 67, Mode.BYTE: 46}, 'H': {Mode.ALPHANUMERIC: 50, Mode.BYTE: 34}},
    5: {'L': {Mode.ALPHANUMERIC: 154, Mode.BYTE: 106}, 'M': {Mode.ALPHANUMERIC: 122, Mode.BYTE: 84},
        'Q': {Mode.ALPHANUMERIC: 87, Mode.BYTE: 60}, 'H': {Mode.ALPHANUMERIC: 64, Mode.BYTE: 44}},
    6: {'L': {Mode.ALPHANUMERIC: 195, Mode.BYTE: 134}, 'M': {Mode.ALPHANUMERIC: 154, Mode.BYTE: 106},
        'Q': {Mode.ALPHANUMERIC: 108, Mode.BYTE: 74}, 'H': {Mode.ALPHANUMERIC: 84, Mode.BYTE: 58}},
    7: {'L': {Mode.ALPHANUMERIC: 224, Mode.BYTE: 154}, 'M': {Mode.ALPHANUMERIC: 178, Mode.BYTE: 122},
        'Q': {Mode.ALPHANUMERIC: 125, Mode.BYTE: 86}, 'H': {Mode.ALPHANUMERIC: 93, Mode.BYTE: 64}},
    8: {'L': {Mode.ALPHANUMERIC: 279, Mode.BYTE: 192}, 'M': {Mode.ALPHANUMERIC: 221, Mode.BYTE: 152},
        'Q': {Mode.ALPHANUMERIC: 157, Mode.BYTE: 108}, 'H': {Mode.ALPHANUMERIC: 122, Mode.BYTE: 84}},
    9: {'L': {Mode.ALPHANUMERIC: 335, Mode.BYTE: 230}, 'M': {Mode.ALPHANUMERIC: 262, Mode.BYTE: 180},
        'Q': {Mode.ALPHANUMERIC: 189, Mode.BYTE: 130}, 'H': {Mode.ALPHANUMERIC: 143, Mode.BYTE: 98}},
}


def _parameters(version: int) -> dict:
    try:
        return VERSION_PARAMETERS[version]
    except KeyError:
        raise UnsupportedModeError(f"Version {version} is outside the supported tables") from None


def capacity(version: int, level: str = DEFAULT_LEVEL, mode: Mode = Mode.ALPHANUMERIC) -> int:
    """
    Number of characters a symbol can hold.

    @param version: QR code version
    @param level: Error correction level ('L', 'M', 'Q' or 'H')
    @param mode: Encoding mode
    @return: Character capacity
    """
    _parameters(version)
    return CAPACITIES[version][level][Mode(mode)]


def alignment_coordinates(version: int) -> tuple:
    """Ordered alignment pattern centre coordinates for a version."""
    return _parameters(version)["alignment"]


def ecc_byte_count(version: int) -> int:
    """Number of Reed-Solomon correction bytes (level L, single block)."""
    return _parameters(version)["ec_codewords"]


def data_bit_length(version: int) -> int:
    """Declared length of the pre-ECC bit stream."""
    return _parameters(version)["data_codewords"] * 8


def symbol_size(version: int) -> int:
    return 21 + 4 * (version - 1)


def version_for_size(size: int) -> int:
    """
    Recover the version from the side length of a module matrix.

    @param size: Number of modules per side
    @return: QR code version
    """
    if size < 21 or (size - 21) % 4:
        raise UnsupportedModeError(f"{size} modules is not a valid QR code side length")
    version = (size - 21) // 4 + 1
    _parameters(version)
    return version


def check_supported(version: int):
    """Reject versions the builder and reader cannot lay out."""
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise UnsupportedModeError(
            f"Version {version} is not supported (versions {MIN_VERSION}-{MAX_VERSION} only)")


def smallest_version(length: int, level: str = DEFAULT_LEVEL, mode: Mode = Mode.ALPHANUMERIC):
    """
    Find the smallest supported version able to hold the content.

    @param length: Number of characters to encode
    @return: Version number, or None if no supported version is large enough
    """
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if capacity(version, level, mode) >= length:
            return version
    return None
