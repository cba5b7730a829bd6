"""
Utility functions for QR code generation and reading.

Includes bit list helpers and colour conversion.
"""

ANSI_RGB_MAP = {
    30: (0, 0, 0),
    31: (128, 0, 0),
    32: (0, 128, 0),
    33: (128, 128, 0),
    34: (0, 0, 128),
    35: (128, 0, 128),
    36: (0, 128, 128),
    37: (192, 192, 192),
    90: (128, 128, 128),
    91: (255, 0, 0),
    92: (0, 255, 0),
    93: (255, 255, 0),
    94: (0, 0, 255),
    95: (255, 0, 255),
    96: (0, 255, 255),
    97: (255, 255, 255),
}

NAMED_COLOURS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}


def int_to_bits(value: int, width: int) -> list[int]:
    """
    Convert an integer to a fixed-width list of bits, most significant first.

    @param value: Non-negative integer
    @param width: Number of bits
    @return: List of 0/1 values
    """
    if value < 0 or value >= 1 << width:
        raise ValueError(f"{value} does not fit in {width} bits")
    return [(value >> shift) & 1 for shift in range(width - 1, -1, -1)]


def bits_to_int(bits) -> int:
    """Read a list of bits, most significant first, as an integer."""
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def bytes_to_bits(data) -> list[int]:
    """
    Convert bytes to a continuous list of bits.

    @param data: Binary data to convert
    @return: List of 0/1 values, 8 per byte
    """
    bits = []
    for b in data:
        bits.extend(int_to_bits(b, 8))
    return bits


def bits_to_bytes(bits) -> bytes:
    """Pack a bit list into bytes. Trailing bits that do not fill a byte are dropped."""
    return bytes(bits_to_int(bits[i:i+8]) for i in range(0, len(bits) - 7, 8))


def ansi_to_rgb(ansi_code):
    """
    Converts ANSI escape code, numeric value, colour name or hex colour string to an RGB tuple value.

    @param ansi_code: The ANSI code or colour to convert
    @return: Tuple of (R, G, B) or None if conversion fails
    """
    if not ansi_code:
        return None
    if isinstance(ansi_code, tuple) and len(ansi_code) == 3:
        return ansi_code
    if isinstance(ansi_code, str) and ansi_code.startswith("#") and len(ansi_code) == 7:
        try:
            return tuple(int(ansi_code[i:i+2], 16) for i in (1, 3, 5))
        except ValueError:
            return None
    if isinstance(ansi_code, str) and ansi_code.lower() in NAMED_COLOURS:
        return NAMED_COLOURS[ansi_code.lower()]
    try:
        code = int(str(ansi_code).strip().replace('\033[', '').replace('m', ''))
    except ValueError:
        return None
    return ANSI_RGB_MAP.get(code)
