"""
Rendering of QR code symbols to images and to the console.
"""

import io
import logging

from PIL import Image, ImageDraw, ImageFont

from qr_utils import ansi_to_rgb

logger = logging.getLogger(__name__)


def _rows(symbol_or_matrix):
    return getattr(symbol_or_matrix, "modules", symbol_or_matrix)


def symbol_to_image(symbol, scale=10, border=4, fg_colour='', bg_colour='',
                    fg_char='██', bg_char='  ') -> Image.Image:
    """
    Write a symbol back into pixel form.

    @param symbol: Symbol or matrix of 0/1 values
    @param scale: Pixels per module
    @param border: Quiet zone width in modules
    @param fg_colour: Dark module colour (ANSI code, name or hex)
    @param bg_colour: Light module colour (ANSI code, name or hex)
    @param fg_char: Draw dark modules as this text instead of squares
    @param bg_char: Draw light modules as this text instead of squares
    @return: RGB Pillow image
    """
    m = _rows(symbol)
    size = len(m)
    is_rectangle = (fg_char == '██' and bg_char == '  ')

    fg_rgb = ansi_to_rgb(fg_colour) or (0, 0, 0)
    bg_rgb = ansi_to_rgb(bg_colour) or (255, 255, 255)

    offset = border * scale
    image_size = (size * scale + 2 * offset, size * scale + 2 * offset)

    img = Image.new("RGB", image_size, bg_rgb)
    draw = ImageDraw.Draw(img)

    for r in range(size):
        for c in range(size):
            x = c * scale + offset
            y = r * scale + offset
            if is_rectangle:
                if m[r][c]:
                    draw.rectangle([x, y, x + scale - 1, y + scale - 1], fill=fg_rgb)
            else:
                char = fg_char if m[r][c] else bg_char
                color = fg_rgb if m[r][c] else bg_rgb
                draw.text((x, y), char, fill=color, font=ImageFont.load_default())
    return img


def save_symbol(symbol, filename="qr_output.png", **options):
    """
    Save the QR code as a PNG image using Pillow.

    @param symbol: Symbol or matrix of 0/1 values
    @param filename: Name of the file or BytesIO object
    @param options: Rendering options passed to symbol_to_image
    """
    img = symbol_to_image(symbol, **options)
    if isinstance(filename, io.BytesIO):
        img.save(filename, format="PNG")
    else:
        img.save(filename)
    logger.info("QR code saved as %s", filename)


def print_matrix(symbol, fg_char='██', bg_char='  ',
                 fg_colour='', bg_colour='',
                 reset_colour='\033[0m',
                 frame=False, scale=1):
    """
    Render QR code matrix to console with optional formatting.

    @param symbol: Symbol or matrix of 0/1 values
    @param fg_char: Foreground character(s)
    @param bg_char: Background character(s)
    @param fg_colour: ANSI foreground colour code
    @param bg_colour: ANSI background colour code
    @param reset_colour: ANSI reset code
    @param frame: Add border around the QR code
    @param scale: Module scaling factor (1-3)
    """
    m = _rows(symbol)
    fg = f"{fg_colour}{fg_char * scale}"
    bg = f"{bg_colour}{bg_char * scale}"
    width = len(m[0]) * scale * len(fg_char)

    if frame:
        print('┌' + '─' * width + '┐')

    for row in m:
        line = ''.join(fg if v else bg for v in row)
        if fg_colour or bg_colour:
            line += reset_colour
        for _ in range(scale):
            if frame:
                print('│' + line + '│')
            else:
                print(line)

    if frame:
        print('└' + '─' * width + '┘')
