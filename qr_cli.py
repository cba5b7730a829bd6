# Import relevant libraries
import logging
import sys

from PIL import Image

from qr_codec import decode, encode
from qr_ecc import append_error_correction
from qr_encoder import encode_text
from qr_errors import QRError
from qr_image import print_matrix, save_symbol
from qr_matrix import MatrixBuilder, Symbol
from qr_tables import Mode
from qr_utils import bits_to_bytes


def explain_encoding(text: str, mode: Mode) -> Symbol:
    """
    Build a QR code while printing each intermediate step.

    @param text: Text to encode
    @param mode: Encoding mode
    @return: The finished Symbol
    """
    # Step 1. Convert the input text to a QR data bitstream.
    version, bitstream = encode_text(text, mode)
    print(f"Using Version {version} QR Code!")
    print("\nStep 1: Data bitstream.")
    print(''.join(map(str, bitstream)))
    input("Press Enter to continue...")

    # Step 2. Split the bitstream into data codewords (bytes).
    print("\nStep 2: Data codewords (bytes).")
    print(list(bits_to_bytes(bitstream)))
    input("Press Enter to continue...")

    # Step 3. Generate error correction codewords.
    full = append_error_correction(bitstream, version)
    print("\nStep 3: Error correction codewords.")
    print(list(bits_to_bytes(full[len(bitstream):])))
    input("Press Enter to continue...")

    # Step 4. Function patterns (finder, timing, etc).
    builder = MatrixBuilder(version)
    builder.apply_patterns()
    print("\nStep 4: Function patterns (finder, timing, etc).")
    print_matrix(builder.modules)
    input("Press Enter to continue...")

    # Step 5. Place the data and error correction bits under the mask.
    builder.map_data(full)
    print(f"\nStep 5: Data mapped under mask {builder.mask_id}.")
    print_matrix(builder.modules)
    input("Press Enter to continue...")

    # Step 6. Write the format information.
    builder.place_format_info()
    print("\nStep 6: Format information.")
    print_matrix(builder.modules)
    input("Press Enter to continue...")

    return builder.to_symbol()


def encode_main():
    text = input("Enter text to encode: ")

    # Ask the user if they want to see the process of the QR's creation.
    explain = input("Would you like to see the step-by-step of the QR code's creation? (y/n): ").strip().lower() == 'y'
    mode = Mode.BYTE if input("Use byte mode instead of alphanumeric? (y/n): ").strip().lower() == 'y' else Mode.ALPHANUMERIC

    # Allow for customisation of the QR code.
    customise = input("Would you like to customise how the QR code is displayed? (y/n): ").strip().lower() == 'y'
    if customise:
        # Option to Scale the QR code by 1-3x.
        scale = int(input("Would you like to scale the QR code? (1-3x): ") or "1")

        # Opton to add a frame to the QR code.
        frame = input("Would you like to add a frame? (y/n): ").strip().lower() == 'y'

        # Option to set background and foreground colours.
        user_fg_colour = input("Foreground colour ANSI code (e.g, [37m for White): ")
        fg_colour = '\033' + user_fg_colour if user_fg_colour else ''
        user_bg_colour = input("Background colour ANSI code (e.g, [97m for Black): ")
        bg_colour = '\033' + user_bg_colour if user_bg_colour else ''

        # Option to change the characters used for the modules.
        char = input("Would you like to change the characters of the modules in the QR code? (y/n): ").strip().lower() == 'y'
        if char:
            fg_char = input("Enter the foreground character (e.g, # or []): ") or "██"
            bg_char = input("Enter the background character (e.g. _ or SPACE): ") or "  "
        else:
            fg_char = '██'
            bg_char = '  '
    else:
        # Use default values.
        scale = 1
        frame = False
        fg_colour = ''
        bg_colour = ''
        fg_char = '██'
        bg_char = '  '

    try:
        if explain:
            symbol = explain_encoding(text, mode)
        else:
            symbol = encode(text, mode)
    except QRError as e:
        print(f"Could not encode the text: {e}")
        return

    print(f"\nVersion {symbol.version}, level {symbol.level}, mask {symbol.mask_id}")
    print_matrix(symbol, fg_char=fg_char, bg_char=bg_char,
                 fg_colour=fg_colour, bg_colour=bg_colour, frame=frame, scale=scale)

    # Save the QR code as an image.
    filename = input("File to save the QR code to (default qr_output.png): ").strip() or "qr_output.png"
    save_symbol(symbol, filename, fg_colour=fg_colour, bg_colour=bg_colour,
                fg_char=fg_char, bg_char=bg_char)
    print(f"\nQR code saved as: {filename}!")


def decode_main():
    path = input("Image file to read: ").strip()
    try:
        img = Image.open(path)
    except OSError as e:
        print(f"Could not open image: {e}")
        return

    try:
        text = decode(img)
    except QRError as e:
        print(f"A QR code was found but could not be read: {e}")
        return

    if text is None:
        print("No QR code found in image")
    else:
        print(f"Decoded text: {text}")


def main():
    """
    Main entry point for the QR code program.

    Asks whether to create a QR code from text or to read one from an
    image file, then runs that workflow.
    """
    logging.basicConfig(
        level=logging.DEBUG if "-v" in sys.argv[1:] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    choice = input("Encode text or decode an image? (e/d): ").strip().lower()
    if choice.startswith('d'):
        decode_main()
    else:
        encode_main()


if __name__ == '__main__':
    main()
