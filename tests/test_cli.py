import pytest
from PIL import Image

import qr_cli
from qr_codec import decode, encode
from qr_image import print_matrix, symbol_to_image
from qr_tables import Mode


@pytest.fixture
def answers(monkeypatch):
    """Feed a fixed list of replies to input(); empty replies once it runs out."""
    replies = []

    def fake_input(prompt=""):
        return replies.pop(0) if replies else ""

    monkeypatch.setattr("builtins.input", fake_input)
    return replies


def test_explain_encoding_returns_encoded_symbol(answers, capsys):
    symbol = qr_cli.explain_encoding("HELLO WORLD", Mode.ALPHANUMERIC)
    assert symbol == encode("HELLO WORLD")

    out = capsys.readouterr().out
    for step in ("Step 4: Function patterns", "Step 5: Data mapped under mask 0", "Step 6: Format information"):
        assert step in out


def test_explain_encoding_byte_mode(answers, capsys):
    assert qr_cli.explain_encoding("hello", Mode.BYTE) == encode("hello", Mode.BYTE)


def test_print_matrix_with_custom_characters(capsys):
    symbol = encode("HELLO WORLD")
    print_matrix(symbol, fg_char='#', bg_char='.')
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 21
    assert lines[0].startswith('#######.')
    assert all(len(line) == 21 for line in lines)


def test_text_rendering_differs_from_squares():
    symbol = encode("HELLO WORLD")
    squares = symbol_to_image(symbol, scale=10)
    text = symbol_to_image(symbol, scale=10, fg_char='#', bg_char=' ')
    assert text.size == squares.size == (290, 290)
    assert text.tobytes() != squares.tobytes()
    # glyphs leave some dark pixels inside a dark module
    assert any(
        text.getpixel((40 + x, 40 + y)) != (255, 255, 255)
        for x in range(10) for y in range(10)
    )


def test_encode_main_with_custom_characters(answers, capsys, tmp_path):
    path = tmp_path / "custom.png"
    # text, explain, byte mode, customise, scale, frame, fg, bg, change chars, fg char, bg char
    answers.extend(["HELLO WORLD", "n", "n", "y", "1", "n", "", "", "y", "#", "."])
    answers.append(str(path))
    qr_cli.encode_main()

    out = capsys.readouterr().out
    assert "#######." in out
    assert Image.open(path).size == (290, 290)


def test_encode_main_explained_round_trip(answers, capsys, tmp_path):
    path = tmp_path / "explained.png"
    answers.extend(["QR CODE", "y", "n", "n"])
    answers.extend([""] * 6)
    answers.append(str(path))
    qr_cli.encode_main()
    assert decode(Image.open(path)) == "QR CODE"
