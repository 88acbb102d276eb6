import pytest

from blockheat.font import (
    BitmapFont,
    default_glyphs,
    format_number,
    load_font,
    save_font,
)


def test_default_glyph_table_shape():
    glyphs = default_glyphs()
    assert len(glyphs) == 95
    assert all(len(g) == 12 for g in glyphs)


def test_space_and_bar_glyphs():
    font = BitmapFont()
    assert font.glyph(" ") == bytes(12)
    assert font.glyph("|") == bytes([0x18] * 12)


def test_save_then_load_round_trip(tmp_path):
    path = tmp_path / "bitmap_font.dat"
    save_font(path, default_glyphs())
    assert load_font(path) == default_glyphs()


def test_saved_format_is_one_hex_value_per_line(tmp_path):
    path = tmp_path / "bitmap_font.dat"
    save_font(path, default_glyphs())
    lines = path.read_text().splitlines()
    assert len(lines) == 95 * 12
    # '!' starts at line 12: 0x00 then 0x18
    assert lines[12:14] == ["0", "18"]


def test_from_file_matches_default(tmp_path):
    path = tmp_path / "font.dat"
    save_font(path, default_glyphs())
    assert BitmapFont.from_file(path) == BitmapFont()


def test_load_short_file_raises(tmp_path):
    path = tmp_path / "short.dat"
    path.write_text("ff\n" * 100)
    with pytest.raises(ValueError):
        load_font(path)


def test_load_masks_to_byte(tmp_path):
    path = tmp_path / "wide.dat"
    path.write_text("1ff\n" * (95 * 12))
    glyphs = load_font(path)
    assert glyphs[0] == bytes([0xFF] * 12)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_font(tmp_path / "absent.dat")


def test_save_rejects_wrong_glyph_count(tmp_path):
    with pytest.raises(ValueError):
        save_font(tmp_path / "bad.dat", default_glyphs()[:10])


def test_font_rejects_short_glyph():
    glyphs = default_glyphs()
    glyphs[5] = b"\x00\x01"
    with pytest.raises(ValueError):
        BitmapFont(tuple(glyphs))


def test_glyph_outside_range_raises():
    with pytest.raises(KeyError):
        BitmapFont().glyph("\x7f")


@pytest.mark.parametrize("num,expected", [(0, "0"), (10, "10"), (70, "70"), (1234567, "1234567")])
def test_format_number(num, expected):
    assert format_number(num) == expected


def test_format_negative_number_is_empty():
    assert format_number(-5) == ""


def test_render_dimensions():
    rows = BitmapFont().render("Score 10")
    assert len(rows) == 12
    assert all(len(row) == 8 * 10 for row in rows)


def test_render_exclamation_top_and_bottom():
    rows = BitmapFont().render("!")
    assert rows[0] == "...##....."
    assert rows[-1] == "." * 10


def test_render_skips_unknown_characters():
    font = BitmapFont()
    assert font.render("A\nB") == font.render("AB")


def test_render_concatenates_glyphs():
    font = BitmapFont()
    a = font.render("A")
    b = font.render("B")
    assert font.render("AB") == [x + y for x, y in zip(a, b)]


def test_render_space_is_blank():
    assert set("".join(BitmapFont().render("   "))) == {"."}