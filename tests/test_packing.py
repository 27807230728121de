import numpy as np
import pytest

from subpixfont.packing import binarize, binarize_array, convert_sheet, extract_glyph, pack_columns
from subpixfont.sheet import CELL_SIZE, FIRST_SYLLABLE, GRID_COLUMNS, LAST_SYLLABLE, SHEET_HEIGHT, SHEET_WIDTH


def test_binarize_threshold():
    assert binarize(0) == 0
    assert binarize(1) == 255
    assert binarize(255) == 255


def test_binarize_is_idempotent():
    for value in range(256):
        assert binarize(binarize(value)) == binarize(value)


def test_binarize_array_matches_scalar():
    values = np.arange(256, dtype=np.uint8)
    result = binarize_array(values)
    assert result.dtype == np.uint8
    assert result.tolist() == [binarize(v) for v in range(256)]


def test_pack_columns_reads_red_of_each_subcolumn():
    row = np.zeros((1, 6, 3), dtype=np.uint8)
    row[0, :, 0] = [0, 5, 0, 0, 0, 9]
    packed = pack_columns(row)
    assert packed.tolist() == [[[0, 255, 0], [0, 0, 255]]]


def test_pack_columns_ignores_green_and_blue():
    pixels = np.zeros((2, 6, 3), dtype=np.uint8)
    pixels[:, :, 1] = 255
    pixels[:, :, 2] = 255
    assert pack_columns(pixels).max() == 0


def test_pack_columns_drops_partial_triad():
    pixels = np.full((3, 7, 3), 10, dtype=np.uint8)
    packed = pack_columns(pixels)
    assert packed.shape == (3, 2, 3)
    assert (packed == 255).all()


def test_extract_first_syllable(sheet, sheet_pixels):
    glyph = extract_glyph(sheet, "가")
    assert glyph.char == "가"
    assert (glyph.cell.row, glyph.cell.col) == (0, 0)
    assert glyph.original.shape == (CELL_SIZE, CELL_SIZE, 3)
    assert glyph.packed.shape == (CELL_SIZE, 4, 3)
    np.testing.assert_array_equal(glyph.original, sheet_pixels[:CELL_SIZE, :CELL_SIZE])


def test_extract_packs_each_pixel(sheet, sheet_pixels):
    char = chr(FIRST_SYLLABLE + GRID_COLUMNS + 12)
    glyph = extract_glyph(sheet, char)
    x, y = 12 * CELL_SIZE, CELL_SIZE
    for dy in range(CELL_SIZE):
        for dx in range(4):
            expected = [binarize(int(sheet_pixels[y + dy, x + dx * 3 + k, 0])) for k in range(3)]
            assert glyph.packed[dy, dx].tolist() == expected


def test_packed_is_binary(sheet):
    glyph = extract_glyph(sheet, "한")
    assert set(np.unique(glyph.packed)) <= {0, 255}


def test_original_is_an_independent_copy(sheet, sheet_pixels):
    glyph = extract_glyph(sheet, "가")
    glyph.original[0, 0] = [1, 2, 3]
    np.testing.assert_array_equal(sheet.pixels[:CELL_SIZE, :CELL_SIZE], sheet_pixels[:CELL_SIZE, :CELL_SIZE])


@pytest.mark.parametrize("char", ["A", "1", "ㅎ", "漢"])
def test_extract_unsupported(sheet, char):
    assert extract_glyph(sheet, char) is None


def test_convert_sheet_shape(sheet):
    converted = convert_sheet(sheet)
    assert converted.shape == (SHEET_HEIGHT, SHEET_WIDTH // 3, 3)
    assert set(np.unique(converted)) <= {0, 255}


def test_convert_sheet_matches_per_glyph_packing(sheet):
    converted = convert_sheet(sheet)
    reassembled = np.zeros_like(converted)
    for codepoint in range(FIRST_SYLLABLE, LAST_SYLLABLE + 1):
        glyph = extract_glyph(sheet, chr(codepoint))
        y = glyph.cell.y
        x = glyph.cell.col * 4
        reassembled[y : y + CELL_SIZE, x : x + 4] = glyph.packed
    np.testing.assert_array_equal(converted, reassembled)
