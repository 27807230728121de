from dataclasses import dataclass

import numpy as np

from subpixfont.sheet import GlyphCell, SpriteSheet, locate

SUBPIXELS = 3  # source columns folded into one packed pixel


@dataclass(frozen=True)
class Glyph:
    char: str
    cell: GlyphCell
    original: np.ndarray  # (12, 12, 3) uint8, untouched copy of the cell
    packed: np.ndarray  # (12, 4, 3) uint8, values 0 or 255


def binarize(value: int) -> int:
    """Hard threshold: only an exact zero stays dark."""
    return 0 if value == 0 else 255


def binarize_array(values: np.ndarray) -> np.ndarray:
    return np.where(values == 0, 0, 255).astype(np.uint8)


def pack_columns(pixels: np.ndarray) -> np.ndarray:
    """Fold every three source columns into the R, G, B of one pixel.

    Only the red channel of each source column is read. Source column 3x+k
    becomes channel k of packed column x, binarized. Trailing columns that do
    not fill a whole triad are dropped.

    Returns array of shape (h, w // 3, 3) as uint8.
    """
    height, width = pixels.shape[:2]
    packed_width = width // SUBPIXELS
    red = pixels[:, : packed_width * SUBPIXELS, 0]
    return binarize_array(red.reshape(height, packed_width, SUBPIXELS))


def extract_glyph(sheet: SpriteSheet, char: str) -> Glyph | None:
    cell = locate(char)
    if cell is None:
        return None
    pixels = sheet.cell(cell)
    return Glyph(char=char, cell=cell, original=pixels.copy(), packed=pack_columns(pixels))


def convert_sheet(sheet: SpriteSheet) -> np.ndarray:
    """Pack the whole sheet at once (same result as packing each cell in place)."""
    return pack_columns(sheet.pixels)
