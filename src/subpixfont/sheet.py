from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

# Modern Hangul syllables: U+AC00 to U+D7A3 (11,172 characters)
FIRST_SYLLABLE = 0xAC00
LAST_SYLLABLE = 0xD7A3
SYLLABLE_COUNT = LAST_SYLLABLE - FIRST_SYLLABLE + 1

# Sheet layout: one 12x12 cell per syllable, 588 cells per row (21 medials * 28 finals)
CELL_SIZE = 12
GRID_COLUMNS = 588
GRID_ROWS = -(-SYLLABLE_COUNT // GRID_COLUMNS)
SHEET_WIDTH = GRID_COLUMNS * CELL_SIZE
SHEET_HEIGHT = GRID_ROWS * CELL_SIZE


class SheetError(ValueError):
    """The sprite sheet does not match the expected grid geometry."""


@dataclass(frozen=True)
class GlyphCell:
    row: int
    col: int

    @property
    def x(self) -> int:
        return self.col * CELL_SIZE

    @property
    def y(self) -> int:
        return self.row * CELL_SIZE


def locate(char: str | int) -> GlyphCell | None:
    """Find the sheet cell for a Hangul syllable, or None if it is not one."""
    codepoint = char if isinstance(char, int) else ord(char)
    if not FIRST_SYLLABLE <= codepoint <= LAST_SYLLABLE:
        return None
    row, col = divmod(codepoint - FIRST_SYLLABLE, GRID_COLUMNS)
    return GlyphCell(row, col)


class SpriteSheet:
    """Read-only RGB raster holding every syllable glyph in a fixed grid."""

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise SheetError(f"Expected an RGB raster, got array of shape {pixels.shape}")
        height, width = pixels.shape[:2]
        if width < SHEET_WIDTH or height < SHEET_HEIGHT:
            raise SheetError(f"Sheet is {width}x{height}, grid needs at least {SHEET_WIDTH}x{SHEET_HEIGHT}")
        self.pixels = np.array(pixels, dtype=np.uint8)
        self.pixels.setflags(write=False)

    @classmethod
    def from_image(cls, image: Image.Image) -> "SpriteSheet":
        return cls(np.asarray(image.convert("RGB")))

    @classmethod
    def open(cls, path: str | Path) -> "SpriteSheet":
        with Image.open(path) as image:
            return cls.from_image(image)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def cell(self, cell: GlyphCell) -> np.ndarray:
        """Return a read-only (12, 12, 3) view of one cell."""
        return self.pixels[cell.y : cell.y + CELL_SIZE, cell.x : cell.x + CELL_SIZE]
