from dataclasses import dataclass, field

import numpy as np

from subpixfont.packing import SUBPIXELS, extract_glyph
from subpixfont.sheet import CELL_SIZE, SpriteSheet

PACKED_CELL_WIDTH = CELL_SIZE // SUBPIXELS

RENDERED = "rendered"
SPACE = "space"
UNSUPPORTED = "unsupported"


@dataclass
class CharResult:
    line: int
    column: int
    char: str
    status: str  # RENDERED, SPACE or UNSUPPORTED


@dataclass
class Composite:
    original: np.ndarray  # (12 * lines, 12 * max_len, 3) uint8
    packed: np.ndarray  # (12 * lines, 4 * max_len, 3) uint8
    results: list[CharResult] = field(default_factory=list)

    @property
    def unsupported(self) -> list[CharResult]:
        return [r for r in self.results if r.status == UNSUPPORTED]

    @property
    def is_empty(self) -> bool:
        return self.original.size == 0


def split_lines(text: str) -> list[str]:
    """Split on real newlines and on the literal two-character escape ``\\n``."""
    return text.replace("\\n", "\n").split("\n")


def compose(sheet: SpriteSheet, lines: list[str]) -> Composite:
    """Place each line's glyphs side by side, one cell row per line.

    Spaces and unsupported characters leave their cell black.
    """
    max_len = max((len(line) for line in lines), default=0)
    rows = len(lines)
    original = np.zeros((CELL_SIZE * rows, CELL_SIZE * max_len, 3), dtype=np.uint8)
    packed = np.zeros((CELL_SIZE * rows, PACKED_CELL_WIDTH * max_len, 3), dtype=np.uint8)
    results = []

    for line_idx, line in enumerate(lines):
        y = line_idx * CELL_SIZE
        for char_idx, char in enumerate(line):
            if char == " ":
                results.append(CharResult(line_idx, char_idx, char, SPACE))
                continue
            glyph = extract_glyph(sheet, char)
            if glyph is None:
                results.append(CharResult(line_idx, char_idx, char, UNSUPPORTED))
                continue
            x = char_idx * CELL_SIZE
            px = char_idx * PACKED_CELL_WIDTH
            original[y : y + CELL_SIZE, x : x + CELL_SIZE] = glyph.original
            packed[y : y + CELL_SIZE, px : px + PACKED_CELL_WIDTH] = glyph.packed
            results.append(CharResult(line_idx, char_idx, char, RENDERED))

    return Composite(original=original, packed=packed, results=results)


def compose_text(sheet: SpriteSheet, text: str) -> Composite:
    return compose(sheet, split_lines(text))
