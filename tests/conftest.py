import numpy as np
import pytest
from PIL import Image

from subpixfont.sheet import SHEET_HEIGHT, SHEET_WIDTH, SpriteSheet


def make_sheet_pixels(seed=7, width=SHEET_WIDTH, height=SHEET_HEIGHT):
    """Random sheet where roughly half of all channel values are exactly zero."""
    rng = np.random.default_rng(seed)
    values = rng.integers(1, 256, size=(height, width, 3), dtype=np.uint8)
    mask = rng.random((height, width, 3)) < 0.5
    return np.where(mask, values, 0).astype(np.uint8)


@pytest.fixture(scope="session")
def sheet_pixels():
    return make_sheet_pixels()


@pytest.fixture(scope="session")
def sheet(sheet_pixels):
    return SpriteSheet(sheet_pixels)


@pytest.fixture(scope="session")
def sheet_path(tmp_path_factory, sheet_pixels):
    path = tmp_path_factory.mktemp("sheet") / "hangul_image.png"
    Image.fromarray(sheet_pixels).save(path)
    return path
