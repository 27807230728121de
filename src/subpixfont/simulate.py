import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from subpixfont.packing import SUBPIXELS

UPSCALE = 3
BLUR_RADIUS = 1.0
GRID_COLOUR = (100, 100, 100)

def _as_rgb_array(image: Image.Image | np.ndarray) -> np.ndarray:
    if isinstance(image, Image.Image):
        return np.asarray(image.convert("RGB"))
    if image.ndim == 2:
        return np.repeat(image[:, :, np.newaxis], 3, axis=2)
    return image[:, :, :3]


def spread_subpixels(pixels: np.ndarray) -> np.ndarray:
    """Spread each pixel's channels over three horizontal subpixel slots.

    Pixel (x, y) writes its red to (3x, 3y), green to (3x+1, 3y) and blue to
    (3x+2, 3y), each opaque with the other channels zeroed. The remaining
    two rows of every 3x3 block stay transparent black.

    Returns array of shape (3h, 3w, 4) as uint8.
    """
    pixels = _as_rgb_array(pixels)
    height, width = pixels.shape[:2]
    out = np.zeros((height * SUBPIXELS, width * SUBPIXELS, 4), dtype=np.uint8)
    for channel in range(SUBPIXELS):
        out[::SUBPIXELS, channel::SUBPIXELS, channel] = pixels[:, :, channel]
        out[::SUBPIXELS, channel::SUBPIXELS, 3] = 255
    return out


def upscale_bands(image: Image.Image, factor: int = UPSCALE) -> Image.Image:
    """Lanczos-resize each band on its own, keeping alpha straight (not premultiplied)."""
    size = (image.width * factor, image.height * factor)
    return Image.merge(image.mode, [band.resize(size, Image.LANCZOS) for band in image.split()])


def simulate_subpixel(image: Image.Image | np.ndarray) -> Image.Image:
    """Approximate how a packed raster looks on an RGB-stripe LCD.

    The output is RGBA and 9x the input in both dimensions.
    """
    enlarged = upscale_bands(Image.fromarray(spread_subpixels(image)))
    return enlarged.filter(ImageFilter.GaussianBlur(BLUR_RADIUS))


def render_subpixel_grid(image: Image.Image | np.ndarray, pixel_size: int = 24) -> Image.Image:
    """Draw each pixel as three vertical R/G/B strips on a grid, without blending."""
    if pixel_size <= 0 or pixel_size % SUBPIXELS:
        raise ValueError(f"pixel_size must be a positive multiple of {SUBPIXELS}, got {pixel_size}")
    pixels = _as_rgb_array(image)
    height, width = pixels.shape[:2]

    strips = np.zeros((height, width * SUBPIXELS, 3), dtype=np.uint8)
    for channel in range(SUBPIXELS):
        strips[:, channel::SUBPIXELS, channel] = pixels[:, :, channel]
    strips = np.repeat(np.repeat(strips, pixel_size, axis=0), pixel_size // SUBPIXELS, axis=1)

    grid = Image.fromarray(strips)
    draw = ImageDraw.Draw(grid)
    for x in range(0, grid.width, pixel_size):
        draw.line([(x, 0), (x, grid.height - 1)], fill=GRID_COLOUR)
    for y in range(0, grid.height, pixel_size):
        draw.line([(0, y), (grid.width - 1, y)], fill=GRID_COLOUR)
    return grid
