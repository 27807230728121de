from pathlib import Path

import numpy as np
from PIL import Image


def to_image(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(pixels))


def save_images(
    images: dict[str, Image.Image | np.ndarray],
    output_dir: str | Path = ".",
) -> tuple[list[Path], list[tuple[Path, Exception]]]:
    """Write each image as PNG, carrying on past individual failures.

    Returns:
        saved: paths written successfully, in input order
        failures: (path, error) for every file that could not be written
    """
    output_dir = Path(output_dir)
    saved: list[Path] = []
    failures: list[tuple[Path, Exception]] = []
    for name, image in images.items():
        path = output_dir / name
        if not isinstance(image, Image.Image):
            image = to_image(image)
        try:
            image.save(path, format="PNG")
        except (OSError, ValueError) as e:
            failures.append((path, e))
        else:
            saved.append(path)
    return saved, failures
