import argparse
import sys
from pathlib import Path

from PIL import Image

from subpixfont.compositor import SPACE, UNSUPPORTED, compose_text
from subpixfont.output import save_images, to_image
from subpixfont.packing import convert_sheet, extract_glyph
from subpixfont.sheet import SheetError, SpriteSheet
from subpixfont.simulate import render_subpixel_grid, simulate_subpixel

DEFAULT_SHEET = Path("hangul_image.png")


def _load_sheet(path: Path) -> SpriteSheet:
    try:
        return SpriteSheet.open(path)
    except (OSError, SheetError) as e:
        print(f"Cannot open sprite sheet {path}: {e}", file=sys.stderr)
        sys.exit(1)


def _outputs(prefix: str, original, packed, grid: bool) -> dict[str, Image.Image]:
    images = {
        f"{prefix}_original.png": to_image(original),
        f"{prefix}_processed.png": to_image(packed),
        f"{prefix}_simulated.png": simulate_subpixel(packed),
    }
    if grid:
        images[f"{prefix}_grid.png"] = render_subpixel_grid(packed)
    return images


def _write(images: dict[str, Image.Image], output_dir: Path) -> bool:
    saved, failures = save_images(images, output_dir)
    for path, error in failures:
        print(f"Failed to save {path}: {error}", file=sys.stderr)
    if saved:
        print("Saved " + ", ".join(f"'{p}'" for p in saved))
    return not failures


def run_all(sheet: SpriteSheet, output_dir: Path) -> bool:
    return _write({"all_glyphs_processed.png": to_image(convert_sheet(sheet))}, output_dir)


def run_char(sheet: SpriteSheet, char: str, output_dir: Path, grid: bool = False) -> bool:
    glyph = extract_glyph(sheet, char)
    if glyph is None:
        print(f"Unsupported character {char!r} (U+{ord(char):04X})", file=sys.stderr)
        return False
    print(f"Processed {char!r} at row {glyph.cell.row}, column {glyph.cell.col}")
    return _write(_outputs(char, glyph.original, glyph.packed, grid), output_dir)


def run_text(sheet: SpriteSheet, text: str, output_dir: Path, grid: bool = False) -> bool:
    composite = compose_text(sheet, text)
    if composite.is_empty:
        print("No characters to render", file=sys.stderr)
        return False
    for result in composite.results:
        if result.status == SPACE:
            continue
        if result.status == UNSUPPORTED:
            print(
                f"Unsupported character {result.char!r} at line {result.line + 1}, column {result.column + 1}",
                file=sys.stderr,
            )
        else:
            print(f"Processed {result.char!r}")
    return _write(_outputs("text", composite.original, composite.packed, grid), output_dir)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Extract Hangul glyphs from a sprite sheet and pack them for subpixel rendering")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--all", action="store_true", help="Pack the whole sheet into all_glyphs_processed.png")
    mode.add_argument("--char", help="Extract a single syllable (first character is used)")
    mode.add_argument("--text", nargs="+", help="Extract a block of text; separate lines with a newline or '\\n'")
    parser.add_argument(
        "--sheet", type=Path, default=DEFAULT_SHEET, help=f"Sprite sheet image (default: {DEFAULT_SHEET})"
    )
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("."), help="Directory for output images (default: current)"
    )
    parser.add_argument("--grid", action="store_true", default=False, help="Also write a subpixel grid preview")
    args = parser.parse_args(argv)

    if args.char == "":
        parser.error("--char needs a character")

    sheet = _load_sheet(args.sheet)

    if args.all:
        ok = run_all(sheet, args.output_dir)
    elif args.char is not None:
        ok = run_char(sheet, args.char[0], args.output_dir, grid=args.grid)
    else:
        ok = run_text(sheet, " ".join(args.text), args.output_dir, grid=args.grid)

    if not ok:
        sys.exit(1)
