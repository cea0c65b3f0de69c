"""CLI entry points for building annotation context images."""
import logging
import math
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click
import numpy as np
import pymupdf
import yaml
from pydantic import ValidationError
from tqdm import tqdm

from schemas.enums import MarkupKind
from schemas.geometry import PDFRect
from schemas.manifest import Manifest, ManifestEntry

from .config import ContextImageConfig
from .extract import SubImageExtractor
from .quads import InvalidQuadPoints, rect_to_quad
from .rendering import load_image, render_page_to_numpy, save_image

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

MARKUP_CHOICES = [kind.value for kind in MarkupKind]

# Missing or unreadable PDFs, pages and comment-box images
INPUT_ERRORS = (FileNotFoundError, IndexError, pymupdf.FileDataError)


def parse_quads(text: str) -> List[float]:
    """Parse "x0,y0,x1,y1,..." (commas and/or spaces) into finite floats."""
    parts = text.replace(",", " ").split()
    try:
        values = [float(p) for p in parts]
    except ValueError:
        raise click.BadParameter(f"QuadPoints must be numbers, got {text!r}", param_hint="--quads")
    if not all(math.isfinite(v) for v in values):
        raise click.BadParameter(f"QuadPoints must be finite, got {text!r}", param_hint="--quads")
    return values


def build_extractor(debug: Optional[bool]) -> SubImageExtractor:
    """Read the environment once and wire up the extractor."""
    overrides = {} if debug is None else {"debug": debug}
    config = ContextImageConfig.from_env(**overrides)
    return SubImageExtractor(config, config.make_debug_sink())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Annotation context - crop PDF annotations with their surroundings."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("page", type=click.IntRange(min=1))
@click.option(
    "--rect",
    type=float,
    nargs=4,
    default=None,
    metavar="X0 Y0 X1 Y1",
    help="Annotation bounds in PDF points (lower-left, upper-right)",
)
@click.option(
    "--quads",
    type=str,
    default=None,
    help='Flat QuadPoints array, e.g. "100,230,150,230,100,200,150,200"',
)
@click.option(
    "--markup",
    "-m",
    type=click.Choice(MARKUP_CHOICES),
    default=MarkupKind.NONE.value,
    help="Overlay to paint (default: none)",
)
@click.option(
    "--comment-box",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Comment box image stretched over a popup annotation",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output image (default: <pdf-stem>-p<page>-<markup>.png next to PDF)",
)
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Also dump the image to DEBUG_DIR (default: from DEBUG env var)",
)
def extract(
    pdf_path: Path,
    page: int,
    rect: Optional[Tuple[float, float, float, float]],
    quads: Optional[str],
    markup: str,
    comment_box: Optional[Path],
    output: Optional[Path],
    debug: Optional[bool],
):
    """
    Extract the context image around one annotation.

    Give the annotation either as --rect or as --quads.

    Example:
        annotation-context extract paper.pdf 3 --quads "72,700,300,700,72,688,300,688" -m highlight
    """
    if (rect is None) == (quads is None):
        raise click.UsageError("Give exactly one of --rect or --quads")

    if rect is not None:
        try:
            points = rect_to_quad(PDFRect(x0=rect[0], y0=rect[1], x1=rect[2], y1=rect[3]))
        except ValidationError as e:
            raise click.BadParameter(str(e), param_hint="--rect")
    else:
        points = parse_quads(quads)

    if output is None:
        output = pdf_path.parent / f"{pdf_path.stem}-p{page:03d}-{markup}.png"

    extractor = build_extractor(debug)

    try:
        page_img = render_page_to_numpy(str(pdf_path), page, zoom=extractor.config.scale_up_factor)
        asset = load_image(str(comment_box)) if comment_box is not None else None
    except INPUT_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        img = extractor.make_sub_image(page_img, points, MarkupKind(markup), asset)
    except InvalidQuadPoints as e:
        click.echo(f"Nothing to extract: {e}", err=True)
        return

    try:
        save_image(output, img)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    h, w = img.shape[:2]
    click.echo(f"Wrote {w}x{h} context image to {output}")


class _PageCache:
    """Render each (pdf, page) once per batch run."""

    def __init__(self, zoom: float):
        self.zoom = zoom
        self._pages: Dict[Tuple[Path, int], np.ndarray] = {}

    def get(self, pdf_path: Path, page: int) -> np.ndarray:
        key = (pdf_path.resolve(), page)
        if key not in self._pages:
            self._pages[key] = render_page_to_numpy(str(pdf_path), page, zoom=self.zoom)
        return self._pages[key]


def _entry_output_name(entry: ManifestEntry, index: int) -> str:
    if entry.name:
        return f"{entry.name}.png"
    return f"{entry.pdf.stem}-p{entry.page:03d}-{index:03d}-{entry.markup.value}.png"


@cli.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: context/ next to the manifest)",
)
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Also dump every image to DEBUG_DIR (default: from DEBUG env var)",
)
def batch(manifest_path: Path, output_dir: Optional[Path], debug: Optional[bool]):
    """
    Extract context images for every entry of a YAML manifest.

    PDF and comment box paths are resolved relative to the manifest.

    Example:
        annotation-context batch annotations.yaml -o out/
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f) or {}

    try:
        manifest = Manifest.model_validate(raw)
    except ValidationError as e:
        click.echo(f"Error: invalid manifest {manifest_path}:\n{e}", err=True)
        sys.exit(1)

    base_dir = manifest_path.parent
    if output_dir is None:
        output_dir = base_dir / "context"
    output_dir.mkdir(parents=True, exist_ok=True)

    extractor = build_extractor(debug)
    pages = _PageCache(extractor.config.scale_up_factor)
    assets: Dict[Path, np.ndarray] = {}

    click.echo(f"Found {len(manifest.entries)} annotations to process")

    written_count = 0
    skipped_count = 0
    failed_count = 0

    for index, entry in enumerate(tqdm(manifest.entries, desc="Extracting"), 1):
        pdf_path = base_dir / entry.pdf
        points = rect_to_quad(entry.rect) if entry.rect is not None else entry.quads

        try:
            page_img = pages.get(pdf_path, entry.page)

            asset = None
            if entry.comment_box is not None:
                asset_path = base_dir / entry.comment_box
                if asset_path not in assets:
                    assets[asset_path] = load_image(str(asset_path))
                asset = assets[asset_path]

            img = extractor.make_sub_image(page_img, points, entry.markup, asset)
            save_image(output_dir / _entry_output_name(entry, index), img)
        except InvalidQuadPoints as e:
            logger.warning(f"Entry {index}: nothing to extract ({e})")
            skipped_count += 1
            continue
        except INPUT_ERRORS + (OSError,) as e:
            logger.error(f"Entry {index}: {e}")
            failed_count += 1
            continue

        written_count += 1

    click.echo("")
    click.echo("Extraction complete!")
    click.echo(f"  Images written: {written_count}")
    if skipped_count > 0:
        click.echo(f"  Skipped (nothing to extract): {skipped_count}")
    if failed_count > 0:
        click.echo(f"  Failed: {failed_count}")
    click.echo(f"  Output directory: {output_dir}")

    if failed_count > 0:
        sys.exit(1)


if __name__ == "__main__":
    cli()
