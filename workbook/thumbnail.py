"""Produce thumbnail-size JPEG images from larger images."""

from __future__ import annotations

import logging
import os
import sys
from typing import BinaryIO, Optional

from PIL import Image

logger = logging.getLogger(__name__)

_SIZE = 128
_IMAGE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


def image(src: Image.Image) -> Image.Image:
    """Return a thumbnail-size version of src, preserving its aspect ratio."""
    xs, ys = src.size
    width, height = _SIZE, _SIZE
    aspect = xs / ys
    if aspect < 1.0:
        width = int(_SIZE * aspect)  # portrait
    else:
        height = int(_SIZE / aspect)  # landscape
    xscale = xs / width if width else 0.0
    yscale = ys / height if height else 0.0

    dst = Image.new("RGBA", (width, height))
    src_pixels = src.convert("RGBA").load()
    dst_pixels = dst.load()
    # a very crude scaling algorithm
    for x in range(width):
        srcx = int(x * xscale)
        for y in range(height):
            dst_pixels[x, y] = src_pixels[srcx, int(y * yscale)]
    return dst


def image_stream(out: BinaryIO, inp: BinaryIO) -> None:
    """Read an image from inp and write a JPEG thumbnail of it to out."""
    with Image.open(inp) as src:
        src.load()
        dst = image(src)
    dst.convert("RGB").save(out, format="JPEG", quality=75)


def image_file2(outfile: str, infile: str) -> None:
    """Read an image from infile and write a thumbnail of it to outfile."""
    with open(infile, "rb") as inp, open(outfile, "wb") as out:
        try:
            image_stream(out, inp)
        except _IMAGE_ERRORS as err:
            raise OSError(f"scaling {infile} to {outfile}: {err}") from err


def _ext(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def image_file(infile: str) -> str:
    """Write a thumbnail of infile beside it and return its name.

    The name is that of infile with ".thumb" before the extension,
    e.g. "foo.thumb.jpeg".
    """
    ext = _ext(infile)
    stem = infile[: len(infile) - len(ext)] if ext else infile
    outfile = stem + ".thumb" + ext
    image_file2(outfile, infile)
    return outfile


def main(argv: Optional[list] = None) -> int:
    """Make a thumbnail of each image named on a line of standard input."""
    logging.basicConfig(format="%(asctime)s %(message)s", stream=sys.stderr)
    for line in sys.stdin:
        name = line.removesuffix("\n").removesuffix("\r")
        try:
            thumb = image_file(name)
        except OSError as err:
            logger.error("%s", err)
            continue
        print(thumb)
    return 0