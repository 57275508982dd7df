#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Image decoding for the Image Analyzer.
"""

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

logging.getLogger("PIL.TiffImagePlugin").setLevel(logging.WARNING)
logging.getLogger("PIL.PngImagePlugin").setLevel(logging.WARNING)

# Suppress PIL warnings
warnings.filterwarnings("ignore", category=UserWarning,
                       message=".*Palette images with Transparency expressed in bytes.*")


@dataclass
class DecodedImage:
    """Fully loaded pixel data plus the original dimensions."""
    image: Image.Image
    width: int
    height: int

    def close(self) -> None:
        self.image.close()

    def __enter__(self) -> "DecodedImage":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def decode_image(path: Path) -> DecodedImage:
    """Open and fully decode ``path``.

    Raises whatever Pillow raises: ``UnidentifiedImageError`` for unknown
    formats, ``OSError`` for truncated data, ``Image.DecompressionBombError``
    for oversized images and ``MemoryError`` when allocation fails.
    """
    img = Image.open(path)
    try:
        img.load()
    except BaseException:
        img.close()
        raise
    width, height = img.size
    return DecodedImage(image=img, width=width, height=height)
