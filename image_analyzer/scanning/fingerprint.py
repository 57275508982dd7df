#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Content fingerprint used as the duplicate registry key.
"""

from PIL import Image

from ..config import HASH_THUMBNAIL_SIZE
from .decoder import DecodedImage

_MASK32 = 0xFFFFFFFF
_OPAQUE = 0xFF000000
_ALPHA_MODES = ("RGBA", "RGBa", "LA", "La", "PA")


def _to_signed32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def pixel_hash(rgb: bytes) -> int:
    """Fold packed RGB bytes into a signed 32-bit polynomial hash.

    Each pixel becomes an opaque ``0xFFRRGGBB`` sample; samples are combined
    in order with ``h = 31 * h + sample`` starting from 1.
    """
    h = 1
    for i in range(0, len(rgb), 3):
        sample = _OPAQUE | (rgb[i] << 16) | (rgb[i + 1] << 8) | rgb[i + 2]
        h = (31 * h + sample) & _MASK32
    return _to_signed32(h)


def _flatten(image: Image.Image) -> Image.Image:
    """Return an RGB copy, with any transparency composited onto black."""
    if image.mode not in _ALPHA_MODES and "transparency" not in image.info:
        return image.convert("RGB")
    with image.convert("RGBA") as rgba:
        flat = Image.new("RGB", rgba.size, (0, 0, 0))
        flat.paste(rgba, mask=rgba.getchannel("A"))
    return flat


def compute_fingerprint(decoded: DecodedImage, size: int = HASH_THUMBNAIL_SIZE) -> str:
    """Return ``"<hash>_<width>x<height>"`` for a decoded image.

    The hash covers a bilinear ``size`` x ``size`` downsample; the original
    dimensions are appended so images that only differ in resolution never
    collide.
    """
    with _flatten(decoded.image) as rgb:
        with rgb.resize((size, size), Image.Resampling.BILINEAR) as small:
            digest = pixel_hash(small.tobytes())
    return f"{digest}_{decoded.width}x{decoded.height}"
