#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Builders for synthetic image trees used by the test suite.
"""

from pathlib import Path
from typing import Tuple

from PIL import Image

from image_analyzer.models.candidate import CandidateFile

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def make_image(path: Path, size: Tuple[int, int] = (256, 256), color=RED, mode: str = "RGB") -> Path:
    """Write a solid-colour image; the format follows the file suffix."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, color).save(path)
    return path


def make_pattern_image(path: Path, size: Tuple[int, int] = (256, 256), seed: int = 0) -> Path:
    """Write an image with a deterministic gradient so different seeds differ."""
    path.parent.mkdir(parents=True, exist_ok=True)
    width, height = size
    pixels = bytearray()
    for y in range(height):
        for x in range(width):
            pixels += bytes(((x * 7 + seed) % 256, (y * 3 + seed) % 256, (x + y + seed) % 256))
    Image.frombytes("RGB", size, bytes(pixels)).save(path)
    return path


def make_garbage(path: Path, payload: bytes = b"this is definitely not an image") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    return path


def make_truncated(path: Path, size: Tuple[int, int] = (256, 256)) -> Path:
    """Write a pattern image and chop off the second half of the file."""
    make_pattern_image(path, size)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])
    return path


def candidate(root: Path, path: Path) -> CandidateFile:
    return CandidateFile.from_root(root, path)
