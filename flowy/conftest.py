"""
conftest.py

Test configuration for flowy tests.

Defines Pytest fixtures for supplying test data to tests across the entire test suite.
Fixtures used within only a single module are defined directly in that module.

flowy loads (and if necessary writes) its config at import time, so FLOWY_CONFIG_DIR is
pointed at a scratch directory here, before any flowy module that reads it is imported.
"""

import os
import tempfile
from pathlib import Path

os.environ["FLOWY_CONFIG_DIR"] = tempfile.mkdtemp(prefix="flowy-test-config-")

import pytest
from PIL import Image

from flowy.cli_utils.console import console


@pytest.fixture(autouse=True)
def reset_console():
    """--quiet swaps the console output for a junk stream; undo it after every test."""

    yield
    console.file = None


def make_image(path: Path, color: str = "navy") -> Path:
    """Write a tiny valid jpeg to path."""

    Image.new("RGB", (8, 8), color).save(path, "JPEG")
    return path


@pytest.fixture
def test_image(tmp_path) -> Path:
    """
    Returns a Path object pointing to a small jpeg image.
    """

    return make_image(tmp_path / "test_image.jpg")


@pytest.fixture
def solar_walls(tmp_path) -> Path:
    """
    A wallpaper folder in solar mode naming: two DAY images, one NIGHT image and a file
    that belongs to neither set.
    """

    folder = tmp_path / "walls"
    folder.mkdir()

    for name in ("01-DAY.jpg", "00-DAY.jpg", "00-NIGHT.jpg"):
        make_image(folder / name)

    (folder / "README.txt").write_text("not a wallpaper")

    return folder
