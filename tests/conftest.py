"""
Pytest configuration and fixtures for conversion tests
"""
import pytest
from pathlib import Path

# 40x20 document: opaque red on the left half, transparent on the right
HALF_RED_SVG = b"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="40" height="20" viewBox="0 0 40 20">
  <rect x="0" y="0" width="20" height="20" fill="#ff0000"/>
</svg>
"""


@pytest.fixture
def svg_bytes():
    """Raw bytes of the sample SVG"""
    return HALF_RED_SVG


@pytest.fixture
def svg_path(tmp_path):
    """Sample SVG written to disk"""
    path = tmp_path / "logo.svg"
    path.write_bytes(HALF_RED_SVG)
    return path


@pytest.fixture
def output_dir(tmp_path):
    """Temporary output directory for tests"""
    output = tmp_path / "output"
    output.mkdir()
    return output
