"""Pytest configuration and shared fixtures for tensor conversion tests."""

import tempfile
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def gradient_array():
    """
    Create a synthetic (3, H, W) float32 gradient in [0, 1].

    Returns:
        np.ndarray: R varies horizontally, G vertically, B diagonally
    """
    width, height = 16, 8

    r = np.broadcast_to(np.linspace(0, 1, width, dtype=np.float32)[None, :], (height, width))
    g = np.broadcast_to(np.linspace(0, 1, height, dtype=np.float32)[:, None], (height, width))
    b = (r + g) / 2.0

    return np.stack([r, g, b], axis=0).astype(np.float32)


@pytest.fixture
def symmetric_array():
    """Provide a (3, 4, 5) float64 array with values spread over [-1.5, 1.5]."""
    return np.linspace(-1.5, 1.5, 3 * 4 * 5).reshape(3, 4, 5)


@pytest.fixture
def int_array():
    """Provide a (3, 2, 3) int32 array holding values below, inside and above [0, 255]."""
    values = [-10, 0, 7, 128, 255, 300, 1, 2, 3, 4, 5, 6, 250, 251, 252, 253, 254, 1000]
    return np.array(values, dtype=np.int32).reshape(3, 2, 3)
