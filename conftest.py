"""conftest.py: Shared pytest fixtures (synthetic 8-bit BGR images)"""

import numpy as np
import pytest


def _gray_row(values, counts=None) -> np.ndarray:
    """1 x N BGR image of gray pixels (B = G = R), so the HSV value equals the gray level."""
    values = np.asarray(values, dtype=np.uint8)
    if counts is not None:
        values = np.repeat(values, counts)
    return np.repeat(values.reshape(1, -1, 1), 3, axis=2).copy()


@pytest.fixture
def gray_row():
    return _gray_row


@pytest.fixture
def constant_bgr():
    def _make(b: int, g: int, r: int, shape=(8, 12)) -> np.ndarray:
        img = np.empty((*shape, 3), dtype=np.uint8)
        img[:] = (b, g, r)
        return img
    return _make
