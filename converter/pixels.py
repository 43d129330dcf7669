"""Packed RGBA8 output buffer."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

RGBA_CHANNELS = 4


@dataclass(frozen=True)
class PixelBuffer:
    """
    Row-major RGBA8 pixels, four bytes per pixel in R, G, B, A order.

    ``(data, width, height)`` is the complete hand-off to any image library.
    """

    data: bytes
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"width and height must be non-negative, got {self.width}x{self.height}")
        expected = self.width * self.height * RGBA_CHANNELS
        if len(self.data) != expected:
            raise ValueError(
                f"expected {expected} bytes for {self.width}x{self.height} RGBA, got {len(self.data)}"
            )

    def __len__(self) -> int:
        return len(self.data)

    @property
    def bytes_per_row(self) -> int:
        return self.width * RGBA_CHANNELS

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the (r, g, b, a) values of the pixel in column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        offset = y * self.bytes_per_row + x * RGBA_CHANNELS
        r, g, b, a = self.data[offset : offset + RGBA_CHANNELS]
        return r, g, b, a

    def to_numpy(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, RGBA_CHANNELS
        )

    def as_tuple(self) -> Tuple[bytes, int, int]:
        return self.data, self.width, self.height
