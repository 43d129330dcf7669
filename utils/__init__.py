"""Utility functions for loading tensors and presenting converted pixels."""

from .config import ConfigValidationError, ConversionConfig, load_config
from .constants import PRESETS, SYMMETRIC_RANGE, TENSOR_SUFFIXES, UNIT_RANGE
from .image import pixels_to_pil, save_pixels_as_image, tensor_to_pil
from .io import load_tensor, read_raw_rgba, write_raw_rgba

__all__ = [
    # Config
    "ConversionConfig",
    "ConfigValidationError",
    "load_config",
    # Constants
    "PRESETS",
    "SYMMETRIC_RANGE",
    "TENSOR_SUFFIXES",
    "UNIT_RANGE",
    # Tensor and raw I/O
    "load_tensor",
    "read_raw_rgba",
    "write_raw_rgba",
    # Image conversion
    "pixels_to_pil",
    "save_pixels_as_image",
    "tensor_to_pil",
]
