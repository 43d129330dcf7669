import pickle
from pathlib import Path

import numpy as np
import torch

from converter import PixelBuffer, StridedTensor

from .constants import NUMPY_SUFFIXES, TENSOR_SUFFIXES, TORCH_SUFFIXES


def load_tensor(tensor_path: str | Path) -> StridedTensor:
    """
    Load a tensor saved by numpy (.npy) or torch (.pt, .pth).

    Args:
        tensor_path: Path to the tensor file

    Returns:
        StridedTensor describing the loaded values with their saved strides

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the suffix is unknown, the file is unreadable or holds no tensor
    """
    path = Path(tensor_path)
    if not path.exists():
        raise FileNotFoundError(f"Tensor file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in NUMPY_SUFFIXES:
        try:
            array = np.load(path, allow_pickle=False)
        except (EOFError, OSError) as e:
            raise ValueError(f"Could not read {path}: {e}") from e
        return StridedTensor.from_numpy(array)
    if suffix in TORCH_SUFFIXES:
        try:
            tensor = torch.load(path, map_location="cpu", weights_only=True)
        except (pickle.UnpicklingError, RuntimeError, EOFError) as e:
            raise ValueError(f"Could not read {path}: {e}") from e
        if not isinstance(tensor, torch.Tensor):
            raise ValueError(f"Expected a tensor in {path}, got {type(tensor).__name__}")
        return StridedTensor.from_torch(tensor)

    raise ValueError(f"Unsupported tensor file '{path.name}', expected one of {TENSOR_SUFFIXES}")


def write_raw_rgba(raw_path: str | Path, pixels: PixelBuffer) -> None:
    """Write the packed RGBA bytes as they are, with no header."""
    with open(raw_path, "wb") as f:
        f.write(pixels.data)


def read_raw_rgba(raw_path: str | Path, width: int, height: int) -> PixelBuffer:
    """
    Read a headerless RGBA file written by write_raw_rgba.

    Width and height are not stored in the file and must match what was written.
    """
    with open(raw_path, "rb") as f:
        raw_data = f.read()

    expected = width * height * 4
    if len(raw_data) != expected:
        raise ValueError(
            f"Expected {expected} bytes for a {width}x{height} RGBA image, got {len(raw_data)}"
        )
    return PixelBuffer(data=raw_data, width=width, height=height)
