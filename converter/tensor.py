"""Read-only strided view over a flat element buffer."""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import torch
from numpy.lib.stride_tricks import as_strided

from .errors import BufferTooSmallError
from .numeric import NumericKind


@dataclass(frozen=True, eq=False)
class StridedTensor:
    """
    A tensor described by shape, per-dimension strides and a flat buffer.

    Strides count elements, not bytes. The element at multi-index ``i`` lives
    at ``start + sum(i[d] * strides[d])``; nothing assumes the buffer is
    contiguous or row-major.
    """

    shape: Tuple[int, ...]
    strides: Tuple[int, ...]
    elements: np.ndarray
    start: int = 0

    def __post_init__(self):
        object.__setattr__(self, "shape", tuple(int(n) for n in self.shape))
        object.__setattr__(self, "strides", tuple(int(s) for s in self.strides))
        if not isinstance(self.elements, np.ndarray):
            raise TypeError(
                f"elements must be a numpy array, got {type(self.elements).__name__}"
            )
        if self.elements.ndim != 1:
            raise ValueError(
                f"elements must be a flat 1-D buffer, got {self.elements.ndim} dimensions"
            )
        # Validates the dtype as a side effect
        NumericKind.from_dtype(self.elements.dtype)

    @property
    def kind(self) -> NumericKind:
        return NumericKind.from_dtype(self.elements.dtype)

    @property
    def ndim(self) -> int:
        return len(self.shape)

    def reachable_span(self) -> Optional[Tuple[int, int]]:
        """
        Lowest and highest linear index reachable through shape and strides.

        Returns None when some dimension is empty and nothing is reachable.
        """
        if any(n <= 0 for n in self.shape):
            return None
        lowest = highest = self.start
        for n, stride in zip(self.shape, self.strides):
            extent = (n - 1) * stride
            if extent < 0:
                lowest += extent
            else:
                highest += extent
        return lowest, highest

    def check_bounds(self) -> None:
        """
        Raises:
            BufferTooSmallError: If any reachable index falls outside the buffer
        """
        span = self.reachable_span()
        if span is None:
            return
        lowest, highest = span
        available = len(self.elements)
        if lowest < 0 or highest >= available:
            raise BufferTooSmallError(
                required=highest + 1, available=available, lowest=lowest
            )

    def gather(self, indices: np.ndarray) -> np.ndarray:
        """Read the elements at the given linear indices, raising IndexError if any is out of range."""
        return np.take(self.elements, indices, mode="raise")

    @classmethod
    def from_values(
        cls,
        values: Sequence,
        shape: Sequence[int],
        strides: Sequence[int],
        kind: NumericKind = NumericKind.FLOAT64,
        start: int = 0,
    ) -> "StridedTensor":
        """Build a tensor over a plain sequence of numbers stored as ``kind``."""
        elements = np.array(values, dtype=kind.dtype).reshape(-1)
        elements.flags.writeable = False
        return cls(shape=shape, strides=strides, elements=elements, start=start)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "StridedTensor":
        """
        Describe a numpy array without copying it.

        Byte strides are converted to element strides. Transposed, padded,
        broadcast and reversed views keep their layout; the element buffer is a
        read-only window over the memory the array spans.

        Args:
            array: Array of dtype float64, float32 or int32

        Returns:
            StridedTensor sharing memory with ``array``
        """
        array = np.asarray(array)
        NumericKind.from_dtype(array.dtype)
        if not array.dtype.isnative:
            array = array.astype(array.dtype.newbyteorder("="))

        itemsize = array.dtype.itemsize
        if array.size == 0 or any(s % itemsize for s in array.strides):
            array = np.ascontiguousarray(array)
        if array.size == 0:
            elements = np.empty(0, dtype=array.dtype)
            strides = tuple(s // itemsize for s in array.strides)
            return cls(shape=array.shape, strides=strides, elements=elements)

        strides = tuple(s // itemsize for s in array.strides)

        # Walk reversed axes forwards so the window starts at the lowest address
        forward = array[
            tuple(slice(None, None, -1) if s < 0 else slice(None) for s in strides) or ...
        ]
        start = sum((n - 1) * -s for n, s in zip(array.shape, strides) if s < 0)
        span = 1 + sum((n - 1) * abs(s) for n, s in zip(array.shape, strides))

        elements = as_strided(forward, shape=(span,), strides=(itemsize,), writeable=False)
        return cls(shape=array.shape, strides=strides, elements=elements, start=start)

    @classmethod
    def from_torch(cls, tensor: torch.Tensor) -> "StridedTensor":
        """Describe a torch tensor, detached and on the CPU, keeping its strides."""
        NumericKind.from_torch_dtype(tensor.dtype)
        tensor = tensor.detach().cpu().resolve_neg().resolve_conj()
        return cls.from_numpy(tensor.numpy())


def as_strided_tensor(obj) -> StridedTensor:
    """
    Accept a StridedTensor, numpy array or torch tensor.

    Raises:
        TypeError: For any other input
    """
    if isinstance(obj, StridedTensor):
        return obj
    if isinstance(obj, torch.Tensor):
        return StridedTensor.from_torch(obj)
    if isinstance(obj, np.ndarray):
        return StridedTensor.from_numpy(obj)
    raise TypeError(
        f"expected a StridedTensor, numpy array or torch tensor, got {type(obj).__name__}"
    )
