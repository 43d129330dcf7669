"""Numeric kinds a tensor may hold and the arithmetic the converter needs from them."""

import numbers
from enum import Enum

import numpy as np
import torch

from .errors import ParameterKindError, UnsupportedKindError, ValueOverflowError

INT32_MIN = int(np.iinfo(np.int32).min)
INT32_MAX = int(np.iinfo(np.int32).max)


class NumericKind(Enum):
    """The closed set of element types the converter accepts."""

    FLOAT64 = "float64"
    FLOAT32 = "float32"
    INT32 = "int32"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @property
    def is_integer(self) -> bool:
        return self is NumericKind.INT32

    @classmethod
    def from_dtype(cls, dtype) -> "NumericKind":
        """
        Resolve the kind of a numpy dtype.

        Non-native byte order is accepted for the supported types.

        Raises:
            UnsupportedKindError: If the dtype is not float64, float32 or int32
        """
        dtype = np.dtype(dtype)
        if not dtype.isnative:
            dtype = dtype.newbyteorder("=")
        for kind in cls:
            if kind.dtype == dtype:
                return kind
        raise UnsupportedKindError(
            f"unsupported element type {dtype}, expected one of "
            f"{', '.join(kind.value for kind in cls)}"
        )

    @classmethod
    def from_torch_dtype(cls, dtype: torch.dtype) -> "NumericKind":
        kind = _TORCH_KINDS.get(dtype)
        if kind is None:
            raise UnsupportedKindError(
                f"unsupported element type {dtype}, expected one of "
                f"{', '.join(str(d) for d in _TORCH_KINDS)}"
            )
        return kind

    def coerce(self, value):
        """
        Convert an offset or scale parameter into a scalar of this kind.

        Args:
            value: A real number (Python or numpy scalar)

        Returns:
            numpy scalar of this kind's dtype

        Raises:
            ParameterKindError: If the value is not a real number, or is not
                exactly representable as an int32 for the INT32 kind
        """
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise ParameterKindError(
                f"expected a real number for {self.value} parameter, "
                f"got {type(value).__name__}"
            )
        if self.is_integer:
            if not float(value).is_integer():
                raise ParameterKindError(f"{value!r} is not an integer, tensor holds int32")
            as_int = int(value)
            if not INT32_MIN <= as_int <= INT32_MAX:
                raise ParameterKindError(f"{value!r} is outside the int32 range")
            return np.int32(as_int)
        try:
            return self.dtype.type(value)
        except OverflowError as e:
            raise ParameterKindError(f"parameter is too large for {self.value}") from e

    # Dispatch to the per-kind arithmetic table

    def from_int(self, value: int):
        return _OPERATIONS[self].from_int(value)

    def add(self, lhs, rhs) -> np.ndarray:
        return _OPERATIONS[self].add(lhs, rhs)

    def multiply(self, lhs, rhs) -> np.ndarray:
        return _OPERATIONS[self].multiply(lhs, rhs)

    def to_uint8(self, values) -> np.ndarray:
        return _OPERATIONS[self].to_uint8(values)


class _NativeOperations:
    """Arithmetic carried out in the kind's own dtype and precision."""

    def __init__(self, dtype):
        self.dtype = np.dtype(dtype)

    def from_int(self, value: int):
        return self.dtype.type(value)

    def add(self, lhs, rhs) -> np.ndarray:
        # Overflow to inf is fine, clamping saturates it afterwards
        with np.errstate(over="ignore", invalid="ignore"):
            return np.add(lhs, rhs, dtype=self.dtype)

    def multiply(self, lhs, rhs) -> np.ndarray:
        with np.errstate(over="ignore", invalid="ignore"):
            return np.multiply(lhs, rhs, dtype=self.dtype)

    def to_uint8(self, values) -> np.ndarray:
        # astype truncates toward zero; callers clamp to [0, 255] first
        return np.asarray(values).astype(np.uint8)


class _Int32Operations(_NativeOperations):
    """int32 arithmetic that fails instead of wrapping around."""

    def __init__(self):
        super().__init__(np.int32)

    def add(self, lhs, rhs) -> np.ndarray:
        return self._checked(np.add(lhs, rhs, dtype=np.int64), "addition")

    def multiply(self, lhs, rhs) -> np.ndarray:
        return self._checked(np.multiply(lhs, rhs, dtype=np.int64), "multiplication")

    def _checked(self, result: np.ndarray, operation: str) -> np.ndarray:
        result = np.asarray(result)
        if result.size and (result.min() < INT32_MIN or result.max() > INT32_MAX):
            raise ValueOverflowError(f"int32 {operation} overflowed")
        return result.astype(np.int32)


_OPERATIONS = {
    NumericKind.FLOAT64: _NativeOperations(np.float64),
    NumericKind.FLOAT32: _NativeOperations(np.float32),
    NumericKind.INT32: _Int32Operations(),
}

_TORCH_KINDS = {
    torch.float64: NumericKind.FLOAT64,
    torch.float32: NumericKind.FLOAT32,
    torch.int32: NumericKind.INT32,
}


def clamp(values, low, high) -> np.ndarray:
    """
    Saturate values to the closed interval [low, high].

    Comparison happens in the values' own dtype, so narrowing afterwards can
    never wrap around. NaN is neither below nor above the bounds and passes
    through unchanged.
    """
    values = np.asarray(values)
    clamped = np.where(values < low, low, np.where(values > high, high, values))
    return clamped.astype(values.dtype, copy=False)
