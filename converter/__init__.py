"""Conversion of channel-first inference tensors into RGBA pixel buffers."""

from .convert import convert, convert_array
from .errors import (
    BufferTooSmallError,
    ConversionError,
    NonFiniteValueError,
    ParameterKindError,
    ShapeError,
    UnsupportedKindError,
    ValueOverflowError,
)
from .numeric import NumericKind, clamp
from .pixels import PixelBuffer
from .tensor import StridedTensor, as_strided_tensor

__all__ = [
    # Conversion
    "convert",
    "convert_array",
    # Data model
    "NumericKind",
    "PixelBuffer",
    "StridedTensor",
    "as_strided_tensor",
    "clamp",
    # Errors
    "BufferTooSmallError",
    "ConversionError",
    "NonFiniteValueError",
    "ParameterKindError",
    "ShapeError",
    "UnsupportedKindError",
    "ValueOverflowError",
]
