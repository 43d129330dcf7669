"""
Tensor to RGBA pixel conversion.

Takes a channel-first (3, height, width) tensor from an inference engine and
maps every value through ``(value + offset) * scale``, clamps the result to
[0, 255] and interleaves the channels into packed RGBA8 with opaque alpha.

Narrowing to a byte truncates rather than rounds: 191.25 and 191.9 both
become 191.

For data in [0, 1) use ``offset=0, scale=255``; for data in [-1, 1] use
``offset=1, scale=127.5``.
"""

import numpy as np

from .errors import NonFiniteValueError, ShapeError
from .numeric import NumericKind, clamp
from .pixels import RGBA_CHANNELS, PixelBuffer
from .tensor import StridedTensor, as_strided_tensor

COLOR_CHANNELS = 3
ALPHA_OPAQUE = 255


def _validate_layout(tensor: StridedTensor) -> None:
    if tensor.ndim != 3:
        raise ShapeError(
            f"expected 3 dimensions (channels, height, width), got shape {list(tensor.shape)}",
            shape=tensor.shape,
        )
    if tensor.shape[0] != COLOR_CHANNELS:
        raise ShapeError(
            f"expected 3 channels in the first dimension, got {tensor.shape[0]}",
            shape=tensor.shape,
        )
    if len(tensor.strides) != tensor.ndim:
        raise ShapeError(
            f"expected one stride per dimension, got {len(tensor.strides)} strides "
            f"for shape {list(tensor.shape)}",
            shape=tensor.shape,
        )
    if any(n < 0 for n in tensor.shape):
        raise ShapeError(
            f"dimensions must be non-negative, got shape {list(tensor.shape)}",
            shape=tensor.shape,
        )


def convert(tensor: StridedTensor, offset, scale) -> PixelBuffer:
    """
    Convert a (3, height, width) tensor into an RGBA8 pixel buffer.

    Args:
        tensor: Input tensor; never modified and not retained
        offset: Added to every value first, in the tensor's numeric kind
        scale: Multiplied into the offset value, in the tensor's numeric kind

    Returns:
        PixelBuffer of height * width * 4 bytes

    Raises:
        ShapeError: If the tensor is not (3, height, width)
        BufferTooSmallError: If the strides reach outside the element buffer
        ParameterKindError: If offset or scale do not fit the tensor's kind
        ValueOverflowError: If int32 arithmetic overflows
        NonFiniteValueError: If a transformed value is NaN
    """
    _validate_layout(tensor)
    tensor.check_bounds()

    kind = tensor.kind
    offset = kind.coerce(offset)
    scale = kind.coerce(scale)

    _, height, width = tensor.shape
    channel_stride, height_stride, width_stride = tensor.strides

    # Linear index of channel 0 for every (h, w)
    base = (
        tensor.start
        + np.arange(height, dtype=np.int64)[:, None] * height_stride
        + np.arange(width, dtype=np.int64)[None, :] * width_stride
    )

    low, high = kind.from_int(0), kind.from_int(255)
    channels = []
    for c in range(COLOR_CHANNELS):
        raw = tensor.gather(base + c * channel_stride)
        transformed = kind.multiply(kind.add(raw, offset), scale)
        if not kind.is_integer and np.isnan(transformed).any():
            raise NonFiniteValueError(
                f"channel {c} produces NaN after (value + {offset}) * {scale}"
            )
        channels.append(kind.to_uint8(clamp(transformed, low, high)))

    rgba = np.empty((height, width, RGBA_CHANNELS), dtype=np.uint8)
    for c, channel in enumerate(channels):
        rgba[..., c] = channel
    rgba[..., 3] = ALPHA_OPAQUE
    return PixelBuffer(data=rgba.tobytes(), width=width, height=height)


def convert_array(obj, offset, scale) -> PixelBuffer:
    """Convert a StridedTensor, numpy array or torch tensor."""
    return convert(as_strided_tensor(obj), offset, scale)
