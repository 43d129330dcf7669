"""Exceptions raised when a tensor cannot be turned into pixels."""


class ConversionError(ValueError):
    """Base class for all tensor-to-pixel conversion failures."""

    pass


class ShapeError(ConversionError):
    """Raised when the tensor is not laid out as (3, height, width)."""

    def __init__(self, message: str, shape=None):
        super().__init__(message)
        self.shape = tuple(shape) if shape is not None else None


class BufferTooSmallError(ConversionError):
    """Raised when shape and strides reach outside the element buffer."""

    def __init__(self, required: int, available: int, lowest: int = 0):
        if lowest < 0:
            message = (
                f"strides reach index {lowest}, before the start of the element buffer"
            )
        else:
            message = (
                f"element buffer holds {available} values, "
                f"shape and strides need {required}"
            )
        super().__init__(message)
        self.required = required
        self.available = available
        self.lowest = lowest


class UnsupportedKindError(ConversionError):
    """Raised for element types outside float64, float32 and int32."""

    pass


class ParameterKindError(ConversionError):
    """Raised when offset or scale cannot be expressed in the tensor's kind."""

    pass


class ValueOverflowError(ConversionError, OverflowError):
    """Raised when integer arithmetic leaves the range of its kind."""

    pass


class NonFiniteValueError(ConversionError):
    """Raised when a transformed value is NaN and has no pixel value."""

    pass
