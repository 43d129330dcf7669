"""Constants used throughout the tensor conversion codebase."""

# Target range of the affine transform
PIXEL_MAX = 255

# (offset, scale) presets for common model output ranges
# Data in [0, 1): (x + 0) * 255
UNIT_RANGE = (0.0, 255.0)
# Data in [-1, 1]: (x + 1) * 127.5
SYMMETRIC_RANGE = (1.0, 127.5)

PRESETS = {
    "unit": UNIT_RANGE,
    "symmetric": SYMMETRIC_RANGE,
}

# Tensor files the CLI knows how to load
NUMPY_SUFFIXES = (".npy",)
TORCH_SUFFIXES = (".pt", ".pth")
TENSOR_SUFFIXES = NUMPY_SUFFIXES + TORCH_SUFFIXES

RAW_SUFFIX = ".rgba"
