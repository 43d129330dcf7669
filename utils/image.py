"""Image conversion utilities for pixel buffers and PIL Images."""

from PIL import Image

from converter import PixelBuffer, convert_array


def pixels_to_pil(pixels: PixelBuffer) -> Image.Image:
    """
    Wrap a pixel buffer into a PIL Image.

    Args:
        pixels: Packed RGBA8 buffer from the converter

    Returns:
        PIL Image in RGBA mode of size (width, height)
    """
    return Image.frombytes("RGBA", (pixels.width, pixels.height), pixels.data)


def tensor_to_pil(tensor, offset, scale) -> Image.Image:
    """
    Convert a (3, H, W) tensor to a PIL Image.

    Args:
        tensor: StridedTensor, numpy array or torch tensor of shape (3, H, W)
        offset: Added to every value before scaling
        scale: Multiplied into the offset value

    Returns:
        PIL Image in RGBA mode
    """
    return pixels_to_pil(convert_array(tensor, offset, scale))


def save_pixels_as_image(pixels: PixelBuffer, path: str, format: str | None = None) -> None:
    """
    Save a pixel buffer as an image file.

    Args:
        pixels: Packed RGBA8 buffer
        path: Path where the image will be saved
        format: Optional PIL format name; inferred from the suffix when None
    """
    img = pixels_to_pil(pixels)
    img.save(path, format=format)
