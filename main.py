"""
Tensor to image conversion script.

Converts channel-first (3, H, W) tensors saved from an inference engine into
RGBA images. Values are mapped through (value + offset) * scale, clamped to
[0, 255] and truncated to bytes.

Using the `convert-dir` command, every tensor file in a folder is converted.
"""

import logging
from pathlib import Path

import typer
from tqdm import tqdm
from typing_extensions import Annotated

from converter import PixelBuffer, StridedTensor, convert
from utils import (
    PRESETS,
    TENSOR_SUFFIXES,
    ConversionConfig,
    load_config,
    load_tensor,
    save_pixels_as_image,
    write_raw_rgba,
)
from utils.constants import RAW_SUFFIX

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",  # Simple format for CLI output
)
logger = logging.getLogger(__name__)

app = typer.Typer()


def resolve_parameters(
    config_path: str | None,
    preset: str | None,
    offset: float | None,
    scale: float | None,
) -> ConversionConfig:
    """
    Build the conversion config from a JSON file, a preset and explicit flags.

    Explicit --offset/--scale win over the preset, which wins over the file.
    """
    config = load_config(config_path) if config_path else ConversionConfig()

    if preset is not None:
        if preset not in PRESETS:
            raise typer.BadParameter(
                f"preset must be one of {tuple(PRESETS)}, got '{preset}'", param_hint="--preset"
            )
        config.offset, config.scale = PRESETS[preset]
        config.value_range = None
    if offset is not None:
        config.offset = offset
        config.value_range = None
    if scale is not None:
        config.scale = scale
        config.value_range = None

    config.validate()
    return config


def write_output(pixels: PixelBuffer, output_path: Path, output_format: str) -> None:
    """Write pixels as an image, or as headerless RGBA bytes for the raw format."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_format == "raw":
        write_raw_rgba(output_path, pixels)
    else:
        save_pixels_as_image(pixels, str(output_path), format=output_format.upper())


def output_suffix(output_format: str) -> str:
    return RAW_SUFFIX if output_format == "raw" else f".{output_format}"


def describe(tensor: StridedTensor) -> str:
    span = tensor.reachable_span()
    span_text = "empty" if span is None else f"[{span[0]}, {span[1]}]"
    return (
        f"shape={list(tensor.shape)} strides={list(tensor.strides)} "
        f"kind={tensor.kind.value} elements={len(tensor.elements)} span={span_text}"
    )


@app.command(name="convert")
def convert_file(
    input_path: Annotated[str, typer.Argument(help="Tensor file (.npy, .pt, .pth)")],
    output_path: Annotated[
        str | None, typer.Option(help="Defaults to output.<format> for the configured format.")
    ] = None,
    offset: Annotated[float | None, typer.Option(help="Added to every value first.")] = None,
    scale: Annotated[float | None, typer.Option(help="Multiplied in after the offset.")] = None,
    preset: Annotated[
        str | None,
        typer.Option(help="unit: data in [0, 1); symmetric: data in [-1, 1]"),
    ] = None,
    config: Annotated[str | None, typer.Option(help="JSON conversion config")] = None,
) -> None:
    """
    Convert a (3, H, W) tensor file into an RGBA image.
    """
    conversion = resolve_parameters(config, preset, offset, scale)
    if output_path is None:
        output_path = "output" + output_suffix(conversion.output_format)

    offset_value, scale_value = conversion.parameters()
    try:
        tensor = load_tensor(input_path)
        logger.info(f"Loaded {input_path}: {describe(tensor)}")
        pixels = convert(tensor, offset_value, scale_value)
    except ValueError as e:  # includes ConversionError and unreadable files
        logger.error(f"Could not convert {input_path}: {e}")
        raise typer.Exit(code=1)

    write_output(pixels, Path(output_path), conversion.output_format)
    logger.info(f"Saved {pixels.width}x{pixels.height} image to {output_path}")


@app.command(name="convert-dir")
def convert_dir(
    input_folder: Annotated[str, typer.Argument(help="Folder of tensor files")],
    output_folder: Annotated[str, typer.Argument(help="Folder for converted images")],
    offset: Annotated[float | None, typer.Option(help="Added to every value first.")] = None,
    scale: Annotated[float | None, typer.Option(help="Multiplied in after the offset.")] = None,
    preset: Annotated[
        str | None,
        typer.Option(help="unit: data in [0, 1); symmetric: data in [-1, 1]"),
    ] = None,
    config: Annotated[str | None, typer.Option(help="JSON conversion config")] = None,
    verbose: bool = False,
) -> None:
    """
    Convert every tensor file in a folder.

    Files that fail to convert are logged and skipped; the command exits with
    code 1 if any file failed.
    """
    folder = Path(input_folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Input folder not found: {input_folder}")

    conversion = resolve_parameters(config, preset, offset, scale)
    offset_value, scale_value = conversion.parameters()
    suffix = output_suffix(conversion.output_format)

    tensor_paths = sorted(
        p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in TENSOR_SUFFIXES
    )
    logger.info(f"Found {len(tensor_paths)} tensor files in {input_folder}")

    failed = []
    for tensor_path in tqdm(tensor_paths, desc="Converting", disable=verbose):
        try:
            pixels = convert(load_tensor(tensor_path), offset_value, scale_value)
        except ValueError as e:  # includes ConversionError and unreadable files
            logger.warning(f"Skipping {tensor_path.name}: {e}")
            failed.append(tensor_path)
            continue

        image_path = Path(output_folder) / (tensor_path.stem + suffix)
        write_output(pixels, image_path, conversion.output_format)
        if verbose:
            logger.info(f"  → {image_path} ({pixels.width}x{pixels.height})")

    logger.info(f"Converted {len(tensor_paths) - len(failed)}/{len(tensor_paths)} files")
    if failed:
        raise typer.Exit(code=1)


@app.command()
def inspect(
    input_path: Annotated[str, typer.Argument(help="Tensor file (.npy, .pt, .pth)")],
) -> None:
    """
    Print the layout of a tensor file without converting it.
    """
    tensor = load_tensor(input_path)
    logger.info(describe(tensor))


if __name__ == "__main__":
    app()
