"""Configuration for tensor-to-pixel conversion."""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import List, Literal, Optional, Tuple, get_args

from .constants import PIXEL_MAX

OutputFormat = Literal["png", "bmp", "tiff", "webp", "raw"]

VALID_OUTPUT_FORMATS = get_args(OutputFormat)


class ConfigValidationError(ValueError):
    """Raised when config validation fails."""

    pass


@dataclass
class ConversionConfig:
    """
    Parameters of the affine transform and the output format.

    When ``value_range`` is set it takes precedence over ``offset`` and
    ``scale``: the range [low, high] is mapped onto [0, 255].
    """

    offset: float = 0.0
    scale: float = 255.0
    value_range: Optional[List[float]] = None
    output_format: OutputFormat = "png"

    def validate(self) -> None:
        errors = []

        for name in ("offset", "scale"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number, got {type(value).__name__}")

        if self.value_range is not None:
            if not isinstance(self.value_range, (list, tuple)) or len(self.value_range) != 2:
                errors.append(f"value_range must be a [low, high] pair, got {self.value_range!r}")
            elif not all(
                isinstance(v, (int, float)) and not isinstance(v, bool) for v in self.value_range
            ):
                errors.append(f"value_range entries must be numbers, got {self.value_range!r}")
            elif self.value_range[1] <= self.value_range[0]:
                errors.append(
                    f"value_range high must exceed low, got {list(self.value_range)}"
                )

        if self.output_format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"output_format must be one of {VALID_OUTPUT_FORMATS}, got '{self.output_format}'"
            )

        if errors:
            raise ConfigValidationError("Config validation failed:\n  - " + "\n  - ".join(errors))

    def parameters(self) -> Tuple[float, float]:
        """Return the (offset, scale) pair to pass to the converter."""
        if self.value_range is not None:
            low, high = self.value_range
            return -low, PIXEL_MAX / (high - low)
        return self.offset, self.scale

    @classmethod
    def for_range(cls, low: float, high: float, **kwargs) -> "ConversionConfig":
        return cls(value_range=[low, high], **kwargs)

    @classmethod
    def from_dict(cls, data: dict) -> "ConversionConfig":
        valid_fields = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in valid_fields}
        if isinstance(kwargs.get("value_range"), tuple):
            kwargs["value_range"] = list(kwargs["value_range"])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, file_path: str | Path, validate: bool = True) -> "ConversionConfig":
        with open(file_path, "r") as f:
            data = json.load(f)
        config = cls.from_dict(data)
        if validate:
            config.validate()
        return config

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, file_path: str | Path) -> None:
        with open(file_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


def load_config(config_path: str | Path, validate: bool = True) -> ConversionConfig:
    return ConversionConfig.from_json(config_path, validate=validate)
