"""Tests for the configuration system."""

import json

import pytest

from utils.config import ConfigValidationError, ConversionConfig, load_config
from utils.constants import PRESETS, SYMMETRIC_RANGE, UNIT_RANGE


class TestConversionConfig:
    """Tests for ConversionConfig dataclass."""

    def test_default_values(self):
        """Test default config values."""
        config = ConversionConfig()
        assert config.offset == 0.0
        assert config.scale == 255.0
        assert config.value_range is None
        assert config.output_format == "png"
        assert config.parameters() == (0.0, 255.0)

    def test_custom_values(self):
        """Test custom config values."""
        config = ConversionConfig(offset=1.0, scale=127.5, output_format="raw")
        assert config.parameters() == (1.0, 127.5)
        assert config.output_format == "raw"

    def test_value_range_overrides_offset_and_scale(self):
        config = ConversionConfig(offset=3.0, scale=9.0, value_range=[-1.0, 1.0])
        assert config.parameters() == (1.0, 127.5)

    def test_for_range(self):
        config = ConversionConfig.for_range(0.0, 1.0)
        assert config.value_range == [0.0, 1.0]
        assert config.parameters() == (-0.0, 255.0)

    def test_presets_match_documented_ranges(self):
        assert PRESETS["unit"] == UNIT_RANGE == (0.0, 255.0)
        assert PRESETS["symmetric"] == SYMMETRIC_RANGE == (1.0, 127.5)

    def test_from_dict(self):
        """Test creating config from dictionary."""
        data = {
            "offset": 1.0,
            "scale": 127.5,
            "output_format": "bmp",
            "unknown_key": "ignored",
        }
        config = ConversionConfig.from_dict(data)

        assert config.offset == 1.0
        assert config.scale == 127.5
        assert config.output_format == "bmp"
        assert config.value_range is None

    def test_from_dict_with_defaults(self):
        """Test creating config from empty dictionary uses defaults."""
        config = ConversionConfig.from_dict({})
        assert config.parameters() == (0.0, 255.0)
        assert config.output_format == "png"

    def test_from_dict_tuple_range(self):
        config = ConversionConfig.from_dict({"value_range": (0, 2)})
        assert config.value_range == [0, 2]

    def test_to_dict(self):
        """Test converting config to dictionary."""
        config = ConversionConfig(offset=1.0, scale=127.5, value_range=[-1.0, 1.0])
        data = config.to_dict()

        assert data == {
            "offset": 1.0,
            "scale": 127.5,
            "value_range": [-1.0, 1.0],
            "output_format": "png",
        }


class TestValidation:
    """Tests for ConversionConfig.validate."""

    def test_default_is_valid(self):
        ConversionConfig().validate()

    def test_invalid_output_format(self):
        with pytest.raises(ConfigValidationError, match="output_format must be one of"):
            ConversionConfig(output_format="gif").validate()

    def test_non_numeric_scale(self):
        with pytest.raises(ConfigValidationError, match="scale must be a number"):
            ConversionConfig(scale="255").validate()

    def test_bool_offset_rejected(self):
        with pytest.raises(ConfigValidationError, match="offset must be a number"):
            ConversionConfig(offset=True).validate()

    def test_inverted_range(self):
        with pytest.raises(ConfigValidationError, match="high must exceed low"):
            ConversionConfig(value_range=[1.0, -1.0]).validate()

    def test_malformed_range(self):
        with pytest.raises(ConfigValidationError, match="pair"):
            ConversionConfig(value_range=[0.0, 1.0, 2.0]).validate()

    def test_collects_all_errors(self):
        config = ConversionConfig(scale="x", output_format="gif")
        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "scale" in message
        assert "output_format" in message

    def test_validation_error_is_value_error(self):
        assert issubclass(ConfigValidationError, ValueError)


class TestConfigFiles:
    """Loading and saving JSON configs."""

    def test_json_roundtrip(self, temp_dir):
        path = temp_dir / "config.json"
        ConversionConfig(offset=1.0, scale=127.5, output_format="tiff").to_json(path)

        config = load_config(path)
        assert config.parameters() == (1.0, 127.5)
        assert config.output_format == "tiff"

    def test_load_validates(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"output_format": "gif"}))

        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_load_without_validation(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"output_format": "gif"}))

        config = load_config(path, validate=False)
        assert config.output_format == "gif"
