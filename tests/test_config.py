"""
Tests for YAML configuration loading.
"""

import pytest
import yaml

from edgelink.config import CannyConfig, Config, load_config


def write_yaml(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "absent.yaml"))

        assert config == Config()
        assert config.canny == CannyConfig()
        assert config.system.log_level == "INFO"
        assert config.output.suffix == "_edges"

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(write_yaml(tmp_path, "")) == Config()

    def test_full_file(self, tmp_path):
        path = write_yaml(tmp_path, """
system:
  log_level: DEBUG
  metrics_file: out/metrics.jsonl
canny:
  blur_shape: [3, 7]
  blur_covariance: [1, 2.5]
  lower_threshold: 0.1
  upper_threshold: 0.4
output:
  suffix: _canny
""")

        config = load_config(path)

        assert config.system.log_level == "DEBUG"
        assert config.system.metrics_file == "out/metrics.jsonl"
        assert config.canny.blur_shape == (3, 7)
        assert config.canny.blur_covariance == (1.0, 2.5)
        assert config.canny.lower_threshold == pytest.approx(0.1)
        assert config.canny.upper_threshold == pytest.approx(0.4)
        assert config.output.suffix == "_canny"
        assert config.output.extension == ".png"

    def test_partial_canny_section_leaves_rest_unset(self, tmp_path):
        config = load_config(write_yaml(tmp_path, "canny:\n  upper_threshold: 0.9\n"))

        assert config.canny.upper_threshold == pytest.approx(0.9)
        assert config.canny.lower_threshold is None
        assert config.canny.blur_shape is None

    def test_bad_pair_length_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(write_yaml(tmp_path, "canny:\n  blur_shape: [3, 3, 3]\n"))

    def test_scalar_pair_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(write_yaml(tmp_path, "canny:\n  blur_shape: 5\n"))

    def test_non_mapping_section_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(write_yaml(tmp_path, "canny: [3, 3]\n"))

    def test_non_numeric_threshold_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_config(write_yaml(tmp_path, "canny:\n  lower_threshold: [0.1]\n"))

    def test_malformed_yaml_raises_yaml_error(self, tmp_path):
        with pytest.raises(yaml.YAMLError):
            load_config(write_yaml(tmp_path, "canny: [unclosed\n"))
