"""
Configuration management for edgelink.

Handles loading and access to detector and command-line configuration.
"""

import yaml
from dataclasses import dataclass, field
from typing import Tuple, Optional, Any, Dict
from pathlib import Path


@dataclass
class SystemConfig:
    """Logging and telemetry configuration."""
    log_level: str = "INFO"
    metrics_file: Optional[str] = None


@dataclass
class CannyConfig:
    """
    Canny detector configuration.

    Fields left as None fall back to the CannyBuilder defaults
    (5x5 Gaussian with covariance [2.0, 2.0], thresholds 0.3 / 0.7).
    """
    blur_shape: Optional[Tuple[int, int]] = None
    blur_covariance: Optional[Tuple[float, float]] = None
    lower_threshold: Optional[float] = None
    upper_threshold: Optional[float] = None


@dataclass
class OutputConfig:
    """Edge mask output configuration."""
    suffix: str = "_edges"
    extension: str = ".png"


@dataclass
class Config:
    """Complete configuration."""
    system: SystemConfig = field(default_factory=SystemConfig)
    canny: CannyConfig = field(default_factory=CannyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _optional_pair(value: Any, cast) -> Optional[Tuple]:
    """Convert a 2-element YAML list to a tuple, keeping None."""
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Expected 2 values, got {value!r}")
    return (cast(value[0]), cast(value[1]))


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a config section as a dict, treating an empty section as {}."""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {section!r}")
    return section


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (list, dict)):
        raise ValueError(f"Expected a number, got {value!r}")
    return float(value)


def _parse_canny(data: Dict[str, Any]) -> CannyConfig:
    """Parse canny section from config dict."""
    return CannyConfig(
        blur_shape=_optional_pair(data.get("blur_shape"), int),
        blur_covariance=_optional_pair(data.get("blur_covariance"), float),
        lower_threshold=_optional_float(data.get("lower_threshold")),
        upper_threshold=_optional_float(data.get("upper_threshold")),
    )


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses config.yaml in the
            current working directory

    Returns:
        Populated Config object (defaults if the file doesn't exist)

    Raises:
        yaml.YAMLError: If config file is malformed
        ValueError: If a value has the wrong shape
    """
    if config_path is None:
        config_path = Path.cwd() / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        # Return default configuration
        return Config()

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {config_path}")

    config = Config()

    # Parse system config
    if "system" in data:
        sys_data = _section(data, "system")
        config.system = SystemConfig(
            log_level=sys_data.get("log_level", "INFO"),
            metrics_file=sys_data.get("metrics_file"),
        )

    # Parse canny config
    if "canny" in data:
        config.canny = _parse_canny(_section(data, "canny"))

    # Parse output config
    if "output" in data:
        out_data = _section(data, "output")
        config.output = OutputConfig(
            suffix=out_data.get("suffix", "_edges"),
            extension=out_data.get("extension", ".png"),
        )

    return config
