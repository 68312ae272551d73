#!/usr/bin/env python3
"""
edgelink - Command Line Entry Point

Runs Canny edge detection on image files and writes binary edge masks.

Usage:
    # Default parameters, masks next to the inputs
    python -m edgelink.main photo.png

    # Custom thresholds and output directory
    python -m edgelink.main *.png --lower 0.1 --upper 0.4 --output-dir edges/

    # Record per-image latencies and pixel counts
    python -m edgelink.main photo.png --metrics-file metrics.jsonl
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from edgelink.config import Config, load_config
from edgelink.canny.pipeline import CannyPipeline
from edgelink.image import load_grayscale, save_mask
from edgelink.telemetry import MetricsLogger

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Canny edge detection for grayscale images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  edgelink photo.png
  edgelink *.png --lower 0.1 --upper 0.4 --output-dir edges/
  edgelink photo.png --blur-size 7 --variance 1.5 --metrics-file metrics.jsonl
        """,
    )

    parser.add_argument(
        "images",
        nargs="+",
        help="Input image files (read as grayscale)",
    )

    # Output
    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for edge masks (default: next to each input)",
    )

    # Detector
    detector_group = parser.add_argument_group("Detector")
    detector_group.add_argument(
        "--lower",
        type=float,
        default=None,
        help="Lower hysteresis threshold on the [0, 1] scale (default: from config, else 0.3)",
    )
    detector_group.add_argument(
        "--upper",
        type=float,
        default=None,
        help="Upper hysteresis threshold on the [0, 1] scale (default: from config, else 0.7)",
    )
    detector_group.add_argument(
        "--blur-size",
        type=int,
        default=None,
        help="Square Gaussian kernel size, odd (default: from config, else 5)",
    )
    detector_group.add_argument(
        "--variance",
        type=float,
        default=None,
        help="Gaussian variance along both axes (default: from config, else 2.0)",
    )

    # Configuration
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file",
    )
    config_group.add_argument(
        "--metrics-file",
        type=str,
        default=None,
        help="Append per-image metrics to this JSON Lines file",
    )
    config_group.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)",
    )

    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line overrides on top of the loaded configuration."""
    if args.lower is not None:
        config.canny.lower_threshold = args.lower

    if args.upper is not None:
        config.canny.upper_threshold = args.upper

    if args.blur_size is not None:
        config.canny.blur_shape = (args.blur_size, args.blur_size)

    if args.variance is not None:
        config.canny.blur_covariance = (args.variance, args.variance)

    if args.metrics_file:
        config.system.metrics_file = args.metrics_file

    if args.log_level:
        config.system.log_level = args.log_level

    return config


def output_path_for(image_path: Path, config: Config, output_dir: Optional[str]) -> Path:
    """Get the mask path for an input image."""
    directory = Path(output_dir) if output_dir else image_path.parent
    return directory / f"{image_path.stem}{config.output.suffix}{config.output.extension}"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = apply_overrides(load_config(args.config), args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    # Set logging level
    logging.getLogger().setLevel(getattr(logging, config.system.log_level.upper(), logging.INFO))

    pipeline = CannyPipeline.from_config(config.canny)
    params = pipeline.params
    logger.info(
        f"Canny: kernel={params.kernel.shape[0]}x{params.kernel.shape[1]} "
        f"lower={params.lower:g} upper={params.upper:g}"
    )

    metrics_log = MetricsLogger(config.system.metrics_file) if config.system.metrics_file else None
    failures = 0

    try:
        for name in args.images:
            image_path = Path(name)
            try:
                image = load_grayscale(image_path)
                mask, metrics = pipeline.apply_with_metrics(image)
                written = save_mask(output_path_for(image_path, config, args.output_dir), mask)
            except (OSError, ValueError) as e:
                failures += 1
                logger.error(f"{image_path}: {e}")
                continue

            logger.info(
                f"{image_path}: {metrics.edge_pixels} edge pixels "
                f"in {metrics.total_latency_ms:.1f}ms -> {written}"
            )
            if metrics_log is not None:
                metrics_log.log(metrics, source=str(image_path))
    finally:
        if metrics_log is not None:
            metrics_log.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
