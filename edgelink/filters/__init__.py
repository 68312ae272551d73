"""Convolution, smoothing kernels and gradient operators."""

from edgelink.filters.convolution import convolve
from edgelink.filters.gradient import full_sobel, sobel_derivatives
from edgelink.filters.kernels import build_gaussian_kernel

__all__ = [
    "convolve",
    "full_sobel",
    "sobel_derivatives",
    "build_gaussian_kernel",
]
