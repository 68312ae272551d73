"""Canny edge detection: suppression, hysteresis linking and the full pipeline."""

from edgelink.canny.hysteresis import HysteresisLinker, expand_candidates, link_edges
from edgelink.canny.neighbors import NeighborSampler
from edgelink.canny.parameters import CannyBuilder, CannyParameters
from edgelink.canny.pipeline import CannyPipeline, apply_canny, build_parameters
from edgelink.canny.suppression import DirectionalSuppressor, suppress_non_maxima

__all__ = [
    "CannyBuilder",
    "CannyParameters",
    "CannyPipeline",
    "apply_canny",
    "build_parameters",
    "DirectionalSuppressor",
    "suppress_non_maxima",
    "HysteresisLinker",
    "expand_candidates",
    "link_edges",
    "NeighborSampler",
]
