#!/usr/bin/env python3

"""histlib/__init__.py: Import header for histogram rendering and contrast normalization"""

from .improc.hist_renderer import HistogramConfig, HistogramRenderer
from .improc.contrast import ContrastNormalizer, NormalizationBounds
from .utils.improc_utils import (
    Color,
    Channel,
    HsvChannel,
    COLOR_BLACK,
    COLOR_WHITE,
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_RED,
)

# Exposes the two components and their shared types at the top-level of the package
__all__ = [
    "HistogramConfig",
    "HistogramRenderer",
    "ContrastNormalizer",
    "NormalizationBounds",
    "Color",
    "Channel",
    "HsvChannel",
    "COLOR_BLACK",
    "COLOR_WHITE",
    "COLOR_BLUE",
    "COLOR_GREEN",
    "COLOR_RED",
]


# -----------------------------------------------
# Authorship Information
# -----------------------------------------------
__author__ = "Gian-Mateo (GM) Tifone"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone", "Paul Filitchkin"]
__license__ = "MIT"
__version__ = "1.0.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Prototype", "Development", "Production"
