"""contrast.py: Value-channel contrast normalization of BGR images"""

__author__ = "Gian-Mateo (GM) Tifone"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone", "Paul Filitchkin"]
__license__ = "MIT"
__version__ = "1.0.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Development", or "Production", or "Prototype".


# --------------------------------------------------------------------------------------------
# Imports
# --------------------------------------------------------------------------------------------
# Python imports
import logging
import math
import numpy as np
import cv2 as cv
from typing import NamedTuple

# Helper functions
from ..utils.improc_utils import _round_half_away, _check_bgr_image
# ENUM
from ..utils.improc_utils import HsvChannel


# --------------------------------------------------------------------------------------------
# Constants & Datatypes
# --------------------------------------------------------------------------------------------
VALUE_LEVELS = 256          # 8-bit value channel
VALUE_MAX = VALUE_LEVELS - 1


class NormalizationBounds(NamedTuple):
    """Input window (min, max) of the linear value-channel stretch."""
    min: int
    max: int

    @property
    def is_degenerate(self) -> bool:
        """No usable window; stretching would divide by zero."""
        return self.max <= self.min

    @property
    def is_identity(self) -> bool:
        return self.min == 0 and self.max == VALUE_MAX


# --------------------------------------------------------------------------------------------
# Normalizer
# --------------------------------------------------------------------------------------------
class ContrastNormalizer:
    """
    Stretches the HSV value channel of a BGR image to the full 0-255 range.
    Hue and saturation are passed through untouched.

    Degenerate windows (flat value channel, or clipping that collapses min onto max)
    leave the image unchanged instead of dividing by zero.
    """

    def normalize(self, img: np.ndarray) -> np.ndarray:
        """
        Linear stretch between the darkest and brightest value in the image.

        Args:
            img (np.ndarray): 8-bit BGR image.

        Returns:
            np.ndarray: Normalized 8-bit BGR image, same shape as `img`.
        """

        img_hsv = self._to_hsv(img)
        bounds = self._extreme_bounds(img_hsv[:, :, HsvChannel.VALUE])

        return self._apply(img, img_hsv, bounds)


    def normalize_clipped(self, img: np.ndarray, clip_percent: float) -> np.ndarray:
        """
        Linear stretch that ignores the most extreme `clip_percent` of pixels, half at each end.

        Args:
            img (np.ndarray): 8-bit BGR image.
            clip_percent (float): Percentage (0.0 - 100.0) of pixels to exclude from the window.
                Values outside the range are clamped. 0 gives the same result as `normalize`.

        Returns:
            np.ndarray: Normalized 8-bit BGR image, same shape as `img`.
        """

        clip_percent = self._check_clip_percent(clip_percent)
        img_hsv = self._to_hsv(img)
        bounds = self._clipped_bounds(img_hsv[:, :, HsvChannel.VALUE], clip_percent)

        return self._apply(img, img_hsv, bounds)


    # ----------------------------------------------------------------------------------------
    # Bounds
    # ----------------------------------------------------------------------------------------
    def value_bounds(self, img: np.ndarray) -> NormalizationBounds:
        """True (min, max) of the value channel of a BGR image."""
        return self._extreme_bounds(self._to_hsv(img)[:, :, HsvChannel.VALUE])


    def clipped_value_bounds(self, img: np.ndarray, clip_percent: float) -> NormalizationBounds:
        """(min, max) cut points of the value channel after clipping `clip_percent` of pixels."""
        clip_percent = self._check_clip_percent(clip_percent)
        return self._clipped_bounds(self._to_hsv(img)[:, :, HsvChannel.VALUE], clip_percent)


    def value_histogram(self, img: np.ndarray) -> np.ndarray:
        """
        Frequency of every value-channel level.

        Returns:
            np.ndarray: int64 array of 256 counts.
        """
        return self._histogram(self._to_hsv(img)[:, :, HsvChannel.VALUE])


    @staticmethod
    def remap_lut(bounds: NormalizationBounds) -> np.ndarray:
        """
        Lookup table mapping every input level through the stretch
        new = (old - min) * 255 / (max - min), clamped to [0, 255] and rounded half away from zero.

        Args:
            bounds (NormalizationBounds): Stretch window. Degenerate bounds give the identity table.

        Returns:
            np.ndarray: uint8 array of 256 entries, usable with cv.LUT.
        """
        levels = np.arange(VALUE_LEVELS, dtype=np.float64)
        if bounds.is_degenerate:
            return levels.astype(np.uint8)

        # Multiply before dividing; keeps exact ties (e.g. 127.5) exact
        stretched = (levels - bounds.min) * VALUE_MAX / (bounds.max - bounds.min)
        return np.clip(_round_half_away(stretched), 0, VALUE_MAX).astype(np.uint8)


    # ----------------------------------------------------------------------------------------
    # Internals
    # ----------------------------------------------------------------------------------------
    @staticmethod
    def _to_hsv(img: np.ndarray) -> np.ndarray:
        _check_bgr_image(img, "CONTRAST")
        return cv.cvtColor(img, cv.COLOR_BGR2HSV)


    @staticmethod
    def _check_clip_percent(clip_percent: float) -> float:
        if isinstance(clip_percent, bool) or not isinstance(clip_percent, (int, float, np.integer, np.floating)):
            raise TypeError(f"[CONTRAST] clip_percent must be a number, got {type(clip_percent).__name__}")
        if not math.isfinite(clip_percent):
            raise ValueError(f"[CONTRAST] clip_percent must be finite, got {clip_percent}")

        return min(max(float(clip_percent), 0.0), 100.0)


    @staticmethod
    def _histogram(value: np.ndarray) -> np.ndarray:
        return np.bincount(value.ravel(), minlength=VALUE_LEVELS).astype(np.int64)


    @staticmethod
    def _extreme_bounds(value: np.ndarray) -> NormalizationBounds:
        return NormalizationBounds(int(value.min()), int(value.max()))


    def _clipped_bounds(self, value: np.ndarray, clip_percent: float) -> NormalizationBounds:
        bins = self._histogram(value)

        # Number of pixels to remove from the histogram, split between both ends
        pixels_to_clip = int(_round_half_away(clip_percent / 100.0 * value.size))
        half_clip = int(_round_half_away(pixels_to_clip / 2))

        # Nothing to clip: the window is the true extremes
        if half_clip == 0:
            return self._extreme_bounds(value)

        return self._scan_bounds(bins, half_clip)


    @staticmethod
    def _scan_bounds(bins: np.ndarray, half_clip: int) -> NormalizationBounds:
        """
        Cut points of a 256-bucket histogram: the first bucket, scanning inward from each end,
        at which the running count exceeds `half_clip`.

        Lower scan covers buckets 1..254 with the sum seeded by bucket 0.
        Upper scan covers buckets 255..2 with the sum seeded by bucket 255, so bucket 255 is
        counted twice. Either bound stays at its extreme (0 / 255) when its end bucket alone
        already holds `half_clip` pixels, or when no bucket qualifies.
        """
        lower, upper = 0, VALUE_MAX

        # Lower pixel bound
        if bins[0] < half_clip:
            running = bins[0] + np.cumsum(bins[1:VALUE_MAX])
            hits = np.flatnonzero(running > half_clip)
            if hits.size:
                lower = int(hits[0]) + 1

        # Upper pixel bound
        if bins[VALUE_MAX] < half_clip:
            running = bins[VALUE_MAX] + np.cumsum(bins[VALUE_MAX:1:-1])
            hits = np.flatnonzero(running > half_clip)
            if hits.size:
                upper = VALUE_MAX - int(hits[0])

        return NormalizationBounds(lower, upper)


    def _apply(self, img: np.ndarray, img_hsv: np.ndarray, bounds: NormalizationBounds) -> np.ndarray:
        logging.debug(f"[CONTRAST] Value window: min={bounds.min}, max={bounds.max}")

        # Flat window, or already full range: value channel stays as is.
        # Returns the input itself, not an HSV->BGR round trip of it (8-bit HSV is lossy)
        if bounds.is_degenerate or bounds.is_identity:
            return img.copy()

        planes = list(cv.split(img_hsv))
        planes[HsvChannel.VALUE] = cv.LUT(planes[HsvChannel.VALUE], self.remap_lut(bounds))

        return cv.cvtColor(cv.merge(planes), cv.COLOR_HSV2BGR)
