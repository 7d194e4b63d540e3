"""hist_renderer.py: Histogram computation and bar-chart rendering"""

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
import numpy as np
import cv2 as cv
from typing import Any, List, Sequence

# Helper functions
from ..utils.improc_utils import _round_half_away, _is_color, _as_color, _check_bgr_image
# Colors and ENUM
from ..utils.improc_utils import Color, Channel, COLOR_BLACK, COLOR_WHITE, COLOR_BLUE, COLOR_GREEN, COLOR_RED


# --------------------------------------------------------------------------------------------
# Constants
# --------------------------------------------------------------------------------------------
HIST_BORDER = 15            # padding around the plot area, pixels
BIN_STRIDE = 3              # horizontal pixels per bin
LABEL_OFFSET = 10           # axis labels sit this far below the baseline
LABEL_FONT_SCALE = 0.3

DEFAULT_IMAGE_HEIGHT = 300
MAX_IMAGE_HEIGHT = 2048
DEFAULT_BIN_COUNT = 256
MAX_BIN_COUNT = 256
HIST_RANGE = [0, 256]       # upper bound exclusive, i.e. 0 to 255

# Accepted histogram element types
BIN_DTYPES = (np.int32, np.float32, np.float64)


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


# --------------------------------------------------------------------------------------------
# Configuration
# --------------------------------------------------------------------------------------------
class HistogramConfig:
    """
    Drawing parameters for HistogramRenderer.

    Out-of-range assignments are ignored and the previous value is kept:
    `image_height` must be in (0, 2048], `bin_count` in (0, 256], colors must be
    three integers in [0, 255] (BGR).
    """

    def __init__(
        self,
        image_height: int = DEFAULT_IMAGE_HEIGHT,
        bin_count: int = DEFAULT_BIN_COUNT,
        plot_color: Color = COLOR_WHITE,
        axis_color: Color = COLOR_WHITE,
        background_color: Color = COLOR_BLACK,
        draw_axis: bool = True,
        ) -> None:
        self._image_height = DEFAULT_IMAGE_HEIGHT
        self._bin_count = DEFAULT_BIN_COUNT
        self._plot_color = COLOR_WHITE
        self._axis_color = COLOR_WHITE
        self._background_color = COLOR_BLACK
        self._draw_axis = True

        # Route through the setters so constructor arguments obey the same ranges
        self.image_height = image_height
        self.bin_count = bin_count
        self.plot_color = plot_color
        self.axis_color = axis_color
        self.background_color = background_color
        self.draw_axis = draw_axis

    def __repr__(self) -> str:
        return (
            f"HistogramConfig(image_height={self._image_height}, bin_count={self._bin_count}, "
            f"plot_color={self._plot_color}, axis_color={self._axis_color}, "
            f"background_color={self._background_color}, draw_axis={self._draw_axis})"
        )

    # Canvas height, excluding border
    @property
    def image_height(self) -> int:
        return self._image_height

    @image_height.setter
    def image_height(self, value: int) -> None:
        if _is_int(value) and 0 < value <= MAX_IMAGE_HEIGHT:
            self._image_height = int(value)
        else:
            logging.debug(f"[HISTLIB] Ignoring out-of-range image height: {value!r}")

    # Histogram bins; also the number of intensity quantization levels
    @property
    def bin_count(self) -> int:
        return self._bin_count

    @bin_count.setter
    def bin_count(self, value: int) -> None:
        if _is_int(value) and 0 < value <= MAX_BIN_COUNT:
            self._bin_count = int(value)
        else:
            logging.debug(f"[HISTLIB] Ignoring out-of-range bin count: {value!r}")

    @property
    def border(self) -> int:
        return HIST_BORDER

    @property
    def plot_color(self) -> Color:
        return self._plot_color

    @plot_color.setter
    def plot_color(self, value: Sequence[int]) -> None:
        if _is_color(value):
            self._plot_color = _as_color(value)

    @property
    def axis_color(self) -> Color:
        return self._axis_color

    @axis_color.setter
    def axis_color(self, value: Sequence[int]) -> None:
        if _is_color(value):
            self._axis_color = _as_color(value)

    @property
    def background_color(self) -> Color:
        return self._background_color

    @background_color.setter
    def background_color(self, value: Sequence[int]) -> None:
        if _is_color(value):
            self._background_color = _as_color(value)

    @property
    def draw_axis(self) -> bool:
        return self._draw_axis

    @draw_axis.setter
    def draw_axis(self, value: bool) -> None:
        self._draw_axis = bool(value)

    @property
    def baseline_y(self) -> int:
        """Row of the histogram baseline (x axis)."""
        return HIST_BORDER + self._image_height

    def canvas_shape(self, bin_length: int) -> tuple[int, int, int]:
        """
        Shape of the histogram image for a histogram of `bin_length` bins.

        Returns:
            tuple[int, int, int]: (rows, cols, 3)
        """
        return (
            2 * HIST_BORDER + self._image_height,
            2 * HIST_BORDER + BIN_STRIDE * bin_length,
            3,
        )


# --------------------------------------------------------------------------------------------
# Renderer
# --------------------------------------------------------------------------------------------
class HistogramRenderer:
    """
    Draws 1-D histograms as vertical bar charts, and computes/draws grayscale and
    per-channel BGR histograms of 8-bit images.

    Drawing never raises for a bad histogram: an invalid one is ignored and the
    target is returned untouched.
    """

    def __init__(self, config: HistogramConfig|None = None) -> None:
        self.config = config if config is not None else HistogramConfig()


    # ----------------------------------------------------------------------------------------
    # Drawing
    # ----------------------------------------------------------------------------------------
    def draw(
        self,
        hist: np.ndarray,
        target: np.ndarray|None = None,
        color: Color|None = None,
        ) -> np.ndarray|None:
        """
        Draws `hist` as a bar chart. Each value is a bar height in pixels.

        Args:
            hist (np.ndarray): Bin heights, int32/float32/float64, shaped (L,), (1, L) or (L, 1) with L >= 2.
                Float heights are rounded half away from zero.
            target (np.ndarray, optional): Canvas to draw into. Reused in place when it already has
                the histogram image shape and uint8 dtype; otherwise a new canvas is allocated.
            color (Color, optional): Bar color (BGR). Defaults to the configured plot color.

        Returns:
            np.ndarray | None: The drawn canvas, or `target` unchanged if `hist` (or `color`) is invalid.
        """

        heights = self._bin_heights(hist)
        if heights is None:
            return target

        if color is None:
            color = self.config.plot_color
        elif not _is_color(color):
            logging.debug(f"[HISTLIB] Ignoring draw with invalid color: {color!r}")
            return target

        canvas = self._prepare_canvas(target, heights.shape[0])
        self._paint_bins(canvas, heights, _as_color(color))

        if self.config.draw_axis:
            self._paint_axis(canvas, heights.shape[0])

        return canvas


    def draw_color_histogram(self, img: np.ndarray, target: np.ndarray|None = None) -> np.ndarray|None:
        """
        Draws the blue, green and red histograms of a BGR image on one canvas.

        All three channels share one scale: the largest bin across the three maps to
        `image_height` pixels. Layers are painted blue, then green, then red; the canvas
        is cleared only once, so a later layer only overwrites the pixels of its own bars.

        Args:
            img (np.ndarray): 8-bit BGR image.
            target (np.ndarray, optional): Canvas to reuse, see `draw`.

        Returns:
            np.ndarray | None: Histogram image, or `target` unchanged when bin_count < 2.
        """

        layers = [self._bin_heights(hist) for hist in self.channel_histograms(img)]
        if any(heights is None for heights in layers):
            return target

        canvas = self._prepare_canvas(target, layers[0].shape[0])
        for heights, color in zip(layers, (COLOR_BLUE, COLOR_GREEN, COLOR_RED)):
            self._paint_bins(canvas, heights, color)

        if self.config.draw_axis:
            self._paint_axis(canvas, layers[0].shape[0])

        return canvas


    def draw_grayscale_histogram(self, img: np.ndarray, target: np.ndarray|None = None) -> np.ndarray|None:
        """
        Draws the luminance histogram of an image in the configured plot color.

        Args:
            img (np.ndarray): 8-bit BGR image, or an 8-bit single-channel image used as is.
            target (np.ndarray, optional): Canvas to reuse, see `draw`.

        Returns:
            np.ndarray | None: Histogram image, or `target` unchanged when bin_count < 2.
        """
        return self.draw(self.grayscale_histogram(img), target)


    # ----------------------------------------------------------------------------------------
    # Histogram computation
    # ----------------------------------------------------------------------------------------
    def channel_histograms(self, img: np.ndarray) -> List[np.ndarray]:
        """
        Blue, green and red histograms of `img`, scaled to pixel heights by the global maximum.

        Returns:
            List[np.ndarray]: Three float32 arrays of shape (bin_count, 1), in BGR order.
        """
        _check_bgr_image(img, "HISTLIB")

        hists = [
            cv.calcHist([img], [int(channel)], None, [self.config.bin_count], HIST_RANGE)
            for channel in Channel
        ]
        global_max = max(float(hist.max()) for hist in hists)

        return [self._scale(hist, global_max) for hist in hists]


    def grayscale_histogram(self, img: np.ndarray) -> np.ndarray:
        """
        Luminance histogram of `img`, scaled so its largest bin is `image_height` pixels.

        Returns:
            np.ndarray: float32 array of shape (bin_count, 1).
        """
        if isinstance(img, np.ndarray) and img.ndim == 2 and img.dtype == np.uint8:
            img_gray = img
        else:
            _check_bgr_image(img, "HISTLIB")
            img_gray = cv.cvtColor(img, cv.COLOR_BGR2GRAY)

        hist = cv.calcHist([img_gray], [0], None, [self.config.bin_count], HIST_RANGE)

        return self._scale(hist, float(hist.max()))


    # ----------------------------------------------------------------------------------------
    # Internals
    # ----------------------------------------------------------------------------------------
    def _scale(self, hist: np.ndarray, max_val: float) -> np.ndarray:
        # Column vector regardless of OpenCV version; 5.x calcHist returns (bins,)
        hist = hist.reshape(-1, 1)

        # All-zero histogram (e.g. empty image): nothing to scale
        if max_val <= 0:
            return hist.astype(np.float32)
        scaled = hist.astype(np.float64) * self.config.image_height / max_val
        return scaled.astype(np.float32)


    def _bin_heights(self, hist: Any) -> np.ndarray|None:
        """Validates a histogram and converts it to integer bar heights, or None if it cannot be drawn."""

        if not isinstance(hist, np.ndarray):
            logging.debug(f"[HISTLIB] Ignoring histogram of type {type(hist).__name__}")
            return None
        if hist.dtype.type not in BIN_DTYPES:
            logging.debug(f"[HISTLIB] Ignoring histogram with unsupported dtype {hist.dtype}")
            return None

        # Row or column vector only
        if hist.ndim == 1:
            length = hist.shape[0]
        elif hist.ndim == 2 and (hist.shape[0] == 1 or hist.shape[1] == 1):
            length = max(hist.shape)
        else:
            logging.debug(f"[HISTLIB] Ignoring histogram with shape {hist.shape}")
            return None
        if length < 2:
            logging.debug(f"[HISTLIB] Ignoring histogram with {length} bin(s)")
            return None

        values = hist.reshape(-1)
        if np.issubdtype(values.dtype, np.floating):
            values = np.nan_to_num(values, nan=0.0, posinf=float(self.config.baseline_y), neginf=0.0)
            values = _round_half_away(values)

        # Bars never go below the baseline; taller than the canvas is clipped by cv.line anyway
        return np.clip(values, 0, self.config.baseline_y).astype(np.int64)


    def _prepare_canvas(self, target: np.ndarray|None, bin_length: int) -> np.ndarray:
        shape = self.config.canvas_shape(bin_length)

        reusable = (
            isinstance(target, np.ndarray)
            and target.shape == shape
            and target.dtype == np.uint8
            and target.flags.c_contiguous
            and target.flags.writeable
        )
        canvas = target if reusable else np.empty(shape, dtype=np.uint8)

        canvas[:] = self.config.background_color
        return canvas


    def _paint_bins(self, canvas: np.ndarray, heights: np.ndarray, color: Color) -> None:
        base_y = self.config.baseline_y

        for i, height in enumerate(heights):
            # Zero-height bin: no line
            if height == 0:
                continue
            x = i * BIN_STRIDE + HIST_BORDER
            cv.line(canvas, (x, base_y), (x, base_y - int(height)), color)


    def _paint_axis(self, canvas: np.ndarray, bin_length: int) -> None:
        base_y = self.config.baseline_y
        axis_color = self.config.axis_color
        right_x = HIST_BORDER + BIN_STRIDE * bin_length

        # Horizontal axis
        cv.line(canvas, (HIST_BORDER, base_y), (right_x, base_y), axis_color)

        # Label first and last bin
        cv.putText(
            canvas, "0",
            (HIST_BORDER - 3, base_y + LABEL_OFFSET),
            cv.FONT_HERSHEY_SIMPLEX, LABEL_FONT_SCALE, axis_color,
        )
        cv.putText(
            canvas, str(bin_length - 1),
            (right_x - 10, base_y + LABEL_OFFSET),
            cv.FONT_HERSHEY_SIMPLEX, LABEL_FONT_SCALE, axis_color,
        )
