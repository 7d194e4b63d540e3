"""improc_utils.py: Image processing helpers shared by the histogram and contrast modules"""

__author__ = "Gian-Mateo (GM) Tifone"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone", "Paul Filitchkin"]
__license__ = "MIT"
__version__ = "1.1.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Development", or "Production", or "Prototype".



# --------------------------------------------------------------------------------------------
# Imports
# --------------------------------------------------------------------------------------------
# Image processing
import numpy as np

# Management
import os
import warnings

# Typing
from typing import Any, Optional, Callable, Tuple, Sequence
from enum import IntEnum
from tqdm import tqdm

from .fileio import discover_image_files, imread, imwrite


# --------------------------------------------------------------------------------------------
# Colors (BGR order, as OpenCV expects)
# --------------------------------------------------------------------------------------------
Color = Tuple[int, int, int]

COLOR_BLACK: Color = (0, 0, 0)
COLOR_WHITE: Color = (255, 255, 255)
COLOR_BLUE: Color  = (255, 0, 0)
COLOR_GREEN: Color = (0, 255, 0)
COLOR_RED: Color   = (0, 0, 255)


# --------------------------------------------------------------------------------------------
# Enumerations (custom datatype flags)
# --------------------------------------------------------------------------------------------
# BGR plane indices
class Channel(IntEnum):
    BLUE = 0
    GREEN = 1
    RED = 2

# HSV plane indices (OpenCV 8-bit HSV: H in [0,180), S and V in [0,255])
class HsvChannel(IntEnum):
    HUE = 0
    SATURATION = 1
    VALUE = 2


# --------------------------------------------------------------------------------------------
# Helper Functions
# --------------------------------------------------------------------------------------------
def _round_half_away(values: np.ndarray|float) -> np.ndarray:
    """
    Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).
    np.round rounds ties to even, which is not what pixel arithmetic wants here.

    Args:
        values (np.ndarray | float): Values to round.

    Returns:
        np.ndarray: Rounded values as float64.
    """
    values = np.asarray(values, dtype=np.float64)
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def _is_color(color: Any) -> bool:
    """True when `color` is a 3-sequence of integers in [0, 255]."""
    if isinstance(color, (str, bytes)) or not isinstance(color, (Sequence, np.ndarray)):
        return False
    if len(color) != 3:
        return False
    for c in color:
        if isinstance(c, bool) or not isinstance(c, (int, np.integer)):
            return False
        if not (0 <= c <= 255):
            return False
    return True


def _as_color(color: Sequence[int]) -> Color:
    """Converts a validated 3-sequence to a plain int tuple usable by cv.line / cv.putText."""
    return (int(color[0]), int(color[1]), int(color[2]))


def _check_bgr_image(img: np.ndarray, tag: str) -> None:
    """
    Asserts `img` is an 8-bit, 3-channel (BGR) image.

    Args:
        img (np.ndarray): Image to check.
        tag (str): Module tag prefixed to error messages, e.g. "CONTRAST".

    Raises:
        TypeError: img is not a numpy array, or is not uint8.
        ValueError: img is not (rows, cols, 3) or is empty.
    """
    if not isinstance(img, np.ndarray):
        raise TypeError(f"[{tag}] Image must be a numpy array, got {type(img).__name__}")
    if img.dtype != np.uint8:
        raise TypeError(f"[{tag}] Image must have uint8 dtype, got {img.dtype}")
    if img.ndim != 3 or img.shape[2] != 3:
        raise ValueError(f"[{tag}] Image must be 3-channel BGR (rows, cols, 3), got shape {img.shape}")
    if img.size == 0:
        raise ValueError(f"[{tag}] Image must not be empty")


def process_images(
    src_dir: str,
    dst_dir: str,
    file_suffix: str,
    transform_fn: Callable[..., np.ndarray],
    transform_kwargs: Optional[dict[str, Any]] = None,
    input_image_types: str|Tuple[str, ...] = ("png", "jpg", "jpeg", "bmp", "tif", "tiff"),
    show_progress: bool = False,
) -> dict[str, np.ndarray]:
    """
    Apply a transform function to all images in a directory and write outputs.

    Args:
        src_dir (str): Directory of input images.
        dst_dir (str): Directory to write transformed images.
        file_suffix (str): Suffix to append to output filenames, e.g. "_norm".
        transform_fn (Callable): A function that accepts an image and returns a transformed image.
        transform_kwargs (dict, optional): Keyword arguments passed to the transform function,
            e.g. {"clip_percent": 1.0} for ContrastNormalizer.normalize_clipped.
        input_image_types (str | tuple[str, ...], optional): Extension(s) to process.
        show_progress (bool, optional): Show a tqdm progress bar. Defaults to False.

    Returns:
        dict[str, np.ndarray]: {output filename: transformed image} for every image that succeeded.
    """

    if transform_kwargs is None:
        transform_kwargs = {}
    if not os.path.exists(src_dir):
        raise FileNotFoundError(f"[IMPROC] Source directory not found: {src_dir}")
    if not os.path.exists(dst_dir):
        os.makedirs(dst_dir)

    src_files = discover_image_files(src_dir, input_image_types)
    dst_images = {}

    for path in tqdm(src_files, desc="[IMPROC] Processing", unit="img", colour="CYAN", disable=not show_progress):
        base, _ = os.path.splitext(os.path.basename(path))
        out_name = f"{base}{file_suffix}.png"
        try:
            result = transform_fn(imread(path), **transform_kwargs)
            imwrite(os.path.join(dst_dir, out_name), result)
        except Exception as e:
            warnings.warn(f"Failed to process image '{path}': {e}")
            continue
        dst_images[out_name] = result

    return dst_images
