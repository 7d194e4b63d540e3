"""fileio.py: File read and write"""

__author__ = "Gian-Mateo (GM) Tifone"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone"]
__license__ = "MIT"
__version__ = "1.1.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Prototype", "Development", "Production"



# --------------------------------------------------------------------------------------------
# Imports
# --------------------------------------------------------------------------------------------
import cv2 as cv
import numpy as np
from typing import List, Tuple
from glob import glob
import os



# --------------------------------------------------------------------------------------------
# Input
# --------------------------------------------------------------------------------------------
def imread(filepath:str, flags:int = cv.IMREAD_COLOR) -> np.ndarray:
    """
    Reads in image. Protects against returning None.

    Args:
        filepath (str): Directory to image, include image name and extension e.g. "data/image.png"
        flags (int, optional): OpenCV imread flag. Defaults to cv.IMREAD_COLOR, i.e. 8-bit BGR.

    Raises:
        ValueError: Filepath cannot be empty (None)
        TypeError: filepath must be a string (str)
        FileNotFoundError: file was not found in filepath directory

    Returns:
        np.ndarray: Image in BGR format
    """

    # Check filepath validity
    if filepath is None:
        raise ValueError("[FILEIO] Filepath cannot be None")
    if not isinstance(filepath, str):
        raise TypeError("[FILEIO] Provide absolute (e.g. C:Users/.../image.png) or relative (e.g. ../data/image.png) \
                        path to image location on your drive. \
                        Ensure you include the image name and its extension (e.g. /<MyPathWithoutBracket>/image.png")
    image = cv.imread(filepath, flags)

    # Check image validity
    if image is not None:
        return image
    else:
        raise FileNotFoundError(f"[FILEIO] Imread file not found: {filepath}")


def discover_image_files(
    input_dir: str,
    input_image_type: str|Tuple[str, ...] = "png"
    ) -> List[str]:
    """
    Discovers and returns a list of image files in a directory matching the given type(s).

    Args:
        input_dir (str): Directory to search for input images.
        input_image_type (str | tuple[str, ...]): File extension(s) to include (e.g. "png" or ("png", "jpg"))

    Returns:
        List[str]: Sorted list of full paths to input image files.
    """
    if isinstance(input_image_type, str):
        input_image_type = (input_image_type,)

    input_files = []
    for file_extension in input_image_type:
        input_files.extend(glob(os.path.join(input_dir, f"*.{file_extension}")))

    # De-duplicate; case-insensitive filesystems match "*.jpg" and "*.JPG" alike
    input_files = sorted(set(input_files))
    return input_files


# --------------------------------------------------------------------------------------------
# Output
# --------------------------------------------------------------------------------------------
def imwrite(filepath:str, image:np.ndarray) -> None:
    """
    Writes image to disk; the encoder is chosen by the extension of `filepath`.

    Raises:
        ValueError: Filepath cannot be empty (None)
        TypeError: filepath must be a string (str)
        IOError: OpenCV could not encode or write the image
    """
    # Check filepath validity
    if filepath is None:
        raise ValueError("[FILEIO] Filepath cannot be None")
    if not isinstance(filepath, str):
        raise TypeError("[FILEIO] Provide absolute (e.g. C:Users/.../) or relative (e.g. ../data/) \
                        path to image location on your drive.")

    # Unknown extensions raise cv.error rather than returning False
    try:
        success = cv.imwrite(filepath, image)
    except cv.error as e:
        raise IOError(f"[FILEIO] Failed to write image: {filepath}") from e
    if not success:
        raise IOError(f"[FILEIO] Failed to write image: {filepath}")
