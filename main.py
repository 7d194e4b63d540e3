#!/usr/bin/env python3

"""main.py: Main logic file for contrast normalization and histogram plots of image folders"""

__author__ = "Gian-Mateo (GM) Tifone"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone", "Paul Filitchkin"]
__license__ = "MIT"
__version__ = "1.0.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Development", or "Production".

# ---------------
# Useful commands
# ---------------
"""
// (Install) Editable install with test dependencies
pip install -e .[test]

// (Run)
python main.py
"""


# --------------------------------------------------------------------------------------------
# Imports
# --------------------------------------------------------------------------------------------
import logging
import os
from time import time

from histlib import ContrastNormalizer, HistogramConfig, HistogramRenderer
from histlib.utils import process_images, imwrite


# --------------------------------------------------------------------------------------------
# Pipeline
# --------------------------------------------------------------------------------------------
def run(
    input_dir:str,
    output_dir:str,
    input_image_types:str|tuple[str, ...] = ("png", "jpg", "tif"),
    clip_percent:float = 0.0,
    bin_count:int = 256,
    hist_height:int = 300,
    draw_axis:bool = True,
    verbose:bool = False,
    ) -> None:
    """
    Normalizes every image in `input_dir` and writes, per image, the normalized image and
    color histograms of the image before and after normalization.

    Args:
        input_dir (str): Folder of 8-bit BGR images.
        output_dir (str): Destination folder; created if missing.
        input_image_types (str | tuple[str, ...], optional): Extensions to process.
        clip_percent (float, optional): Outlier percentage excluded from the stretch. 0 is a plain min/max stretch.
        bin_count (int, optional): Histogram bins, (0, 256]. Out-of-range values keep the default.
        hist_height (int, optional): Histogram plot height in pixels, (0, 2048].
        draw_axis (bool, optional): Draw the x axis and end-bin labels. Defaults to True.
        verbose (bool, optional): Log progress at INFO level and show progress bars.
    """

    if verbose: logging.basicConfig(level=logging.INFO)
    else: logging.basicConfig(level=logging.WARNING)

    renderer = HistogramRenderer(HistogramConfig(image_height=hist_height, bin_count=bin_count, draw_axis=draw_axis))
    normalizer = ContrastNormalizer()

    logging.info(f"[MAIN] Histogram settings: {renderer.config}")

    logging.info("[MAIN] Drawing input histograms...")
    process_images(
        input_dir, output_dir, "_hist",
        renderer.draw_color_histogram,
        input_image_types=input_image_types, show_progress=verbose,
    )

    logging.info(f"[MAIN] Normalizing (clip = {clip_percent}%)...")
    normalized = process_images(
        input_dir, output_dir, "_norm",
        normalizer.normalize_clipped, {"clip_percent": clip_percent},
        input_image_types=input_image_types, show_progress=verbose,
    )

    logging.info("[MAIN] Drawing normalized histograms...")
    for name, img in normalized.items():
        base, _ = os.path.splitext(name)
        imwrite(os.path.join(output_dir, f"{base}_hist.png"), renderer.draw_color_histogram(img))

    logging.info(f"[MAIN] Complete. {len(normalized)} image(s) written to: {output_dir}")


# --------------------------------------------------------------------------------------------
# Driver Code
# --------------------------------------------------------------------------------------------
def main():
    start = time()
    run(
        # Input information
        input_dir="data/input",
        output_dir="data/output",
        input_image_types=("png", "jpg", "tif"),
        # Normalization
        clip_percent=1.0,
        # Histogram plot
        bin_count=256,
        hist_height=300,
        draw_axis=True,
        # Debug
        verbose=True,
    )
    print(f"\n[main] - Execution finished -\nRuntime = {(time() - start):.2f}")



# =========
# Executing
# =========
if __name__ == "__main__":
    main()
