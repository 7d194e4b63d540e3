"""improc/__init__.py: Aggregate header for histogram rendering and contrast normalization"""

__author__ = "Gian-Mateo (GM)"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone"]
__license__ = "MIT"
__version__ = "1.0.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Development", or "Production".


from .hist_renderer import *
from .contrast import *
from ..utils.improc_utils import *
