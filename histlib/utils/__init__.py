"""utils/__init__.py: Aggregate header file for utils"""

__author__ = "Gian-Mateo (GM)"
__copyright__ = "2025, RIT MISHA"
__credits__ = ["Gian-Mateo Tifone"]
__license__ = "MIT"
__version__ = "1.1.0"
__maintainer__ = "MISHA Team"
__email__ = "mt9485@rit.edu"
__status__ = "Development" # "Development", or "Production".


from .improc_utils import *
from .fileio import *
