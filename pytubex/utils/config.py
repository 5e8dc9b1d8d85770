__all__ = ["gv", "SERIALIZATION_VERSION", "POLYGON_MAX_VERTICES",
           "DEFAULT_BISECTION_RATIO", "EXPM_TAYLOR_ORDER",
           "FIXPOINT_MAX_ITERATIONS", "DATA_FILE_EXTENSION",
           "SLICING_TOLERANCE"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 02, 2023"
__status__      = "Completed"

from .helpers import Bundle

#-------------------------------------------------------------------------
# binary files

SERIALIZATION_VERSION   = 2                 # version written by default; 1 and 2 can be read
DATA_FILE_EXTENSION     = ".tubex"          # extension appended by the data loader

#-------------------------------------------------------------------------
# contractors

POLYGON_MAX_VERTICES    = 15                # CtcLinobs polygons are coarsened above this
FIXPOINT_MAX_ITERATIONS = 100               # cap for CtcDeriv.contract_fixpoint
EXPM_TAYLOR_ORDER       = 12                # Taylor terms of the exp(A.t) enclosure

#-------------------------------------------------------------------------
# tubes

DEFAULT_BISECTION_RATIO = 0.49              # largest-first bisection point in ]0,1[
SLICING_TOLERANCE       = 1e-10             # relative to the timestep, drops near-zero last slices

# global variable
gv = {"serialization_version": SERIALIZATION_VERSION,
      "data_file_extension": DATA_FILE_EXTENSION,
      "polygon_max_vertices": POLYGON_MAX_VERTICES,
      "fixpoint_max_iterations": FIXPOINT_MAX_ITERATIONS,
      "expm_taylor_order": EXPM_TAYLOR_ORDER,
      "bisection_ratio": DEFAULT_BISECTION_RATIO,
      "slicing_tolerance": SLICING_TOLERANCE}
gv = Bundle(gv)
