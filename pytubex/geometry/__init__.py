from .point import *
from .edge import *
from .graham_scan import *
from .convex_polygon import *
