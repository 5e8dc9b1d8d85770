__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "May 04, 2023"
__status__      = "Completed"
__version__     = "0.1.0"

from .utils import *
from .arithmetic import *
from .geometry import *
from .tube import *
from .contractors import *
from .io import *
