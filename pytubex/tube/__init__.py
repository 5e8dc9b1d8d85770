from .trajectory import *
from .slice import *
from .tube import *
from .tube_vector import *
