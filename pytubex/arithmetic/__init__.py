from .interval import *
from .matrix import *
