from .tube_plotters import *
