from .serialization import *
from .data_loader import *
