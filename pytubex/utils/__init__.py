from .helpers import *
from .config import *
from .exceptions import *
