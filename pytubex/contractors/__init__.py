from .ctc import *
from .ctc_deriv import *
from .ctc_eval import *
from .ctc_linobs import *
