__all__ = ["Bundle", "realmax", "eps", "isnumeric", "error"]

__author__ 		= "Lekan Molu"
__copyright__ 	= "2023, Set-Membership Tube Analysis in Python"
__credits__  	= "There are None."
__license__ 	= "Molux Licence"
__maintainer__ 	= "Lekan Molu"
__email__ 		= "patlekno@icloud.com"
__status__ 		= "Completed"


import sys
import numbers
import logging
import numpy as np

logger = logging.getLogger(__name__)

realmax = sys.float_info.max
eps     = sys.float_info.epsilon


class Bundle(object):
    def __init__(self, dicko):
        """
            This class creates a Bundle similar to matlab's
            struct class.
        """
        for var, val in dicko.items():
            object.__setattr__(self, var, val)

    def __len__(self):
        return len(self.__dict__.keys())

    def keys(self):
        return list(self.__dict__.keys())

    def update(self, dicko):
        "Overwrites (or adds) the fields in dicko."
        for var, val in dicko.items():
            object.__setattr__(self, var, val)

def isnumeric(A):
    "Determines if A is a (real, non-boolean) numeric type."
    if isinstance(A, bool):
        return False
    if isinstance(A, (numbers.Real, np.floating, np.integer)):
        return True
    else:
        return False

def error(arg):
    "Logs the error and raises it as a ValueError."
    assert isinstance(arg, str), 'logger.fatal argument must be a string'
    logger.error(arg)
    raise ValueError(arg)
