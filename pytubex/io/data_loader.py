__all__ = ["DataLoader"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 28, 2023"
__status__      = "Completed"

import logging
from os.path import isfile

from ..utils.config import gv
from .serialization import serialize_tube, deserialize_tube

logger = logging.getLogger(__name__)


class DataLoader():
    def __init__(self, file_path, verbose=False):
        """
            Caches the tube computed from a raw data file next to it, in
            a binary file of same name with the .tubex extension.

            Inputs:
                file_path: path of the raw data file.
                verbose: log each cache access at INFO level.
        """
        self.file_path = file_path
        self.verbose   = verbose

    @property
    def serialized_path(self):
        return self.file_path + gv.data_file_extension

    def serialize_data(self, tube, trajectories=()):
        serialize_tube(self.serialized_path, tube, trajectories)

    def serialized_data_available(self):
        return isfile(self.serialized_path)

    def deserialize_data(self):
        "Outputs the cached (tube, trajectories)."
        if self.verbose:
            logger.info(f"deserialization of {self.serialized_path}")
        return deserialize_tube(self.serialized_path)
