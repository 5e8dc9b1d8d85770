__all__ = ["Ctc", "TimePropag"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 20, 2023"
__status__      = "Completed"

from enum import Flag


class TimePropag(Flag):
    FORWARD  = 1
    BACKWARD = 2


class Ctc():
    def __init__(self):
        """
            Base of the contractors: operators narrowing domains (intervals,
            tubes) without removing any value consistent with a constraint.

            Attributes:
                _preserve_slicing: when True, a contractor must not sample
                    the tubes it contracts.
                _time_propag: when False, contractions stay local to the
                    slices and are not propagated along time.
        """
        self._preserve_slicing = False
        self._time_propag      = True

    def preserve_slicing(self, preserve=True):
        self._preserve_slicing = preserve

    def enable_time_propag(self, enable=True):
        self._time_propag = enable

    def contract(self, v_domains):
        """
            Generic entry point.

            Inputs:
                v_domains: list of the domains involved in the constraint,
                    in the order expected by the contractor. Immutable
                    domains (intervals) are replaced in the list by their
                    contracted value.

            Outputs:
                changed: True if a domain has been narrowed.
        """
        raise NotImplementedError(f"{type(self).__name__}.contract")
