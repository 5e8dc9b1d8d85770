__all__ = ["TubeException", "DomainException", "StructureException",
           "DegenerateBisectionException", "SerializationException",
           "InvalidComponentException"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 02, 2023"
__status__      = "Completed"


class TubeException(Exception):
    def __init__(self, function_name, message):
        """
            Base of every failure reported by the tube library.

            Inputs:
                function_name: name of the operation that failed, e.g. "Tube.sample".
                message: what went wrong.
        """
        self.function_name = function_name
        self.message       = message
        super().__init__(f"{function_name}: {message}")


class DomainException(TubeException, ValueError):
    """Access to a tube or a trajectory outside of its domain."""

    @staticmethod
    def check(x, t, function_name="domain check"):
        """
            Raises if the time t (a float or an Interval) does not belong
            to the domain of x.
        """
        from ..arithmetic.interval import Interval

        if isinstance(t, Interval):
            if t.is_empty() or not x.domain().is_superset(t):
                raise DomainException(function_name, f"interval {t} not included in domain {x.domain()}")
        elif not x.domain().contains(t):
            raise DomainException(function_name, f"t={t} out of domain {x.domain()}")

    @staticmethod
    def check_index(x, i, function_name="domain check"):
        "Raises if i is not a slice index of the tube x."
        if i < 0 or i >= x.nb_slices():
            raise DomainException(function_name, f"slice index {i} out of range [0, {x.nb_slices()-1}]")

    @staticmethod
    def check_domains(x1, x2, function_name="domain check"):
        "Raises if x1 and x2 are not defined over the same domain."
        if x1.domain() != x2.domain():
            raise DomainException(function_name, f"unequal domains {x1.domain()} and {x2.domain()}")


class StructureException(TubeException, ValueError):
    """Two tubes do not share the same slicing."""

    @staticmethod
    def check(x1, x2, function_name="structure check"):
        from ..tube.tube import Tube

        if not Tube.same_slicing(x1, x2):
            raise StructureException(function_name, "tubes do not share the same slicing")


class DegenerateBisectionException(TubeException, ValueError):
    """Bisection requested on a degenerate (zero-width) interval."""


class SerializationException(TubeException, IOError):
    """File opening/reading/writing failure, or unsupported version number."""


class InvalidComponentException(TubeException, RuntimeError):
    """Internal structural corruption, a programming-logic fault."""
