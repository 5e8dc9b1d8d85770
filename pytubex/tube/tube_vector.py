__all__ = ["TubeVector"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 18, 2023"
__status__      = "Completed"

from ..arithmetic.interval import Interval
from ..arithmetic.matrix import IntervalVector
from ..utils.exceptions import DomainException, StructureException
from .tube import Tube


class TubeVector():
    def __init__(self, tubes):
        """
            Vector of scalar tubes sharing the same slicing.

            Inputs:
                tubes: list of Tube.
        """
        tubes = list(tubes)
        assert tubes, "a tube vector has at least one component"
        for x in tubes[1:]:
            StructureException.check(tubes[0], x, "TubeVector")
        self._tubes = tubes

    @classmethod
    def from_domain(cls, domain, timestep=0., dim=2, codomain=None):
        "dim tubes over domain; codomain is an Interval or an IntervalVector."
        if codomain is None or isinstance(codomain, Interval):
            codomain = [codomain]*dim
        assert len(codomain) == dim, "codomain of wrong dimension"
        return cls([Tube(domain, timestep, y) for y in codomain])

    def size(self):
        return len(self._tubes)

    def __len__(self):
        return len(self._tubes)

    def __getitem__(self, i):
        return self._tubes[i]

    def __iter__(self):
        return iter(self._tubes)

    def domain(self):
        return self._tubes[0].domain()

    def nb_slices(self):
        return self._tubes[0].nb_slices()

    def codomain(self):
        return IntervalVector([x.codomain() for x in self._tubes])

    def __call__(self, t):
        DomainException.check(self, t, "TubeVector.__call__")
        return IntervalVector([x(t) for x in self._tubes])

    def sample(self, t, gate=None):
        "Samples every component at t; gate, if given, is an IntervalVector."
        for i, x in enumerate(self._tubes):
            x.sample(t, None if gate is None else gate[i])

    def volume(self):
        "Sum of the volumes of the components."
        return sum(x.volume() for x in self._tubes)

    def is_empty(self):
        return any(x.is_empty() for x in self._tubes)

    def set_empty(self):
        for x in self._tubes:
            x.set_empty()

    def copy(self):
        return TubeVector([x.copy() for x in self._tubes])

    @staticmethod
    def same_slicing(x1, x2):
        return Tube.same_slicing(x1[0], x2[0])

    def __eq__(self, x):
        if not isinstance(x, TubeVector):
            return NotImplemented
        return self.size() == x.size() and all(a == b for a, b in zip(self._tubes, x._tubes))

    def __ne__(self, x):
        eq = self.__eq__(x)
        return eq if eq is NotImplemented else not eq

    __hash__ = object.__hash__

    def __repr__(self):
        return f"TubeVector ({self.size()}d) {self.domain()}↦{self.codomain()}, {self.nb_slices()} slices"
