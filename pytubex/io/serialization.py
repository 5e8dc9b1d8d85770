__all__ = ["serialize_interval", "deserialize_interval", "serialize_trajectory",
           "deserialize_trajectory", "serialize_tube", "deserialize_tube"]

__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "April 28, 2023"
__status__      = "Completed"

#-------------------------------------------------------------------------
# Binary files of tubes (little endian).
#
# Interval:   [int16 type][float64 lb][float64 ub]
#             the bounds are only written for BOUNDED intervals.
#
# Tube, version 1:
#             [int16 version][int32 nb slices][Interval domain]
#             [Interval envelope 1][Interval envelope 2]...
#
# Tube, version 2:
#             version 1 followed by
#             [int32 nb trajectories][trajectory 1][trajectory 2]...
#             where a trajectory is [int32 nb points][float64 t][float64 x]...
#
# Slices are read back with a uniform slicing of the domain.
#-------------------------------------------------------------------------

import math
import struct
import logging

from ..arithmetic.interval import Interval
from ..tube.trajectory import Trajectory
from ..tube.tube import Tube
from ..utils.config import gv
from ..utils.exceptions import SerializationException

logger = logging.getLogger(__name__)

BOUNDED, EMPTY_SET, ALL_REALS, POS_REALS, NEG_REALS = range(5)
SUPPORTED_VERSIONS = (1, 2)


def _read(f, fmt):
    size = struct.calcsize(fmt)
    data = f.read(size)
    if len(data) != size:
        raise SerializationException("deserialize", "unexpected end of file")
    return struct.unpack(fmt, data)


def serialize_interval(f, intv):
    if intv.is_empty():
        intv_type = EMPTY_SET
    elif intv.lb() == -math.inf and intv.ub() == math.inf:
        intv_type = ALL_REALS
    elif intv.lb() == 0. and intv.ub() == math.inf:
        intv_type = POS_REALS
    elif intv.lb() == -math.inf and intv.ub() == 0.:
        intv_type = NEG_REALS
    else:
        intv_type = BOUNDED

    f.write(struct.pack("<h", intv_type))
    if intv_type == BOUNDED:
        f.write(struct.pack("<dd", intv.lb(), intv.ub()))


def deserialize_interval(f):
    intv_type, = _read(f, "<h")
    if intv_type == BOUNDED:
        lb, ub = _read(f, "<dd")
        return Interval(lb, ub)
    if intv_type == EMPTY_SET:
        return Interval.empty_set()
    if intv_type == ALL_REALS:
        return Interval.all_reals()
    if intv_type == POS_REALS:
        return Interval.pos_reals()
    if intv_type == NEG_REALS:
        return Interval.neg_reals()
    raise SerializationException("deserialize_interval", f"unknown interval type {intv_type}")


def serialize_trajectory(f, traj):
    items = traj.items()
    f.write(struct.pack("<i", len(items)))
    for t, y in items:
        f.write(struct.pack("<dd", t, y))


def deserialize_trajectory(f):
    n, = _read(f, "<i")
    if n < 0:
        raise SerializationException("deserialize_trajectory", f"invalid number of points {n}")
    return Trajectory([_read(f, "<dd") for _ in range(n)])


def serialize_tube(path, tube, trajectories=(), version=None):
    """
        Writes tube (and, from version 2, trajectories) to the binary
        file path.

        Inputs:
            path: file name.
            tube: Tube.
            trajectories: Trajectory or list of Trajectory.
            version: 1 or 2 (gv.serialization_version by default).
    """
    version = gv.serialization_version if version is None else version
    if version not in SUPPORTED_VERSIONS:
        raise SerializationException("serialize_tube", f"unsupported version number {version}")
    if isinstance(trajectories, Trajectory):
        trajectories = [trajectories]
    trajectories = list(trajectories)
    if version == 1 and trajectories:
        raise SerializationException("serialize_tube", "trajectories need version 2")

    try:
        with open(path, "wb") as f:
            f.write(struct.pack("<h", version))
            f.write(struct.pack("<i", tube.nb_slices()))
            serialize_interval(f, tube.domain())
            for s in tube.slices():
                serialize_interval(f, s.codomain())

            if version == 2:
                f.write(struct.pack("<i", len(trajectories)))
                for traj in trajectories:
                    serialize_trajectory(f, traj)
    except OSError as e:
        raise SerializationException("serialize_tube", f"error while writing file \"{path}\"") from e

    logger.info(f"Tube of {tube.nb_slices()} slices and {len(trajectories)} trajectories written to {path}")


def deserialize_tube(path):
    """
        Reads a binary file written by serialize_tube.

        Outputs:
            (tube, trajectories): Tube and list of Trajectory (empty for
            version 1 files).
    """
    try:
        with open(path, "rb") as f:
            version, = _read(f, "<h")
            if version not in SUPPORTED_VERSIONS:
                raise SerializationException("deserialize_tube", f"unsupported version number {version}")

            nb_slices, = _read(f, "<i")
            if nb_slices <= 0:
                raise SerializationException("deserialize_tube", f"invalid number of slices {nb_slices}")
            domain    = deserialize_interval(f)
            envelopes = [deserialize_interval(f) for _ in range(nb_slices)]

            trajectories = []
            if version == 2:
                nb_trajs, = _read(f, "<i")
                trajectories = [deserialize_trajectory(f) for _ in range(nb_trajs)]
    except SerializationException:
        raise
    except OSError as e:
        raise SerializationException("deserialize_tube", f"error while opening file \"{path}\"") from e

    if domain.is_empty() or domain.is_unbounded() or domain.is_degenerated():
        raise SerializationException("deserialize_tube", f"invalid domain {domain}")

    timestep = domain.diam() / nb_slices
    bounds   = [domain.lb()] + [domain.lb() + i*timestep for i in range(1, nb_slices)] + [domain.ub()]
    tube     = Tube._from_bounds(bounds)
    for s, y in zip(tube.slices(), envelopes):
        s.set(y)

    logger.info(f"Tube of {nb_slices} slices and {len(trajectories)} trajectories read from {path}")
    return tube, trajectories
