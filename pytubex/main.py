__author__      = "Lekan Molu"
__maintainer__  = "Lekan Molu"
__license__     = "Molux Licence"
__copyright__   = "2023, Set-Membership Tube Analysis in Python"
__credits__     = "There are None."
__email__       = "patlekno@icloud.com"
__date__        = "May 04, 2023"
__status__      = "Completed"

import math
import logging

from absl import app, flags
import matplotlib.pyplot as plt

from pytubex.arithmetic import Interval, cos
from pytubex.tube import Tube, Trajectory
from pytubex.contractors import CtcEval

flags.DEFINE_bool('verbose', default=False, help="run in verbose print mode.")
flags.DEFINE_float('timestep', default=0.05, lower_bound=1e-4, help="width of the slices.")
flags.DEFINE_float('t_obs', default=3.125, help="date of the observation.")
flags.DEFINE_float('noise', default=0.1, lower_bound=0., help="uncertainty on the derivative.")
flags.DEFINE_string('output', default=None, help="binary file the contracted tube is written to.")
flags.DEFINE_bool('plot', default=False, help="plot the tubes.")

FLAGS = flags.FLAGS

logger = logging.getLogger(__name__)


def simple_eval(timestep=0.05, t_obs=3.125, noise=0.1):
    """
        Tube of x(t), with x(0) = 0 and dx/dt in cos(t) + [-noise, noise]
        over [0, 5], contracted with the observation x(t_obs) = sin(t_obs).

        Outputs:
            (x, xdot): the contracted tube and its derivative.
    """
    domain = Interval(0., 5.)
    xdot   = Tube(domain, timestep, function=lambda t: cos(t) + Interval(-noise, noise))
    x      = xdot.primitive(0.)
    logger.debug(f"primitive: {x}, volume {x.volume():.6f}")

    ctc_eval = CtcEval()
    t, z     = ctc_eval.contract(t_obs, math.sin(t_obs), x, xdot)
    logger.info(f"observation ({t}, {z}): volume {x.volume():.6f}")
    return x, xdot


def main(argv):
    '''Simple tube evaluation.'''
    del argv

    logging.basicConfig(format='%(levelname)s:%(message)s', level=logging.DEBUG if FLAGS.verbose else logging.INFO)
    logging.getLogger('matplotlib.font_manager').disabled = True # Turn off pyplot's spurious dumps on screen

    logger.info('>>==================================Simple evaluation===================================<<')
    logger.info(f'Params:: timestep: {FLAGS.timestep} | t_obs: {FLAGS.t_obs} | noise: {FLAGS.noise}')

    x, xdot = simple_eval(FLAGS.timestep, FLAGS.t_obs, FLAGS.noise)

    if FLAGS.output:
        truth = Trajectory.from_function(math.sin, x.domain(), FLAGS.timestep)
        x.serialize(FLAGS.output, [truth])

    if FLAGS.plot:
        from pytubex.visuals import plot_tube, plot_trajectory

        fig, ax = plt.subplots(1, 1, figsize=(12, 5))
        plot_tube(ax, x, derivative=xdot, title="x")
        plot_trajectory(ax, Trajectory.from_function(math.sin, x.domain(), 0.01), label="sin(t)")
        ax.legend(loc='best')
        plt.show()


def run():
    app.run(main)


if __name__ == '__main__':
    run()
