import logging

from settings import ANGLE_EPSILON, EPSILON, MAX_RANGE
from sight.angles import sample
from sight.caster import cast_samples, check_range
from sight.geometry import as_point
from sight.obstacles import ObstacleSet
from sight.polygon import assemble

logger = logging.getLogger(__name__)


def compute_visibility(observer, obstacles, max_range=MAX_RANGE,
                       epsilon=EPSILON, angle_epsilon=ANGLE_EPSILON):
    """Visibility polygon of ``observer`` among ``obstacles``.

    Samples ray angles at every obstacle corner, casts each one to its
    nearest wall (or to ``max_range``), and orders the hits by angle.
    Nothing is kept between calls and ``obstacles`` is only read, so one
    ObstacleSet can serve any number of observers.

    ``obstacles`` may also be a raw list of segments; it is validated and
    built first.
    """
    check_range(max_range)
    if angle_epsilon <= epsilon:
        raise ValueError(
            f"angle_epsilon ({angle_epsilon}) must be larger than epsilon ({epsilon})"
        )

    observer = as_point(observer)
    if not isinstance(obstacles, ObstacleSet):
        obstacles = ObstacleSet.build(obstacles, epsilon)

    samples = sample(observer, obstacles, angle_epsilon, epsilon)
    angle_hits = cast_samples(observer, samples, obstacles, max_range, epsilon)
    polygon = assemble(observer, angle_hits, max_range, epsilon)

    logger.debug(
        "Observer (%.3f, %.3f): %d segments, %d rays, %d vertices",
        observer.x, observer.y, len(obstacles), len(samples), len(polygon),
    )
    return polygon
