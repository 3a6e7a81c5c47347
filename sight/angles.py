import logging
from typing import NamedTuple

from settings import ANGLE_EPSILON, EPSILON
from sight.errors import DegenerateObserverError
from sight.geometry import TAU, angle_to, as_point, normalize_angle

logger = logging.getLogger(__name__)


class Sample(NamedTuple):
    angle: float
    base: float  # corner angle this sample was derived from
    side: int  # -1 just before the corner, 0 on it, +1 just past it


def _dedup_bases(angles, tolerance):
    kept = []
    for angle in angles:
        if kept and angle - kept[-1] <= tolerance:
            continue
        kept.append(angle)
    if len(kept) > 1 and kept[0] + TAU - kept[-1] <= tolerance:
        kept.pop()
    return kept


def _dedup_samples(samples, tolerance):
    kept = []
    for s in samples:
        if kept and s.angle - kept[-1].angle <= tolerance:
            # a ray aimed at a corner beats an offset ray landing on the same angle
            if kept[-1].side and not s.side:
                kept[-1] = s
            continue
        kept.append(s)
    if len(kept) > 1 and kept[0].angle + TAU - kept[-1].angle <= tolerance:
        if kept[0].side and not kept[-1].side:
            kept.pop(0)
        else:
            kept.pop()
    return kept


def sample(observer, obstacles, offset=ANGLE_EPSILON, tolerance=EPSILON):
    """Candidate ray angles for a sweep from ``observer``.

    Every obstacle endpoint contributes the angle towards it plus one angle
    ``offset`` to either side, so the rays just past a corner show what lies
    behind it. Endpoints on the observer have no angle and are skipped.
    Corner angles are merged within ``tolerance`` before offsets are added,
    and the full list again afterwards.

    Returns Samples with strictly ascending angles in [0, 2*pi).
    """
    observer = as_point(observer)

    bases = []
    for endpoint in obstacles.endpoints():
        try:
            angle = angle_to(observer, endpoint.point, tolerance)
        except DegenerateObserverError:
            logger.debug(
                "Observer on endpoint %d of segment %d, skipping its angle",
                endpoint.end, endpoint.segment_index,
            )
            continue
        bases.append(normalize_angle(angle))

    # sort is stable: equal angles keep obstacle traversal order
    bases = _dedup_bases(sorted(bases), tolerance)

    samples = []
    for base in bases:
        for side in (-1, 0, 1):
            samples.append(Sample(normalize_angle(base + side * offset), base, side))
    samples.sort(key=lambda s: s.angle)

    return _dedup_samples(samples, tolerance)


def sample_angles(observer, obstacles, offset=ANGLE_EPSILON, tolerance=EPSILON):
    return [s.angle for s in sample(observer, obstacles, offset, tolerance)]
