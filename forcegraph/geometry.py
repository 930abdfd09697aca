import math
from collections import namedtuple

Point = namedtuple("Point", ["x", "y"])


def dist(a, b):
    """Distance between two objects exposing x/y."""
    return math.hypot(a.x - b.x, a.y - b.y)


def force_direction(a, b, force):
    """Split a scalar force into x/y components pointing from a towards b.

    Uses the rise/run ratios instead of atan/cos/sin so that nearly
    horizontal or vertical pairs stay well-conditioned. A negative force
    points from b towards a. Coincident points give no force.
    """
    run = b.x - a.x
    rise = b.y - a.y

    if run == 0 and rise == 0:
        return 0.0, 0.0
    if run == 0:
        return 0.0, math.copysign(force, rise)
    if rise == 0:
        return math.copysign(force, run), 0.0

    ratio = rise / run
    x_force = force / math.sqrt(1 + ratio * ratio)
    ratio = run / rise
    y_force = force / math.sqrt(1 + ratio * ratio)
    return math.copysign(1, run) * x_force, math.copysign(1, rise) * y_force


def damp(force, damping):
    """Attenuate a force by a fixed fraction, never flipping its sign."""
    magnitude = abs(force)
    return math.copysign(max(magnitude - damping * magnitude, 0.0), force)


def logistic(x, low, high, steepness=1.0, midpoint=0.0):
    """Logistic curve rising from `low` to `high`, centred on `midpoint`."""
    z = -steepness * (x - midpoint)
    # exp overflows past ~709
    if z > 700:
        return float(low)
    return low + (high - low) / (1 + math.exp(z))
