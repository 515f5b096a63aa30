import math
import numbers
import config
from collections import namedtuple
from .errors import InvalidLegError
from .util import secs_to_clock

# times are seconds since midnight;
# `duration` is derived once in `make_leg`
Leg = namedtuple('Leg', ['id', 'origin', 'destination', 'dep_time', 'arr_time', 'price', 'duration'])

# one parallel edge of an arc,
# i.e. one scheduled service between two stations
ServiceEdge = namedtuple('ServiceEdge', ['id', 'leg'])


def make_leg(id, origin, destination, dep_time, arr_time, price):
    """build a leg, computing its duration.
    if the arrival clock time is not after the departure
    clock time, the leg is assumed to cross midnight"""
    try:
        price = float(price)
    except (TypeError, ValueError):
        raise InvalidLegError('Leg {}: bad price "{}"'.format(id, price))
    if not math.isfinite(price) or price < 0:
        raise InvalidLegError('Leg {}: price must be finite and non-negative, got {}'.format(id, price))
    for t in (dep_time, arr_time):
        if not isinstance(t, numbers.Integral):
            raise InvalidLegError('Leg {}: clock time must be whole seconds, got {!r}'.format(id, t))
        if not 0 <= t < config.DAY_SECS:
            raise InvalidLegError('Leg {}: clock time out of range: {}'.format(id, t))

    duration = arr_time - dep_time
    if arr_time <= dep_time:
        duration += config.DAY_SECS
    return Leg(id=id, origin=origin, destination=destination,
               dep_time=dep_time, arr_time=arr_time,
               price=price, duration=duration)


def shift_leg(leg, secs):
    """copy of a leg departing `secs` later.
    the copy's arrival is always departure + duration,
    so it may run past 24h"""
    dep_time = leg.dep_time + secs
    return leg._replace(dep_time=dep_time, arr_time=dep_time + leg.duration)


def describe_leg(leg):
    return '{} {} --> {} dep {} arr {} price {:.2f}'.format(
        leg.id, leg.origin, leg.destination,
        secs_to_clock(leg.dep_time), secs_to_clock(leg.arr_time), leg.price)
