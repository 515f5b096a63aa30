"""
composite route costs.

a leg's cost is price * duration (in seconds).
two consecutive legs are costed together,
(price_1 + price_2) * (duration_1 + layover + duration_2),
so the cost of taking a leg depends on which leg came before it.
"""

import config
from .legs import shift_leg


def single_leg_cost(leg):
    """cost of a leg with no preceding leg"""
    return leg.price * leg.duration


def connect(prev, nxt):
    """place `nxt` after `prev` on the same timeline.
    if `nxt` doesn't depart strictly after `prev` arrives
    plus the minimum connection time, it is taken the following day.
    returns the (possibly shifted) copy of `nxt` and the layover in seconds"""
    if not nxt.dep_time > prev.arr_time + config.MIN_CONNECTION_TIME:
        nxt = shift_leg(nxt, config.DAY_SECS)
    return nxt, nxt.dep_time - prev.arr_time


def connecting_cost(prev, nxt):
    """cost of taking `nxt` immediately after `prev`,
    including the layover between them"""
    adjusted, layover = connect(prev, nxt)
    total_duration = prev.duration + adjusted.duration + layover
    return (prev.price + nxt.price) * total_duration
