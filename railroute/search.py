"""
single-source least-cost search over a station graph.

this is Dijkstra's algorithm with one change: the weight of
an arc depends on the service used to reach the arc's origin.
leaving the source, an arc weighs as much as its cheapest
service by `single_leg_cost`. leaving any other station, each
candidate service is costed together with the service we arrived
on (`connecting_cost`) and the cheapest is taken.

since weights depend on the incoming service, the search keeps
the winning service per station alongside its distance, and
route reconstruction replays the same costs.
"""

import math
import logging
from collections import namedtuple
from .graph import services
from .frontier import Frontier
from .errors import UnknownStationError
from .cost import single_leg_cost, connecting_cost

logger = logging.getLogger(__name__)

SearchState = namedtuple('SearchState', ['source', 'distance', 'predecessor', 'predecessor_edge', 'finalized'])


def arc_weight(arc, prev_edge=None):
    """cheapest service of an arc, given the
    service edge we arrived on (None at the source).
    returns (edge, weight); ties keep the earliest-added edge"""
    best, weight = None, math.inf
    for edge in services(arc):
        if prev_edge is None:
            w = single_leg_cost(edge.leg)
        else:
            w = connecting_cost(prev_edge.leg, edge.leg)
        if w < weight:
            best, weight = edge, w
    return best, weight


def shortest_paths(graph, source, target=None):
    """search from `source` until every reachable station is settled,
    or until `target` is settled if one is given"""
    if source not in graph:
        raise UnknownStationError('Station "{}" is not in the graph'.format(source))

    distance = {station: math.inf for station in graph.stations()}
    distance[source] = 0
    predecessor = {}
    predecessor_edge = {}
    finalized = set()

    frontier = Frontier()
    frontier.push(0, source)

    while frontier:
        dist, u = frontier.pop()

        # a longer, stale entry for an already settled station
        if u in finalized:
            continue
        finalized.add(u)

        if u == target:
            break

        prev_edge = predecessor_edge.get(u)
        for v, arc in graph.arcs(u):
            if v in finalized:
                continue
            edge, weight = arc_weight(arc, prev_edge)
            alt = dist + weight
            if alt < distance[v]:
                distance[v] = alt
                predecessor[v] = u
                predecessor_edge[v] = edge
                frontier.push(alt, v)

    logger.debug('Search from "{}" settled {}/{} stations'.format(source, len(finalized), len(distance)))
    return SearchState(source=source,
                       distance=distance,
                       predecessor=predecessor,
                       predecessor_edge=predecessor_edge,
                       finalized=finalized)
