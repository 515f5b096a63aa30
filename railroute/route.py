from collections import namedtuple
from .legs import shift_leg
from .search import shortest_paths
from .errors import UnknownStationError
from .cost import single_leg_cost, connecting_cost, connect


class Route(namedtuple('Route', ['source', 'target', 'legs', 'price', 'duration', 'cost'])):
    """a reconstructed route.
    - `legs` are copies placed on one timeline, i.e. shifted
      by whole days so none departs before the previous arrives
    - `duration` is in seconds, layovers included
    - `cost` is the composite cost the search minimized"""
    __slots__ = ()

    @property
    def found(self):
        return bool(self.legs)


def empty_route(source, target):
    return Route(source=source, target=target, legs=[], price=0., duration=0, cost=0.)


def reconstruct(state, target):
    """walk the search's predecessor edges back from `target`
    and replay the route's costs and times"""
    if target not in state.distance:
        raise UnknownStationError('Station "{}" is not in the graph'.format(target))

    source = state.source
    if target == source:
        return empty_route(source, target)

    edges = []
    station = target
    while station != source:
        edge = state.predecessor_edge.get(station)

        # no way in, target is unreachable
        if edge is None:
            return empty_route(source, target)
        edges.append(edge)
        station = state.predecessor[station]
    edges.reverse()

    # costs are summed in the same order as the search
    # summed distances, so the totals match exactly
    first = edges[0].leg
    cost = 0
    cost += single_leg_cost(first)
    price = first.price
    duration = first.duration
    legs = [shift_leg(first, 0)]

    # `prev` is the unshifted leg, as the search costed it
    prev = first
    for edge in edges[1:]:
        leg = edge.leg
        cost += connecting_cost(prev, leg)
        _, layover = connect(prev, leg)
        price += leg.price
        duration += leg.duration + layover

        # depart `layover` after the previous copy arrives
        dep_time = legs[-1].arr_time + layover
        legs.append(shift_leg(leg, dep_time - leg.dep_time))
        prev = leg

    return Route(source=source, target=target, legs=legs,
                 price=price, duration=duration, cost=cost)


def route_between(graph, source, target):
    """least-cost route for a single pair,
    stopping the search once `target` is settled"""
    if target not in graph:
        raise UnknownStationError('Station "{}" is not in the graph'.format(target))
    state = shortest_paths(graph, source, target=target)
    return reconstruct(state, target)
