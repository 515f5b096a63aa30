import logging
import networkx as nx
from itertools import count
from .legs import ServiceEdge, describe_leg
from .errors import DuplicateStationError, DuplicateEdgeError

logger = logging.getLogger(__name__)


class StationGraph:
    """directed multigraph of stations.

    every scheduled service is its own edge, so an ordered
    pair of stations can be joined by several parallel edges.
    the parallel edges between a pair form an "arc",
    a dict of `edge id -> {'leg': leg}`.

    backed by a `networkx.MultiDiGraph`, which keeps a single
    key-dict per ordered pair and shares it between the
    successor and predecessor adjacency, so the outgoing arc
    of `a` towards `b` *is* the incoming arc of `b` from `a`."""

    def __init__(self):
        self.G = nx.MultiDiGraph()
        self._edge_ids = count()

    @classmethod
    def from_legs(cls, legs):
        graph = cls()
        for leg in legs:
            graph.add_service(leg)
        logger.info('Built graph with {} stations and {} services'.format(len(graph), graph.n_services))
        return graph

    def __contains__(self, station):
        return station in self.G

    def __len__(self):
        return len(self.G)

    def __iter__(self):
        return iter(self.G)

    @property
    def n_services(self):
        return self.G.number_of_edges()

    def has_station(self, station):
        return station in self.G

    def add_station(self, station):
        if station in self.G:
            raise DuplicateStationError('Station "{}" already exists'.format(station))
        self.G.add_node(station)

    def add_service(self, leg, edge_id=None):
        """add a leg as a new parallel edge
        between its origin and destination"""
        for station in (leg.origin, leg.destination):
            if not self.has_station(station):
                self.add_station(station)

        if edge_id is None:
            # skip ids that were given explicitly
            edge_id = next(self._edge_ids)
            while self.G.has_edge(leg.origin, leg.destination, edge_id):
                edge_id = next(self._edge_ids)
        elif self.G.has_edge(leg.origin, leg.destination, edge_id):
            raise DuplicateEdgeError('Edge <{}> already exists in arc <{} --> {}>'.format(
                edge_id, leg.origin, leg.destination))

        # creates the shared arc on both sides if it's missing
        self.G.add_edge(leg.origin, leg.destination, key=edge_id, leg=leg)
        return ServiceEdge(id=edge_id, leg=leg)

    def outgoing_arc(self, frm, to):
        """parallel edges from `frm` to `to`, or None"""
        succ = self.G._succ.get(frm)
        if succ is None:
            return None
        return succ.get(to)

    def incoming_arc(self, to, frm):
        """parallel edges into `to` from `frm`, or None"""
        pred = self.G._pred.get(to)
        if pred is None:
            return None
        return pred.get(frm)

    def stations(self):
        """stations in insertion order"""
        return list(self.G)

    def arcs(self, station):
        """outgoing (destination, arc) pairs of a station"""
        return self.G._succ[station].items()

    def __str__(self):
        lines = []
        for station in self.G:
            lines.append(station)
            for to, arc in self.arcs(station):
                lines.append('{} --- > {}'.format(station, to))
                for edge in services(arc):
                    lines.append('{} ---- {}'.format(edge.id, describe_leg(edge.leg)))
        return '\n'.join(lines)


def services(arc):
    """the service edges of an arc, in insertion order"""
    return [ServiceEdge(id=id, leg=data['leg']) for id, data in arc.items()]
