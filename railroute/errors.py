import networkx as nx


class RailrouteError(Exception): pass


class UnknownStationError(RailrouteError, nx.NodeNotFound):
    """a query referenced a station
    that isn't in the graph"""
    pass


class DuplicateStationError(RailrouteError): pass


class DuplicateEdgeError(RailrouteError): pass


class InvalidLegError(RailrouteError, ValueError):
    """a leg record can't be used,
    e.g. a negative price or a bad clock time"""
    pass
