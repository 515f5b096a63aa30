from .legs import Leg, ServiceEdge, make_leg
from .graph import StationGraph
from .search import shortest_paths
from .route import Route, reconstruct, route_between
from .driver import all_routes, report_all
from .schedule import load_schedule
from .errors import (RailrouteError, UnknownStationError, DuplicateStationError,
                     DuplicateEdgeError, InvalidLegError)
