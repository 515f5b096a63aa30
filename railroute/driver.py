import logging
from tqdm import tqdm
from .route import reconstruct
from .search import shortest_paths
from .errors import UnknownStationError

logger = logging.getLogger(__name__)


def _routes_by_source(graph, sources, progress):
    """yields (source, routes) with one search per source;
    a bad source only loses its own routes"""
    stations = graph.stations()
    if sources is None:
        sources = stations
    for source in tqdm(sources, disable=not progress):
        try:
            state = shortest_paths(graph, source)
        except UnknownStationError:
            logger.warning('Skipping unknown source station "{}"'.format(source))
            continue
        yield source, _reconstruct_all(state, stations)


def _reconstruct_all(state, stations):
    for target in stations:
        if target != state.source:
            yield reconstruct(state, target)


def all_routes(graph, sources=None, progress=False):
    """yields the least-cost route for every ordered pair
    of distinct stations, grouped by source.
    a search is shared by all targets of its source"""
    for _, routes in _routes_by_source(graph, sources, progress):
        yield from routes


def report_all(graph, reporter, sources=None, progress=False):
    """hand every route to `reporter`,
    returns how many routes were reported"""
    n = 0
    for source, routes in _routes_by_source(graph, sources, progress):
        reporter.begin_source(source)
        for route in routes:
            reporter.report(route)
            n += 1
    logger.info('Reported {} routes'.format(n))
    return n
