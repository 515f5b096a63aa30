import sys
import json
import config
from .legs import describe_leg
from .util import format_duration


class TextReporter:
    """writes routes as they come in, e.g.

        <--- A --- >
        A --- > C
        1 A --> B dep 8:00:00 arr 10:00:00 price 40.00
        2 B --> C dep 10:30:00 arr 12:30:00 price 40.00
        Total Cost: 80.00$, Total Duration:  4h30m0s
        ---
    """
    def __init__(self, stream=None):
        self.stream = sys.stdout if stream is None else stream

    def _write(self, line):
        self.stream.write(line + '\n')

    def begin_source(self, source):
        self._write('<--- {} --- > '.format(source))

    def report(self, route):
        self._write('{} --- > {} '.format(route.source, route.target))
        for leg in route.legs:
            self._write(describe_leg(leg))
        if not route.found:
            self._write('No route')
        self._write('Total Cost: {:.{}f}$, Total Duration:  {}'.format(
            route.price, config.PRICE_PRECISION, format_duration(route.duration)))
        self._write('---')


class JsonReporter:
    """collects routes as plain dicts"""
    def __init__(self):
        self.routes = []

    def begin_source(self, source):
        pass

    def report(self, route):
        self.routes.append(route_to_dict(route))

    def dump(self, stream):
        json.dump(self.routes, stream, indent=2)


def route_to_dict(route):
    return {
        'source': route.source,
        'target': route.target,
        'legs': [leg._asdict() for leg in route.legs],
        'price': route.price,
        'duration': route.duration,
        'cost': route.cost
    }
