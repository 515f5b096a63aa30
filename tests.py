import os
import json
import math
import tempfile
import unittest
import networkx as nx
from io import StringIO
from railroute import (StationGraph, make_leg, shortest_paths, reconstruct, route_between,
                       all_routes, report_all, load_schedule, UnknownStationError,
                       DuplicateStationError, DuplicateEdgeError, InvalidLegError)
from railroute.legs import shift_leg
from railroute.util import clock_to_secs, secs_to_clock, format_duration
from railroute.cost import single_leg_cost, connecting_cost, connect
from railroute.search import arc_weight
from railroute.frontier import Frontier
from railroute.schedule import read_xml_schedule, read_csv_schedule
from railroute.report import TextReporter, JsonReporter

HOUR = 60*60
DAY = 24*HOUR

xml_data = '''<TrainLegs>
  <TrainLeg TrainId="1" DepartureStationId="1902" ArrivalStationId="1909" Price="170.50" ArrivalTimeString="10:15:00" DepartureTimeString="07:30:00"/>
  <TrainLeg TrainId="2" DepartureStationId="1909" ArrivalStationId="1929" Price="30" ArrivalTimeString="02:00:00" DepartureTimeString="23:00:00"/>
  <TrainLeg TrainId="3" DepartureStationId="1902" ArrivalStationId="1909" Price="90.25" ArrivalTimeString="12:00:00" DepartureTimeString="09:00:00"/>
</TrainLegs>
'''

csv_data = '''
leg_id,origin,destination,departure,arrival,price
ab,A,B,08:00,10:00,40
bc,B,C,10:30,12:30,40
ac,A,C,08:00:00,13:00:00,100
'''


def leg(id, origin, destination, dep, arr, price):
    return make_leg(id, origin, destination, clock_to_secs(dep), clock_to_secs(arr), price)


def graph_of(*legs):
    graph = StationGraph()
    for l in legs:
        graph.add_service(l)
    return graph


def abc_graph(direct_price=100):
    return graph_of(
        leg('ac', 'A', 'C', '08:00', '13:00', direct_price),
        leg('ab', 'A', 'B', '08:00', '10:00', 40),
        leg('bc', 'B', 'C', '10:30', '12:30', 40))


def network_graph():
    """a few stations with parallel services,
    midnight crossings and a dead end (E)"""
    return graph_of(
        leg('1', 'A', 'B', '07:00', '09:00', 20),
        leg('2', 'A', 'B', '08:00', '09:30', 35),
        leg('3', 'B', 'C', '09:40', '11:00', 15),
        leg('4', 'B', 'C', '22:00', '00:30', 5),
        leg('5', 'C', 'D', '00:20', '02:00', 12),
        leg('6', 'A', 'D', '06:00', '18:00', 60),
        leg('7', 'D', 'A', '19:00', '21:00', 25),
        leg('8', 'C', 'A', '12:00', '16:00', 10),
        leg('9', 'E', 'A', '05:00', '06:00', 5))


class LegTests(unittest.TestCase):
    def test_duration(self):
        l = leg('1', 'A', 'B', '08:00', '10:30', 10)
        self.assertEqual(l.duration, 2*HOUR + 30*60)

    def test_duration_crosses_midnight(self):
        l = leg('1', 'A', 'B', '23:00', '01:00', 10)
        self.assertEqual(l.duration, 2*HOUR)

        # same clock time is a full day
        l = leg('2', 'A', 'B', '09:00', '09:00', 10)
        self.assertEqual(l.duration, DAY)

    def test_negative_price(self):
        with self.assertRaises(InvalidLegError):
            leg('1', 'A', 'B', '08:00', '10:00', -1)

        # also a ValueError
        with self.assertRaises(ValueError):
            leg('1', 'A', 'B', '08:00', '10:00', 'free')

    def test_clock_out_of_range(self):
        with self.assertRaises(InvalidLegError):
            make_leg('1', 'A', 'B', DAY, 10, 5)

    def test_price_must_be_finite(self):
        for price in ('inf', float('inf'), 'nan'):
            with self.assertRaises(InvalidLegError):
                make_leg('1', 'A', 'B', 0, 60, price)

    def test_clock_must_be_seconds(self):
        with self.assertRaises(InvalidLegError):
            make_leg('1', 'A', 'B', '08:00', 60, 5)
        with self.assertRaises(InvalidLegError):
            make_leg('1', 'A', 'B', 0, None, 5)

    def test_shift_is_a_copy(self):
        l = leg('1', 'A', 'B', '23:00', '01:00', 10)
        shifted = shift_leg(l, DAY)
        self.assertEqual(l.dep_time, 23*HOUR)
        self.assertEqual(l.arr_time, 1*HOUR)
        self.assertEqual(shifted.dep_time, DAY + 23*HOUR)
        self.assertEqual(shifted.arr_time, shifted.dep_time + 2*HOUR)
        self.assertEqual(shifted.duration, l.duration)

    def test_clock_parsing(self):
        self.assertEqual(clock_to_secs('07:25'), 7*HOUR + 25*60)
        self.assertEqual(clock_to_secs('07:25:10'), 7*HOUR + 25*60 + 10)
        self.assertEqual(secs_to_clock(7*HOUR + 25*60), '7:25:00')
        self.assertEqual(format_duration(4*HOUR + 30*60), '4h30m0s')
        with self.assertRaises(InvalidLegError):
            clock_to_secs('7h25')


class CostTests(unittest.TestCase):
    def test_single_leg_cost(self):
        l = leg('1', 'A', 'B', '08:00', '10:00', 40)
        self.assertEqual(single_leg_cost(l), 40 * 2*HOUR)

    def test_connecting_cost_includes_layover(self):
        l1 = leg('1', 'A', 'B', '08:00', '10:00', 40)
        l2 = leg('2', 'B', 'C', '10:30', '12:30', 40)
        adjusted, layover = connect(l1, l2)
        self.assertEqual(adjusted, l2)
        self.assertEqual(layover, 30*60)
        self.assertEqual(connecting_cost(l1, l2), 80 * (4*HOUR + 30*60))

    def test_wraparound(self):
        # arriving 23:50, the 00:10 service is not after 23:55,
        # so it is taken the following day
        l1 = leg('1', 'A', 'B', '22:50', '23:50', 10)
        l2 = leg('2', 'B', 'C', '00:10', '01:10', 20)
        adjusted, layover = connect(l1, l2)
        self.assertEqual(layover, 20*60)
        self.assertEqual(adjusted.dep_time, DAY + 10*60)
        self.assertEqual(connecting_cost(l1, l2), 30 * (HOUR + HOUR + 20*60))

        # the unshifted leg is untouched
        self.assertEqual(l2.dep_time, 10*60)

    def test_minimum_connection_time(self):
        l1 = leg('1', 'A', 'B', '08:00', '10:00', 10)

        # exactly 5 minutes is not enough
        l2 = leg('2', 'B', 'C', '10:05', '11:00', 10)
        _, layover = connect(l1, l2)
        self.assertEqual(layover, DAY + 5*60)

        l3 = leg('3', 'B', 'C', '10:06', '11:00', 10)
        _, layover = connect(l1, l3)
        self.assertEqual(layover, 6*60)

    def test_connecting_after_midnight_crossing(self):
        l1 = leg('1', 'A', 'B', '23:00', '01:00', 10)
        l2 = leg('2', 'B', 'C', '02:00', '03:00', 10)
        _, layover = connect(l1, l2)
        self.assertEqual(layover, HOUR)


class StationGraphTests(unittest.TestCase):
    def test_add_station(self):
        graph = StationGraph()
        graph.add_station('A')
        self.assertTrue(graph.has_station('A'))
        self.assertIn('A', graph)
        with self.assertRaises(DuplicateStationError):
            graph.add_station('A')

    def test_add_service_creates_stations(self):
        graph = StationGraph()
        graph.add_station('A')
        graph.add_service(leg('1', 'A', 'B', '08:00', '10:00', 40))
        self.assertEqual(graph.stations(), ['A', 'B'])
        self.assertEqual(graph.n_services, 1)

    def test_parallel_services(self):
        l1 = leg('1', 'A', 'B', '08:00', '12:00', 10)
        l2 = leg('2', 'A', 'B', '08:00', '09:00', 50)
        graph = graph_of(l1, l2)

        arc = graph.outgoing_arc('A', 'B')
        self.assertEqual(len(arc), 2)
        self.assertEqual([d['leg'] for d in arc.values()], [l1, l2])

        # both sides hold the same arc
        self.assertIs(arc, graph.incoming_arc('B', 'A'))

        edge, weight = arc_weight(arc)
        self.assertEqual(edge.leg, l1)
        self.assertEqual(weight, 10 * 4*HOUR)

    def test_absent_arcs(self):
        graph = graph_of(leg('1', 'A', 'B', '08:00', '10:00', 40))
        self.assertIsNone(graph.outgoing_arc('B', 'A'))
        self.assertIsNone(graph.incoming_arc('A', 'B'))
        self.assertIsNone(graph.outgoing_arc('X', 'A'))
        self.assertIsNone(graph.incoming_arc('X', 'A'))

    def test_edge_ids(self):
        graph = StationGraph()
        l1 = leg('1', 'A', 'B', '08:00', '10:00', 40)
        l2 = leg('2', 'A', 'B', '09:00', '11:00', 40)
        e1 = graph.add_service(l1, edge_id=0)
        e2 = graph.add_service(l2)
        self.assertEqual(e1.id, 0)
        self.assertEqual(e2.id, 1)

        with self.assertRaises(DuplicateEdgeError):
            graph.add_service(l2, edge_id=0)
        self.assertEqual(graph.n_services, 2)

    def test_str(self):
        graph = graph_of(leg('1', 'A', 'B', '08:00', '10:00', 40))
        out = str(graph)
        self.assertIn('A --- > B', out)
        self.assertIn('1 A --> B', out)


class FrontierTests(unittest.TestCase):
    def test_order(self):
        frontier = Frontier()
        frontier.push(5, 'C')
        frontier.push(1, 'A')
        frontier.push(5, 'B')
        self.assertEqual(len(frontier), 3)
        self.assertEqual(frontier.pop(), (1, 'A'))

        # ties come out in push order
        self.assertEqual(frontier.pop(), (5, 'C'))
        self.assertEqual(frontier.pop(), (5, 'B'))
        self.assertIsNone(frontier.pop())


class SearchTests(unittest.TestCase):
    def test_source_distance(self):
        graph = network_graph()
        for s in graph.stations():
            state = shortest_paths(graph, s)
            self.assertEqual(state.distance[s], 0)
            self.assertNotIn(s, state.predecessor_edge)

    def test_unknown_source(self):
        graph = network_graph()
        with self.assertRaises(UnknownStationError):
            shortest_paths(graph, 'X')
        with self.assertRaises(nx.NodeNotFound):
            shortest_paths(graph, 'X')

    def test_cheapest_parallel_service(self):
        graph = graph_of(
            leg('slow', 'A', 'B', '08:00', '12:00', 10),
            leg('fast', 'A', 'B', '08:00', '09:00', 50))
        state = shortest_paths(graph, 'A')
        self.assertEqual(state.predecessor_edge['B'].leg.id, 'slow')
        self.assertEqual(state.distance['B'], 10 * 4*HOUR)

    def test_ties_keep_insertion_order(self):
        graph = graph_of(
            leg('first', 'A', 'B', '08:00', '10:00', 10),
            leg('second', 'A', 'B', '12:00', '14:00', 10))
        state = shortest_paths(graph, 'A')
        self.assertEqual(state.predecessor_edge['B'].leg.id, 'first')

    def test_service_depends_on_previous_leg(self):
        # by itself `early` is cheaper, but arriving
        # at 10:00 it can only be caught the next day
        graph = graph_of(
            leg('ab', 'A', 'B', '08:00', '10:00', 10),
            leg('early', 'B', 'C', '10:02', '11:02', 1),
            leg('late', 'B', 'C', '11:00', '12:00', 5))
        state = shortest_paths(graph, 'A')
        self.assertEqual(state.predecessor_edge['C'].leg.id, 'late')
        self.assertEqual(state.predecessor['C'], 'B')
        self.assertEqual(state.distance['C'], 10 * 2*HOUR + 15 * 4*HOUR)

    def test_unreachable_distance(self):
        graph = network_graph()
        state = shortest_paths(graph, 'A')
        self.assertEqual(state.distance['E'], math.inf)
        self.assertNotIn('E', state.finalized)

    def test_early_termination(self):
        graph = network_graph()
        full = shortest_paths(graph, 'A')
        partial = shortest_paths(graph, 'A', target='B')
        self.assertIn('B', partial.finalized)
        self.assertEqual(partial.distance['B'], full.distance['B'])


class EndToEndTests(unittest.TestCase):
    def test_two_hops_beat_direct(self):
        graph = abc_graph(direct_price=100)
        direct = 100 * 5*HOUR
        two_hop = 40 * 2*HOUR + 80 * (4*HOUR + 30*60)
        self.assertLess(two_hop, direct)

        state = shortest_paths(graph, 'A')
        self.assertEqual(state.distance['C'], two_hop)

        route = reconstruct(state, 'C')
        self.assertEqual([l.id for l in route.legs], ['ab', 'bc'])
        self.assertEqual(route.price, 80)
        self.assertEqual(route.duration, 4*HOUR + 30*60)
        self.assertEqual(route.cost, state.distance['C'])

    def test_direct_beats_two_hops(self):
        graph = abc_graph(direct_price=80)
        direct = 80 * 5*HOUR
        two_hop = 40 * 2*HOUR + 80 * (4*HOUR + 30*60)
        self.assertLess(direct, two_hop)

        route = route_between(graph, 'A', 'C')
        self.assertEqual([l.id for l in route.legs], ['ac'])
        self.assertEqual(route.price, 80)
        self.assertEqual(route.duration, 5*HOUR)
        self.assertEqual(route.cost, direct)


class ReconstructTests(unittest.TestCase):
    def test_same_station(self):
        graph = network_graph()
        state = shortest_paths(graph, 'A')
        route = reconstruct(state, 'A')
        self.assertEqual(route.legs, [])
        self.assertEqual(route.cost, 0)
        self.assertEqual(route.duration, 0)
        self.assertFalse(route.found)

    def test_unreachable(self):
        graph = network_graph()
        state = shortest_paths(graph, 'A')
        route = reconstruct(state, 'E')
        self.assertEqual(route.legs, [])
        self.assertFalse(route.found)
        self.assertEqual(route.price, 0)

    def test_unknown_target(self):
        graph = network_graph()
        state = shortest_paths(graph, 'A')
        with self.assertRaises(UnknownStationError):
            reconstruct(state, 'X')
        with self.assertRaises(UnknownStationError):
            route_between(graph, 'A', 'X')

    def test_cost_replay(self):
        graph = network_graph()
        for s in graph.stations():
            state = shortest_paths(graph, s)
            for t in graph.stations():
                route = reconstruct(state, t)
                if t == s or not route.found:
                    continue
                self.assertEqual(route.cost, state.distance[t])
                self.assertEqual(route.legs[0].origin, s)
                self.assertEqual(route.legs[-1].destination, t)

    def test_timeline(self):
        graph = network_graph()
        for s in graph.stations():
            state = shortest_paths(graph, s)
            for t in graph.stations():
                route = reconstruct(state, t)
                if not route.found:
                    continue
                for prev, nxt in zip(route.legs, route.legs[1:]):
                    self.assertEqual(prev.destination, nxt.origin)
                    self.assertGreater(nxt.dep_time, prev.arr_time)
                self.assertEqual(route.duration, route.legs[-1].arr_time - route.legs[0].dep_time)
                self.assertEqual(route.price, sum(l.price for l in route.legs))

    def test_wraparound_route(self):
        graph = graph_of(
            leg('1', 'A', 'B', '22:50', '23:50', 10),
            leg('2', 'B', 'C', '00:10', '01:10', 20))
        route = route_between(graph, 'A', 'C')
        first, second = route.legs
        self.assertEqual(second.dep_time, DAY + 10*60)
        self.assertEqual(second.arr_time, DAY + 70*60)
        self.assertEqual(route.duration, HOUR + 20*60 + HOUR)
        self.assertEqual(route.price, 30)

        # graph legs are untouched
        arc = graph.outgoing_arc('B', 'C')
        self.assertEqual(list(arc.values())[0]['leg'].dep_time, 10*60)

    def test_first_leg_crosses_midnight(self):
        graph = graph_of(
            leg('1', 'A', 'B', '23:00', '01:00', 10),
            leg('2', 'B', 'C', '02:00', '03:00', 10))
        route = route_between(graph, 'A', 'C')
        first, second = route.legs
        self.assertEqual(first.arr_time, DAY + HOUR)
        self.assertEqual(second.dep_time, DAY + 2*HOUR)
        self.assertEqual(route.duration, 4*HOUR)

    def test_route_between_matches_full_search(self):
        graph = network_graph()
        for t in graph.stations():
            state = shortest_paths(graph, 'A')
            self.assertEqual(route_between(graph, 'A', t), reconstruct(state, t))


class RecordingReporter:
    def __init__(self):
        self.sources = []
        self.routes = []

    def begin_source(self, source):
        self.sources.append(source)

    def report(self, route):
        self.routes.append(route)


class DriverTests(unittest.TestCase):
    def test_all_pairs(self):
        graph = network_graph()
        n = len(graph)
        routes = list(all_routes(graph))
        self.assertEqual(len(routes), n * (n-1))
        pairs = {(r.source, r.target) for r in routes}
        self.assertEqual(len(pairs), n * (n-1))
        self.assertTrue(all(r.source != r.target for r in routes))

    def test_reporter(self):
        graph = abc_graph()
        reporter = RecordingReporter()
        n = report_all(graph, reporter)
        self.assertEqual(n, 6)
        self.assertEqual(reporter.sources, ['A', 'C', 'B'])
        self.assertEqual(len(reporter.routes), 6)

        # nothing leaves C
        from_c = [r for r in reporter.routes if r.source == 'C']
        self.assertTrue(all(not r.found for r in from_c))

    def test_unknown_source_skipped(self):
        graph = abc_graph()
        reporter = RecordingReporter()
        with self.assertLogs('railroute.driver', level='WARNING'):
            n = report_all(graph, reporter, sources=['X', 'A'])
        self.assertEqual(n, 2)
        self.assertEqual(reporter.sources, ['A'])

    def test_reported_routes_match_all_routes(self):
        graph = network_graph()
        reporter = RecordingReporter()
        report_all(graph, reporter)
        self.assertEqual(reporter.routes, list(all_routes(graph)))
        self.assertEqual(reporter.sources, graph.stations())

    def test_deterministic(self):
        graph = network_graph()
        outputs = []
        for _ in range(2):
            stream = StringIO()
            report_all(graph, TextReporter(stream))
            reporter = JsonReporter()
            report_all(graph, reporter)
            reporter.dump(stream)
            outputs.append(stream.getvalue())
        self.assertEqual(outputs[0], outputs[1])


class ReportTests(unittest.TestCase):
    def test_text(self):
        stream = StringIO()
        report_all(abc_graph(), TextReporter(stream), sources=['A'])
        out = stream.getvalue()
        self.assertIn('<--- A --- >', out)
        self.assertIn('A --- > C', out)
        self.assertIn('ab A --> B dep 8:00:00 arr 10:00:00 price 40.00', out)
        self.assertIn('Total Cost: 80.00$, Total Duration:  4h30m0s', out)

    def test_text_no_route(self):
        stream = StringIO()
        report_all(abc_graph(), TextReporter(stream), sources=['C'])
        self.assertIn('No route', stream.getvalue())

    def test_json(self):
        reporter = JsonReporter()
        report_all(abc_graph(), reporter, sources=['A'])
        stream = StringIO()
        reporter.dump(stream)
        routes = json.loads(stream.getvalue())
        to_c = [r for r in routes if r['target'] == 'C'][0]
        self.assertEqual([l['id'] for l in to_c['legs']], ['ab', 'bc'])
        self.assertEqual(to_c['price'], 80)
        self.assertEqual(to_c['duration'], 4*HOUR + 30*60)


class ScheduleTests(unittest.TestCase):
    def test_xml(self):
        legs = read_xml_schedule(StringIO(xml_data))
        self.assertEqual([l.id for l in legs], ['1', '2', '3'])
        first = legs[0]
        self.assertEqual(first.origin, '1902')
        self.assertEqual(first.destination, '1909')
        self.assertEqual(first.dep_time, 7*HOUR + 30*60)
        self.assertEqual(first.arr_time, 10*HOUR + 15*60)
        self.assertEqual(first.price, 170.5)

        # crosses midnight
        self.assertEqual(legs[1].duration, 3*HOUR)

        graph = StationGraph.from_legs(legs)
        self.assertEqual(len(graph.outgoing_arc('1902', '1909')), 2)

    def test_csv(self):
        legs = read_csv_schedule(StringIO(csv_data))
        self.assertEqual([l.id for l in legs], ['ab', 'bc', 'ac'])
        self.assertEqual(legs[2].duration, 5*HOUR)
        self.assertEqual(legs[0].price, 40.)

    def test_csv_without_ids(self):
        data = 'origin,destination,departure,arrival,price\nA,B,08:00,10:00,5\n'
        legs = read_csv_schedule(StringIO(data))
        self.assertEqual(legs[0].id, '0')

    def test_missing_columns(self):
        data = 'origin,destination,departure\nA,B,08:00\n'
        with self.assertRaises(InvalidLegError):
            read_csv_schedule(StringIO(data))

    def test_bad_record(self):
        data = 'leg_id,origin,destination,departure,arrival,price\nx1,A,B,8am,10:00,5\n'
        with self.assertRaisesRegex(InvalidLegError, 'x1'):
            read_csv_schedule(StringIO(data))

        data = 'leg_id,origin,destination,departure,arrival,price\nx2,A,B,08:00,10:00,\n'
        with self.assertRaisesRegex(InvalidLegError, 'x2'):
            read_csv_schedule(StringIO(data))

    def test_empty_schedules(self):
        self.assertEqual(read_xml_schedule(StringIO('<TrainLegs></TrainLegs>')), [])
        data = 'leg_id,origin,destination,departure,arrival,price\n'
        self.assertEqual(read_csv_schedule(StringIO(data)), [])

    def test_load_by_extension(self):
        with tempfile.TemporaryDirectory() as dir:
            xml_path = os.path.join(dir, 'data.xml')
            csv_path = os.path.join(dir, 'data.csv')
            with open(xml_path, 'w') as f:
                f.write(xml_data)
            with open(csv_path, 'w') as f:
                f.write(csv_data.strip())
            self.assertEqual(len(load_schedule(xml_path)), 3)
            self.assertEqual(len(load_schedule(csv_path)), 3)


if __name__ == '__main__':
    unittest.main()
