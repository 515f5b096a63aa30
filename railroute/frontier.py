import heapq
from itertools import count


class Frontier():
    """a heap-based min-priority queue
    of stations keyed by tentative distance.
    A thin wrapper around Python's heapq;
    a counter breaks ties in push order so
    stations themselves are never compared.

    decrease-key is a fresh push: the caller
    skips stale entries when they're popped."""
    def __init__(self):
        self.heap = []
        self._counter = count()

    def __len__(self):
        return len(self.heap)

    def push(self, distance, station):
        heapq.heappush(self.heap, (distance, next(self._counter), station))

    def pop(self):
        try:
            distance, _, station = heapq.heappop(self.heap)
        except IndexError:
            return None
        return distance, station
