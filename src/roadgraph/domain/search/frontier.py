# domain/search/frontier.py
import heapq
from dataclasses import dataclass, field

from roadgraph.domain.entities.intersection import Intersection


@dataclass(order=True)
class PriorityEntry:
    priority: float
    seq: int  # FIFO among equal priorities
    node: Intersection = field(compare=False)
    cost: float = field(compare=False)  # accumulated cost when enqueued


class Frontier:
    """Min-priority queue of PriorityEntry with lazy deletion left to the caller."""

    def __init__(self):
        self._q: list[PriorityEntry] = []
        self._seq = 0

    def push(self, node: Intersection, cost: float, priority: float) -> None:
        self._seq += 1
        heapq.heappush(self._q, PriorityEntry(priority, self._seq, node, cost))

    def pop(self) -> PriorityEntry:
        return heapq.heappop(self._q)

    def __len__(self) -> int:
        return len(self._q)

    def __bool__(self) -> bool:
        return bool(self._q)
