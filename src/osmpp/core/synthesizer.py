# core/synthesizer.py
from osmpp.domain.entities import Node, Tag

MAX_NODE_ID = 2**63 - 1


class NodeIdCounter:
    """Monotonic id source for derived nodes; owned by the pipeline."""

    def __init__(self, start: int):
        if start <= 0:
            raise ValueError(f"start id must be > 0, got {start}")
        self.start = start
        self._next = start

    @property
    def issued(self) -> int:
        return self._next - self.start

    def next_id(self) -> int:
        nid = self._next
        if nid > MAX_NODE_ID:
            raise OverflowError("node id counter exhausted the 64-bit range")
        self._next += 1
        return nid


def synthesize(source: Node, category: str, ref: str, counter: NodeIdCounter) -> Node:
    # Coordinates and metadata are shared with the source; only id and tags change.
    return Node(
        id=counter.next_id(),
        lat=source.lat,
        lon=source.lon,
        tags=[Tag("node_network", category), Tag("name", ref)],
        meta=source.meta,
    )
