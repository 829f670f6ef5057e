# core/correlator.py
from collections.abc import Iterator

from osmpp.domain.entities import Node, Way

TURNING_TAG = "fzk_turning"
NOT_SET = "not_set"

# way-level highway values that annotate the turning points they reference
QUALIFYING_HIGHWAYS: frozenset[str] = frozenset(
    {"residential", "living_street", "unclassified", "service", "track"}
)


class TurningCorrelator:
    """
    Turning circles/loops keyed by node id, annotated by the ways that use them.

    Entries hold the registered Node object itself and are mutated in place.
    A node takes at most one `fzk_turning` tag: the first qualifying way wins.
    Iteration order of the table (and of drain_finalize) is registration
    order of the id's first registration; callers must not rely on it.
    """

    def __init__(self):
        self._table: dict[int, Node] = {}
        self.annotated_count = 0
        self.not_set_count = 0

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._table

    def register(self, node: Node) -> None:
        # duplicate ids overwrite silently
        self._table[node.id] = node

    def annotate(self, way: Way, category: str) -> int:
        added = 0
        for ref in way.node_refs:
            node = self._table.get(ref)
            if node is None or node.has_tag(TURNING_TAG):
                continue
            node.add_tag(TURNING_TAG, category)
            added += 1
        self.annotated_count += added
        return added

    def drain_finalize(self) -> Iterator[Node]:
        for node in self._table.values():
            if not node.has_tag(TURNING_TAG):
                node.add_tag(TURNING_TAG, NOT_SET)
                self.not_set_count += 1
            yield node
