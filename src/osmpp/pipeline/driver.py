# pipeline/driver.py
import time
from collections.abc import Callable, Iterable

from osmpp.core.classifier import NetworkJunction, TurningFeature, classify, is_network_junction
from osmpp.core.correlator import QUALIFYING_HIGHWAYS, TurningCorrelator
from osmpp.core.stats import RunStats
from osmpp.core.synthesizer import NodeIdCounter, synthesize
from osmpp.domain.entities import Entity, Node, Relation, Way
from osmpp.io.sink import Sink

from .hooks import NoopHooks, PipelineHooks


class Pipeline:
    """
    Single forward pass over an entity stream.

    Nodes must arrive before the ways that reference them; a way that names a
    node not yet registered simply finds nothing to annotate.
    """

    def __init__(
        self,
        sink: Sink,
        counter: NodeIdCounter,
        hooks: PipelineHooks | None = None,
        correlator: TurningCorrelator | None = None,
    ):
        self.sink = sink
        self.counter = counter
        self.correlator = correlator if correlator is not None else TurningCorrelator()
        self.stats = RunStats()
        self._hooks = hooks if hooks is not None else NoopHooks()
        self._handlers: dict[type, Callable[[Entity], None]] = {
            Node: self.on_node,
            Way: self.on_way,
            Relation: self.on_relation,
        }

    def run(self, entities: Iterable[Entity]) -> RunStats:
        t0 = time.perf_counter()
        self._hooks.run_start(start_node=self.counter.start)
        try:
            for e in entities:
                handler = self._handlers.get(type(e))
                if handler is None:
                    raise TypeError(f"unexpected entity type {type(e).__name__}")
                handler(e)
            self.finish()
        except Exception as exc:
            self._hooks.error(exc=exc, nodes=self.stats.nodes, ways=self.stats.ways)
            raise
        self._hooks.run_end(stats=self.stats, wall_ms=(time.perf_counter() - t0) * 1000)
        return self.stats

    # ------------- Handlers --------------------------

    def on_node(self, n: Node) -> None:
        self.stats.add_node(n)
        if not n.tags:
            return
        tags = n.tag_map()
        if is_network_junction(tags):
            self.stats.junctions_found += 1
        for outcome in classify(tags):
            if isinstance(outcome, NetworkJunction):
                derived = synthesize(n, outcome.category, outcome.ref, self.counter)
                self.sink.write(derived)
                self.stats.network_nodes_written += 1
                self._hooks.network_node(derived, source_id=n.id, category=outcome.category)
            elif isinstance(outcome, TurningFeature):
                self.correlator.register(n)
                self.stats.turning_found += 1
                self._hooks.turning_registered(
                    n, kind=outcome.kind, tracked=len(self.correlator)
                )

    def on_way(self, w: Way) -> None:
        self.stats.add_way(w)
        category = w.tag_map().get("highway")
        if category not in QUALIFYING_HIGHWAYS:
            return
        added = self.correlator.annotate(w, category)
        if added:
            self.stats.turning_annotated += added
            self._hooks.way_annotated(w, category=category, added=added)

    def on_relation(self, r: Relation) -> None:
        self.stats.add_relation(r)

    # ------------- End of stream --------------------------

    def finish(self) -> None:
        self._hooks.drain(tracked=len(self.correlator))
        for node in self.correlator.drain_finalize():
            self.sink.write(node)
            self.stats.turning_written += 1
        self.stats.turning_not_set = self.correlator.not_set_count
        self.sink.close()
