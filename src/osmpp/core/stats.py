# core/stats.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from osmpp.domain.entities import Entity, Node, Relation, Way


@dataclass
class IdRange:
    min: int | None = None
    max: int | None = None

    def add(self, ref: int) -> None:
        if self.max is None or ref > self.max:
            self.max = ref
        if self.min is None or ref < self.min:
            self.min = ref


@dataclass
class Bounds:
    """Running min/max of a comparable value; None until the first add()."""

    min: float | datetime | None = None
    max: float | datetime | None = None

    def add(self, v) -> None:
        if v is None:
            return
        if self.max is None or v > self.max:
            self.max = v
        if self.min is None or v < self.min:
            self.min = v


def element_kind(e: Entity) -> str:
    if isinstance(e, Node):
        return "node"
    if isinstance(e, Way):
        return "way"
    if isinstance(e, Relation):
        return "relation"
    raise TypeError(f"not an OSM entity: {type(e).__name__}")


@dataclass
class ElementStats:
    ranges: dict[str, IdRange] = field(
        default_factory=lambda: {"node": IdRange(), "way": IdRange(), "relation": IdRange()}
    )
    max_version: int = 0
    max_tags: int = 0
    max_tags_element: tuple[str, int] | None = None

    def add(self, e: Entity) -> None:
        kind = element_kind(e)
        self.ranges[kind].add(e.id)
        if e.meta.version > self.max_version:
            self.max_version = e.meta.version
        if len(e.tags) > self.max_tags:
            self.max_tags = len(e.tags)
            self.max_tags_element = (kind, e.id)


@dataclass
class RunStats:
    nodes: int = 0
    ways: int = 0
    relations: int = 0
    elements: ElementStats = field(default_factory=ElementStats)
    lat: Bounds = field(default_factory=Bounds)
    lon: Bounds = field(default_factory=Bounds)
    timestamp: Bounds = field(default_factory=Bounds)

    max_node_refs: int = 0
    max_node_refs_way: int | None = None
    max_members: int = 0
    max_members_relation: int | None = None

    # junction points (node networks)
    junctions_found: int = 0
    network_nodes_written: int = 0

    # turning points
    turning_found: int = 0
    turning_annotated: int = 0
    turning_not_set: int = 0
    turning_written: int = 0

    def add_node(self, n: Node) -> None:
        self.nodes += 1
        self._add_common(n)
        self.lat.add(n.lat)
        self.lon.add(n.lon)

    def add_way(self, w: Way) -> None:
        self.ways += 1
        self._add_common(w)
        if len(w.node_refs) > self.max_node_refs:
            self.max_node_refs = len(w.node_refs)
            self.max_node_refs_way = w.id

    def add_relation(self, r: Relation) -> None:
        self.relations += 1
        self._add_common(r)
        if len(r.members) > self.max_members:
            self.max_members = len(r.members)
            self.max_members_relation = r.id

    def _add_common(self, e: Entity) -> None:
        self.elements.add(e)
        self.timestamp.add(e.meta.timestamp)
