# pipeline/hooks.py
from typing import Protocol

from osmpp.domain.entities import Node, Way


class PipelineHooks(Protocol):
    def run_start(self, *, start_node: int): ...
    def run_end(self, *, stats, wall_ms: float): ...
    def network_node(self, node: Node, *, source_id: int, category: str): ...
    def turning_registered(self, node: Node, *, kind: str, tracked: int): ...
    def way_annotated(self, way: Way, *, category: str, added: int): ...
    def drain(self, *, tracked: int): ...
    def error(self, *, exc: BaseException, **kw): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def network_node(self, *_, **__):
        pass

    def turning_registered(self, *_, **__):
        pass

    def way_annotated(self, *_, **__):
        pass

    def drain(self, **_):
        pass

    def error(self, *_, **__):
        pass
