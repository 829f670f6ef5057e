# io/sink.py
import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from pathlib import Path
from typing import IO, Protocol

from osmpp.domain.entities import Node
from osmpp.errors import OutputOpenError, WriteError

OSM_API_VERSION = "0.6"
INDENT = "  "


class Sink(Protocol):
    """
    Used as a context manager around a run: __enter__ opens, the pipeline
    close()s on success, __exit__ releases resources on error.
    """

    def __enter__(self): ...
    def __exit__(self, exc_type, exc, tb): ...
    def write(self, node: Node) -> None: ...
    def close(self) -> None: ...


def format_timestamp(ts: datetime | None) -> str:
    if ts is None:
        return ""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def node_element(node: Node) -> ET.Element:
    m = node.meta
    el = ET.Element(
        "node",
        {
            "id": str(node.id),
            "lat": repr(node.lat),
            "lon": repr(node.lon),
            "user": m.user,
            "uid": str(m.uid),
            "visible": "true" if m.visible else "false",
            "version": str(m.version),
            "changeset": str(m.changeset),
            "timestamp": format_timestamp(m.timestamp),
        },
    )
    for t in node.tags:
        ET.SubElement(el, "tag", {"k": t.key, "v": t.value})
    return el


def serialize_node(node: Node, level: int = 1) -> str:
    el = node_element(node)
    ET.indent(el, space=INDENT, level=level)
    return INDENT * level + ET.tostring(el, encoding="unicode")


class OsmXmlSink:
    """
    Streams nodes into an OSM XML document.
    open() writes the declaration and the <osm> root, close() terminates it.
    """

    def __init__(self, path: str | Path, generator: str = "osmpp"):
        self.path = Path(path)
        self.generator = generator
        self.written = 0
        self._fp: IO[str] | None = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        elif self._fp is not None:
            # leave the partial file as is; no atomic write
            self._fp.close()
            self._fp = None

    def open(self) -> None:
        try:
            self._fp = open(self.path, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise OutputOpenError(f"could not open file {self.path}: {e}") from e
        root = ET.Element("osm", {"version": OSM_API_VERSION, "generator": self.generator})
        head = ET.tostring(root, encoding="unicode", short_empty_elements=False)
        self._emit("<?xml version='1.0' encoding='UTF-8'?>\n")
        self._emit(head[: -len("</osm>")] + "\n")

    def write(self, node: Node) -> None:
        if self._fp is None:
            raise WriteError(f"{self.path} is not open for writing")
        try:
            data = serialize_node(node)
        except (TypeError, ValueError) as e:
            raise WriteError(f"could not serialize node {node.id}: {e}") from e
        self._emit(data + "\n")
        self.written += 1

    def close(self) -> None:
        if self._fp is None:
            return
        self._emit("</osm>\n")
        try:
            self._fp.close()
        except OSError as e:
            raise WriteError(f"could not close file {self.path}: {e}") from e
        finally:
            self._fp = None

    def _emit(self, s: str) -> None:
        try:
            self._fp.write(s)
        except OSError as e:
            raise WriteError(f"error writing file {self.path}: {e}") from e


class MemorySink:
    def __init__(self):
        self.nodes: list[Node] = []
        self.opened = False
        self.closed = False

    def __enter__(self):
        self.opened = True
        return self

    def __exit__(self, exc_type, exc, tb):
        pass

    def write(self, node: Node) -> None:
        self.nodes.append(node)

    def close(self) -> None:
        self.closed = True
