# io/source.py
from collections.abc import Iterator
from pathlib import Path

import osmium

from osmpp.domain.entities import Entity, Member, Meta, Node, Relation, Tag, Way
from osmpp.errors import DecodeError, InputOpenError

_MEMBER_TYPES = {"n": "node", "w": "way", "r": "relation"}


def _tags(obj) -> list[Tag]:
    return [Tag(t.k, t.v) for t in obj.tags]


def _meta(obj) -> Meta:
    return Meta(
        user=obj.user,
        uid=obj.uid,
        visible=obj.visible,
        version=obj.version,
        changeset=obj.changeset,
        timestamp=obj.timestamp,
    )


def to_entity(obj) -> Entity | None:
    """Copy an osmium object into plain dataclasses; osmium buffers are reused."""
    if obj.is_node():
        loc = obj.location
        if not loc.valid():
            # deleted nodes in history/change files carry no coordinates
            if not obj.visible:
                return None
            raise DecodeError(f"node {obj.id} has no valid location")
        return Node(id=obj.id, lat=loc.lat, lon=loc.lon, tags=_tags(obj), meta=_meta(obj))
    if obj.is_way():
        return Way(
            id=obj.id, node_refs=[nr.ref for nr in obj.nodes], tags=_tags(obj), meta=_meta(obj)
        )
    if obj.is_relation():
        members = [Member(_MEMBER_TYPES[m.type], m.ref, m.role) for m in obj.members]
        return Relation(id=obj.id, members=members, tags=_tags(obj), meta=_meta(obj))
    return None


def check_readable(path: str | Path) -> Path:
    p = Path(path)
    try:
        with open(p, "rb"):
            pass
    except OSError as e:
        raise InputOpenError(f"could not open file {p}: {e}") from e
    return p


def read_entities(path: str | Path) -> Iterator[Entity]:
    """
    Yield nodes, ways and relations in file order.
    The file format is picked by osmium from the suffix (.osm.pbf, .osm, ...).
    An unreadable file fails here, before any entity is produced.
    """
    return _stream(check_readable(path))


def _stream(p: Path) -> Iterator[Entity]:
    try:
        for obj in osmium.FileProcessor(str(p)):
            e = to_entity(obj)
            if e is not None:
                yield e
    except DecodeError:
        raise
    except (RuntimeError, ValueError, KeyError, osmium.InvalidLocationError) as e:
        raise DecodeError(f"could not decode {p}: {e}") from e
