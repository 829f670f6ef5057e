from datetime import UTC, datetime

import pytest

from osmpp.domain.entities import Member, Node, Relation, Tag, Way
from osmpp.errors import DecodeError, InputOpenError
from osmpp.io.source import read_entities

OSM_XML = """<?xml version='1.0' encoding='UTF-8'?>
<osm version="0.6" generator="test">
  <node id="1" version="8" timestamp="2019-09-13T06:50:45Z" uid="5" user="kt" changeset="3" lat="52.2220383" lon="7.0229826">
    <tag k="network:type" v="node_network"/>
    <tag k="rcn_ref" v="53"/>
  </node>
  <node id="77" version="1" timestamp="2018-01-01T00:00:00Z" uid="5" user="kt" changeset="4" lat="52.1" lon="7.1">
    <tag k="highway" v="turning_circle"/>
  </node>
  <way id="500" version="2" timestamp="2020-02-02T00:00:00Z" uid="5" user="kt" changeset="5">
    <nd ref="1"/>
    <nd ref="77"/>
    <tag k="highway" v="service"/>
  </way>
  <relation id="900" version="1" timestamp="2020-02-02T00:00:00Z" uid="5" user="kt" changeset="6">
    <member type="way" ref="500" role="outer"/>
    <member type="node" ref="77" role=""/>
    <tag k="type" v="route"/>
  </relation>
</osm>
"""


@pytest.fixture
def osm_file(tmp_path):
    p = tmp_path / "sample.osm"
    p.write_text(OSM_XML, encoding="utf-8")
    return p


def test_entities_in_file_order(osm_file):
    ents = list(read_entities(osm_file))
    assert [type(e) for e in ents] == [Node, Node, Way, Relation]

    n = ents[0]
    assert n.id == 1
    assert n.lat == pytest.approx(52.2220383)
    assert n.lon == pytest.approx(7.0229826)
    assert n.tags == [Tag("network:type", "node_network"), Tag("rcn_ref", "53")]
    assert n.meta.user == "kt"
    assert (n.meta.uid, n.meta.version, n.meta.changeset) == (5, 8, 3)
    assert n.meta.timestamp == datetime(2019, 9, 13, 6, 50, 45, tzinfo=UTC)

    w = ents[2]
    assert w.node_refs == [1, 77]
    assert w.tag_map() == {"highway": "service"}

    r = ents[3]
    assert r.members == [Member("way", 500, "outer"), Member("node", 77, "")]


def test_missing_input_fails_before_iteration(tmp_path):
    with pytest.raises(InputOpenError):
        read_entities(tmp_path / "nope.osm.pbf")


def test_corrupt_input_is_decode_error(tmp_path):
    p = tmp_path / "broken.osm"
    p.write_text("<osm version='0.6'><node id='1' lat='1' lon='1'></way></osm>", encoding="utf-8")
    with pytest.raises(DecodeError):
        list(read_entities(p))


def test_deleted_node_without_location_is_skipped(tmp_path):
    p = tmp_path / "history.osm"
    p.write_text(
        """<?xml version='1.0' encoding='UTF-8'?>
<osm version="0.6">
  <node id="1" version="2" visible="false" timestamp="2019-01-01T00:00:00Z" uid="1" user="u" changeset="9"/>
  <node id="2" version="1" timestamp="2019-01-01T00:00:00Z" uid="1" user="u" changeset="9" lat="1.5" lon="2.5"/>
</osm>
""",
        encoding="utf-8",
    )
    assert [e.id for e in read_entities(p)] == [2]


def test_visible_node_without_location_is_decode_error(tmp_path):
    p = tmp_path / "nocoords.osm"
    p.write_text(
        """<?xml version='1.0' encoding='UTF-8'?>
<osm version="0.6">
  <node id="1" version="1" timestamp="2019-01-01T00:00:00Z" uid="1" user="u" changeset="9"/>
</osm>
""",
        encoding="utf-8",
    )
    with pytest.raises(DecodeError, match="no valid location"):
        list(read_entities(p))
