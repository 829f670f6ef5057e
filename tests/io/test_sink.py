import xml.etree.ElementTree as ET
from datetime import UTC, datetime

import pytest

from osmpp.domain.entities import Meta, Node, Tag
from osmpp.errors import OutputOpenError, WriteError
from osmpp.io.sink import OsmXmlSink, format_timestamp, serialize_node


def _node():
    meta = Meta(
        user="K & T",
        uid=9,
        visible=True,
        version=8,
        changeset=0,
        timestamp=datetime(2019, 9, 13, 6, 50, 45, tzinfo=UTC),
    )
    return Node(
        id=10_000_000_000,
        lat=52.2220383,
        lon=7.022982600000001,
        tags=[Tag("node_network", "node_bicycle"), Tag("name", '5"3')],
        meta=meta,
    )


def test_format_timestamp():
    assert format_timestamp(None) == ""
    assert format_timestamp(datetime(2020, 1, 2, 3, 4, 5)) == "2020-01-02T03:04:05Z"


def test_serialize_node_layout():
    text = serialize_node(_node())
    lines = text.split("\n")
    assert lines[0].startswith('  <node id="10000000000" lat="52.2220383" lon="7.022982600000001"')
    assert 'user="K &amp; T"' in lines[0]
    assert 'timestamp="2019-09-13T06:50:45Z"' in lines[0]
    assert lines[1] == '    <tag k="node_network" v="node_bicycle" />'
    assert lines[2] == '    <tag k="name" v="5&quot;3" />'
    assert lines[3] == "  </node>"


def test_document_roundtrips_through_xml_parser(tmp_path):
    out = tmp_path / "nodes.osm"
    with OsmXmlSink(out, generator="osmpp-test") as sink:
        sink.write(_node())
        sink.write(Node(id=77, lat=1.5, lon=-2.25))
    assert sink.written == 2

    text = out.read_text(encoding="utf-8")
    assert text.startswith("<?xml version='1.0' encoding='UTF-8'?>\n<osm version=\"0.6\"")
    assert text.endswith("</osm>\n")

    root = ET.fromstring(text.encode("utf-8"))
    assert root.attrib == {"version": "0.6", "generator": "osmpp-test"}
    nodes = root.findall("node")
    assert [n.get("id") for n in nodes] == ["10000000000", "77"]
    assert {t.get("k"): t.get("v") for t in nodes[0].findall("tag")} == {
        "node_network": "node_bicycle",
        "name": '5"3',
    }
    assert nodes[1].findall("tag") == []


def test_empty_document(tmp_path):
    out = tmp_path / "empty.osm"
    sink = OsmXmlSink(out)
    sink.open()
    sink.close()
    root = ET.parse(out).getroot()
    assert root.tag == "osm"
    assert root.get("generator") == "osmpp"
    assert len(root) == 0


def test_open_failure_is_output_error(tmp_path):
    sink = OsmXmlSink(tmp_path / "missing-dir" / "out.osm")
    with pytest.raises(OutputOpenError):
        sink.open()


def test_write_before_open(tmp_path):
    with pytest.raises(WriteError):
        OsmXmlSink(tmp_path / "out.osm").write(_node())


def test_error_inside_context_leaves_document_unterminated(tmp_path):
    out = tmp_path / "partial.osm"
    with pytest.raises(RuntimeError):
        with OsmXmlSink(out) as sink:
            sink.write(_node())
            raise RuntimeError("decode failed")
    assert not out.read_text(encoding="utf-8").endswith("</osm>\n")
