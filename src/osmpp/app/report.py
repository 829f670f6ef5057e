# osmpp/app/report.py
from datetime import datetime
from typing import TextIO

from osmpp import __version__
from osmpp.config.models import RunModel
from osmpp.core.stats import RunStats

PROG_NAME = "osmpp"
PROG_PURPOSE = "OSM data pre-processing"
PROG_INFO = "Duplicates OSM junction point nodes and annotates turning points."

_W = 24  # label column width


def _line(out: TextIO, label: str, value) -> None:
    out.write(f"  {label:<{_W}}: {value}\n")


def _coord(v) -> str:
    return "n/a" if v is None else f"{v:0.7f}"


def _ts(v: datetime | None) -> str:
    return "n/a" if v is None else v.isoformat().replace("+00:00", "Z")


def _opt(v) -> str:
    return "n/a" if v is None else str(v)


def print_banner(out: TextIO) -> None:
    out.write("\nProgram:\n")
    _line(out, "Name", PROG_NAME)
    _line(out, "Release", __version__)
    _line(out, "Purpose", PROG_PURPOSE)
    _line(out, "Info", PROG_INFO)


def print_processing(out: TextIO, cfg: RunModel) -> None:
    out.write("\nProcessing:\n")
    _line(out, "OSM input file", cfg.input_osm)
    _line(out, "Nodes output file", cfg.output_nodes)
    _line(out, "Starting node ID", cfg.start_node)


def print_report(out: TextIO, s: RunStats) -> None:
    e = s.elements
    out.write("\nJunction point statistics:\n")
    _line(out, "Points found", s.junctions_found)
    _line(out, "Nodes written", s.network_nodes_written)

    out.write("\nTurning point statistics:\n")
    _line(out, "Points found", s.turning_found)
    _line(out, "Points annotated", s.turning_annotated)
    _line(out, "Points not set", s.turning_not_set)
    _line(out, "Nodes written", s.turning_written)

    out.write("\nOSM data statistics:\n")
    _line(out, "Timestamp min", _ts(s.timestamp.min))
    _line(out, "Timestamp max", _ts(s.timestamp.max))
    _line(out, "Lon min", _coord(s.lon.min))
    _line(out, "Lon max", _coord(s.lon.max))
    _line(out, "Lat min", _coord(s.lat.min))
    _line(out, "Lat max", _coord(s.lat.max))
    _line(out, "Nodes", s.nodes)
    _line(out, "Ways", s.ways)
    _line(out, "Relations", s.relations)
    _line(out, "Version max", e.max_version)
    for kind in ("node", "way", "relation"):
        r = e.ranges[kind]
        _line(out, f"{kind.capitalize()} ID min", _opt(r.min))
        _line(out, f"{kind.capitalize()} ID max", _opt(r.max))
    _line(out, "Keyval pairs max", e.max_tags)
    holder = e.max_tags_element
    _line(out, "Keyval pairs max object", "n/a" if holder is None else f"{holder[0]} {holder[1]}")
    _line(out, "Noderefs max", s.max_node_refs)
    _line(out, "Noderefs max object", f"way {_opt(s.max_node_refs_way)}")
    _line(out, "Relrefs max", s.max_members)
    _line(out, "Relrefs max object", f"relation {_opt(s.max_members_relation)}")
    out.write("\n")
