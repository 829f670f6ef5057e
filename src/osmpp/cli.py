# osmpp/cli.py
import argparse
import sys

from pydantic import ValidationError

from osmpp.app.build import build
from osmpp.app.report import PROG_NAME, print_banner, print_processing, print_report
from osmpp.config.models import RunModel
from osmpp.errors import OsmppError

EXAMPLE = f"{PROG_NAME} -inputOSM=osmdata.pbf -outputNodes=osmnodes.xml -startNode=10000000000"


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Duplicate OSM node-network junction points and annotate turning points.",
        epilog=f"example: {EXAMPLE}",
    )
    parser.add_argument(
        "-inputOSM", "--input-osm", dest="input_osm", metavar="FILE",
        help="name of OSM input file (PBF format)",
    )
    parser.add_argument(
        "-outputNodes", "--output-nodes", dest="output_nodes", metavar="FILE",
        help="name of OSM nodes output file (XML format)",
    )
    parser.add_argument(
        "-startNode", "--start-node", dest="start_node", metavar="N", type=int, default=0,
        help="starting ID for new nodes written to nodes output file",
    )
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="level of the JSON log on stderr",
    )
    parser.add_argument("--debug", action="store_true", help="log sampled per-record events")
    return parser


def _usage(parser: argparse.ArgumentParser, reason: str | None = None) -> int:
    if reason:
        print(f"\nerror: {reason}", file=sys.stderr)
    print()
    parser.print_help()
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = make_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on bad flags and 0 on --help
        return 1 if e.code else 0

    print_banner(sys.stdout)

    if not args.input_osm or not args.output_nodes or not args.start_node:
        return _usage(parser)

    try:
        cfg = RunModel.model_validate(
            {
                "input_osm": args.input_osm,
                "output_nodes": args.output_nodes,
                "start_node": args.start_node,
                "log": {"level": args.log_level, "debug": args.debug},
            }
        )
    except ValidationError as e:
        return _usage(parser, str(e))

    print_processing(sys.stdout, cfg)

    try:
        stats = build(cfg).run()
    except (OsmppError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print_report(sys.stdout, stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
