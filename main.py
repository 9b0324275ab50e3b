# main.py
import argparse
import json
import sys

from roadnav.app.build import build
from roadnav.domain.errors import RoadNavError


def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Nearest-intersection and shortest-route queries over a map extract.")
    p.add_argument("--config", help="JSON app config; overrides --osm")
    p.add_argument("--osm", help="OSM extract to load (.osm XML or .pbf)")
    sub = p.add_subparsers(dest="cmd", required=True)

    n = sub.add_parser("nearest", help="closest intersection to a point")
    n.add_argument("lon", type=float)
    n.add_argument("lat", type=float)

    r = sub.add_parser("route", help="shortest path between two points")
    r.add_argument("start_lon", type=float)
    r.add_argument("start_lat", type=float)
    r.add_argument("dest_lon", type=float)
    r.add_argument("dest_lat", type=float)
    r.add_argument("--directions", action="store_true")

    s = sub.add_parser("search", help="place names starting with a prefix")
    s.add_argument("prefix")
    return p.parse_args(argv)


def run(argv=None) -> int:
    args = _parse_args(argv)
    if args.config:
        with open(args.config) as f:
            cfg = json.load(f)
    elif args.osm:
        cfg = {"graph": {"by": "path", "file": args.osm, "fmt": "osm"}}
    else:
        print("either --config or --osm is required", file=sys.stderr)
        return 2

    try:
        svc = build(cfg).service
        if args.cmd == "nearest":
            print(svc.nearest_vertex(args.lon, args.lat))
        elif args.cmd == "route":
            coords = (args.start_lon, args.start_lat, args.dest_lon, args.dest_lat)
            if args.directions:
                for d in svc.directions(*coords):
                    print(d)
            else:
                print(" ".join(str(v) for v in svc.shortest_path(*coords)))
        elif args.cmd == "search":
            for name in svc.locations_by_prefix(args.prefix):
                print(name)
    except RoadNavError as exc:
        # unreadable map, empty map or no path
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
