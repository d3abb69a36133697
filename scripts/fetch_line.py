#!/usr/bin/env python3
"""
Build line artifacts from a station listing page and an OSM route relation.

Fetches the tabular station list of a line, fetches the full OSM relation,
matches stations by normalized name and writes three JSON files:

    <prefix>-listed-stations.json   every listed station (coords where matched)
    <prefix>-line-filtered.json     matched stations + edges (loadable line artifact)
    <prefix>-osm-stations.json      every station-like OSM point

Defaults fetch the Hangzhou-Shenzhen line.
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import requests

from railroute.ingest import IngestError, match_line, parse_relation, parse_station_listing

LISTING_URL = "https://jprailfan.com/tools/stat/?linename=%E6%9D%AD%E6%B7%B1%E7%BA%BF"
LINE_NAME = "杭深线"
OSM_RELATION_ID = "2052885"
OSM_API = "https://www.openstreetmap.org/api/0.6"
OUTPUT_DIR = Path(__file__).parent.parent / "data"


def fetch_listing(url: str) -> str:
    """Fetch the station listing HTML."""
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    response.encoding = response.encoding or "utf-8"
    return response.text


def fetch_relation(relation_id: str) -> dict:
    """Fetch a relation with all its ways and nodes as OSM JSON."""
    url = f"{OSM_API}/relation/{relation_id}/full.json"
    response = requests.get(url, timeout=60)
    response.raise_for_status()
    return response.json()


def write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def main():
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0].strip())
    parser.add_argument("--listing-url", default=LISTING_URL)
    parser.add_argument("--line-name", default=LINE_NAME)
    parser.add_argument("--relation", default=OSM_RELATION_ID, help="OSM relation id")
    parser.add_argument("--railway-id", help="Railway id stored in the line artifact")
    parser.add_argument("--railway-name-english", default="")
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR)
    parser.add_argument("--prefix", default="hangshen")
    args = parser.parse_args()

    print("=" * 60)
    print(f"Line Fetcher: {args.line_name} / relation {args.relation}")
    print("=" * 60)

    try:
        print("Fetching station listing...")
        listing = parse_station_listing(fetch_listing(args.listing_url), args.line_name)
        print(f"  {len(listing)} listed stations")

        print("Fetching OSM relation...")
        osm = parse_relation(fetch_relation(args.relation), args.relation)
        print(f"  {len(osm.nodes)} nodes, {len(osm.ways)} ways")
    except (requests.RequestException, IngestError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    result = match_line(listing, osm)

    generated_at = datetime.now(timezone.utc).isoformat()
    relation_url = f"https://www.openstreetmap.org/relation/{args.relation}"
    railway_id = args.railway_id or f"OSM-{args.relation}"

    listed_file = args.output_dir / f"{args.prefix}-listed-stations.json"
    line_file = args.output_dir / f"{args.prefix}-line-filtered.json"
    osm_file = args.output_dir / f"{args.prefix}-osm-stations.json"

    write_json(listed_file, {
        "generatedAt": generated_at,
        "sourceUrl": args.listing_url,
        "stations": result.listing,
    })
    write_json(line_file, {
        "generatedAt": generated_at,
        "listingSource": args.listing_url,
        "osmRelation": relation_url,
        "railway": {
            "id": railway_id,
            "nameLocal": args.line_name,
            "nameEnglish": args.railway_name_english or args.line_name,
        },
        "stations": result.stations,
        "edges": result.edges,
    })
    write_json(osm_file, {
        "generatedAt": generated_at,
        "osmRelation": relation_url,
        "stations": result.osm_stations,
    })

    print(f"\nWrote {listed_file} ({len(result.listing)} listed stations)")
    print(f"Wrote {line_file} ({len(result.stations)} matched stations, {len(result.edges)} edges)")
    print(f"Wrote {osm_file} ({len(result.osm_stations)} OSM stations)")


if __name__ == "__main__":
    main()
