"""
Calculate safety-scored routes between two places and write them to an HTML map.

    python -m scripts.run_route_demo "Burnpur, Asansol, India" "Asansol Station, India" --mode driving
"""

import argparse
import asyncio
import logging
import sys

from geocoding.nominatim_client import NominatimGeocoder
from mapping.folium_renderer import FoliumMapRenderer
from mapping.synchronizer import MapSynchronizer
from planner.orchestrator import RouteCalculationError, RouteOrchestrator
from routing.models import TravelMode
from routing.osrm_client import OSRMClient
from safety.scoring import legend


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("origin")
    parser.add_argument("destination")
    parser.add_argument("--mode", choices=[m.value for m in TravelMode], default=TravelMode.DRIVING.value)
    parser.add_argument("--output", default="output/route_map.html")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def run(args) -> int:
    renderer = FoliumMapRenderer()
    renderer.add_legend(legend())

    orchestrator = RouteOrchestrator(
        geocoder=NominatimGeocoder(),
        route_provider=OSRMClient(),
        map_sync=MapSynchronizer(renderer),
    )

    try:
        route_set = await orchestrator.calculate(args.origin, args.destination, args.mode)
    except RouteCalculationError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(f"\nRoute options ({len(route_set)}):\n")
    for position, scored in enumerate(route_set):
        marker = "*" if position == orchestrator.selected.position else " "
        print(
            f"{marker} Route {scored.index + 1}: "
            f"safety {scored.safety_score:.1f} ({scored.safety_label.value}) | "
            f"{scored.distance_label}, {scored.duration_label}, {scored.route.step_count} steps"
        )

    path = renderer.save(args.output)
    print(f"\nMap written to {path}")
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
