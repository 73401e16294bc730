# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for live satellite tracking.

Usage:
    # Fetch the catalog and print a per-category summary
    satglobe
    satglobe --group STARLINK

    # List tracked objects with their categories
    satglobe --list

    # Sample a ground track (±12 h at 60 s) and export it
    satglobe --track "ISS (ZARYA)" --export-csv iss.csv
    satglobe --track "ISS (ZARYA)" --export-geojson iss.geojson --step 30

    # Start the viewer API server
    satglobe --serve --port 8765
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from satglobe.domain.catalog_cache import ElementSetCache
from satglobe.domain.constants import (
    DEFAULT_HALF_WINDOW_SECONDS,
    DEFAULT_STEP_SECONDS,
)
from satglobe.domain.trajectory import sample_ground_track
from satglobe.domain.tracking_session import TrackingConfig, TrackingSession
from satglobe.adapters.celestrak import BASE_URL, CelesTrakTleSource, DEFAULT_GROUP
from satglobe.adapters.marker_scene import MarkerScene
from satglobe.adapters.csv_exporter import CsvTrajectoryExporter
from satglobe.adapters.geojson_exporter import GeoJsonTrajectoryExporter


def build_session(config: TrackingConfig) -> tuple[TrackingSession, MarkerScene]:
    """Wire CelesTrak, SGP4 and an in-memory scene into a session."""
    try:
        from satglobe.adapters.sgp4_propagator import SGP4Propagator
        propagator = SGP4Propagator()
    except ImportError as e:
        print(f"{e}", file=sys.stderr)
        sys.exit(1)

    source = CelesTrakTleSource(
        group=config.catalog_group,
        base_url=config.catalog_base_url or BASE_URL,
        timeout=config.fetch_timeout_s,
    )
    cache = ElementSetCache(source, refresh_interval_ms=config.refresh_interval_ms)
    scene = MarkerScene()
    return TrackingSession(cache, propagator, scene, config), scene


def run_summary(session: TrackingSession, now: datetime, list_objects: bool = False) -> int:
    """Populate, tick once and print counts. Returns the number tracked."""
    print(f"Fetching catalog '{session.config.catalog_group}' from CelesTrak...")
    tracked = session.enable_tracking(now)
    if tracked == 0:
        print("No objects tracked (catalog empty or fetch failed).", file=sys.stderr)
        return 0

    state = session.state()
    print(f"Tracking {tracked} objects at {now.isoformat()}")
    for category, count in state["categories"].items():
        print(f"  {category:<14} {count}")
    print(f"Positions updated: {state['last_updated']} "
          f"(skipped {state['last_skipped']})")

    if list_objects:
        for obj in session.registry.objects:
            print(f"{obj.name}\t{obj.entry.category.value}")
    return tracked


def run_track(
    session: TrackingSession,
    name: str,
    now: datetime,
    half_window_seconds: float,
    step_seconds: float,
    export_csv: str | None = None,
    export_geojson: str | None = None,
) -> int:
    """Sample one object's ground track and export it. Returns sample count."""
    session.enable_tracking(now)
    tracked = session.registry.find(name)
    if tracked is None:
        raise KeyError(name)

    samples = sample_ground_track(
        session.propagator, tracked.entry.element_set, now,
        half_window_seconds, step_seconds, session.config.marker_radius,
    )
    print(f"{tracked.name}: {len(samples)} samples from "
          f"{samples[0].time.isoformat()} to {samples[-1].time.isoformat()}")

    if export_csv:
        n = CsvTrajectoryExporter().export(samples, export_csv, name=tracked.name)
        print(f"Exported {n} samples to {export_csv}")
    if export_geojson:
        n = GeoJsonTrajectoryExporter().export(samples, export_geojson, name=tracked.name)
        print(f"Exported {n} samples to {export_geojson} (GeoJSON)")
    return len(samples)


def _run_serve(session: TrackingSession, scene: MarkerScene, port: int) -> None:
    """Start the viewer API server; tracking is enabled on first toggle."""
    from satglobe.adapters.viewer_server import create_viewer_server

    try:
        server = create_viewer_server(session, scene, port=port)
    except OSError as e:
        print(
            f"Error: cannot bind port {port}: {e}\n"
            f"Try a different port: satglobe --serve --port {port + 1}",
            file=sys.stderr,
        )
        sys.exit(1)

    print(f"\nViewer API at http://localhost:{port}/api/state")
    print("Press Ctrl+C to stop.\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        server.server_close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Track live satellites from CelesTrak element catalogs"
    )
    parser.add_argument(
        '--group', default=DEFAULT_GROUP,
        help=f"CelesTrak group (default: {DEFAULT_GROUP}; e.g. STATIONS, STARLINK)"
    )
    parser.add_argument(
        '--base-url', default=None,
        help=f"CelesTrak GP API URL (default: {BASE_URL})"
    )
    parser.add_argument(
        '--timeout', type=float, default=30.0,
        help="Catalog fetch timeout in seconds (default: 30)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )
    parser.add_argument(
        '--list', action='store_true', default=False,
        help="List every tracked object with its category"
    )
    parser.add_argument(
        '--serve', action='store_true', default=False,
        help="Start the viewer API server"
    )
    parser.add_argument(
        '--port', type=int, default=8765,
        help="Port for viewer server (default: 8765, used with --serve)"
    )

    track_group = parser.add_argument_group('trajectory')
    track_group.add_argument('--track', metavar='NAME', help="Object name to sample")
    track_group.add_argument(
        '--half-window', type=float, default=DEFAULT_HALF_WINDOW_SECONDS,
        help=f"Seconds before and after now (default: {DEFAULT_HALF_WINDOW_SECONDS})"
    )
    track_group.add_argument(
        '--step', type=float, default=DEFAULT_STEP_SECONDS,
        help=f"Seconds between samples (default: {DEFAULT_STEP_SECONDS})"
    )
    track_group.add_argument('--export-csv', help="Write the trajectory to CSV")
    track_group.add_argument('--export-geojson', help="Write the trajectory to GeoJSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if (args.export_csv or args.export_geojson) and not args.track:
        parser.error("--export-csv/--export-geojson require --track NAME")

    config = TrackingConfig(
        catalog_group=args.group,
        catalog_base_url=args.base_url,
        fetch_timeout_s=args.timeout,
        half_window_seconds=args.half_window,
        step_seconds=args.step,
    )
    session, scene = build_session(config)

    if args.serve:
        _run_serve(session, scene, args.port)
        return

    now = datetime.now(tz=timezone.utc)
    try:
        if args.track:
            run_track(
                session, args.track, now,
                half_window_seconds=args.half_window,
                step_seconds=args.step,
                export_csv=args.export_csv,
                export_geojson=args.export_geojson,
            )
        else:
            tracked = run_summary(session, now, list_objects=args.list)
            if tracked == 0:
                sys.exit(1)
    except KeyError:
        print(f"Error: Not tracked: {args.track}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, ConnectionError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
