# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Viewer API server for a browser-side globe.

Local HTTP server (stdlib only) exposing a tracking session as JSON. The
browser polls /api/markers once per frame; each poll advances the
session by one tick and returns the marker snapshot. UI events map to
the remaining endpoints:

    GET    /api/state        session summary
    GET    /api/markers      tick one frame, return visible markers
    GET    /api/trajectory   current trajectory line
    PUT    /api/tracking     {"enabled": bool}   tracking toggle
    POST   /api/select       {"name": str}       object selection
    DELETE /api/trajectory                       clear selection
    POST   /api/reload                           refetch the catalog

Usage:
    satglobe --serve
    satglobe --serve --port 8765
"""

import json
import logging
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable

from satglobe.adapters.marker_scene import MarkerScene
from satglobe.domain.tracking_session import TrackingSession
from satglobe.ports.propagation import PropagationError


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class ViewerHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the viewer API."""

    # Set by create_viewer_server
    session: TrackingSession
    scene: MarkerScene
    clock: Callable[[], datetime] = staticmethod(utc_now)

    def log_message(self, format: str, *args: Any) -> None:
        """Route access logs through logging instead of stderr."""
        logger.debug(format, *args)

    def _set_headers(self, status: int = 200, content_type: str = "application/json") -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, PUT, DELETE, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def _json_response(self, data: Any, status: int = 200) -> None:
        self._set_headers(status, "application/json")
        self.wfile.write(json.dumps(data).encode())

    def _error_response(self, status: int, message: str) -> None:
        self._json_response({"error": message}, status)

    def _read_body(self) -> dict[str, Any]:
        """Parse the JSON body. Raises ValueError on malformed input."""
        length = int(self.headers.get("Content-Length", 0))
        if length == 0:
            return {}
        raw = self.rfile.read(length)
        body = json.loads(raw.decode())
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        return body

    def _route_path(self) -> str:
        return "/" + self.path.split("?", 1)[0].strip("/")

    def _labels(self) -> dict[str, str]:
        return {t.render_handle: t.name for t in self.session.registry.objects}

    def _trajectory(self) -> dict[str, Any]:
        selection = self.session.selection
        line = self.scene.trajectories.get(selection.active) if selection.active else None
        return {
            "name": selection.selected_name,
            "positions": (
                [[round(c, 4) for c in p] for p in line.positions] if line else []
            ),
        }

    # --- GET ---

    def do_GET(self) -> None:
        path = self._route_path()

        if path == "/api/state":
            self._json_response(self.session.state())
            return

        if path == "/api/markers":
            now = self.clock()
            with self.session.lock:
                updated = self.session.tick(now)
                snapshot = self.scene.snapshot(labels=self._labels())
            self._json_response({
                "time": now.isoformat(),
                "updated": updated,
                "markers": snapshot["markers"],
            })
            return

        if path == "/api/trajectory":
            with self.session.lock:
                self._json_response(self._trajectory())
            return

        self._error_response(404, "Not found")

    # --- PUT ---

    def do_PUT(self) -> None:
        if self._route_path() != "/api/tracking":
            self._error_response(404, "Not found")
            return

        try:
            body = self._read_body()
        except ValueError as e:
            self._error_response(400, f"Invalid JSON body: {e}")
            return
        enabled = body.get("enabled")
        if not isinstance(enabled, bool):
            self._error_response(400, "'enabled' must be a boolean")
            return

        tracked = self.session.set_tracking(enabled, self.clock())
        self._json_response({"tracking_enabled": enabled, "tracked": tracked})

    # --- POST ---

    def do_POST(self) -> None:
        path = self._route_path()

        if path == "/api/select":
            self._handle_select()
            return

        if path == "/api/reload":
            tracked = self.session.reload(self.clock())
            self._json_response({"tracked": tracked})
            return

        self._error_response(404, "Not found")

    def _handle_select(self) -> None:
        try:
            body = self._read_body()
        except ValueError as e:
            self._error_response(400, f"Invalid JSON body: {e}")
            return
        name = body.get("name")
        if not isinstance(name, str) or not name.strip():
            self._error_response(400, "'name' must be a non-empty string")
            return

        try:
            selection = self.session.select(name, self.clock())
        except KeyError:
            self._error_response(404, f"Not tracked: {name}")
            return
        except PropagationError as e:
            self._error_response(422, f"Trajectory unavailable: {e}")
            return

        with self.session.lock:
            trajectory = self._trajectory()
        self._json_response({
            "name": selection.name,
            "samples": len(trajectory["positions"]),
        })

    # --- DELETE ---

    def do_DELETE(self) -> None:
        if self._route_path() == "/api/trajectory":
            self.session.clear_selection()
            self._json_response({"status": "cleared"})
            return

        self._error_response(404, "Not found")

    # --- OPTIONS (CORS preflight) ---

    def do_OPTIONS(self) -> None:
        self._set_headers(204)


def create_viewer_server(
    session: TrackingSession,
    scene: MarkerScene,
    port: int = 8765,
    clock: Callable[[], datetime] = utc_now,
) -> ThreadingHTTPServer:
    """Create an HTTP server for the viewer API.

    Args:
        session: Tracking session driving the markers.
        scene: The MarkerScene the session renders into.
        port: Port to serve on (0 picks a free port).
        clock: Source of the current UTC time for ticks and selections.

    Returns:
        ThreadingHTTPServer ready to serve_forever().
    """
    # Create handler class with shared state
    handler = type(
        "BoundHandler",
        (ViewerHandler,),
        {
            "session": session,
            "scene": scene,
            "clock": staticmethod(clock),
        },
    )

    return ThreadingHTTPServer(("localhost", port), handler)
