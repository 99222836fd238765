"""HTTP API for listing and adding podcasts."""

from __future__ import annotations

import json
import sqlite3
import threading
from typing import Any

from flask import Flask, Response, request

from podcaststore.feed import FeedError, fetch_podcast
from podcaststore.storage import StorageError, add_full_podcast, get_all_podcasts

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
ALLOWED_HEADERS = ("Accept", "Authorization", "Content-Type", "X-CSRF-Token", "Origin")
MAX_AGE = 300


def error_body(message: str) -> dict[str, Any]:
    """Body of an error response."""
    return {"error": True, "message": message}


def success_body(message: str) -> dict[str, Any]:
    """Body of a successful response that carries only a message."""
    return {"error": False, "message": message}


def _json_response(status: int, data: Any) -> Response:
    return Response(json.dumps(data) + "\n", status=status, content_type="application/json")


def _read_feed_url(body: bytes) -> str:
    """Pull the ``rssFeed`` value out of a request body; ValueError if malformed."""
    value, _ = json.JSONDecoder().raw_decode(body.decode("utf-8").lstrip(" \t\r\n"))
    if value is None:
        return ""
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    feed_url = ""
    for key, item in value.items():
        if key.lower() == "rssfeed" and item is not None:
            if not isinstance(item, str):
                raise ValueError("rssFeed must be a string")
            feed_url = item
    return feed_url


def _preflight_response() -> Response:
    response = Response("", status=200)
    origin = request.headers.get("Origin", "")
    method = request.headers["Access-Control-Request-Method"].upper()
    requested = [
        name.strip()
        for name in request.headers.get("Access-Control-Request-Headers", "").split(",")
        if name.strip()
    ]
    allowed = {name.lower() for name in ALLOWED_HEADERS}
    if (
        origin
        and method in ALLOWED_METHODS
        and all(name.lower() in allowed for name in requested)
    ):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = method
        if requested:
            response.headers["Access-Control-Allow-Headers"] = ", ".join(requested)
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Max-Age"] = str(MAX_AGE)
    return response


def create_app(db: sqlite3.Connection) -> Flask:
    """Build the application serving ``/podcasts`` backed by ``db``."""
    app = Flask(__name__)
    lock = threading.Lock()

    @app.before_request
    def _handle_preflight() -> Response | None:
        if request.method == "OPTIONS" and request.headers.get("Access-Control-Request-Method"):
            return _preflight_response()
        return None

    @app.after_request
    def _add_cors_headers(response: Response) -> Response:
        origin = request.headers.get("Origin", "")
        if origin and "Access-Control-Allow-Origin" not in response.headers:
            if request.method != "OPTIONS" or not request.headers.get(
                "Access-Control-Request-Method"
            ):
                response.headers["Access-Control-Allow-Origin"] = origin
                response.headers["Access-Control-Expose-Headers"] = "Link"
                response.headers["Access-Control-Allow-Credentials"] = "true"
        return response

    @app.route("/podcasts", methods=["GET"])
    @app.route("/podcasts/", methods=["GET"])
    def list_podcasts() -> Response:
        try:
            with lock:
                podcasts = get_all_podcasts(db)
        except StorageError:
            return _json_response(500, error_body("Unable to get all podcasts"))
        data = [podcast.to_dict() for podcast in podcasts] or None
        return _json_response(200, {"error": False, "data": data})

    @app.route("/podcasts", methods=["POST"])
    @app.route("/podcasts/", methods=["POST"])
    def add_podcast() -> Response:
        try:
            feed_url = _read_feed_url(request.get_data())
        except ValueError:
            return _json_response(400, error_body("Unable to interpret JSON structure"))
        try:
            podcast = fetch_podcast(feed_url)
        except FeedError:
            return _json_response(400, error_body(f"Unable to fetch podcast for feed {feed_url}"))
        try:
            with lock:
                add_full_podcast(podcast, db)
        except StorageError:
            return _json_response(500, error_body(f"Unable to add podcast for feed {feed_url}"))
        title = podcast.feed_data.channel.title
        return _json_response(200, success_body(f"Successfully added podcast {title}"))

    return app