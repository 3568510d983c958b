"""HTTP front end for the cutting optimiser."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from collections import Counter
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from flask import Flask, Response, request

from stocknest.algorithm import OptimizationError, optimize_cutting
from stocknest.models import Cut, Solution
from stocknest.output import group_patterns, to_fraction
from stocknest.parse import parse_advanced_length, parse_fraction, pretty_len

logger = logging.getLogger("stocknest.server")

_FALLBACK_ROOT = Path("/app")
_DEFAULT_KERF = 0.125
_CONTENT_TYPES = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
}
_NOT_FOUND_PAGE = (
    "<h1>404 - File Not Found</h1><p>Could not find "
    "index.html. Please check your deployment.</p>"
)
_LEVEL_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO ",
    logging.WARNING: "WARN ",
    logging.ERROR: "ERROR",
}


class _ServerFormatter(logging.Formatter):
    """Formats records as ``[date time.ms] [LEVEL] message``."""

    def __init__(self) -> None:
        super().__init__(
            "[%(asctime)s.%(msecs)03d] [%(label)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        record.label = _LEVEL_LABELS.get(record.levelno, record.levelname[:5].ljust(5))
        return super().format(record)


class _RequestError(Exception):
    """A request that cannot be served, with its status and message."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def read_file(path: str) -> str:
    """Return a file's text, trying under /app as well; empty if neither exists."""
    for candidate in (Path(path), _FALLBACK_ROOT / path):
        try:
            return candidate.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
    return ""


def solution_to_json(solution: Solution, stock_len: float, kerf: float) -> dict[str, Any]:
    """Describe a solution as a JSON-ready dictionary with grouped patterns."""
    total_stock = solution.num_sticks * stock_len
    efficiency = (
        (total_stock - solution.total_waste) / total_stock * 100.0
        if total_stock > 0
        else 0.0
    )
    patterns = [
        {
            "count": pattern.count,
            "used_len": pattern.used_len,
            "waste_len": pattern.waste_len,
            "cuts": [
                {"length": cut.length, "pretty_length": pretty_len(cut.length)}
                for cut in pattern.cuts
            ],
        }
        for pattern in group_patterns(solution.sticks)
    ]
    return {
        "num_sticks": solution.num_sticks,
        "total_waste": solution.total_waste,
        "efficiency": efficiency,
        "patterns": patterns,
    }


def _json_response(payload: Any, status: int = 200) -> Response:
    response = Response(
        json.dumps(payload, sort_keys=True), status=status, mimetype="application/json"
    )
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def _string_field(body: dict[str, Any], name: str, default: str | None = None) -> str:
    if name not in body or (default is None and body[name] is None):
        if default is not None:
            return default
        raise TypeError(f"field '{name}' is missing")
    value = body[name]
    if not isinstance(value, str):
        raise TypeError(f"field '{name}' must be a string")
    return value


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    raise TypeError("quantity must be a number")


def _items(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return list(value.values())
    return [value]


def _read_cuts(items: list[Any], stock_len: float) -> list[Cut]:
    cuts: list[Cut] = []
    for item in items:
        if not isinstance(item, dict):
            raise TypeError("each cut must be an object")
        length = parse_advanced_length(_string_field(item, "length"))
        quantity = _as_int(item.get("quantity"))

        if length <= 0 or quantity <= 0:
            logger.warning("Skipping invalid cut: length=%f, qty=%d", length, quantity)
            continue
        if length > stock_len:
            logger.error("Cut length exceeds stock: %f > %f", length, stock_len)
            raise _RequestError(400, "Cut length exceeds stock length")

        cuts.extend(Cut(length, len(cuts) + n + 1) for n in range(quantity))
    return cuts


def _optimize(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise TypeError("request body must be a JSON object")

    job_name = _string_field(body, "jobName", "Cut Plan")
    material_type = _string_field(body, "materialType", "Standard Material")
    stock_length_text = _string_field(body, "stockLength")
    kerf_text = _string_field(body, "kerf")

    stock_len = parse_advanced_length(stock_length_text)
    if stock_len <= 0:
        logger.warning("Invalid stock length: %s", stock_length_text)
        raise _RequestError(400, "Invalid stock length")

    kerf = parse_fraction(kerf_text)
    if kerf <= 0:
        kerf = _DEFAULT_KERF
        logger.info('Using default kerf: 1/8"')

    cuts = _read_cuts(_items(body.get("cuts")), stock_len)
    if not cuts:
        logger.warning("No valid cuts provided")
        raise _RequestError(400, "No valid cuts provided")

    logger.info(
        'Starting optimization - Job: %s, Stock: %g", Kerf: %g", Total cuts: %d',
        job_name, stock_len, kerf, len(cuts),
    )

    start = time.perf_counter()
    try:
        solution = optimize_cutting(cuts, stock_len, kerf)
    except OptimizationError as exc:
        logger.error("Optimization failed - %s", exc)
        solution = Solution()
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    if solution.num_sticks == 0:
        logger.error("Optimization failed - no solution found")
        raise _RequestError(500, "No solution found")

    logger.info(
        'Optimization complete - Sticks: %d, Waste: %g", Time: %dms',
        solution.num_sticks, solution.total_waste, elapsed_ms,
    )

    counts = Counter(cut.length for cut in cuts)
    summary = [
        {"length": length, "lengthPretty": pretty_len(length), "quantity": counts[length]}
        for length in sorted(counts, reverse=True)
    ]
    return {
        "jobName": job_name,
        "materialType": material_type,
        "stockLength": stock_len,
        "stockLengthPretty": pretty_len(stock_len),
        "kerf": kerf,
        "kerfPretty": to_fraction(kerf),
        "solution": solution_to_json(solution, stock_len, kerf),
        "optimizationTime": elapsed_ms / 1000.0,
        "cutsSummary": summary,
    }


def create_app() -> Flask:
    """Build the web application with its pages and API endpoints."""
    app = Flask(__name__, static_folder=None)

    @app.after_request
    def _log_request(response: Response) -> Response:
        message = (
            f"{request.method} {request.path} - {response.status_code} - "
            f"{request.remote_addr}:{request.environ.get('REMOTE_PORT', 0)}"
        )
        if response.status_code >= 400:
            logger.error(message)
        else:
            logger.info(message)
        return response

    @app.get("/")
    def index() -> Response:
        content = read_file("static/index.html")
        if not content:
            logger.error("Failed to read static/index.html - file not found")
            return Response(_NOT_FOUND_PAGE, status=404, mimetype="text/html")
        return Response(content, mimetype="text/html")

    @app.get("/static/<path:name>")
    def static_file(name: str) -> Response:
        path = f"static/{name}"
        content = read_file(path)
        if not content:
            logger.warning("Static file not found: %s", path)
            return Response("File not found", status=404, mimetype="text/plain")
        extension = path.rpartition(".")[2]
        return Response(content, mimetype=_CONTENT_TYPES.get(extension, "text/plain"))

    @app.get("/api/health")
    def health() -> Response:
        return Response('{"status":"ok"}', mimetype="application/json")

    @app.route("/api/optimize", methods=["POST", "OPTIONS"])
    def optimize() -> Response:
        if request.method == "OPTIONS":
            response = Response(status=200)
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers["Access-Control-Allow-Methods"] = "POST, GET, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            return response

        logger.debug("Parsing optimization request body")
        try:
            body = json.loads(request.get_data(as_text=True))
        except json.JSONDecodeError as exc:
            logger.error("JSON parse error: %s", exc)
            return _json_response({"error": "Invalid JSON format"}, 400)

        try:
            return _json_response(_optimize(body))
        except _RequestError as exc:
            return _json_response({"error": exc.message}, exc.status)
        except (TypeError, ValueError) as exc:
            logger.error("Server error: %s", exc)
            return _json_response({"error": f"Server error: {exc}"}, 500)

    @app.errorhandler(404)
    def not_found(_error: Exception) -> Response:
        logger.warning("404 Not Found: %s", request.path)
        return Response(
            json.dumps({"error": "Not found", "path": request.path}, sort_keys=True),
            status=404,
            mimetype="application/json",
        )

    return app


def _configure_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_ServerFormatter())
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server until interrupted; returns the exit status."""
    parser = argparse.ArgumentParser(description="Cutting optimisation web server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)

    _configure_logging()

    if read_file("static/index.html"):
        logger.info("Static files found in current directory")
    else:
        logger.warning("static/index.html not found in current directory")
        logger.info("Will try /app/static/index.html when requests come in")

    app = create_app()
    rule = "=" * 42
    for line in (
        rule,
        "    1D Nesting Software Server v1.0",
        rule,
        f"Starting server on http://{args.host}:{args.port}",
        "Available endpoints:",
        "  GET  /              - Web interface",
        "  GET  /api/health    - Health check",
        "  POST /api/optimize  - Run optimization",
        rule,
        "Press Ctrl+C to stop",
    ):
        logger.info(line)

    try:
        app.run(host=args.host, port=args.port, threaded=True)
    except KeyboardInterrupt:
        logger.info("Shutting down server gracefully...")
    except OSError:
        logger.error("Failed to start server - port may be in use")
        return 1

    logger.info("Server stopped")
    return 0