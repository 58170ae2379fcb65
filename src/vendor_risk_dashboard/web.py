"""HTTP dashboard and JSON API.

Routes:
    GET /             dashboard page
    GET /api/health   liveness probe
    GET /api/scores   UpGuard scores for ``?vendors=a.com,b.com``

Run: vendor-risk-dashboard
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Optional

import httpx
import uvicorn
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from .access import AccessGate, AccessGateMiddleware, AccessVerifier, HeaderPresenceVerifier
from .config import Settings, configure_logging
from .core.clients import upguard
from .core.vendors import parse_vendor_list
from .dashboard import render_dashboard

logger = logging.getLogger(__name__)


async def dashboard_page(request: Request) -> Response:
    settings: Settings = request.app.state.settings
    return HTMLResponse(render_dashboard(settings.default_vendors))


async def health(request: Request) -> Response:
    return JSONResponse({"ok": True, "ts": int(time.time() * 1000)})


async def scores(request: Request) -> Response:
    settings: Settings = request.app.state.settings
    vendors = parse_vendor_list(request.query_params.get("vendors"), settings.default_vendors)

    if not settings.upguard_api_key:
        logger.warning("Rejected /api/scores: UPGUARD_API_KEY is not configured")
        return JSONResponse({"error": "missing_api_key"}, status_code=500)

    results = await upguard.fetch_vendor_scores(
        settings.upguard_api_key,
        vendors,
        api_base=settings.upguard_api_base,
        timeout=settings.upguard_timeout_seconds,
        concurrency=settings.score_fetch_concurrency,
        transport=request.app.state.upstream_transport,
    )
    return JSONResponse({"vendors": [r.to_payload() for r in results]})


async def not_found(request: Request, exc: HTTPException) -> Response:
    return PlainTextResponse("Not found", status_code=404)


def get_only(endpoint):
    """Wrap a route so that only GET reaches it.

    Starlette answers HEAD on every GET route; here HEAD falls through to 404
    like any other method.
    """

    @functools.wraps(endpoint)
    async def wrapper(request: Request) -> Response:
        if request.method != "GET":
            return PlainTextResponse("Not found", status_code=404)
        return await endpoint(request)

    return wrapper


def create_app(
    settings: Optional[Settings] = None,
    *,
    verifier: Optional[AccessVerifier] = None,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Starlette:
    """Build the ASGI app.

    Args:
        settings: Configuration; read from the environment when omitted.
        verifier: Token check for the access gate. Defaults to header presence only.
        upstream_transport: httpx transport for UpGuard calls, for tests and proxies.
    """
    settings = settings if settings is not None else Settings.from_env()
    gate = AccessGate(settings.access_header, verifier, enabled=settings.require_access)

    if gate.enabled and isinstance(gate.verifier, HeaderPresenceVerifier):
        logger.warning(
            "REQUIRE_ACCESS is on but %s is only checked for presence; tokens are not verified",
            settings.access_header,
        )

    app = Starlette(
        routes=[
            Route("/", get_only(dashboard_page), methods=["GET"]),
            Route("/api/health", get_only(health), methods=["GET"]),
            Route("/api/scores", get_only(scores), methods=["GET"]),
        ],
        middleware=[Middleware(AccessGateMiddleware, gate=gate)],
        exception_handlers={404: not_found, 405: not_found},
    )
    app.state.settings = settings
    app.state.upstream_transport = upstream_transport
    return app


def main():
    """Entry point for the CLI command."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if not settings.upguard_api_key:
        logger.warning("UPGUARD_API_KEY not set — /api/scores will return missing_api_key")
    logger.info("Serving dashboard on http://%s:%d (%d default vendors)", settings.host, settings.port, len(settings.default_vendors))
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
