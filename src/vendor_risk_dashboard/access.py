"""Access gate for the ``/api/`` routes.

The gate is meant for deployments behind an identity-aware proxy (such as
Cloudflare Access) that forwards a signed assertion header. Token checking
is delegated to an ``AccessVerifier`` so a real signature and claims check
can replace the default without changes to routing.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

GATED_PREFIX = "/api/"


class AccessVerifier(Protocol):
    def verify(self, token: str) -> bool: ...


class HeaderPresenceVerifier:
    """Accepts any non-empty token.

    This only proves the request carried the header. It does not validate a
    signature or claims and must not be treated as authentication.
    """

    def verify(self, token: str) -> bool:
        return bool(token)


class AccessGate:
    """Decides whether a request may reach a gated route."""

    def __init__(self, header_name: str, verifier: Optional[AccessVerifier] = None, enabled: bool = True):
        self.header_name = header_name
        self.verifier = verifier if verifier is not None else HeaderPresenceVerifier()
        self.enabled = enabled

    def applies_to(self, path: str) -> bool:
        return self.enabled and path.startswith(GATED_PREFIX)

    def allows(self, headers: Mapping[str, str]) -> bool:
        token = headers.get(self.header_name)
        if not token:
            return False
        return self.verifier.verify(token)


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Rejects gated requests with 401 before they reach any route."""

    def __init__(self, app: ASGIApp, gate: AccessGate):
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.gate.applies_to(request.url.path) and not self.gate.allows(request.headers):
            logger.info("Rejected %s %s: missing or invalid %s", request.method, request.url.path, self.gate.header_name)
            return PlainTextResponse("Unauthorized", status_code=401)
        return await call_next(request)
