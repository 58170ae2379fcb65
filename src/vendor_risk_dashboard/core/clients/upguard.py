"""UpGuard CyberRisk vendor API client.

API docs: https://cyber-risk.upguard.com/api/docs
Authentication: the raw API key is sent in the ``Authorization`` header.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Optional, Sequence

import httpx

from ..models import VendorScore

logger = logging.getLogger(__name__)

API_BASE = "https://cyber-risk.upguard.com/api/public/vendor"

# Upstream has reported the overall rating under both names; first numeric match wins.
SCORE_FIELDS: tuple[str, ...] = ("score", "overallScore")

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CONCURRENCY = 8


def _first_numeric(data: dict, field_names: Sequence[str]) -> Optional[int | float]:
    for name in field_names:
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if isinstance(value, float) and not math.isfinite(value):
            continue
        return value
    return None


def parse_vendor_payload(
    hostname: str,
    data: Any,
    score_fields: Sequence[str] = SCORE_FIELDS,
) -> VendorScore:
    """Normalize a successful upstream vendor response into a VendorScore."""
    if not isinstance(data, dict):
        data = {}

    primary_hostname = data.get("primary_hostname")
    category_scores = data.get("categoryScores")
    updated_at = data.get("updated_at")

    return VendorScore.success(
        hostname=primary_hostname if primary_hostname and isinstance(primary_hostname, str) else hostname,
        score=_first_numeric(data, score_fields),
        category_scores=category_scores if isinstance(category_scores, dict) else None,
        updated_at=str(updated_at) if updated_at else None,
    )


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


async def fetch_vendor_score(
    api_key: str,
    hostname: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    api_base: str = API_BASE,
    score_fields: Sequence[str] = SCORE_FIELDS,
) -> VendorScore:
    """Fetch the security rating for one vendor domain.

    Never raises for upstream problems: HTTP errors are returned as
    ``ok=False`` with the upstream status, transport errors as ``status=0``.

    Args:
        api_key: UpGuard API key.
        hostname: Vendor domain (e.g., 'example.com').
        client: Shared client; a short-lived one is created when omitted.
        api_base: Vendor endpoint URL.
        score_fields: Accepted names for the overall score, in priority order.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=httpx.Timeout(DEFAULT_TIMEOUT_SECONDS, connect=10.0)) as own_client:
            return await fetch_vendor_score(
                api_key,
                hostname,
                client=own_client,
                api_base=api_base,
                score_fields=score_fields,
            )

    try:
        response = await client.get(
            api_base,
            params={"hostname": hostname},
            headers={"Authorization": api_key},
            follow_redirects=True,
        )
        if not response.is_success:
            return VendorScore.failure(
                hostname=hostname,
                status=response.status_code,
                error=response.text or "Request failed",
            )
        return parse_vendor_payload(hostname, response.json(), score_fields)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        # ValueError also covers undecodable JSON and pydantic ValidationError.
        return VendorScore.failure(hostname=hostname, status=0, error=_error_message(exc))


async def fetch_vendor_scores(
    api_key: str,
    hostnames: Sequence[str],
    *,
    api_base: str = API_BASE,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    concurrency: int = DEFAULT_CONCURRENCY,
    score_fields: Sequence[str] = SCORE_FIELDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[VendorScore]:
    """Fetch ratings for several vendors concurrently.

    At most ``concurrency`` requests are in flight at once. Results come back
    in the order of ``hostnames``; one vendor failing never affects the others.
    """
    if not hostnames:
        return []

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
        transport=transport,
    ) as client:

        async def _bounded(hostname: str) -> VendorScore:
            async with semaphore:
                return await fetch_vendor_score(
                    api_key,
                    hostname,
                    client=client,
                    api_base=api_base,
                    score_fields=score_fields,
                )

        results = await asyncio.gather(*(_bounded(h) for h in hostnames))

    for result in results:
        if not result.ok:
            logger.warning("UpGuard lookup failed for %s (status %s): %s", result.hostname, result.status, result.error)
    return list(results)
