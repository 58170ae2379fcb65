"""Vendor Risk MCP Server.

FastMCP server exposing UpGuard vendor scores as read-only tools.
Run: vendor-risk-mcp
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .config import Settings, configure_logging
from .core.clients import upguard
from .core.models import VendorScore
from .core.scoring import SORT_ORDERS, grade_for, sort_vendor_scores, summarize_vendor_scores
from .core.vendors import parse_vendor_list

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and report whether the UpGuard key is available."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if not settings.upguard_api_key:
        logger.warning("UPGUARD_API_KEY not set — vendor tools will fail until it is configured")
    yield


mcp = FastMCP(
    "Vendor Risk Dashboard",
    instructions="Look up UpGuard security ratings (0-1000, graded A+ to F) for vendor domains, with per-category breakdowns.",
    lifespan=lifespan,
)


def _get_settings() -> Settings:
    settings = Settings.from_env()
    if not settings.upguard_api_key:
        raise ValueError("UPGUARD_API_KEY environment variable is required. Create a key under Account Settings > API in UpGuard CyberRisk.")
    return settings


def _with_grade(result: VendorScore) -> dict:
    payload = result.to_payload()
    if result.ok:
        payload["grade"] = grade_for(result.score)
    return payload


# ─── Tool 1: Vendor Scores ───────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def vendor_scores(vendors: str = "", sort: str = "desc") -> dict:
    """Security ratings for a list of vendor domains.

    Args:
        vendors: Comma-separated domains (e.g., 'example.com, city.gov'). Empty uses the configured default list.
        sort: 'desc' (highest score first), 'asc' (lowest first) or 'alpha'. Default 'desc'.
    """
    if sort not in SORT_ORDERS:
        raise ValueError(f"Invalid sort order: {sort}. Use one of: {', '.join(SORT_ORDERS)}.")
    settings = _get_settings()
    hostnames = parse_vendor_list(vendors, settings.default_vendors)
    results = await upguard.fetch_vendor_scores(
        settings.upguard_api_key,
        hostnames,
        api_base=settings.upguard_api_base,
        timeout=settings.upguard_timeout_seconds,
        concurrency=settings.score_fetch_concurrency,
    )
    ordered = sort_vendor_scores(results, sort)
    failed = [r for r in results if not r.ok]

    return {
        "title": "Vendor Security Scores",
        "sort": sort,
        "vendors": [_with_grade(r) for r in ordered],
        "count": len(results),
        "failed": len(failed),
        "summary": summarize_vendor_scores(results),
    }


# ─── Tool 2: Single Vendor ───────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def vendor_score(hostname: str) -> dict:
    """Security rating and category breakdown for one vendor domain.

    Args:
        hostname: Vendor domain (e.g., 'example.com').
    """
    settings = _get_settings()
    hostname = hostname.strip()
    if not hostname:
        raise ValueError("hostname must not be empty")

    results = await upguard.fetch_vendor_scores(
        settings.upguard_api_key,
        [hostname],
        api_base=settings.upguard_api_base,
        timeout=settings.upguard_timeout_seconds,
    )
    result = results[0]
    return {
        "title": f"Security Score: {result.hostname}",
        "vendor": _with_grade(result),
        "summary": summarize_vendor_scores(results),
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
