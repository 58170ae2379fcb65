"""Runtime settings, read from environment variables.

Every server entry point builds one ``Settings`` at start-up. Tests pass an
explicit mapping to ``Settings.from_env`` instead of touching ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from .core.clients import upguard
from .core.vendors import DEFAULT_VENDORS, split_vendor_list

DEFAULT_ACCESS_HEADER = "Cf-Access-Jwt-Assertion"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseModel):
    """Process configuration for the dashboard and MCP server."""

    upguard_api_key: str = ""
    upguard_api_base: str = upguard.API_BASE
    upguard_timeout_seconds: float = Field(upguard.DEFAULT_TIMEOUT_SECONDS, gt=0)
    score_fetch_concurrency: int = Field(upguard.DEFAULT_CONCURRENCY, ge=1)
    default_vendors: tuple[str, ...] = DEFAULT_VENDORS
    require_access: bool = False
    access_header: str = DEFAULT_ACCESS_HEADER
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values: dict = {
            "upguard_api_key": env.get("UPGUARD_API_KEY", "").strip(),
            "require_access": env.get("REQUIRE_ACCESS", "0") == "1",
        }

        optional = {
            "UPGUARD_API_BASE": "upguard_api_base",
            "UPGUARD_TIMEOUT_SECONDS": "upguard_timeout_seconds",
            "SCORE_FETCH_CONCURRENCY": "score_fetch_concurrency",
            "ACCESS_HEADER": "access_header",
            "HOST": "host",
            "PORT": "port",
            "LOG_LEVEL": "log_level",
        }
        for env_name, field_name in optional.items():
            raw = env.get(env_name, "").strip()
            if raw:
                values[field_name] = raw

        vendors = split_vendor_list(env.get("DEFAULT_VENDORS", ""))
        if vendors:
            values["default_vendors"] = tuple(vendors)

        return cls(**values)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
