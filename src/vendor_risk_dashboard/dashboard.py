"""Browser dashboard page: static markup plus an inline script.

The script calls ``/api/scores`` and renders one card per vendor. All
sorting and rendering happens client side.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib.resources import files
from typing import Sequence

TEMPLATE_NAME = "dashboard.html"
DEFAULTS_PLACEHOLDER = "__DEFAULT_VENDORS__"


@lru_cache(maxsize=1)
def _load_template() -> str:
    return files(__package__).joinpath("templates").joinpath(TEMPLATE_NAME).read_text(encoding="utf-8")


def _script_json(value: object) -> str:
    # "<" is escaped so hostnames can never close the surrounding <script> tag.
    return json.dumps(value).replace("<", "\\u003c")


def render_dashboard(default_vendors: Sequence[str]) -> str:
    """Return the dashboard HTML with the server's default vendor list embedded."""
    return _load_template().replace(DEFAULTS_PLACEHOLDER, _script_json(list(default_vendors)))
