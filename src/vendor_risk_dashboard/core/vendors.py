"""Vendor list parsing shared by the HTTP API and the MCP tools."""

from __future__ import annotations

from typing import Optional, Sequence

DEFAULT_VENDORS: tuple[str, ...] = (
    "topsfield-ma.gov",
    "middletonma.gov",
    "danversma.gov",
    "essexma.org",
    "hamiltonma.gov",
    "wenhamma.gov",
)


def split_vendor_list(raw: str) -> list[str]:
    """Split a comma-separated list, trimming entries and dropping blanks and repeats.

    The first occurrence of a vendor keeps its position.
    """
    return list(dict.fromkeys(part.strip() for part in raw.split(",") if part.strip()))


def parse_vendor_list(raw: Optional[str], defaults: Sequence[str] = DEFAULT_VENDORS) -> list[str]:
    """Resolve the vendors to look up from an optional ``vendors`` query value.

    A missing or empty value selects ``defaults``; the defaults go through the
    same trimming and de-duplication as user input.
    """
    if not raw:
        return split_vendor_list(",".join(defaults))
    return split_vendor_list(raw)
