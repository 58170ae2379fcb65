"""Vendor Risk Dashboard.

Live UpGuard security ratings for a list of vendor domains, served as a
browser dashboard, a small JSON API, and MCP tools.
"""

__version__ = "0.1.0"
