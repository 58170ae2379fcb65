"""Core business logic: UpGuard client, score models, and presentation helpers.

This module is framework-agnostic. It has no dependency on MCP, Starlette,
or any server framework. Both the HTTP dashboard and the MCP server import
from here.
"""
