"""Pydantic models for vendor score records.

Both the HTTP dashboard and the MCP server return these records, so the
serialized shape is defined once here.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

SUCCESS_FIELDS = frozenset({"hostname", "ok", "score", "category_scores", "updated_at"})
FAILURE_FIELDS = frozenset({"hostname", "ok", "status", "error"})


class VendorScore(BaseModel):
    """Security rating for one vendor domain, or the reason it could not be fetched."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hostname: str = Field(description="Requested hostname, or the upstream canonical name")
    ok: bool = Field(description="True when the upstream lookup succeeded")
    score: Optional[Union[int, float]] = Field(None, description="Overall rating on the 0-1000 scale")
    category_scores: Optional[dict[str, Any]] = Field(
        None,
        alias="categoryScores",
        description="Sub-scores keyed by category name",
    )
    updated_at: Optional[str] = Field(None, alias="updatedAt", description="Upstream last-updated timestamp")
    status: Optional[int] = Field(None, description="Upstream HTTP status, 0 for transport failures")
    error: Optional[str] = Field(None, description="Upstream error body or exception message")

    @model_validator(mode="after")
    def _check_failure_fields(self) -> "VendorScore":
        if not self.ok and (self.status is None or self.error is None):
            raise ValueError("failed vendor scores require both status and error")
        return self

    @classmethod
    def success(
        cls,
        hostname: str,
        score: Optional[Union[int, float]] = None,
        category_scores: Optional[dict[str, Any]] = None,
        updated_at: Optional[str] = None,
    ) -> "VendorScore":
        return cls(
            hostname=hostname,
            ok=True,
            score=score,
            category_scores=category_scores,
            updated_at=updated_at,
        )

    @classmethod
    def failure(cls, hostname: str, status: int, error: str) -> "VendorScore":
        return cls(hostname=hostname, ok=False, status=status, error=error)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict carrying only the branch selected by ``ok``."""
        fields = SUCCESS_FIELDS if self.ok else FAILURE_FIELDS
        return self.model_dump(include=set(fields), by_alias=True)
