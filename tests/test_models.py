"""Tests for the VendorScore record and its serialized branches."""

import pytest
from pydantic import ValidationError

from vendor_risk_dashboard.core.models import VendorScore


class TestVendorScore:
    def test_success_payload_has_only_success_fields(self):
        payload = VendorScore.success("a.com", score=750, updated_at="2024-01-01").to_payload()
        assert payload == {
            "hostname": "a.com",
            "ok": True,
            "score": 750,
            "categoryScores": None,
            "updatedAt": "2024-01-01",
        }
        assert isinstance(payload["score"], int)

    def test_failure_payload_has_only_failure_fields(self):
        payload = VendorScore.failure("a.com", status=0, error="refused").to_payload()
        assert payload == {"hostname": "a.com", "ok": False, "status": 0, "error": "refused"}

    def test_float_scores_preserved(self):
        assert VendorScore.success("a.com", score=812.5).to_payload()["score"] == 812.5

    def test_failure_requires_status_and_error(self):
        with pytest.raises(ValidationError):
            VendorScore(hostname="a.com", ok=False, status=500)

    def test_accepts_json_field_names(self):
        result = VendorScore.model_validate(
            {"hostname": "a.com", "ok": True, "categoryScores": {"dns": 900}, "updatedAt": "x"}
        )
        assert result.category_scores == {"dns": 900}
        assert result.updated_at == "x"

    def test_is_immutable(self):
        result = VendorScore.success("a.com", score=1)
        with pytest.raises(ValidationError):
            result.score = 2
