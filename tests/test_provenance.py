"""Tests for response metadata and provenance builders."""

from datetime import datetime, timezone

from scorecard_mcp import SCHEMA_VERSION, SERVER_VERSION
from scorecard_mcp.utils.provenance import build_error_response, build_meta, build_provenance


class TestBuildMeta:
    """Tests for build_meta function."""

    def test_versions(self) -> None:
        """Test meta carries server and schema versions."""
        meta = build_meta("analyze")

        assert meta["server_version"] == SERVER_VERSION
        assert meta["schema_version"] == SCHEMA_VERSION
        assert meta["tool"] == "analyze"
        assert "duration_ms" not in meta

    def test_duration_rounded(self) -> None:
        """Test duration is rounded to one decimal."""
        assert build_meta("analyze", duration_ms=12.345)["duration_ms"] == 12.3


class TestBuildProvenance:
    """Tests for build_provenance function."""

    def test_datetime_as_of(self) -> None:
        """Test datetime timestamps are serialized as ISO strings."""
        as_of = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)
        prov = build_provenance("gemini", as_of=as_of)

        assert prov["source"] == "gemini"
        assert prov["as_of"] == "2026-03-02T09:30:00+00:00"
        assert prov["warnings"] == []

    def test_extra_fields(self) -> None:
        """Test keyword fields are merged and warnings kept."""
        prov = build_provenance("gemini", model="m", attempts=2, warnings=["w"])

        assert prov["model"] == "m"
        assert prov["attempts"] == 2
        assert prov["warnings"] == ["w"]
        assert "as_of" not in prov


class TestBuildErrorResponse:
    """Tests for build_error_response function."""

    def test_minimal(self) -> None:
        """Test the error envelope without optional fields."""
        response = build_error_response("timeout", "Too slow")

        assert response["error"] is True
        assert response["error_type"] == "timeout"
        assert response["message"] == "Too slow"
        assert response["meta"]["tool"] == "error"
        assert "query" not in response
        assert "detail" not in response

    def test_query_and_detail(self) -> None:
        """Test query and detail are included when given."""
        response = build_error_response(
            "malformed_analysis", "Bad", query="SAP", detail="scores"
        )

        assert response["query"] == "SAP"
        assert response["detail"] == "scores"
