"""Tests for grounding source extraction and de-duplication."""

from types import SimpleNamespace
from typing import Any

from scorecard_mcp.analysis.sources import coerce_source, dedupe_sources, sources_from_grounding
from scorecard_mcp.models import GroundingSource


class TestDedupeSources:
    """Tests for dedupe_sources function."""

    def test_first_occurrence_wins(self) -> None:
        """Test duplicate URIs keep the first title and original order."""
        result = dedupe_sources([
            {"uri": "a", "title": "A1"},
            {"uri": "b", "title": "B"},
            {"uri": "a", "title": "A2"},
        ])
        assert result == (
            GroundingSource(title="A1", uri="a"),
            GroundingSource(title="B", uri="b"),
        )

    def test_drops_incomplete(self) -> None:
        """Test entries missing uri or title are dropped."""
        result = dedupe_sources([
            {"uri": "a"},
            {"title": "No URI"},
            {"uri": "", "title": "Empty URI"},
            {"uri": "b", "title": ""},
            {"uri": "c", "title": "C"},
        ])
        assert result == (GroundingSource(title="C", uri="c"),)

    def test_incomplete_does_not_claim_uri(self) -> None:
        """Test a dropped entry does not block a later complete one."""
        result = dedupe_sources([{"uri": "a"}, {"uri": "a", "title": "A"}])
        assert result == (GroundingSource(title="A", uri="a"),)

    def test_empty(self) -> None:
        """Test empty input gives empty output."""
        assert dedupe_sources([]) == ()

    def test_mixed_candidate_types(self) -> None:
        """Test GroundingSource and mapping candidates mix."""
        result = dedupe_sources([
            GroundingSource(title="A", uri="a"),
            {"uri": "a", "title": "Other"},
            {"uri": "b", "title": "B"},
        ])
        assert [s.title for s in result] == ["A", "B"]


class TestSourcesFromGrounding:
    """Tests for sources_from_grounding function."""

    def test_extracts_web(self, sample_chunks: list[dict[str, Any]]) -> None:
        """Test web citations are pulled out and incomplete ones skipped."""
        result = sources_from_grounding(sample_chunks)
        assert [s.uri for s in result] == ["https://a.example", "https://b.example", "https://a.example"]

    def test_none(self) -> None:
        """Test None chunks give no sources."""
        assert sources_from_grounding(None) == []

    def test_object_chunks(self) -> None:
        """Test SDK-style objects with attributes are accepted."""
        chunk = SimpleNamespace(web=SimpleNamespace(uri="https://x.example", title="X"))
        empty = SimpleNamespace(web=None)
        assert sources_from_grounding([chunk, empty]) == [GroundingSource(title="X", uri="https://x.example")]


class TestCoerceSource:
    """Tests for coerce_source function."""

    def test_non_string_fields(self) -> None:
        """Test non-string uri/title are rejected."""
        assert coerce_source({"uri": 1, "title": "X"}) is None
        assert coerce_source({"uri": "x", "title": None}) is None

    def test_passthrough(self) -> None:
        """Test an existing GroundingSource is returned as-is."""
        source = GroundingSource(title="T", uri="u")
        assert coerce_source(source) is source
