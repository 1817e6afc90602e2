"""Grounding citation extraction and de-duplication."""

from collections.abc import Iterable, Mapping
from typing import Any

from scorecard_mcp.models import GroundingSource


def coerce_source(candidate: Any) -> GroundingSource | None:
    """
    Convert one citation candidate to a GroundingSource.

    Accepts a mapping or an object with ``uri``/``title`` attributes.
    Returns None if either field is missing or empty.
    """
    if isinstance(candidate, GroundingSource):
        return candidate
    if isinstance(candidate, Mapping):
        uri, title = candidate.get("uri"), candidate.get("title")
    else:
        uri, title = getattr(candidate, "uri", None), getattr(candidate, "title", None)

    if not (isinstance(uri, str) and uri and isinstance(title, str) and title):
        return None
    return GroundingSource(title=title, uri=uri)


def sources_from_grounding(chunks: Iterable[Any] | None) -> list[GroundingSource]:
    """
    Pull the web citation out of each grounding chunk.

    Chunks are ``{"web": {"uri", "title"}}`` mappings (or objects with a
    ``web`` attribute). Chunks without a usable web citation are skipped.
    """
    sources: list[GroundingSource] = []
    for chunk in chunks or ():
        web = chunk.get("web") if isinstance(chunk, Mapping) else getattr(chunk, "web", None)
        if web is None:
            continue
        source = coerce_source(web)
        if source is not None:
            sources.append(source)
    return sources


def dedupe_sources(candidates: Iterable[Any]) -> tuple[GroundingSource, ...]:
    """
    Drop incomplete citations and de-duplicate by URI.

    The first occurrence of a URI wins and keeps its title; original order is
    preserved.

    Args:
        candidates: Citation candidates ({uri, title} mappings or GroundingSource)

    Returns:
        Unique sources in first-seen order
    """
    seen: dict[str, GroundingSource] = {}
    for candidate in candidates:
        source = coerce_source(candidate)
        if source is None or source.uri in seen:
            continue
        seen[source.uri] = source
    return tuple(seen.values())
