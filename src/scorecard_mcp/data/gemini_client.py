"""Async Gemini client with Google Search grounding and retry logic."""

import asyncio
import logging
import os
import random
from dataclasses import dataclass
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

logger = logging.getLogger(__name__)

_model = os.environ.get("ANALYST_MODEL", "gemini-2.5-flash")

# Retry configuration (transport-level only; payload errors are never retried)
_max_retries = int(os.environ.get("PROVIDER_MAX_RETRIES", "2"))
_base_delay = float(os.environ.get("PROVIDER_BASE_DELAY", "1.0"))  # seconds
_max_delay = float(os.environ.get("PROVIDER_MAX_DELAY", "20.0"))  # seconds


class ProviderConfigError(RuntimeError):
    """Raised when the provider cannot be called (e.g. no API key)."""

    pass


@dataclass(frozen=True)
class ProviderResponse:
    """Raw provider output handed to the analysis pipeline."""

    text: str
    grounding_chunks: tuple[dict[str, Any], ...] = ()
    model: str = _model
    attempts: int = 1
    total_backoff_seconds: float = 0.0
    retry_errors: tuple[str, ...] = ()

    def to_provenance(self) -> dict[str, Any]:
        """Provenance fields for the data_provenance block."""
        prov: dict[str, Any] = {
            "model": self.model,
            "attempts": self.attempts,
            "total_backoff_seconds": self.total_backoff_seconds,
            "grounding_chunks": len(self.grounding_chunks),
        }
        if self.retry_errors:
            prov["retry_errors"] = list(self.retry_errors[-3:])
        return prov


def _api_key() -> str | None:
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")


_client: genai.Client | None = None


def get_client() -> genai.Client:
    """Lazily create the shared Gemini client."""
    global _client
    if _client is None:
        api_key = _api_key()
        if not api_key:
            raise ProviderConfigError("GEMINI_API_KEY (or API_KEY) is not set")
        _client = genai.Client(api_key=api_key)
    return _client


def _is_retryable_error(error: Exception) -> bool:
    """Check if a provider error is transient."""
    if isinstance(error, genai_errors.APIError):
        code = getattr(error, "code", None)
        if code == 429:
            return True
        if isinstance(code, int) and 500 <= code < 600:
            return True
        return False

    error_str = str(error).lower()
    retryable_patterns = [
        "rate limit",
        "too many requests",
        "connection",
        "timeout",
        "temporarily unavailable",
    ]
    return any(pattern in error_str for pattern in retryable_patterns)


def _calculate_backoff(attempt: int) -> float:
    """Calculate delay with exponential backoff and jitter."""
    delay = _base_delay * (2**attempt)
    # Add jitter (+/-25%)
    jitter = delay * 0.25 * (2 * random.random() - 1)
    delay = delay + jitter
    return min(delay, _max_delay)


def _extract_grounding_chunks(response: Any) -> tuple[dict[str, Any], ...]:
    """Flatten grounding metadata of the first candidate into plain dicts."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ()
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    flattened: list[dict[str, Any]] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if web is None:
            flattened.append({})
            continue
        flattened.append({
            "web": {
                "uri": getattr(web, "uri", None),
                "title": getattr(web, "title", None),
            }
        })
    return tuple(flattened)


async def _generate(client: genai.Client, prompt: str, model: str) -> Any:
    return await client.aio.models.generate_content(
        model=model,
        contents=prompt,
        config=genai_types.GenerateContentConfig(
            tools=[genai_types.Tool(google_search=genai_types.GoogleSearch())],
        ),
    )


async def fetch_analysis(
    prompt: str,
    model: str | None = None,
    max_retries: int = _max_retries,
    client: genai.Client | None = None,
) -> ProviderResponse:
    """
    Send the analysis prompt with search grounding enabled.

    Transient transport errors (429, 5xx, connection) are retried with
    backoff. After the last attempt the original exception is re-raised
    unmodified; non-transient errors are raised immediately.

    Args:
        prompt: Full analysis prompt
        model: Model name (default: ANALYST_MODEL)
        max_retries: Maximum number of retries for transient errors
        client: Client override (default: shared client)

    Returns:
        ProviderResponse with text and grounding chunks

    Raises:
        ProviderConfigError: If no API key is configured
    """
    model_name = model or _model
    client = client or get_client()

    total_backoff = 0.0
    retry_errors: list[str] = []

    for attempt in range(max_retries + 1):
        try:
            response = await _generate(client, prompt, model_name)
        except Exception as e:
            retry_errors.append(type(e).__name__)

            if not _is_retryable_error(e):
                raise

            if attempt >= max_retries:
                logger.warning(
                    f"generate_content({model_name}): Failed after {attempt + 1} attempts. "
                    f"Last error: {e}"
                )
                raise

            delay = _calculate_backoff(attempt)
            total_backoff += delay
            logger.info(
                f"generate_content({model_name}): Attempt {attempt + 1} failed ({e}), "
                f"retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)
            continue

        return ProviderResponse(
            text=getattr(response, "text", None) or "",
            grounding_chunks=_extract_grounding_chunks(response),
            model=model_name,
            attempts=attempt + 1,
            total_backoff_seconds=round(total_backoff, 2),
            retry_errors=tuple(retry_errors),
        )

    # Unreachable: the loop either returns or raises
    raise RuntimeError("fetch_analysis exited retry loop without a result")
