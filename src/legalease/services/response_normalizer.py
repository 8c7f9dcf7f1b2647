"""
Recovery of structured payloads from free-text backend responses.

The backend is asked for bare JSON but routinely wraps it in markdown fences
or surrounds it with prose. ``clean_json_response`` isolates the object and
``normalize_response`` parses it, returning a complete dict or raising
``ParseFailure``. It never returns partially parsed data.
"""

import json
import re
from typing import Any

import structlog

from legalease.exceptions import ParseFailure

logger = structlog.get_logger(__name__)

_CODE_FENCE = re.compile(r"```[\w-]*\s*")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

EMPTY_OBJECT = "{}"


def clean_json_response(text: str | None) -> str:
    """
    Isolate the JSON object embedded in a backend response.

    Returns ``"{}"`` when no object can be found.
    """
    if not text:
        return EMPTY_OBJECT

    cleaned = _CODE_FENCE.sub("", text).strip()

    first_brace = cleaned.find("{")
    if first_brace > 0:
        cleaned = cleaned[first_brace:]

    last_brace = cleaned.rfind("}")
    if 0 < last_brace < len(cleaned) - 1:
        cleaned = cleaned[: last_brace + 1]

    if not (cleaned.startswith("{") and cleaned.endswith("}")):
        match = _JSON_OBJECT.search(cleaned)
        if not match:
            return EMPTY_OBJECT
        cleaned = match.group(0)

    return cleaned


def normalize_response(text: str | None) -> dict[str, Any]:
    """
    Parse a backend response into a dict.

    Raises ParseFailure if the isolated text is not a valid JSON object.
    """
    cleaned = clean_json_response(text)

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("response_parse_failed", error=str(e), length=len(cleaned))
        raise ParseFailure(f"Invalid JSON in backend response: {e}", raw_text=text) from e

    return payload
