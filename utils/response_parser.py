"""Turn raw model output into parsed JSON and typed response models."""

import json
import re
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

# A fence wrapping the whole reply; greedy up to the closing fence at the end
_WRAPPING_FENCE_RE = re.compile(r"^```(?:json)?[ \t]*\n?([\s\S]*)\n?[ \t]*```$", re.IGNORECASE)
_EMBEDDED_FENCE_RE = re.compile(r"```json[ \t]*\n([\s\S]*?)\n[ \t]*```", re.IGNORECASE)


class MalformedResponseError(ValueError):
    """Model output was empty, not JSON, or not the expected shape"""

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response


def strip_code_fence(text: str) -> str:
    """Remove a ``` or ```json fence wrapping the response.

    Failing that, extract the first ```json block embedded in prose. Text
    without either is returned trimmed.
    """
    cleaned = text.strip()
    match = _WRAPPING_FENCE_RE.match(cleaned)
    if match:
        return match.group(1).strip()
    match = _EMBEDDED_FENCE_RE.search(cleaned)
    if match:
        return match.group(1).strip()
    return cleaned


def parse_json_response(text: str) -> Any:
    if text is None or not text.strip():
        raise MalformedResponseError("Generation service returned an empty response", text or "")

    # Bare JSON is tried as-is first; string values may contain backticks
    cleaned = text.strip()
    candidates = [cleaned]
    unfenced = strip_code_fence(cleaned)
    if unfenced != cleaned:
        candidates.append(unfenced)

    error = None
    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            error = e
    raise MalformedResponseError(f"Response is not valid JSON: {error}", text) from error


def parse_model_response(text: str, model_cls: Type[T]) -> T:
    """Parse `text` and validate it into `model_cls`.

    Raises MalformedResponseError for anything that does not fit, never
    returning an empty default in its place.
    """
    data = parse_json_response(text)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response does not match {model_cls.__name__}: {e.error_count()} error(s)", text
        ) from e
