"""
Response normalization for model review results.

The model SDK returns a weakly-typed result whose shape is not guaranteed.
This module reduces any such result to exactly one display string in two
steps:

1. ``classify`` maps the raw result onto the ``ModelResponse`` sum type
   (``CandidateParts``, ``PlainText`` or ``Opaque``).
2. ``ResponseNormalizer.normalize`` reduces the classified value to a
   string, trying in order the candidate text parts, a plain string
   response, a JSON dump of the most specific fragment, and finally
   ``str()`` of the whole result.

Normalization never raises. Missing fields are a normal condition, not an
error. The raw result may be a mapping, an SDK object exposing attributes,
a string, or ``None``; it may wrap the payload under ``response``.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple

from models.data_models import (
    CandidateParts,
    ModelResponse,
    NormalizationPath,
    Opaque,
    PlainText,
)

logger = logging.getLogger(__name__)

NormalizationHook = Callable[[NormalizationPath, str], None]


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object; ``None`` when unavailable."""
    if obj is None or isinstance(obj, (str, bytes)):
        return None
    try:
        if isinstance(obj, Mapping):
            return obj.get(name)
        return getattr(obj, name, None)
    except Exception:
        return None


def _as_list(value: Any) -> Optional[List[Any]]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


def _json_default(value: Any) -> Any:
    # google-genai response types are pydantic models
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json", exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def classify(result: Any) -> ModelResponse:
    """
    Classify a raw model result.

    Args:
        result: Whatever the model client returned

    Returns:
        ``CandidateParts`` when the first candidate has non-empty text parts,
        ``PlainText`` when the response layer is a non-empty string,
        ``Opaque`` otherwise
    """
    inner = _field(result, "response")
    layer = result if inner is None else inner

    candidates = _as_list(_field(layer, "candidates"))
    candidate = candidates[0] if candidates else None

    parts = _as_list(_field(_field(candidate, "content"), "parts")) or []
    texts = []
    for part in parts:
        text = _field(part, "text")
        if isinstance(text, str) and text:
            texts.append(text)

    if texts:
        return CandidateParts(texts=texts, candidate=candidate)

    if isinstance(layer, str) and layer:
        return PlainText(text=layer)

    if candidate is not None:
        fragment = candidate
    elif inner is not None:
        fragment = inner
    else:
        fragment = result
    return Opaque(fragment=fragment, original=result)


def stringify(value: Any) -> str:
    """Best-effort human-readable conversion that never raises."""
    try:
        text = str(value)
    except Exception:
        text = ""
    return text or f"<{type(value).__name__}>"


def reduce_response(response: ModelResponse) -> Tuple[NormalizationPath, str]:
    """
    Reduce a classified response to a string.

    Returns:
        Tuple of (path taken, review text)
    """
    if isinstance(response, CandidateParts):
        return NormalizationPath.CANDIDATE_PARTS, "".join(response.texts)

    if isinstance(response, PlainText):
        return NormalizationPath.PLAIN_TEXT, response.text

    if isinstance(response, Opaque):
        try:
            text = json.dumps(response.fragment, default=_json_default, ensure_ascii=False)
        except Exception:
            # Cyclic or unserializable structures
            return NormalizationPath.STRINGIFIED, stringify(response.original)
        return NormalizationPath.SERIALIZED, text

    raise TypeError(f"Unknown model response variant: {type(response).__name__}")


class ResponseNormalizer:
    """Reduces model results to review strings and reports each one to a hook."""

    def __init__(self, hook: Optional[NormalizationHook] = None):
        """
        Initialize the normalizer.

        Args:
            hook: Called with (path, text) before every return. Errors raised
                by the hook are ignored.
        """
        self.hook = hook

    def normalize(self, result: Any) -> str:
        """
        Normalize a raw model result to a single string.

        Args:
            result: Raw model result of any shape

        Returns:
            Non-empty review text
        """
        path, text = reduce_response(classify(result))
        self._emit(path, text)
        return text

    def _emit(self, path: NormalizationPath, text: str) -> None:
        if self.hook is None:
            return
        try:
            self.hook(path, text)
        except Exception:
            logger.debug("Normalization hook failed for path %s", path.value, exc_info=True)


def normalize(result: Any, hook: Optional[NormalizationHook] = None) -> str:
    """Normalize ``result`` with an optional hook. See ``ResponseNormalizer``."""
    return ResponseNormalizer(hook=hook).normalize(result)
