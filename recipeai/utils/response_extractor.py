"""Recover JSON payloads embedded in free-text Gemini replies."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from recipeai.models.recipe import RecipeData
from recipeai.utils.exceptions import ExtractionError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n?[ \t]*```", re.DOTALL | re.IGNORECASE)

FENCE = "fence"
ARRAY = "array"
OBJECT = "object"

LIST_SHAPES = (FENCE, ARRAY, OBJECT)
RECIPE_SHAPES = (FENCE, OBJECT)


def _find_balanced(text: str, opener: str, closer: str) -> Optional[str]:
    """
    Return the first ``opener ... closer`` substring with balanced delimiters.

    Delimiters inside JSON string literals are ignored.
    """
    start = text.find(opener)
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == opener:
                depth += 1
            elif ch == closer:
                depth -= 1
                if depth == 0:
                    return text[start : i + 1]
        # Unbalanced from this opener; try the next one
        start = text.find(opener, start + 1)
    return None


def find_json_candidate(text: str, shapes: Sequence[str] = LIST_SHAPES) -> Optional[str]:
    """
    Locate the substring of ``text`` most likely to hold JSON.

    Shapes are tried in order, first match wins:
      - fence:  inner text of a ```json fenced block
      - array:  first bracket-delimited ``[...]``
      - object: first brace-delimited ``{...}``
    """
    t = text or ""
    for shape in shapes:
        if shape == FENCE:
            m = _FENCE_RE.search(t)
            if m:
                return m.group(1).strip()
        elif shape == ARRAY:
            found = _find_balanced(t, "[", "]")
            if found is not None:
                return found
        elif shape == OBJECT:
            found = _find_balanced(t, "{", "}")
            if found is not None:
                return found
        else:
            raise ValueError(f"Unknown candidate shape: {shape}")
    return None


def extract_json(
    text: str,
    *,
    shapes: Sequence[str] = LIST_SHAPES,
    wrapper_keys: Iterable[str] = (),
) -> Any:
    """
    Find and strictly parse the JSON payload of a model reply.

    If the parsed value is an object holding one of ``wrapper_keys``, that
    key's value is returned instead of the outer object.

    Raises:
        ExtractionError: no candidate found, or the candidate is not valid JSON
    """
    candidate = find_json_candidate(text, shapes)
    if candidate is None:
        raise ExtractionError("Could not find JSON in model reply")

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Invalid JSON in model reply: {e}") from e

    if isinstance(data, dict):
        for key in wrapper_keys:
            if key in data:
                logger.debug("Unwrapping '%s' from model JSON object", key)
                return data[key]
    return data


def extract_string_list(text: str, wrapper_key: Optional[str] = None) -> List[str]:
    """
    Extract a JSON array of strings (optionally wrapped as ``{wrapper_key: [...]}``).

    Raises:
        ExtractionError: extraction failed or the payload is not a list of strings
    """
    data = extract_json(text, shapes=LIST_SHAPES, wrapper_keys=(wrapper_key,) if wrapper_key else ())
    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        raise ExtractionError("Model JSON is not a list of strings")
    return data


def extract_recipe(text: str) -> RecipeData:
    """
    Extract and validate a RecipeData object.

    Only fenced blocks and objects are considered, so an ingredient array
    inside an unfenced recipe is never mistaken for the payload.

    Raises:
        ExtractionError: extraction failed or the object does not match RecipeData
    """
    data = extract_json(text, shapes=RECIPE_SHAPES)
    if not isinstance(data, dict):
        raise ExtractionError("Model JSON is not an object")
    try:
        return RecipeData.model_validate(data)
    except ValidationError as e:
        raise ExtractionError(f"Model JSON does not match RecipeData: {e}") from e
