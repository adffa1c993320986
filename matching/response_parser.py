import json
from typing import Any

from models.errors import CompletionParseError


def extract_json_object(text: str | None) -> dict[str, Any]:
    """
    Extract the single JSON object embedded in a model completion.

    Models wrap the object in prose or code fences, so everything from the
    first "{" to the last "}" is parsed.

    Raises:
        CompletionParseError: If there is no brace-delimited span, it is not
            valid JSON, or it decodes to something other than an object.
    """
    if not text:
        raise CompletionParseError("Completion is empty")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise CompletionParseError("Completion contains no JSON object")

    try:
        payload = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise CompletionParseError(f"Completion JSON is invalid: {e.msg}") from e

    if not isinstance(payload, dict):
        raise CompletionParseError("Completion JSON is not an object")
    return payload
