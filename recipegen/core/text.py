import json
import re
from typing import Any, Optional

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def clean_md(text: str) -> str:
    """
    Sanitize markdown artifacts from model output.
    Removes bold markers, leading headers and leading bullets.
    """
    if not text:
        return ""

    text = re.sub(r"(\*\*|__)(.*?)\1", r"\2", text)
    text = re.sub(r"^\s*#+\s+", "", text)
    text = re.sub(r"^\s*[-*]\s+", "", text)
    # numbered steps ("1. Heat oil") are renumbered by clients
    text = re.sub(r"^\s*\d+[.)]\s+", "", text)

    return text.strip()


def extract_json_object(text: Optional[str]) -> Any:
    """
    Parse the outermost {...} block of a model response.
    Handles code fences and chatty prefixes. Raises ValueError when nothing parses.
    """
    if not text:
        raise ValueError("empty response")

    match = _JSON_OBJECT.search(text)
    candidate = match.group(0) if match else text
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ValueError(f"response is not valid JSON: {e}") from e
