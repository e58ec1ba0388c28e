import json
import re
from typing import Any, Dict

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*")


def extract_json_from_response(text: str) -> str:
    """Isolate the JSON object in a model reply.

    Code fences are dropped, the text is cut to the first ``{`` .. last ``}``
    and then lines are kept until the running brace count returns to zero,
    which discards trailing prose after the object.
    """
    cleaned = _FENCE_RE.sub("", text or "")

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]

    json_lines = []
    depth = 0
    found_start = False
    for line in cleaned.split("\n"):
        if "{" in line:
            found_start = True
        if found_start:
            json_lines.append(line)
            depth += line.count("{") - line.count("}")
            if depth == 0:
                break

    return "\n".join(json_lines).strip()


def parse_json_response(text: str) -> Dict[str, Any]:
    """Parse a model reply into a dict; raises ValueError when it is not a JSON object."""
    parsed = json.loads(extract_json_from_response(text))
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object in model response")
    return parsed
