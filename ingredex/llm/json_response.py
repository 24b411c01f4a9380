import json

from ingredex.llm.exceptions import LLMError


def parse_json_object(raw: str) -> dict[str, object]:
    """Parse a model reply as a JSON object, tolerating markdown code fences."""
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LLMError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise LLMError("JSON response must be an object")
    return parsed
