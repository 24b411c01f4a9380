from pathlib import Path

from ingredex.llm.exceptions import LLMError


def load_prompt_template(path: Path) -> str:
    """Load a prompt template from a file.

    Args:
        path: Path to the prompt template file.

    Returns:
        The raw template string with placeholders.

    Raises:
        LLMError: if the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LLMError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path) -> str:
    """Load a JSON schema from a file.

    Raises:
        LLMError: if the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LLMError(f"Failed to load JSON schema: {exc}") from exc
