"""AI-assisted structured extraction of products from free text."""

import json
from pathlib import Path

from ingredex.llm.client_base import BaseLLMClient
from ingredex.llm.exceptions import LLMError
from ingredex.llm.json_response import parse_json_object
from ingredex.llm.prompt_loader import load_json_schema, load_prompt_template
from ingredex.logging.logger import Log
from ingredex.segmentation.models import ProductBlock
from ingredex.structuring.exceptions import StructuringError
from ingredex.structuring.validator import validate_and_build

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

MAX_INPUT_CHARS = 8000
SYSTEM_PROMPT = (
    "You are a precise data extraction specialist. Extract each distinct product "
    "and its specific ingredients. Never mix data from different products."
)


class LLMStructurer:
    """Asks an AI provider to split extracted text into products."""

    def __init__(
        self,
        *,
        client: BaseLLMClient,
        model: str,
        temperature: float = 0.1,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        try:
            self._prompt_template = load_prompt_template(
                prompt_template_path or _DEFAULT_PROMPT_DIR / "structuring_prompt.txt"
            )
            self._json_schema = load_json_schema(
                json_schema_path or _DEFAULT_PROMPT_DIR / "structuring_schema.json"
            )
        except LLMError as exc:
            raise StructuringError(str(exc)) from exc
        self._json_schema_dict = json.loads(self._json_schema)

    def structure(self, text: str, image_png: bytes | None = None) -> list[ProductBlock]:
        """Return the products the model found, in document order.

        Raises:
            StructuringError: on provider failure or an unusable reply.
        """
        prompt = self._build_prompt(text)
        Log.debug(f"Structuring prompt:\n{prompt}")
        try:
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=SYSTEM_PROMPT,
                user_prompt=prompt,
                json_schema=self._json_schema_dict,
                schema_name="structured_products",
                image_png=image_png,
            )
            Log.debug(f"AI raw response:\n{raw_response}")
            parsed = parse_json_object(raw_response)
        except LLMError as exc:
            raise StructuringError(f"AI structuring failed: {exc}") from exc

        blocks = validate_and_build(parsed)
        Log.info(f"AI structuring complete: {len(blocks)} products")
        return blocks

    def _build_prompt(self, text: str) -> str:
        document_text = text[:MAX_INPUT_CHARS]
        if len(text) > MAX_INPUT_CHARS:
            document_text += " ...[truncated]"
        return self._prompt_template.format(
            document_text=document_text,
            json_schema=self._json_schema,
        )
