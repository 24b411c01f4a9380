"""Ingredient classifier backed by an external AI provider."""

import json
from pathlib import Path

from ingredex.classification.base import BaseClassifier
from ingredex.classification.exceptions import ClassificationError
from ingredex.classification.models import ClassificationRequest, ClassificationResult
from ingredex.classification.validator import validate_and_build
from ingredex.llm.client_base import BaseLLMClient
from ingredex.llm.exceptions import LLMError
from ingredex.llm.json_response import parse_json_object
from ingredex.llm.prompt_loader import load_json_schema, load_prompt_template
from ingredex.logging.logger import Log

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

SYSTEM_PROMPT = (
    "You are an ingredient compliance reviewer. Classify each ingredient as "
    "APPROVED (clearly permissible), PROHIBITED (explicitly forbidden), "
    "QUESTIONABLE (uncertain or debated) or VERIFY_SOURCE (depends on the "
    "supplier's source, e.g. animal-derived additives, enzymes, emulsifiers)."
)


class LLMClassifier(BaseClassifier):
    """Sends numbered ingredient lists to an AI provider for verdicts."""

    def __init__(
        self,
        *,
        client: BaseLLMClient,
        model: str,
        temperature: float = 0.1,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        try:
            self._prompt_template = load_prompt_template(
                prompt_template_path or _DEFAULT_PROMPT_DIR / "classification_prompt.txt"
            )
            self._json_schema = load_json_schema(
                json_schema_path or _DEFAULT_PROMPT_DIR / "classification_schema.json"
            )
        except LLMError as exc:
            raise ClassificationError(str(exc)) from exc
        self._json_schema_dict = json.loads(self._json_schema)

    def classify(self, request: ClassificationRequest) -> ClassificationResult:
        prompt = self._build_prompt(request)
        Log.debug(f"Classification prompt:\n{prompt}")
        try:
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                json_schema=self._json_schema_dict,
                schema_name="ingredient_verdicts",
            )
            Log.debug(f"AI raw response:\n{raw_response}")
            parsed = parse_json_object(raw_response)
        except LLMError as exc:
            raise ClassificationError(f"AI classification failed: {exc}") from exc

        verdicts = validate_and_build(parsed)
        return ClassificationResult(
            product_name=request.product_name,
            ingredients=verdicts,
            expected_count=len(request.ingredients),
        )

    def _build_prompt(self, request: ClassificationRequest) -> str:
        numbered = "\n".join(
            f"{position}. {name}" for position, name in enumerate(request.ingredients, start=1)
        )
        return self._prompt_template.format(
            product_name=request.product_name,
            ingredient_count=len(request.ingredients),
            numbered_ingredients=numbered,
            json_schema=self._json_schema,
        )
