"""Example AI client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseLLMClient and register the provider in LLMClientFactory.
"""

import json
from typing import ClassVar

from ingredex.llm.client_base import BaseLLMClient


class ExampleClientAdapter(BaseLLMClient):
    """Example adapter that returns a fixed JSON document.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "products": [],
        "ingredients": [],
    }

    def __init__(self, response: dict[str, object] | None = None) -> None:
        self._response = self.DEFAULT_RESPONSE if response is None else response

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        schema_name: str = "result",
        image_png: bytes | None = None,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema, schema_name, image_png
        return json.dumps(self._response)
