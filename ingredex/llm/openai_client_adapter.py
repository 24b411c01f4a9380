import base64

import httpx
import openai

from ingredex.llm.client_base import BaseLLMClient
from ingredex.llm.exceptions import LLMError, LLMNetworkError


class OpenAIClientAdapter(BaseLLMClient):
    """AI client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": self._user_content(user_prompt, image_png)},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LLMNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise LLMNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise LLMError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise LLMError("AI returned empty response")
        return content

    @staticmethod
    def _user_content(user_prompt: str, image_png: bytes | None) -> str | list[dict[str, object]]:
        if image_png is None:
            return user_prompt
        encoded = base64.b64encode(image_png).decode("ascii")
        return [
            {"type": "text", "text": user_prompt},
            {"type": "image_url", "image_url": {"url": f"data:image/png;base64,{encoded}"}},
        ]
