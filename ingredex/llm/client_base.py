from abc import ABC, abstractmethod


class BaseLLMClient(ABC):
    """One chat-completion provider, shared by the classifier and AI structuring."""

    @abstractmethod
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
        """Ask for a JSON answer shaped by ``json_schema``.

        Args:
            image_png: The preprocessed label image, sent alongside the OCR
                text so the model can correct misread ingredient names.

        Returns:
            The raw reply text; callers parse and validate it.

        Raises:
            LLMNetworkError: if the provider cannot be reached.
            LLMError: if the provider answered with nothing usable.
        """
