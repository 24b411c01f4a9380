from ingredex.classification.classifier import LLMClassifier
from ingredex.classification.service import ClassificationService
from ingredex.config.settings import Settings
from ingredex.llm.factory import LLMClientFactory


class ClassificationServiceFactory:
    """Creates the classification service wired to the configured provider."""

    @classmethod
    def create(cls, settings: Settings) -> ClassificationService:
        client = LLMClientFactory.create(settings)
        classifier = LLMClassifier(
            client=client,
            model="example" if LLMClientFactory.is_offline(settings) else settings.classification_model_name,
            temperature=LLMClientFactory.resolve_temperature(settings),
        )
        return ClassificationService(classifier)
