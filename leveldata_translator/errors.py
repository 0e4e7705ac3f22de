from typing import Any


class TranslatorError(Exception):
    pass


class StructuralError(TranslatorError):
    """The document cannot be translated at all."""

    def __init__(self, source: str, error_message: str):
        self.source = source
        self.error_message = error_message
        super().__init__(f"Invalid level data {source}. Error: {error_message}")


class EntityError(TranslatorError):
    """A single entity failed; the rest of the document is unaffected."""

    def __init__(self, entity: Any, error_message: str):
        self.entity = entity
        self.error_message = error_message
        super().__init__(error_message)


class MalformedEntityError(EntityError):
    pass


class EntityReferenceError(EntityError):
    pass


class InvalidTempoError(EntityError):
    pass


class ConfigError(TranslatorError):
    pass
