"""Error types shared by the store, codec, bulk apply and translator."""


class InvalidArgument(ValueError):
    """Raised when an input has the wrong type or shape."""


class UnknownLanguage(ValueError):
    """Raised when an operation targets a language that is not loaded."""

    def __init__(self, language: str):
        super().__init__(f"language '{language}' is not loaded")
        self.language = language


class UnknownKey(ValueError):
    """Raised by direct key lookups for a key the language does not define."""

    def __init__(self, language: str, key: str):
        super().__init__(f"language '{language}' has no key '{key}'")
        self.language = language
        self.key = key


class DecodeFailure(ValueError):
    """Raised when an ingestion payload cannot be parsed into a key/value table."""


class EncodeFailure(ValueError):
    """Raised when a language cannot be rendered to JSON text."""


class ApplyFailure(ValueError):
    """Raised when bulk apply aborts because an applier reported failure."""
