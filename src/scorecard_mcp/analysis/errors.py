"""Errors raised by the analysis pipeline."""


class PayloadError(Exception):
    """Base class for provider payloads the pipeline cannot turn into a record."""

    pass


class PayloadParseError(PayloadError):
    """Raised when the provider text cannot be parsed as a JSON object."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class PayloadShapeError(PayloadError):
    """Raised when a parsed payload lacks a field required for scoring."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field
