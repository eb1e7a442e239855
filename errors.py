class NameServiceError(Exception):
    """Base class for every failure raised by the name service client."""


class ValidationError(NameServiceError):
    """Bad name, amount or auction id. Raised before any hashing or network call."""


class DecodeError(NameServiceError):
    """The evaluator returned an SE tree we cannot decode (e.g. tuple key `_x`)."""


class EvaluationError(NameServiceError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class SchemaMismatchError(NameServiceError):
    """Decoded value does not have the shape the operation expects."""
