"""
Exceptions raised by the classification pipeline.

Every failure is terminal for the request that triggered it: nothing is
retried and no partial predictions are returned. Lower layers raise the typed
errors below, the pipeline attaches request context to ``details``, and the
API layer turns them into error responses.
"""

from typing import Any


class ClassifierError(Exception):
    """
    Base exception for all classifier errors.
    
    Catch this to handle any pipeline failure with a single except clause.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ResourceError(ClassifierError):
    """
    Raised when a JSON resource or model file is missing or unreadable.
    """
    
    def __init__(self, message: str, path: str | None = None, reason: str | None = None):
        details: dict[str, Any] = {}
        if path:
            details["path"] = path
        if reason:
            details["reason"] = reason
        super().__init__(message, details)


class ParseError(ClassifierError):
    """
    Raised when a resource is not valid JSON or has the wrong shape.
    
    The vocabulary must be a flat object of word -> integer id and the
    label map a flat object of class index -> label string.
    """
    
    def __init__(
        self,
        message: str,
        source: str | None = None,
        parse_errors: list[str] | None = None,
    ):
        details: dict[str, Any] = {}
        if source:
            details["source"] = source
        if parse_errors:
            details["parse_errors"] = parse_errors[:10]
        super().__init__(message, details)


class ModelLoadError(ClassifierError):
    """
    Raised when the inference engine cannot be initialized.
    
    Covers missing model artifacts or metadata files at startup and
    sessions the engine refuses to create (corrupt or unsupported model).
    """
    pass


class InferenceError(ClassifierError):
    """
    Raised when a model run does not yield a usable score buffer.
    
    Examples:
    - Configured output tensor absent from the run result
    - Output is not a byte-addressable buffer
    - Engine failure during the run
    - Score buffer shorter than the label count (strict mode only)
    """
    pass
