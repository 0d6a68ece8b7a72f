"""
Exceptions raised by the out-of-scope aware intent classifier.
"""
from typing import Optional


class OOSIntentError(Exception):
    """Base class for every error raised by this package."""


class UntrainedClassifierError(OOSIntentError):
    """
    Raised when ``predict`` or ``serialize`` is called on a classifier that
    was neither trained nor loaded.

    :param component: Name of the classifier that was misused.
    :type component: str
    :param action: The operation that was attempted.
    :type action: str
    """
    def __init__(self, component: str, action: str = "predict"):
        self.component = component
        self.action = action
        super().__init__(f"{component} must be trained before calling {action}.")


class ModelLoadingError(OOSIntentError):
    """
    Raised when persisted model data is malformed or incompatible.

    :param component: Name of the classifier that owns the persisted data.
    :type component: str
    :param cause: The underlying decoding or validation error.
    :type cause: Exception, optional
    """
    def __init__(self, component: str, cause: Optional[Exception] = None):
        self.component = component
        self.cause = cause
        detail = _describe(cause) if cause is not None else "unknown error"
        super().__init__(f"{component} could not load model: {detail}")


class TrainingDataError(OOSIntentError):
    """Raised when training data cannot be used as given."""


def _describe(cause: Exception) -> str:
    # pydantic ValidationError exposes a structured list; report the first violation only
    errors = getattr(cause, "errors", None)
    if callable(errors):
        try:
            first = errors()[0]
        except (IndexError, TypeError):
            return str(cause)
        location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        return f"{location}: {first.get('msg', '')}"
    return str(cause)
