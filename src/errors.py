import logging
from enum import Enum
from typing import Optional


class DecoratorError(Exception):
    """
    Base class for errors raised while decorating a pull request.
    """


class ConfigurationError(DecoratorError):
    """
    The configuration is missing a required value.
    Raised before any request is sent.
    """


class TransportError(DecoratorError):
    """
    A request failed or the server answered with an unexpected status.
    """

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResponseShapeError(TransportError):
    """
    The response body could not be parsed into the expected model.
    Handled the same way as a `TransportError` at every call site.
    """


class AnalysisResultsError(DecoratorError):
    """
    The analysis results file is missing or does not have the expected shape.
    """


class DecorationError(DecoratorError):
    """
    A fatal error for a decoration run.
    Side effects applied before the failure are not rolled back.
    """


class ErrorPolicy(Enum):
    """
    How a call site treats a `TransportError`.
    """

    PROPAGATE = "propagate"
    """
    Abort the run. Used for fetching and posting.
    """

    ISOLATE = "isolate"
    """
    Log the error and continue with the next item. Only used for deleting old comments.
    """

    def handle(self, error: Exception, logger: logging.Logger, message: str, *args) -> None:
        """
        Raise `error` for `PROPAGATE`, otherwise log it with `message`.
        """
        if self is ErrorPolicy.PROPAGATE:
            raise error
        logger.error(message, *args, exc_info=error)
