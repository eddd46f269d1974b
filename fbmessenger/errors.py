"""Exceptions raised by the Messenger client and dispatcher.

Platform errors (a well-formed response whose ``error`` field is populated)
are deliberately absent: they are returned as data on ``SendResponse``.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fbmessenger.models.callback import MessagingEvent


class MessengerError(Exception):
    """Base class for all library errors."""


class EncodingError(MessengerError):
    """A send request could not be turned into a wire body.

    Raised before any network activity.
    """


class TransportError(MessengerError):
    """The request did not complete or its response could not be read."""


class RequestTimeoutError(TransportError):
    """The request exceeded its timeout."""


class ResponseDecodeError(TransportError):
    """The response body was not a decodable JSON document."""

    def __init__(self, message: str, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class HandlerError(MessengerError):
    """A callback handler failed while dispatching under the RAISE policy."""

    def __init__(self, message: str, event: "MessagingEvent"):
        super().__init__(message)
        self.event = event
