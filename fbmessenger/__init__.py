"""Client library for the Facebook Messenger Platform.

Build and send messages with ``MessengerClient``; route webhook callbacks
with ``CallbackDispatcher``.
"""

from fbmessenger.errors import (
    EncodingError,
    HandlerError,
    MessengerError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
)
from fbmessenger.models.callback import Callback, EventKind, MessagingEvent
from fbmessenger.models.send_api import (
    NotificationType,
    SendRequest,
    SendResponse,
    audio_message,
    audio_saved_message,
    audio_upload_message,
    button_template_message,
    call_button,
    file_message,
    file_saved_message,
    file_upload_message,
    generic_template_message,
    image_message,
    image_saved_message,
    image_upload_message,
    location_quick_reply,
    postback_button,
    receipt_template_message,
    text_message,
    text_quick_reply,
    url_button,
    video_message,
    video_saved_message,
    video_upload_message,
)
from fbmessenger.models.user_models import UserProfile
from fbmessenger.services.client import MessengerClient
from fbmessenger.services.dispatcher import (
    CallbackDispatcher,
    DispatchResult,
    HandlerErrorPolicy,
)
from fbmessenger.services.encoding import EncodedBody, encode_send_request

__all__ = [
    "Callback",
    "CallbackDispatcher",
    "DispatchResult",
    "EncodedBody",
    "EncodingError",
    "EventKind",
    "HandlerError",
    "HandlerErrorPolicy",
    "MessagingEvent",
    "MessengerClient",
    "MessengerError",
    "NotificationType",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "SendRequest",
    "SendResponse",
    "TransportError",
    "UserProfile",
    "audio_message",
    "audio_saved_message",
    "audio_upload_message",
    "button_template_message",
    "call_button",
    "encode_send_request",
    "file_message",
    "file_saved_message",
    "file_upload_message",
    "generic_template_message",
    "image_message",
    "image_saved_message",
    "image_upload_message",
    "location_quick_reply",
    "postback_button",
    "receipt_template_message",
    "text_message",
    "text_quick_reply",
    "url_button",
    "video_message",
    "video_saved_message",
    "video_upload_message",
]
