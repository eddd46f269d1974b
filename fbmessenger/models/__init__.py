"""Messenger Platform data model."""

from fbmessenger.models.callback import (
    Callback,
    CallbackAttachment,
    CallbackMessage,
    Coordinates,
    Delivery,
    Entry,
    EventKind,
    LocationPayload,
    MediaPayload,
    MessagingEvent,
    OptIn,
    Postback,
    Principal,
    QuickReplyResponse,
)
from fbmessenger.models.send_api import (
    Address,
    Adjustment,
    Button,
    ButtonTemplatePayload,
    GenericElement,
    GenericTemplatePayload,
    MediaAttachment,
    Message,
    NotificationType,
    QuickReply,
    ReceiptElement,
    ReceiptTemplatePayload,
    Recipient,
    SavedAssetPayload,
    SendError,
    SendRequest,
    SendResponse,
    Summary,
    TemplateAttachment,
    UploadPayload,
    UrlPayload,
)
from fbmessenger.models.user_models import UserProfile

__all__ = [
    "Address",
    "Adjustment",
    "Button",
    "ButtonTemplatePayload",
    "Callback",
    "CallbackAttachment",
    "CallbackMessage",
    "Coordinates",
    "Delivery",
    "Entry",
    "EventKind",
    "GenericElement",
    "GenericTemplatePayload",
    "LocationPayload",
    "MediaAttachment",
    "MediaPayload",
    "Message",
    "MessagingEvent",
    "NotificationType",
    "OptIn",
    "Postback",
    "Principal",
    "QuickReply",
    "QuickReplyResponse",
    "ReceiptElement",
    "ReceiptTemplatePayload",
    "Recipient",
    "SavedAssetPayload",
    "SendError",
    "SendRequest",
    "SendResponse",
    "Summary",
    "TemplateAttachment",
    "UploadPayload",
    "UrlPayload",
    "UserProfile",
]
