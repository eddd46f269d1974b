"""Send API models: outbound requests, attachments and responses.

Attachments form a closed set of variants. ``MediaAttachment`` carries a
resource by URL, by upload or by saved asset id; ``TemplateAttachment``
carries one of the button, generic or receipt templates, discriminated on
``template_type``.

Requests are built with the construction helpers at the bottom of this module
and finished with the chained modifiers on ``SendRequest``:

    >>> request = text_message("Hello, world!").to("USER_ID").no_push()
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NotificationType(str, Enum):
    """Push notification behaviour for a sent message."""

    REGULAR = "REGULAR"
    SILENT_PUSH = "SILENT_PUSH"
    NO_PUSH = "NO_PUSH"


class Recipient(BaseModel):
    """Outbound addressing: a page-scoped user id or a phone number."""

    id: Optional[str] = None
    phone_number: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_address(self) -> "Recipient":
        if (self.id is None) == (self.phone_number is None):
            raise ValueError("recipient needs exactly one of id or phone_number")
        return self


# =============================================================================
# Resource payloads (image / video / audio / file)
# =============================================================================


class UrlPayload(BaseModel):
    """Resource fetched by the platform from a URL."""

    url: str
    is_reusable: Optional[bool] = None


class UploadPayload(BaseModel):
    """Resource uploaded with the request.

    ``data`` and ``content_type`` never appear in the JSON form of the
    message; they travel in the multipart ``filedata`` part.
    """

    data: bytes = Field(exclude=True, repr=False)
    content_type: str = Field(exclude=True)
    is_reusable: Optional[bool] = None


class SavedAssetPayload(BaseModel):
    """Resource previously uploaded and saved with ``is_reusable``."""

    attachment_id: str


ResourcePayload = Union[UrlPayload, UploadPayload, SavedAssetPayload]


# =============================================================================
# Templates
# =============================================================================


class Button(BaseModel):
    """Template button."""

    type: Literal["web_url", "postback", "phone_number"]
    title: str
    url: Optional[str] = None
    payload: Optional[str] = None


class ButtonTemplatePayload(BaseModel):
    template_type: Literal["button"] = "button"
    text: str
    buttons: list[Button]


class GenericElement(BaseModel):
    """One bubble of a generic (carousel) template."""

    title: str
    subtitle: Optional[str] = None
    item_url: Optional[str] = None
    image_url: Optional[str] = None
    buttons: Optional[list[Button]] = None


class GenericTemplatePayload(BaseModel):
    template_type: Literal["generic"] = "generic"
    elements: list[GenericElement]


class ReceiptElement(BaseModel):
    title: str
    subtitle: Optional[str] = None
    quantity: Optional[int] = None
    price: float
    currency: Optional[str] = None
    image_url: Optional[str] = None


class Address(BaseModel):
    street_1: str
    street_2: Optional[str] = None
    city: str
    postal_code: str
    state: str
    country: str


class Summary(BaseModel):
    subtotal: Optional[float] = None
    shipping_cost: Optional[float] = None
    total_tax: Optional[float] = None
    total_cost: float


class Adjustment(BaseModel):
    name: str
    amount: float


class ReceiptTemplatePayload(BaseModel):
    """Order confirmation receipt.

    Prices and quantities are passed through as given; the platform is the
    judge of business-level validity.
    """

    template_type: Literal["receipt"] = "receipt"
    recipient_name: str
    order_number: str
    currency: str
    payment_method: str
    merchant_name: Optional[str] = None
    order_url: Optional[str] = None
    timestamp: Optional[str] = None
    elements: Optional[list[ReceiptElement]] = None
    address: Optional[Address] = None
    summary: Summary
    adjustments: Optional[list[Adjustment]] = None


TemplatePayload = Annotated[
    Union[ButtonTemplatePayload, GenericTemplatePayload, ReceiptTemplatePayload],
    Field(discriminator="template_type"),
]


# =============================================================================
# Attachments
# =============================================================================


class MediaAttachment(BaseModel):
    type: Literal["image", "video", "audio", "file"]
    payload: ResourcePayload


class TemplateAttachment(BaseModel):
    type: Literal["template"] = "template"
    payload: TemplatePayload


Attachment = Annotated[
    Union[MediaAttachment, TemplateAttachment],
    Field(discriminator="type"),
]


class QuickReply(BaseModel):
    """Quick reply button shown above the composer."""

    content_type: Literal["text", "location"] = "text"
    title: Optional[str] = None
    payload: Optional[str] = None
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def _text_needs_title_and_payload(self) -> "QuickReply":
        if self.content_type == "text" and (self.title is None or self.payload is None):
            raise ValueError("text quick replies need a title and a payload")
        return self


class Message(BaseModel):
    """Outbound message: text or one attachment, optionally with quick replies."""

    text: Optional[str] = None
    attachment: Optional[Attachment] = None
    quick_replies: Optional[list[QuickReply]] = None

    @model_validator(mode="after")
    def _exactly_one_body(self) -> "Message":
        if (self.text is None) == (self.attachment is None):
            raise ValueError("message needs exactly one of text or attachment")
        return self

    @property
    def upload(self) -> UploadPayload | None:
        """The upload payload, when the attachment carries raw bytes."""
        if self.attachment is not None and isinstance(self.attachment.payload, UploadPayload):
            return self.attachment.payload
        return None


class SendRequest(BaseModel):
    """A Send API request.

    The modifiers below return an updated copy and leave the request they are
    called on untouched, so each call consumes the previous value:

        >>> base = text_message("Hi")
        >>> request = base.to("USER_ID").silent_push()
        >>> base.recipient is None
        True
    """

    recipient: Optional[Recipient] = None
    message: Message
    notification_type: Optional[NotificationType] = None

    def to(self, user_id: str) -> "SendRequest":
        """Address the request to a page-scoped user id.

        Replaces any phone number set earlier.
        """
        return self.model_copy(update={"recipient": Recipient(id=user_id)})

    def to_phone_number(self, phone_number: str) -> "SendRequest":
        """Address the request to a phone number.

        Replaces any user id set earlier.
        """
        return self.model_copy(
            update={"recipient": Recipient(phone_number=phone_number)}
        )

    def with_notification_type(
        self, notification_type: NotificationType | str
    ) -> "SendRequest":
        return self.model_copy(
            update={"notification_type": NotificationType(notification_type)}
        )

    def regular(self) -> "SendRequest":
        return self.with_notification_type(NotificationType.REGULAR)

    def silent_push(self) -> "SendRequest":
        return self.with_notification_type(NotificationType.SILENT_PUSH)

    def no_push(self) -> "SendRequest":
        return self.with_notification_type(NotificationType.NO_PUSH)

    def with_quick_replies(self, *quick_replies: QuickReply) -> "SendRequest":
        """Replace the quick replies of the message.

        Calling it again discards the previous list; calling it with no
        arguments removes quick replies altogether.
        """
        message = self.message.model_copy(
            update={"quick_replies": list(quick_replies) or None}
        )
        return self.model_copy(update={"message": message})


class SendError(BaseModel):
    """Error reported by the platform inside the response body."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    type: str
    code: int
    error_data: str
    trace_id: str = Field(alias="fbtrace_id")


class SendResponse(BaseModel):
    """Send API response.

    A 200 response may still carry ``error``; check it before trusting
    ``message_id``.
    """

    recipient_id: Optional[str] = None
    message_id: Optional[str] = None
    attachment_id: Optional[str] = None
    error: Optional[SendError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Construction helpers
# =============================================================================

MediaType = Literal["image", "video", "audio", "file"]


def _reusable(reusable: bool) -> bool | None:
    return True if reusable else None


def _media_message(media_type: MediaType, payload: ResourcePayload) -> SendRequest:
    attachment = MediaAttachment(type=media_type, payload=payload)
    return SendRequest(message=Message(attachment=attachment))


def _template_message(payload: BaseModel) -> SendRequest:
    return SendRequest(message=Message(attachment=TemplateAttachment(payload=payload)))


def text_message(text: str) -> SendRequest:
    return SendRequest(message=Message(text=text))


def media_message(media_type: MediaType, url: str, *, reusable: bool = False) -> SendRequest:
    """Attachment fetched by the platform from ``url``."""
    return _media_message(media_type, UrlPayload(url=url, is_reusable=_reusable(reusable)))


def media_upload_message(
    media_type: MediaType,
    data: bytes,
    content_type: str,
    *,
    reusable: bool = False,
) -> SendRequest:
    """Attachment uploaded with the request as multipart form data."""
    payload = UploadPayload(
        data=data, content_type=content_type, is_reusable=_reusable(reusable)
    )
    return _media_message(media_type, payload)


def media_saved_message(media_type: MediaType, attachment_id: str) -> SendRequest:
    """Attachment previously saved on the platform."""
    return _media_message(media_type, SavedAssetPayload(attachment_id=attachment_id))


def image_message(url: str, *, reusable: bool = False) -> SendRequest:
    return media_message("image", url, reusable=reusable)


def video_message(url: str, *, reusable: bool = False) -> SendRequest:
    return media_message("video", url, reusable=reusable)


def audio_message(url: str, *, reusable: bool = False) -> SendRequest:
    return media_message("audio", url, reusable=reusable)


def file_message(url: str, *, reusable: bool = False) -> SendRequest:
    return media_message("file", url, reusable=reusable)


def image_upload_message(
    data: bytes, content_type: str, *, reusable: bool = False
) -> SendRequest:
    return media_upload_message("image", data, content_type, reusable=reusable)


def video_upload_message(
    data: bytes, content_type: str, *, reusable: bool = False
) -> SendRequest:
    return media_upload_message("video", data, content_type, reusable=reusable)


def audio_upload_message(
    data: bytes, content_type: str, *, reusable: bool = False
) -> SendRequest:
    return media_upload_message("audio", data, content_type, reusable=reusable)


def file_upload_message(
    data: bytes, content_type: str, *, reusable: bool = False
) -> SendRequest:
    return media_upload_message("file", data, content_type, reusable=reusable)


def image_saved_message(attachment_id: str) -> SendRequest:
    return media_saved_message("image", attachment_id)


def video_saved_message(attachment_id: str) -> SendRequest:
    return media_saved_message("video", attachment_id)


def audio_saved_message(attachment_id: str) -> SendRequest:
    return media_saved_message("audio", attachment_id)


def file_saved_message(attachment_id: str) -> SendRequest:
    return media_saved_message("file", attachment_id)


def button_template_message(text: str, *buttons: Button) -> SendRequest:
    return _template_message(ButtonTemplatePayload(text=text, buttons=list(buttons)))


def generic_template_message(*elements: GenericElement) -> SendRequest:
    return _template_message(GenericTemplatePayload(elements=list(elements)))


def receipt_template_message(receipt: ReceiptTemplatePayload) -> SendRequest:
    return _template_message(receipt)


def url_button(title: str, url: str) -> Button:
    return Button(type="web_url", title=title, url=url)


def postback_button(title: str, payload: str) -> Button:
    return Button(type="postback", title=title, payload=payload)


def call_button(title: str, phone_number: str) -> Button:
    return Button(type="phone_number", title=title, payload=phone_number)


def text_quick_reply(
    title: str, payload: str, image_url: str | None = None
) -> QuickReply:
    return QuickReply(
        content_type="text", title=title, payload=payload, image_url=image_url
    )


def location_quick_reply() -> QuickReply:
    return QuickReply(content_type="location")
