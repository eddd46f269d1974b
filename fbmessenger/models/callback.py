"""Incoming webhook (callback) models.

Every delivery is a ``Callback`` holding a batch of ``Entry`` objects, one per
page, each holding a batch of ``MessagingEvent`` objects. A single delivery
can therefore carry many events.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """Page-scoped user id or page id."""

    id: str


class Coordinates(BaseModel):
    lat: float
    long: float


class MediaPayload(BaseModel):
    """Payload of an image, video, audio or file attachment.

    Payload shapes without a url (fallback links, echoed templates) decode
    here too, with ``url`` unset.
    """

    url: Optional[str] = None


class LocationPayload(BaseModel):
    """Payload of a location attachment."""

    coordinates: Coordinates


class CallbackAttachment(BaseModel):
    """Attachment on a received message."""

    type: str
    payload: Optional[Union[LocationPayload, MediaPayload]] = None

    @property
    def url(self) -> str | None:
        if isinstance(self.payload, MediaPayload):
            return self.payload.url
        return None

    @property
    def coordinates(self) -> Coordinates | None:
        if isinstance(self.payload, LocationPayload):
            return self.payload.coordinates
        return None


class QuickReplyResponse(BaseModel):
    """Payload of the quick reply the user tapped."""

    payload: str


class CallbackMessage(BaseModel):
    """Message received from a user."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(alias="mid")
    sequence: Optional[int] = Field(default=None, alias="seq")
    text: Optional[str] = None
    attachments: Optional[list[CallbackAttachment]] = None
    quick_reply: Optional[QuickReplyResponse] = None


class Delivery(BaseModel):
    """Delivery confirmation for previously sent messages.

    Every message sent before ``watermark`` has been delivered.
    """

    model_config = ConfigDict(populate_by_name=True)

    message_ids: Optional[list[str]] = Field(default=None, alias="mids")
    watermark: int
    sequence: Optional[int] = Field(default=None, alias="seq")


class Postback(BaseModel):
    """Button tap on a postback button."""

    payload: str
    title: Optional[str] = None


class OptIn(BaseModel):
    """Authentication through the Send-to-Messenger plugin."""

    ref: str


class EventKind(str, Enum):
    """Variant of a messaging event, in dispatch precedence order."""

    MESSAGE = "message"
    DELIVERY = "delivery"
    POSTBACK = "postback"
    OPT_IN = "optin"


class MessagingEvent(BaseModel):
    """One interaction between a user and a page.

    The platform populates exactly one of ``message``, ``delivery``,
    ``postback`` or ``opt_in``. Fields missing from the payload stay ``None``.
    """

    model_config = ConfigDict(populate_by_name=True)

    sender: Principal
    recipient: Principal
    timestamp: Optional[int] = None
    message: Optional[CallbackMessage] = None
    delivery: Optional[Delivery] = None
    postback: Optional[Postback] = None
    opt_in: Optional[OptIn] = Field(default=None, alias="optin")

    @property
    def kind(self) -> EventKind | None:
        """The event variant, or None for event kinds this model doesn't know.

        Precedence is message, delivery, postback, optin; an event carrying
        more than one variant resolves to the first of these.
        """
        if self.message is not None:
            return EventKind.MESSAGE
        if self.delivery is not None:
            return EventKind.DELIVERY
        if self.postback is not None:
            return EventKind.POSTBACK
        if self.opt_in is not None:
            return EventKind.OPT_IN
        return None


class Entry(BaseModel):
    """Events for one page within a single delivery."""

    model_config = ConfigDict(populate_by_name=True)

    page_id: str = Field(alias="id")
    time: int
    messaging: list[MessagingEvent] = Field(default_factory=list)


class Callback(BaseModel):
    """Root of a webhook delivery."""

    model_config = ConfigDict(populate_by_name=True)

    object: str
    entries: list[Entry] = Field(alias="entry")

    def events(self) -> list[MessagingEvent]:
        """All messaging events in entry order, then event order."""
        return [event for entry in self.entries for event in entry.messaging]
