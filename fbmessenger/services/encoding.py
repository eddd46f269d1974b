"""Choose the wire encoding for a Send API request.

Requests whose attachment carries raw bytes go out as multipart form data;
everything else is a single JSON document with exactly the shape of the
``SendRequest`` model.
"""

from typing import Any, Literal, Optional

import logfire
from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticSerializationError

from fbmessenger.constants import UPLOAD_FILE_FIELD, UPLOAD_FILENAME_SEPARATOR
from fbmessenger.errors import EncodingError
from fbmessenger.models.send_api import SendRequest


class UploadedFile(BaseModel):
    """The binary ``filedata`` part of a multipart request."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes
    content_type: str


class EncodedBody(BaseModel):
    """Wire body for one send, ready to hand to ``httpx``."""

    model_config = ConfigDict(frozen=True)

    encoding: Literal["json", "multipart"]
    content: Optional[bytes] = None
    form_fields: dict[str, str] = {}
    filedata: Optional[UploadedFile] = None

    @property
    def is_multipart(self) -> bool:
        return self.encoding == "multipart"

    def request_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.post``."""
        if self.encoding == "json":
            return {
                "content": self.content,
                "headers": {"Content-Type": "application/json"},
            }
        files = {
            UPLOAD_FILE_FIELD: (
                self.filedata.filename,
                self.filedata.content,
                self.filedata.content_type,
            )
        }
        return {"data": dict(self.form_fields), "files": files}


def upload_filename(content_type: str) -> str:
    """Derive a file name from a content type ("image/png" -> "image.png")."""
    return content_type.replace("/", UPLOAD_FILENAME_SEPARATOR)


def encode_send_request(request: SendRequest) -> EncodedBody:
    """Encode a send request as JSON or, for uploads, as multipart form data.

    Raises:
        EncodingError: the request has no recipient or cannot be serialized.
            Nothing has been sent when this is raised.
    """
    if request.recipient is None:
        raise EncodingError(
            "send request has no recipient; call to() or to_phone_number() first"
        )

    try:
        upload = request.message.upload
        if upload is None:
            return EncodedBody(
                encoding="json",
                content=request.model_dump_json(
                    by_alias=True, exclude_none=True
                ).encode("utf-8"),
            )

        form_fields = {
            "recipient": request.recipient.model_dump_json(exclude_none=True),
            "message": request.message.model_dump_json(
                by_alias=True, exclude_none=True
            ),
        }
        if request.notification_type is not None:
            form_fields["notification_type"] = request.notification_type.value

        return EncodedBody(
            encoding="multipart",
            form_fields=form_fields,
            filedata=UploadedFile(
                filename=upload_filename(upload.content_type),
                content=upload.data,
                content_type=upload.content_type,
            ),
        )
    except (PydanticSerializationError, ValueError) as e:
        logfire.error(
            "Failed to encode send request",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise EncodingError(f"could not encode send request: {e}") from e
