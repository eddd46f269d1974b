"""Tests for choosing and producing the Send API wire body."""

import json

import httpx
import pytest
from hypothesis import given, strategies as st

from fbmessenger.errors import EncodingError
from fbmessenger.models.send_api import (
    button_template_message,
    image_message,
    image_saved_message,
    image_upload_message,
    file_upload_message,
    postback_button,
    text_message,
    text_quick_reply,
)
from fbmessenger.services.encoding import encode_send_request, upload_filename

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def wire_body(encoded) -> httpx.Request:
    """Build the actual httpx request the client would send."""
    request = httpx.Request(
        "POST", "https://graph.facebook.com/v18.0/me/messages", **encoded.request_kwargs()
    )
    request.read()
    return request


class TestJsonEncoding:
    """Requests without uploaded bytes go out as one JSON document."""

    def test_text_message(self):
        encoded = encode_send_request(text_message("Hello, world!").to("USER_ID"))

        assert encoded.encoding == "json"
        assert not encoded.is_multipart
        assert encoded.content == (
            b'{"recipient":{"id":"USER_ID"},"message":{"text":"Hello, world!"}}'
        )

    def test_json_headers(self):
        request = wire_body(encode_send_request(text_message("Hi").to("USER_ID")))

        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "recipient": {"id": "USER_ID"},
            "message": {"text": "Hi"},
        }

    @pytest.mark.parametrize(
        "request_",
        [
            image_message("IMAGE_URL").to("USER_ID"),
            image_saved_message("1857777774821032").to("USER_ID").no_push(),
            button_template_message("Next?", postback_button("Go", "GO")).to_phone_number(
                "+15555550100"
            ),
            text_message("Hi").to("USER_ID").with_quick_replies(text_quick_reply("A", "A")),
        ],
    )
    def test_matches_direct_serialization(self, request_):
        encoded = encode_send_request(request_)

        assert encoded.encoding == "json"
        assert json.loads(encoded.content) == json.loads(
            request_.model_dump_json(by_alias=True, exclude_none=True)
        )

    @given(
        text=st.text(min_size=1, max_size=500),
        user_id=st.text(min_size=1, max_size=50),
        notification=st.sampled_from([None, "REGULAR", "SILENT_PUSH", "NO_PUSH"]),
    )
    def test_json_shape_properties(self, text: str, user_id: str, notification):
        """Property: JSON body equals the model's own serialization."""
        request = text_message(text).to(user_id)
        if notification is not None:
            request = request.with_notification_type(notification)

        body = json.loads(encode_send_request(request).content)

        expected = {"recipient": {"id": user_id}, "message": {"text": text}}
        if notification is not None:
            expected["notification_type"] = notification
        assert body == expected


class TestMultipartEncoding:
    """Requests carrying raw bytes go out as multipart form data."""

    def test_upload_parts(self):
        encoded = encode_send_request(
            image_upload_message(PNG_BYTES, "image/png").to("USER_ID")
        )

        assert encoded.is_multipart
        assert encoded.content is None
        assert encoded.form_fields == {
            "recipient": '{"id":"USER_ID"}',
            "message": '{"attachment":{"type":"image","payload":{}}}',
        }
        assert encoded.filedata.filename == "image.png"
        assert encoded.filedata.content == PNG_BYTES
        assert encoded.filedata.content_type == "image/png"

    def test_notification_type_part(self):
        encoded = encode_send_request(
            image_upload_message(PNG_BYTES, "image/png").to("USER_ID").silent_push()
        )

        assert encoded.form_fields["notification_type"] == "SILENT_PUSH"

    def test_quick_replies_travel_in_message_part(self):
        encoded = encode_send_request(
            image_upload_message(PNG_BYTES, "image/png")
            .to("USER_ID")
            .with_quick_replies(text_quick_reply("More", "MORE"))
        )

        message = json.loads(encoded.form_fields["message"])
        assert message["quick_replies"][0]["payload"] == "MORE"

    def test_wire_body(self):
        request = wire_body(
            encode_send_request(
                file_upload_message(b"%PDF-1.4", "application/pdf").to("USER_ID").no_push()
            )
        )

        assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
        body = request.content
        assert b'name="recipient"' in body
        assert b'{"id":"USER_ID"}' in body
        assert b'name="message"' in body
        assert b'name="notification_type"' in body
        assert b"NO_PUSH" in body
        assert b'name="filedata"; filename="application.pdf"' in body
        assert b"Content-Type: application/pdf" in body
        assert b"%PDF-1.4" in body

    @given(
        data=st.binary(min_size=1, max_size=256),
        content_type=st.sampled_from(
            ["image/png", "image/jpeg", "video/mp4", "audio/mpeg", "application/pdf"]
        ),
    )
    def test_filedata_content_type_verbatim(self, data: bytes, content_type: str):
        """Property: the filedata part keeps the declared content type."""
        encoded = encode_send_request(
            image_upload_message(data, content_type).to("USER_ID")
        )

        assert set(encoded.form_fields) <= {"recipient", "message", "notification_type"}
        assert encoded.filedata.content_type == content_type
        assert encoded.filedata.content == data
        assert "/" not in encoded.filedata.filename


class TestConstructionErrors:
    """Encoding fails before any network activity."""

    def test_missing_recipient(self):
        with pytest.raises(EncodingError, match="no recipient"):
            encode_send_request(text_message("Hello, world!"))

    def test_missing_recipient_on_upload(self):
        with pytest.raises(EncodingError):
            encode_send_request(image_upload_message(PNG_BYTES, "image/png"))


def test_upload_filename():
    assert upload_filename("image/png") == "image.png"
    assert upload_filename("application/vnd.ms-excel") == "application.vnd.ms-excel"
