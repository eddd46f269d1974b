"""Messenger Platform client: Send API and User Profile API.

The HTTP transport is injected as an ``httpx.AsyncClient``; the client never
creates one of its own. Page access tokens are passed per call so a single
client can serve many pages.

Error handling:
- ``EncodingError`` when the request can't be encoded (nothing was sent).
- ``TransportError`` (``RequestTimeoutError``, ``ResponseDecodeError``) when
  the network call fails or the body isn't a decodable JSON document.
- Platform errors are not raised: inspect ``SendResponse.error``.
- Task cancellation propagates as ``asyncio.CancelledError``.
"""

import time
from typing import TypeVar

import httpx
import logfire
from pydantic import BaseModel, ValidationError

from fbmessenger.config import get_settings
from fbmessenger.constants import (
    LOG_RESPONSE_BODY_CHARS,
    SEND_API_PATH,
    USER_PROFILE_FIELDS,
)
from fbmessenger.errors import RequestTimeoutError, ResponseDecodeError, TransportError
from fbmessenger.logging_config import mask_pii, redact_tokens
from fbmessenger.models.send_api import SendRequest, SendResponse
from fbmessenger.models.user_models import UserProfile
from fbmessenger.services.encoding import encode_send_request

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)

# Sentinel for "use the client's default timeout"
_DEFAULT_TIMEOUT = object()


class MessengerClient:
    """Sends messages and fetches user profiles.

    Example:
        >>> async with httpx.AsyncClient() as http_client:
        ...     client = MessengerClient(http_client)
        ...     request = text_message("Hello, world!").to("USER_ID")
        ...     response = await client.send(request, "PAGE_ACCESS_TOKEN")
        ...     if response.error is not None:
        ...         ...  # reached the platform, which refused the message
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        graph_api_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize with an HTTP client.

        Args:
            http_client: Transport used for every call
            graph_api_url: Graph API base URL including the version
                (defaults to the configured ``graph_api_url``)
            timeout: Default timeout in seconds for every call (defaults to
                the configured ``messenger_api_timeout_seconds``)
        """
        if http_client is None:
            raise ValueError("http_client is required")
        self._http = http_client
        settings = get_settings()
        self._base_url = (graph_api_url or settings.graph_api_url).rstrip("/")
        self._timeout = (
            timeout if timeout is not None else settings.messenger_api_timeout_seconds
        )

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    async def send(
        self,
        request: SendRequest,
        page_access_token: str,
        *,
        timeout: float | None | object = _DEFAULT_TIMEOUT,
    ) -> SendResponse:
        """Send a message via the Send API.

        Args:
            request: Request built with the message helpers; must have a recipient
            page_access_token: Page access token, passed as a query parameter
            timeout: Per-call timeout in seconds, overriding the default
                (``None`` disables it)

        Returns:
            The decoded response, whatever the HTTP status. Check ``error``.
        """
        body = encode_send_request(request)

        logfire.info(
            "Sending Messenger message",
            recipient_id=mask_pii(request.recipient.id or request.recipient.phone_number),
            encoding=body.encoding,
            notification_type=(
                request.notification_type.value if request.notification_type else None
            ),
        )

        kwargs = body.request_kwargs()
        kwargs["timeout"] = self._timeout if timeout is _DEFAULT_TIMEOUT else timeout

        response = await self._request(
            "POST",
            self._url(SEND_API_PATH),
            params={"access_token": page_access_token},
            **kwargs,
        )
        send_response = self._decode(response, SendResponse)

        if send_response.error is not None:
            logfire.warning(
                "Messenger platform rejected message",
                status_code=response.status_code,
                error_code=send_response.error.code,
                error_type=send_response.error.type,
                error_message=send_response.error.message,
                trace_id=send_response.error.trace_id,
            )
        else:
            logfire.info(
                "Messenger message sent successfully",
                status_code=response.status_code,
                message_id=send_response.message_id,
                attachment_id=send_response.attachment_id,
            )
        return send_response

    async def get_user_profile(
        self,
        user_id: str,
        page_access_token: str,
        *,
        timeout: float | None | object = _DEFAULT_TIMEOUT,
    ) -> UserProfile:
        """Get a user's public profile via the User Profile API.

        Args:
            user_id: Page-scoped user id
            page_access_token: Page access token, passed as a query parameter
            timeout: Per-call timeout in seconds, overriding the default
                (``None`` disables it)
        """
        logfire.info(
            "Fetching Messenger user profile",
            user_id=mask_pii(user_id),
            fields=list(USER_PROFILE_FIELDS),
        )
        response = await self._request(
            "GET",
            self._url(user_id),
            params={
                "fields": ",".join(USER_PROFILE_FIELDS),
                "access_token": page_access_token,
            },
            timeout=self._timeout if timeout is _DEFAULT_TIMEOUT else timeout,
        )
        profile = self._decode(response, UserProfile)
        logfire.info(
            "User profile fetched",
            user_id=mask_pii(user_id),
            status_code=response.status_code,
            locale=profile.locale,
        )
        return profile

    async def _request(
        self, method: str, url: str, *, params: dict[str, str], **kwargs
    ) -> httpx.Response:
        start_time = time.time()
        try:
            response = await self._http.request(method, url, params=params, **kwargs)
        except httpx.TimeoutException as e:
            elapsed = time.time() - start_time
            logfire.error(
                "Messenger API request timed out",
                method=method,
                url=url,
                params=redact_tokens(params),
                error=str(e),
                error_type=type(e).__name__,
                response_time_ms=elapsed * 1000,
            )
            raise RequestTimeoutError(f"{method} {url} timed out") from e
        except httpx.HTTPError as e:
            elapsed = time.time() - start_time
            logfire.error(
                "Messenger API request error",
                method=method,
                url=url,
                params=redact_tokens(params),
                error=str(e),
                error_type=type(e).__name__,
                response_time_ms=elapsed * 1000,
            )
            raise TransportError(f"{method} {url} failed: {e}") from e

        elapsed = time.time() - start_time
        if response.is_success:
            logfire.info(
                "Messenger API call completed",
                method=method,
                status_code=response.status_code,
                response_time_ms=elapsed * 1000,
            )
        else:
            # Non-2xx bodies still carry the platform error; the caller decodes it
            logfire.warning(
                "Messenger API returned non-success status",
                method=method,
                status_code=response.status_code,
                response_body=response.text[:LOG_RESPONSE_BODY_CHARS],
                response_time_ms=elapsed * 1000,
            )
        return response

    def _decode(
        self, response: httpx.Response, model: type[ResponseModel]
    ) -> ResponseModel:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            logfire.error(
                "Could not decode Messenger API response",
                model=model.__name__,
                status_code=response.status_code,
                response_body=response.text[:LOG_RESPONSE_BODY_CHARS],
                error=str(e),
            )
            raise ResponseDecodeError(
                f"could not decode {model.__name__} from response",
                status_code=response.status_code,
                body=response.text,
            ) from e
