"""Facebook Messenger webhook endpoints.

``create_webhook_router`` wires a ``CallbackDispatcher`` to the two requests
the platform makes against a webhook:

1. GET - subscription verification (``hub.mode`` / ``hub.verify_token`` /
   ``hub.challenge``)
2. POST - event delivery, optionally authenticated by the
   ``X-Hub-Signature-256`` HMAC of the raw body

Mount the router under a prefix, e.g. ``app.include_router(router,
prefix="/webhook")``.
"""

import hashlib
import hmac
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from fbmessenger.config import get_settings
from fbmessenger.constants import WEBHOOK_PAGE_OBJECT, WEBHOOK_SIGNATURE_HEADER
from fbmessenger.errors import HandlerError
from fbmessenger.models.callback import Callback
from fbmessenger.services.dispatcher import CallbackDispatcher

logger = logging.getLogger(__name__)


def verify_signature(body: bytes, signature: str | None, app_secret: str) -> bool:
    """Check an ``X-Hub-Signature-256`` header value against the raw body."""
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(app_secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature.removeprefix("sha256="))


def create_webhook_router(
    dispatcher: CallbackDispatcher,
    *,
    verify_token: str | None = None,
    app_secret: str | None = None,
) -> APIRouter:
    """Build the webhook router for a dispatcher.

    Args:
        dispatcher: Receives every decoded callback
        verify_token: Expected ``hub.verify_token`` (defaults to settings)
        app_secret: App secret for signature checks (defaults to settings;
            no check when neither is set)
    """
    router = APIRouter()

    @router.get("")
    async def verify_webhook(request: Request):
        """Facebook webhook verification endpoint."""
        expected_token = verify_token or get_settings().messenger_verify_token

        mode = request.query_params.get("hub.mode")
        token = request.query_params.get("hub.verify_token")
        challenge = request.query_params.get("hub.challenge")

        if mode == "subscribe" and expected_token and token == expected_token:
            logger.info("Webhook verified successfully")
            return PlainTextResponse(challenge)

        logger.warning("Webhook verification failed")
        return Response(status_code=403)

    @router.post("")
    async def handle_webhook(request: Request):
        """Decode a callback delivery and dispatch its events."""
        body = await request.body()

        secret = app_secret or get_settings().messenger_app_secret
        if secret and not verify_signature(
            body, request.headers.get(WEBHOOK_SIGNATURE_HEADER), secret
        ):
            logger.warning("Webhook signature mismatch")
            return Response(status_code=403)

        try:
            callback = Callback.model_validate_json(body)
        except ValidationError as e:
            logger.warning("Malformed webhook payload: %s", e.error_count())
            return JSONResponse({"status": "invalid"}, status_code=400)

        if callback.object != WEBHOOK_PAGE_OBJECT:
            return {"status": "ignored"}

        try:
            result = await dispatcher.adispatch(callback)
        except HandlerError as e:
            logger.error("Dispatch stopped by handler error: %s", e, exc_info=True)
            return JSONResponse({"status": "error"}, status_code=500)

        if result.errors:
            logger.warning(
                "%d of %d handlers failed", len(result.errors), result.handled
            )
        return {"status": "ok"}

    return router
