"""Route webhook messaging events to handlers.

A ``CallbackDispatcher`` walks every entry of a callback, then every event of
each entry, in wire order, and hands each event to the one handler matching
its variant. Because the platform batches events, a handler may run several
times for a single delivery.

Precedence per event is fixed: message, delivery, postback, optin. Events of a
variant without a registered handler, and events of unknown kinds, are
skipped without error so that new platform event kinds don't break existing
webhooks.

Example:
    >>> dispatcher = CallbackDispatcher(message_handler=on_message)
    >>> result = dispatcher.dispatch(callback)
    >>> result.errors
    []
"""

import inspect
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any

import logfire
from pydantic import BaseModel, ConfigDict, Field

from fbmessenger.errors import HandlerError
from fbmessenger.models.callback import Callback, EventKind, MessagingEvent

# Handlers may be plain functions or coroutine functions (see adispatch)
MessagingEventHandler = Callable[[MessagingEvent], Any]


class HandlerErrorPolicy(str, Enum):
    """What the dispatcher does when a handler raises."""

    COLLECT = "collect"
    LOG = "log"
    RAISE = "raise"


class HandlerFailure(BaseModel):
    """A handler exception recorded during a sweep."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: EventKind
    event: MessagingEvent
    exception: BaseException


class DispatchResult(BaseModel):
    """Outcome of one dispatch sweep."""

    # Number of handler invocations, failed ones included
    handled: int = 0
    skipped: int = 0
    errors: list[HandlerFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class CallbackDispatcher:
    """Routes each messaging event of a callback to the handler for its kind.

    Holds no per-sweep state, so one dispatcher can serve concurrent
    deliveries.
    """

    def __init__(
        self,
        message_handler: MessagingEventHandler | None = None,
        delivery_handler: MessagingEventHandler | None = None,
        postback_handler: MessagingEventHandler | None = None,
        authentication_handler: MessagingEventHandler | None = None,
        error_policy: HandlerErrorPolicy = HandlerErrorPolicy.COLLECT,
    ):
        """Register handlers.

        Args:
            message_handler: Called for received messages
            delivery_handler: Called for delivery confirmations
            postback_handler: Called for postback button taps
            authentication_handler: Called for opt-ins
            error_policy: COLLECT records handler exceptions in the result,
                LOG also logs them, RAISE stops at the first one
        """
        self.message_handler = message_handler
        self.delivery_handler = delivery_handler
        self.postback_handler = postback_handler
        self.authentication_handler = authentication_handler
        self.error_policy = HandlerErrorPolicy(error_policy)

    def handler_for(self, kind: EventKind | None) -> MessagingEventHandler | None:
        if kind is EventKind.MESSAGE:
            return self.message_handler
        if kind is EventKind.DELIVERY:
            return self.delivery_handler
        if kind is EventKind.POSTBACK:
            return self.postback_handler
        if kind is EventKind.OPT_IN:
            return self.authentication_handler
        return None

    def _route(
        self, callback: Callback
    ) -> Iterator[tuple[MessagingEvent, EventKind | None, MessagingEventHandler | None]]:
        for entry in callback.entries:
            for event in entry.messaging:
                kind = event.kind
                yield event, kind, self.handler_for(kind)

    def _record_failure(
        self,
        result: DispatchResult,
        event: MessagingEvent,
        kind: EventKind,
        exc: Exception,
    ) -> None:
        if self.error_policy is HandlerErrorPolicy.RAISE:
            logfire.error(
                "Callback handler failed, stopping dispatch",
                kind=kind.value,
                sender_id=event.sender.id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise HandlerError(f"{kind.value} handler failed: {exc}", event) from exc

        result.errors.append(HandlerFailure(kind=kind, event=event, exception=exc))
        if self.error_policy is HandlerErrorPolicy.LOG:
            logfire.error(
                "Callback handler failed",
                kind=kind.value,
                sender_id=event.sender.id,
                error=str(exc),
                error_type=type(exc).__name__,
            )

    def dispatch(self, callback: Callback) -> DispatchResult:
        """Run the matching handler for every event, in wire order.

        Coroutine handlers cannot run here: their result is closed and the
        call is recorded as a ``TypeError`` failure. Use ``adispatch`` for them.

        Raises:
            HandlerError: only under ``HandlerErrorPolicy.RAISE``.
        """
        result = DispatchResult()
        for event, kind, handler in self._route(callback):
            if handler is None:
                result.skipped += 1
                continue
            try:
                outcome = handler(event)
                if inspect.isawaitable(outcome):
                    if inspect.iscoroutine(outcome):
                        outcome.close()
                    raise TypeError(
                        f"{kind.value} handler returned an awaitable; use adispatch()"
                    )
            except Exception as e:
                self._record_failure(result, event, kind, e)
            result.handled += 1
        return result

    async def adispatch(self, callback: Callback) -> DispatchResult:
        """Like ``dispatch``, awaiting each handler before moving on."""
        result = DispatchResult()
        for event, kind, handler in self._route(callback):
            if handler is None:
                result.skipped += 1
                continue
            try:
                outcome = handler(event)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                self._record_failure(result, event, kind, e)
            result.handled += 1
        return result
