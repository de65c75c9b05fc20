"""Event service: serializes inbound events against the single shopping list document."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from src.core.document_store import save_document
from src.core.errors import DisplayError, InvalidCallbackError
from src.core.logging import log_with_context, span
from src.domain.document import Document
from src.interface.telegram_parser import CallbackEvent, InboundEvent, TextEvent
from src.interface.telegram_sender import MessageSender
from src.services import display_service, shopping_state_machine


logger = logging.getLogger(__name__)


class ShoppingBot:
    """Owns the document and processes events one at a time.

    Text messages and button presses each have their own queue, drained in
    arrival order by one consumer task. Both consumers share a lock around
    the document, so no two handlers ever interleave.
    """

    def __init__(
        self,
        *,
        document: Document,
        sender: MessageSender,
        data_file_path: Path,
        comment_prefix: str = "#",
    ) -> None:
        self.document = document
        self._sender = sender
        self._data_file_path = data_file_path
        self._comment_prefix = comment_prefix
        self._lock = asyncio.Lock()
        self._text_queue: asyncio.Queue[TextEvent] = asyncio.Queue()
        self._callback_queue: asyncio.Queue[CallbackEvent] = asyncio.Queue()
        self._consumers: list[asyncio.Task[None]] = []

    async def start(self) -> None:
        """Start one consumer task per event category."""
        if self._consumers:
            return
        self._consumers = [
            asyncio.create_task(self._consume(self._text_queue, self.handle_text_event), name="text-events"),
            asyncio.create_task(
                self._consume(self._callback_queue, self.handle_callback_event), name="callback-events"
            ),
        ]
        logger.info("Event consumers started")

    async def stop(self) -> None:
        """Cancel the consumers. Queued events that were not started are dropped."""
        for task in self._consumers:
            task.cancel()
        for task in self._consumers:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._consumers = []
        logger.info("Event consumers stopped")

    async def submit(self, event: InboundEvent) -> None:
        """Queue an event for its category's consumer."""
        if isinstance(event, TextEvent):
            await self._text_queue.put(event)
        else:
            await self._callback_queue.put(event)

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        await self._text_queue.join()
        await self._callback_queue.join()

    async def _consume(self, queue: "asyncio.Queue[Any]", handler: Callable[[Any], Awaitable[bool]]) -> None:
        while True:
            event = await queue.get()
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Unexpected error handling update %s (%s): %s",
                    event.update_id,
                    type(e).__name__,
                    e,
                    exc_info=True,
                )
            finally:
                queue.task_done()

    async def handle_text_event(self, event: TextEvent) -> bool:
        """Handle one text message under the document lock.

        Returns:
            True if the document was updated and stored, False if the message was ignored or failed
        """
        async with self._lock:
            with span("event_service.handle_text_event"):
                log_with_context(
                    logger,
                    "info",
                    f"{event.sender_name} ({event.sender_id}): {event.text}",
                    chat_id=event.chat_id,
                    update_id=event.update_id,
                )

                view = shopping_state_machine.handle_text(
                    self.document, event.text, comment_prefix=self._comment_prefix
                )
                if view is None:
                    logger.debug("Ignoring comment message", extra={"update_id": event.update_id})
                    return False

                try:
                    await display_service.reconcile(
                        self.document, chat_id=event.chat_id, view=view, sender=self._sender
                    )
                except DisplayError as e:
                    logger.error("Failed to display shopping list: %s", e, extra={"update_id": event.update_id})
                else:
                    await self._sender.delete_message(chat_id=event.chat_id, message_id=event.message_id)

                await save_document(self.document, self._data_file_path)
                return True

    async def handle_callback_event(self, event: CallbackEvent) -> bool:
        """Handle one button press under the document lock.

        Returns:
            True if the document was updated and stored, False for unknown or invalid callbacks
        """
        async with self._lock:
            with span("event_service.handle_callback_event"):
                log_with_context(
                    logger,
                    "info",
                    f"{event.sender_name} ({event.sender_id}): {event.data}",
                    chat_id=event.chat_id,
                    update_id=event.update_id,
                )
                await self._sender.answer_callback_query(callback_query_id=event.callback_query_id)

                try:
                    view = shopping_state_machine.handle_callback(self.document, event.data)
                except InvalidCallbackError as e:
                    logger.error("Error handling callback query: %s", e, extra={"update_id": event.update_id})
                    return False

                if view is None:
                    return False

                try:
                    await display_service.reconcile(
                        self.document, chat_id=event.chat_id, view=view, sender=self._sender
                    )
                except DisplayError as e:
                    logger.error("Failed to display view: %s", e, extra={"update_id": event.update_id})

                await save_document(self.document, self._data_file_path)
                return True
