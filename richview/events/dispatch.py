"""
Event dispatch - translates raw events into session commands.

Key presses and clicks are handled synchronously. Dropped or pasted image
files are decoded in asyncio tasks; each completion inserts into whatever
document the session holds at that moment, at the target captured when the
event arrived. If the session was reset in between, the insert is dropped.
"""

from __future__ import annotations
import asyncio
import logging
from typing import TYPE_CHECKING, Coroutine

from ..commands import run_command
from ..document import BOLD, CODE, ITALIC, UNDERLINED
from ..selection import Range
from .events import ClickEvent, FileBlob, KeyEvent, TransferEvent
from .hotkeys import BOLD_HOTKEY, CODE_HOTKEY, ITALIC_HOTKEY, UNDERLINED_HOTKEY, is_key_hotkey
from .media import file_to_data_url, is_image_url

if TYPE_CHECKING:
    from ..session import EditorSession


logger = logging.getLogger(__name__)


class EventDispatcher:
    """
    Each handler returns True when it handled the event. False means the
    host should run its own default behaviour.
    """

    def __init__(self, session: "EditorSession", *, is_mac: bool | None = None):
        self.session = session
        # checked in this order, first match wins
        self.mark_hotkeys = [
            (is_key_hotkey(BOLD_HOTKEY, is_mac), BOLD),
            (is_key_hotkey(ITALIC_HOTKEY, is_mac), ITALIC),
            (is_key_hotkey(UNDERLINED_HOTKEY, is_mac), UNDERLINED),
            (is_key_hotkey(CODE_HOTKEY, is_mac), CODE),
        ]
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    # -------------------------------------------------------------------------
    # Keyboard and toolbar
    # -------------------------------------------------------------------------

    def on_key_down(self, event: KeyEvent) -> bool:
        for matches, mark in self.mark_hotkeys:
            if matches(event):
                self.session.toggle_mark(mark)
                return True
        if event.key == "Tab":
            if event.shift:
                return self.session.outdent()
            return self.session.indent()
        logger.debug("Unhandled key %r", event.key)
        return False

    def on_click(self, event: ClickEvent) -> bool:
        """
        Raises:
            UnknownCommandError: if the control names no registered command
            InvalidCommandValueError: if the command rejects the control value
        """
        return run_command(self.session, event.command, event.value)

    # -------------------------------------------------------------------------
    # Drop and paste
    # -------------------------------------------------------------------------

    async def on_drop_or_paste(self, event: TransferEvent) -> bool:
        """
        Image files are decoded in the background and inserted at the event
        target; a pasted image URL is inserted right away. Returns once the
        decodes are scheduled, use drain() to wait for them.
        """
        target = event.target
        if target is None and event.kind == "drop":
            logger.debug("Drop outside the document, not handled")
            return False

        transfer = event.transfer
        if transfer.type == "files":
            generation = self.session.generation
            for blob in transfer.files:
                if not blob.is_image:
                    logger.debug("Skipping non-image file %r (%s)", blob.name, blob.mime_type)
                    continue
                self._schedule(self._insert_file(blob, target, generation))
            return True

        if transfer.type == "text":
            text = transfer.text.strip()
            if not is_image_url(text):
                logger.debug("Pasted text is not an image URL, not handled")
                return False
            self.session.insert_image(text, target)
            return True

        logger.debug("Unhandled %s payload of type %r", event.kind, transfer.type)
        return False

    async def _insert_file(self, blob: FileBlob, target: Range | None, generation: int) -> bool:
        src = await file_to_data_url(blob)
        return self.session.insert_image(src, target, generation=generation)

    def _schedule(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Image insert failed", exc_info=task.exception())

    async def drain(self) -> None:
        """Wait until every scheduled decode has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
