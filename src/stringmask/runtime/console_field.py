"""Curses-based masked input field driven by :class:`EditController`."""

from __future__ import annotations

import curses
import time
from typing import Iterable, List, Optional

from ..controller import EditController, EditError

__all__ = ["MaskedFieldApp"]


class MaskedFieldApp:
    """Host a single masked field in a terminal window.

    The app is the controller's host binding: it renders the values the
    controller writes and shows the error message it publishes.
    """

    _CTRL_C = 3
    _TAB = 9
    _ESCAPE = 27
    _CARET_KEYS = (
        curses.KEY_LEFT,
        curses.KEY_RIGHT,
        curses.KEY_HOME,
        curses.KEY_END,
        curses.KEY_UP,
        curses.KEY_DOWN,
    )

    def __init__(
        self,
        controller: EditController,
        *,
        prompt: str = "> ",
        refresh_interval: float = 0.05,
    ) -> None:
        self.controller = controller
        self.prompt = prompt
        self.refresh_interval = float(refresh_interval)
        self.rendered = controller.value
        self.status = ""
        self.caret = len(self.rendered)
        self.changes: List[str] = []
        self.touched = False
        self.disabled = False
        self.submitted: Optional[str] = None
        self._stop = False
        controller.binding = self

    # HostBinding -----------------------------------------------------------

    def write_value(self, value: str) -> None:
        self.rendered = value
        self.caret = len(value)

    def on_change(self, value: str) -> None:
        self.changes.append(value)

    def on_touched(self) -> None:
        self.touched = True

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = disabled

    def publish_error(self, error: EditError | None, message: str | None) -> None:
        self.status = message or ""

    # Event loop ------------------------------------------------------------

    def run(self) -> Optional[str]:
        """Edit until the value is submitted or the user aborts."""

        return curses.wrapper(self._run_loop)

    def _run_loop(self, stdscr: "curses._CursesWindow") -> Optional[str]:
        stdscr.nodelay(True)
        stdscr.timeout(0)
        self.controller.focus()
        while not self._stop:
            self.render(stdscr)
            self._poll_input(stdscr)
            self.controller.tick()
            time.sleep(self.refresh_interval)
        return self.submitted

    def render(self, stdscr: "curses._CursesWindow") -> None:
        notation = self.controller.notation
        lines = (
            f"{notation.name} ({notation.total_length} characters)",
            self.prompt + self.rendered,
            self.status,
        )
        for row, text in enumerate(lines):
            try:
                stdscr.move(row, 0)
                stdscr.clrtoeol()
                stdscr.addstr(row, 0, text)
            except curses.error:
                continue
        try:
            stdscr.move(1, len(self.prompt) + self.caret)
        except curses.error:
            pass
        stdscr.refresh()

    def _poll_input(self, stdscr: "curses._CursesWindow") -> None:
        pending: List[int] = []
        while True:
            key = stdscr.getch()
            if key == -1:
                break
            pending.append(key)
        self.handle_keys(pending)

    def handle_keys(self, keys: Iterable[int]) -> bool:
        """Process a burst of key codes; printable runs become pastes."""

        # Terminals deliver a paste as a burst of printable key codes.
        printable: List[str] = []
        for key in keys:
            char = self._printable(key)
            if char is not None:
                printable.append(char)
                continue
            self._flush_printable(printable)
            if not self._handle_key(key):
                return False
        self._flush_printable(printable)
        return True

    def _flush_printable(self, printable: List[str]) -> None:
        if not printable:
            return
        self.controller.insert("".join(printable))
        printable.clear()

    def _handle_key(self, key: int) -> bool:
        if key in (curses.KEY_EXIT, self._ESCAPE, self._CTRL_C):
            self._stop = True
            return False
        if key in (curses.KEY_ENTER, 10, 13):
            if self.controller.blur():
                self.submitted = self.controller.value
                self._stop = True
                return False
            return True
        if key == self._TAB:
            self.controller.blur()
            return True
        if key in (curses.KEY_BACKSPACE, curses.KEY_DC, 127, 8):
            self.controller.delete_last()
            return True
        if key in self._CARET_KEYS:
            self.caret = self.controller.collapse_selection()
        return True

    @staticmethod
    def _printable(key: int) -> Optional[str]:
        if 0 <= key < 256:
            char = chr(key)
            if char.isprintable():
                return char
        return None
