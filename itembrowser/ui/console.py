"""Console host: feeds commands to the top screen and renders the stack."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import TextIO

from itembrowser.app.bootstrap import AppGraph
from itembrowser.ui.screens import TextScreen

logger = logging.getLogger(__name__)


def split_script(script: str) -> list[str]:
    """Split a ``;``-separated command script into commands."""
    return [part.strip() for part in script.split(";") if part.strip()]


class ConsoleHost:
    """Single-threaded host loop; all flow-controller calls happen here."""

    def __init__(
        self,
        graph: AppGraph,
        *,
        output: TextIO,
        poll_seconds: float = 0.05,
        busy_timeout_seconds: float = 10.0,
    ) -> None:
        self._graph = graph
        self._output = output
        self._poll_seconds = poll_seconds
        self._busy_timeout_seconds = busy_timeout_seconds

    def run(self, commands: Iterable[str]) -> int:
        self._graph.root.start()
        self.settle()
        self.render()
        for raw in commands:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if not self.execute(line):
                break
        return 0

    def execute(self, line: str) -> bool:
        """Run one command. Returns False when the session should end."""
        command, _, argument = line.partition(" ")
        command = command.lower()
        if command in {"quit", "exit"}:
            return False
        screen = self._top_screen()
        if screen is None:
            self._write("(nothing to show)")
            return False
        logger.debug("console_command screen=%s command=%s", screen.screen_id, command)
        if command == "back":
            screen.on_back()
        elif not screen.handle(command, argument):
            self._write(f"unknown command for {screen.title}: {command}")
            return True
        self.settle()
        self.render()
        return self._top_screen() is not None

    def settle(self) -> None:
        """Run posted completions until the top screen is no longer busy."""
        scheduler = self._graph.scheduler
        scheduler.drain()
        deadline = time.monotonic() + self._busy_timeout_seconds
        while True:
            screen = self._top_screen()
            if screen is None or not screen.is_busy:
                return
            if time.monotonic() >= deadline:
                logger.warning("console_settle_timeout screen=%s", screen.screen_id)
                return
            scheduler.drain(timeout=self._poll_seconds)

    def render(self) -> None:
        screens = [s for s in self._graph.stack.screens() if isinstance(s, TextScreen)]
        if not screens:
            self._write("(idle)")
            return
        self._write(" > ".join(screen.title for screen in screens))
        for line in screens[-1].render():
            self._write(line)

    def _top_screen(self) -> TextScreen | None:
        top = self._graph.stack.top()
        return top if isinstance(top, TextScreen) else None

    def _write(self, line: str) -> None:
        print(line, file=self._output)
