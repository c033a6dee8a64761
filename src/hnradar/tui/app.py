import logging
import signal
import sys
import termios
import tty
from queue import Empty, Queue
from typing import Optional

from rich.console import Console

from hnradar.config import Settings
from hnradar.source import HackerNewsSource
from hnradar.tui.input import ResizeScreen, get_key, handle_winch
from hnradar.tui.keys import event_for_key
from hnradar.tui.render import COMMENT_ROWS, render
from hnradar.tui.runner import CommandRunner
from hnradar.tui.state import Event, Resize, apply, initial_state

log = logging.getLogger(__name__)


class AppState:
    def __init__(
        self,
        settings: Settings,
        source: Optional[HackerNewsSource] = None,
        console: Optional[Console] = None,
    ):
        self.settings = settings
        self.console = console or Console()
        self.events: "Queue[Event]" = Queue()
        self.source = source or HackerNewsSource(settings)
        self.runner = CommandRunner(self.source, self.events)
        self.comment_rows = int(settings.get("view.comment_rows", COMMENT_ROWS))
        self.state, self.startup_command = initial_state(settings.page_size)

    def dispatch(self, event: Event) -> bool:
        """Applies one event. Returns True when the screen needs a redraw."""
        new_state, command = apply(self.state, event)
        changed = new_state != self.state
        self.state = new_state
        self.runner.submit(command)
        return changed

    def drain_events(self) -> bool:
        """Applies every completion that arrived since the last call."""
        should_render = False
        while True:
            try:
                event = self.events.get_nowait()
            except Empty:
                break
            should_render = self.dispatch(event) or should_render
        return should_render

    def resize(self) -> bool:
        width, height = self.console.size
        return self.dispatch(Resize(width, height))

    def start(self) -> None:
        self.resize()
        self.runner.submit(self.startup_command)
        self.startup_command = None

    def render(self) -> None:
        self.console.print(render(self.state, comment_rows=self.comment_rows))

    def run(self):
        # Register resize handler
        old_handler = signal.signal(signal.SIGWINCH, handle_winch)

        # Save terminal settings
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)

        self.start()
        try:
            tty.setcbreak(fd)
            with self.console.screen():
                self.console.show_cursor(False)
                should_render = True
                while self.state.running:
                    if should_render:
                        self.console.clear()
                        self.render()
                        should_render = False

                    try:
                        event = event_for_key(get_key())
                        if event is not None:
                            should_render = self.dispatch(event)
                    except ResizeScreen:
                        self.resize()
                        should_render = True

                    if self.drain_events():
                        should_render = True
        except KeyboardInterrupt:
            pass  # Handle Ctrl+C gracefully
        finally:
            # Restore terminal settings
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
            # Restore signal handler
            signal.signal(signal.SIGWINCH, old_handler)
            log.info("Terminal restored, leaving")
