import asyncio
import logging
import threading
from queue import Queue
from typing import Callable, List, Optional

from hnradar.browser import open_external
from hnradar.source import FetchFailed, HackerNewsSource
from hnradar.tui.state import (
    Command,
    Event,
    Exit,
    FetchComments,
    FetchCommentsCompleted,
    FetchStoriesCompleted,
    FetchStoryPage,
    OpenExternal,
)

log = logging.getLogger(__name__)


class CommandRunner:
    """
    Executes commands emitted by the state machine.

    Each fetch runs on its own daemon thread and reports back by putting a
    completion event on `events`; it never touches the view state.
    Superseded fetches are left to finish and are dropped by the state
    machine when their completion arrives.
    """

    def __init__(
        self,
        source: HackerNewsSource,
        events: "Queue[Event]",
        opener: Callable[[str], None] = open_external,
    ):
        self.source = source
        self.events = events
        self.opener = opener
        self.workers: List[threading.Thread] = []

    def submit(self, command: Optional[Command]) -> None:
        if command is None or isinstance(command, Exit):
            return

        if isinstance(command, FetchStoryPage):
            self._start(self._load_page, command)
        elif isinstance(command, FetchComments):
            self._start(self._load_comments, command)
        elif isinstance(command, OpenExternal):
            self.opener(command.url)
        else:
            log.warning(f"Unknown command: {command!r}")

    def _start(self, target, command: Command) -> None:
        self.workers = [w for w in self.workers if w.is_alive()]
        worker = threading.Thread(target=target, args=(command,), daemon=True)
        self.workers.append(worker)
        worker.start()

    def join(self, timeout: Optional[float] = None) -> None:
        for worker in list(self.workers):
            worker.join(timeout)

    def _load_page(self, command: FetchStoryPage) -> None:
        try:
            page = asyncio.run(self.source.fetch_story_page(command.page_index))
        except FetchFailed as e:
            self.events.put(FetchStoriesCompleted(command.page_index, error=str(e)))
        except Exception as e:
            log.exception(f"Unexpected error loading page {command.page_index}")
            self.events.put(FetchStoriesCompleted(command.page_index, error=f"Unexpected error: {e}"))
        else:
            self.events.put(FetchStoriesCompleted(command.page_index, page=page))

    def _load_comments(self, command: FetchComments) -> None:
        story_id = command.story.id
        try:
            comments = asyncio.run(self.source.fetch_comments(command.story))
        except FetchFailed as e:
            self.events.put(FetchCommentsCompleted(story_id, error=str(e)))
        except Exception as e:
            log.exception(f"Unexpected error loading comments of story {story_id}")
            self.events.put(FetchCommentsCompleted(story_id, error=f"Unexpected error: {e}"))
        else:
            self.events.put(FetchCommentsCompleted(story_id, comments=tuple(comments)))
