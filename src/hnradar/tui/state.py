"""
View state machine of the reader.

`apply` takes the current `ViewState` and one event and returns the next state
together with at most one command for the outside world (a fetch, opening a
URL, exiting). It never performs I/O itself; fetch results come back as
`FetchStoriesCompleted` / `FetchCommentsCompleted` events tagged with the page
or story they were requested for, and completions that no longer match the
state are dropped.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from hnradar.config import PAGE_SIZE
from hnradar.models import Comment, Story, StoryPage

log = logging.getLogger(__name__)


class Mode(Enum):
    STORIES = "stories"
    COMMENTS = "comments"


@dataclass(frozen=True)
class ViewState:
    mode: Mode = Mode.STORIES
    stories: Tuple[Story, ...] = ()
    comments: Tuple[Comment, ...] = ()
    story_cursor: int = 0
    comment_cursor: int = 0
    page_index: int = 0
    page_size: int = PAGE_SIZE
    total_ids: Optional[int] = None
    comments_story: Optional[Story] = None
    loading: bool = False
    last_error: Optional[str] = None
    # Page fetch still in flight and the error of the last one, kept
    # while the comment thread owns `loading` and `last_error`.
    pending_page: Optional[int] = None
    page_error: Optional[str] = None
    width: int = 0
    height: int = 0
    running: bool = True

    @property
    def max_page(self) -> Optional[int]:
        """Last valid page index, or None while the id count is unknown."""
        if self.total_ids is None:
            return None
        return max(math.ceil(self.total_ids / self.page_size) - 1, 0)

    @property
    def selected_story(self) -> Optional[Story]:
        if 0 <= self.story_cursor < len(self.stories):
            return self.stories[self.story_cursor]
        return None

    @property
    def comments_story_id(self) -> Optional[int]:
        return self.comments_story.id if self.comments_story is not None else None


# --- Events ---


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class NavigateUp:
    pass


@dataclass(frozen=True)
class NavigateDown:
    pass


@dataclass(frozen=True)
class ToggleComments:
    pass


@dataclass(frozen=True)
class NextPage:
    pass


@dataclass(frozen=True)
class PrevPage:
    pass


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class OpenStory:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class FetchStoriesCompleted:
    requested_page: int
    page: Optional[StoryPage] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class FetchCommentsCompleted:
    story_id: int
    comments: Optional[Tuple[Comment, ...]] = None
    error: Optional[str] = None


Event = Union[
    Resize,
    NavigateUp,
    NavigateDown,
    ToggleComments,
    NextPage,
    PrevPage,
    Refresh,
    OpenStory,
    Quit,
    FetchStoriesCompleted,
    FetchCommentsCompleted,
]


# --- Commands ---


@dataclass(frozen=True)
class FetchStoryPage:
    page_index: int


@dataclass(frozen=True)
class FetchComments:
    story: Story


@dataclass(frozen=True)
class OpenExternal:
    url: str


@dataclass(frozen=True)
class Exit:
    pass


Command = Union[FetchStoryPage, FetchComments, OpenExternal, Exit]
Transition = Tuple[ViewState, Optional[Command]]


def _clamp(cursor: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(cursor, length - 1))


def initial_state(page_size: int = PAGE_SIZE) -> Transition:
    """State at startup plus the command loading the first page."""
    return ViewState(page_size=page_size, loading=True, pending_page=0), FetchStoryPage(0)


def apply(state: ViewState, event: Event) -> Transition:
    if not state.running:
        return state, None

    if isinstance(event, Resize):
        return replace(state, width=max(event.width, 0), height=max(event.height, 0)), None
    elif isinstance(event, NavigateUp):
        return _move_cursor(state, -1), None
    elif isinstance(event, NavigateDown):
        return _move_cursor(state, 1), None
    elif isinstance(event, ToggleComments):
        return _toggle_comments(state)
    elif isinstance(event, NextPage):
        return _change_page(state, 1)
    elif isinstance(event, PrevPage):
        return _change_page(state, -1)
    elif isinstance(event, Refresh):
        return _refresh(state)
    elif isinstance(event, OpenStory):
        return _open_story(state)
    elif isinstance(event, Quit):
        return replace(state, running=False), Exit()
    elif isinstance(event, FetchStoriesCompleted):
        return _stories_completed(state, event), None
    elif isinstance(event, FetchCommentsCompleted):
        return _comments_completed(state, event), None

    log.warning(f"Unhandled event: {event!r}")
    return state, None


def _move_cursor(state: ViewState, delta: int) -> ViewState:
    if state.mode is Mode.COMMENTS:
        cursor = _clamp(state.comment_cursor + delta, len(state.comments))
        return replace(state, comment_cursor=cursor)
    cursor = _clamp(state.story_cursor + delta, len(state.stories))
    return replace(state, story_cursor=cursor)


def _toggle_comments(state: ViewState) -> Transition:
    if state.mode is Mode.COMMENTS:
        # Back to the list as it was; the page is not fetched again.
        return (
            replace(
                state,
                mode=Mode.STORIES,
                comments=(),
                comment_cursor=0,
                comments_story=None,
                loading=state.pending_page is not None,
                last_error=state.page_error,
            ),
            None,
        )

    story = state.selected_story
    if story is None:
        return state, None

    new_state = replace(
        state,
        mode=Mode.COMMENTS,
        comments=(),
        comment_cursor=0,
        comments_story=story,
        loading=True,
        last_error=None,
    )
    return new_state, FetchComments(story)


def _change_page(state: ViewState, delta: int) -> Transition:
    if state.mode is Mode.COMMENTS:
        return state, None

    page_index = state.page_index + delta
    if page_index < 0:
        return state, None
    if state.max_page is not None and page_index > state.max_page:
        page_index = state.max_page

    new_state = replace(state, page_index=page_index, loading=True, pending_page=page_index)
    return new_state, FetchStoryPage(page_index)


def _refresh(state: ViewState) -> Transition:
    if state.mode is Mode.COMMENTS and state.comments_story is not None:
        return replace(state, loading=True), FetchComments(state.comments_story)
    new_state = replace(state, loading=True, pending_page=state.page_index)
    return new_state, FetchStoryPage(state.page_index)


def _open_story(state: ViewState) -> Transition:
    if state.mode is Mode.COMMENTS:
        story = state.comments_story
    else:
        story = state.selected_story

    if story is None or not story.url:
        return state, None
    return state, OpenExternal(story.url)


def _stories_completed(state: ViewState, event: FetchStoriesCompleted) -> ViewState:
    if event.requested_page != state.page_index:
        log.debug(
            f"Dropping stale page {event.requested_page}, current page is {state.page_index}"
        )
        return state

    page_error = None if event.page is not None else event.error or "Unknown error"
    if state.mode is Mode.COMMENTS:
        # The open thread keeps its own loading flag and error line.
        state = replace(state, pending_page=None, page_error=page_error)
    else:
        state = replace(
            state, loading=False, last_error=page_error, pending_page=None, page_error=page_error
        )

    if event.page is None:
        return state

    stories = tuple(event.page.stories)
    return replace(
        state,
        stories=stories,
        page_index=event.page.page_index,
        total_ids=event.page.total_ids,
        story_cursor=_clamp(state.story_cursor, len(stories)),
    )


def _comments_completed(state: ViewState, event: FetchCommentsCompleted) -> ViewState:
    if state.mode is not Mode.COMMENTS or event.story_id != state.comments_story_id:
        log.debug(f"Dropping stale comments of story {event.story_id}")
        return state

    if event.comments is None:
        return replace(state, loading=False, last_error=event.error or "Unknown error")

    comments = tuple(event.comments)
    return replace(
        state,
        comments=comments,
        comment_cursor=_clamp(0, len(comments)),
        loading=False,
        last_error=None,
    )
