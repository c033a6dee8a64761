from typing import Callable, List, Tuple

from rich.console import Group, RenderableType
from rich.rule import Rule
from rich.text import Text

from hnradar.tui.reflow import reflow as default_reflow
from hnradar.tui.reflow import strip_html
from hnradar.tui.state import Mode, ViewState
from hnradar.tui.windowing import window

STORY_ROWS = 3  # title, data line, separator
STORY_RESERVED_ROWS = 5  # title bar, status line, footer
COMMENT_ROWS = 3  # estimate; real comments vary in height
COMMENT_RESERVED_ROWS = 2  # title bar, story line

TITLE_BAR_STYLE = "bold black on color(202)"
SHADED_STYLE = "on color(235)"
SEPARATOR_STYLE = "color(235)"
DATA_STYLE = "color(248)"

STORIES_HELP = "j/k: move | r: refresh | enter: view in browser | h/l: move between pages | c: comments | q: quit"
COMMENTS_HELP = "j/k: move | r: reload | enter: view in browser | c: back to stories | q: quit"

Reflow = Callable[[str, int], List[str]]


def _rows_left(height: int, reserved: int) -> int:
    # An unknown height (0) shows everything; a tiny terminal still gets one row.
    if height <= 0:
        return 0
    return max(height - reserved, 1)


def story_window(state: ViewState) -> Tuple[int, int]:
    return window(
        len(state.stories),
        state.story_cursor,
        STORY_ROWS,
        _rows_left(state.height, STORY_RESERVED_ROWS),
    )


def comment_window(state: ViewState, comment_rows: int = COMMENT_ROWS) -> Tuple[int, int]:
    """
    Window over the comments using a fixed per-comment height estimate.
    Long comments can overflow the viewport and short ones leave rows unused.
    """
    return window(
        len(state.comments),
        state.comment_cursor,
        comment_rows,
        _rows_left(state.height, COMMENT_RESERVED_ROWS),
    )


def _title_bar(state: ViewState) -> Text:
    title = " Hacker News"
    if state.max_page is not None:
        title += f"  page {state.page_index + 1}/{state.max_page + 1}"
    else:
        title += f"  page {state.page_index + 1}"
    if state.mode is Mode.COMMENTS:
        title += "  comments"
    bar = Text(title, style=TITLE_BAR_STYLE)
    if state.width > len(title):
        bar.append(" " * (state.width - len(title)), style=TITLE_BAR_STYLE)
    return bar


def _status_line(state: ViewState) -> Text:
    if state.loading:
        return Text("Loading...")
    if state.last_error:
        return Text(f"Error: {state.last_error}. Press 'r' to retry or 'q' to quit.", style="bold red")
    return Text("")


def _story_rows(state: ViewState) -> List[RenderableType]:
    rows: List[RenderableType] = []
    start, end = story_window(state)

    for i in range(start, end):
        story = state.stories[i]
        selected = i == state.story_cursor
        style = "bold" if selected else ""
        if i % 2 == 1:
            style = f"{style} {SHADED_STYLE}".strip()

        cursor = "> " if selected else "  "
        row = Text(f"{cursor}{strip_html(story.title)}\n", style=style)
        data = f"  score: {story.score} comments: {len(story.kids)}"
        if story.by:
            data += f" by: {story.by}"
        row.append(data, style=DATA_STYLE)
        rows.append(row)
        rows.append(Rule(style=SEPARATOR_STYLE))

    return rows


def _comment_rows(state: ViewState, reflow: Reflow, comment_rows: int) -> List[RenderableType]:
    rows: List[RenderableType] = []
    start, end = comment_window(state, comment_rows)

    for i in range(start, end):
        comment = state.comments[i]
        selected = i == state.comment_cursor
        lines = reflow(comment.text, state.width - 2)

        cursor = "> " if selected else "  "
        body = Text(style=SHADED_STYLE if selected else "")
        for n, line in enumerate(lines):
            prefix = cursor if n == 0 else "  "
            body.append(f"{prefix}{line}")
            if n < len(lines) - 1:
                body.append("\n")
        if comment.by:
            body.append(f"  ({comment.by})", style=DATA_STYLE)
        rows.append(body)
        rows.append(Rule(style=SEPARATOR_STYLE))

    return rows


def render(
    state: ViewState,
    reflow: Reflow = default_reflow,
    comment_rows: int = COMMENT_ROWS,
) -> Group:
    """
    Lays out one frame for `state`.

    While loading, list content is left out; the stories and any previous
    error stay in the state and show up again once the fetch completes.
    """
    parts: List[RenderableType] = [_title_bar(state), _status_line(state)]

    if not state.loading:
        if state.mode is Mode.COMMENTS:
            story = state.comments_story
            if story is not None and not state.last_error:
                parts[1] = Text(strip_html(story.title), style="bold")
            if not state.comments and not state.last_error:
                parts.append(Text("  No comments."))
            parts.extend(_comment_rows(state, reflow, comment_rows))
        else:
            parts.extend(_story_rows(state))

    help_text = COMMENTS_HELP if state.mode is Mode.COMMENTS else STORIES_HELP
    parts.append(Text(help_text, style=DATA_STYLE))
    return Group(*parts)
