from hnradar.models import Comment, Story, StoryPage
from hnradar.tui.state import FetchStoriesCompleted, apply


def make_stories(count, first_id=1):
    return tuple(
        Story(
            id=first_id + i,
            by=f"user{i}",
            title=f"Story {first_id + i}",
            url=f"https://example.com/{first_id + i}",
            score=100 - i,
            kids=(1000 + i * 10, 1001 + i * 10),
        )
        for i in range(count)
    )


def make_comments(count):
    return tuple(Comment(id=5000 + i, by=f"commenter{i}", text=f"<p>Comment {i}</p>") for i in range(count))


def load_page(state, stories, page_index=0, total_ids=500):
    """Feeds a successful page completion for the page the state is on."""
    page = StoryPage(stories=stories, page_index=page_index, total_ids=total_ids)
    state, _ = apply(state, FetchStoriesCompleted(state.page_index, page=page))
    return state
