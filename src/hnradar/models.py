from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Story:
    """A Hacker News story. The default instance stands for an empty page slot."""

    id: int = 0
    by: str = ""
    time: int = 0
    kids: Tuple[int, ...] = ()
    url: str = ""
    score: int = 0
    title: str = ""
    descendants: int = 0

    @classmethod
    def from_item(cls, data: Dict[str, Any]) -> "Story":
        return cls(
            id=int(data["id"]),
            by=data.get("by") or "",
            time=int(data.get("time") or 0),
            kids=tuple(int(kid) for kid in data.get("kids") or ()),
            url=data.get("url") or "",
            score=int(data.get("score") or 0),
            title=data.get("title") or "",
            descendants=int(data.get("descendants") or 0),
        )

    def __repr__(self):
        return f"<Story(id={self.id}, title='{self.title[:30]}...', score={self.score})>"


@dataclass(frozen=True)
class Comment:
    id: int = 0
    by: str = ""
    text: str = ""  # Raw HTML as served by the API
    time: int = 0

    @classmethod
    def from_item(cls, data: Dict[str, Any]) -> "Comment":
        return cls(
            id=int(data["id"]),
            by=data.get("by") or "",
            text=data.get("text") or "",
            time=int(data.get("time") or 0),
        )

    def __repr__(self):
        return f"<Comment(id={self.id}, by='{self.by}')>"


@dataclass(frozen=True)
class StoryPage:
    """
    Result of a page fetch.

    `page_index` is the page that was actually fetched, which can differ from
    the requested one when the request pointed past the end of the id list.
    """

    stories: Tuple[Story, ...] = field(default_factory=tuple)
    page_index: int = 0
    total_ids: Optional[int] = None
