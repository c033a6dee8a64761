import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from hnradar.config import Settings
from hnradar.models import Comment, Story, StoryPage

# Configure logging
logger = logging.getLogger(__name__)


class FetchFailed(Exception):
    """A whole page or comment thread could not be loaded."""


def resolve_page(page_index: int, total_ids: int, page_size: int) -> Tuple[int, int, int]:
    """
    Maps a requested page onto the id list and returns (page, start, end).

    A page starting past the end of the list snaps to the last full page
    instead of failing. Negative pages clamp to the first one.
    """
    page = max(page_index, 0)
    start = page * page_size

    if start >= total_ids:
        page = max(total_ids // page_size - 1, 0)
        start = page * page_size

    end = min(start + page_size, total_ids)
    return page, start, end


class HackerNewsSource:
    """Async client for the Hacker News Firebase API."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = str(settings.get("api.base_url")).rstrip("/")
        self.timeout = settings.get("api.timeout", 10)
        self.concurrency = settings.get("api.concurrency", 10)
        self.page_size = settings.page_size
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    async def fetch_story_page(self, page_index: int) -> StoryPage:
        """
        Loads one page of top stories.

        Raises FetchFailed when the ranked id list itself cannot be loaded.
        Stories that fail individually keep an empty `Story()` in their slot.
        """
        async with self._client() as client:
            ids = await self._fetch_top_ids(client)
            page, start, end = resolve_page(page_index, len(ids), self.page_size)
            if page != page_index:
                logger.info(f"Requested page {page_index} is out of range, loading page {page}")

            page_ids = ids[start:end]
            semaphore = asyncio.Semaphore(self.concurrency)
            tasks = [self._fetch_item(client, semaphore, item_id) for item_id in page_ids]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        stories = []
        for item_id, result in zip(page_ids, results):
            story = Story()
            if isinstance(result, Exception):
                logger.warning(f"Failed to fetch story {item_id}: {result}")
            elif not result:
                logger.warning(f"Story {item_id} came back empty")
            else:
                try:
                    story = Story.from_item(result)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"Failed to decode story {item_id}: {e}")
            stories.append(story)

        logger.info(f"Loaded page {page} with {len(stories)} stories ({len(ids)} ids in total)")
        return StoryPage(stories=tuple(stories), page_index=page, total_ids=len(ids))

    async def fetch_comments(self, story: Story) -> List[Comment]:
        """
        Loads the top-level comments of a story in ranked order.

        Comments that fail, were deleted or are dead are skipped. If every
        request of a non-empty thread fails, the thread counts as failed.
        """
        if not story.kids:
            return []

        async with self._client() as client:
            semaphore = asyncio.Semaphore(self.concurrency)
            tasks = [self._fetch_item(client, semaphore, kid) for kid in story.kids]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        errors = [r for r in results if isinstance(r, Exception)]
        if errors and len(errors) == len(results):
            logger.error(f"Failed to fetch any comment of story {story.id}: {errors[0]}")
            raise FetchFailed(f"Could not load comments: {errors[0]}")

        comments = []
        for kid, result in zip(story.kids, results):
            if isinstance(result, Exception):
                logger.warning(f"Failed to fetch comment {kid}: {result}")
                continue
            if not isinstance(result, dict):
                if result is not None:
                    logger.warning(f"Unexpected payload for comment {kid}: {type(result).__name__}")
                continue
            if result.get("deleted") or result.get("dead"):
                continue
            try:
                comments.append(Comment.from_item(result))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to decode comment {kid}: {e}")

        logger.info(f"Loaded {len(comments)} comments for story {story.id}")
        return comments

    async def fetch_story(self, story_id: int) -> Story:
        async with self._client() as client:
            try:
                data = await self._fetch_item(client, asyncio.Semaphore(1), story_id)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to fetch story {story_id}: {e}")
                raise FetchFailed(f"Could not load story {story_id}: {e}") from e

        if not data:
            raise FetchFailed(f"Story {story_id} not found")
        try:
            return Story.from_item(data)
        except (KeyError, TypeError, ValueError) as e:
            raise FetchFailed(f"Could not decode story {story_id}: {e}") from e

    async def _fetch_top_ids(self, client: httpx.AsyncClient) -> List[int]:
        try:
            response = await client.get("/topstories.json")
            response.raise_for_status()
            ids = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch top stories: {e}")
            raise FetchFailed(f"Could not load top stories: {e}") from e

        if not isinstance(ids, list):
            logger.error(f"Unexpected top stories payload: {type(ids).__name__}")
            raise FetchFailed("Could not load top stories: unexpected response")
        return ids

    async def _fetch_item(
        self, client: httpx.AsyncClient, semaphore: asyncio.Semaphore, item_id: int
    ) -> Optional[Dict[str, Any]]:
        async with semaphore:
            response = await client.get(f"/item/{item_id}.json")
            response.raise_for_status()
            return response.json()
