"""Client for the Storybook ``index.json`` story catalogue."""

from __future__ import annotations

import json
from typing import Callable, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import StoryNotFoundError, StorybookUnavailableError
from .logging import get_logger
from .models import StoryEntry

logger = get_logger("index_client")

Fetcher = Callable[[str, Optional[float]], bytes]


class StorybookIndexClient:
    """Reads story entries from a running Storybook dev server."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = 10.0,
        fetcher: Fetcher | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._fetch = fetcher or _http_fetch

    @property
    def index_url(self) -> str:
        return f"{self.base_url}/index.json"

    def fetch_index(self) -> Dict[str, StoryEntry]:
        """Return index entries keyed by story id."""
        url = self.index_url
        payload = self._fetch(url, self.timeout)
        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorybookUnavailableError(
                f"Storybook returned an invalid index: {exc}", url=url
            ) from exc
        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            return {}
        return {
            str(story_id): StoryEntry.from_index(raw)
            for story_id, raw in entries.items()
            if isinstance(raw, dict)
        }

    def list_stories(self) -> List[StoryEntry]:
        return list(self.fetch_index().values())

    def get_story(self, story_id: str) -> StoryEntry:
        entry = self.fetch_index().get(story_id)
        if entry is None:
            raise StoryNotFoundError(story_id)
        return entry

    def stories_by_kind(self, kind: str) -> List[StoryEntry]:
        return [
            entry
            for entry in self.fetch_index().values()
            if entry.kind == kind or entry.title == kind
        ]


def _http_fetch(url: str, timeout: Optional[float]) -> bytes:
    request = Request(url, headers={"Accept": "application/json"}, method="GET")
    try:
        with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
            return response.read()
    except HTTPError as exc:
        logger.warning("Storybook index request failed with status %s", exc.code)
        raise StorybookUnavailableError(
            f"Storybook responded with HTTP {exc.code}", url=url
        ) from exc
    except (URLError, OSError) as exc:
        logger.warning("Storybook is not reachable at %s: %s", url, exc)
        raise StorybookUnavailableError(
            f"Storybook is not reachable: {exc}", url=url
        ) from exc


__all__ = ["Fetcher", "StorybookIndexClient"]
