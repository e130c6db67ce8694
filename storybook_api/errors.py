"""Exception types raised by the storybook-api service layer."""

from __future__ import annotations


class StorybookAPIError(RuntimeError):
    """Base class for errors surfaced through the REST API."""


class StorybookUnavailableError(StorybookAPIError):
    """Raised when the Storybook index cannot be fetched."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class StoryNotFoundError(StorybookAPIError):
    """Raised when a story id is absent from the Storybook index."""

    def __init__(self, story_id: str) -> None:
        super().__init__(f'Story "{story_id}" not found')
        self.story_id = story_id


__all__ = ["StorybookAPIError", "StoryNotFoundError", "StorybookUnavailableError"]
