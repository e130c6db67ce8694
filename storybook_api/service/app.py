"""FastAPI application exposing Storybook stories as a REST API."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ServiceConfig
from ..errors import StoryNotFoundError, StorybookAPIError, StorybookUnavailableError
from ..index_client import StorybookIndexClient
from ..logging import get_logger
from ..models import StoryEntry
from ..parsers import (
    extract_story_examples,
    generate_usage_example,
    parse_story_file,
)
from ..parsers.stories import story_file_path
from ..project import detect_framework, detect_storybook_version

logger = get_logger("service")

API_VERSION = "1.0.0"

T = TypeVar("T")


class StoriesResponse(BaseModel):
    success: bool = True
    count: int
    stories: List[Dict[str, Any]]


class KindResponse(StoriesResponse):
    kind: str


class StoryResponse(BaseModel):
    success: bool = True
    story: Dict[str, Any]


class DocsResponse(BaseModel):
    success: bool = True
    docs: Dict[str, Any]


class HealthResponse(BaseModel):
    status: str


def create_app(
    settings: ServiceConfig,
    client_factory: Callable[[], StorybookIndexClient] | None = None,
) -> FastAPI:
    """Create the FastAPI application serving story metadata."""

    project_dir = Path(settings.project_dir)
    framework = settings.framework or detect_framework(project_dir)
    storybook_version = detect_storybook_version(project_dir)
    storybook_url = settings.resolved_storybook_url

    def _default_client() -> StorybookIndexClient:
        return StorybookIndexClient(storybook_url, timeout=settings.request_timeout)

    factory = client_factory or _default_client

    app = FastAPI(title="Storybook API", version=API_VERSION)

    async def get_client() -> StorybookIndexClient:
        # Fresh client per request; index contents are never cached.
        return factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/api")
    async def describe() -> Dict[str, Any]:
        return {
            "success": True,
            "name": "Storybook API",
            "version": API_VERSION,
            "storybookVersion": storybook_version or "unknown",
            "framework": framework,
            "endpoints": {
                "GET /api": "This documentation",
                "GET /api/stories": "Get all stories",
                "GET /api/stories/:storyId": "Get a specific story with details",
                "GET /api/docs/:storyId": "Get full documentation with code examples",
                "GET /api/stories/kind/:kind": "Get stories filtered by kind/category",
            },
            "examples": {
                "List stories": "/api/stories",
                "Get story": "/api/stories/example-button--primary",
                "Get docs": "/api/docs/example-button--docs",
            },
        }

    @app.get("/api/stories", response_model=StoriesResponse)
    async def list_stories(
        client: StorybookIndexClient = Depends(get_client),
    ) -> StoriesResponse:
        entries = await _run_blocking(client.list_stories)
        stories = [entry.to_dict() for entry in entries]
        return StoriesResponse(count=len(stories), stories=stories)

    @app.get("/api/stories/kind/{kind}", response_model=KindResponse)
    async def stories_by_kind(
        kind: str,
        client: StorybookIndexClient = Depends(get_client),
    ) -> KindResponse:
        entries = await _run_blocking(lambda: client.stories_by_kind(kind))
        stories = [entry.to_summary() for entry in entries]
        return KindResponse(count=len(stories), kind=kind, stories=stories)

    @app.get("/api/stories/{story_id}", response_model=StoryResponse)
    async def get_story(
        story_id: str,
        client: StorybookIndexClient = Depends(get_client),
    ) -> StoryResponse:
        entry = await _run_blocking(lambda: client.get_story(story_id))
        story = await _run_blocking(lambda: build_story_details(entry, project_dir))
        return StoryResponse(story=story)

    @app.get("/api/docs/{story_id}", response_model=DocsResponse)
    async def get_docs(
        story_id: str,
        client: StorybookIndexClient = Depends(get_client),
    ) -> DocsResponse:
        entry = await _run_blocking(lambda: client.get_story(story_id))
        docs = await _run_blocking(
            lambda: build_story_docs(entry, project_dir, framework)
        )
        return DocsResponse(docs=docs)

    @app.exception_handler(StorybookUnavailableError)
    async def unavailable_handler(
        _: Any, exc: StorybookUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "error": "Storybook is not ready. Please wait...",
                "hint": f"Make sure Storybook is running at {storybook_url}",
                "detail": str(exc),
            },
        )

    @app.exception_handler(StoryNotFoundError)
    async def not_found_handler(_: Any, exc: StoryNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})

    @app.exception_handler(StorybookAPIError)
    async def api_error_handler(_: Any, exc: StorybookAPIError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(_: Any, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error while serving request")
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    return app


def build_story_details(entry: StoryEntry, project_dir: Path) -> Dict[str, Any]:
    """Return the index entry enriched with parsed story file metadata."""
    story = entry.to_dict()
    if not entry.import_path:
        return story

    parsed = parse_story_file(
        story_file_path(project_dir, entry.import_path), entry.id, project_dir
    )
    if parsed is None:
        return story

    if parsed.component is not None:
        story["component"] = parsed.component
    story["args"] = dict(parsed.args)
    story["argTypes"] = {name: dict(spec) for name, spec in parsed.arg_types.items()}
    if parsed.component_docs is not None:
        story["docs"] = parsed.component_docs.to_dict()
    return story


def build_story_docs(
    entry: StoryEntry, project_dir: Path, framework: str
) -> Dict[str, Any]:
    """Return documentation, code and usage examples for a story entry."""
    docs: Dict[str, Any] = {
        "storyId": entry.id,
        "title": entry.title,
        "name": entry.name,
        "type": entry.type,
        "framework": framework,
    }
    if not entry.import_path:
        return docs

    source = story_file_path(project_dir, entry.import_path)
    if entry.import_path.endswith(".mdx"):
        if source.is_file():
            docs["mdxContent"] = source.read_text(encoding="utf-8")
        return docs

    if not source.is_file():
        return docs

    selector: Optional[str] = None
    parsed = parse_story_file(source, entry.id, project_dir)
    if parsed is not None and parsed.component is not None:
        docs["component"] = parsed.component
        component_docs = parsed.component_docs
        if component_docs is not None:
            selector = component_docs.selector
            _set_if_present(docs, "selector", component_docs.selector)
            _set_if_present(docs, "template", component_docs.template)
            _set_if_present(docs, "componentCode", component_docs.component_code)
            docs["properties"] = {
                name: prop.to_dict() for name, prop in component_docs.properties.items()
            }
            docs["componentDescription"] = component_docs.description

    examples = extract_story_examples(source)
    if examples is not None:
        docs["imports"] = list(examples.imports)
        docs["metaCode"] = examples.meta
        docs["storyExamples"] = {
            name: example.to_dict() for name, example in examples.stories.items()
        }
        if selector:
            docs["usageExamples"] = {
                name: generate_usage_example(selector, example.args, name, framework)
                for name, example in examples.stories.items()
            }
    return docs


def _set_if_present(target: Dict[str, Any], key: str, value: Optional[str]) -> None:
    if value is not None:
        target[key] = value


async def _run_blocking(func: Callable[[], T]) -> T:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def run_service(settings: ServiceConfig, host: str = "0.0.0.0") -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(settings)
    uvicorn.run(app, host=host, port=settings.port)


__all__ = ["build_story_docs", "build_story_details", "create_app", "run_service"]
