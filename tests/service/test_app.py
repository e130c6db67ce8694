"""Tests for the FastAPI service."""

from __future__ import annotations

import json
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from storybook_api.config import ServiceConfig
from storybook_api.errors import StorybookUnavailableError
from storybook_api.index_client import StorybookIndexClient
from storybook_api.service import create_app
from tests._fixtures.storybook_sources import (
    ANGULAR_COMPONENT,
    ANGULAR_STORIES,
    ANGULAR_TEMPLATE,
)

INDEX = {
    "v": 5,
    "entries": {
        "example-button--primary": {
            "id": "example-button--primary",
            "title": "Example/Button",
            "name": "Primary",
            "importPath": "./src/stories/button.stories.ts",
            "tags": ["story"],
            "type": "story",
        },
        "example-button--docs": {
            "id": "example-button--docs",
            "title": "Example/Button",
            "name": "Docs",
            "importPath": "./src/stories/button.stories.ts",
            "tags": ["autodocs"],
            "type": "docs",
        },
        "intro--docs": {
            "id": "intro--docs",
            "title": "Intro",
            "name": "Docs",
            "importPath": "./src/intro.mdx",
            "type": "docs",
        },
    },
}


def _index_fetcher(url: str, timeout: Optional[float]) -> bytes:
    return json.dumps(INDEX).encode("utf-8")


def _offline_fetcher(url: str, timeout: Optional[float]) -> bytes:
    raise StorybookUnavailableError("connection refused", url=url)


@pytest.fixture
def settings(project_builder) -> ServiceConfig:
    project_builder.write_package_json(
        dependencies={"@angular/core": "^17.0.0"},
        dev_dependencies={"storybook": "^8.1.0", "@storybook/angular": "^8.1.0"},
    )
    project_builder.write(
        {
            "src/stories/button.stories.ts": ANGULAR_STORIES,
            "src/stories/button.component.ts": ANGULAR_COMPONENT,
            "src/stories/button.component.html": ANGULAR_TEMPLATE,
            "src/intro.mdx": "# Welcome\n",
        }
    )
    return ServiceConfig(project_dir=project_builder.path(), storybook_port=6010)


@pytest.fixture
def client(settings: ServiceConfig) -> TestClient:
    app = create_app(
        settings,
        lambda: StorybookIndexClient("http://localhost:6010", fetcher=_index_fetcher),
    )
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_api_description(client: TestClient) -> None:
    data = client.get("/api").json()

    assert data["success"] is True
    assert data["storybookVersion"] == 8
    assert data["framework"] == "angular"
    assert "GET /api/stories" in data["endpoints"]


def test_list_stories(client: TestClient) -> None:
    data = client.get("/api/stories").json()

    assert data["success"] is True
    assert data["count"] == 3
    ids = {story["id"] for story in data["stories"]}
    assert ids == {"example-button--primary", "example-button--docs", "intro--docs"}
    intro = next(story for story in data["stories"] if story["id"] == "intro--docs")
    assert intro["kind"] == "Intro"
    assert intro["tags"] == []


def test_stories_by_kind(client: TestClient) -> None:
    data = client.get("/api/stories/kind/Intro").json()

    assert data == {
        "success": True,
        "count": 1,
        "kind": "Intro",
        "stories": [
            {
                "id": "intro--docs",
                "name": "Docs",
                "title": "Intro",
                "kind": "Intro",
                "type": "docs",
            }
        ],
    }


def test_story_details_include_parsed_metadata(client: TestClient) -> None:
    response = client.get("/api/stories/example-button--primary")

    assert response.status_code == 200
    story = response.json()["story"]
    assert story["component"] == "ButtonComponent"
    assert story["args"] == {"primary": True, "label": "Button"}
    assert story["argTypes"] == {"backgroundColor": {"control": "color"}}
    assert story["docs"]["selector"] == "app-button"
    assert story["docs"]["properties"]["label"]["required"] is True
    assert story["docs"]["templateUrl"] == "./button.component.html"


def test_unknown_story_returns_404(client: TestClient) -> None:
    response = client.get("/api/stories/missing--story")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": 'Story "missing--story" not found'}


def test_docs_include_usage_examples(client: TestClient) -> None:
    response = client.get("/api/docs/example-button--docs")

    assert response.status_code == 200
    docs = response.json()["docs"]
    assert docs["storyId"] == "example-button--docs"
    assert docs["framework"] == "angular"
    assert docs["component"] == "ButtonComponent"
    assert docs["selector"] == "app-button"
    assert docs["componentDescription"] == "Primary UI component for user interaction"
    assert docs["metaCode"].endswith("export default meta")
    assert set(docs["storyExamples"]) == {"Primary", "Large"}

    primary = docs["usageExamples"]["Primary"]
    assert primary.startswith("<!-- Primary Example -->\n<app-button")
    assert '[primary]="true"' in primary
    assert "label='Button'" in primary


def test_docs_for_mdx_entry(client: TestClient) -> None:
    docs = client.get("/api/docs/intro--docs").json()["docs"]

    assert docs["mdxContent"] == "# Welcome\n"
    assert "storyExamples" not in docs


def test_unavailable_storybook_returns_503(settings: ServiceConfig) -> None:
    app = create_app(
        settings,
        lambda: StorybookIndexClient("http://localhost:6010", fetcher=_offline_fetcher),
    )
    client = TestClient(app)

    response = client.get("/api/stories")

    assert response.status_code == 503
    data = response.json()
    assert data["success"] is False
    assert data["hint"] == "Make sure Storybook is running at http://localhost:6010"


def test_unexpected_errors_return_500(settings: ServiceConfig) -> None:
    def _broken_fetcher(url: str, timeout: Optional[float]) -> bytes:
        raise ValueError("boom")

    app = create_app(
        settings,
        lambda: StorybookIndexClient("http://localhost:6010", fetcher=_broken_fetcher),
    )
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/stories")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "boom"}
