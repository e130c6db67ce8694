"""Tests for story export extraction."""

from __future__ import annotations

from pathlib import Path

from storybook_api.parsers import extract_story_examples
from tests._fixtures.storybook_sources import ANGULAR_STORIES, REACT_STORIES


def test_collects_imports_in_order(project_builder) -> None:
    project_builder.write({"button.stories.ts": ANGULAR_STORIES})

    examples = extract_story_examples(project_builder.path("button.stories.ts"))

    assert examples is not None
    assert examples.imports == [
        "import type { Meta, StoryObj } from '@storybook/angular';",
        "import { fn } from '@storybook/test';",
        "import { ButtonComponent } from './button.component';",
    ]


def test_meta_block_from_const_declaration(project_builder) -> None:
    project_builder.write({"button.stories.ts": ANGULAR_STORIES})

    examples = extract_story_examples(project_builder.path("button.stories.ts"))

    assert examples is not None
    assert examples.meta is not None
    assert examples.meta.startswith("const meta: Meta<ButtonComponent> = {")
    assert examples.meta.endswith("export default meta")
    assert "component: ButtonComponent" in examples.meta


def test_meta_block_from_default_export(project_builder) -> None:
    project_builder.write({"Button.stories.tsx": REACT_STORIES})

    examples = extract_story_examples(project_builder.path("Button.stories.tsx"))

    assert examples is not None
    assert examples.meta == (
        "export default {\n"
        "  title: 'Example/Button',\n"
        "  component: Button,\n"
        "} as"
    )


def test_story_exports_keep_raw_args(project_builder) -> None:
    project_builder.write({"button.stories.ts": ANGULAR_STORIES})

    examples = extract_story_examples(project_builder.path("button.stories.ts"))

    assert examples is not None
    assert list(examples.stories) == ["Primary", "Large"]
    assert examples.stories["Primary"].args == {"primary": "true", "label": "'Button'"}
    assert examples.stories["Large"].args == {
        "size": "'large'",
        "label": "'Button'",
        "count": "3",
    }


def test_story_code_is_reconstructed_from_body(project_builder) -> None:
    project_builder.write({"button.stories.ts": ANGULAR_STORIES})

    examples = extract_story_examples(project_builder.path("button.stories.ts"))

    assert examples is not None
    body = "\n  args: {\n    primary: true,\n    label: 'Button',\n  },\n"
    assert examples.stories["Primary"].code == f"export const Primary = {{{body}}};"


def test_story_without_args_has_empty_map(project_builder) -> None:
    project_builder.write(
        {
            "empty.stories.ts": """
            export const Empty = {
              render: () => '<div></div>',
            };
            """
        }
    )

    examples = extract_story_examples(project_builder.path("empty.stories.ts"))

    assert examples is not None
    assert examples.meta is None
    assert examples.imports == []
    assert examples.stories["Empty"].args == {}


def test_args_split_ignores_nesting(project_builder) -> None:
    project_builder.write(
        {
            "list.stories.ts": """
            export const Filled = {
              args: {
                items: ['a', 'b'],
                title: 'List',
              },
            };
            """
        }
    )

    examples = extract_story_examples(project_builder.path("list.stories.ts"))

    assert examples is not None
    # Commas inside the array literal split the value.
    assert examples.stories["Filled"].args == {"items": "['a'", "title": "'List'"}


def test_missing_story_file_returns_none(tmp_path: Path) -> None:
    assert extract_story_examples(tmp_path / "missing.stories.ts") is None
