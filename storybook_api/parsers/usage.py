"""Render markup usage snippets for a component selector and story args."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

DEFAULT_FRAMEWORK = "angular"
_ATTRIBUTE_SEPARATOR = "\n    "


def generate_usage_example(
    selector: Optional[str],
    args: Mapping[str, Any] | None,
    story_name: str,
    framework: str = DEFAULT_FRAMEWORK,
) -> Optional[str]:
    """Return a markup snippet that renders ``selector`` with ``args``.

    Angular gets ``[key]="value"`` property bindings; every other framework
    tag gets JSX-style ``key={value}`` expressions.
    """
    if not selector:
        return None

    bracket = framework == "angular"
    attrs = _ATTRIBUTE_SEPARATOR.join(
        _render_attribute(key, value, bracket=bracket)
        for key, value in (args or {}).items()
    )
    return f"<!-- {story_name} Example -->\n<{selector}\n    {attrs}>\n</{selector}>"


def _render_attribute(key: str, value: Any, *, bracket: bool) -> str:
    if value is True or value == "true":
        return f'[{key}]="true"' if bracket else f"{key}={{true}}"
    if value is False or value == "false":
        return f'[{key}]="false"' if bracket else f"{key}={{false}}"
    if isinstance(value, str):
        if value.startswith(("'", '"')):
            return f"{key}={value}"
        return f'{key}="{value}"'
    rendered = _format_expression(value)
    return f'[{key}]="{rendered}"' if bracket else f"{key}={{{rendered}}}"


def _format_expression(value: Any) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


__all__ = ["DEFAULT_FRAMEWORK", "generate_usage_example"]
