"""Extract documentation from Angular, React, Vue and Svelte component files."""

from __future__ import annotations

import re
from typing import Optional

from ..filesystem import DEFAULT_FILESYSTEM, FileSystem, PathLike, resolve_relative
from ..logging import get_logger
from ..models import ComponentDocs, PropertyDoc
from .utils import DOC_COMMENT, strip_comment

logger = get_logger("parsers.components")

_CLASS_DOC = re.compile(
    DOC_COMMENT + r"\s*(?:@Component|export\s+(?:default\s+)?(?:function|class|const))"
)
_SELECTOR = re.compile(r"selector:\s*['\"]([^'\"]+)['\"]")
_INLINE_TEMPLATE = re.compile(r"template:\s*`([\s\S]*?)`")
_TEMPLATE_URL = re.compile(r"templateUrl:\s*['\"]([^'\"]+)['\"]")
_DECORATED_PROPERTY = re.compile(DOC_COMMENT + r"\s*@(Input|Output)\(\)\s*(\w+)")
_PROPS_INTERFACE = re.compile(r"interface\s+\w*Props\s*\{([\s\S]*?)\}")
_INTERFACE_FIELD = re.compile(DOC_COMMENT + r"\s*(\w+)(\?)?:\s*([^;]+)")
_FIELD_DECLARATION = re.compile(r"(\w+)(?:\?)?:\s*([^=;]+)(?:\s*=\s*([^;]+))?;")
_CLASS_BODY = re.compile(r"@Component[\s\S]*?export\s+class\s+\w+[\s\S]*?\n\}")
_FUNCTION_BODY = re.compile(r"export\s+(?:default\s+)?function\s+\w+[\s\S]*?\n\}")

_REQUIRED_TOKEN = "@required"


def extract_component_docs(
    path: PathLike, *, fs: FileSystem | None = None
) -> Optional[ComponentDocs]:
    """Return the documentation found in a component file.

    Every heuristic runs independently and simply leaves its field empty when
    nothing matches. ``None`` is returned when the file does not exist or
    reading it fails.
    """
    fs = fs or DEFAULT_FILESYSTEM
    try:
        if not fs.exists(path):
            return None
        content = fs.read_text(path)
        docs = ComponentDocs()
        _apply_description(docs, content)
        _apply_selector(docs, content)
        _apply_template(docs, content, path, fs)
        _apply_decorated_properties(docs, content)
        _apply_props_interface(docs, content)
        _apply_field_types(docs, content)
        _apply_component_code(docs, content)
        return docs
    except Exception as exc:
        logger.debug("Failed to extract component docs from %s: %s", path, exc)
        return None


def _apply_description(docs: ComponentDocs, content: str) -> None:
    match = _CLASS_DOC.search(content)
    if match:
        docs.description = strip_comment(match.group(1))


def _apply_selector(docs: ComponentDocs, content: str) -> None:
    match = _SELECTOR.search(content)
    if match:
        docs.selector = match.group(1)


def _apply_template(
    docs: ComponentDocs, content: str, path: PathLike, fs: FileSystem
) -> None:
    inline = _INLINE_TEMPLATE.search(content)
    if inline:
        docs.template = inline.group(1).strip()

    url_match = _TEMPLATE_URL.search(content)
    if not url_match:
        return
    docs.template_url = url_match.group(1)
    template_path = resolve_relative(path, docs.template_url)
    if fs.exists(template_path):
        docs.template = fs.read_text(template_path).strip()


def _apply_decorated_properties(docs: ComponentDocs, content: str) -> None:
    """Angular ``@Input()``/``@Output()`` members preceded by a doc comment."""
    for match in _DECORATED_PROPERTY.finditer(content):
        description = strip_comment(match.group(1))
        docs.properties[match.group(3)] = PropertyDoc(
            description=description.replace(_REQUIRED_TOKEN, "").strip(),
            type=match.group(2).lower(),
            required=_REQUIRED_TOKEN in description,
        )


def _apply_props_interface(docs: ComponentDocs, content: str) -> None:
    """React/Vue style ``interface FooProps { ... }`` declarations."""
    interface = _PROPS_INTERFACE.search(content)
    if not interface:
        return
    for match in _INTERFACE_FIELD.finditer(interface.group(1)):
        docs.properties[match.group(2)] = PropertyDoc(
            description=strip_comment(match.group(1)),
            type="prop",
            required=not match.group(3),
            ts_type=match.group(4).strip(),
        )


def _apply_field_types(docs: ComponentDocs, content: str) -> None:
    # Only enriches properties discovered above; never adds new ones.
    for match in _FIELD_DECLARATION.finditer(content):
        prop = docs.properties.get(match.group(1))
        if prop is None:
            continue
        prop.ts_type = match.group(2).strip()
        if match.group(3):
            prop.default_value = match.group(3).strip()


def _apply_component_code(docs: ComponentDocs, content: str) -> None:
    class_match = _CLASS_BODY.search(content)
    if class_match:
        docs.component_code = class_match.group(0)
        return
    function_match = _FUNCTION_BODY.search(content)
    if function_match:
        docs.component_code = function_match.group(0)


__all__ = ["extract_component_docs"]
