"""Extract story exports and merged story metadata from story files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional

from ..filesystem import (
    DEFAULT_FILESYSTEM,
    FileSystem,
    PathLike,
    normalize_path,
    resolve_relative,
)
from ..logging import get_logger
from ..models import ArgValue, StoryData, StoryExample, StoryExamples
from .components import extract_component_docs
from .utils import coerce_literal, raw_args, split_args, to_pascal_case

logger = get_logger("parsers.stories")

COMPONENT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".vue", ".svelte")

_IMPORT = re.compile(r"^import\s+.*?;$", re.MULTILINE)
_META_CONST = re.compile(r"const\s+meta[^=]*=\s*\{[\s\S]*?\};?\s*export\s+default\s+meta")
_META_DEFAULT = re.compile(r"export\s+default\s+\{[\s\S]*?\}\s*(?:as|;)")
_STORY_EXPORT = re.compile(r"export\s+const\s+(\w+)(?::\s*\w+)?\s*=\s*\{([\s\S]*?)\};")
_STORY_ARGS = re.compile(r"args:\s*\{([\s\S]*?)\}")
_COMPONENT_REF = re.compile(r"component:\s*(\w+)")
_ARG_TYPES_BLOCK = re.compile(r"argTypes:\s*\{([\s\S]*?)\},?\s*(?://|args:|tags:|\Z)")
_ARG_TYPE_ENTRY = re.compile(r"(\w+):\s*\{([^{}]*)\}")
_CONTROL = re.compile(r"control:\s*['\"]([^'\"]+)['\"]")

_DOCS_SEGMENT = "docs"


def extract_story_examples(
    path: PathLike, *, fs: FileSystem | None = None
) -> Optional[StoryExamples]:
    """Return the imports, meta block and story exports of a story file."""
    fs = fs or DEFAULT_FILESYSTEM
    try:
        if not fs.exists(path):
            return None
        content = fs.read_text(path)
        examples = StoryExamples(imports=_IMPORT.findall(content))

        meta = _META_CONST.search(content) or _META_DEFAULT.search(content)
        if meta:
            examples.meta = meta.group(0)

        for match in _STORY_EXPORT.finditer(content):
            name, body = match.group(1), match.group(2)
            args_match = _STORY_ARGS.search(body)
            examples.stories[name] = StoryExample(
                code=f"export const {name} = {{{body}}};",
                args=raw_args(args_match.group(1)) if args_match else {},
            )
        return examples
    except Exception as exc:
        logger.debug("Failed to extract story examples from %s: %s", path, exc)
        return None


def parse_story_file(
    path: PathLike,
    story_id: str,
    project_dir: PathLike | None = None,
    *,
    fs: FileSystem | None = None,
) -> Optional[StoryData]:
    """Merge component docs, arg types and story args for ``story_id``.

    Unlike the other extractors this call is all-or-nothing: any failure while
    parsing discards the partial record and returns ``None``.
    """
    # project_dir is accepted for callers that resolve story paths themselves;
    # component imports are always resolved relative to the story file.
    fs = fs or DEFAULT_FILESYSTEM
    try:
        if not fs.exists(path):
            return None
        content = fs.read_text(path)
        story = StoryData(id=story_id, file_path=normalize_path(path))

        component_match = _COMPONENT_REF.search(content)
        if component_match:
            story.component = component_match.group(1)
            component_file = find_component_file(content, story.component, path, fs=fs)
            if component_file is not None:
                story.component_docs = extract_component_docs(component_file, fs=fs)

        story.arg_types = _parse_arg_types(content)

        export_name = story_export_name(story_id)
        if export_name is not None:
            story.args = _parse_story_args(content, export_name)

        return story
    except Exception as exc:
        logger.debug("Failed to parse story file %s for %s: %s", path, story_id, exc)
        return None


def find_component_file(
    content: str,
    component: str,
    story_path: PathLike,
    *,
    fs: FileSystem | None = None,
) -> Optional[str]:
    """Locate the source file that a story's ``component`` is imported from."""
    fs = fs or DEFAULT_FILESYSTEM
    import_pattern = re.compile(
        r"import\s*\{[^}]*"
        + re.escape(component)
        + r"[^}]*\}\s*from\s*['\"]([^'\"]+)['\"]"
    )
    match = import_pattern.search(content)
    if not match:
        return None
    base = resolve_relative(story_path, match.group(1))
    for extension in COMPONENT_EXTENSIONS:
        candidate = base if base.endswith(extension) else base + extension
        if fs.exists(candidate):
            return candidate
    return None


def story_export_name(story_id: str) -> Optional[str]:
    """Return the PascalCase export name for ``kind--name`` story ids."""
    segments = story_id.split("--")
    if len(segments) < 2:
        return None
    slug = segments[1]
    if not slug or slug == _DOCS_SEGMENT:
        return None
    return to_pascal_case(slug)


def _parse_arg_types(content: str) -> Dict[str, Dict[str, str]]:
    arg_types: Dict[str, Dict[str, str]] = {}
    block = _ARG_TYPES_BLOCK.search(content)
    if not block:
        return arg_types
    for match in _ARG_TYPE_ENTRY.finditer(block.group(1)):
        control = _CONTROL.search(match.group(2))
        if control:
            arg_types[match.group(1)] = {"control": control.group(1)}
    return arg_types


def _parse_story_args(content: str, export_name: str) -> Dict[str, ArgValue]:
    pattern = re.compile(
        r"export\s+const\s+"
        + re.escape(export_name)
        + r"\b[^=]*=\s*\{[^}]*args:\s*\{([^}]+)\}",
        re.DOTALL,
    )
    match = pattern.search(content)
    if not match:
        return {}
    return {key: coerce_literal(value) for key, value in split_args(match.group(1))}


def story_file_path(project_dir: PathLike, import_path: str) -> Path:
    """Join an index ``importPath`` (``./src/...``) onto the project directory."""
    cleaned = import_path[2:] if import_path.startswith("./") else import_path
    return Path(project_dir) / cleaned


__all__ = [
    "COMPONENT_EXTENSIONS",
    "extract_story_examples",
    "find_component_file",
    "parse_story_file",
    "story_export_name",
    "story_file_path",
]
