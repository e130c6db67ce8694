"""Regex-driven parsers for Storybook story and component source files."""

from .components import extract_component_docs
from .stories import extract_story_examples, parse_story_file
from .usage import generate_usage_example

__all__ = [
    "extract_component_docs",
    "extract_story_examples",
    "generate_usage_example",
    "parse_story_file",
]
