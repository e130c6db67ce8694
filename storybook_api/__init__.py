"""Expose Storybook stories and component documentation through a REST API."""

from .parsers import (
    extract_component_docs,
    extract_story_examples,
    generate_usage_example,
    parse_story_file,
)
from .project import detect_framework, detect_storybook_version, find_storybook_config

__version__ = "1.0.0"

__all__ = [
    "detect_framework",
    "detect_storybook_version",
    "extract_component_docs",
    "extract_story_examples",
    "find_storybook_config",
    "generate_usage_example",
    "parse_story_file",
]
