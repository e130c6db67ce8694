"""Inspect a front-end project for its Storybook version and UI framework."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, Optional

from .logging import get_logger

logger = get_logger("project")

_STORYBOOK_PACKAGES = ("storybook", "@storybook/core")
_FRAMEWORK_PACKAGES = (
    "@storybook/angular",
    "@storybook/react",
    "@storybook/vue3",
    "@storybook/svelte",
    "@storybook/web-components",
)
_CONFIG_DIRS = (".storybook", "storybook")
_FRAMEWORK_MARKERS = (
    ("angular", ("@storybook/angular", "@angular/core")),
    ("react", ("@storybook/react", "react")),
    ("vue", ("@storybook/vue3", "vue")),
    ("svelte", ("@storybook/svelte", "svelte")),
    ("web-components", ("@storybook/web-components",)),
)
_MAJOR_VERSION = re.compile(r"(\d+)")


def load_package_json(root: Path) -> Dict[str, object]:
    """Return the parsed package.json contents or an empty dict."""
    package_json = Path(root) / "package.json"
    if not package_json.exists():
        return {}
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Unable to read %s: %s", package_json, exc)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def load_dependencies(root: Path) -> Dict[str, str]:
    """Merge ``dependencies`` and ``devDependencies`` (dev entries win)."""
    data = load_package_json(root)
    merged: Dict[str, str] = {}
    for key in ("dependencies", "devDependencies"):
        deps = data.get(key)
        if isinstance(deps, dict):
            merged.update({str(name): str(version) for name, version in deps.items()})
    return merged


def detect_storybook_version(project_dir: Path) -> Optional[int]:
    """Return the Storybook major version declared in package.json."""
    deps = load_dependencies(project_dir)

    for package in _STORYBOOK_PACKAGES:
        version = deps.get(package)
        if version:
            major = _major_version(version)
            if major is not None:
                return major
            # An unparsable core version falls through to framework packages.
            break

    for package in _FRAMEWORK_PACKAGES:
        version = deps.get(package)
        if version:
            major = _major_version(version)
            if major is not None:
                return major
    return None


def find_storybook_config(project_dir: Path) -> Optional[Path]:
    """Return the Storybook configuration directory when present."""
    for name in _CONFIG_DIRS:
        candidate = Path(project_dir) / name
        if candidate.exists():
            return candidate
    return None


def detect_framework(project_dir: Path) -> str:
    """Return the UI framework tag used to render usage examples."""
    deps = load_dependencies(project_dir)
    for framework, markers in _FRAMEWORK_MARKERS:
        if any(marker in deps for marker in markers):
            return framework
    return "unknown"


def _major_version(version: str) -> Optional[int]:
    match = _MAJOR_VERSION.search(version)
    return int(match.group(1)) if match else None


__all__ = [
    "detect_framework",
    "detect_storybook_version",
    "find_storybook_config",
    "load_dependencies",
    "load_package_json",
]
