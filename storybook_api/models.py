"""Core data models shared across storybook-api components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

ArgValue = Union[str, bool, int, float]


@dataclass
class PropertyDoc:
    """Documentation recovered for a single component property."""

    description: str
    type: str
    required: bool = False
    ts_type: Optional[str] = None
    default_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "description": self.description,
            "type": self.type,
            "required": self.required,
        }
        if self.ts_type is not None:
            data["tsType"] = self.ts_type
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        return data


@dataclass
class ComponentDocs:
    """Metadata pulled out of a component source file."""

    description: str = ""
    selector: Optional[str] = None
    template: Optional[str] = None
    template_url: Optional[str] = None
    properties: Dict[str, PropertyDoc] = field(default_factory=dict)
    component_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "description": self.description,
            "properties": {
                name: prop.to_dict() for name, prop in self.properties.items()
            },
        }
        if self.selector is not None:
            data["selector"] = self.selector
        if self.template is not None:
            data["template"] = self.template
        if self.template_url is not None:
            data["templateUrl"] = self.template_url
        if self.component_code is not None:
            data["componentCode"] = self.component_code
        return data


@dataclass
class StoryExample:
    """A single story export with its raw argument literals."""

    code: str
    args: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "args": dict(self.args)}


@dataclass
class StoryExamples:
    """Imports, meta block and story exports of a story file."""

    imports: List[str] = field(default_factory=list)
    meta: Optional[str] = None
    stories: Dict[str, StoryExample] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imports": list(self.imports),
            "meta": self.meta,
            "stories": {name: story.to_dict() for name, story in self.stories.items()},
        }


@dataclass
class StoryData:
    """Merged view of a story: component reference, arg types, args and docs."""

    id: str
    file_path: str
    component: Optional[str] = None
    arg_types: Dict[str, Dict[str, str]] = field(default_factory=dict)
    args: Dict[str, ArgValue] = field(default_factory=dict)
    component_docs: Optional[ComponentDocs] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "filePath": self.file_path,
            "argTypes": {name: dict(spec) for name, spec in self.arg_types.items()},
            "args": dict(self.args),
        }
        if self.component is not None:
            data["component"] = self.component
        if self.component_docs is not None:
            data["componentDocs"] = self.component_docs.to_dict()
        return data


@dataclass
class StoryEntry:
    """Entry of the upstream Storybook index.json document."""

    id: str
    name: Optional[str] = None
    title: Optional[str] = None
    kind: Optional[str] = None
    import_path: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    type: Optional[str] = None

    @classmethod
    def from_index(cls, raw: Dict[str, Any]) -> "StoryEntry":
        tags = raw.get("tags")
        return cls(
            id=str(raw.get("id", "")),
            name=raw.get("name"),
            title=raw.get("title"),
            kind=raw.get("kind") or raw.get("title"),
            import_path=raw.get("importPath"),
            tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
            type=raw.get("type"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "kind": self.kind,
            "importPath": self.import_path,
            "tags": list(self.tags),
            "type": self.type,
        }

    def to_summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "kind": self.kind,
            "type": self.type,
        }
